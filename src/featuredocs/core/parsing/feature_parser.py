from __future__ import annotations

"""
Feature Document Parser.

Reads a feature file, runs it through the grammar port and converts the
Gherkin AST into a Document. Descriptions are rendered to HTML through the
markdown port; tags and step arguments are kept exactly as written, the
tree builder normalizes them afterwards.
"""

import logging
from typing import Any, Dict, List, Optional

from featuredocs.core.parsing.grammar import GrammarParser
from featuredocs.core.parsing.markdown import MarkdownConverter
from featuredocs.domain.document_models import (
    DataTableArgument,
    DocStringArgument,
    Document,
    Examples,
    ScenarioLike,
    Step,
    StepArgument,
    Tag,
)
from featuredocs.domain.errors import FeatureParseError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

class FeatureDocumentParser:
    """
    Turns feature files into Documents.

    Args:
        grammar: Gherkin grammar port.
        markdown: Markdown-to-HTML port.
    """

    def __init__(self, grammar: GrammarParser, markdown: MarkdownConverter):
        self._grammar = grammar
        self._markdown = markdown

    def parse_feature(self, path: str) -> Document:
        """
        Parse a feature file into a Document.

        Args:
            path: Path of the feature file.

        Returns:
            Document: Feature with HTML descriptions and unresolved steps.

        Raises:
            FeatureParseError: The file is unreadable, rejected by the grammar
                               or holds no Feature.
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FeatureParseError(path, f"cannot read feature file: {e}") from e

        try:
            gherkin_document = self._grammar.parse(text)
        except Exception as e:
            raise FeatureParseError(path, f"invalid Gherkin: {e}") from e

        feature = (gherkin_document or {}).get("feature")
        if not feature:
            raise FeatureParseError(path, "no Feature block found")

        try:
            return self._build_document(path, feature)
        except (KeyError, TypeError) as e:
            raise FeatureParseError(path, f"unexpected Gherkin AST: {e}") from e

    # -------------------------------------------------------------------------
    # AST CONVERSION
    # -------------------------------------------------------------------------

    def _build_document(self, path: str, feature: Dict[str, Any]) -> Document:
        children: List[ScenarioLike] = []
        for child in feature.get("children", []):
            children.extend(self._build_children(child, rule_name=None))

        logger.debug(f"Parsed feature '{feature.get('name', '')}' with {len(children)} children: {path}")
        return Document(
            path=path,
            name=feature.get("name", ""),
            keyword=feature.get("keyword", "Feature"),
            language=feature.get("language", "en"),
            description=self._markdown.to_html(feature.get("description") or ""),
            tags=_build_tags(feature.get("tags")),
            children=children,
        )

    def _build_children(self, child: Dict[str, Any], rule_name: Optional[str]) -> List[ScenarioLike]:
        """Convert one feature child; Rule blocks are flattened in source order."""
        if "rule" in child:
            rule = child["rule"]
            out: List[ScenarioLike] = []
            for rule_child in rule.get("children", []):
                out.extend(self._build_children(rule_child, rule_name=rule.get("name", "")))
            return out

        node = child.get("scenario") or child.get("background")
        if node is None:
            logger.debug(f"Skipping unknown feature child: {sorted(child)}")
            return []

        return [
            ScenarioLike(
                name=node.get("name", ""),
                keyword=node.get("keyword", ""),
                description=self._markdown.to_html(node.get("description") or ""),
                tags=_build_tags(node.get("tags")),
                steps=[_build_step(s) for s in node.get("steps", [])],
                examples=[_build_examples(e) for e in node.get("examples", [])],
                line=_line(node),
                rule_name=rule_name,
            )
        ]

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _line(node: Dict[str, Any]) -> int:
    return int((node.get("location") or {}).get("line", 0))


def _build_tags(raw_tags: Optional[List[Dict[str, Any]]]) -> List[Tag]:
    tags: List[Tag] = []
    for raw in raw_tags or []:
        location = raw.get("location") or {}
        tags.append(Tag(
            name=raw["name"],
            line=int(location.get("line", 0)),
            column=int(location.get("column", 0)),
        ))
    return tags


def _build_step(raw: Dict[str, Any]) -> Step:
    argument: Optional[StepArgument] = None
    if "docString" in raw:
        doc_string = raw["docString"]
        argument = DocStringArgument(
            content=doc_string.get("content", ""),
            media_type=doc_string.get("mediaType", ""),
        )
    elif "dataTable" in raw:
        argument = DataTableArgument(rows=_table_rows(raw["dataTable"].get("rows", [])))

    return Step(keyword=raw["keyword"], text=raw["text"], line=_line(raw), argument=argument)


def _build_examples(raw: Dict[str, Any]) -> Examples:
    header = raw.get("tableHeader")
    return Examples(
        name=raw.get("name", ""),
        keyword=raw.get("keyword", "Examples"),
        tags=_build_tags(raw.get("tags")),
        header=_table_rows([header])[0] if header else [],
        rows=_table_rows(raw.get("tableBody", [])),
    )


def _table_rows(rows: List[Dict[str, Any]]) -> List[List[str]]:
    return [[cell.get("value", "") for cell in row.get("cells", [])] for row in rows]
