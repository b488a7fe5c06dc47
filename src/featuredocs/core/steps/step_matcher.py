from __future__ import annotations

"""
Step Definition Matching Service.

Discovers step definitions declared in Python sources (behave and
pytest-bdd decorator styles) through static AST analysis, and answers
whether a Gherkin step line is implemented by one of them. Step code is
never imported or executed.
"""

import ast
import glob
import logging
import os
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

import parse

from featuredocs.domain.document_models import StepMatch
from featuredocs.domain.errors import StepDefinitionError

logger = logging.getLogger(__name__)

# Decorator names declaring a step (behave also exports capitalized aliases)
STEP_DECORATORS = frozenset({"given", "when", "then", "step"})

# Pattern helper calls and the matching strategy they select
PATTERN_HELPERS: Dict[str, str] = {
    "parse": "parse",
    "cfparse": "parse",
    "re": "regex",
    "compile": "regex",
    "string": "string",
}

_KEYWORD_SPLIT_RX = re.compile(r"^\s*(\S+)\s+(.*?)\s*$", re.DOTALL)

_Matcher = Callable[[str], Optional[Dict[str, Any]]]

# -----------------------------------------------------------------------------
# DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class StepDefinition:
    """
    Step definition found in a source file.

    Attributes:
        keyword: Decorator name ('given', 'when', 'then' or 'step').
        pattern: Pattern text declared by the decorator.
        kind: Matching strategy ('parse', 'regex' or 'string').
        source: Path of the declaring file.
        line: Line of the decorated function.
    """
    keyword: str
    pattern: str
    kind: str
    source: str
    line: int

# -----------------------------------------------------------------------------
# MATCHER PORT
# -----------------------------------------------------------------------------

class StepMatcher(ABC):
    """
    Abstract answer to 'is this step line implemented?'.
    """

    @abstractmethod
    def match_line(self, line: str) -> StepMatch:
        """
        Match a full step line (keyword followed by text).

        Args:
            line: Step keyword and text, concatenated verbatim.

        Returns:
            StepMatch: Match flag plus metadata of the matching definition.
        """
        pass


class CodeStepMatcher(StepMatcher):
    """
    Matches step lines against statically discovered step definitions.

    The leading Gherkin keyword of a line is ignored, as keywords do not
    take part in step lookup. Definitions are tried in discovery order and
    the first full match wins.
    """

    def __init__(self, definitions: Iterable[StepDefinition]):
        self._compiled: List[Tuple[StepDefinition, _Matcher]] = []
        for definition in definitions:
            matcher = _compile_definition(definition)
            if matcher is not None:
                self._compiled.append((definition, matcher))

    @classmethod
    def from_sources(cls, sources: Iterable[str]) -> "CodeStepMatcher":
        """
        Build a matcher from files, directories or glob patterns.

        Args:
            sources: Step-definition sources.

        Returns:
            CodeStepMatcher: Matcher over every definition found.

        Raises:
            StepDefinitionError: A source resolves to no file at all.
        """
        definitions: List[StepDefinition] = []
        for file_path in resolve_step_sources(sources):
            definitions.extend(extract_step_definitions(file_path))
        logger.info(f"Loaded {len(definitions)} step definitions.")
        return cls(definitions)

    @property
    def definitions(self) -> List[StepDefinition]:
        return [definition for definition, _ in self._compiled]

    def match_line(self, line: str) -> StepMatch:
        text = _step_text(line)
        if text is None:
            return StepMatch(step_match=False)

        for definition, matcher in self._compiled:
            arguments = matcher(text)
            if arguments is not None:
                return StepMatch(
                    step_match=True,
                    definition=definition.pattern,
                    source=definition.source,
                    line=definition.line,
                    arguments=arguments,
                )
        return StepMatch(step_match=False)

# -----------------------------------------------------------------------------
# SOURCE DISCOVERY
# -----------------------------------------------------------------------------

def resolve_step_sources(sources: Iterable[str]) -> List[str]:
    """
    Expand step sources into the list of Python files they denote.

    Args:
        sources: File paths, directories (walked recursively) or glob patterns.

    Returns:
        List[str]: Python files, without duplicates, in source order.

    Raises:
        StepDefinitionError: A source matches nothing on disk.
    """
    files: List[str] = []
    for source in sources:
        if os.path.isdir(source):
            found = []
            for root, dirs, names in os.walk(source):
                dirs.sort()
                found.extend(os.path.join(root, n) for n in sorted(names) if n.endswith(".py"))
        elif os.path.isfile(source):
            found = [source]
        else:
            found = sorted(p for p in glob.glob(source, recursive=True) if os.path.isfile(p))
            if not found:
                raise StepDefinitionError(source)

        for file_path in found:
            if file_path not in files:
                files.append(file_path)
    return files


def extract_step_definitions(file_path: str) -> List[StepDefinition]:
    """
    Parse a Python file and collect its step definitions.

    Unreadable or syntactically invalid files are skipped with a warning,
    so one broken steps module does not hide the others.

    Args:
        file_path: Python source to analyze.

    Returns:
        List[StepDefinition]: Definitions in source order.
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            source = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read step definitions '{file_path}': {e}")
        return []

    try:
        tree = ast.parse(source, filename=file_path)
    except SyntaxError as e:
        logger.warning(f"Skipping step definitions in {file_path}: {e.msg} (line {e.lineno})")
        return []

    definitions: List[StepDefinition] = []
    for node in ast.walk(tree):
        if not isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
            continue
        for decorator in node.decorator_list:
            definition = _definition_from_decorator(decorator, file_path, node.lineno)
            if definition is not None:
                definitions.append(definition)

    definitions.sort(key=lambda d: d.line)
    return definitions

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _callable_name(func: ast.expr) -> str:
    if isinstance(func, ast.Name):
        return func.id
    if isinstance(func, ast.Attribute):
        return func.attr
    return ""


def _definition_from_decorator(decorator: ast.expr, file_path: str, line: int) -> Optional[StepDefinition]:
    if not isinstance(decorator, ast.Call) or not decorator.args:
        return None

    keyword = _callable_name(decorator.func).lower()
    if keyword not in STEP_DECORATORS:
        return None

    pattern_node = decorator.args[0]
    if isinstance(pattern_node, ast.Constant) and isinstance(pattern_node.value, str):
        return StepDefinition(keyword, pattern_node.value, "parse", file_path, line)

    if isinstance(pattern_node, ast.Call) and pattern_node.args:
        kind = PATTERN_HELPERS.get(_callable_name(pattern_node.func))
        arg = pattern_node.args[0]
        if kind and isinstance(arg, ast.Constant) and isinstance(arg.value, str):
            return StepDefinition(keyword, arg.value, kind, file_path, line)

    logger.debug(f"Dynamic step pattern ignored at {file_path}:{line}")
    return None


def _compile_definition(definition: StepDefinition) -> Optional[_Matcher]:
    """Build the text matcher of a definition, None if its pattern is invalid."""
    if definition.kind == "string":
        literal = definition.pattern
        return lambda text: {} if text == literal else None

    if definition.kind == "regex":
        try:
            rx = re.compile(definition.pattern)
        except re.error as e:
            logger.warning(f"Invalid step regex at {definition.source}:{definition.line}: {e}")
            return None

        def _match_regex(text: str) -> Optional[Dict[str, Any]]:
            m = rx.fullmatch(text)
            return m.groupdict() if m else None

        return _match_regex

    try:
        parser = parse.compile(definition.pattern, case_sensitive=True)
    except (ValueError, re.error) as e:
        logger.warning(f"Invalid step pattern at {definition.source}:{definition.line}: {e}")
        return None

    def _match_parse(text: str) -> Optional[Dict[str, Any]]:
        result = parser.parse(text)
        return dict(result.named) if result is not None else None

    return _match_parse


def _step_text(line: str) -> Optional[str]:
    """Step text without its leading keyword, None for a bare keyword."""
    m = _KEYWORD_SPLIT_RX.match(line)
    return m.group(2) if m else None
