from __future__ import annotations

"""
Unit tests for the Feature Document Parser.

Verifies:
1. Conversion of the Gherkin AST into Documents (tags, steps, arguments).
2. Flattening of Rule blocks and handling of Background/Outline children.
3. FeatureParseError on unreadable, malformed or empty files.
"""

import pytest

from featuredocs.core.parsing.feature_parser import FeatureDocumentParser
from featuredocs.core.parsing.grammar import GherkinGrammar, GrammarParser
from featuredocs.domain.document_models import DataTableArgument, DocStringArgument
from featuredocs.domain.errors import FeatureParseError


@pytest.fixture
def parser(fake_markdown):
    return FeatureDocumentParser(GherkinGrammar(), fake_markdown)


def test_parse_basic_feature(tmp_path, write_feature, parser):
    path = write_feature(tmp_path / "login.feature", """
        @web @auth
        Feature: Login
          Users sign in with a password.

          @smoke
          Scenario: Valid credentials
            Given I open the login page
            When I submit valid credentials
            Then I see the dashboard
    """)

    document = parser.parse_feature(str(path))

    assert document.path == str(path)
    assert document.name == "Login"
    assert document.keyword == "Feature"
    assert document.language == "en"
    assert document.description == "<p>Users sign in with a password.</p>"
    # Tags are kept as written; the tree builder strips the '@'
    assert [t.name for t in document.tags] == ["@web", "@auth"]
    assert document.tags[0].line == 1

    assert len(document.children) == 1
    scenario = document.children[0]
    assert scenario.name == "Valid credentials"
    assert scenario.keyword == "Scenario"
    assert [t.name for t in scenario.tags] == ["@smoke"]
    assert scenario.rule_name is None
    assert scenario.implemented is False

    assert [s.keyword for s in scenario.steps] == ["Given ", "When ", "Then "]
    assert scenario.steps[0].text == "I open the login page"
    assert scenario.steps[0].implementation is None


def test_parse_background_and_outline(tmp_path, write_feature, parser):
    path = write_feature(tmp_path / "cart.feature", """
        Feature: Cart

          Background:
            Given an empty cart

          Scenario Outline: Add items
            When I add <count> items
            Then the cart holds <count> items

            @fast
            Examples: Small
              | count |
              | 1     |
              | 2     |
    """)

    document = parser.parse_feature(str(path))

    background, outline = document.children
    assert background.keyword == "Background"
    assert background.tags == []
    assert background.steps[0].text == "an empty cart"

    assert outline.keyword == "Scenario Outline"
    assert len(outline.examples) == 1
    examples = outline.examples[0]
    assert examples.name == "Small"
    assert [t.name for t in examples.tags] == ["@fast"]
    assert examples.header == ["count"]
    assert examples.rows == [["1"], ["2"]]


def test_parse_step_arguments(tmp_path, write_feature, parser):
    path = write_feature(tmp_path / "api.feature", '''
        Feature: API

          Scenario: Post payload
            Given the users
              | name  | role  |
              | alice | admin |
            When I post
              """json
              {"a": 1}
              """
    ''')

    steps = parser.parse_feature(str(path)).children[0].steps

    table = steps[0].argument
    assert isinstance(table, DataTableArgument)
    assert table.rows == [["name", "role"], ["alice", "admin"]]

    doc_string = steps[1].argument
    assert isinstance(doc_string, DocStringArgument)
    assert doc_string.media_type == "json"
    # Raw content; escaping happens in the tree builder
    assert doc_string.content == '{"a": 1}'


def test_rules_are_flattened_in_source_order(tmp_path, write_feature, parser):
    path = write_feature(tmp_path / "rules.feature", """
        Feature: Billing

          Scenario: Outside any rule
            Given a customer

          Rule: Discounts
            Scenario: Loyal customer
              Given a loyal customer

            Scenario: New customer
              Given a new customer
    """)

    children = parser.parse_feature(str(path)).children

    assert [c.name for c in children] == ["Outside any rule", "Loyal customer", "New customer"]
    assert [c.rule_name for c in children] == [None, "Discounts", "Discounts"]


def test_malformed_feature_raises(tmp_path, write_feature, parser):
    path = write_feature(tmp_path / "broken.feature", "Not gherkin at all\n  Given nothing\n")

    with pytest.raises(FeatureParseError) as exc:
        parser.parse_feature(str(path))

    assert exc.value.path == str(path)


def test_empty_feature_raises(tmp_path, parser):
    path = tmp_path / "empty.feature"
    path.write_text("", encoding="utf-8")

    with pytest.raises(FeatureParseError):
        parser.parse_feature(str(path))


def test_missing_file_raises(tmp_path, parser):
    with pytest.raises(FeatureParseError):
        parser.parse_feature(str(tmp_path / "ghost.feature"))


def test_undecodable_file_raises(tmp_path, parser):
    path = tmp_path / "binary.feature"
    path.write_bytes(b"\xff\xfe\x00Feature")

    with pytest.raises(FeatureParseError):
        parser.parse_feature(str(path))


def test_grammar_failure_is_wrapped(tmp_path, fake_markdown):
    class ExplodingGrammar(GrammarParser):
        def parse(self, text):
            raise RuntimeError("boom")

    path = tmp_path / "x.feature"
    path.write_text("Feature: X\n", encoding="utf-8")

    with pytest.raises(FeatureParseError, match="boom"):
        FeatureDocumentParser(ExplodingGrammar(), fake_markdown).parse_feature(str(path))
