"""Tests for per-field extraction and the ordered fallback evaluator."""

import logging

import pytest

from dojo.common.codewars import (
    DESCRIPTION_CONTAINER_TEXT_SCRIPT,
    DESCRIPTION_HTML_SCRIPT,
    DESCRIPTION_TEXT_SCRIPT,
    LANGUAGES_SCRIPT,
    SOLUTION_LINE_SELECTOR,
    TEST_LINE_SELECTOR,
)
from dojo.common.exceptions import ElementNotFoundError, SessionError
from dojo.common.field_extractors import (
    DESCRIPTION_SENTINEL,
    extract_author,
    extract_code,
    extract_description,
    extract_difficulty,
    extract_languages,
    extract_name,
    extract_tags,
    first_non_empty,
    preview,
)
from dojo.common.lxml_page_element import LxmlPageElement
from tests.fake_session import FakeBrowserSession, build_kata_page


def page_of(**kwargs) -> LxmlPageElement:
    return LxmlPageElement.from_html(build_kata_page(**kwargs))


class TestFirstNonEmpty:
    """Tests for first_non_empty()."""

    def test_returns_first_non_empty_result(self):
        calls = []

        def strategy(label, value):
            def run():
                calls.append(label)
                return value

            return (label, run)

        result = first_non_empty(
            [strategy("a", ""), strategy("b", "found"), strategy("c", "later")],
            "field",
        )

        assert result == "found"
        assert calls == ["a", "b"]

    def test_session_errors_are_skipped_and_logged(self, caplog):
        """A failing strategy shall be logged and the next one tried."""

        def broken():
            raise SessionError("element detached")

        with caplog.at_level(logging.WARNING):
            result = first_non_empty(
                [("broken", broken), ("ok", lambda: ["x"])], "languages"
            )

        assert result == ["x"]
        assert "languages: broken failed: element detached" in caplog.text

    def test_whitespace_and_empty_lists_count_as_empty(self):
        assert first_non_empty([("a", lambda: "  \n"), ("b", lambda: [])], "f") is None

    def test_other_exceptions_propagate(self):
        """Only SessionError is absorbed."""

        def broken():
            raise RuntimeError("bug")

        with pytest.raises(RuntimeError):
            first_non_empty([("broken", broken), ("ok", lambda: "x")], "f")


class TestEssentialFields:
    """Fields read with count-checked queries."""

    def test_name_difficulty_author(self):
        page = page_of(name="  Sum\n Array ", difficulty="6 kyu", author="g964")

        assert extract_name(page) == "Sum Array"
        assert extract_difficulty(page) == "6 kyu"
        assert extract_author(page) == "g964"

    def test_missing_author_raises(self):
        """The author element is required."""
        with pytest.raises(ElementNotFoundError):
            extract_author(page_of(author=None))

    def test_tags_in_page_order(self):
        page = page_of(tags=("Algorithms", "Strings", "Regular Expressions"))
        assert extract_tags(page) == ["Algorithms", "Strings", "Regular Expressions"]

    def test_no_tags(self):
        assert extract_tags(page_of(tags=())) == []

    def test_code_lines_are_joined(self):
        """CodeMirror lines shall be joined with newlines, keeping indentation."""
        page = page_of(
            solution_lines=("def f(x):", "\u200b", "    return x"),
            test_lines=("test.assert_equals(f(1), 1)",),
        )

        assert extract_code(page, SOLUTION_LINE_SELECTOR, "solution") == (
            "def f(x):\n\n    return x"
        )
        assert extract_code(page, TEST_LINE_SELECTOR, "tests") == (
            "test.assert_equals(f(1), 1)"
        )

    def test_missing_code_raises(self):
        """An editor with no rendered lines shall raise so the attempt retries."""
        with pytest.raises(ElementNotFoundError):
            extract_code(page_of(solution_lines=()), SOLUTION_LINE_SELECTOR, "solution")


class TestDescriptionFallback:
    """Tests for the description strategy chain."""

    def test_markup_is_converted(self):
        session = FakeBrowserSession(
            "", scripts={DESCRIPTION_HTML_SCRIPT: "<p>One</p><p>Two</p>"}
        )

        assert extract_description(session) == "One\n\nTwo"
        assert session.executed_scripts == [DESCRIPTION_HTML_SCRIPT]

    def test_strategies_run_in_order(self):
        """Inner HTML, then text content, then the container's text."""
        session = FakeBrowserSession(
            "",
            scripts={
                DESCRIPTION_HTML_SCRIPT: SessionError("not attached"),
                DESCRIPTION_TEXT_SCRIPT: "",
                DESCRIPTION_CONTAINER_TEXT_SCRIPT: "  Container text  ",
            },
        )

        assert extract_description(session) == "Container text"
        assert session.executed_scripts == [
            DESCRIPTION_HTML_SCRIPT,
            DESCRIPTION_TEXT_SCRIPT,
            DESCRIPTION_CONTAINER_TEXT_SCRIPT,
        ]

    def test_text_content_used_when_markup_is_blank(self):
        session = FakeBrowserSession(
            "",
            scripts={
                DESCRIPTION_HTML_SCRIPT: "<p> </p>",
                DESCRIPTION_TEXT_SCRIPT: "Plain description",
            },
        )

        assert extract_description(session) == "Plain description"

    def test_sentinel_when_everything_fails(self):
        """The chain shall never raise; it degrades to the sentinel."""
        error = SessionError("script failed")
        session = FakeBrowserSession(
            "",
            scripts={
                DESCRIPTION_HTML_SCRIPT: error,
                DESCRIPTION_TEXT_SCRIPT: error,
                DESCRIPTION_CONTAINER_TEXT_SCRIPT: error,
            },
        )

        assert extract_description(session) == DESCRIPTION_SENTINEL


class TestLanguagesFallback:
    """Tests for the available-languages strategy chain."""

    def test_script_result(self):
        session = FakeBrowserSession(
            "", scripts={LANGUAGES_SCRIPT: [" Python ", "", "Ruby"]}
        )

        assert extract_languages(session, page_of()) == ["Python", "Ruby"]

    def test_page_query_when_script_fails(self):
        session = FakeBrowserSession(
            "", scripts={LANGUAGES_SCRIPT: SessionError("evaluate failed")}
        )
        page = page_of(languages=("JavaScript", "TypeScript"))

        assert extract_languages(session, page) == ["JavaScript", "TypeScript"]

    def test_unknown_when_nothing_found(self):
        session = FakeBrowserSession("", scripts={LANGUAGES_SCRIPT: []})

        assert extract_languages(session, page_of(languages=())) == ["Unknown"]


class TestPreview:
    def test_truncates_long_values(self):
        assert preview("x" * 150) == "x" * 100 + "..."

    def test_missing(self):
        assert preview(None) == "NOT FOUND"
        assert preview("") == "NOT FOUND"
