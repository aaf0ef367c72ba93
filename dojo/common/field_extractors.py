"""Per-field extraction from a rendered kata page.

Essential fields (name, difficulty, author, solution and test code) are read
with count-checked queries, so a page that has not finished rendering raises
ElementNotFoundError and the whole attempt is retried. The description and
the available languages degrade instead: each is read through an ordered
list of strategies evaluated by first_non_empty().
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from dojo.common.browser_session import BrowserSession
from dojo.common.codewars import (
    AUTHOR_SELECTOR,
    DESCRIPTION_CONTAINER_TEXT_SCRIPT,
    DESCRIPTION_HTML_SCRIPT,
    DESCRIPTION_TEXT_SCRIPT,
    DIFFICULTY_SELECTOR,
    LANGUAGE_SELECTOR,
    LANGUAGES_SCRIPT,
    NAME_SELECTOR,
    TAG_SELECTOR,
)
from dojo.common.exceptions import SessionError
from dojo.common.languages import UNKNOWN_LANGUAGE
from dojo.common.markup import to_markdown
from dojo.common.page_element import PageElement

logger = logging.getLogger(__name__)

T = TypeVar("T")

DESCRIPTION_SENTINEL = "Failed to extract description"

# CodeMirror pads empty lines with a zero-width space
_ZERO_WIDTH_SPACE = "\u200b"

Strategy = tuple[str, Callable[[], T]]


def preview(value: str | None, limit: int = 100) -> str:
    """Shorten a value for log output."""
    if not value:
        return "NOT FOUND"
    return value if len(value) <= limit else value[:limit] + "..."


def _is_empty(value: Any) -> bool:
    if isinstance(value, str):
        return not value.strip()
    return not value


def first_non_empty(strategies: Sequence[Strategy[T]], field: str) -> T | None:
    """Evaluate strategies in order and return the first non-empty result.

    A strategy that raises SessionError is logged and skipped, as is one
    that returns an empty string or an empty list.

    Args:
        strategies: (label, callable) pairs, tried in order.
        field: Field name used in log messages.

    Returns:
        The first non-empty result, or None if every strategy came up empty.
    """
    for label, strategy in strategies:
        try:
            value = strategy()
        except SessionError as e:
            logger.warning(f"{field}: {label} failed: {e}")
            continue
        if not _is_empty(value):
            logger.debug(f"{field}: {label} succeeded")
            return value
        logger.warning(f"{field}: {label} returned nothing")
    return None


def _clean(text: str) -> str:
    return " ".join(text.split())


def _script_text(session: BrowserSession, script: str) -> str:
    result = session.execute_script(script)
    return result if isinstance(result, str) else ""


def _script_strings(session: BrowserSession, script: str) -> list[str]:
    result = session.execute_script(script)
    if not isinstance(result, (list, tuple)):
        return []
    return [
        item.strip() for item in result if isinstance(item, str) and item.strip()
    ]


def _first_text(page: PageElement, selector: str, description: str) -> str:
    return _clean(page.query_css(selector, description)[0].text_content())


def extract_name(page: PageElement) -> str:
    return _first_text(page, NAME_SELECTOR, "kata name")


def extract_difficulty(page: PageElement) -> str:
    return _first_text(page, DIFFICULTY_SELECTOR, "kata difficulty")


def extract_author(page: PageElement) -> str:
    return _first_text(page, AUTHOR_SELECTOR, "kata author")


def extract_tags(page: PageElement) -> list[str]:
    """Return the text of every keyword tag, in page order."""
    elements = page.query_css(TAG_SELECTOR, "kata tags", min_count=0)
    return [tag for tag in (_clean(el.text_content()) for el in elements) if tag]


def extract_description(session: BrowserSession) -> str:
    """Read the kata description, falling back to cruder sources.

    Order: rendered markup converted to Markdown, the description's
    textContent, the container's textContent. If all three come up empty
    the sentinel "Failed to extract description" is returned.
    """
    strategies: list[Strategy[str]] = [
        (
            "inner HTML",
            lambda: to_markdown(_script_text(session, DESCRIPTION_HTML_SCRIPT)),
        ),
        (
            "text content",
            lambda: _script_text(session, DESCRIPTION_TEXT_SCRIPT).strip(),
        ),
        (
            "container text content",
            lambda: _script_text(
                session, DESCRIPTION_CONTAINER_TEXT_SCRIPT
            ).strip(),
        ),
    ]
    description = first_non_empty(strategies, "description")
    if description is None:
        logger.warning("All description extraction strategies failed")
        return DESCRIPTION_SENTINEL
    return description


def extract_languages(session: BrowserSession, page: PageElement) -> list[str]:
    """Read the languages offered in the language selector.

    Tries an in-page script first, then a query against the page handle.
    Falls back to ["Unknown"].
    """

    def from_page() -> list[str]:
        elements = page.query_css(
            LANGUAGE_SELECTOR, "available languages", min_count=0
        )
        return [text for text in (_clean(el.text_content()) for el in elements) if text]

    strategies: list[Strategy[list[str]]] = [
        ("script", lambda: _script_strings(session, LANGUAGES_SCRIPT)),
        ("page query", from_page),
    ]
    languages = first_non_empty(strategies, "languages")
    if languages is None:
        return [UNKNOWN_LANGUAGE]
    return languages


def extract_code(page: PageElement, selector: str, description: str) -> str:
    """Join the text of every CodeMirror line under the selector.

    Raises:
        ElementNotFoundError: If no line has rendered yet.
    """
    lines = page.query_css(selector, description)
    return "\n".join(
        line.text_content().replace(_ZERO_WIDTH_SPACE, "") for line in lines
    )
