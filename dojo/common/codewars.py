"""Selectors, page scripts and URL helpers for Codewars kata pages.

Scripts are JavaScript function expressions suitable for
BrowserSession.execute_script().
"""

from __future__ import annotations

import re

from dojo.common.browser_session import WaitForSelector
from dojo.common.exceptions import MalformedURLError

KATA_ID_PATTERN = re.compile(r"kata/(\w+)")

LOADING_INDICATOR = "//div[contains(text(), 'Loading description...')]"
DESCRIPTION_SELECTOR = ".description-content .markdown"
DESCRIPTION_CONTAINER_SELECTOR = ".description-content"
NAME_SELECTOR = "h4"
DIFFICULTY_SELECTOR = ".small-hex span"
AUTHOR_SELECTOR = '[data-tippy-content="This kata\'s Sensei"]'
TAG_SELECTOR = ".keyword-tag"
LANGUAGE_SELECTOR = ".language-selector dd"
SOLUTION_LINE_SELECTOR = "#code .CodeMirror-line"
TEST_LINE_SELECTOR = "#fixture .CodeMirror-line"

DESCRIPTION_HTML_SCRIPT = (
    f'() => document.querySelector("{DESCRIPTION_SELECTOR}").innerHTML'
)
DESCRIPTION_TEXT_SCRIPT = (
    f'() => document.querySelector("{DESCRIPTION_SELECTOR}").textContent'
)
DESCRIPTION_CONTAINER_TEXT_SCRIPT = (
    f'() => document.querySelector("{DESCRIPTION_CONTAINER_SELECTOR}")'
    ".textContent"
)
LANGUAGES_SCRIPT = (
    f'() => Array.from(document.querySelectorAll("{LANGUAGE_SELECTOR}"))'
    ".map(el => el.textContent.trim()).filter(text => text)"
)
SCROLL_TO_BOTTOM_SCRIPT = "() => window.scrollTo(0, document.body.scrollHeight)"
SCROLL_TO_TOP_SCRIPT = "() => window.scrollTo(0, 0)"


def readiness_conditions(timeout: int | None = None) -> list[WaitForSelector]:
    """Wait conditions that mark the kata description as rendered.

    The loading placeholder must go away, then the description container
    must be attached and finally visible.
    """
    return [
        WaitForSelector(LOADING_INDICATOR, state="hidden", timeout=timeout),
        WaitForSelector(DESCRIPTION_SELECTOR, state="attached", timeout=timeout),
        WaitForSelector(DESCRIPTION_SELECTOR, state="visible", timeout=timeout),
    ]


def parse_kata_id(url: str) -> str:
    """Extract the kata identifier from a kata URL.

    Examples:
        >>> parse_kata_id("https://www.codewars.com/kata/abc123/train/python")
        'abc123'

    Raises:
        MalformedURLError: If the URL has no ``kata/<id>`` segment.
    """
    match = KATA_ID_PATTERN.search(url)
    if match is None:
        raise MalformedURLError(url)
    return match.group(1)


def language_from_url(url: str) -> str:
    """Return the last path segment of the URL, ignoring a trailing slash."""
    return url.rstrip("/").split("/")[-1]
