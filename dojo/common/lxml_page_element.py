"""LxmlPageElement implementation wrapping CheckedHtmlElement.

This module provides the implementation of the PageElement protocol used by
every browser session: the session serializes the rendered DOM, parses it
with lxml, and hands out LxmlPageElement instances. LazyPageElement defers
that serialization until the first query.
"""

from __future__ import annotations

from collections.abc import Callable
from xml.sax.saxutils import escape

from lxml import html

from dojo.common.checked_html import CheckedHtmlElement


class LxmlPageElement:
    """Implementation of PageElement protocol wrapping CheckedHtmlElement.

    Attributes:
        _element: The underlying CheckedHtmlElement.
        _url: The URL of the page this element belongs to.
    """

    def __init__(self, element: CheckedHtmlElement, url: str = ""):
        """Initialize LxmlPageElement.

        Args:
            element: The CheckedHtmlElement to wrap.
            url: URL of the page, used for error context.
        """
        self._element = element
        self._url = url

    @classmethod
    def from_html(cls, content: str, url: str = "") -> LxmlPageElement:
        """Parse a serialized document into a page handle.

        Args:
            content: Full HTML document text.
            url: URL of the page the document was taken from.

        Returns:
            LxmlPageElement rooted at the document element.
        """
        doc = html.fromstring(content)
        return cls(CheckedHtmlElement(doc, url), url)

    def query_xpath(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[LxmlPageElement]:
        """Query elements by XPath selector.

        Raises:
            ElementNotFoundError: If count doesn't match expectations.
        """
        checked_elements = self._element.checked_xpath(
            selector, description, min_count, max_count
        )
        return [LxmlPageElement(elem, self._url) for elem in checked_elements]

    def query_css(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[LxmlPageElement]:
        """Query elements by CSS selector.

        Raises:
            ElementNotFoundError: If count doesn't match expectations.
        """
        checked_elements = self._element.checked_css(
            selector, description, min_count, max_count
        )
        return [LxmlPageElement(elem, self._url) for elem in checked_elements]

    def text_content(self) -> str:
        return self._element.element.text_content()

    def get_attribute(self, name: str) -> str | None:
        return self._element.element.get(name)

    def inner_html(self) -> str:
        """Get the inner HTML content, including leading text."""
        elem = self._element.element
        leading = escape(elem.text or "")
        return leading + "".join(
            html.tostring(child, encoding="unicode") for child in elem
        )


class LazyPageElement:
    """PageElement that takes its DOM snapshot on first use.

    Browser sessions return one of these from navigate() so the snapshot
    reflects the page after any readiness waits, not at load time. The
    snapshot is taken once and reused.
    """

    def __init__(self, load: Callable[[], LxmlPageElement]) -> None:
        self._load = load
        self._snapshot: LxmlPageElement | None = None

    def _page(self) -> LxmlPageElement:
        if self._snapshot is None:
            self._snapshot = self._load()
        return self._snapshot

    def query_xpath(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[LxmlPageElement]:
        return self._page().query_xpath(
            selector, description, min_count, max_count
        )

    def query_css(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[LxmlPageElement]:
        return self._page().query_css(
            selector, description, min_count, max_count
        )

    def text_content(self) -> str:
        return self._page().text_content()

    def get_attribute(self, name: str) -> str | None:
        return self._page().get_attribute(name)

    def inner_html(self) -> str:
        return self._page().inner_html()
