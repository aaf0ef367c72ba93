"""PageElement protocol for driver-agnostic data extraction.

This module provides the interface the field extractors use to query HTML
elements and read text, attributes and inner markup. A PageElement is backed
by static parsed HTML (LXML); the browser session is responsible for
obtaining that HTML by serializing the rendered DOM.
"""

from __future__ import annotations

from typing import Protocol


class PageElement(Protocol):
    """Protocol for driver-agnostic data extraction from HTML elements.

    All query methods support count validation and raise
    ElementNotFoundError if the actual count doesn't match expectations.
    Queries return lists so callers can iterate over multiple matches.
    """

    def query_xpath(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[PageElement]:
        """Query elements by XPath selector.

        Args:
            selector: XPath expression to execute.
            description: Human-readable description of what's being selected.
            min_count: Minimum number of elements expected (default: 1).
            max_count: Maximum number of elements expected (None = unlimited).

        Returns:
            List of matching PageElement instances.

        Raises:
            ElementNotFoundError: If count doesn't match expectations.
        """
        ...

    def query_css(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[PageElement]:
        """Query elements by CSS selector.

        Args:
            selector: CSS selector expression.
            description: Human-readable description of what's being selected.
            min_count: Minimum number of elements expected (default: 1).
            max_count: Maximum number of elements expected (None = unlimited).

        Returns:
            List of matching PageElement instances.

        Raises:
            ElementNotFoundError: If count doesn't match expectations.
        """
        ...

    def text_content(self) -> str:
        """Extract the text content of the element and its descendants."""
        ...

    def get_attribute(self, name: str) -> str | None:
        """Extract an attribute value, or None if it doesn't exist."""
        ...

    def inner_html(self) -> str:
        """Get the inner HTML content as a string."""
        ...
