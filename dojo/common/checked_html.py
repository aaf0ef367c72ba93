"""Checked HTML element wrapper for safe XPath/CSS querying.

This module provides CheckedHtmlElement, a wrapper around lxml.html.HtmlElement
that validates selector results against expected counts. On a page that is
still rendering, a short count is the usual symptom of content that has not
materialized yet, so mismatches raise ElementNotFoundError, which the
extraction driver retries.
"""

from __future__ import annotations

from cssselect import SelectorError
from lxml.html import HtmlElement

from dojo.common.exceptions import ElementNotFoundError


class CheckedHtmlElement:
    """Wrapper around HtmlElement with validated selectors.

    This class wraps an lxml HtmlElement and provides checked_xpath() and
    checked_css() methods that validate the number of results against expected
    min/max counts. If the actual count doesn't match expectations, it raises
    ElementNotFoundError with clear error context.
    """

    def __init__(self, element: HtmlElement, request_url: str = "") -> None:
        """Initialize the checked element wrapper.

        Args:
            element: The lxml HtmlElement to wrap.
            request_url: Optional URL for error context.
        """
        self._element = element
        self._request_url = request_url

    def _check_count(
        self,
        selector: str,
        selector_type: str,
        description: str,
        min_count: int,
        max_count: int | None,
        actual_count: int,
    ) -> None:
        if actual_count < min_count or (
            max_count is not None and actual_count > max_count
        ):
            raise ElementNotFoundError(
                selector=selector,
                selector_type=selector_type,
                description=description,
                expected_min=min_count,
                expected_max=max_count,
                actual_count=actual_count,
                url=self._request_url,
            )

    @property
    def element(self) -> HtmlElement:
        """The wrapped lxml element."""
        return self._element

    def checked_xpath(
        self,
        xpath: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[CheckedHtmlElement]:
        """Execute XPath query with count validation.

        Only element results are kept; text and attribute results of the
        expression are ignored.

        Args:
            xpath: XPath expression to execute.
            description: Human-readable description of what's being selected.
            min_count: Minimum number of elements expected (default: 1).
            max_count: Maximum number of elements expected (None = unlimited).

        Returns:
            List of matching CheckedHtmlElements.

        Raises:
            ElementNotFoundError: If count doesn't match expectations.

        Example::

            tree = CheckedHtmlElement(lxml.html.fromstring(html))
            tags = tree.checked_xpath("//span[@class='keyword-tag']", "tags")
        """
        wrapped = [
            CheckedHtmlElement(r, self._request_url)
            for r in self._element.xpath(xpath)
            if isinstance(r, HtmlElement)
        ]
        self._check_count(
            xpath, "xpath", description, min_count, max_count, len(wrapped)
        )
        return wrapped

    def checked_css(
        self,
        selector: str,
        description: str,
        min_count: int = 1,
        max_count: int | None = None,
    ) -> list[CheckedHtmlElement]:
        """Execute CSS selector query with count validation.

        Args:
            selector: CSS selector expression.
            description: Human-readable description of what's being selected.
            min_count: Minimum number of elements expected (default: 1).
            max_count: Maximum number of elements expected (None = unlimited).

        Returns:
            List of matching CheckedHtmlElements. Each element is wrapped to support
            nested checked queries.

        Raises:
            ElementNotFoundError: If count doesn't match expectations.

        Example::

            tree = CheckedHtmlElement(lxml.html.fromstring(html))
            # Expect exactly 1 kata title
            title = tree.checked_css("h4", "kata name", max_count=1)
            # Nested queries work
            for line in tree.checked_css("#code", "solution editor"):
                line.checked_css(".CodeMirror-line", "lines", min_count=0)
        """
        try:
            results = self._element.cssselect(selector)
        except SelectorError as e:
            # An unparseable selector is reported like an empty match
            raise ElementNotFoundError(
                selector=selector,
                selector_type="css",
                description=description,
                expected_min=min_count,
                expected_max=max_count,
                actual_count=0,
                url=self._request_url,
            ) from e

        self._check_count(
            selector, "css", description, min_count, max_count, len(results)
        )

        return [
            CheckedHtmlElement(result, self._request_url) for result in results
        ]
