"""Playwright-backed browser session.

PlaywrightSession implements the BrowserSession protocol over Playwright's
sync API. Pages are never handed to extraction code directly: the rendered
DOM is serialized with page.content(), parsed with lxml, and exposed as a
PageElement.

Example:
    with PlaywrightSession.open(headless=True) as session:
        kata = KataDriver(session).extract(url)
"""

from __future__ import annotations

import logging
from contextlib import ExitStack, contextmanager
from typing import TYPE_CHECKING, Any

from playwright.sync_api import (
    Error as PlaywrightError,
)
from playwright.sync_api import (
    Page,
    sync_playwright,
)
from playwright.sync_api import (
    TimeoutError as PlaywrightTimeoutError,
)

from dojo.common.browser_session import WaitForSelector
from dojo.common.exceptions import SessionError
from dojo.common.lxml_page_element import (
    LazyPageElement,
    LxmlPageElement,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

BROWSER_TYPES = ("chromium", "firefox", "webkit")
DEFAULT_VIEWPORT = {"width": 1920, "height": 1080}


class PlaywrightSession:
    """BrowserSession over a single Playwright page.

    Use PlaywrightSession.open() to create one; it owns the Playwright
    process, the browser, the context and the page.

    Args:
        page: The Playwright page to drive.
        default_timeout: Default timeout in milliseconds for waits.
    """

    def __init__(self, page: Page, default_timeout: int | None = None) -> None:
        self._page = page
        self.default_timeout = default_timeout

    @classmethod
    @contextmanager
    def open(
        cls,
        browser_type: str = "chromium",
        headless: bool = True,
        viewport: dict[str, int] | None = None,
        user_agent: str | None = None,
        locale: str = "en-US",
        default_timeout: int = 30000,
    ) -> Iterator[PlaywrightSession]:
        """Open a browser session as a context manager.

        Args:
            browser_type: "chromium", "firefox", or "webkit" (default: "chromium").
            headless: Run browser in headless mode (default: True).
            viewport: Browser viewport size (default: 1920x1080).
            user_agent: Custom user agent string (default: None = browser default).
            locale: Browser locale (default: "en-US").
            default_timeout: Default timeout in milliseconds for page operations.

        Yields:
            Initialized PlaywrightSession instance.
        """
        if browser_type not in BROWSER_TYPES:
            raise ValueError(
                f"Unknown browser type '{browser_type}', expected one of: "
                f"{', '.join(BROWSER_TYPES)}"
            )
        if viewport is None:
            viewport = dict(DEFAULT_VIEWPORT)

        context_kwargs: dict[str, Any] = {"viewport": viewport, "locale": locale}
        if user_agent:
            context_kwargs["user_agent"] = user_agent

        # Callbacks unwind in reverse: context, browser, then Playwright
        with ExitStack() as stack:
            try:
                playwright = sync_playwright().start()
                stack.callback(playwright.stop)

                logger.info(f"Launching {browser_type} (headless={headless})")
                browser = getattr(playwright, browser_type).launch(headless=headless)
                stack.callback(browser.close)

                browser_context = browser.new_context(**context_kwargs)
                stack.callback(browser_context.close)

                page = browser_context.new_page()
                page.set_default_timeout(default_timeout)
            except PlaywrightError as e:
                raise SessionError(f"Could not start {browser_type}: {e}") from e

            yield cls(page, default_timeout)

    def navigate(self, method: str, url: str) -> LazyPageElement:
        """Load the URL and return a handle that snapshots on first query.

        Raises:
            ValueError: If method is not GET.
            SessionError: If navigation fails.
        """
        if method.upper() != "GET":
            raise ValueError(f"Unsupported navigation method: {method}")
        try:
            self._page.goto(url, wait_until="domcontentloaded")
        except PlaywrightError as e:
            raise SessionError(f"Navigation failed: {e}", url) from e
        return LazyPageElement(self._snapshot)

    def wait_until(
        self, condition: WaitForSelector, timeout: int | None = None
    ) -> bool:
        if not isinstance(condition, WaitForSelector):
            raise TypeError(
                f"Unsupported wait condition type: {type(condition).__name__}"
            )
        effective_timeout = timeout if timeout is not None else condition.timeout
        selector = (
            f"xpath={condition.selector}"
            if condition.is_xpath
            else condition.selector
        )
        try:
            self._page.wait_for_selector(
                selector, state=condition.state, timeout=effective_timeout
            )
        except PlaywrightTimeoutError:
            logger.warning(f"Wait condition timeout: {condition}")
            return False
        except PlaywrightError as e:
            raise SessionError(
                f"Wait for {condition.selector} failed: {e}", self._page.url
            ) from e
        return True

    def execute_script(self, script: str) -> Any:
        try:
            return self._page.evaluate(script)
        except PlaywrightError as e:
            raise SessionError(f"Script failed: {e}", self._page.url) from e

    def current_url(self) -> str:
        return self._page.url

    def current_page(self) -> LxmlPageElement:
        return self._snapshot()

    def _snapshot(self) -> LxmlPageElement:
        try:
            html_content = self._page.content()
        except PlaywrightError as e:
            raise SessionError(
                f"Failed to capture page content: {e}", self._page.url
            ) from e
        return LxmlPageElement.from_html(html_content, self._page.url)
