"""Browser session port consumed by the extraction driver.

The driver never talks to a browser directly. It drives any object that
satisfies the BrowserSession protocol: the Playwright-backed session in
dojo.driver.playwright_session for real runs, or an in-memory fake in tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from dojo.common.page_element import PageElement

WAIT_STATES = ("attached", "detached", "visible", "hidden")


@dataclass(frozen=True)
class WaitForSelector:
    """Wait for a selector to reach a given state.

    Attributes:
        selector: CSS or XPath selector to wait for. Selectors starting with
            "//" are XPath.
        state: State to wait for ('attached', 'detached', 'visible', 'hidden').
            Defaults to 'visible'.
        timeout: Optional timeout in milliseconds. If None, the session's
            default applies.
    """

    selector: str
    state: str = "visible"
    timeout: int | None = None

    def __post_init__(self) -> None:
        if self.state not in WAIT_STATES:
            raise ValueError(
                f"Unknown wait state '{self.state}', expected one of: "
                f"{', '.join(WAIT_STATES)}"
            )

    @property
    def is_xpath(self) -> bool:
        return self.selector.startswith("//") or self.selector.startswith("(")


@runtime_checkable
class BrowserSession(Protocol):
    """Capabilities the extraction driver needs from a controllable browser.

    Every method may raise SessionError (network failure, driver crash,
    element not found).
    """

    def navigate(self, method: str, url: str) -> PageElement:
        """Load a URL and return a handle on the resulting page."""
        ...

    def wait_until(
        self, condition: WaitForSelector, timeout: int | None = None
    ) -> bool:
        """Block until the condition holds.

        Args:
            condition: The wait condition.
            timeout: Timeout in milliseconds, overriding condition.timeout.

        Returns:
            True if the condition held, False if the wait timed out.
        """
        ...

    def execute_script(self, script: str) -> Any:
        """Evaluate a JavaScript function expression in the page."""
        ...

    def current_url(self) -> str:
        ...

    def current_page(self) -> PageElement:
        """Return a fresh handle on the page as currently rendered."""
        ...
