"""Tests for PlaywrightSession against a stub page.

These exercise error mapping and snapshotting without launching a browser.
"""

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from dojo.common.browser_session import BrowserSession, WaitForSelector
from dojo.common.exceptions import SessionError
from dojo.common.lxml_page_element import LazyPageElement
from dojo.driver import playwright_session
from dojo.driver.playwright_session import PlaywrightSession
from tests.fake_session import StubPlaywright

PAGE_URL = "https://www.codewars.com/kata/abc123/train/python"


class StubPage:
    """Records calls made through the subset of the Page API the session uses."""

    def __init__(self, html="<html><body><h4>Sum Array</h4></body></html>"):
        self.html = html
        self.url = "about:blank"
        self.goto_calls = []
        self.wait_calls = []
        self.content_calls = 0
        self.goto_error = None
        self.wait_error = None
        self.evaluate_result = None
        self.evaluate_error = None

    def set_default_timeout(self, timeout):
        self.default_timeout = timeout

    def goto(self, url, wait_until=None):
        self.goto_calls.append((url, wait_until))
        if self.goto_error:
            raise self.goto_error
        self.url = url

    def wait_for_selector(self, selector, state=None, timeout=None):
        self.wait_calls.append((selector, state, timeout))
        if self.wait_error:
            raise self.wait_error

    def evaluate(self, script):
        if self.evaluate_error:
            raise self.evaluate_error
        return self.evaluate_result

    def content(self):
        self.content_calls += 1
        return self.html


@pytest.fixture
def page() -> StubPage:
    return StubPage()


@pytest.fixture
def session(page) -> PlaywrightSession:
    return PlaywrightSession(page, default_timeout=1000)


class TestNavigate:
    def test_satisfies_protocol(self, session):
        assert isinstance(session, BrowserSession)

    def test_goto_waits_for_dom_content(self, session, page):
        session.navigate("GET", PAGE_URL)

        assert page.goto_calls == [(PAGE_URL, "domcontentloaded")]
        assert session.current_url() == PAGE_URL

    def test_snapshot_is_taken_on_first_query(self, session, page):
        """navigate() shall not serialize the DOM until the handle is used."""
        handle = session.navigate("GET", PAGE_URL)

        assert isinstance(handle, LazyPageElement)
        assert page.content_calls == 0

        page.html = "<html><body><h4>Rendered Later</h4></body></html>"
        assert handle.query_css("h4", "kata name")[0].text_content() == "Rendered Later"
        assert page.content_calls == 1

    def test_only_get_is_supported(self, session):
        with pytest.raises(ValueError):
            session.navigate("POST", PAGE_URL)

    def test_navigation_error_becomes_session_error(self, session, page):
        page.goto_error = PlaywrightError("net::ERR_CONNECTION_RESET")

        with pytest.raises(SessionError) as exc_info:
            session.navigate("GET", PAGE_URL)

        assert "ERR_CONNECTION_RESET" in exc_info.value.message
        assert exc_info.value.url == PAGE_URL


class TestWaitUntil:
    def test_css_selector(self, session, page):
        condition = WaitForSelector(".markdown", state="attached", timeout=500)

        assert session.wait_until(condition) is True
        assert page.wait_calls == [(".markdown", "attached", 500)]

    def test_xpath_selector_is_prefixed(self, session, page):
        session.wait_until(WaitForSelector("//div", state="hidden"))
        assert page.wait_calls == [("xpath=//div", "hidden", None)]

    def test_explicit_timeout_overrides_condition(self, session, page):
        session.wait_until(WaitForSelector("#code", timeout=500), timeout=50)
        assert page.wait_calls[0][2] == 50

    def test_timeout_returns_false(self, session, page):
        page.wait_error = PlaywrightTimeoutError("Timeout 500ms exceeded")

        assert session.wait_until(WaitForSelector("#code")) is False

    def test_other_errors_become_session_errors(self, session, page):
        page.wait_error = PlaywrightError("Target closed")

        with pytest.raises(SessionError):
            session.wait_until(WaitForSelector("#code"))


class TestScriptsAndSnapshots:
    def test_execute_script_returns_value(self, session, page):
        page.evaluate_result = ["Python", "Ruby"]
        assert session.execute_script("() => []") == ["Python", "Ruby"]

    def test_script_error_becomes_session_error(self, session, page):
        page.evaluate_error = PlaywrightError("TypeError: Cannot read properties of null")

        with pytest.raises(SessionError):
            session.execute_script("() => null.innerHTML")

    def test_current_page_snapshots_immediately(self, session, page):
        current = session.current_page()

        assert page.content_calls == 1
        assert current.query_css("h4", "kata name")[0].text_content() == "Sum Array"


class TestOpen:
    def test_unknown_browser_type(self):
        with pytest.raises(ValueError, match="Unknown browser type"):
            with PlaywrightSession.open(browser_type="netscape"):
                pass

    def test_yields_session_and_tears_down_in_reverse(self, monkeypatch, page):
        stub = StubPlaywright(page=page)
        monkeypatch.setattr(playwright_session, "sync_playwright", stub)

        with PlaywrightSession.open(default_timeout=5000) as session:
            assert isinstance(session, PlaywrightSession)
            assert page.default_timeout == 5000

        assert stub.events == [
            "start",
            "launch headless=True",
            "context en-US",
            "close context",
            "close browser",
            "stop",
        ]

    def test_launch_failure_becomes_session_error(self, monkeypatch):
        """A browser that cannot start shall raise SessionError and stop Playwright."""
        stub = StubPlaywright(
            launch_error=PlaywrightError("Executable doesn't exist at /ms-playwright")
        )
        monkeypatch.setattr(playwright_session, "sync_playwright", stub)

        with pytest.raises(SessionError, match="Could not start chromium") as exc_info:
            with PlaywrightSession.open():
                pass

        assert isinstance(exc_info.value.__cause__, PlaywrightError)
        assert stub.events == ["start", "stop"]
