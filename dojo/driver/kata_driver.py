"""Extraction driver for a single Codewars kata.

KataDriver drives a BrowserSession through one kata page: it navigates,
waits for the description to render, reads every field and assembles a
validated Kata. Browser-session failures are retried as a whole attempt up
to a fixed bound; a malformed URL or an invalid kata record is raised
immediately.

Example usage:
    with PlaywrightSession.open() as session:
        kata = KataDriver(session).extract(url)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from dojo.common.browser_session import BrowserSession
from dojo.common.codewars import (
    SCROLL_TO_BOTTOM_SCRIPT,
    SCROLL_TO_TOP_SCRIPT,
    SOLUTION_LINE_SELECTOR,
    TEST_LINE_SELECTOR,
    language_from_url,
    parse_kata_id,
    readiness_conditions,
)
from dojo.common.data_models import Kata
from dojo.common.exceptions import (
    ExtractionError,
    SessionError,
    WaitTimeoutError,
)
from dojo.common.field_extractors import (
    extract_author,
    extract_code,
    extract_description,
    extract_difficulty,
    extract_languages,
    extract_name,
    extract_tags,
    preview,
)
from dojo.common.languages import normalize_language, normalize_languages

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionSettings:
    """Tuning knobs for an extraction run.

    Attributes:
        max_attempts: Total attempts before giving up (default: 5).
        retry_delay: Seconds to sleep between attempts (default: 1.0).
        wait_timeout: Timeout in milliseconds for each readiness wait.
        settle_pause: Seconds to pause after each scroll (default: 1.0).
    """

    max_attempts: int = 5
    retry_delay: float = 1.0
    wait_timeout: int = 30000
    settle_pause: float = 1.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.retry_delay < 0 or self.settle_pause < 0:
            raise ValueError("Delays cannot be negative")


class KataDriver:
    """Extracts one kata per call to extract().

    Args:
        session: Browser session to drive.
        settings: Retry and timing settings.
        sleep: Callable used for every pause; tests pass a no-op.
    """

    def __init__(
        self,
        session: BrowserSession,
        settings: ExtractionSettings | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.session = session
        self.settings = settings or ExtractionSettings()
        self._sleep = sleep
        self._stage = "idle"

    def extract(self, url: str) -> Kata:
        """Extract and validate the kata at the given URL.

        Raises:
            MalformedURLError: If the URL carries no kata id. Nothing is
                navigated.
            InvalidArgumentError: If the assembled record violates a Kata
                invariant. Not retried.
            DataFormatAssumptionException: If a field has the wrong type.
            ExtractionError: If every attempt failed with a SessionError.
        """
        kata_id = parse_kata_id(url)
        logger.info(f"Fetching kata with ID: {kata_id}")

        max_attempts = self.settings.max_attempts
        attempt = 0
        while True:
            attempt += 1
            logger.info(f"Attempt {attempt}/{max_attempts} to fetch kata {kata_id}")
            started = time.monotonic()
            try:
                return self._attempt(kata_id, url)
            except SessionError as e:
                elapsed = time.monotonic() - started
                logger.warning(
                    f"Attempt {attempt}/{max_attempts} failed during "
                    f"{self._stage} after {elapsed:.1f}s: "
                    f"{type(e).__name__}: {e}"
                )
                if attempt >= max_attempts:
                    raise ExtractionError(url, max_attempts, e) from e
            logger.info(f"Retrying in {self.settings.retry_delay} seconds...")
            self._sleep(self.settings.retry_delay)

    def _attempt(self, kata_id: str, url: str) -> Kata:
        session = self.session

        self._stage = "navigation"
        logger.info(f"Navigating to URL: {url}")
        page = session.navigate("GET", url)
        logger.debug(f"Page loaded, current URL: {session.current_url()}")

        self._stage = "readiness wait"
        self._wait_until_ready(url)

        self._stage = "scroll"
        self._settle()

        self._stage = "name"
        name = extract_name(page)
        logger.debug(f"Found name: {preview(name)}")

        self._stage = "difficulty"
        difficulty = extract_difficulty(page)
        logger.debug(f"Found difficulty: {preview(difficulty)}")

        self._stage = "page refresh"
        page = session.current_page()

        self._stage = "description"
        description = extract_description(session)
        logger.debug(f"Found description: {preview(description)}")

        self._stage = "author"
        author = extract_author(page)
        logger.debug(f"Found author: {preview(author)}")

        self._stage = "tags"
        tags = extract_tags(page)
        category = tags[0] if tags else None
        logger.debug(f"Found tags: {preview(', '.join(tags))}")

        self._stage = "languages"
        languages = extract_languages(session, page)
        logger.debug(f"Found languages: {preview(', '.join(languages))}")

        self._stage = "solution placeholder"
        solution_placeholder = extract_code(
            page, SOLUTION_LINE_SELECTOR, "solution placeholder lines"
        )
        logger.debug(f"Found solution placeholder: {preview(solution_placeholder)}")

        self._stage = "tests"
        tests = extract_code(page, TEST_LINE_SELECTOR, "test fixture lines")
        logger.debug(f"Found tests: {preview(tests)}")

        self._stage = "validation"
        language = normalize_language(language_from_url(url))
        logger.debug(f"Language extracted from URL: {language}")

        kata = Kata.build(
            request_url=url,
            id=kata_id,
            url=url,
            name=name,
            description=description,
            difficulty=difficulty,
            language=language,
            solution_placeholder=solution_placeholder,
            tests=tests,
            tags=tags,
            category=category,
            author=author,
            languages_available=normalize_languages(languages),
        )
        logger.info(f"Successfully fetched kata '{kata.name}' ({kata.difficulty})")
        return kata

    def _wait_until_ready(self, url: str) -> None:
        for condition in readiness_conditions(self.settings.wait_timeout):
            logger.debug(
                f"Waiting for {condition.selector} to be {condition.state}"
            )
            if not self.session.wait_until(condition):
                raise WaitTimeoutError(condition, condition.timeout, url)

    def _settle(self) -> None:
        self.session.execute_script(SCROLL_TO_BOTTOM_SCRIPT)
        self._sleep(self.settings.settle_pause)
        self.session.execute_script(SCROLL_TO_TOP_SCRIPT)
        self._sleep(self.settings.settle_pause)
