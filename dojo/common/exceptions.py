"""Exception types for kata extraction errors.

Two families matter to the extraction driver:

- ScraperAssumptionException and its subclasses describe input or page
  assumptions that retrying cannot fix (bad URL, invalid kata record).
- TransientException and its subclasses describe browser-session failures
  that might resolve on retry (network errors, timeouts, elements not yet
  rendered).

ExtractionError is raised once the retry budget is spent.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ScraperAssumptionException(Exception):
    """Base class for scraper assumption violations.

    The scraper assumes the caller passes a kata URL and that the page
    yields data matching the Kata schema. When these assumptions are
    violated, the subclasses below carry clear, contextual details that
    help diagnose the issue. They are never retried.
    """

    def __init__(
        self,
        message: str,
        request_url: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable description of the assumption violation.
            request_url: The URL of the kata that triggered this error.
            context: Optional dict of additional context (field, reason, etc).
        """
        self.message = message
        self.request_url = request_url
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context.

        Returns:
            Formatted error message string.
        """
        parts = [self.message]
        parts.append(f"URL: {self.request_url}")

        if self.context:
            parts.append("Context:")
            for key, value in self.context.items():
                parts.append(f"  {key}: {value}")

        return "\n".join(parts)


class MalformedURLError(ScraperAssumptionException):
    """Raised when no kata identifier can be extracted from a URL.

    This is a caller input error, so the driver surfaces it before any
    navigation happens.
    """

    def __init__(self, url: str) -> None:
        super().__init__(
            "Could not extract kata ID from URL",
            url,
            {"expected": "<scheme>://[www.]codewars.com/kata/<id>[/...]"},
        )


class ValidationFailure(Enum):
    """Categories of Kata invariant violations."""

    EMPTY_FIELD = "empty_field"
    MALFORMED_FORMAT = "malformed_format"
    NOT_IN_ENUMERATION = "not_in_enumeration"
    DUPLICATE_ENTRIES = "duplicate_entries"
    REFERENTIAL_MISMATCH = "referential_mismatch"


class InvalidArgumentError(ScraperAssumptionException):
    """Raised when an assembled kata record violates a Kata invariant.

    Attributes:
        field: Name of the offending Kata attribute.
        reason: The ValidationFailure category.
    """

    def __init__(
        self,
        message: str,
        field: str,
        reason: ValidationFailure,
        request_url: str = "",
    ) -> None:
        """Initialize the exception.

        Args:
            message: Field-specific description of the violation.
            field: Name of the offending Kata attribute.
            reason: The ValidationFailure category.
            request_url: The kata URL, when known.
        """
        self.field = field
        self.reason = reason
        super().__init__(
            message,
            request_url,
            {"field": field, "reason": reason.value},
        )


class DataFormatAssumptionException(ScraperAssumptionException):
    """Raised when scraped data doesn't match the expected schema types.

    This exception is raised during Pydantic type validation, e.g. when a
    field that must be a string arrives as None.
    """

    def __init__(
        self,
        errors: list[dict[str, Any]],
        failed_doc: dict[str, Any],
        model_name: str,
        request_url: str,
    ) -> None:
        """Initialize the exception.

        Args:
            errors: List of Pydantic validation errors.
            failed_doc: The document that failed validation.
            model_name: Name of the Pydantic model that was being validated against.
            request_url: The URL of the page that produced this data.
        """
        self.errors = errors
        self.failed_doc = failed_doc
        self.model_name = model_name

        error_summary = ", ".join(
            f"{err['loc'][0] if err['loc'] else '__root__'}: {err['msg']}"
            for err in errors
        )

        message = (
            f"Data validation failed for model '{model_name}': {error_summary}"
        )

        context = {
            "model": model_name,
            "error_count": len(errors),
            "errors": errors,
            "failed_doc": failed_doc,
        }

        super().__init__(message, request_url, context)


# =============================================================================
# Transient Exceptions
# =============================================================================


class TransientException(Exception):
    """Base class for transient errors that might resolve on retry.

    Transient exceptions represent temporary failures like network issues,
    driver hiccups, or timeouts. Unlike assumption exceptions which
    indicate bad input or a changed page schema, transient exceptions
    suggest retrying the extraction may succeed.

    The driver is responsible for retry logic and strategy.
    """

    pass


class SessionError(TransientException):
    """Raised when a browser-session operation fails.

    Attributes:
        url: The page URL at the time of the failure, when known.
        message: Human-readable error message.
    """

    def __init__(self, message: str, url: str = "") -> None:
        self.url = url
        self.message = message
        super().__init__(message)


class ElementNotFoundError(SessionError):
    """Raised when a page query doesn't match the expected element count.

    On a dynamically-rendered page this usually means the content has not
    materialized yet, so it is treated as transient.

    Attributes:
        selector: The XPath or CSS selector that was used.
        selector_type: Type of selector ("xpath" or "css").
        description: Human-readable description of what was being selected.
        expected_min: Minimum number of results expected.
        expected_max: Maximum number of results expected (None = unlimited).
        actual_count: Actual number of results found.
    """

    def __init__(
        self,
        selector: str,
        selector_type: str,
        description: str,
        expected_min: int,
        expected_max: int | None,
        actual_count: int,
        url: str = "",
    ) -> None:
        self.selector = selector
        self.selector_type = selector_type
        self.description = description
        self.expected_min = expected_min
        self.expected_max = expected_max
        self.actual_count = actual_count

        if expected_max is None:
            expected_str = f"at least {expected_min}"
        elif expected_min == expected_max:
            expected_str = f"exactly {expected_min}"
        else:
            expected_str = f"between {expected_min} and {expected_max}"

        super().__init__(
            f"HTML structure mismatch: Expected {expected_str} "
            f"elements for '{description}', but found {actual_count} "
            f"({selector_type}: {selector})",
            url,
        )


class WaitTimeoutError(SessionError):
    """Raised when a wait condition does not hold within its timeout.

    Attributes:
        condition: The wait condition that timed out.
        timeout_ms: The timeout in milliseconds, if one was set.
    """

    def __init__(
        self, condition: Any, timeout_ms: int | None, url: str = ""
    ) -> None:
        self.condition = condition
        self.timeout_ms = timeout_ms
        timeout_str = (
            f"{timeout_ms}ms" if timeout_ms is not None else "default timeout"
        )
        super().__init__(
            f"Wait condition {condition} timed out after {timeout_str}", url
        )


class KataFileError(Exception):
    """Raised when a saved kata document cannot be read or is incomplete.

    Attributes:
        path: The offending file path.
        message: Human-readable error message.
    """

    def __init__(self, message: str, path: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class ExtractionError(Exception):
    """Raised when every extraction attempt failed with a transient error.

    Attributes:
        url: The kata URL.
        attempts: Number of attempts made.
        last_error: The SessionError raised by the final attempt.
    """

    def __init__(
        self, url: str, attempts: int, last_error: SessionError
    ) -> None:
        self.url = url
        self.attempts = attempts
        self.last_error = last_error
        self.message = (
            f"Failed to extract kata from {url} after {attempts} attempts: "
            f"{last_error}"
        )
        super().__init__(self.message)
