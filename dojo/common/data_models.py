"""Pydantic data models for scraped katas.

Kata is the only record the extraction driver produces. It is immutable and
checks every invariant at construction time, so an instance that exists is
always internally consistent. Invariant failures raise InvalidArgumentError
with a field-specific message and a ValidationFailure category.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    TypeAdapter,
    ValidationError,
    model_validator,
)
from pydantic.alias_generators import to_camel

from dojo.common.exceptions import (
    DataFormatAssumptionException,
    InvalidArgumentError,
    ValidationFailure,
)

VALID_KYU_LEVELS = tuple(f"{level} kyu" for level in range(1, 9))
VALID_DAN_LEVELS = tuple(f"{level} dan" for level in range(1, 9))
VALID_DIFFICULTIES = frozenset(VALID_KYU_LEVELS + VALID_DAN_LEVELS)

KATA_URL_PATTERN = re.compile(r"^https?://(?:www\.)?codewars\.com/kata/")

# Looks like a rank but may be out of range, e.g. "9 kyu"
_DIFFICULTY_SHAPE = re.compile(r"^[0-9] (?:kyu|dan)$")

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def _require_text(value: str, field: str, label: str, url: str) -> None:
    if not value.strip():
        raise InvalidArgumentError(
            f"{label} cannot be empty",
            field,
            ValidationFailure.EMPTY_FIELD,
            url,
        )


def _has_duplicates(values: Sequence[str]) -> bool:
    return len(set(values)) != len(values)


def validate_difficulty(difficulty: str, url: str = "") -> None:
    """Check a difficulty against the kyu/dan enumeration.

    Raises:
        InvalidArgumentError: NOT_IN_ENUMERATION for rank-shaped values out
            of the 1-8 range, MALFORMED_FORMAT for anything else.
    """
    if difficulty in VALID_DIFFICULTIES:
        return
    if _DIFFICULTY_SHAPE.match(difficulty):
        raise InvalidArgumentError(
            "Invalid difficulty level. Must be between 1-8 kyu or 1-8 dan",
            "difficulty",
            ValidationFailure.NOT_IN_ENUMERATION,
            url,
        )
    raise InvalidArgumentError(
        'Invalid difficulty format. Must be "X kyu" or "X dan"',
        "difficulty",
        ValidationFailure.MALFORMED_FORMAT,
        url,
    )


def validate_kata_url(url: str) -> None:
    """Check that a URL is well formed and points at a Codewars kata page.

    Raises:
        InvalidArgumentError: EMPTY_FIELD or MALFORMED_FORMAT.
    """
    _require_text(url, "url", "URL", url)
    try:
        _URL_ADAPTER.validate_python(url)
    except ValidationError as e:
        raise InvalidArgumentError(
            "Invalid URL format",
            "url",
            ValidationFailure.MALFORMED_FORMAT,
            url,
        ) from e
    if not KATA_URL_PATTERN.match(url):
        raise InvalidArgumentError(
            "URL must be a valid Codewars kata URL",
            "url",
            ValidationFailure.MALFORMED_FORMAT,
            url,
        )


class Kata(BaseModel):
    """A single Codewars exercise with its starter code and tests.

    Attribute names are snake_case; the JSON document produced by
    to_document() uses camelCase keys (solutionPlaceholder,
    languagesAvailable). Sequences are stored as tuples.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: str
    url: str
    name: str
    description: str
    difficulty: str
    language: str
    solution_placeholder: str
    tests: str
    tags: tuple[str, ...] = ()
    category: str | None = None
    author: str | None = None
    languages_available: tuple[str, ...]

    @model_validator(mode="after")
    def _check_invariants(self) -> Kata:
        # Order matters: the first violation found is the one reported
        url = self.url
        _require_text(self.id, "id", "ID", url)
        validate_kata_url(url)
        _require_text(self.name, "name", "Name", url)
        _require_text(self.description, "description", "Description", url)
        validate_difficulty(self.difficulty, url)
        _require_text(self.language, "language", "Language", url)
        _require_text(
            self.solution_placeholder,
            "solution_placeholder",
            "Solution placeholder",
            url,
        )
        _require_text(self.tests, "tests", "Tests", url)

        if not self.languages_available:
            raise InvalidArgumentError(
                "At least one language must be available",
                "languages_available",
                ValidationFailure.EMPTY_FIELD,
                url,
            )
        if self.language not in self.languages_available:
            raise InvalidArgumentError(
                "Selected language must be in available languages",
                "language",
                ValidationFailure.REFERENTIAL_MISMATCH,
                url,
            )
        if _has_duplicates(self.languages_available):
            raise InvalidArgumentError(
                "Languages available must be unique",
                "languages_available",
                ValidationFailure.DUPLICATE_ENTRIES,
                url,
            )
        if _has_duplicates(self.tags):
            raise InvalidArgumentError(
                "Tags must be unique",
                "tags",
                ValidationFailure.DUPLICATE_ENTRIES,
                url,
            )
        return self

    def to_document(self) -> dict[str, Any]:
        """Return the JSON-ready document with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def build(cls, request_url: str = "", **fields: Any) -> Kata:
        """Validate extracted fields into a Kata.

        Type errors detected by Pydantic are converted to
        DataFormatAssumptionException. Invariant failures raised by the
        model itself (InvalidArgumentError) propagate unchanged.

        Raises:
            DataFormatAssumptionException: If a field has the wrong type.
            InvalidArgumentError: If a Kata invariant fails.
        """
        try:
            return cls.model_validate(fields)
        except ValidationError as e:
            raise DataFormatAssumptionException(
                errors=[dict(err) for err in e.errors()],
                failed_doc=fields,
                model_name=cls.__name__,
                request_url=request_url,
            ) from e
