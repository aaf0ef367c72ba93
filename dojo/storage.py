"""On-disk layout for scraped katas.

A kata is saved as a JSON document under

    <katas_dir>/codewars/<language>/<kyu>_kyu/<name>/<name>.json

and generate_kata_files() writes the solution stub, the test fixture and a
README next to that document.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

from dojo.common.data_models import Kata
from dojo.common.exceptions import KataFileError

logger = logging.getLogger(__name__)

LANGUAGE_EXTENSIONS = MappingProxyType(
    {
        "python": "py",
        "javascript": "js",
        "typescript": "ts",
        "java": "java",
        "c#": "cs",
        "c++": "cpp",
        "php": "php",
        "ruby": "rb",
        "rust": "rs",
        "go": "go",
        "kotlin": "kt",
        "scala": "scala",
        "swift": "swift",
    }
)
DEFAULT_EXTENSION = "txt"

REQUIRED_DOCUMENT_KEYS = (
    "name",
    "difficulty",
    "description",
    "language",
    "solutionPlaceholder",
    "tests",
)

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_KYU_LEVEL = re.compile(r"(\d+)\s*kyu")


@dataclass(frozen=True)
class GeneratedFiles:
    solution: Path
    tests: Path
    readme: Path


def sanitize_folder_name(name: str) -> str:
    """Turn a kata name into a lower-case, underscore-separated folder name.

    Examples:
        >>> sanitize_folder_name("Sum of  Array (Easy!)")
        'sum_of_array_easy'
    """
    sanitized = _UNSAFE_CHARS.sub("", name)
    sanitized = _WHITESPACE.sub(" ", sanitized).strip()
    return sanitized.replace(" ", "_").lower()


def kyu_level(difficulty: str) -> str:
    """Return the kyu number of a difficulty, or "0" for dan ranks."""
    match = _KYU_LEVEL.search(difficulty)
    return match.group(1) if match else "0"


def language_extension(language: str) -> str:
    return LANGUAGE_EXTENSIONS.get(language.lower(), DEFAULT_EXTENSION)


def kata_directory(katas_dir: str | Path, kata: Kata) -> Path:
    return (
        Path(katas_dir)
        / "codewars"
        / kata.language.lower()
        / f"{kyu_level(kata.difficulty)}_kyu"
        / sanitize_folder_name(kata.name)
    )


def save_kata(kata: Kata, katas_dir: str | Path) -> Path:
    """Write the kata's JSON document and return its path."""
    folder = kata_directory(katas_dir, kata)
    folder.mkdir(parents=True, exist_ok=True)
    json_path = folder / f"{sanitize_folder_name(kata.name)}.json"
    json_path.write_text(
        json.dumps(kata.to_document(), indent=4, ensure_ascii=False),
        encoding="utf-8",
    )
    logger.info(f"Kata information saved to: {json_path}")
    return json_path


def load_kata_document(path: str | Path) -> dict[str, Any]:
    """Read a saved kata document.

    Raises:
        KataFileError: If the file is missing, is not valid JSON, or is
            missing a key needed to generate files.
    """
    path = Path(path)
    if not path.is_file():
        raise KataFileError("JSON file not found", str(path))
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise KataFileError(f"Invalid JSON file ({e.msg})", str(path)) from e
    if not isinstance(document, dict):
        raise KataFileError("Kata document must be a JSON object", str(path))

    missing = [key for key in REQUIRED_DOCUMENT_KEYS if key not in document]
    if missing:
        raise KataFileError(
            f"Kata document is missing keys {', '.join(missing)}", str(path)
        )
    return document


def generate_kata_files(json_path: str | Path) -> GeneratedFiles:
    """Write solution, test and README files next to a kata document."""
    json_path = Path(json_path)
    document = load_kata_document(json_path)
    base_dir = json_path.parent
    extension = language_extension(document["language"])

    solution_file = base_dir / "solution" / f"solution.{extension}"
    test_file = base_dir / "tests" / f"test.{extension}"
    readme_file = base_dir / "README.md"

    solution_file.parent.mkdir(parents=True, exist_ok=True)
    test_file.parent.mkdir(parents=True, exist_ok=True)

    solution_file.write_text(document["solutionPlaceholder"], encoding="utf-8")
    test_file.write_text(document["tests"], encoding="utf-8")
    readme_file.write_text(
        f"# {document['name']}\n\n"
        f"Difficulty: {document['difficulty']}\n\n"
        f"{document['description']}",
        encoding="utf-8",
    )
    logger.info(f"Generated kata files in {base_dir}")
    return GeneratedFiles(solution=solution_file, tests=test_file, readme=readme_file)
