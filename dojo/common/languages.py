"""Language-name normalization.

Codewars identifies languages by URL slug ("csharp", "cpp") while the
language selector shows display names ("C#", "C++"). Both the language taken
from the URL and the list of available languages are mapped through
normalize_language() so they compare equal.
"""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType

LANGUAGE_NAMES = MappingProxyType(
    {
        "php": "PHP",
        "python": "Python",
        "javascript": "JavaScript",
        "typescript": "TypeScript",
        "java": "Java",
        "csharp": "C#",
        "cpp": "C++",
        "c": "C",
        "ruby": "Ruby",
        "swift": "Swift",
        "go": "Go",
        "rust": "Rust",
        "shell": "Shell",
        "sql": "SQL",
        "coffeescript": "CoffeeScript",
        "crystal": "Crystal",
        "dart": "Dart",
        "elixir": "Elixir",
        "elm": "Elm",
        "erlang": "Erlang",
        "fsharp": "F#",
        "haskell": "Haskell",
        "julia": "Julia",
        "kotlin": "Kotlin",
        "lua": "Lua",
        "nasm": "NASM",
        "nim": "Nim",
        "objc": "Objective-C",
        "ocaml": "OCaml",
        "pascal": "Pascal",
        "perl": "Perl",
        "powershell": "PowerShell",
        "prolog": "Prolog",
        "purescript": "PureScript",
        "r": "R",
        "racket": "Racket",
        "reason": "Reason",
        "scala": "Scala",
        "scheme": "Scheme",
        "solidity": "Solidity",
        "vb": "VB",
    }
)

UNKNOWN_LANGUAGE = "Unknown"


def normalize_language(name: str) -> str:
    """Map a language slug or display name to its canonical display name.

    The lookup key is the lower-cased, trimmed input. Unmapped input is
    returned exactly as given.

    Examples:
        >>> normalize_language(" CSharp ")
        'C#'
        >>> normalize_language("Python")
        'Python'
        >>> normalize_language("Brainfuck")
        'Brainfuck'
    """
    return LANGUAGE_NAMES.get(name.strip().lower(), name)


def normalize_languages(names: Iterable[str]) -> list[str]:
    """Normalize every entry, preserving order and duplicates."""
    return [normalize_language(name) for name in names]
