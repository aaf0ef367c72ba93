"""Conversion of rendered description markup to Markdown.

Kata descriptions arrive as the inner HTML of the rendered markdown
container. to_markdown() turns that fragment back into Markdown: ATX
headings, "-" bullets, inline code in backticks, links with their targets
and fenced code blocks tagged with the block's language. Script and style
elements and comments are removed with lxml before conversion.
"""

from __future__ import annotations

from lxml import etree, html
from markdownify import ATX, MarkdownConverter

_LANGUAGE_CLASS_PREFIX = "language-"


def _code_language(pre) -> str | None:
    """Return the language named by a ``language-*`` class under a <pre>."""
    for element in [pre, *pre.find_all("code")]:
        for css_class in element.get("class") or ():
            if css_class.startswith(_LANGUAGE_CLASS_PREFIX):
                return css_class[len(_LANGUAGE_CLASS_PREFIX) :]
    return None


class DescriptionConverter(MarkdownConverter):
    """MarkdownConverter tuned for Codewars descriptions.

    <br> becomes a plain line break instead of Markdown's trailing-spaces
    hard break.
    """

    def __init__(self, **options) -> None:
        options.setdefault("heading_style", ATX)
        options.setdefault("bullets", "-")
        options.setdefault("escape_underscores", False)
        options.setdefault("escape_asterisks", False)
        options.setdefault("code_language_callback", _code_language)
        super().__init__(**options)

    def convert_br(self, el, text, parent_tags):
        if "_inline" in parent_tags:
            return " "
        return "\n"


def _strip_non_content(markup: str) -> str:
    root = html.fragment_fromstring(markup, create_parent="div")
    etree.strip_elements(
        root, "script", "style", etree.Comment, with_tail=False
    )
    return html.tostring(root, encoding="unicode")


def to_markdown(markup: str) -> str:
    """Convert an HTML fragment to Markdown.

    Args:
        markup: HTML fragment, e.g. an element's innerHTML.

    Returns:
        The Markdown rendering, or "" for blank input.
    """
    if not markup or not markup.strip():
        return ""
    return DescriptionConverter().convert(_strip_non_content(markup)).strip()
