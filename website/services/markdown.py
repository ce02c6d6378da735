"""Markdown to HTML conversion for posts."""

import re

import markdown as _markdown
from markdown.extensions.toc import TocExtension
from markupsafe import Markup

_NON_SLUG_CHAR = re.compile(r"[^a-z0-9]")


def slugify(heading: str, separator: str = "-") -> str:
    """Heading id: lower-cased, every character outside ``[a-z0-9]`` becomes *separator*."""
    return _NON_SLUG_CHAR.sub(separator, heading.lower())


class Markdown:
    """Callable converter handed to templates as ``markdown``."""

    def __call__(self, content: str) -> Markup:
        # Fenced code blocks get "language-<lang>" classes from the extra extension.
        md = _markdown.Markdown(
            extensions=["extra", TocExtension(slugify=slugify)],
        )
        return Markup(md.convert(content))
