"""
Named article properties, as printed by --properties and --json.

Each entry maps a property name to a pure function
``(article, single_line, config) -> value``. Table order is the default
order for JSON output.
"""

import html
import re
from typing import Any, Callable, Dict, Optional, Tuple

from .config import Config
from .errors import UsageError
from .extract import Article
from .sanitize import sanitize

PropertyFunc = Callable[[Article, bool, Config], Any]

NEWLINES = re.compile(r"\n+")


def escape_html(text: str) -> str:
    """Escape text for use as element content."""
    return html.escape(text, quote=False)


def _one_line(value: Optional[str], single_line: bool) -> Optional[str]:
    if value is None or not single_line:
        return value
    return NEWLINES.sub(" ", value)


def title(article: Article, single_line: bool, config: Config) -> str:
    return _one_line(article.title, single_line)


def html_title(article: Article, single_line: bool, config: Config) -> str:
    return f"<h1>{escape_html(title(article, single_line, config))}</h1>"


def excerpt(article: Article, single_line: bool, config: Config) -> str:
    return _one_line(article.excerpt, single_line)


def byline(article: Article, single_line: bool, config: Config) -> Optional[str]:
    return _one_line(article.byline, single_line)


def length(article: Article, single_line: bool, config: Config) -> int:
    return article.length


def direction(article: Article, single_line: bool, config: Config) -> Optional[str]:
    return article.dir


def text_content(article: Article, single_line: bool, config: Config) -> str:
    return article.text_content


def html_content(article: Article, single_line: bool, config: Config) -> str:
    if config.sanitize:
        return sanitize(article.content)
    return article.content


PROPERTIES: Tuple[Tuple[str, PropertyFunc], ...] = (
    ("title", title),
    ("html-title", html_title),
    ("excerpt", excerpt),
    ("byline", byline),
    ("length", length),
    ("dir", direction),
    ("text-content", text_content),
    ("html-content", html_content),
)

PROPERTY_NAMES = tuple(name for name, _ in PROPERTIES)
_BY_NAME: Dict[str, PropertyFunc] = dict(PROPERTIES)


def resolve(name: str, article: Article, single_line: bool, config: Config) -> Any:
    """Value of one property. Unknown names are refused, never silently empty."""
    try:
        func = _BY_NAME[name]
    except KeyError:
        raise UsageError(f"Unknown property: {name}") from None
    return func(article, single_line, config)
