"""
Output rendering.

Exactly one of these is produced per run:
    - the original page, sanitized (passthrough)
    - a JSON object of properties
    - properties, one per line
    - a full HTML page laid out for Firefox's Reader Mode stylesheet
    - a simpler HTML page linking a user supplied stylesheet

Everything is rendered to a string first; the output target is only opened
once the whole result exists, so a failed run never leaves a partial file.
"""

import html
import json
import sys
from typing import Optional, TextIO

from .config import Config
from .errors import PermissionDenied, from_os_error
from .extract import Article
from .properties import PROPERTY_NAMES, escape_html, resolve
from .sanitize import sanitize

READER_MODE_CSS = "chrome://global/skin/aboutReader.css"


def render_passthrough(page: str, config: Config) -> str:
    """The original document, untouched apart from sanitization."""
    if config.sanitize:
        return sanitize(page)
    return page


def render_json(article: Article, config: Config) -> str:
    names = config.properties or PROPERTY_NAMES
    result = {name: resolve(name, article, False, config) for name in names}
    return json.dumps(result, ensure_ascii=False)


def render_lines(article: Article, config: Config) -> str:
    """Requested properties in the requested order; absent values get no line."""
    lines = []
    for name in config.properties or ():
        value = resolve(name, article, True, config)
        if value is None:
            continue
        lines.append(f"{value}\n")
    return "".join(lines)


def _head(article: Article, css_href: str, config: Config) -> str:
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head>\n"
        '  <meta charset="utf-8">\n'
        f'  <link rel="stylesheet" href="{html.escape(css_href)}" type="text/css">\n'
        f"  <title>{escape_html(resolve('title', article, False, config))}</title>\n"
        "</head>\n"
    )


def render_reader_mode(article: Article, config: Config) -> str:
    """Full page with the divs and classes Reader Mode CSS expects."""
    title = escape_html(resolve("title", article, False, config))
    direction = resolve("dir", article, False, config)
    author = resolve("byline", article, False, config)

    parts = [
        _head(article, READER_MODE_CSS, config),
        "\n",
        '<body class="light sans-serif loaded" style="--font-size:14pt; --content-width:40em;">\n',
        f'  <div class="container" dir="{direction}">' if direction else '  <div class="container">',
        "\n",
        '    <div class="header reader-header reader-show-element">\n',
        f'      <h1 class="reader-title">{title}</h1>',
    ]
    if author:
        parts.append(f'\n      <div class="credits reader-credits">{escape_html(author)}</div>')
    parts += [
        "\n    </div>\n",
        "\n",
        "    <hr>\n",
        "\n",
        '    <div class="content">\n',
        '      <div class="moz-reader-content reader-show-element">\n',
        resolve("html-content", article, False, config),
        "\n      </div>\n",
        "    </div>\n",
        "  </div>\n",
        "\n</body></html>",
    ]
    return "".join(parts)


def render_custom_style(article: Article, config: Config) -> str:
    """Heading, optional italic byline, rule, content."""
    parts = [
        _head(article, config.style, config),
        "<body>\n",
        resolve("html-title", article, False, config),
        "\n",
    ]
    author = resolve("byline", article, False, config)
    if author:
        parts.append(f"<p><i>{escape_html(author)}</i></p>\n")
    parts += [
        "<hr>\n",
        resolve("html-content", article, False, config),
        "\n</body></html>",
    ]
    return "".join(parts)


def render_article(article: Article, config: Config) -> str:
    if config.json:
        return render_json(article, config)
    if config.properties is not None:
        return render_lines(article, config)
    if config.style:
        return render_custom_style(article, config)
    return render_reader_mode(article, config)


def write_output(text: str, path: Optional[str] = None, stdout: Optional[TextIO] = None) -> None:
    """Write the rendered result in one go, to a file or standard output."""
    if path is None:
        stream = stdout or sys.stdout
        stream.write(text)
        stream.flush()
        return
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    except (FileNotFoundError, PermissionError, IsADirectoryError) as exc:
        # Output path unwritable, whatever the reason
        raise PermissionDenied(f"Cannot write output: {exc.strerror}: '{path}'") from exc
    except OSError as exc:
        raise from_os_error(exc) from exc
