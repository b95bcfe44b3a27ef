"""
Extraction adapter around readability-lxml.

readability-lxml finds the main content; page metadata (title, byline,
excerpt, direction) is read from the source document with BeautifulSoup,
roughly the way Readability.js fills those fields in.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, Optional

from bs4 import BeautifulSoup
from readability import Document
from readability.readability import Unparseable

from .errors import ExtractionCrash
from .source import LoadedDocument

# readability-lxml logs a traceback for every document it gives up on
logging.getLogger("readability").addHandler(logging.NullHandler())

TITLE_KEYS = (
    "dc:title",
    "dcterm:title",
    "og:title",
    "weibo:article:title",
    "weibo:webpage:title",
    "title",
    "twitter:title",
)
BYLINE_KEYS = ("dc:creator", "dcterm:creator", "author")
EXCERPT_KEYS = (
    "dc:description",
    "dcterm:description",
    "og:description",
    "weibo:article:description",
    "weibo:webpage:description",
    "description",
    "twitter:description",
)

BYLINE_PATTERN = re.compile(r"byline|author|dateline|writtenby|p-author", re.I)
MAX_BYLINE_LENGTH = 100
DIRECTIONS = ("ltr", "rtl")


@dataclass(frozen=True)
class Article:
    title: str
    byline: Optional[str]
    excerpt: str
    content: str
    text_content: str
    length: int
    dir: Optional[str]


def _normalize_key(key: str) -> str:
    return re.sub(r"\s+", "", key.lower()).replace(".", ":")


def read_metadata(soup: BeautifulSoup) -> Dict[str, str]:
    """Collect <meta name|property=... content=...> pairs, first one wins."""
    metadata: Dict[str, str] = {}
    for meta in soup.find_all("meta"):
        content = (meta.get("content") or "").strip()
        if not content:
            continue
        for attr in ("property", "name"):
            value = meta.get(attr)
            if not value:
                continue
            for key in value.split():
                metadata.setdefault(_normalize_key(key), content)
    return metadata


def _first(metadata: Dict[str, str], keys) -> Optional[str]:
    for key in keys:
        if metadata.get(key):
            return metadata[key]
    return None


def _looks_like_url(value: str) -> bool:
    return bool(re.match(r"^(https?:)?//", value))


def find_byline(soup: BeautifulSoup, metadata: Dict[str, str]) -> Optional[str]:
    """Author from metadata, else a short author-ish element in the page."""
    author = _first(metadata, BYLINE_KEYS)
    if author and not _looks_like_url(author):
        return author

    for node in soup.find_all(True):
        rel = node.get("rel") or []
        itemprop = node.get("itemprop") or ""
        classes = node.get("class") or []
        match_string = " ".join(classes) + " " + (node.get("id") or "")
        if "author" in rel or "author" in itemprop or BYLINE_PATTERN.search(match_string):
            text = node.get_text(" ", strip=True)
            if 0 < len(text) < MAX_BYLINE_LENGTH:
                return text
    return None


def find_direction(soup: BeautifulSoup) -> Optional[str]:
    for tag in ("body", "html"):
        node = soup.find(tag)
        if node is None:
            continue
        value = (node.get("dir") or "").strip().lower()
        if value in DIRECTIONS:
            return value
    return None


def first_paragraph(content: BeautifulSoup) -> str:
    for p in content.find_all("p"):
        text = p.get_text().strip()
        if text:
            return text
    return ""


def extract_article(document: LoadedDocument) -> Optional[Article]:
    """Run the extraction once. None means the page has no article."""
    try:
        doc = Document(document.html, url=document.base_url)
        content = doc.summary(html_partial=True)
        short_title = doc.short_title()
    except Unparseable:
        return None
    except Exception as exc:
        raise ExtractionCrash(f"Extraction failed: {exc}") from exc

    fragment = BeautifulSoup(content, "html.parser")
    text_content = fragment.get_text().strip()
    if not text_content:
        return None

    soup = BeautifulSoup(document.html, "html.parser")
    metadata = read_metadata(soup)

    return Article(
        title=_first(metadata, TITLE_KEYS) or short_title or "",
        byline=find_byline(soup, metadata),
        excerpt=_first(metadata, EXCERPT_KEYS) or first_paragraph(fragment),
        content=content,
        text_content=text_content,
        length=len(text_content),
        dir=find_direction(soup),
    )
