"""
Readability gate: decide whether extraction should run at all.

The extractability check is a port of Mozilla's ``isProbablyReaderable``:
every sufficiently long paragraph-like node that is visible and not in an
obviously boilerplate container adds sqrt(length - 140) to a score, and the
document counts as readerable once that score passes 20.

The decision itself is a small table over (confidence policy, outcome).
"""

import math
import re
from enum import Enum
from typing import Dict

from bs4 import BeautifulSoup
from bs4.element import Tag

from .config import Config, ConfidencePolicy
from .errors import DataError, Diagnostics

MIN_CONTENT_LENGTH = 140
MIN_SCORE = 20

UNLIKELY_CANDIDATES = re.compile(
    r"-ad-|ai2html|banner|breadcrumbs|combx|comment|community|cover-wrap|disqus|extra|footer|gdpr|"
    r"header|legends|menu|related|remark|replies|rss|shoutbox|sidebar|skyscraper|social|sponsor|"
    r"supplemental|ad-break|agegate|pagination|pager|popup|yom-remote",
    re.I,
)
MAYBE_CANDIDATE = re.compile(r"and|article|body|column|content|main|shadow", re.I)
DISPLAY_NONE = re.compile(r"display\s*:\s*none", re.I)


class Verdict(Enum):
    ATTEMPT = "attempt"
    PASSTHROUGH = "passthrough"
    REFUSE = "refuse"


# Verdict when the document does not look readerable
LOW_CONFIDENCE: Dict[ConfidencePolicy, Verdict] = {
    ConfidencePolicy.KEEP: Verdict.PASSTHROUGH,
    ConfidencePolicy.FORCE: Verdict.ATTEMPT,
    ConfidencePolicy.EXIT: Verdict.REFUSE,
}

# Verdict when extraction ran but found no article.
# FORCE stays fatal: it promised an article.
NO_ARTICLE: Dict[ConfidencePolicy, Verdict] = {
    ConfidencePolicy.KEEP: Verdict.PASSTHROUGH,
    ConfidencePolicy.FORCE: Verdict.REFUSE,
    ConfidencePolicy.EXIT: Verdict.REFUSE,
}


def _class_and_id(node: Tag) -> str:
    classes = node.get("class") or []
    if isinstance(classes, str):
        classes = [classes]
    return " ".join(classes) + " " + (node.get("id") or "")


def is_visible(node: Tag) -> bool:
    if DISPLAY_NONE.search(node.get("style") or ""):
        return False
    if node.has_attr("hidden"):
        return False
    if node.get("aria-hidden") == "true":
        return "fallback-image" in _class_and_id(node)
    return True


def _candidates(soup: BeautifulSoup):
    seen = set()
    nodes = list(soup.find_all(["p", "pre", "article"]))
    for br in soup.find_all("br"):
        parent = br.parent
        if isinstance(parent, Tag) and parent.name == "div":
            nodes.append(parent)
    for node in nodes:
        if id(node) not in seen:
            seen.add(id(node))
            yield node


def is_probably_readerable(html: str) -> bool:
    """Cheap guess at whether an article can be extracted from the page."""
    soup = BeautifulSoup(html, "html.parser")
    score = 0.0
    for node in _candidates(soup):
        if not is_visible(node):
            continue
        match_string = _class_and_id(node)
        if UNLIKELY_CANDIDATES.search(match_string) and not MAYBE_CANDIDATE.search(match_string):
            continue
        if node.name == "p" and node.find_parent("li") is not None:
            continue
        length = len(node.get_text().strip())
        if length < MIN_CONTENT_LENGTH:
            continue
        score += math.sqrt(length - MIN_CONTENT_LENGTH)
        if score > MIN_SCORE:
            return True
    return False


def check_passthrough(config: Config) -> None:
    """Passthrough cannot satisfy --json or --properties."""
    if config.wants_properties:
        raise DataError("Can't output properties")


def evaluate(html: str, config: Config, diagnostics: Diagnostics) -> Verdict:
    """Decide, once and before any output, whether to attempt extraction."""
    if config.low_confidence is ConfidencePolicy.FORCE or is_probably_readerable(html):
        return Verdict.ATTEMPT

    verdict = LOW_CONFIDENCE[config.low_confidence]
    if verdict is Verdict.REFUSE:
        raise DataError("Not sure if this document should be processed, exiting")
    diagnostics.note("Not sure if this document should be processed. Not processing")
    check_passthrough(config)
    return verdict


def after_extraction(found_article: bool, config: Config, diagnostics: Diagnostics) -> Verdict:
    """Decide what an attempted extraction turns into."""
    if found_article:
        return Verdict.ATTEMPT

    verdict = NO_ARTICLE[config.low_confidence]
    if verdict is Verdict.REFUSE:
        raise DataError("Couldn't process document.")
    diagnostics.warn("Couldn't process document.")
    check_passthrough(config)
    return verdict
