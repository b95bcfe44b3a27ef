"""
Input resolution and document loading.

The SOURCE argument is classified as a local file, a remote URL or standard
input, then read to completion and decoded to text. Whatever the source, the
same bytes decode to the same text, so the rest of the pipeline never needs
to know where the document came from.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Tuple, Union
from urllib.parse import urlparse

import chardet
import requests
from urllib3.exceptions import NameResolutionError

from .config import Config, FetchOptions
from .errors import DataError, Diagnostics, NetworkError, UsageError, from_os_error

URI_PATTERN = re.compile(r"^\w+://")
META_CHARSET = re.compile(rb"""<meta[^>]+charset\s*=\s*["']?\s*([\w.:-]+)""", re.I)
CONTENT_TYPE_CHARSET = re.compile(r"charset\s*=\s*[\"']?([\w.:-]+)", re.I)

STDIN_MARKER = "-"


@dataclass(frozen=True)
class LocalFile:
    path: str


@dataclass(frozen=True)
class RemoteURL:
    url: str


@dataclass(frozen=True)
class StandardInput:
    pass


SourceSpec = Union[LocalFile, RemoteURL, StandardInput]


@dataclass(frozen=True)
class LoadedDocument:
    """Decoded HTML text plus the URL relative links resolve against."""

    html: str
    base_url: Optional[str]
    source: SourceSpec


def resolve_source(
    token: Optional[str],
    is_file: bool = False,
    is_url: bool = False,
    base: Optional[str] = None,
    stdin_isatty: bool = False,
) -> Tuple[SourceSpec, Optional[str]]:
    """Classify the SOURCE argument and work out the effective base URL."""
    if not token:
        if stdin_isatty:
            raise UsageError("No input provided")
        token = STDIN_MARKER

    if is_url and not URI_PATTERN.search(token):
        token = "https://" + token

    source: SourceSpec
    if not is_file and URI_PATTERN.search(token):
        source = RemoteURL(token)
    elif token == STDIN_MARKER:
        source = StandardInput()
    else:
        source = LocalFile(token)

    if base:
        return source, base
    if isinstance(source, RemoteURL):
        return source, source.url
    return source, None


def decode_html(content: bytes, declared: Optional[str] = None) -> str:
    """Decode page bytes: declared charset, then <meta charset>, then chardet."""
    candidates = [declared]
    match = META_CHARSET.search(content[:2048])
    if match:
        candidates.append(match.group(1).decode("ascii", errors="ignore"))
    for encoding in candidates:
        if not encoding:
            continue
        try:
            return content.decode(encoding, errors="replace")
        except LookupError:
            continue
    guess = chardet.detect(content)
    encoding = guess.get("encoding") or "utf-8"
    try:
        return content.decode(encoding, errors="replace")
    except LookupError:
        return content.decode("utf-8", errors="replace")


def declared_charset(response: requests.Response) -> Optional[str]:
    """Charset from the Content-Type header, only if the server actually sent one."""
    match = CONTENT_TYPE_CHARSET.search(response.headers.get("Content-Type", ""))
    return match.group(1) if match else None


def _unresolved_host(exc: requests.ConnectionError) -> bool:
    reason = getattr(exc.args[0], "reason", None) if exc.args else None
    if isinstance(reason, NameResolutionError):
        return True
    text = str(exc)
    return "Name or service not known" in text or "nodename nor servname" in text


def fetch_html(url: str, options: FetchOptions) -> Tuple[str, str]:
    """Download a page, returning (text, final URL after redirects)."""
    try:
        resp = requests.get(
            url,
            headers=options.headers,
            proxies=options.proxies,
            verify=options.verify,
            timeout=options.timeout,
        )
        resp.raise_for_status()
    except requests.HTTPError as exc:
        response = exc.response
        raise NetworkError(f"Status error: {response.status_code} {response.reason}") from exc
    except (
        requests.exceptions.InvalidURL,
        requests.exceptions.InvalidSchema,
        requests.exceptions.MissingSchema,
        requests.exceptions.URLRequired,
    ) as exc:
        raise DataError(f"Invalid URL: {url}") from exc
    except requests.Timeout as exc:
        raise NetworkError(f"Timed out while retrieving {url}") from exc
    except requests.exceptions.SSLError as exc:
        raise NetworkError(f"TLS error: {exc}") from exc
    except requests.ConnectionError as exc:
        if _unresolved_host(exc):
            raise NetworkError(f"Host not found: '{urlparse(url).hostname}'") from exc
        raise NetworkError(f"Connection error: {exc}") from exc
    except requests.RequestException as exc:
        raise NetworkError(str(exc)) from exc

    return decode_html(resp.content, declared_charset(resp)), resp.url


def read_file(path: str) -> str:
    try:
        content = Path(path).read_bytes()
    except OSError as exc:
        raise from_os_error(exc) from exc
    return decode_html(content)


def load_document(
    source: SourceSpec,
    base_url: Optional[str],
    config: Config,
    diagnostics: Diagnostics,
    stdin: Optional[BinaryIO] = None,
) -> LoadedDocument:
    """Read the source to completion. This is the only blocking step of a run."""
    if isinstance(source, StandardInput):
        diagnostics.note("Reading...")
        if not base_url:
            diagnostics.warn(
                "Warning: piping input with unknown URL. This means that relative links "
                "will be broken. Supply the --base parameter to fix."
            )
        if stdin is None:
            raise UsageError("No input provided")
        return LoadedDocument(decode_html(stdin.read()), base_url, source)

    diagnostics.note("Retrieving...")
    if isinstance(source, RemoteURL):
        html, final_url = fetch_html(source.url, config.fetch)
        return LoadedDocument(html, config.base or final_url, source)

    if not base_url:
        diagnostics.warn(
            "Warning: reading a local file with unknown URL. This means that relative links "
            "will be broken. Supply the --base parameter to fix."
        )
    return LoadedDocument(read_file(source.path), base_url, source)
