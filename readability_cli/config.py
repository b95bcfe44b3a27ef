"""Run configuration: one immutable value built at startup and handed to every stage."""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Tuple

from .errors import UsageError

DEFAULT_TIMEOUT = 20
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Used when --proxy is absent. First non-empty wins: https before http,
# each lowercase name before its uppercase form.
PROXY_ENV_VARS = ("https_proxy", "HTTPS_PROXY", "http_proxy", "HTTP_PROXY")


class ConfidencePolicy(str, Enum):
    """What to do when the document does not look like an article."""

    KEEP = "keep"
    FORCE = "force"
    EXIT = "exit"

    @classmethod
    def parse(cls, value: Optional[str]) -> Tuple["ConfidencePolicy", bool]:
        """Return (policy, deprecated) for a --low-confidence value.

        ``None`` means the option was not given. The legacy ``no-op`` value
        maps to KEEP and is flagged as deprecated.
        """
        if value is None:
            return cls.KEEP, False
        if value == "no-op":
            return cls.KEEP, True
        try:
            return cls(value), False
        except ValueError:
            modes = ", ".join(mode.value for mode in cls)
            raise UsageError(f"Unknown mode: {value}\nPlease use one of: {modes}") from None


@dataclass(frozen=True)
class FetchOptions:
    proxy: Optional[str] = None
    verify: bool = True
    user_agent: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    @property
    def headers(self) -> dict:
        return {"User-Agent": self.user_agent or DEFAULT_USER_AGENT}

    @property
    def proxies(self) -> Optional[dict]:
        if not self.proxy:
            return None
        return {"http": self.proxy, "https": self.proxy}


@dataclass(frozen=True)
class Config:
    source: Optional[str] = None
    is_file: bool = False
    is_url: bool = False
    base: Optional[str] = None
    sanitize: bool = True
    json: bool = False
    low_confidence: ConfidencePolicy = ConfidencePolicy.KEEP
    output: Optional[str] = None
    properties: Optional[Tuple[str, ...]] = None
    quiet: bool = False
    style: Optional[str] = None
    fetch: FetchOptions = field(default_factory=FetchOptions)

    @property
    def wants_properties(self) -> bool:
        """True when the requested output only makes sense for an extracted article."""
        return self.json or self.properties is not None


def proxy_from_env(environ: Mapping[str, str] = os.environ) -> Optional[str]:
    """First non-empty proxy variable from the environment."""
    for name in PROXY_ENV_VARS:
        value = environ.get(name)
        if value:
            return value
    return None
