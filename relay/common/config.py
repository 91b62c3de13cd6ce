import math
import os
import re
from dataclasses import dataclass, field
from typing import Mapping, Optional

DEFAULT_SITE_URL = "*"
DEFAULT_SCORE_THRESHOLD = 0.5

_FLOAT_PREFIX = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_TRUTHY = ("1", "true", "yes", "on")


def parse_float_prefix(raw: Optional[str]) -> Optional[float]:
    """Parse the leading number of ``raw`` ("0.7abc" -> 0.7), None if there is none."""
    if not raw:
        return None
    m = _FLOAT_PREFIX.match(raw)
    if not m:
        return None
    value = float(m.group(0))
    # "1e400" overflows to inf, which has no JSON form
    if not math.isfinite(value):
        return None
    return value


def parse_threshold(raw: Optional[str]) -> float:
    value = parse_float_prefix(raw)
    # zero counts as unset, same as the deployed function always did
    if not value:
        return DEFAULT_SCORE_THRESHOLD
    return value


def parse_timeout(raw: Optional[str]) -> Optional[float]:
    value = parse_float_prefix(raw)
    if value is None or value <= 0:
        return None
    return value


@dataclass(frozen=True)
class RelayConfig:
    """Settings for one invocation. Build it with ``from_env`` and pass it in."""

    site_url: str = DEFAULT_SITE_URL
    score_threshold: float = DEFAULT_SCORE_THRESHOLD
    # kept out of repr so it never lands in a log line
    secret_key: Optional[str] = field(default=None, repr=False)
    secret_name: Optional[str] = None
    endpoint_url: Optional[str] = None
    verify_timeout: Optional[float] = None
    forward_timeout: Optional[float] = None
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RelayConfig":
        env = os.environ if environ is None else environ
        return cls(
            site_url=env.get("MY_SITE_URL") or DEFAULT_SITE_URL,
            score_threshold=parse_threshold(env.get("SCORE_THRESHOLD")),
            secret_key=env.get("RECAPTCHA_SECRET_KEY") or None,
            secret_name=env.get("RECAPTCHA_SECRET_NAME") or None,
            endpoint_url=env.get("ENDPOINT_URL") or None,
            verify_timeout=parse_timeout(env.get("VERIFY_TIMEOUT_SECONDS")),
            forward_timeout=parse_timeout(env.get("FORWARD_TIMEOUT_SECONDS")),
            debug=(env.get("RELAY_DEBUG") or "").strip().lower() in _TRUTHY,
        )
