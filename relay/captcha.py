import logging
from numbers import Real
from typing import Any, Dict, Optional

import requests

from .errors import UpstreamVerificationError

logger = logging.getLogger(__name__)

RECAPTCHA_VERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"


def verify_token(token: str, secret_key: Optional[str], timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None) -> Dict[str, Any]:
    """Ask reCAPTCHA to score ``token``. Returns the provider's JSON as-is."""
    http = session or requests
    resp = http.post(
        RECAPTCHA_VERIFY_URL,
        data={"secret": secret_key, "response": token},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
        timeout=timeout,
    )
    if not 200 <= resp.status_code < 300:
        logger.warning("reCAPTCHA siteverify answered %s", resp.status_code)
        raise UpstreamVerificationError(resp.status_code)
    return resp.json()


def passes_threshold(result: Dict[str, Any], threshold: float) -> bool:
    if not isinstance(result, dict):
        return False
    score = result.get("score")
    # v2 checkbox responses carry no score and never pass
    if isinstance(score, bool) or not isinstance(score, Real):
        return False
    return bool(result.get("success")) and score >= threshold
