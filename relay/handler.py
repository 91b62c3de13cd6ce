import json
import logging
import traceback
from typing import Any, Dict, Optional

import requests

from .captcha import passes_threshold, verify_token
from .common.aws_utils import resolve_secret_key
from .common.config import RelayConfig
from .common.http_utils import (
    cors_headers,
    empty_response,
    get_http_method,
    get_raw_body,
    json_response,
    text_response,
)
from .errors import ClientInputError, MalformedRequestError, status_for
from .forwarder import form_pairs, forward_form

logger = logging.getLogger(__name__)

LOW_SCORE_ERROR = "Low ReCAPTCHA score or verification failed"
TRACE_LOGGER_NAME = "relay.trace"


def _parse_body(raw: Optional[str]) -> Dict[str, Any]:
    if raw is None:
        raise MalformedRequestError("Request body is empty")
    try:
        body = json.loads(raw)
    except ValueError as e:
        raise MalformedRequestError(f"Invalid JSON in request body: {e}") from e
    if body is None:
        raise MalformedRequestError("Request body is null")
    # scalars and arrays have no token; they fall through to the token check
    return body if isinstance(body, dict) else {}


def handle(event: Dict[str, Any], config: RelayConfig, trace: Optional[logging.Logger] = None,
           session: Optional[requests.Session] = None) -> Dict[str, Any]:
    """Verify the reCAPTCHA token in ``event`` and relay its formData downstream.

    ``trace`` receives a step-by-step diagnostic log when given.
    """
    headers = cors_headers(config.site_url)
    method = get_http_method(event)
    if trace:
        trace.info("Inbound method: %s", method)

    if method == "OPTIONS":
        return empty_response(204, headers)
    if method != "POST":
        return text_response(405, "Method Not Allowed", headers)

    threshold = config.score_threshold
    try:
        raw_body = get_raw_body(event)
        if trace:
            trace.info("Inbound body: %s", raw_body)
        body = _parse_body(raw_body)

        token = body.get("token")
        if not token:
            raise ClientInputError("Token is required")
        # shape check happens before the token is spent
        form_data = form_pairs(body.get("formData"))

        secret_key = resolve_secret_key(config)
        result = verify_token(token, secret_key, timeout=config.verify_timeout, session=session)
        if trace:
            trace.info("Verification result: %s", json.dumps(result))

        if not passes_threshold(result, threshold):
            return json_response(400, {
                "error": LOW_SCORE_ERROR,
                "threshold": threshold,
                "details": result,
            }, headers)

        if trace:
            trace.info("Forwarding form data: %s", json.dumps(form_data))
        form_response = forward_form(config.endpoint_url, form_data,
                                     timeout=config.forward_timeout, session=session)
        if trace:
            trace.info("Forward response: %s", json.dumps(form_response))

        return json_response(200, {
            "formResponse": form_response,
            "threshold": threshold,
            "details": result,
        }, headers)
    except ClientInputError as e:
        logger.info("Rejected request: %s", e)
        return text_response(e.status_code, str(e), headers)
    except Exception as e:
        logger.error(f"Server Error: {str(e)}")
        logger.error(f"Full traceback: {traceback.format_exc()}")
        return json_response(status_for(e), {
            "error": "Internal Server Error",
            "message": str(e),
        }, headers)


def lambda_handler(event, context):
    config = RelayConfig.from_env()
    trace = logging.getLogger(TRACE_LOGGER_NAME) if config.debug else None
    return handle(event or {}, config, trace=trace)
