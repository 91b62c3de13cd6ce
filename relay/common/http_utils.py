import base64
import json
from typing import Any, Dict, Optional


def _json(o: Any) -> str:
    return json.dumps(o, separators=(",", ":"))


def cors_headers(site_url: str) -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": site_url,
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Allow-Methods": "POST, OPTIONS",
        "Access-Control-Max-Age": "86400",
    }


def empty_response(status: int, headers: Dict[str, str]) -> Dict[str, Any]:
    return {"statusCode": status, "headers": dict(headers), "body": ""}


def text_response(status: int, text: str, headers: Dict[str, str]) -> Dict[str, Any]:
    h = dict(headers)
    h["Content-Type"] = "text/plain; charset=utf-8"
    return {"statusCode": status, "headers": h, "body": text}


def json_response(status: int, payload: Any, headers: Dict[str, str]) -> Dict[str, Any]:
    h = dict(headers)
    h["Content-Type"] = "application/json"
    return {"statusCode": status, "headers": h, "body": _json(payload)}


def get_http_method(event: Dict[str, Any]) -> Optional[str]:
    """HTTP method of a proxy event.

    REST API and Netlify events carry ``httpMethod``; HTTP API (v2) and
    Function URL events carry ``requestContext.http.method``.
    """
    method = event.get("httpMethod")
    if not method:
        http = (event.get("requestContext") or {}).get("http") or {}
        method = http.get("method")
    if not method:
        return None
    return str(method).upper()


def get_raw_body(event: Dict[str, Any]) -> Optional[str]:
    raw = event.get("body")
    if raw and event.get("isBase64Encoded", False):
        raw = base64.b64decode(raw).decode("utf-8")
    return raw
