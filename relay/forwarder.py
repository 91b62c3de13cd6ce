import logging
import urllib.parse
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import requests

from .errors import MalformedRequestError, UpstreamForwardError

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

FormData = Union[Mapping[str, Any], Sequence[Sequence[Any]], str, None]


def _form_value(v: Any) -> str:
    # render the way a browser's URLSearchParams would
    if v is None:
        return "null"
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v)


def _quote(s: str, safe: str = "", encoding=None, errors=None) -> str:
    # URLSearchParams leaves only A-Za-z0-9 and *-._ unescaped
    return urllib.parse.quote_plus(s, safe="*", encoding=encoding, errors=errors).replace("~", "%7E")


def form_pairs(form_data: FormData) -> List[Tuple[str, str]]:
    """Normalize formData into (name, value) pairs.

    Accepts an object, a query string ("a=b&c=d") or a list of [name, value]
    pairs, the same inputs URLSearchParams takes.
    """
    if not form_data:
        return []
    if isinstance(form_data, str):
        return urllib.parse.parse_qsl(form_data.lstrip("?"), keep_blank_values=True)
    if isinstance(form_data, Mapping):
        return [(str(k), _form_value(v)) for k, v in form_data.items()]
    if isinstance(form_data, (list, tuple)):
        pairs = []
        for item in form_data:
            if not isinstance(item, (list, tuple)) or len(item) != 2:
                raise MalformedRequestError("formData entries must be [name, value] pairs")
            pairs.append((_form_value(item[0]), _form_value(item[1])))
        return pairs
    raise MalformedRequestError(f"Unsupported formData type: {type(form_data).__name__}")


def encode_form(form_data: FormData) -> str:
    return urllib.parse.urlencode(form_pairs(form_data), quote_via=_quote)


def forward_form(endpoint_url: str, form_data: FormData, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None) -> Dict[str, Any]:
    """POST the submission to the downstream endpoint once and return its JSON reply."""
    http = session or requests
    resp = http.post(
        endpoint_url,
        data=encode_form(form_data),
        headers={"Content-Type": FORM_CONTENT_TYPE},
        timeout=timeout,
    )
    if not 200 <= resp.status_code < 300:
        logger.warning("Forward to %s answered %s", endpoint_url, resp.status_code)
        raise UpstreamForwardError(resp.status_code)
    return resp.json()
