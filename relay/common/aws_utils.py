import json
import logging
from typing import Any, Dict, Optional

import boto3

logger = logging.getLogger(__name__)

_secrets_client = None

# Keys looked up, in order, inside the Secrets Manager JSON document
SECRET_KEY_FIELDS = ("secret_key", "RECAPTCHA_SECRET_KEY")


def get_secrets_client():
    global _secrets_client
    if _secrets_client is None:
        _secrets_client = boto3.client("secretsmanager")
    return _secrets_client


def read_secret_json(secret_name: str) -> Dict[str, Any]:
    client = get_secrets_client()
    resp = client.get_secret_value(SecretId=secret_name)
    raw = resp.get("SecretString")
    if not raw and "SecretBinary" in resp:
        raw = resp["SecretBinary"].decode("utf-8")
    return json.loads(raw or "{}")


def resolve_secret_key(config) -> Optional[str]:
    """Return the reCAPTCHA secret for this invocation.

    The plain environment value wins. Secrets Manager is only consulted when
    the key is unset and RECAPTCHA_SECRET_NAME names a secret.
    """
    if config.secret_key:
        return config.secret_key
    if not config.secret_name:
        return None
    sec = read_secret_json(config.secret_name)
    for field in SECRET_KEY_FIELDS:
        if sec.get(field):
            return sec[field]
    logger.warning("Secret %s has no reCAPTCHA key field", config.secret_name)
    return None
