"""
Shared test configuration.

Every test starts from a clean relay environment; tests opt in to settings
through monkeypatch.setenv() or by building RelayConfig directly.
"""

import pytest

RELAY_ENV_VARS = (
    "MY_SITE_URL",
    "SCORE_THRESHOLD",
    "RECAPTCHA_SECRET_KEY",
    "RECAPTCHA_SECRET_NAME",
    "ENDPOINT_URL",
    "VERIFY_TIMEOUT_SECONDS",
    "FORWARD_TIMEOUT_SECONDS",
    "RELAY_DEBUG",
)

ENDPOINT_URL = "https://forms.example.com/submit"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in RELAY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")


@pytest.fixture(autouse=True)
def reset_secrets_client(monkeypatch):
    import relay.common.aws_utils as aws_utils

    monkeypatch.setattr(aws_utils, "_secrets_client", None)


@pytest.fixture
def config():
    from relay.common.config import RelayConfig

    return RelayConfig(
        site_url="https://www.example.com",
        score_threshold=0.5,
        secret_key="test-secret",
        endpoint_url=ENDPOINT_URL,
    )
