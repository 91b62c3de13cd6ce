import logging

from relay.handler import lambda_handler  # noqa: F401

logger = logging.getLogger()
if not logger.handlers:
    logging.basicConfig(level=logging.INFO)
logger.setLevel(logging.INFO)
