"""reCAPTCHA-gated form relay for AWS Lambda."""

__version__ = "1.0.0"
