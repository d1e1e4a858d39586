"""Actions, HTTP client, XML/JSON helpers and AES/RSA utilities for the WeChat Official Account API."""

__version__ = "0.1.0"