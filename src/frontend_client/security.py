"""Base URL and header helpers."""

from __future__ import annotations

from typing import Mapping, TypeVar
from urllib.parse import urlparse

V = TypeVar("V")

SENSITIVE_HEADERS = {
    "authorization",
    "cookie",
    "proxy-authorization",
    "x-api-key",
}


def sanitize_headers(headers: Mapping[str, V]) -> dict[str, V | str]:
    """Return headers with sensitive values redacted for logging."""
    redacted: dict[str, V | str] = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS:
            redacted[key] = "[REDACTED]"
        else:
            redacted[key] = value
    return redacted


LOOPBACK_HOSTS = {"localhost", "127.0.0.1", "::1"}


def validate_base_url(url: str, *, allow_http: bool = False) -> None:
    """Check the prefix every request URL is built on.

    Request URLs are formed by plain concatenation (``base_url + url + query``),
    so the base must be an absolute http(s) origin. Cleartext http is limited
    to loopback hosts unless the caller passes ``allow_http=True``.
    """
    if "\x00" in url:
        raise ValueError("base URL contains a NUL byte")
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"}:
        raise ValueError(f"base URL {url!r} must start with http:// or https://")
    if not parsed.netloc:
        raise ValueError(f"base URL {url!r} has no host")
    if parsed.scheme == "http" and not allow_http:
        if (parsed.hostname or "").lower() not in LOOPBACK_HOSTS:
            raise ValueError(f"base URL {url!r} uses cleartext http; pass allow_http=True to permit it")
