from __future__ import annotations

import pytest

from frontend_client.security import sanitize_headers, validate_base_url


def test_sanitize_headers_redacts_credentials() -> None:
    headers = {"Authorization": "Bearer x", "X-API-Key": "k", "Accept": "application/json"}
    assert sanitize_headers(headers) == {
        "Authorization": "[REDACTED]",
        "X-API-Key": "[REDACTED]",
        "Accept": "application/json",
    }


@pytest.mark.parametrize("url", ["https://api.example.com", "http://localhost:8080", "http://127.0.0.1"])
def test_validate_base_url_accepts(url: str) -> None:
    validate_base_url(url)


@pytest.mark.parametrize(
    ("url", "message"),
    [
        ("api.example.com", "must start with http"),
        ("ftp://api.example.com", "must start with http"),
        ("https://", "has no host"),
        ("https://api.example.com\x00", "NUL byte"),
        ("http://api.example.com", "allow_http=True"),
    ],
)
def test_validate_base_url_rejects(url: str, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        validate_base_url(url)
