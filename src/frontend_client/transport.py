"""Transport and auth-provider protocols, plus the default httpx transport."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol

import httpx

from .exceptions import (
    FrontendClientValidationError,
    TransportError,
    TransportNetworkError,
    TransportTimeoutError,
)
from .models import HeaderValue, RequestDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    def header(self, name: str, default: str | None = None) -> str | None:
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return default

    async def json(self) -> Any:
        if not self.body:
            return None
        return json.loads(self.body)

    async def blob(self) -> bytes:
        return self.body


class Transport(Protocol):
    async def dispatch(self, url: str, descriptor: RequestDescriptor) -> Any:
        ...


class AuthProvider(Protocol):
    name: str

    async def get_auth_headers(self) -> Mapping[str, str]:
        ...


def _normalize_headers(headers: Mapping[str, HeaderValue]) -> dict[str, str]:
    clean: dict[str, str] = {}
    for key, value in headers.items():
        if isinstance(value, (list, tuple)):
            clean[str(key)] = ", ".join(str(v) for v in value)
        else:
            clean[str(key)] = str(value)
    return clean


def _coerce_content(body: Any) -> bytes | str | None:
    if body is None or isinstance(body, (bytes, str)):
        return body
    if isinstance(body, bytearray):
        return bytes(body)
    raise FrontendClientValidationError(
        f"request body must be str or bytes once negotiated, got {type(body).__name__}"
    )


class HttpxTransport:
    """Sends descriptors with an ``httpx.AsyncClient``.

    ``credentials`` and ``mode`` only mean something to a browser fetch and
    are not forwarded.
    """

    default_timeout = 30.0

    def __init__(
        self,
        httpx_client: httpx.AsyncClient | None = None,
        *,
        timeout: float = default_timeout,
        follow_redirects: bool = True,
    ) -> None:
        self._owns_client = httpx_client is None
        self._httpx = httpx_client or httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=follow_redirects,
            trust_env=False,
        )

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._httpx.aclose()

    async def dispatch(self, url: str, descriptor: RequestDescriptor) -> TransportResponse:
        if descriptor.credentials or descriptor.mode:
            logger.debug(
                "ignoring browser-only fields credentials=%s mode=%s",
                descriptor.credentials,
                descriptor.mode,
            )
        content = _coerce_content(descriptor.body)
        try:
            response = await self._httpx.request(
                method=descriptor.method,
                url=url,
                headers=_normalize_headers(descriptor.headers),
                content=content,
            )
        except httpx.TimeoutException as exc:
            raise TransportTimeoutError("Request timed out", url=url, cause=exc)
        except httpx.NetworkError as exc:
            raise TransportNetworkError("Network error", url=url, cause=exc)
        except httpx.TransportError as exc:
            raise TransportError("Transport failure", url=url, cause=exc)

        return TransportResponse(
            status=response.status_code,
            headers=dict(response.headers),
            body=response.content,
        )
