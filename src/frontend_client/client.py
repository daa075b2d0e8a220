"""Asynchronous frontend client and its factory."""

from __future__ import annotations

import os
from typing import Any, Mapping

from .diagnostics import DiagnosticsSink, LoggingDiagnostics
from .exceptions import FrontendClientValidationError
from .models import ClientRequest, ClientResponse
from .options import ClientOptions
from .pipeline import execute
from .security import validate_base_url
from .transport import HttpxTransport, Transport


def _coerce_client_request(request: ClientRequest | Mapping[str, Any]) -> ClientRequest:
    if isinstance(request, ClientRequest):
        return request
    if isinstance(request, Mapping):
        data = dict(request)
        # Accept the camelCase spellings used by JavaScript callers.
        if "pathParams" in data:
            data.setdefault("path_params", data.pop("pathParams"))
        if "resourceName" in data:
            data.setdefault("resource_name", data.pop("resourceName"))
        try:
            return ClientRequest(**data)
        except TypeError as exc:
            raise FrontendClientValidationError(f"invalid client request: {exc}", cause=exc)
    raise FrontendClientValidationError("request must be a ClientRequest or a mapping")


class FrontendClient:
    """Builds requests from :class:`ClientRequest` values and sends them over a transport."""

    default_timeout = 30.0

    def __init__(
        self,
        *,
        base_url: str | None = None,
        options: ClientOptions | None = None,
        transport: Transport | None = None,
        diagnostics: DiagnosticsSink | None = None,
        allow_http: bool = False,
        timeout: float = default_timeout,
        base_url_env_var: str = "FRONTEND_CLIENT_BASE_URL",
    ) -> None:
        resolved_base_url = base_url or os.getenv(base_url_env_var)
        if not resolved_base_url:
            raise ValueError(f"base_url is required (or set {base_url_env_var})")
        self.base_url = resolved_base_url.rstrip("/")
        validate_base_url(self.base_url, allow_http=allow_http)
        self.options = options if options is not None else ClientOptions()
        self.diagnostics = diagnostics or LoggingDiagnostics()
        self._owns_transport = transport is None
        self._transport = transport or HttpxTransport(timeout=timeout)

    async def __aenter__(self) -> "FrontendClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            await self._transport.aclose()

    async def request(self, client_request: ClientRequest | Mapping[str, Any]) -> ClientResponse:
        return await execute(
            _coerce_client_request(client_request),
            self.options,
            base_url=self.base_url,
            transport=self._transport,
            diagnostics=self.diagnostics,
        )


def init_frontend_client(
    base_url: str | None = None,
    options: ClientOptions | None = None,
    *,
    transport: Transport | None = None,
    diagnostics: DiagnosticsSink | None = None,
    allow_http: bool = False,
    timeout: float = FrontendClient.default_timeout,
) -> FrontendClient:
    return FrontendClient(
        base_url=base_url,
        options=options,
        transport=transport,
        diagnostics=diagnostics,
        allow_http=allow_http,
        timeout=timeout,
    )
