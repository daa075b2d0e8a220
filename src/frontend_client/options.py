"""Cross-request options for the frontend client."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from .models import HeaderValue, merge_headers


@dataclass(frozen=True)
class ResolvedOptions:
    """Read-only view of :class:`ClientOptions` taken when a call starts."""

    headers: Mapping[str, HeaderValue] = field(default_factory=lambda: MappingProxyType({}))
    credentials: Any = None
    mode: Any = None
    auth_provider: Any = None
    request_interceptor: Any = None
    response_interceptor: Any = None
    body_parser: Any = None
    ignored_headers: tuple[Any, ...] = ()


class ClientOptions:
    """Defaults shared by every call made through one client.

    This is a plain mutable builder: each setter stores its value and returns
    the same instance so calls can be chained. Values are checked when a
    request uses them, not when they are set. Configure the options before
    issuing requests; each call works from :meth:`snapshot`, so changes made
    while a call is in flight only affect later calls.
    """

    def __init__(self) -> None:
        self._headers: dict[str, HeaderValue] = {}
        self._ignored_headers: list[Any] = []
        self._credentials: Any = None
        self._mode: Any = None
        self._auth_provider: Any = None
        self._request_interceptor: Any = None
        self._response_interceptor: Any = None
        self._body_parser: Any = None

    def headers(self, headers: Mapping[str, HeaderValue] | None) -> "ClientOptions":
        """Merge ``headers`` into the existing defaults; ``None`` leaves them as they are.

        Anything that is not a mapping is kept aside and reported when a
        request is built.
        """
        if isinstance(headers, Mapping):
            merge_headers(self._headers, headers)
        elif headers:
            self._ignored_headers.append(headers)
        return self

    def credentials(self, credentials: Any) -> "ClientOptions":
        self._credentials = credentials
        return self

    def mode(self, mode: Any) -> "ClientOptions":
        self._mode = mode
        return self

    def auth_provider(self, auth_provider: Any) -> "ClientOptions":
        self._auth_provider = auth_provider
        return self

    def request_interceptor(self, interceptor: Any) -> "ClientOptions":
        self._request_interceptor = interceptor
        return self

    def response_interceptor(self, interceptor: Any) -> "ClientOptions":
        self._response_interceptor = interceptor
        return self

    def body_parser(self, body_parser: Any) -> "ClientOptions":
        self._body_parser = body_parser
        return self

    def snapshot(self) -> ResolvedOptions:
        return ResolvedOptions(
            headers=MappingProxyType(dict(self._headers)),
            credentials=self._credentials,
            mode=self._mode,
            auth_provider=self._auth_provider,
            request_interceptor=self._request_interceptor,
            response_interceptor=self._response_interceptor,
            body_parser=self._body_parser,
            ignored_headers=tuple(self._ignored_headers),
        )

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"ClientOptions({self.snapshot()!r})"


def init_client_options() -> ClientOptions:
    return ClientOptions()
