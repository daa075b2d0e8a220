"""Request and response value types used by the client pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, TypeVar, Union

from pydantic import TypeAdapter

T = TypeVar("T")

HeaderValue = Union[str, list[str]]
Headers = Mapping[str, HeaderValue]

CREDENTIALS = ("omit", "include", "same-origin")
MODES = ("cors", "navigate", "no-cors", "same-origin")


def merge_headers(target: dict[str, HeaderValue], overlay: Headers) -> dict[str, HeaderValue]:
    """Overlay ``overlay`` onto ``target`` in place; header names match case-insensitively."""
    for key, value in overlay.items():
        wanted = str(key).lower()
        for existing in [k for k in target if str(k).lower() == wanted and k != key]:
            del target[existing]
        target[key] = value
    return target


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"
    HEAD = "HEAD"


@dataclass(frozen=True)
class ClientRequest:
    """A single call as described by the caller.

    ``data``, ``query`` and ``headers`` may each be given directly or as a
    zero-argument callable; callables are invoked once per call.
    ``path_params`` fill ``{name}`` placeholders in ``url``.
    """

    url: str
    method: HttpMethod | str = HttpMethod.GET
    data: Any = None
    query: Mapping[str, Any] | Callable[[], Mapping[str, Any]] | None = None
    headers: Headers | Callable[[], Headers] | None = None
    path_params: Mapping[str, Any] | None = None
    resource_name: str | None = None

    @property
    def method_name(self) -> str:
        if isinstance(self.method, HttpMethod):
            return self.method.value
        return str(self.method).upper()


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything the transport needs besides the URL."""

    method: str
    headers: dict[str, HeaderValue] = field(default_factory=dict)
    credentials: str | None = None
    mode: str | None = None
    body: Any = None


@dataclass(frozen=True)
class InterceptedRequest:
    url: str
    request: RequestDescriptor


@dataclass(frozen=True)
class RequestInterceptorResult:
    proceed: bool = True
    request: RequestDescriptor | None = None


@dataclass(frozen=True)
class ClientResponse:
    http_status: int
    payload: Any
    response_headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if not isinstance(self.response_headers, MappingProxyType):
            object.__setattr__(self, "response_headers", MappingProxyType(dict(self.response_headers)))

    @property
    def ok(self) -> bool:
        return 200 <= self.http_status < 300

    def parse_payload(self, model: type[T]) -> T:
        """Validate the payload into ``model`` (a pydantic model or any annotated type)."""
        return TypeAdapter(model).validate_python(self.payload)
