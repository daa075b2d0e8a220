"""The request pipeline: from a ``ClientRequest`` to a ``ClientResponse``.

:func:`execute` runs the same linear sequence for every call:

1. merge option headers, auth-provider headers and per-call headers
2. drop invalid ``credentials``/``mode`` values with a diagnostic
3. resolve the body
4. negotiate ``Content-Type`` and encode JSON bodies
5. default ``Accept`` to JSON
6. build the target URL (path params and query string)
7. run the request interceptor, which may veto or replace the descriptor
8. dispatch through the transport
9. run the response interceptor, or parse the body by content type
10. assemble the ``ClientResponse``

Nothing is kept between calls. Options are read from a snapshot taken at
the start of the call.
"""

from __future__ import annotations

import inspect
import json
import logging
from datetime import date, datetime
from typing import Any, Mapping

from pydantic import BaseModel

from .diagnostics import Diagnostic, DiagnosticsSink, LoggingDiagnostics
from .exceptions import InterceptorRejection
from .models import (
    CREDENTIALS,
    MODES,
    ClientRequest,
    ClientResponse,
    HeaderValue,
    InterceptedRequest,
    RequestDescriptor,
    RequestInterceptorResult,
    merge_headers,
)
from .options import ClientOptions, ResolvedOptions
from .query import encode_component, serialize_query
from .security import sanitize_headers
from .transport import Transport
from .validators import is_function, is_object

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def find_header(headers: Mapping[str, Any], name: str) -> str | None:
    """Return the key under which ``name`` is stored, compared case-insensitively."""
    wanted = name.lower()
    for key in headers:
        if str(key).lower() == wanted:
            return key
    return None


def header_value(headers: Mapping[str, Any], name: str) -> str | None:
    key = find_header(headers, name)
    if key is None:
        return None
    value = headers[key]
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


def is_json_content_type(content_type: str | None) -> bool:
    return content_type is not None and JSON_CONTENT_TYPE in content_type.lower()


def _is_structured(body: Any) -> bool:
    return is_object(body) or isinstance(body, BaseModel)


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _resolve(value: Any) -> Any:
    return value() if is_function(value) else value


def _resolve_options(options: ClientOptions | ResolvedOptions | None) -> ResolvedOptions:
    if options is None:
        return ResolvedOptions()
    if isinstance(options, ClientOptions):
        return options.snapshot()
    return options


async def _auth_headers(provider: Any, diagnostics: DiagnosticsSink) -> Mapping[str, str]:
    if provider is None:
        return {}
    get_auth_headers = getattr(provider, "get_auth_headers", None)
    if not is_function(get_auth_headers):
        diagnostics.emit(
            Diagnostic(
                code="auth_provider_invalid",
                message=f"auth provider {provider!r} has no callable get_auth_headers",
                value=provider,
            )
        )
        return {}
    headers = _checked_headers(await _maybe_await(get_auth_headers()), "auth_provider", diagnostics)
    logger.debug("auth provider %s contributed %d header(s)", getattr(provider, "name", "?"), len(headers))
    return headers


def _checked_enum(value: Any, allowed: tuple[str, ...], field: str, diagnostics: DiagnosticsSink) -> str | None:
    if not value:
        return None
    if value in allowed:
        return value
    diagnostics.emit(
        Diagnostic(
            code=f"invalid_{field}",
            message=f'"{value}" is not a proper {field} value. It should be one of: {list(allowed)}',
            value=value,
        )
    )
    return None


def _checked_headers(value: Any, source: str, diagnostics: DiagnosticsSink) -> Mapping[str, HeaderValue]:
    if not value:
        return {}
    if is_object(value):
        return value
    diagnostics.emit(
        Diagnostic(
            code=f"{source}_headers_invalid",
            message=f"{source} headers {value!r} are not a mapping and were not applied",
            value=value,
        )
    )
    return {}


def _coerce_descriptor(value: Any, current: RequestDescriptor) -> RequestDescriptor:
    if isinstance(value, RequestDescriptor):
        return value
    data = dict(value)
    return RequestDescriptor(
        method=str(data.get("method") or current.method).upper(),
        headers=dict(data.get("headers") or {}),
        credentials=data.get("credentials"),
        mode=data.get("mode"),
        body=data.get("body"),
    )


def _coerce_interceptor_result(
    result: Any,
    current: RequestDescriptor,
    diagnostics: DiagnosticsSink,
) -> RequestInterceptorResult | None:
    """Accept a ``RequestInterceptorResult`` or a ``{"proceed", "request"}`` mapping."""
    if result is None or isinstance(result, RequestInterceptorResult):
        return result
    if is_object(result):
        replacement = result.get("request")
        if replacement is None or isinstance(replacement, RequestDescriptor) or is_object(replacement):
            return RequestInterceptorResult(
                proceed=bool(result.get("proceed", True)),
                request=None if replacement is None else _coerce_descriptor(replacement, current),
            )
    diagnostics.emit(
        Diagnostic(
            code="request_interceptor_result_invalid",
            message=f"request interceptor returned {result!r}; proceeding with the request unchanged",
            value=result,
        )
    )
    return None


def _checked_callable(value: Any, name: str, diagnostics: DiagnosticsSink) -> Any:
    if value is None:
        return None
    if is_function(value):
        return value
    diagnostics.emit(
        Diagnostic(
            code=f"{name}_not_callable",
            message=f'"{name} {value!r}" is not a function',
            value=value,
        )
    )
    return None


def encode_body(
    headers: dict[str, HeaderValue],
    body: Any,
    body_parser: Any,
) -> Any:
    """Negotiate ``Content-Type`` in place and return the wire body."""
    if body is None:
        return None
    structured = _is_structured(body)
    if find_header(headers, "content-type") is None and structured:
        headers["Content-Type"] = JSON_CONTENT_TYPE
    if not (structured and is_json_content_type(header_value(headers, "content-type"))):
        return body

    payload = body.model_dump(mode="json") if isinstance(body, BaseModel) else dict(body)
    if body_parser is not None:
        return body_parser(payload)
    return json.dumps(payload, default=_json_default)


def build_url(base_url: str, path: str, path_params: Mapping[str, Any] | None = None) -> str:
    for name, value in (path_params or {}).items():
        path = path.replace(f"{{{name}}}", encode_component(value))
    return f"{base_url}{path}"


async def execute(
    request: ClientRequest,
    options: ClientOptions | ResolvedOptions | None,
    *,
    base_url: str,
    transport: Transport,
    diagnostics: DiagnosticsSink | None = None,
) -> ClientResponse:
    sink = diagnostics or LoggingDiagnostics()
    resolved = _resolve_options(options)
    label = request.resource_name or request.url

    headers: dict[str, HeaderValue] = dict(resolved.headers)
    for ignored in resolved.ignored_headers:
        _checked_headers(ignored, "option", sink)
    merge_headers(headers, await _auth_headers(resolved.auth_provider, sink))
    merge_headers(headers, _checked_headers(_resolve(request.headers), "request", sink))

    credentials = _checked_enum(resolved.credentials, CREDENTIALS, "credentials", sink)
    mode = _checked_enum(resolved.mode, MODES, "mode", sink)

    body_parser = _checked_callable(resolved.body_parser, "body_parser", sink)
    body = encode_body(headers, _resolve(request.data), body_parser)

    if find_header(headers, "accept") is None:
        headers["Accept"] = JSON_CONTENT_TYPE

    url = build_url(base_url, request.url, request.path_params) + serialize_query(request.query)
    descriptor = RequestDescriptor(
        method=request.method_name,
        headers=headers,
        credentials=credentials,
        mode=mode,
        body=body,
    )

    request_interceptor = _checked_callable(resolved.request_interceptor, "request_interceptor", sink)
    if request_interceptor is not None:
        result = _coerce_interceptor_result(
            await _maybe_await(request_interceptor(InterceptedRequest(url=url, request=descriptor))),
            descriptor,
            sink,
        )
        if result is not None:
            if not result.proceed:
                logger.info("request interceptor rejected %s %s", descriptor.method, url)
                raise InterceptorRejection(f"Request to {label} rejected by request interceptor", url=url)
            if result.request is not None:
                descriptor = result.request

    logger.debug(
        "dispatching %s %s headers=%s",
        descriptor.method,
        url,
        sanitize_headers(descriptor.headers),
    )
    response = await transport.dispatch(url, descriptor)

    response_interceptor = _checked_callable(resolved.response_interceptor, "response_interceptor", sink)
    if response_interceptor is not None:
        payload = await _maybe_await(response_interceptor(response))
    elif is_json_content_type(header_value(response.headers, "content-type")):
        payload = await _maybe_await(response.json())
    else:
        payload = await _maybe_await(response.blob())

    logger.debug("%s responded with %s", label, response.status)
    return ClientResponse(
        http_status=response.status,
        payload=payload,
        response_headers=dict(response.headers),
    )
