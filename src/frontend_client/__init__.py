"""Configurable HTTP request front-end with query serialization and interceptors."""

from .client import FrontendClient, init_frontend_client
from .diagnostics import CollectingDiagnostics, Diagnostic, DiagnosticsSink, LoggingDiagnostics
from .exceptions import (
    ConfigurationWarning,
    FrontendClientError,
    FrontendClientValidationError,
    InterceptorRejection,
    TransportError,
    TransportNetworkError,
    TransportTimeoutError,
)
from .models import (
    ClientRequest,
    ClientResponse,
    HttpMethod,
    InterceptedRequest,
    RequestDescriptor,
    RequestInterceptorResult,
)
from .options import ClientOptions, ResolvedOptions, init_client_options
from .pipeline import execute
from .query import QueryDefinition, exploded_param_suffix, serialize_query
from .transport import AuthProvider, HttpxTransport, Transport, TransportResponse

__all__ = [
    "AuthProvider",
    "ClientOptions",
    "ClientRequest",
    "ClientResponse",
    "CollectingDiagnostics",
    "ConfigurationWarning",
    "Diagnostic",
    "DiagnosticsSink",
    "FrontendClient",
    "FrontendClientError",
    "FrontendClientValidationError",
    "HttpMethod",
    "HttpxTransport",
    "InterceptedRequest",
    "InterceptorRejection",
    "LoggingDiagnostics",
    "QueryDefinition",
    "RequestDescriptor",
    "RequestInterceptorResult",
    "ResolvedOptions",
    "Transport",
    "TransportError",
    "TransportNetworkError",
    "TransportResponse",
    "TransportTimeoutError",
    "execute",
    "exploded_param_suffix",
    "init_client_options",
    "init_frontend_client",
    "serialize_query",
]
