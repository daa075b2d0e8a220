"""Structured diagnostics emitted while a request is being built."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from .exceptions import ConfigurationWarning

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    code: str
    message: str
    value: Any = None
    category: type[Warning] = ConfigurationWarning


class DiagnosticsSink(Protocol):
    def emit(self, diagnostic: Diagnostic) -> None:
        ...


class LoggingDiagnostics:
    """Default sink: every diagnostic becomes a WARNING log record."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logger

    def emit(self, diagnostic: Diagnostic) -> None:
        self._logger.warning(
            "%s: %s",
            diagnostic.category.__name__,
            diagnostic.message,
            extra={"diagnostic_code": diagnostic.code},
        )


class CollectingDiagnostics:
    """Keeps diagnostics in memory, for callers that inspect them after a call."""

    def __init__(self) -> None:
        self.records: list[Diagnostic] = []

    def emit(self, diagnostic: Diagnostic) -> None:
        self.records.append(diagnostic)

    @property
    def codes(self) -> list[str]:
        return [record.code for record in self.records]

    def clear(self) -> None:
        self.records.clear()
