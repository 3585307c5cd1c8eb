"""
Diagnostic sink for conversion warnings and errors.

The converter never logs directly: it reports through a sink injected
into the generation run, so callers (and tests) can inspect what was
reported.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class DiagnosticLevel(str, Enum):
    """Severity of a diagnostic."""

    WARNING = "warning"
    ERROR = "error"


@dataclass
class Diagnostic:
    """A single diagnostic record.

    Attributes:
        level: warning (non-fatal) or error (fatal)
        message: Human readable description
        schema_context: Schema that gives context (e.g. the parent schema of
            an untyped property), if any
    """

    level: DiagnosticLevel = DiagnosticLevel.WARNING
    message: str = ""
    schema_context: Any = None

    def format(self) -> str:
        """Format the diagnostic with its schema context."""
        if self.schema_context is None:
            return self.message
        context = json.dumps(self.schema_context, default=str)
        return f"{self.message}\n\n{context}\n"


class DiagnosticSink:
    """Collects diagnostics emitted during a generation run."""

    def __init__(self):
        self.records: list[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> None:
        """Record a diagnostic."""
        self.records.append(diagnostic)

    def warning(self, message: str, schema_context: Any = None) -> None:
        self.report(Diagnostic(DiagnosticLevel.WARNING, message, schema_context))

    def error(self, message: str, schema_context: Any = None) -> None:
        self.report(Diagnostic(DiagnosticLevel.ERROR, message, schema_context))

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.records if d.level == DiagnosticLevel.WARNING]

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.records if d.level == DiagnosticLevel.ERROR]


class LoggingDiagnosticSink(DiagnosticSink):
    """Diagnostic sink that also mirrors every record to the module logger."""

    def report(self, diagnostic: Diagnostic) -> None:
        super().report(diagnostic)
        if diagnostic.level == DiagnosticLevel.ERROR:
            logger.error(diagnostic.format())
        else:
            logger.warning(diagnostic.format())
