"""Error types and structured error reporting for upstream genomics APIs."""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


logger = logging.getLogger('genome_explorer.error')


class ErrorType(Enum):
    """Types of errors that can occur while talking to upstream services."""
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    MALFORMED_RESPONSE = "malformed_response"
    MISSING_IDENTIFIER = "missing_identifier"
    NOT_FOUND = "not_found"
    UPSTREAM_ERROR = "upstream_error"
    UNKNOWN = "unknown"


class GenomeExplorerError(Exception):
    """Base class for all errors raised by genome_explorer."""

    error_type = ErrorType.UNKNOWN

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class UpstreamUnavailable(GenomeExplorerError):
    """The upstream service could not be reached or answered with a non-success status."""

    error_type = ErrorType.UPSTREAM_UNAVAILABLE


class MalformedResponse(GenomeExplorerError):
    """The upstream response did not have the expected shape."""

    error_type = ErrorType.MALFORMED_RESPONSE


class MissingIdentifier(GenomeExplorerError):
    """A required identifier was empty or absent."""

    error_type = ErrorType.MISSING_IDENTIFIER


@dataclass(frozen=True)
class ErrorContext:
    """Context information for a best-effort failure."""
    error_type: ErrorType
    message: str
    operation: str
    item_id: Optional[str] = None
    api_name: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)

    @classmethod
    def from_exception(cls, exc: Exception, operation: str,
                       item_id: Optional[str] = None,
                       api_name: Optional[str] = None) -> 'ErrorContext':
        """Build a context from an exception, keeping typed details when available."""
        if isinstance(exc, GenomeExplorerError):
            return cls(
                error_type=exc.error_type,
                message=exc.message,
                operation=operation,
                item_id=item_id,
                api_name=api_name,
                details=dict(exc.details),
            )
        return cls(
            error_type=ErrorType.UNKNOWN,
            message=f"{type(exc).__name__}: {exc}",
            operation=operation,
            item_id=item_id,
            api_name=api_name,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for JSON output."""
        return {
            'error_type': self.error_type.value,
            'message': self.message,
            'operation': self.operation,
            'item_id': self.item_id,
            'api_name': self.api_name,
            'details': self.details,
            'timestamp': self.timestamp,
        }


def log_error_context(context: ErrorContext, level: int = logging.WARNING) -> None:
    """Log a best-effort failure with its structured context."""
    parts = [f"[{context.error_type.value}] {context.operation}"]
    if context.item_id:
        parts.append(f"item={context.item_id}")
    if context.api_name:
        parts.append(f"api={context.api_name}")
    parts.append(context.message)
    logger.log(level, " - ".join(parts), extra={'error_context': context.to_dict()})
