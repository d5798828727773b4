"""Application exception classes."""

from __future__ import annotations


class ConfigError(Exception):
    """Raised when environment configuration is invalid or incomplete."""


class JournalError(Exception):
    """Raised when writing to journal files fails."""


class ConnectorError(Exception):
    """Base class for failures raised while building or running a query."""


class ConfigurationError(ConnectorError):
    """Raised when query descriptors are combined or valued incorrectly."""


class TransportError(ConnectorError):
    """Raised when the HTTP transport fails before a response is available."""


class HttpError(ConnectorError):
    """Raised for non-2xx responses, keeping the raw body for diagnostics."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        status_message: str,
        body: str,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.status_message = status_message
        self.body = body


class DecodeError(ConnectorError):
    """Raised when a CSV response body cannot be decoded into a table."""

    def __init__(
        self,
        message: str,
        *,
        row_index: int | None = None,
        observed: int | None = None,
        expected: int | None = None,
    ) -> None:
        super().__init__(message)
        self.row_index = row_index
        self.observed = observed
        self.expected = expected
