"""Typed client for the Meteomatics time-series API."""

from .client import AsyncMeteomaticsClient, MeteomaticsClient
from .components import (
    Coordinates,
    DatePeriod,
    Locations,
    Opt,
    Optionals,
    Parameter,
    Parameters,
    TimePeriod,
    ValidDateTime,
    fixed_offset,
    local,
    parse_instant,
    utc,
)
from .exceptions import (
    ConfigurationError,
    ConnectorError,
    DecodeError,
    HttpError,
    TransportError,
)
from .response import QueryResult, ResponseRecord, ResponseTable

__all__ = [
    "AsyncMeteomaticsClient",
    "ConfigurationError",
    "ConnectorError",
    "Coordinates",
    "DatePeriod",
    "DecodeError",
    "HttpError",
    "Locations",
    "MeteomaticsClient",
    "Opt",
    "Optionals",
    "Parameter",
    "Parameters",
    "QueryResult",
    "ResponseRecord",
    "ResponseTable",
    "TimePeriod",
    "TransportError",
    "ValidDateTime",
    "fixed_offset",
    "local",
    "parse_instant",
    "utc",
]
