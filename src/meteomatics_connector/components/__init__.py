"""Typed building blocks of a time-series request path."""

from .format import CSV, ResponseFormat
from .locations import Coordinates, Locations
from .optionals import Opt, Optionals
from .parameters import Parameter, Parameters
from .valid_date_time import (
    DatePeriod,
    FixedOffsetInstant,
    Instant,
    LocalInstant,
    TimePeriod,
    UtcInstant,
    ValidDateTime,
    fixed_offset,
    format_instant,
    instant_from_datetime,
    local,
    now_utc,
    parse_date_period,
    parse_instant,
    parse_time_period,
    utc,
)

__all__ = [
    "CSV",
    "Coordinates",
    "DatePeriod",
    "FixedOffsetInstant",
    "Instant",
    "LocalInstant",
    "Locations",
    "Opt",
    "Optionals",
    "Parameter",
    "Parameters",
    "ResponseFormat",
    "TimePeriod",
    "UtcInstant",
    "ValidDateTime",
    "fixed_offset",
    "format_instant",
    "instant_from_datetime",
    "local",
    "now_utc",
    "parse_date_period",
    "parse_instant",
    "parse_time_period",
    "utc",
]
