"""Time specification for time-series queries.

The provider packs the whole temporal scope of a query into one path segment.
Two shapes share that segment and are told apart only by the presence of an
end instant::

    <start>[<period>][:<step>]            single instant with repetition
    <start>--<end>[:<period>|:<step>]     range, optionally stepped

Instants render as RFC 3339 text, periods as ISO 8601 duration tokens
(``P1D``, ``PT1H``).
"""

from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..exceptions import ConfigurationError

DateUnit = Literal["years", "months", "days"]
TimeUnit = Literal["hours", "minutes", "seconds"]

_DATE_DESIGNATORS: dict[str, str] = {"years": "Y", "months": "M", "days": "D"}
_TIME_DESIGNATORS: dict[str, str] = {"hours": "H", "minutes": "M", "seconds": "S"}

_DATE_PERIOD_RE = re.compile(r"^P(-?\d+)([YMD])$")
_TIME_PERIOD_RE = re.compile(r"^PT(-?\d+)([HMS])$")


class UtcInstant(BaseModel):
    """Instant anchored to UTC. Naive input is read as UTC."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["utc"] = "utc"
    value: datetime

    @field_validator("value")
    @classmethod
    def to_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def __str__(self) -> str:
        return format_instant(self)


class LocalInstant(BaseModel):
    """Instant anchored to the local system timezone. Naive input is read as local."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["local"] = "local"
    value: datetime

    @field_validator("value")
    @classmethod
    def to_local(cls, value: datetime) -> datetime:
        return value.astimezone()

    def __str__(self) -> str:
        return format_instant(self)


class FixedOffsetInstant(BaseModel):
    """Instant carrying an explicit UTC offset, kept as given."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["fixed_offset"] = "fixed_offset"
    value: datetime

    @field_validator("value")
    @classmethod
    def require_offset(cls, value: datetime) -> datetime:
        if value.tzinfo is None or value.utcoffset() is None:
            raise ConfigurationError(
                f"Fixed-offset instant requires an offset-aware datetime, got {value!r}."
            )
        return value

    def __str__(self) -> str:
        return format_instant(self)


Instant = Annotated[
    UtcInstant | LocalInstant | FixedOffsetInstant,
    Field(discriminator="kind"),
]


def format_instant(instant: UtcInstant | LocalInstant | FixedOffsetInstant) -> str:
    """Render any instant as RFC 3339 text with its own offset.

    RFC 3339 offsets stop at minutes, so sub-minute offsets (historical local
    mean time zones) are truncated.
    """
    value = instant.value
    offset = value.utcoffset() or timedelta(0)
    sign = "-" if offset < timedelta(0) else "+"
    hours, minutes = divmod(int(abs(offset).total_seconds()) // 60, 60)
    return f"{value.replace(tzinfo=None).isoformat()}{sign}{hours:02d}:{minutes:02d}"


def utc(value: datetime) -> UtcInstant:
    return UtcInstant(value=value)


def local(value: datetime) -> LocalInstant:
    return LocalInstant(value=value)


def fixed_offset(value: datetime) -> FixedOffsetInstant:
    return FixedOffsetInstant(value=value)


def now_utc() -> UtcInstant:
    return UtcInstant(value=datetime.now(UTC))


def instant_from_datetime(value: datetime) -> UtcInstant | LocalInstant | FixedOffsetInstant:
    """Pick the disposition implied by a datetime's tzinfo.

    Naive values are local, zero-offset values are UTC, anything else keeps
    its fixed offset.
    """
    if value.tzinfo is None or value.utcoffset() is None:
        return LocalInstant(value=value)
    if value.utcoffset() == timedelta(0):
        return UtcInstant(value=value)
    return FixedOffsetInstant(value=value)


def parse_instant(text: str) -> UtcInstant | LocalInstant | FixedOffsetInstant:
    """Parse ISO 8601 / RFC 3339 text into an instant."""
    candidate = text.strip()
    if candidate.endswith(("Z", "z")):
        candidate = candidate[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid instant {text!r}; expected ISO 8601 text.") from exc
    return instant_from_datetime(parsed)


class DatePeriod(BaseModel):
    """Calendar period rendered as ``P<n>Y``, ``P<n>M`` or ``P<n>D``."""

    model_config = ConfigDict(frozen=True)

    amount: int
    unit: DateUnit

    @classmethod
    def years(cls, amount: int) -> DatePeriod:
        return cls(amount=amount, unit="years")

    @classmethod
    def months(cls, amount: int) -> DatePeriod:
        return cls(amount=amount, unit="months")

    @classmethod
    def days(cls, amount: int) -> DatePeriod:
        return cls(amount=amount, unit="days")

    def __str__(self) -> str:
        return f"P{self.amount}{_DATE_DESIGNATORS[self.unit]}"


class TimePeriod(BaseModel):
    """Clock period rendered as ``PT<n>H``, ``PT<n>M`` or ``PT<n>S``."""

    model_config = ConfigDict(frozen=True)

    amount: int
    unit: TimeUnit

    @classmethod
    def hours(cls, amount: int) -> TimePeriod:
        return cls(amount=amount, unit="hours")

    @classmethod
    def minutes(cls, amount: int) -> TimePeriod:
        return cls(amount=amount, unit="minutes")

    @classmethod
    def seconds(cls, amount: int) -> TimePeriod:
        return cls(amount=amount, unit="seconds")

    def __str__(self) -> str:
        return f"PT{self.amount}{_TIME_DESIGNATORS[self.unit]}"


def parse_date_period(text: str) -> DatePeriod:
    """Parse a ``P<n>Y|M|D`` token."""
    match = _DATE_PERIOD_RE.match(text.strip().upper())
    if match is None:
        raise ConfigurationError(f"Invalid date period {text!r}; expected e.g. 'P1D'.")
    amount, designator = match.groups()
    unit = next(name for name, code in _DATE_DESIGNATORS.items() if code == designator)
    return DatePeriod(amount=int(amount), unit=unit)


def parse_time_period(text: str) -> TimePeriod:
    """Parse a ``PT<n>H|M|S`` token."""
    match = _TIME_PERIOD_RE.match(text.strip().upper())
    if match is None:
        raise ConfigurationError(f"Invalid time step {text!r}; expected e.g. 'PT1H'.")
    amount, designator = match.groups()
    unit = next(name for name, code in _TIME_DESIGNATORS.items() if code == designator)
    return TimePeriod(amount=int(amount), unit=unit)


class ValidDateTime(BaseModel):
    """Temporal scope of a query.

    Plain ``datetime`` values are accepted for ``start``, ``end`` and
    ``time_list`` and mapped through :func:`instant_from_datetime`.
    ``time_list`` is carried for callers but is not part of the rendered
    segment.
    """

    model_config = ConfigDict(frozen=True)

    start: Instant
    date_period: DatePeriod | None = None
    end: Instant | None = None
    time_step: TimePeriod | None = None
    time_list: tuple[Instant, ...] | None = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def coerce_datetime(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return instant_from_datetime(value)
        return value

    @field_validator("time_list", mode="before")
    @classmethod
    def coerce_time_list(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return tuple(
                instant_from_datetime(item) if isinstance(item, datetime) else item
                for item in value
            )
        return value

    @model_validator(mode="after")
    def validate_range_qualifiers(self) -> ValidDateTime:
        """Reject a range qualified by both a date period and a time step."""
        _, both_present = self._suffix()
        if self.end is not None and both_present:
            raise ConfigurationError("Cannot use period date and time step simultaneously.")
        return self

    def _suffix(self) -> tuple[str, bool]:
        suffix = ""
        both_present = False
        if self.date_period is not None:
            suffix = str(self.date_period)
        if self.time_step is not None:
            if suffix:
                suffix += ":"
                both_present = True
            suffix += str(self.time_step)
        return suffix, both_present

    def format(self) -> str:
        """Render the time segment of the request path."""
        start_text = format_instant(self.start)
        suffix, both_present = self._suffix()
        if self.end is None:
            return start_text + suffix

        if both_present:
            raise ConfigurationError("Cannot use period date and time step simultaneously.")
        end_text = format_instant(self.end)
        if suffix:
            end_text = f"{end_text}:{suffix}"
        return f"{start_text}--{end_text}"

    def __str__(self) -> str:
        return self.format()
