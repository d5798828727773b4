"""Tests for time specification rendering and validation."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from meteomatics_connector.components.valid_date_time import (
    DatePeriod,
    FixedOffsetInstant,
    LocalInstant,
    TimePeriod,
    UtcInstant,
    ValidDateTime,
    fixed_offset,
    format_instant,
    local,
    parse_date_period,
    parse_instant,
    parse_time_period,
    utc,
)
from meteomatics_connector.exceptions import ConfigurationError

START = utc(datetime(2020, 1, 1, 0, 0, tzinfo=UTC))
END = utc(datetime(2020, 1, 2, 0, 0, tzinfo=UTC))
START_TEXT = "2020-01-01T00:00:00+00:00"
END_TEXT = "2020-01-02T00:00:00+00:00"


def test_start_only_renders_start() -> None:
    vdt = ValidDateTime(start=START)
    assert vdt.format() == START_TEXT
    assert vdt.end is None
    assert vdt.date_period is None
    assert vdt.time_step is None
    assert vdt.time_list is None


@pytest.mark.parametrize(
    ("date_period", "time_step", "suffix"),
    [
        (DatePeriod.days(1), None, "P1D"),
        (None, TimePeriod.hours(1), "PT1H"),
        (DatePeriod.days(1), TimePeriod.hours(1), "P1D:PT1H"),
    ],
)
def test_start_without_end_appends_suffix(
    date_period: DatePeriod | None, time_step: TimePeriod | None, suffix: str
) -> None:
    vdt = ValidDateTime(start=START, date_period=date_period, time_step=time_step)
    assert vdt.format() == START_TEXT + suffix


def test_range_without_qualifier() -> None:
    vdt = ValidDateTime(start=START, end=END)
    assert vdt.format() == f"{START_TEXT}--{END_TEXT}"


def test_range_with_time_step() -> None:
    vdt = ValidDateTime(start=START, end=END, time_step=TimePeriod.hours(1))
    assert vdt.format() == f"{START_TEXT}--{END_TEXT}:PT1H"


def test_range_with_date_period() -> None:
    vdt = ValidDateTime(start=START, end=END, date_period=DatePeriod.days(1))
    assert vdt.format() == f"{START_TEXT}--{END_TEXT}:P1D"


def test_range_with_period_and_step_fails_at_construction() -> None:
    with pytest.raises(ConfigurationError, match="simultaneously"):
        ValidDateTime(
            start=START,
            end=END,
            date_period=DatePeriod.days(1),
            time_step=TimePeriod.hours(1),
        )


def test_time_list_is_stored_but_not_rendered() -> None:
    vdt = ValidDateTime(start=START, time_list=[START, END])
    assert vdt.time_list == (START, END)
    assert vdt.format() == START_TEXT


def test_time_list_accepts_plain_datetimes() -> None:
    first = datetime(2020, 1, 1, tzinfo=UTC)
    vdt = ValidDateTime(start=first, time_list=[first])
    assert vdt.time_list is not None
    assert isinstance(vdt.time_list[0], UtcInstant)


def test_specification_is_immutable() -> None:
    vdt = ValidDateTime(start=START)
    with pytest.raises(ValidationError):
        vdt.end = END  # type: ignore[misc]


@pytest.mark.parametrize(
    ("period", "expected"),
    [
        (DatePeriod.years(2), "P2Y"),
        (DatePeriod.months(3), "P3M"),
        (DatePeriod.days(1), "P1D"),
        (DatePeriod.days(-1), "P-1D"),
        (TimePeriod.hours(1), "PT1H"),
        (TimePeriod.minutes(15), "PT15M"),
        (TimePeriod.seconds(30), "PT30S"),
    ],
)
def test_period_tokens(period: DatePeriod | TimePeriod, expected: str) -> None:
    assert str(period) == expected


def test_parse_period_tokens() -> None:
    assert parse_date_period("P1D") == DatePeriod.days(1)
    assert parse_date_period("p6m") == DatePeriod.months(6)
    assert parse_time_period("PT-3H") == TimePeriod.hours(-3)
    assert parse_time_period("PT10M") == TimePeriod.minutes(10)


@pytest.mark.parametrize("token", ["PT1H", "1D", "P1W", ""])
def test_parse_date_period_rejects_bad_tokens(token: str) -> None:
    with pytest.raises(ConfigurationError, match="Invalid date period"):
        parse_date_period(token)


@pytest.mark.parametrize("token", ["P1D", "T1H", "PT1D"])
def test_parse_time_period_rejects_bad_tokens(token: str) -> None:
    with pytest.raises(ConfigurationError, match="Invalid time step"):
        parse_time_period(token)


def test_utc_instant_normalizes_offset() -> None:
    eastern = timezone(timedelta(hours=-5))
    instant = utc(datetime(2020, 1, 1, 7, 0, tzinfo=eastern))
    assert format_instant(instant) == "2020-01-01T12:00:00+00:00"


def test_utc_instant_reads_naive_as_utc() -> None:
    assert str(utc(datetime(2020, 1, 1, 6, 30))) == "2020-01-01T06:30:00+00:00"


def test_fixed_offset_instant_keeps_offset() -> None:
    cet = timezone(timedelta(hours=1))
    instant = fixed_offset(datetime(2020, 1, 1, 12, 0, tzinfo=cet))
    assert format_instant(instant) == "2020-01-01T12:00:00+01:00"


@pytest.mark.parametrize(
    ("offset", "expected"),
    [
        (timedelta(minutes=53, seconds=28), "2020-01-01T12:00:00+00:53"),
        (-timedelta(hours=4, minutes=56, seconds=2), "2020-01-01T12:00:00-04:56"),
    ],
)
def test_sub_minute_offsets_are_truncated(offset: timedelta, expected: str) -> None:
    instant = fixed_offset(datetime(2020, 1, 1, 12, 0, tzinfo=timezone(offset)))
    assert format_instant(instant) == expected


def test_fractional_seconds_are_kept() -> None:
    instant = utc(datetime(2020, 1, 1, 12, 0, 0, 250000, tzinfo=UTC))
    assert format_instant(instant) == "2020-01-01T12:00:00.250000+00:00"


def test_fixed_offset_instant_requires_offset() -> None:
    with pytest.raises(ConfigurationError, match="offset-aware"):
        fixed_offset(datetime(2020, 1, 1, 12, 0))


def test_local_instant_embeds_local_offset() -> None:
    naive = datetime(2020, 6, 1, 12, 0)
    instant = local(naive)
    expected = naive.astimezone()
    assert instant.value.utcoffset() == expected.utcoffset()
    assert format_instant(instant) == expected.isoformat()


@pytest.mark.parametrize(
    ("text", "kind", "rendered"),
    [
        ("2020-01-01T00:00:00Z", UtcInstant, "2020-01-01T00:00:00+00:00"),
        ("2020-01-01T00:00:00+00:00", UtcInstant, "2020-01-01T00:00:00+00:00"),
        ("2020-01-01T00:00:00+02:00", FixedOffsetInstant, "2020-01-01T00:00:00+02:00"),
    ],
)
def test_parse_instant_picks_disposition(text: str, kind: type, rendered: str) -> None:
    instant = parse_instant(text)
    assert isinstance(instant, kind)
    assert str(instant) == rendered


def test_parse_instant_without_offset_is_local() -> None:
    assert isinstance(parse_instant("2020-01-01T00:00:00"), LocalInstant)


def test_parse_instant_rejects_garbage() -> None:
    with pytest.raises(ConfigurationError, match="Invalid instant"):
        parse_instant("yesterday")


def test_mixed_dispositions_in_range() -> None:
    cet = timezone(timedelta(hours=1))
    vdt = ValidDateTime(
        start=START,
        end=fixed_offset(datetime(2020, 1, 1, 6, 0, tzinfo=cet)),
        time_step=TimePeriod.minutes(30),
    )
    assert vdt.format() == f"{START_TEXT}--2020-01-01T06:00:00+01:00:PT30M"
