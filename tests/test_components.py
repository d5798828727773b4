"""Tests for parameter, location and option formatting."""

from __future__ import annotations

import pytest

from meteomatics_connector.components.locations import Coordinates, Locations
from meteomatics_connector.components.optionals import Opt, Optionals
from meteomatics_connector.components.parameters import Parameter, Parameters
from meteomatics_connector.exceptions import ConfigurationError


def test_parameters_with_units() -> None:
    params = Parameters(
        [Parameter(name="t_2m", unit="C"), Parameter(name="precip_1h", unit="mm")]
    )
    assert str(params) == "t_2m:C,precip_1h:mm"
    assert params != Parameters([Parameter(name="t_2m", unit="C")])


def test_parameters_without_unit_omit_colon() -> None:
    params = Parameters(
        [Parameter(name="precip_1h", unit="mm"), Parameter(name="wind_speed_10m")]
    )
    assert str(params) == "precip_1h:mm,wind_speed_10m"
    assert list(params) == [
        Parameter(name="precip_1h", unit="mm"),
        Parameter(name="wind_speed_10m", unit=None),
    ]


def test_parameters_deduplicate_preserving_first_occurrence() -> None:
    params = Parameters(["t_2m:C", "precip_1h:mm", "t_2m:C", "t_2m:F"])
    assert str(params) == "t_2m:C,precip_1h:mm,t_2m:F"
    assert len(params) == 3


def test_parameter_parse() -> None:
    assert Parameter.parse("t_2m:C") == Parameter(name="t_2m", unit="C")
    assert Parameter.parse("wind_speed_10m") == Parameter(name="wind_speed_10m")
    assert Parameter.parse("wind_speed_10m:").unit is None


def test_empty_parameters_rejected() -> None:
    with pytest.raises(ConfigurationError, match="At least one parameter"):
        Parameters([])


def test_blank_parameter_name_rejected() -> None:
    with pytest.raises(ConfigurationError, match="must not be empty"):
        Parameter(name="  ")


def test_single_location() -> None:
    locations = Locations([Coordinates(lat=47.419708, lon=9.358478)])
    assert str(locations) == "47.419708,9.358478"


def test_multiple_locations_joined_with_plus() -> None:
    locations = Locations([(47.419708, 9.358478), Coordinates.parse("52.520551,13.461804")])
    assert str(locations) == "47.419708,9.358478+52.520551,13.461804"
    assert len(locations) == 2


@pytest.mark.parametrize(("lat", "lon"), [(91.0, 0.0), (-91.0, 0.0), (0.0, 181.0)])
def test_out_of_range_coordinates_rejected(lat: float, lon: float) -> None:
    with pytest.raises(ConfigurationError, match="Invalid l"):
        Coordinates(lat=lat, lon=lon)


@pytest.mark.parametrize("text", ["47.4", "north,east", ""])
def test_coordinate_parse_rejects_bad_text(text: str) -> None:
    with pytest.raises(ConfigurationError, match="expected 'LAT,LON'"):
        Coordinates.parse(text)


def test_near_zero_coordinates_render_fixed_point() -> None:
    locations = Locations([(0.00001, -0.00005), (1e-7, 0.0)])
    assert str(locations) == "0.00001,-0.00005+0.0000001,0.0"
    assert "e" not in str(locations)


@pytest.mark.parametrize("point", [("abc", 1.0), (1.0,), (1.0, 2.0, 3.0), None])
def test_malformed_location_tuples_raise_configuration_error(point: object) -> None:
    with pytest.raises(ConfigurationError, match=r"expected \(lat, lon\)"):
        Locations([point])  # type: ignore[list-item]


def test_empty_locations_rejected() -> None:
    with pytest.raises(ConfigurationError, match="At least one location"):
        Locations([])


def test_optionals_render_query_string() -> None:
    optionals = Optionals([Opt(key="source", value="mix"), ("calibrated", "true")])
    assert str(optionals) == "source=mix&calibrated=true"
    assert optionals != Optionals([Opt(key="source", value="mix")])


def test_option_parse() -> None:
    assert Opt.parse("source=mix") == Opt(key="source", value="mix")
    with pytest.raises(ConfigurationError, match="KEY=VALUE"):
        Opt.parse("calibrated")


def test_empty_optionals_are_falsy() -> None:
    assert not Optionals([])
    assert str(Optionals([])) == ""
