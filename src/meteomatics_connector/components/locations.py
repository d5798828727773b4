"""Query locations, rendered as ``lat,lon`` pairs joined with ``+``."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, model_validator

from ..exceptions import ConfigurationError


class Coordinates(BaseModel):
    """A single latitude/longitude point."""

    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float

    @model_validator(mode="after")
    def validate_range(self) -> Coordinates:
        if not (-90 <= self.lat <= 90):
            raise ConfigurationError(f"Invalid latitude {self.lat}; expected between -90 and 90.")
        if not (-180 <= self.lon <= 180):
            raise ConfigurationError(
                f"Invalid longitude {self.lon}; expected between -180 and 180."
            )
        return self

    @classmethod
    def parse(cls, text: str) -> Coordinates:
        """Parse ``"47.419708,9.358478"``."""
        lat_text, sep, lon_text = text.partition(",")
        if not sep:
            raise ConfigurationError(f"Invalid location {text!r}; expected 'LAT,LON'.")
        try:
            return cls(lat=float(lat_text), lon=float(lon_text))
        except ValueError as exc:
            raise ConfigurationError(f"Invalid location {text!r}; expected 'LAT,LON'.") from exc

    def __str__(self) -> str:
        return f"{_decimal_text(self.lat)},{_decimal_text(self.lon)}"


def _decimal_text(value: float) -> str:
    # Fixed point only; the path grammar has no exponent form.
    return format(Decimal(repr(value)), "f")


def _coerce_point(point: Coordinates | tuple[float, float]) -> Coordinates:
    if isinstance(point, Coordinates):
        return point
    try:
        lat, lon = point
        return Coordinates(lat=lat, lon=lon)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid location {point!r}; expected (lat, lon).") from exc


class Locations:
    """Ordered list of query points."""

    def __init__(self, coordinates: Iterable[Coordinates | tuple[float, float]]) -> None:
        points = [_coerce_point(point) for point in coordinates]
        if not points:
            raise ConfigurationError("At least one location is required.")
        self._points: tuple[Coordinates, ...] = tuple(points)

    @property
    def points(self) -> tuple[Coordinates, ...]:
        return self._points

    def __iter__(self) -> Iterator[Coordinates]:
        return iter(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Locations):
            return NotImplemented
        return self._points == other._points

    def __hash__(self) -> int:
        return hash(self._points)

    def __repr__(self) -> str:
        return f"Locations({list(self._points)!r})"

    def __str__(self) -> str:
        return "+".join(str(point) for point in self._points)
