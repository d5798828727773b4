"""Requested weather parameters, rendered as ``name[:unit]`` tokens."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, field_validator

from ..exceptions import ConfigurationError


class Parameter(BaseModel):
    """One weather variable with an optional unit override."""

    model_config = ConfigDict(frozen=True)

    name: str
    unit: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ConfigurationError("Parameter name must not be empty.")
        return value

    @field_validator("unit")
    @classmethod
    def empty_unit_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @classmethod
    def parse(cls, text: str) -> Parameter:
        """Parse ``t_2m:C`` or ``wind_speed_10m``."""
        name, sep, unit = text.partition(":")
        return cls(name=name, unit=unit if sep else None)

    def __str__(self) -> str:
        if self.unit is None:
            return self.name
        return f"{self.name}:{self.unit}"


class Parameters:
    """Ordered, de-duplicated parameter list. The first occurrence wins."""

    def __init__(self, values: Iterable[Parameter | str]) -> None:
        unique: list[Parameter] = []
        for value in values:
            parameter = Parameter.parse(value) if isinstance(value, str) else value
            if parameter not in unique:
                unique.append(parameter)
        if not unique:
            raise ConfigurationError("At least one parameter is required.")
        self._values: tuple[Parameter, ...] = tuple(unique)

    @property
    def values(self) -> tuple[Parameter, ...]:
        return self._values

    def __iter__(self) -> Iterator[Parameter]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Parameters):
            return NotImplemented
        return self._values == other._values

    def __hash__(self) -> int:
        return hash(self._values)

    def __repr__(self) -> str:
        return f"Parameters({list(self._values)!r})"

    def __str__(self) -> str:
        return ",".join(str(parameter) for parameter in self._values)
