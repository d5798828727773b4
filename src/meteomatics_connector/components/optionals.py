"""Optional query-string flags such as ``source=mix``."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict

from ..exceptions import ConfigurationError


class Opt(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    value: str

    @classmethod
    def parse(cls, text: str) -> Opt:
        """Parse ``key=value``."""
        key, sep, value = text.partition("=")
        if not sep or not key.strip():
            raise ConfigurationError(f"Invalid option {text!r}; expected 'KEY=VALUE'.")
        return cls(key=key.strip(), value=value.strip())

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


class Optionals:
    """Ordered option list rendered as a query string."""

    def __init__(self, values: Iterable[Opt | tuple[str, str]]) -> None:
        self._values: tuple[Opt, ...] = tuple(
            value if isinstance(value, Opt) else Opt(key=value[0], value=value[1])
            for value in values
        )

    @property
    def values(self) -> tuple[Opt, ...]:
        return self._values

    def __iter__(self) -> Iterator[Opt]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Optionals):
            return NotImplemented
        return self._values == other._values

    def __hash__(self) -> int:
        return hash(self._values)

    def __repr__(self) -> str:
        return f"Optionals({list(self._values)!r})"

    def __str__(self) -> str:
        return "&".join(str(value) for value in self._values)
