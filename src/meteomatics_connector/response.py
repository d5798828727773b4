"""Decoded time-series responses."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from .components.parameters import Parameter
from .exceptions import DecodeError

CSV_DELIMITER = ";"
PREFIX_HEADERS: tuple[str, ...] = ("validdate",)


class ResponseRecord(BaseModel):
    """One CSV data row keyed by its leading timestamp field."""

    model_config = ConfigDict(frozen=True)

    timestamp: str
    values: tuple[str, ...]


class ResponseTable(BaseModel):
    """Header row plus decoded records of one CSV response body.

    Built empty with its header, then filled exactly once by
    :meth:`populate_records`. Headers and records are tuples and the model is
    frozen, so a returned table cannot be edited.
    """

    model_config = ConfigDict(frozen=True)

    headers: tuple[str, ...] = ()

    _records: tuple[ResponseRecord, ...] = PrivateAttr(default=())
    _populated: bool = PrivateAttr(default=False)

    @classmethod
    def with_headers(
        cls,
        prefix_headers: Iterable[str],
        parameters: Iterable[Parameter],
    ) -> ResponseTable:
        """Create an empty table whose header is prefix columns + parameter names."""
        headers = [*prefix_headers, *(str(parameter) for parameter in parameters)]
        return cls(headers=tuple(headers))

    def populate_records(self, raw_csv: str, field_count: int) -> None:
        """Decode ``raw_csv`` into records, all or nothing.

        The first non-blank row is the provider's header and is skipped. Every
        data row must hold a timestamp plus ``field_count`` values.
        """
        if self._populated:
            raise DecodeError("Response table has already been populated.")

        expected = 1 + field_count
        records: list[ResponseRecord] = []
        header_seen = False
        row_index = 0
        reader = csv.reader(io.StringIO(raw_csv), delimiter=CSV_DELIMITER)
        try:
            for row in reader:
                if not row:
                    continue
                if not header_seen:
                    header_seen = True
                    continue
                if len(row) != expected:
                    raise DecodeError(
                        f"CSV row {row_index} (line {reader.line_num}) has {len(row)} "
                        f"fields, expected {expected}.",
                        row_index=row_index,
                        observed=len(row),
                        expected=expected,
                    )
                records.append(ResponseRecord(timestamp=row[0], values=tuple(row[1:])))
                row_index += 1
        except csv.Error as exc:
            raise DecodeError(
                f"Failed tokenizing CSV at row {row_index} (line {reader.line_num}): {exc}",
                row_index=row_index,
            ) from exc

        self._records = tuple(records)
        self._populated = True

    @property
    def records(self) -> tuple[ResponseRecord, ...]:
        return self._records

    @property
    def populated(self) -> bool:
        return self._populated

    def column(self, name: str) -> list[str]:
        """Return every value of one column, the timestamp prefix included."""
        try:
            index = self.headers.index(name)
        except ValueError as exc:
            raise KeyError(name) from exc
        if index == 0:
            return [record.timestamp for record in self.records]
        return [record.values[index - 1] for record in self.records]

    def as_rows(self) -> Iterator[list[str]]:
        """Yield flat ``[timestamp, *values]`` rows."""
        for record in self.records:
            yield [record.timestamp, *record.values]


class QueryResult(BaseModel):
    """Populated table plus the HTTP status of the response it came from."""

    model_config = ConfigDict(frozen=True)

    url: str
    http_status_code: str
    http_status_message: str
    response_body: ResponseTable
    raw_body: str = Field(default="", repr=False)
