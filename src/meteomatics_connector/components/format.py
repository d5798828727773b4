"""Response formats understood by the time-series endpoint."""

from __future__ import annotations

from typing import Literal

ResponseFormat = Literal["csv"]

CSV: ResponseFormat = "csv"
