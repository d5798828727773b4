"""CLI: run one Meteomatics time-series query and print the decoded table."""

from __future__ import annotations

import argparse
import sys
import uuid
from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from .client import MeteomaticsClient
from .components.locations import Coordinates, Locations
from .components.optionals import Opt, Optionals
from .components.parameters import Parameter, Parameters
from .components.valid_date_time import (
    ValidDateTime,
    parse_date_period,
    parse_instant,
    parse_time_period,
)
from .config import Settings, load_settings
from .exceptions import ConfigError, ConfigurationError, ConnectorError, HttpError, JournalError
from .journal import JournalWriter
from .log_setup import setup_logger
from .response import QueryResult


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse query CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Query the Meteomatics time-series endpoint and print the result."
    )
    parser.add_argument("--start", required=True, help="Start instant (ISO 8601).")
    parser.add_argument("--end", default=None, help="End instant (ISO 8601).")
    parser.add_argument("--period", default=None, help="Date period, e.g. P1D.")
    parser.add_argument("--step", default=None, help="Time step, e.g. PT1H.")
    parser.add_argument(
        "--param",
        dest="params",
        action="append",
        required=True,
        help="Parameter as NAME[:UNIT]; repeat for more.",
    )
    parser.add_argument(
        "--location",
        dest="locations",
        action="append",
        required=True,
        help="Location as LAT,LON; repeat for more.",
    )
    parser.add_argument(
        "--option",
        dest="options",
        action="append",
        default=[],
        help="Query option as KEY=VALUE; repeat for more.",
    )
    parser.add_argument(
        "--max-print",
        type=int,
        default=None,
        help="Number of records to print.",
    )
    return parser.parse_args(argv)


def build_query(
    args: argparse.Namespace,
) -> tuple[ValidDateTime, Parameters, Locations, Optionals | None]:
    """Turn CLI arguments into typed query components."""
    if args.max_print is not None and args.max_print <= 0:
        raise ConfigurationError("--max-print must be > 0 when provided.")

    vdt = ValidDateTime(
        start=parse_instant(args.start),
        end=parse_instant(args.end) if args.end else None,
        date_period=parse_date_period(args.period) if args.period else None,
        time_step=parse_time_period(args.step) if args.step else None,
    )
    parameters = Parameters(Parameter.parse(text) for text in args.params)
    locations = Locations(Coordinates.parse(text) for text in args.locations)
    optionals = Optionals(Opt.parse(text) for text in args.options) if args.options else None
    return vdt, parameters, locations, optionals


def _print_result(console: Console, result: QueryResult, max_print: int) -> None:
    table_data = result.response_body
    console.print(
        f"Status={result.http_status_message} records={len(table_data.records)} "
        f"columns={len(table_data.headers)}"
    )
    if not table_data.records:
        console.print("No records returned.")
        return

    table = Table(title="Meteomatics Time Series")
    for index, header in enumerate(table_data.headers):
        table.add_column(header, overflow="fold", justify="left" if index == 0 else "right")
    for row in list(table_data.as_rows())[:max_print]:
        table.add_row(*row)
    console.print(table)


def _run_query(
    settings: Settings,
    args: argparse.Namespace,
    journal: JournalWriter,
    session_id: str,
    console: Console,
) -> None:
    vdt, parameters, locations, optionals = build_query(args)
    journal.write_event(
        "query_request_start",
        payload={
            "time": vdt.format(),
            "parameters": str(parameters),
            "locations": str(locations),
            "options": str(optionals) if optionals else None,
        },
        metadata={"session_id": session_id},
    )

    with MeteomaticsClient(settings=settings) as client:
        result = client.query_time_series(vdt, parameters, locations, optionals)

    raw_path: str | None = None
    if settings.journal_raw_payloads:
        raw_path = str(journal.write_raw_csv("time_series", result.raw_body))
    journal.write_event(
        "query_request_success",
        payload={
            "url": result.url,
            "status": result.http_status_message,
            "record_count": len(result.response_body.records),
            "headers": result.response_body.headers,
            "raw_path": raw_path,
        },
        metadata={"session_id": session_id},
    )
    _print_result(console, result, args.max_print or settings.query_max_print)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the query CLI."""
    args = parse_args(argv)
    logger = setup_logger()
    console = Console()
    session_id = uuid.uuid4().hex[:12]

    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2

    try:
        journal = JournalWriter(
            journal_dir=settings.journal_dir,
            raw_payload_dir=settings.raw_payload_dir,
            session_id=session_id,
        )
        journal.write_event(
            "query_startup",
            payload=settings.safe_summary(),
            metadata={"session_id": session_id},
        )
    except JournalError as exc:
        logger.error("Failed to initialize query journal: %s", exc)
        return 3

    try:
        _run_query(settings, args, journal, session_id, console)
    except JournalError as exc:
        logger.error("Journal write failed: %s", exc)
        return 3
    except ConnectorError as exc:
        failure: dict[str, object] = {"error_type": type(exc).__name__, "error": str(exc)}
        if isinstance(exc, HttpError):
            failure["status_code"] = exc.status_code
        logger.error("Query failed: %s", exc, extra={"session_id": session_id})
        try:
            journal.write_event(
                "query_request_failure",
                payload=failure,
                metadata={"session_id": session_id},
            )
        except JournalError as journal_exc:
            logger.error("Failed journaling query failure: %s", journal_exc)
            return 3
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
