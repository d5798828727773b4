"""Meteomatics time-series API client."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .components.format import CSV
from .components.locations import Locations
from .components.optionals import Optionals
from .components.parameters import Parameters
from .components.valid_date_time import ValidDateTime
from .config import Settings
from .exceptions import DecodeError, HttpError, TransportError
from .redaction import sanitize_text
from .response import PREFIX_HEADERS, QueryResult, ResponseTable


def build_url_fragment(
    vdt: ValidDateTime,
    parameters: Parameters,
    locations: Locations,
    optionals: Optionals | None = None,
) -> str:
    """Compose ``<time>/<parameters>/<locations>/csv[?<options>]``."""
    fragment = f"{vdt.format()}/{parameters}/{locations}/{CSV}"
    if optionals:
        fragment = f"{fragment}?{optionals}"
    return fragment


def resolve_url(base_url: str, fragment: str) -> httpx.URL:
    """Resolve a request fragment below the configured base URL."""
    if not base_url.endswith("/"):
        base_url = f"{base_url}/"
    try:
        # A leading "./" keeps the colons of the time segment from reading as a scheme.
        return httpx.URL(base_url).join(f"./{fragment}")
    except httpx.InvalidURL as exc:
        # Fragments come from the typed components; failing here is a bug.
        raise RuntimeError(f"Request fragment did not resolve against {base_url}: {exc}") from exc


class _MeteomaticsClientBase:
    """Request building and response mapping shared by sync and async clients."""

    def __init__(self, settings: Settings, logger: logging.Logger | None = None) -> None:
        self.settings = settings
        self.logger = logger or logging.getLogger("meteomatics_connector.client")
        self._base_url = str(settings.meteomatics_api_base_url)

    def _client_options(self) -> dict[str, Any]:
        return {
            "auth": httpx.BasicAuth(
                self.settings.meteomatics_username,
                self.settings.meteomatics_password,
            ),
            "timeout": self.settings.meteomatics_timeout_seconds,
            "headers": {
                "Accept": "text/csv",
                "User-Agent": self.settings.meteomatics_user_agent,
            },
        }

    def _prepare(
        self,
        vdt: ValidDateTime,
        parameters: Parameters,
        locations: Locations,
        optionals: Optionals | None,
    ) -> httpx.URL:
        fragment = build_url_fragment(vdt, parameters, locations, optionals)
        url = resolve_url(self._base_url, fragment)
        self.logger.debug("Meteomatics time-series request: %s", url, extra={"url": url})
        return url

    def _transport_error(self, url: httpx.URL, exc: httpx.HTTPError) -> TransportError:
        self.logger.warning(
            "Meteomatics request failed (%s) at %s",
            type(exc).__name__,
            url,
            extra={"url": url},
        )
        return TransportError(
            f"Meteomatics request failed at {url}: {sanitize_text(str(exc))}"
        )

    def _build_result(
        self,
        url: httpx.URL,
        response: httpx.Response,
        parameters: Parameters,
    ) -> QueryResult:
        status_message = f"{response.status_code} {response.reason_phrase}".strip()
        body = response.text

        if not response.is_success:
            self.logger.warning(
                "Meteomatics time-series query failed with status %s",
                status_message,
                extra={"url": url, "status": response.status_code},
            )
            raise HttpError(
                f"Meteomatics query failed with status {status_message} at {url}: "
                f"{sanitize_text(body[:300])}",
                status_code=response.status_code,
                status_message=status_message,
                body=body,
            )

        table = ResponseTable.with_headers(PREFIX_HEADERS, parameters)
        try:
            table.populate_records(body, field_count=len(parameters))
        except DecodeError:
            self.logger.warning(
                "Meteomatics CSV body could not be decoded (%s)", url, extra={"url": url}
            )
            raise

        self.logger.info(
            "Meteomatics time-series query returned %s with %d records",
            status_message,
            len(table.records),
            extra={
                "url": url,
                "status": response.status_code,
                "record_count": len(table.records),
            },
        )
        return QueryResult(
            url=str(url),
            http_status_code=str(response.status_code),
            http_status_message=status_message,
            response_body=table,
            raw_body=body,
        )


class MeteomaticsClient(_MeteomaticsClientBase):
    """Blocking client for the time-series endpoint."""

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(settings, logger)
        self._client = httpx.Client(transport=transport, **self._client_options())

    @classmethod
    def from_credentials(
        cls,
        username: str,
        password: str,
        timeout_seconds: float,
        logger: logging.Logger | None = None,
    ) -> MeteomaticsClient:
        settings = Settings(
            METEOMATICS_USERNAME=username,
            METEOMATICS_PASSWORD=password,
            METEOMATICS_TIMEOUT_SECONDS=timeout_seconds,
        )
        return cls(settings=settings, logger=logger)

    def __enter__(self) -> MeteomaticsClient:
        return self

    def __exit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close underlying HTTP client."""
        self._client.close()

    def query_time_series(
        self,
        vdt: ValidDateTime,
        parameters: Parameters,
        locations: Locations,
        optionals: Optionals | None = None,
    ) -> QueryResult:
        """Run one time-series query and decode its CSV body."""
        url = self._prepare(vdt, parameters, locations, optionals)
        try:
            response = self._client.get(url)
        except httpx.HTTPError as exc:
            raise self._transport_error(url, exc) from exc
        return self._build_result(url, response, parameters)


class AsyncMeteomaticsClient(_MeteomaticsClientBase):
    """Async client for the time-series endpoint."""

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(settings, logger)
        self._client = httpx.AsyncClient(transport=transport, **self._client_options())

    async def __aenter__(self) -> AsyncMeteomaticsClient:
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close underlying HTTP client."""
        await self._client.aclose()

    async def query_time_series(
        self,
        vdt: ValidDateTime,
        parameters: Parameters,
        locations: Locations,
        optionals: Optionals | None = None,
    ) -> QueryResult:
        """Run one time-series query and decode its CSV body."""
        url = self._prepare(vdt, parameters, locations, optionals)
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            raise self._transport_error(url, exc) from exc
        return self._build_result(url, response, parameters)
