"""Async HTTP client for the forecast API."""

import asyncio
import inspect
import logging
from datetime import datetime
from typing import Any, Callable, Iterable, Optional, Union

import httpx

from skycast import config
from skycast.forecast.errors import ForecastApiError, InvalidLocationError, NetworkError
from skycast.forecast.location import LocationInput, normalize_location
from skycast.forecast.request import DataBlock, ForecastRequest, Units, build_request
from skycast.forecast.result import Failure, Result, classify_response
from skycast.logging_config import mask_secret

logger = logging.getLogger(__name__)

Completion = Callable[[Result], Any]


class ForecastClient:
    """Async client for fetching forecasts.

    Each call issues at most one GET request. Nothing is cached or retried.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = config.API_BASE_URL,
        user_agent: str = config.USER_AGENT,
        units: Union[Units, str] = config.DEFAULT_UNITS,
        language: str = config.DEFAULT_LANGUAGE,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the forecast client.

        Args:
            api_key: Secret key for the API (falls back to SKYCAST_API_KEY)
            base_url: Base URL for the forecast endpoint
            user_agent: User-Agent header for API requests
            units: Unit system requested by default
            language: Summary language requested by default
            http_client: Preconfigured httpx client, mainly for tests
        """
        self.api_key = api_key if api_key is not None else config.API_KEY
        self.base_url = base_url
        self.user_agent = user_agent
        self.units = Units(units)
        self.language = language
        self.client = http_client or httpx.AsyncClient(
            headers={"User-Agent": self.user_agent},
            timeout=config.REQUEST_TIMEOUT,
            follow_redirects=True,
        )

    def _prepare(
        self,
        blocks: Iterable[DataBlock],
        location: LocationInput,
        *,
        units: Optional[Union[Units, str]] = None,
        language: Optional[str] = None,
        extend_hourly: bool = False,
        time: Optional[Union[datetime, int]] = None,
    ) -> Union[ForecastRequest, Failure]:
        """Build the request, or the Failure that stops it from being sent.

        Raises:
            ValueError: If ``units`` is not a known unit system
        """
        units = Units(units) if units is not None else self.units
        try:
            request = build_request(
                normalize_location(location),
                self.api_key,
                blocks,
                base_url=self.base_url,
                units=units,
                language=language or self.language,
                extend_hourly=extend_hourly,
                time=time,
            )
        except ForecastApiError as e:
            logger.warning(f"Forecast request rejected before sending: {e}")
            return Failure(e)

        mask_secret(request.api_key)
        return request

    async def _send(self, request: ForecastRequest) -> Result:
        logger.info(f"Fetching forecast from {request.redacted_url} (exclude={request.params.get('exclude', '')})")

        try:
            response = await self.client.get(request.url, params=request.params)
        except httpx.InvalidURL as e:
            logger.error(f"Request URL rejected by transport: {request.redacted_url}")
            return Failure(InvalidLocationError(f"Location cannot be sent in a URL: {e}"))
        except httpx.RequestError as e:
            logger.error(f"Request error to forecast API: {e!r}")
            return Failure(NetworkError(e))

        return classify_response(response)

    async def get(
        self,
        blocks: Iterable[DataBlock],
        location: LocationInput,
        *,
        units: Optional[Union[Units, str]] = None,
        language: Optional[str] = None,
        extend_hourly: bool = False,
        time: Optional[Union[datetime, int]] = None,
    ) -> Result:
        """Fetch a forecast for a location.

        Args:
            blocks: Data blocks to receive
            location: Coordinates, geopy point or location, or a location string
            units: Unit system, overriding the client default
            language: Summary language, overriding the client default
            extend_hourly: Request 168 hours of hourly data
            time: Point in time for a time-machine request

        Returns:
            Success with a Forecast, or Failure with the classified error

        Raises:
            ValueError: If ``units`` is not a known unit system
        """
        prepared = self._prepare(
            blocks, location,
            units=units, language=language, extend_hourly=extend_hourly, time=time,
        )
        if isinstance(prepared, Failure):
            return prepared
        return await self._send(prepared)

    def fetch(
        self,
        blocks: Iterable[DataBlock],
        location: LocationInput,
        completion: Completion,
        **options: Any,
    ) -> "asyncio.Task[None]":
        """Schedule a forecast request and return immediately.

        ``completion`` is called exactly once with the Result. Coroutine
        functions are awaited. Must be called from a running event loop.
        Invalid arguments raise here, before anything is scheduled.

        Returns:
            The task delivering the result

        Raises:
            ValueError: If ``units`` is not a known unit system
        """
        prepared = self._prepare(blocks, location, **options)

        async def run() -> None:
            if isinstance(prepared, Failure):
                result = prepared
            else:
                result = await self._send(prepared)
            outcome = completion(result)
            if inspect.isawaitable(outcome):
                await outcome

        return asyncio.get_running_loop().create_task(run())

    async def aclose(self):
        """Close the async HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()


async def fetch_forecast(
    blocks: Iterable[DataBlock],
    location: LocationInput,
    api_key: Optional[str] = None,
    **options: Any,
) -> Result:
    """Fetch one forecast with a short-lived client."""
    async with ForecastClient(api_key=api_key) as client:
        return await client.get(blocks, location, **options)
