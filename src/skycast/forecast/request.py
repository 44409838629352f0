"""Request construction for the forecast API."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Iterable, Optional, Union
from urllib.parse import quote

from skycast.config import API_BASE_URL
from skycast.forecast.errors import MissingApiKeyError, NoDataRequestedError

logger = logging.getLogger(__name__)


class DataBlock(str, Enum):
    """Categories of forecast data, valued by their response section names."""
    CURRENT = "currently"
    MINUTELY = "minutely"
    HOURLY = "hourly"
    DAILY = "daily"
    ALERTS = "alerts"


class Units(str, Enum):
    """Unit systems understood by the API."""
    AUTO = "auto"
    CA = "ca"
    UK2 = "uk2"
    US = "us"
    SI = "si"


@dataclass(frozen=True)
class ForecastRequest:
    """A fully built GET request.

    The key is kept out of every repr-visible field; ``url`` assembles it on demand.
    """
    base_url: str
    path: str
    params: Dict[str, str] = field(default_factory=dict)
    api_key: str = field(default="", repr=False)

    def _with_key(self, key: str) -> str:
        return f"{self.base_url.rstrip('/')}/{key}/{self.path}"

    @property
    def url(self) -> str:
        return self._with_key(quote(self.api_key, safe=""))

    @property
    def redacted_url(self) -> str:
        """URL with the API key masked, safe for logging."""
        return self._with_key("***")


def exclusion_list(blocks: Iterable[DataBlock]) -> str:
    """Comma-separated names of every block that was not requested."""
    requested = set(blocks)
    return ",".join(block.value for block in DataBlock if block not in requested)


def build_request(
    location: str,
    api_key: Optional[str],
    blocks: Iterable[DataBlock],
    *,
    base_url: str = API_BASE_URL,
    units: Optional[Union[Units, str]] = None,
    language: Optional[str] = None,
    extend_hourly: bool = False,
    time: Optional[Union[datetime, int]] = None,
) -> ForecastRequest:
    """Assemble the request for a normalized location.

    The API returns every block unless told otherwise, so the requested set is
    inverted into an ``exclude`` parameter.

    Args:
        location: Normalized location path fragment
        api_key: Secret key for the API
        blocks: Data blocks to receive
        base_url: Endpoint the key and location are appended to
        units: Unit system for the response
        language: Language for text summaries
        extend_hourly: Request 168 hours of hourly data instead of 48
        time: Point in time for a time-machine request

    Returns:
        ForecastRequest with URL and query parameters

    Raises:
        MissingApiKeyError: If no API key is given
        NoDataRequestedError: If no data block is requested
    """
    if not api_key:
        raise MissingApiKeyError()

    requested = set(blocks)
    if not requested:
        raise NoDataRequestedError()

    path = location
    if time is not None:
        timestamp = int(time.timestamp()) if isinstance(time, datetime) else int(time)
        path = f"{location},{timestamp}"
    # "?", "#" and control characters in a raw location must stay in the path
    path = quote(path, safe=",")

    params: Dict[str, str] = {}
    excluded = exclusion_list(requested)
    if excluded:
        params["exclude"] = excluded
    if units is not None:
        params["units"] = Units(units).value
    if language:
        params["lang"] = language
    if extend_hourly:
        params["extend"] = DataBlock.HOURLY.value

    request = ForecastRequest(
        base_url=base_url,
        path=path,
        params=params,
        api_key=api_key,
    )
    logger.debug(f"Built request {request.redacted_url} with params {params}")
    return request
