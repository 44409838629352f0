"""Request outcomes and response classification."""

import json
import logging
from dataclasses import dataclass
from typing import Union

import httpx

from skycast.forecast.decoder import decode_forecast
from skycast.forecast.errors import DecodingError, ForecastApiError, ServerError
from skycast.forecast.models import Forecast

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Success:
    """A request that produced a forecast."""
    forecast: Forecast
    ok = True

    def unwrap(self) -> Forecast:
        return self.forecast


@dataclass(frozen=True)
class Failure:
    """A request that ended in a classified error."""
    error: ForecastApiError
    ok = False

    def unwrap(self) -> Forecast:
        """Re-raise the classified error."""
        raise self.error


Result = Union[Success, Failure]


def classify_response(response: httpx.Response) -> Result:
    """Turn an HTTP response into a Result.

    Only the status code and the body decide the outcome; informational
    headers never do.

    Args:
        response: Response received from the API

    Returns:
        Success with the decoded forecast, or Failure with a ServerError or DecodingError
    """
    if response.status_code >= 400:
        logger.error(f"HTTP error from forecast API: {response.status_code} - {response.text}")
        return Failure(ServerError(response.status_code, response.text))

    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error(f"Response body is not JSON: {e}")
        return Failure(DecodingError(e))

    try:
        forecast = decode_forecast(payload, response.headers)
    except DecodingError as e:
        return Failure(e)

    if forecast.metadata is not None:
        logger.info(
            f"Forecast received (api calls: {forecast.metadata.api_calls_made}, "
            f"response time: {forecast.metadata.response_time})"
        )
    return Success(forecast)
