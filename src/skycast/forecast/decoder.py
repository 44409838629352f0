"""Decoding of forecast payloads and response headers."""

import logging
import math
from datetime import timedelta
from typing import Any, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from skycast.config import API_CALLS_HEADER, RESPONSE_TIME_HEADER
from skycast.forecast.errors import DecodingError
from skycast.forecast.location import Location
from skycast.forecast.models import (
    Alert, DataPoint, Flags, Forecast, ForecastSection, Metadata
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _decode_if_present(raw: Mapping[str, Any], key: str, model: Type[ModelT]) -> Optional[ModelT]:
    """Validate ``raw[key]`` as ``model``, or return None when the key is absent or null."""
    value = raw.get(key)
    if value is None:
        return None
    return model.model_validate(value)


def _decode_list_if_present(raw: Mapping[str, Any], key: str, model: Type[ModelT]) -> Optional[List[ModelT]]:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        raise DecodingError(TypeError(f"'{key}' must be a list, got {type(value).__name__}"))
    return [model.model_validate(item) for item in value]


def _decode_location(raw: Mapping[str, Any]) -> Optional[Location]:
    latitude = raw.get("latitude")
    longitude = raw.get("longitude")
    if latitude is None or longitude is None:
        return None
    return Location(latitude=latitude, longitude=longitude)


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    # httpx.Headers is case-insensitive already, plain dicts are not
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        logger.debug(f"Ignoring non-integer header value: {value!r}")
        return None


def _parse_duration(value: Optional[str]) -> Optional[timedelta]:
    """Parse seconds (``0.5``) or milliseconds (``227.3ms``) into a timedelta."""
    if value is None:
        return None
    text = value.strip().lower()
    scale = 1.0
    if text.endswith("ms"):
        text, scale = text[:-2], 0.001
    elif text.endswith("s"):
        text = text[:-1]
    try:
        seconds = float(text) * scale
    except ValueError:
        logger.debug(f"Ignoring non-numeric duration header: {value!r}")
        return None
    if not math.isfinite(seconds):
        return None
    try:
        return timedelta(seconds=seconds)
    except OverflowError:
        logger.debug(f"Ignoring out of range duration header: {value!r}")
        return None


def extract_metadata(headers: Optional[Mapping[str, str]]) -> Optional[Metadata]:
    """Read request accounting from response headers.

    Args:
        headers: Response headers, or None when there are none

    Returns:
        Metadata with each field parsed independently, or None without headers
    """
    if headers is None:
        return None

    return Metadata(
        api_calls_made=_parse_int(_header(headers, API_CALLS_HEADER)),
        response_time=_parse_duration(_header(headers, RESPONSE_TIME_HEADER)),
    )


def decode_forecast(
    raw: Optional[Mapping[str, Any]],
    headers: Optional[Mapping[str, str]] = None,
) -> Forecast:
    """Decode a JSON payload and its headers into a Forecast.

    Missing sections and fields stay absent. A missing payload yields a
    forecast with no body fields at all.

    Args:
        raw: Parsed JSON object from the response body
        headers: Response headers

    Returns:
        Forecast instance

    Raises:
        DecodingError: If the payload is not an object or a present field has the wrong shape
    """
    metadata = extract_metadata(headers)

    if raw is None:
        return Forecast(metadata=metadata)

    if not isinstance(raw, Mapping):
        raise DecodingError(TypeError(f"Expected a JSON object, got {type(raw).__name__}"))

    try:
        forecast = Forecast(
            current=_decode_if_present(raw, "currently", DataPoint),
            minutes=_decode_if_present(raw, "minutely", ForecastSection),
            hours=_decode_if_present(raw, "hourly", ForecastSection),
            days=_decode_if_present(raw, "daily", ForecastSection),
            alerts=_decode_list_if_present(raw, "alerts", Alert),
            flags=_decode_if_present(raw, "flags", Flags),
            timezone=raw.get("timezone"),
            location=_decode_location(raw),
            metadata=metadata,
        )
    except ValidationError as e:
        logger.error(f"Invalid forecast payload: {e}")
        raise DecodingError(e) from e

    logger.debug(
        f"Decoded forecast sections: "
        f"{[name for name in ('current', 'minutes', 'hours', 'days', 'alerts') if getattr(forecast, name) is not None]}"
    )
    return forecast
