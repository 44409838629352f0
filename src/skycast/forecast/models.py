"""Data models for forecast responses.

Every field is optional: the API omits whatever it has no data for, and an
absent value stays ``None`` rather than being replaced by a default.
"""

from datetime import datetime, timedelta
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from skycast.forecast.location import Location


class ResponseModel(BaseModel):
    """Base for models decoded from camelCase JSON; unknown keys are ignored."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class DataPoint(ResponseModel):
    """Weather conditions at one point in time or over one period."""
    time: Optional[datetime] = Field(None, description="Start of the sample, UTC")
    summary: Optional[str] = None
    icon: Optional[str] = None

    # Daily only
    sunrise_time: Optional[datetime] = None
    sunset_time: Optional[datetime] = None
    moon_phase: Optional[float] = Field(None, description="Fraction of the lunation, 0 is new moon")

    # Current only
    nearest_storm_distance: Optional[float] = None
    nearest_storm_bearing: Optional[float] = None

    precip_intensity: Optional[float] = None
    precip_intensity_error: Optional[float] = None
    precip_intensity_max: Optional[float] = None
    precip_intensity_max_time: Optional[datetime] = None
    precip_probability: Optional[float] = Field(None, description="Probability between 0 and 1")
    precip_type: Optional[str] = None
    precip_accumulation: Optional[float] = None

    temperature: Optional[float] = None
    temperature_high: Optional[float] = None
    temperature_high_time: Optional[datetime] = None
    temperature_low: Optional[float] = None
    temperature_low_time: Optional[datetime] = None
    temperature_min: Optional[float] = None
    temperature_min_time: Optional[datetime] = None
    temperature_max: Optional[float] = None
    temperature_max_time: Optional[datetime] = None
    apparent_temperature: Optional[float] = None
    apparent_temperature_high: Optional[float] = None
    apparent_temperature_high_time: Optional[datetime] = None
    apparent_temperature_low: Optional[float] = None
    apparent_temperature_low_time: Optional[datetime] = None
    apparent_temperature_min: Optional[float] = None
    apparent_temperature_min_time: Optional[datetime] = None
    apparent_temperature_max: Optional[float] = None
    apparent_temperature_max_time: Optional[datetime] = None
    dew_point: Optional[float] = None

    humidity: Optional[float] = None
    pressure: Optional[float] = None
    wind_speed: Optional[float] = None
    wind_gust: Optional[float] = None
    wind_gust_time: Optional[datetime] = None
    wind_bearing: Optional[float] = None
    cloud_cover: Optional[float] = None
    uv_index: Optional[int] = None
    uv_index_time: Optional[datetime] = None
    visibility: Optional[float] = None
    ozone: Optional[float] = None


class ForecastSection(ResponseModel):
    """A minutely, hourly or daily section of the forecast."""
    summary: Optional[str] = None
    icon: Optional[str] = None
    points: Optional[List[DataPoint]] = Field(
        None,
        validation_alias=AliasChoices("data", "points"),
        description="Data points ordered by time",
    )


class Alert(ResponseModel):
    """Severe weather warning issued by a governmental authority."""
    title: Optional[str] = None
    description: Optional[str] = None
    severity: Optional[str] = Field(None, description="advisory, watch or warning")
    time: Optional[datetime] = None
    expires: Optional[datetime] = None
    regions: Optional[List[str]] = None
    uri: Optional[str] = None


class Flags(ResponseModel):
    """Miscellaneous response metadata carried in the body."""
    units: Optional[str] = None
    sources: Optional[List[str]] = None
    nearest_station: Optional[float] = Field(
        None, validation_alias=AliasChoices("nearest-station", "nearest_station")
    )


class Metadata(BaseModel):
    """Request accounting taken from response headers."""
    model_config = ConfigDict(frozen=True)

    api_calls_made: Optional[int] = Field(None, description="Calls made with this key today")
    response_time: Optional[timedelta] = Field(None, description="Server processing time")


class Forecast(BaseModel):
    """Decoded forecast response."""
    model_config = ConfigDict(frozen=True)

    current: Optional[DataPoint] = None
    minutes: Optional[ForecastSection] = None
    hours: Optional[ForecastSection] = None
    days: Optional[ForecastSection] = None
    alerts: Optional[List[Alert]] = None
    flags: Optional[Flags] = None
    timezone: Optional[str] = None
    location: Optional[Location] = None
    metadata: Optional[Metadata] = None
