"""Location handling for forecast requests."""

import logging
from typing import Tuple, Union

from geopy.location import Location as GeopyLocation
from geopy.point import Point
from pydantic import BaseModel, ConfigDict, Field

from skycast.forecast.errors import InvalidLocationError

logger = logging.getLogger(__name__)


class Location(BaseModel):
    """Coordinate pair in decimal degrees."""
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., description="Latitude in decimal degrees")
    longitude: float = Field(..., description="Longitude in decimal degrees")

    @classmethod
    def from_point(cls, point: Point) -> "Location":
        """Build a location from a geopy point."""
        return cls(latitude=point.latitude, longitude=point.longitude)

    @classmethod
    def from_geopy(cls, location: GeopyLocation) -> "Location":
        """Build a location from a geocoder result."""
        return cls.from_point(location.point)

    def as_path(self) -> str:
        """Format as the ``lat,lon`` path fragment, without rounding."""
        return f"{self.latitude!r},{self.longitude!r}"


LocationInput = Union[Location, Point, GeopyLocation, Tuple[float, float], str]


def normalize_location(location: LocationInput) -> str:
    """Convert any accepted location representation into the URL path fragment.

    Args:
        location: Coordinates, a geopy point or location, or a raw string

    Returns:
        Location string for the request path

    Raises:
        InvalidLocationError: If the location is empty or of an unsupported type
    """
    if isinstance(location, str):
        if location == "":
            raise InvalidLocationError("Location string must not be empty")
        # Malformed strings are left for the server to reject
        return location

    if isinstance(location, Location):
        return location.as_path()

    if isinstance(location, Point):
        return Location.from_point(location).as_path()

    if isinstance(location, GeopyLocation):
        return Location.from_geopy(location).as_path()

    if isinstance(location, tuple) and len(location) == 2:
        lat, lon = location
        try:
            return Location(latitude=lat, longitude=lon).as_path()
        except ValueError as e:
            raise InvalidLocationError(f"Invalid coordinates: {location!r}") from e

    logger.warning(f"Unsupported location type: {type(location).__name__}")
    raise InvalidLocationError(f"Unsupported location: {location!r}")
