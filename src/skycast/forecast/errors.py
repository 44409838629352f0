"""Error classification for forecast requests."""

from typing import Optional


class ForecastApiError(Exception):
    """Base class for every failure a forecast request can end in."""
    pass


class InvalidLocationError(ForecastApiError):
    """Raised when the location cannot be turned into a request path."""
    pass


class MissingApiKeyError(ForecastApiError):
    """Raised when no API key is configured at request time."""

    def __init__(self, message: str = "No API key configured"):
        super().__init__(message)


class NoDataRequestedError(ForecastApiError):
    """Raised when the requested data block set is empty."""

    def __init__(self, message: str = "At least one data block must be requested"):
        super().__init__(message)


class NetworkError(ForecastApiError):
    """Transport failed before an HTTP response was obtained."""

    def __init__(self, cause: BaseException):
        super().__init__(f"Network error: {cause}")
        self.cause = cause


class ServerError(ForecastApiError):
    """The API answered with an error status."""

    def __init__(self, status_code: int, body: Optional[str] = None):
        super().__init__(f"Server responded with HTTP {status_code}")
        self.status_code = status_code
        self.body = body


class DecodingError(ForecastApiError):
    """The response body could not be decoded into a forecast."""

    def __init__(self, cause: BaseException):
        super().__init__(f"Could not decode forecast response: {cause}")
        self.cause = cause
