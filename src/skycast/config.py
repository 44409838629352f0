"""Configuration settings for the forecast client."""

import os
from typing import Final, Optional
from dotenv import load_dotenv

load_dotenv()

# API Configuration
API_BASE_URL: Final[str] = "https://api.darksky.net/forecast"
USER_AGENT: Final[str] = "skycast/0.1 (user@example.com)"

# Default credential, copied by each client at construction
API_KEY: Optional[str] = os.getenv("SKYCAST_API_KEY") or None

# Request configuration
REQUEST_TIMEOUT: float = float(os.getenv("SKYCAST_REQUEST_TIMEOUT", "30"))
DEFAULT_UNITS: str = os.getenv("SKYCAST_UNITS", "auto")
DEFAULT_LANGUAGE: str = os.getenv("SKYCAST_LANGUAGE", "en")

# Informational response headers
API_CALLS_HEADER: Final[str] = "X-Forecast-API-Calls"
RESPONSE_TIME_HEADER: Final[str] = "X-Response-Time"
