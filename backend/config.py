# file: backend/config.py

import os
from dotenv import load_dotenv

load_dotenv()

WAQI_URL = os.getenv("WAQI_URL", "https://api.waqi.info")
WAQI_API_KEY = os.getenv("WAQI_API_KEY")
PLACEHOLDER_API_KEY = "your_api_key_here"

# Mumbai bounding box: lat1,lng1,lat2,lng2
DEFAULT_BOUNDS = os.getenv("DEFAULT_BOUNDS", "18.8929,72.7758,19.2714,73.0699")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "15"))


class ConfigurationError(Exception) :
    """Raised when a required setting is missing."""


def get_api_key() -> str :
    """Return the WAQI token, read from the environment at call time."""
    api_key = os.getenv("WAQI_API_KEY", WAQI_API_KEY)
    if not api_key or api_key == PLACEHOLDER_API_KEY :
        raise ConfigurationError("WAQI_API_KEY is not set. Add it to the server .env file")
    return api_key
