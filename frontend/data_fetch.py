#file: frontend/data_fetch.py

import aiohttp
import logging
import os

from dotenv import load_dotenv

load_dotenv()

AQI_SERVER_URL = os.getenv("AQI_SERVER_URL", "http://localhost:5000")


async def fetch_stations(bounds=None):
    """Fetch stations with their AQI from the proxy server asynchronously.

    Returns a (stations, error) pair; stations is empty when the request failed.
    """
    url = f"{AQI_SERVER_URL}/api/aqi"
    params = {"bounds": bounds} if bounds else None
    try:
        async with aiohttp.ClientSession() as session:
            async with session.get(url, params=params) as response:
                if response.status != 200:
                    body = await response.json(content_type=None)
                    error = body.get("error") if isinstance(body, dict) else None
                    return [], error or f"HTTP {response.status}"
                return await response.json(), None
    except (aiohttp.ClientError, ValueError) as e:
        logging.error(f"Error fetching stations: {e}")
        return [], str(e)
