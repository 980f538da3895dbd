#file: frontend/station_api.py

import logging
import requests

from frontend.data_fetch import AQI_SERVER_URL


def fetch_station_detail(station_id, timeout=15):
    """Fetch detailed readings for one station from the proxy server.

    Returns a (detail, error) pair; detail is None when the request failed.
    """
    try:
        response = requests.get(f"{AQI_SERVER_URL}/api/aqi/{station_id}", timeout=timeout)
        data = response.json()
        if isinstance(data, dict) and data.get("error"):
            return None, data["error"]
        response.raise_for_status()
        return data, None
    except (requests.RequestException, ValueError) as e:
        logging.error(f"Error fetching station {station_id}: {e}")
        return None, str(e)
