# file: backend/waqi_api.py

import aiohttp
import asyncio
import logging
import math
import ssl
from typing import Any, Dict, List, Optional

import certifi

from backend import config
from backend.aqi import aqi_color, parse_index, pm25_to_aqi, resolve_aqi
from backend.models import POLLUTANT_KEYS, StationDetail, StationSummary, WaqiBoundsStation, WaqiFeed


class WaqiApiError(Exception) :
    """WAQI answered with a status other than "ok"."""

    def __init__(self, details: Any) :
        super().__init__(f"WAQI API error: {details}")
        self.details = details


class ServerError(Exception) :
    """Any other failure while talking to WAQI or reshaping its answer."""


def create_session() -> aiohttp.ClientSession :
    ssl_context = ssl.create_default_context(cafile = certifi.where())
    return aiohttp.ClientSession(
        connector = aiohttp.TCPConnector(ssl = ssl_context),
        timeout = aiohttp.ClientTimeout(total = config.REQUEST_TIMEOUT),
        headers = {"Accept" : "application/json"},
    )


async def _get_data(session: aiohttp.ClientSession, url: str, params: Dict[str, str]) -> Any :
    async with session.get(url, params = params) as response :
        payload = await response.json(content_type = None)
    if not isinstance(payload, dict) or payload.get("status") != "ok" :
        details = payload.get("data") if isinstance(payload, dict) else payload
        raise WaqiApiError(details)
    return payload.get("data")


async def fetch_bounds(session: aiohttp.ClientSession, bounds: str, api_key: str) -> List[WaqiBoundsStation] :
    """Fetch every station inside a lat1,lng1,lat2,lng2 box."""
    data = await _get_data(session, f"{config.WAQI_URL}/map/bounds/",
                           {"latlng" : bounds, "networks" : "all", "token" : api_key})
    return [WaqiBoundsStation.model_validate(entry) for entry in data or [] if isinstance(entry, dict)]


async def fetch_feed(session: aiohttp.ClientSession, station_id: Any, api_key: str) -> WaqiFeed :
    """Fetch the detailed feed of a single station."""
    data = await _get_data(session, f"{config.WAQI_URL}/feed/@{station_id}/", {"token" : api_key})
    return WaqiFeed.model_validate(data or {})


async def enrich_station(session: aiohttp.ClientSession, station: WaqiBoundsStation, api_key: str) -> StationSummary :
    aqi = parse_index(station.aqi)

    # the bounds payload has no usable index, ask the station feed
    if aqi is None :
        try :
            feed = await fetch_feed(session, station.uid, api_key)
            aqi = resolve_aqi(feed.aqi, feed.pollutant("pm25"), strict = True)
        except Exception as e :
            logging.warning(f"Failed to enrich station AQI from feed {station.uid}: {e}")

    return StationSummary(
        id = station.uid,
        lat = station.lat,
        lng = station.lon,
        city = station.name,
        aqi = aqi,
        color = aqi_color(aqi),
    )


async def fetch_stations(bounds: Optional[str] = None) -> List[StationSummary] :
    """Fetch stations in bounds, enriching those without an index in parallel."""
    api_key = config.get_api_key()
    try :
        async with create_session() as session :
            raw_stations = await fetch_bounds(session, bounds or config.DEFAULT_BOUNDS, api_key)
            located = [station for station in raw_stations if station.has_location]
            logging.info(f"Fetched {len(raw_stations)} stations from WAQI, {len(located)} with coordinates")
            return list(await asyncio.gather(*(enrich_station(session, station, api_key) for station in located)))
    except WaqiApiError :
        raise
    except Exception as e :
        raise ServerError(str(e)) from e


def _reading(value: Any) -> Optional[float] :
    if value is None or isinstance(value, bool) :
        return None
    try :
        number = float(value)
    except (TypeError, ValueError) :
        return None
    return number if math.isfinite(number) else None


def build_station_detail(feed: WaqiFeed) -> StationDetail :
    pm25 = _reading(feed.pollutant("pm25"))
    aqi = parse_index(feed.aqi, strict = True)

    # WAQI reports "-" when it has no index for the station
    if aqi is None and pm25 is not None :
        aqi = pm25_to_aqi(pm25)

    readings = {key : _reading(feed.pollutant(key)) for key in POLLUTANT_KEYS}
    readings["pm25"] = pm25
    return StationDetail(
        id = feed.idx,
        city = feed.city.name if feed.city and feed.city.name is not None else "Unknown",
        aqi = aqi,
        lat = feed.coordinate(0),
        lng = feed.coordinate(1),
        lastUpdated = feed.time.iso if feed.time else None,
        **readings,
    )


async def fetch_station_detail(station_id: str) -> StationDetail :
    """Fetch one station feed and reshape it for the detail panel."""
    api_key = config.get_api_key()
    try :
        async with create_session() as session :
            feed = await fetch_feed(session, station_id, api_key)
        return build_station_detail(feed)
    except WaqiApiError :
        raise
    except Exception as e :
        raise ServerError(str(e)) from e
