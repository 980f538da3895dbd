#file: backend/models.py

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

POLLUTANT_KEYS = ("pm25", "pm10", "no2", "co", "o3", "so2")


class StationSummary(BaseModel):
    id: Any = Field(..., description="WAQI station uid")
    lat: float = Field(..., description="Latitude")
    lng: float = Field(..., description="Longitude")
    city: str = Field("Unknown Station", description="Station name")
    aqi: Optional[int] = Field(None, description="Air quality index, null when unknown")
    color: str = Field(..., description="Marker color for the AQI category")


class StationDetail(BaseModel):
    id: Any = Field(None, description="WAQI station idx")
    city: str = Field("Unknown", description="Station name")
    aqi: Optional[int] = Field(None, description="Air quality index, null when unknown")
    lat: Optional[float] = Field(None, description="Latitude")
    lng: Optional[float] = Field(None, description="Longitude")
    pm25: Optional[float] = Field(None, description="PM2.5 reading")
    pm10: Optional[float] = Field(None, description="PM10 reading")
    no2: Optional[float] = Field(None, description="NO2 reading")
    co: Optional[float] = Field(None, description="CO reading")
    o3: Optional[float] = Field(None, description="O3 reading")
    so2: Optional[float] = Field(None, description="SO2 reading")
    lastUpdated: Optional[str] = Field(None, description="Timestamp of the reading in ISO format")


class HealthStatus(BaseModel):
    status: str
    message: str


# Upstream WAQI payloads. Fields are optional because WAQI omits them freely.

class WaqiStationName(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None


class WaqiBoundsStation(BaseModel):
    model_config = ConfigDict(extra="ignore")

    uid: Any = None
    lat: Optional[float] = None
    lon: Optional[float] = None
    aqi: Any = None
    station: Optional[WaqiStationName] = None

    @property
    def has_location(self) -> bool:
        # zero coordinates are treated as missing
        return bool(self.lat) and bool(self.lon)

    @property
    def name(self) -> str:
        if self.station and self.station.name is not None:
            return self.station.name
        return "Unknown Station"


class WaqiCity(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    geo: Optional[List[Optional[float]]] = None


class WaqiTime(BaseModel):
    model_config = ConfigDict(extra="ignore")

    iso: Optional[str] = None


class WaqiFeed(BaseModel):
    model_config = ConfigDict(extra="ignore")

    idx: Any = None
    aqi: Any = None
    city: Optional[WaqiCity] = None
    iaqi: Optional[Dict[str, Dict[str, Any]]] = None
    time: Optional[WaqiTime] = None

    def pollutant(self, key: str) -> Any:
        """Raw iaqi value for a pollutant, None when absent."""
        return ((self.iaqi or {}).get(key) or {}).get("v")

    def coordinate(self, position: int) -> Optional[float]:
        geo = self.city.geo if self.city else None
        if not geo or len(geo) <= position:
            return None
        return geo[position]
