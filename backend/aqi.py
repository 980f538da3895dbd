# file: backend/aqi.py

import math
from enum import Enum
from typing import Any, Dict, Optional, Tuple

# US EPA PM2.5 breakpoints: (conc_lo, conc_hi, index_lo, index_hi)
PM25_BREAKPOINTS: Tuple[Tuple[float, float, int, int], ...] = (
    (0.0, 12.0, 0, 50),
    (12.1, 35.4, 51, 100),
    (35.5, 55.4, 101, 150),
    (55.5, 150.4, 151, 200),
    (150.5, 250.4, 201, 300),
    (250.5, 500.4, 301, 500),
)
MAX_AQI = 500
NO_DATA_COLOR = "#6b7280"


class Severity(Enum):
    """AQI severity bands, ordered from best to worst."""

    GOOD = ("Good", 0, 50, "#22c55e")
    MODERATE = ("Moderate", 51, 100, "#eab308")
    SENSITIVE = ("Unhealthy for Sensitive Groups", 101, 150, "#f97316")
    UNHEALTHY = ("Unhealthy", 151, 200, "#ef4444")
    VERY_UNHEALTHY = ("Very Unhealthy", 201, 300, "#a855f7")
    HAZARDOUS = ("Hazardous", 301, 500, "#9f1239")

    def __init__(self, label: str, low: int, high: int, color: str) :
        self.label = label
        self.low = low
        self.high = high
        self.color = color


HEALTH_ADVICE: Dict[Optional[Severity], Dict[str, str]] = {
    None: {
        "title": "Limited data available",
        "description": "We could not determine a reliable AQI value for this station. Use nearby stations as "
                       "reference and follow general air quality precautions.",
        "level": "info",
    },
    Severity.GOOD: {
        "title": "Air quality is good",
        "description": "Air quality is considered satisfactory. You can enjoy outdoor activities without restrictions.",
        "level": "good",
    },
    Severity.MODERATE: {
        "title": "Moderate air quality",
        "description": "Unusually sensitive individuals should consider reducing prolonged or heavy outdoor exertion.",
        "level": "moderate",
    },
    Severity.SENSITIVE: {
        "title": "Unhealthy for sensitive groups",
        "description": "People with respiratory or heart disease, children, and older adults should limit intense "
                       "outdoor activities and monitor symptoms closely.",
        "level": "elevated",
    },
    Severity.UNHEALTHY: {
        "title": "Unhealthy air quality",
        "description": "Everyone should reduce prolonged or heavy exertion outdoors. Sensitive groups should avoid "
                       "outdoor activities where possible and consider using a mask rated for PM2.5.",
        "level": "unhealthy",
    },
    Severity.VERY_UNHEALTHY: {
        "title": "Very unhealthy conditions",
        "description": "Avoid outdoor physical activity. Stay indoors with windows closed and use air purification "
                       "if available. Masks are recommended if you must go outside.",
        "level": "very-unhealthy",
    },
    Severity.HAZARDOUS: {
        "title": "Hazardous air quality",
        "description": "Serious health effects are possible for everyone. Avoid going outdoors, close windows and "
                       "doors, and follow local health advisories. Use high-quality respirator masks if outdoor "
                       "exposure is unavoidable.",
        "level": "hazardous",
    },
}


def _to_concentration(value: Any) -> Optional[float] :
    if value is None or isinstance(value, bool) :
        return None
    if isinstance(value, str) :
        value = value.strip()
        if not value :
            return None
    try :
        concentration = float(value)
    except (TypeError, ValueError) :
        return None
    if not math.isfinite(concentration) or concentration < 0 :
        return None
    return concentration


def pm25_to_aqi(pm25: Any) -> Optional[int] :
    """Compute the US EPA AQI from a PM2.5 concentration (µg/m³), or None when unusable."""
    concentration = _to_concentration(pm25)
    if concentration is None :
        return None

    for conc_lo, conc_hi, index_lo, index_hi in PM25_BREAKPOINTS :
        if concentration <= conc_hi :
            aqi = (index_hi - index_lo) / (conc_hi - conc_lo) * (concentration - conc_lo) + index_lo
            # round half up; inputs are non-negative
            return int(math.floor(aqi + 0.5))
    return MAX_AQI


def parse_index(value: Any, strict: bool = False) -> Optional[int] :
    """Read an upstream AQI value.

    Map-bounds payloads carry the index as text ("57", "-"), so the leading integer is used.
    With strict=True only JSON numbers are accepted, as for station feeds.
    """
    if value is None or isinstance(value, bool) :
        return None
    if isinstance(value, (int, float)) :
        return int(value) if math.isfinite(value) else None
    if strict or not isinstance(value, str) :
        return None

    text = value.strip()
    digits = text[1:] if text[:1] in "+-" else text
    end = 0
    while end < len(digits) and digits[end].isdigit() :
        end += 1
    if end == 0 :
        return None
    number = int(digits[:end])
    return -number if text.startswith("-") else number


def resolve_aqi(upstream: Any, pm25: Any = None, strict: bool = False) -> Optional[int] :
    """Prefer the upstream index when numeric, otherwise derive it from PM2.5."""
    aqi = parse_index(upstream, strict = strict)
    if aqi is not None :
        return aqi
    return pm25_to_aqi(pm25)


def classify(aqi: Optional[int]) -> Optional[Severity] :
    """Return the severity band for an AQI value, None meaning "No Data"."""
    if aqi is None :
        return None
    for severity in Severity :
        if aqi <= severity.high :
            return severity
    return Severity.HAZARDOUS


def aqi_label(aqi: Optional[int]) -> str :
    severity = classify(aqi)
    return severity.label if severity else "No Data"


def aqi_color(aqi: Optional[int]) -> str :
    severity = classify(aqi)
    return severity.color if severity else NO_DATA_COLOR


def health_advice(aqi: Optional[int]) -> Dict[str, str] :
    return dict(HEALTH_ADVICE[classify(aqi)])
