#file: frontend/utils.py

import math
import pandas as pd

from backend.aqi import aqi_color, aqi_label

POLLUTANTS = [
    {"key" : "pm25", "label" : "PM2.5", "unit" : "µg/m³"},
    {"key" : "pm10", "label" : "PM10", "unit" : "µg/m³"},
    {"key" : "no2", "label" : "NO₂", "unit" : "ppb"},
    {"key" : "co", "label" : "CO", "unit" : "ppm"},
    {"key" : "o3", "label" : "O₃", "unit" : "ppb"},
    {"key" : "so2", "label" : "SO₂", "unit" : "ppb"},
]
STATION_COLUMNS = ["id", "city", "aqi", "category", "color", "lat", "lng"]


def stations_to_frame(stations, by_city = True) :
    """Convert the proxy station list into a DataFrame, ordered by city unless by_city is False."""
    if not stations :
        return pd.DataFrame(columns = STATION_COLUMNS)

    df = pd.DataFrame(stations)
    if "city" not in df.columns :
        df["city"] = "Unknown Station"
    df["city"] = df["city"].fillna("Unknown Station").astype(str)
    raw_aqi = df["aqi"].tolist() if "aqi" in df.columns else [None] * len(df)
    df["aqi"] = pd.Series([None if pd.isna(value) else int(value) for value in raw_aqi], index = df.index, dtype = object)
    df["category"] = df["aqi"].map(aqi_label)
    df["color"] = df["aqi"].map(aqi_color)
    if by_city :
        df = df.sort_values(by = "city", key = lambda column : column.str.lower(), kind = "stable")
    return df.reindex(columns = STATION_COLUMNS).reset_index(drop = True)


def filter_stations(stations, query, limit = 5) :
    """Sidebar search: case-insensitive match on the station name.

    A blank query matches nothing. Results keep the proxy's order, at most `limit` of them.
    """
    df = stations_to_frame(stations, by_city = False)
    query = (query or "").strip().lower()
    if not query or df.empty :
        return df.iloc[0:0]

    matches = df[df["city"].str.lower().str.contains(query, regex = False)]
    return matches.head(limit).reset_index(drop = True)


def top_polluted(stations, n = 10) :
    """Stations with a known AQI, worst first; ties keep the proxy's order."""
    df = stations_to_frame(stations, by_city = False)
    df = df[df["aqi"].notna()]
    df = df.sort_values(by = "aqi", key = lambda column : -column.astype(int), kind = "stable")
    return df.head(n).reset_index(drop = True)


def pollutant_mix(detail) :
    """Pollutant values for the detail chart, skipping missing or negative readings."""
    detail = detail or {}
    rows = []
    for pollutant in POLLUTANTS :
        raw = detail.get(pollutant["key"])
        try :
            value = None if raw is None or isinstance(raw, bool) else float(raw)
        except (TypeError, ValueError) :
            value = None
        if value is not None and math.isfinite(value) and value >= 0 :
            rows.append({**pollutant, "value" : value})
    return pd.DataFrame(rows, columns = ["key", "label", "unit", "value"])


def y_axis_max(mix) :
    """Chart ceiling: 20% headroom over the largest value, 10 when nothing is positive."""
    top = mix["value"].max() if not mix.empty else 0
    return 10 if not top else math.ceil(top * 1.2)
