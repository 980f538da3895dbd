#file: frontend/app.py

import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import logging
import time

from frontend.scheduler import RefreshTask
from frontend.station_api import fetch_station_detail
from frontend.utils import filter_stations, pollutant_mix, top_polluted, y_axis_max
from backend.aqi import aqi_label, health_advice


def show_stations(task: RefreshTask, query: str = "") -> None :
    """Print what the sidebar would show: search results and the most polluted stations."""
    if task.error :
        logging.error(f"Failed to fetch AQI: {task.error}")
        return
    refreshed = task.last_refresh.strftime("%H:%M:%S UTC") if task.last_refresh else "-"
    print(f"\n{len(task.stations)} stations (refreshed {refreshed})")

    columns = ["id", "city", "aqi", "category"]
    if query :
        results = filter_stations(task.stations, query)
        print(f"\nSearch: {query}")
        print(results[columns].to_string(index = False) if not results.empty else "No stations found.")

    top = top_polluted(task.stations)
    if not top.empty :
        print("\nTop 10 Most Polluted")
        print(top[columns].to_string(index = False))


def show_station(station_id) -> None :
    """Print what the detail panel would show for one station."""
    detail, error = fetch_station_detail(station_id)
    if error :
        print(f"Error: {error}")
        return

    aqi = detail.get("aqi")
    advice = health_advice(aqi)
    print(f"\n{detail.get('city')}  AQI {aqi if aqi is not None else '—'} ({aqi_label(aqi)})")
    print(f"{advice['title']}: {advice['description']}")
    mix = pollutant_mix(detail)
    if not mix.empty :
        print(mix[["label", "value", "unit"]].to_string(index = False))
        print(f"Chart scale: 0-{y_axis_max(mix)}")
    print(f"Last updated: {detail.get('lastUpdated') or 'unknown'}")


def main(argv) :
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    if len(argv) > 2 and argv[1] == "station" :
        show_station(argv[2])
        return

    query = " ".join(argv[1:])
    with RefreshTask(on_update = lambda task : show_stations(task, query)) :
        try :
            while True :
                time.sleep(1)
        except KeyboardInterrupt :
            logging.info("Stopped.")


if __name__ == "__main__" :
    main(sys.argv)
