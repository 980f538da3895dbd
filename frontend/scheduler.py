#file: frontend/scheduler.py

import asyncio
import logging
import os
import threading
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytz
import schedule

from frontend.data_fetch import fetch_stations

REFRESH_INTERVAL_SECONDS = int(os.getenv("REFRESH_INTERVAL_SECONDS", "60"))

Fetcher = Callable[[], Tuple[List[Dict[str, Any]], Optional[str]]]


def fetch_stations_sync() -> Tuple[List[Dict[str, Any]], Optional[str]] :
    return asyncio.run(fetch_stations())


class RefreshTask :
    """Periodic station refresh with an explicit cancellation handle."""

    def __init__(self, fetcher: Fetcher = fetch_stations_sync, interval: int = REFRESH_INTERVAL_SECONDS,
                 on_update: Optional[Callable[["RefreshTask"], None]] = None) :
        self.fetcher = fetcher
        self.interval = interval
        self.on_update = on_update
        self.stations: List[Dict[str, Any]] = []
        self.error: Optional[str] = None
        self.last_refresh: Optional[datetime] = None
        self._scheduler = schedule.Scheduler()
        self._cancelled = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def cancelled(self) -> bool :
        return self._cancelled.is_set()

    def refresh_now(self) -> None :
        """Fetch immediately; a failed fetch keeps the previous stations."""
        try :
            stations, error = self.fetcher()
        except Exception as e :
            logging.error(f"Refresh failed: {e}")
            stations, error = None, str(e)

        with self._lock :
            self.error = error
            if error is None :
                self.stations = stations or []
                self.last_refresh = datetime.now(pytz.utc)
        if self.on_update :
            self.on_update(self)

    def seconds_until_refresh(self) -> Optional[int] :
        """Countdown shown next to the refresh button."""
        next_run = self._scheduler.idle_seconds
        if next_run is None :
            return None
        return max(0, int(round(next_run)))

    def start(self) -> "RefreshTask" :
        if self._thread is not None or self.cancelled :
            return self
        self._scheduler.every(self.interval).seconds.do(self.refresh_now)
        self.refresh_now()

        def run_continuously() :
            while not self._cancelled.wait(1) :
                self._scheduler.run_pending()

        self._thread = threading.Thread(target = run_continuously, daemon = True)
        self._thread.start()
        logging.info(f"Refresh task started, every {self.interval}s")
        return self

    def cancel(self) -> None :
        """Stop further refreshes; safe to call more than once."""
        self._cancelled.set()
        self._scheduler.clear()
        if self._thread is not None and self._thread is not threading.current_thread() :
            self._thread.join(timeout = 5)
        logging.info("Refresh task cancelled")

    def __enter__(self) :
        return self.start()

    def __exit__(self, *exc_info) :
        self.cancel()
