# file : /backend/main.py

import logging
import uvicorn
from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import List, Optional

from backend import config
from backend.config import ConfigurationError
from backend.models import HealthStatus, StationDetail, StationSummary
from backend.waqi_api import ServerError, WaqiApiError, fetch_station_detail, fetch_stations

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')


app = FastAPI(
    title = "AQI Visualizer",
    description = "Proxy over the WAQI API serving station readings for the air quality map.",
    version = "0.1",
)

app.add_middleware(CORSMiddleware, allow_origins = ["*"], allow_methods = ["*"], allow_headers = ["*"])


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logging.error(f"Configuration error on {request.url.path}: {exc}")
    return JSONResponse(status_code = 500, content = {"error" : str(exc)})


@app.exception_handler(WaqiApiError)
async def waqi_error_handler(request: Request, exc: WaqiApiError):
    logging.error(f"WAQI API error on {request.url.path}: {exc.details}")
    return JSONResponse(status_code = 500, content = {"error" : "WAQI API error", "details" : exc.details})


@app.exception_handler(ServerError)
async def server_error_handler(request: Request, exc: ServerError):
    logging.error(f"Error handling {request.url.path}: {exc}")
    return JSONResponse(status_code = 500, content = {"error" : "Server error", "details" : str(exc)})


# runs outside CORSMiddleware, so the response carries no CORS headers
@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logging.error(f"Error handling {request.url.path}: {exc}")
    return JSONResponse(status_code = 500, content = {"error" : "Server error", "details" : str(exc)})


@app.get("/api/health", response_model=HealthStatus)
async def health():
    return HealthStatus(status = "ok", message = "AQI Visualizer Server is running.")


@app.get("/api/aqi", response_model=List[StationSummary])
async def stations(bounds: Optional[str] = Query(None, description="Bounding box as lat1,lng1,lat2,lng2")):
    """Fetch stations inside the bounding box with their AQI and marker color."""
    logging.info(f"Fetching stations for bounds: {bounds or config.DEFAULT_BOUNDS}")
    return await fetch_stations(bounds)


@app.get("/api/aqi/{station_id}", response_model=StationDetail)
async def station_detail(station_id: str):
    """Fetch detailed readings for a single station."""
    logging.info(f"Fetching station detail: {station_id}")
    return await fetch_station_detail(station_id)


if __name__ == "__main__" :
    uvicorn.run(app, host = config.HOST, port = config.PORT, log_level="info")
