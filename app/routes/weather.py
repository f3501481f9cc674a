"""Weather lookup routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Request, status

from app.schemas.weather import CurrentWeather, ForecastResponse
from app.services.weather_service import (
	WeatherNotConfiguredError,
	WeatherService,
	WeatherServiceError,
)

router = APIRouter(prefix="/weather", tags=["weather"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, WeatherNotConfiguredError):
		return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
	if isinstance(exc, WeatherServiceError):
		return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="weather failure")


@router.get("/current", response_model=CurrentWeather)
async def get_current_weather(
	request: Request,
	location: str = Query(min_length=1, max_length=255),
) -> CurrentWeather:
	service = WeatherService(getattr(request.app.state, "redis", None))
	try:
		return await service.get_current_weather(location)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.get("/forecast", response_model=ForecastResponse)
async def get_forecast(
	request: Request,
	location: str = Query(min_length=1, max_length=255),
) -> ForecastResponse:
	service = WeatherService(getattr(request.app.state, "redis", None))
	try:
		return await service.get_forecast(location)
	except Exception as exc:
		raise _map_error(exc) from exc
