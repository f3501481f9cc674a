"""Pydantic schemas for current weather and daily forecasts."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CurrentWeather(BaseModel):
	location: str
	temperature: int
	description: str
	humidity: float
	pressure: float
	wind_speed: float = 0.0
	cloudiness: float = 0.0
	visibility_km: float = 0.0
	uv_index: float = 0.0
	precipitation: float = 0.0


class TemperatureRange(BaseModel):
	min: int
	max: int


class DailyForecast(BaseModel):
	date: str
	temperature: TemperatureRange
	description: str
	humidity: int
	precipitation: float
	wind_speed: float


class ForecastResponse(BaseModel):
	location: str
	days: list[DailyForecast] = Field(default_factory=list)
