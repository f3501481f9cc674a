"""OpenWeatherMap client: current conditions and 5-day daily summaries, cached in Redis."""

from __future__ import annotations

import json
import logging
from collections import defaultdict
from datetime import UTC, datetime
from typing import Any

import httpx
from redis.asyncio import Redis

from app.config import Settings, get_settings
from app.schemas.weather import CurrentWeather, DailyForecast, ForecastResponse, TemperatureRange
from app.services.parsing import round_half_up

_logger = logging.getLogger("farmchat.weather")

FORECAST_DAYS = 5
FORECAST_SLOTS = 40


class WeatherNotConfiguredError(RuntimeError):
	"""No weather API key is configured."""


class WeatherServiceError(RuntimeError):
	"""The weather provider failed or answered with an unexpected status."""


class WeatherService:
	def __init__(
		self,
		redis_client: Redis | None = None,
		settings: Settings | None = None,
		transport: httpx.AsyncBaseTransport | None = None,
	):
		self.redis_client = redis_client
		self.settings = settings or get_settings()
		self.transport = transport

	async def get_current_weather(self, location: str) -> CurrentWeather:
		cache_key = f"weather:current:{location.strip().lower()}"
		cached = await self._cache_get(cache_key)
		if cached is not None:
			return CurrentWeather.model_validate(cached)

		payload = await self._fetch("weather", {"q": location})
		weather = self.parse_current(payload)
		await self._cache_set(cache_key, weather.model_dump())
		return weather

	async def get_forecast(self, location: str) -> ForecastResponse:
		cache_key = f"weather:forecast:{location.strip().lower()}"
		cached = await self._cache_get(cache_key)
		if cached is not None:
			return ForecastResponse.model_validate(cached)

		payload = await self._fetch("forecast", {"q": location, "cnt": FORECAST_SLOTS})
		forecast = ForecastResponse(location=location, days=self.parse_forecast(payload))
		await self._cache_set(cache_key, forecast.model_dump())
		return forecast

	@staticmethod
	def parse_current(payload: dict[str, Any]) -> CurrentWeather:
		main = payload["main"]
		rain = payload.get("rain") or {}
		snow = payload.get("snow") or {}
		visibility = payload.get("visibility")
		return CurrentWeather(
			location=f"{payload['name']}, {payload['sys']['country']}",
			temperature=int(round_half_up(main["temp"])),
			description=payload["weather"][0]["description"],
			humidity=main["humidity"],
			pressure=main["pressure"],
			wind_speed=(payload.get("wind") or {}).get("speed") or 0.0,
			cloudiness=(payload.get("clouds") or {}).get("all") or 0.0,
			visibility_km=visibility / 1000 if visibility else 0.0,
			uv_index=0.0,
			precipitation=rain.get("1h") or snow.get("1h") or 0.0,
		)

	@staticmethod
	def parse_forecast(payload: dict[str, Any]) -> list[DailyForecast]:
		"""Group 3-hourly slots by UTC date and summarise the first days."""
		by_day: dict[str, list[dict[str, Any]]] = defaultdict(list)
		for item in payload.get("list", []):
			day = datetime.fromtimestamp(item["dt"], tz=UTC).date().isoformat()
			by_day[day].append(item)

		days: list[DailyForecast] = []
		for day, slots in list(by_day.items())[:FORECAST_DAYS]:
			temps = [slot["main"]["temp"] for slot in slots]
			descriptions = [slot["weather"][0]["description"] for slot in slots]
			precipitation = sum(
				((slot.get("rain") or {}).get("3h") or (slot.get("snow") or {}).get("3h") or 0.0)
				for slot in slots
			)
			humidity = sum(slot["main"]["humidity"] for slot in slots) / len(slots)
			wind = sum(((slot.get("wind") or {}).get("speed") or 0.0) for slot in slots) / len(slots)
			days.append(
				DailyForecast(
					date=day,
					temperature=TemperatureRange(
						min=int(round_half_up(min(temps))),
						max=int(round_half_up(max(temps))),
					),
					description=descriptions[len(descriptions) // 2],
					humidity=int(round_half_up(humidity)),
					precipitation=round_half_up(precipitation, 1),
					wind_speed=round_half_up(wind, 1),
				)
			)
		return days

	async def _fetch(self, endpoint: str, params: dict[str, Any]) -> dict[str, Any]:
		if not self.settings.openweather_api_key:
			raise WeatherNotConfiguredError("weather API key is not configured")

		query = {**params, "appid": self.settings.openweather_api_key, "units": "metric"}
		url = f"{self.settings.openweather_base_url.rstrip('/')}/{endpoint}"
		try:
			async with httpx.AsyncClient(
				timeout=self.settings.openweather_timeout_seconds,
				transport=self.transport,
			) as client:
				response = await client.get(url, params=query)
		except httpx.HTTPError as exc:
			_logger.warning("weather_request_failed", extra={"endpoint": endpoint, "error": str(exc)})
			raise WeatherServiceError(f"weather provider unreachable: {exc}") from exc

		if response.status_code == 404:
			raise LookupError(f"location not found: {params.get('q')}")
		if response.status_code != 200:
			_logger.warning(
				"weather_request_rejected",
				extra={"endpoint": endpoint, "status_code": response.status_code},
			)
			raise WeatherServiceError(f"weather API error: {response.status_code}")
		return response.json()

	async def _cache_get(self, key: str) -> Any | None:
		if self.redis_client is None:
			return None
		cached = await self.redis_client.get(key)
		if cached is None:
			return None
		return json.loads(cached)

	async def _cache_set(self, key: str, value: Any) -> None:
		if self.redis_client is None:
			return
		await self.redis_client.setex(key, self.settings.weather_cache_ttl_seconds, json.dumps(value))
