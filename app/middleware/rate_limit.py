"""Redis-backed rate limiting for endpoints that call paid upstream APIs."""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import Settings, get_settings

API_PREFIX = "/api/v1"


def resolve_scope(path: str) -> str | None:
	"""Quota bucket for a request path, or ``None`` when the path is unmetered."""
	if path.startswith(f"{API_PREFIX}/chat"):
		return "chat"
	if path.startswith(f"{API_PREFIX}/weather"):
		return "weather"
	return None


def quota_for(scope: str, settings: Settings) -> int:
	if scope == "chat":
		return settings.rate_limit_chat_per_minute
	return settings.rate_limit_weather_per_minute


def client_identity(request: Request, trust_forwarded_for: bool = False) -> str:
	"""Peer address, or the first forwarded hop when a trusted proxy sets it."""
	forwarded = request.headers.get("x-forwarded-for") if trust_forwarded_for else None
	if forwarded:
		return forwarded.split(",")[0].strip()
	return request.client.host if request.client else "anonymous"


class RateLimitMiddleware(BaseHTTPMiddleware):
	"""Per-client, per-minute quota backed by Redis atomic counters."""

	async def dispatch(self, request: Request, call_next):  # type: ignore[override]
		scope = resolve_scope(request.url.path)
		if scope is None:
			return await call_next(request)

		redis_client = getattr(request.app.state, "redis", None)
		if redis_client is None:
			return await call_next(request)

		settings = get_settings()
		quota = quota_for(scope, settings)
		identity = client_identity(request, settings.rate_limit_trust_forwarded_for)
		minute_bucket = datetime.now(UTC).strftime("%Y%m%d%H%M")
		key = f"ratelimit:{scope}:{identity}:{minute_bucket}"
		current = await redis_client.incr(key)
		if current == 1:
			await redis_client.expire(key, 65)

		if current > quota:
			return JSONResponse(
				status_code=429,
				content={
					"detail": {
						"error": "rate_limited",
						"message": f"{scope} quota exceeded",
						"quota": quota,
					}
				},
			)

		return await call_next(request)
