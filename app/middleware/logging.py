"""Structured logging for the API process and per-request access lines.

Services log through stdlib ``logging.getLogger("farmchat.<area>")`` with
``extra=`` payloads; those records are rendered by the same structlog pipeline
as the access log, so request ids and upstream scope land on every line.
"""

from __future__ import annotations

import logging
import time
import uuid
from functools import lru_cache
from typing import Any

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import LogFormat, get_settings
from app.middleware.rate_limit import resolve_scope

REQUEST_ID_HEADER = "x-request-id"

# Health checks are only logged at debug level.
QUIET_PATHS = frozenset({"/health"})


def _renderer(log_format: LogFormat) -> Any:
	if log_format == LogFormat.json:
		return structlog.processors.JSONRenderer()
	return structlog.dev.ConsoleRenderer()


@lru_cache
def configure_structured_logging() -> None:
	"""Route structlog and stdlib ``farmchat.*`` records through one handler."""
	settings = get_settings()
	log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

	shared_processors: list[Any] = [
		structlog.contextvars.merge_contextvars,
		structlog.stdlib.add_logger_name,
		structlog.processors.add_log_level,
		structlog.processors.TimeStamper(fmt="iso", utc=True),
	]

	structlog.configure(
		processors=[
			*shared_processors,
			structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
		],
		wrapper_class=structlog.stdlib.BoundLogger,
		logger_factory=structlog.stdlib.LoggerFactory(),
		cache_logger_on_first_use=True,
	)

	formatter = structlog.stdlib.ProcessorFormatter(
		foreign_pre_chain=[*shared_processors, structlog.stdlib.ExtraAdder()],
		processors=[
			structlog.stdlib.ProcessorFormatter.remove_processors_meta,
			structlog.processors.format_exc_info,
			_renderer(settings.log_format),
		],
	)
	handler = logging.StreamHandler()
	handler.setFormatter(formatter)

	root = logging.getLogger()
	root.handlers = [handler]
	root.setLevel(log_level)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
	"""Bind a request id and the metered upstream scope, then log one access line."""

	async def dispatch(self, request: Request, call_next):  # type: ignore[override]
		request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
		request.state.request_id = request_id
		path = request.url.path

		structlog.contextvars.clear_contextvars()
		structlog.contextvars.bind_contextvars(
			request_id=request_id,
			client=request.client.host if request.client else None,
			upstream_scope=resolve_scope(path),
		)

		logger = structlog.get_logger("farmchat.request")
		start = time.perf_counter()

		try:
			response = await call_next(request)
		except Exception as exc:
			logger.exception(
				"http_request_failed",
				method=request.method,
				path=path,
				duration_ms=_elapsed_ms(start),
				error=str(exc),
			)
			raise

		response.headers[REQUEST_ID_HEADER] = request_id
		logger.log(
			_access_level(path, response.status_code),
			"rate_limited" if response.status_code == 429 else "http_request",
			method=request.method,
			path=path,
			status_code=response.status_code,
			duration_ms=_elapsed_ms(start),
		)
		return response


def _elapsed_ms(start: float) -> float:
	return round((time.perf_counter() - start) * 1000.0, 2)


def _access_level(path: str, status_code: int) -> int:
	if status_code >= 500:
		return logging.ERROR
	if status_code == 429:
		return logging.WARNING
	if path in QUIET_PATHS:
		return logging.DEBUG
	return logging.INFO
