"""Shared pytest fixtures: async test client, fake DB session, fake Redis, sample datasets."""

from __future__ import annotations

import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.database import get_db
from app.main import app
from app.models.enums import DatasetTypeEnum
from app.schemas.dataset import DatasetIn


class FakeResult:
	"""Mimics the slice of ``sqlalchemy.Result`` the services read from."""

	def __init__(self, rows: list[Any] | None = None) -> None:
		self.rows = rows or []

	def scalar_one_or_none(self) -> Any | None:
		return self.rows[0] if self.rows else None

	def scalars(self) -> FakeResult:
		return self

	def all(self) -> list[Any]:
		return list(self.rows)


class FakeAsyncSession:
	def __init__(self) -> None:
		self.commit = AsyncMock()
		self.rollback = AsyncMock()
		self.close = AsyncMock()
		self.execute = AsyncMock(return_value=FakeResult())
		self.flush = AsyncMock()
		self.delete = AsyncMock()
		self.added: list[Any] = []
		self.add = MagicMock(side_effect=self.added.append)
		self.refresh = AsyncMock(side_effect=self._refresh)

	async def _refresh(self, instance: Any) -> None:
		# Stand-in for server defaults populated on INSERT.
		now = datetime.now(UTC)
		if getattr(instance, "id", None) is None:
			instance.id = uuid.uuid4()
		if getattr(instance, "created_at", None) is None:
			instance.created_at = now
		if getattr(instance, "updated_at", None) is None:
			instance.updated_at = now


class FakeRedis:
	def __init__(self) -> None:
		self.setex = AsyncMock()
		self.get = AsyncMock(return_value=None)
		self._counter: dict[str, int] = {}
		self.incr = AsyncMock(side_effect=self._incr)
		self.expire = AsyncMock(return_value=True)

	async def _incr(self, key: str) -> int:
		value = self._counter.get(key, 0) + 1
		self._counter[key] = value
		return value

	def reset_counters(self) -> None:
		self._counter.clear()


def make_profile_row(**overrides: Any) -> SimpleNamespace:
	"""An ORM-shaped farmer profile for tests that bypass the database."""
	now = datetime.now(UTC)
	values: dict[str, Any] = {
		"id": uuid.uuid4(),
		"name": "Asha",
		"farm_size": "Small (< 10 acres)",
		"location": "Punjab, India",
		"experience": "Experienced (2-10 years)",
		"crop_types": ["Wheat", "Basmati Rice"],
		"main_challenges": ["Water management"],
		"soil_type": "Loamy soil",
		"planting_date": "Rabi",
		"irrigation_type": "Flood irrigation",
		"created_at": now,
		"updated_at": now,
	}
	values.update(overrides)
	return SimpleNamespace(**values)


def make_dataset_row(dataset: DatasetIn, **overrides: Any) -> SimpleNamespace:
	"""An ORM-shaped stored dataset built from parsed tabular data."""
	values: dict[str, Any] = {
		"id": uuid.uuid4(),
		"profile_id": None,
		"name": dataset.name,
		"dataset_type": DatasetTypeEnum.csv,
		"columns": list(dataset.columns),
		"data": list(dataset.rows),
		"size_bytes": 128,
		"created_at": datetime.now(UTC),
	}
	values.update(overrides)
	return SimpleNamespace(**values)


@pytest.fixture
def fake_db_session() -> FakeAsyncSession:
	"""A lightweight async-session stub for dependency overrides in API tests."""
	return FakeAsyncSession()


@pytest.fixture
def fake_redis() -> FakeRedis:
	"""Reusable fake Redis client for cache and rate-limit counters."""
	return FakeRedis()


@pytest.fixture
def yield_dataset() -> DatasetIn:
	return DatasetIn(
		name="harvest_2023.csv",
		columns=["year", "crop", "yield_kg"],
		rows=[
			{"year": 2021.0, "crop": "wheat", "yield_kg": 10.0},
			{"year": 2022.0, "crop": "wheat", "yield_kg": 20.0},
			{"year": 2023.0, "crop": "wheat", "yield_kg": 30.0},
		],
	)


@pytest.fixture
def price_dataset() -> DatasetIn:
	return DatasetIn(
		name="mandi_prices.csv",
		columns=["date", "crop", "price"],
		rows=[
			{"date": "2024-01", "crop": "wheat", "price": 2000.0},
			{"date": "2024-02", "crop": "wheat", "price": 2100.0},
			{"date": "2024-03", "crop": "wheat", "price": 2200.0},
		],
	)


@pytest.fixture
async def client(fake_db_session: FakeAsyncSession) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with lifespan disabled and DB dependency mocked."""

	async def override_get_db() -> AsyncGenerator[Any, None]:
		yield fake_db_session

	app.dependency_overrides[get_db] = override_get_db
	original_lifespan = app.router.lifespan_context

	@asynccontextmanager
	async def noop_lifespan(_: Any) -> AsyncGenerator[None, None]:
		yield

	app.router.lifespan_context = noop_lifespan

	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://test") as test_client:
		yield test_client

	app.router.lifespan_context = original_lifespan
	app.dependency_overrides.clear()
