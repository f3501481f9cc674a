"""Pydantic schemas for uploaded farming datasets."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from app.models.enums import DatasetTypeEnum

CellValue = float | str


class DatasetIn(BaseModel):
	"""Tabular data as the predictor reads it: ordered columns plus rows of cells."""

	name: str = Field(min_length=1, max_length=255)
	columns: list[str] = Field(default_factory=list)
	rows: list[dict[str, CellValue]] = Field(default_factory=list)


class DatasetSummary(BaseModel):
	id: uuid.UUID
	profile_id: uuid.UUID | None = None
	name: str
	dataset_type: DatasetTypeEnum
	columns: list[str] = Field(default_factory=list)
	row_count: int = 0
	size_bytes: int = 0
	created_at: datetime


class DatasetRead(DatasetSummary):
	rows: list[dict[str, CellValue]] = Field(default_factory=list)


class DatasetListRead(BaseModel):
	items: list[DatasetSummary] = Field(default_factory=list)


class DatasetInsightsResponse(BaseModel):
	dataset_count: int = 0
	insights: list[str] = Field(default_factory=list)
