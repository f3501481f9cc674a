"""Pydantic schemas for dataset-driven yield and price predictions."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from app.schemas.dataset import DatasetIn
from app.schemas.profile import FarmerProfileIn


class QueryCategory(StrEnum):
	yield_ = "yield"
	price = "price"
	weather = "weather"
	disease = "disease"
	general = "general"


class PredictionKind(StrEnum):
	yield_ = "yield"
	price = "price"


class PriceTrend(StrEnum):
	increasing = "increasing"
	decreasing = "decreasing"


class YieldRange(BaseModel):
	min: float
	max: float
	average: float
	median: float


class ConfidenceInterval(BaseModel):
	lower: float
	upper: float


class YieldPrediction(BaseModel):
	expected: float
	range: YieldRange
	confidence_interval: ConfidenceInterval


class PricePrediction(BaseModel):
	current_average: float
	recent_average: float
	trend: PriceTrend
	trend_strength: float
	predicted_next_month: float


class PredictionResult(BaseModel):
	kind: PredictionKind
	confidence: float = Field(ge=0.0, le=1.0)
	prediction: YieldPrediction | PricePrediction | None = None
	explanation: str
	data_used: list[str] = Field(default_factory=list)


class YieldConditions(BaseModel):
	weather: str | None = None
	soil_quality: str | None = None


class PredictionRequest(BaseModel):
	query: str = Field(min_length=1, max_length=2000)
	profile: FarmerProfileIn | None = None
	datasets: list[DatasetIn] = Field(default_factory=list)


class PredictionResponse(BaseModel):
	category: QueryCategory
	result: PredictionResult | None = None
