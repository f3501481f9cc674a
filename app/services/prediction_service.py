"""Statistical yield/price predictions over user-uploaded datasets.

Everything here is a synchronous, pure computation over datasets already in
memory: column discovery by keyword, pooled descriptive statistics and a
recent-versus-overall price trend. Missing or unusable data is reported through
a zero/low confidence result, never an exception.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from app.schemas.dataset import DatasetIn
from app.schemas.prediction import (
	ConfidenceInterval,
	PredictionKind,
	PredictionResult,
	PricePrediction,
	PriceTrend,
	QueryCategory,
	YieldConditions,
	YieldPrediction,
	YieldRange,
)
from app.schemas.profile import FarmerProfileIn
from app.services.parsing import format_number, parse_number, round2, round_half_up

# Query classification keywords, checked in this priority order.
QUERY_KEYWORDS: dict[QueryCategory, tuple[str, ...]] = {
	QueryCategory.yield_: ("yield", "harvest", "production"),
	QueryCategory.price: ("price", "market", "sell"),
	QueryCategory.weather: ("weather", "rain", "temperature"),
	QueryCategory.disease: ("disease", "pest", "infection"),
}

# Column-name fragments that make a dataset relevant to a category.
COLUMN_KEYWORDS: dict[QueryCategory, tuple[str, ...]] = {
	QueryCategory.yield_: ("yield", "production", "harvest", "output", "kg", "tons", "bushels"),
	QueryCategory.price: ("price", "cost", "market", "value", "sell", "buy", "dollar", "currency"),
	QueryCategory.weather: ("temperature", "rainfall", "humidity", "weather", "climate", "precipitation"),
	QueryCategory.disease: ("disease", "pest", "infection", "damage", "loss", "health", "treatment"),
}

# Datasets are admitted by the wider key set; values are only read from the narrower one.
_YIELD_DATASET_KEYS = ("yield", "production", "harvest")
_YIELD_VALUE_KEYS = ("yield", "production")
_PRICE_DATASET_KEYS = ("price", "cost", "market")
_PRICE_VALUE_KEYS = ("price", "cost")
_TIME_KEYS = ("date", "time", "year")

RECENT_WINDOW = 10

WEATHER_MULTIPLIERS = {"good": 1.10, "poor": 0.90}
SOIL_QUALITY_MULTIPLIERS = {"high": 1.05, "low": 0.95}

# Weather is not sourced from the live weather service on the orchestration path.
ASSUMED_WEATHER = "good"
HIGH_QUALITY_SOIL = "Loamy soil"


@dataclass(slots=True, frozen=True)
class PriceObservation:
	price: float
	date: Any
	crop: Any


def classify_query(text: str) -> QueryCategory:
	lowered = text.lower()
	for category, keywords in QUERY_KEYWORDS.items():
		if any(word in lowered for word in keywords):
			return category
	return QueryCategory.general


def _column_matches(column: str, keywords: Sequence[str]) -> bool:
	lowered = column.lower()
	return any(word in lowered for word in keywords)


def _has_column(dataset: DatasetIn, keywords: Sequence[str]) -> bool:
	return any(_column_matches(column, keywords) for column in dataset.columns)


def _find_column(dataset: DatasetIn, keywords: Sequence[str]) -> str | None:
	for column in dataset.columns:
		if _column_matches(column, keywords):
			return column
	return None


def has_relevant_columns(category: QueryCategory | str, datasets: Sequence[DatasetIn]) -> bool:
	keywords = COLUMN_KEYWORDS.get(QueryCategory(category), ())
	if not keywords:
		return False
	return any(_has_column(dataset, keywords) for dataset in datasets)


def _mean(values: Sequence[float]) -> float:
	return sum(values) / len(values)


def _clamp(value: float, low: float, high: float) -> float:
	return min(high, max(low, value))


def _finite(*values: float) -> bool:
	return all(math.isfinite(value) for value in values)


def _insufficient(kind: PredictionKind, names: list[str]) -> PredictionResult:
	return PredictionResult(
		kind=kind,
		confidence=0.2,
		prediction=None,
		explanation=f"Insufficient {kind.value} data for reliable prediction",
		data_used=names,
	)


def predict_yield(
	datasets: Sequence[DatasetIn],
	conditions: YieldConditions | None = None,
) -> PredictionResult:
	matching = [dataset for dataset in datasets if _has_column(dataset, _YIELD_DATASET_KEYS)]
	if not matching:
		return PredictionResult(
			kind=PredictionKind.yield_,
			confidence=0.0,
			prediction=None,
			explanation="No yield data available for prediction",
			data_used=[],
		)

	sample: list[float] = []
	for dataset in matching:
		column = _find_column(dataset, _YIELD_VALUE_KEYS)
		if column is None:
			continue
		for row in dataset.rows:
			value = parse_number(row.get(column))
			if value is not None and value > 0:
				sample.append(value)

	names = [dataset.name for dataset in matching]
	if not sample:
		return _insufficient(PredictionKind.yield_, names)

	average = _mean(sample)
	ordered = sorted(sample)
	# Upper-middle element for even-length samples, not the mean of the two middles.
	median = ordered[len(ordered) // 2]

	conditions = conditions or YieldConditions()
	adjusted = average
	adjusted *= WEATHER_MULTIPLIERS.get(conditions.weather or "", 1.0)
	adjusted *= SOIL_QUALITY_MULTIPLIERS.get(conditions.soil_quality or "", 1.0)
	# Cells near the float limit can overflow the pooled mean.
	if not _finite(average, adjusted * 1.2):
		return _insufficient(PredictionKind.yield_, names)

	return PredictionResult(
		kind=PredictionKind.yield_,
		confidence=_clamp(len(sample) / 100, 0.4, 0.85),
		prediction=YieldPrediction(
			expected=round2(adjusted),
			range=YieldRange(
				min=round2(ordered[0]),
				max=round2(ordered[-1]),
				average=round2(average),
				median=round2(median),
			),
			confidence_interval=ConfidenceInterval(
				lower=round2(adjusted * 0.8),
				upper=round2(adjusted * 1.2),
			),
		),
		explanation=(
			f"Based on analysis of {len(sample)} data points from {len(matching)} dataset(s). "
			f"Historical average: {format_number(average)}. Adjusted for current conditions."
		),
		data_used=names,
	)


def _price_observations(dataset: DatasetIn, crop_id: str) -> list[PriceObservation]:
	column = _find_column(dataset, _PRICE_VALUE_KEYS)
	if column is None:
		return []
	observations = []
	for row in dataset.rows:
		price = parse_number(row.get(column))
		if price is None or price <= 0:
			continue
		observations.append(
			PriceObservation(
				price=price,
				date=row.get("date") or row.get("Date") or row.get("timestamp"),
				crop=row.get("crop") or crop_id,
			)
		)
	return observations


def predict_price(datasets: Sequence[DatasetIn], crop_id: str = "general") -> PredictionResult:
	matching = [dataset for dataset in datasets if _has_column(dataset, _PRICE_DATASET_KEYS)]
	if not matching:
		return PredictionResult(
			kind=PredictionKind.price,
			confidence=0.0,
			prediction=None,
			explanation="No price data available for prediction",
			data_used=[],
		)

	observations = [obs for dataset in matching for obs in _price_observations(dataset, crop_id)]
	names = [dataset.name for dataset in matching]
	if not observations:
		return _insufficient(PredictionKind.price, names)

	overall = _mean([obs.price for obs in observations])
	recent = _mean([obs.price for obs in observations[-RECENT_WINDOW:]])
	# Strict comparison: equal means classify as decreasing.
	trend = PriceTrend.increasing if recent > overall else PriceTrend.decreasing
	strength = abs(recent - overall) / overall
	factor = 1.05 if trend == PriceTrend.increasing else 0.95
	if not _finite(overall, strength * 100, recent * factor):
		return _insufficient(PredictionKind.price, names)

	return PredictionResult(
		kind=PredictionKind.price,
		confidence=_clamp(len(observations) / 50, 0.4, 0.8),
		prediction=PricePrediction(
			current_average=round2(overall),
			recent_average=round2(recent),
			trend=trend,
			trend_strength=round2(strength * 100),
			predicted_next_month=round2(recent * factor),
		),
		explanation=(
			f"Based on {len(observations)} price records. "
			f"Current trend is {trend.value} with {int(round_half_up(strength * 100))}% strength."
		),
		data_used=names,
	)


def predict(
	query: str,
	profile: FarmerProfileIn | None,
	datasets: Sequence[DatasetIn],
) -> PredictionResult | None:
	"""Answer yield/price questions from local data; ``None`` means ask the assistant."""
	category = classify_query(query)
	if category not in (QueryCategory.yield_, QueryCategory.price):
		return None
	if not has_relevant_columns(category, datasets):
		return None

	crop_id = profile.crop_types[0] if profile is not None and profile.crop_types else "general"
	if category == QueryCategory.yield_:
		soil_type = profile.soil_type if profile is not None else None
		conditions = YieldConditions(
			weather=ASSUMED_WEATHER,
			soil_quality="high" if soil_type == HIGH_QUALITY_SOIL else "medium",
		)
		return predict_yield(datasets, conditions)
	return predict_price(datasets, crop_id)


def _is_numeric_cell(value: Any) -> bool:
	return parse_number(value) is not None


def summarize_datasets(datasets: Sequence[DatasetIn]) -> list[str]:
	insights: list[str] = []
	for dataset in datasets:
		insights.append(
			f"📊 {dataset.name}: {len(dataset.rows)} records with {len(dataset.columns)} variables"
		)

		first_row = dataset.rows[0] if dataset.rows else {}
		numeric = [column for column in dataset.columns if _is_numeric_cell(first_row.get(column))]
		if numeric:
			more = "..." if len(numeric) > 3 else ""
			insights.append(f"🔢 Numeric data available for: {', '.join(numeric[:3])}{more}")

		if any(_column_matches(column, _TIME_KEYS) for column in dataset.columns):
			insights.append("📅 Time-series data detected - can analyze trends and patterns")

	if len(datasets) > 1:
		insights.append("🔗 Multiple datasets available for cross-analysis and correlation studies")
	return insights


def describe_prediction(result: PredictionResult) -> str:
	"""Human-readable block for a prediction, used at the top of a chat reply."""
	confidence = f"{round(result.confidence * 100)}%"
	lines: list[str] = []
	payload = result.prediction
	if isinstance(payload, YieldPrediction):
		lines.append(f"📊 Yield prediction (confidence {confidence})")
		lines.append(
			f"Expected yield: {format_number(payload.expected)} "
			f"(likely between {format_number(payload.confidence_interval.lower)} "
			f"and {format_number(payload.confidence_interval.upper)})"
		)
		lines.append(
			f"Historical range: {format_number(payload.range.min)} to {format_number(payload.range.max)}, "
			f"median {format_number(payload.range.median)}"
		)
	elif isinstance(payload, PricePrediction):
		lines.append(f"📈 Price prediction (confidence {confidence})")
		lines.append(
			f"Average price: {format_number(payload.current_average)}, "
			f"recent average: {format_number(payload.recent_average)}"
		)
		lines.append(
			f"Trend: {payload.trend.value} ({format_number(payload.trend_strength)}%), "
			f"expected next month: {format_number(payload.predicted_next_month)}"
		)
	else:
		lines.append(f"📊 {result.kind.value.capitalize()} prediction unavailable")

	lines.append(result.explanation)
	if result.data_used:
		lines.append(f"Data used: {', '.join(result.data_used)}")
	return "\n".join(lines)
