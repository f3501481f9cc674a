from __future__ import annotations

import pytest
from httpx import AsyncClient

from app.schemas.dataset import DatasetIn
from app.schemas.prediction import (
    PredictionKind,
    PricePrediction,
    PriceTrend,
    QueryCategory,
    YieldConditions,
    YieldPrediction,
)
from app.schemas.profile import FarmerProfileIn
from app.services import prediction_service


def _dataset(name: str, column: str, values: list) -> DatasetIn:
    return DatasetIn(name=name, columns=[column], rows=[{column: value} for value in values])


@pytest.mark.parametrize(
    ("text", "category"),
    [
        ("What will my HARVEST look like?", QueryCategory.yield_),
        ("Should I sell now?", QueryCategory.price),
        ("Will it rain this week", QueryCategory.weather),
        ("pest on my leaves", QueryCategory.disease),
        ("hello there", QueryCategory.general),
        ("", QueryCategory.general),
        ("market price for my yield", QueryCategory.yield_),
    ],
)
def test_classify_query(text: str, category: QueryCategory) -> None:
    assert prediction_service.classify_query(text) == category


def test_has_relevant_columns(yield_dataset: DatasetIn, price_dataset: DatasetIn) -> None:
    assert prediction_service.has_relevant_columns(QueryCategory.yield_, [yield_dataset]) is True
    assert prediction_service.has_relevant_columns(QueryCategory.yield_, [price_dataset]) is False
    assert prediction_service.has_relevant_columns("price", [yield_dataset, price_dataset]) is True
    assert prediction_service.has_relevant_columns(QueryCategory.weather, [_dataset("w", "Rainfall_mm", [1])]) is True
    assert prediction_service.has_relevant_columns(QueryCategory.general, [yield_dataset]) is False
    assert prediction_service.has_relevant_columns(QueryCategory.price, []) is False


def test_predict_yield_descriptive_statistics(yield_dataset: DatasetIn) -> None:
    result = prediction_service.predict_yield([yield_dataset])

    assert result.kind == PredictionKind.yield_
    assert isinstance(result.prediction, YieldPrediction)
    assert result.prediction.expected == 20
    assert result.prediction.range.min == 10
    assert result.prediction.range.max == 30
    assert result.prediction.range.average == 20
    assert result.prediction.range.median == 20
    assert result.prediction.confidence_interval.lower == 16
    assert result.prediction.confidence_interval.upper == 24
    assert result.confidence == 0.4
    assert result.data_used == ["harvest_2023.csv"]
    assert result.explanation == (
        "Based on analysis of 3 data points from 1 dataset(s). "
        "Historical average: 20. Adjusted for current conditions."
    )


def test_predict_yield_applies_condition_multipliers(yield_dataset: DatasetIn) -> None:
    good = prediction_service.predict_yield([yield_dataset], YieldConditions(weather="good"))
    assert good.prediction.expected == 22.0

    poor_low = prediction_service.predict_yield([yield_dataset], YieldConditions(weather="poor", soil_quality="low"))
    assert poor_low.prediction.expected == 17.1

    unknown = prediction_service.predict_yield([yield_dataset], YieldConditions(weather="stormy", soil_quality="medium"))
    assert unknown.prediction.expected == 20


def test_predict_yield_median_takes_upper_middle() -> None:
    result = prediction_service.predict_yield([_dataset("y.csv", "Yield", [40, 10, 30, 20])])
    assert result.prediction.range.median == 30
    assert result.prediction.range.average == 25


def test_predict_yield_pools_datasets_and_skips_unusable_cells() -> None:
    first = _dataset("a.csv", "production", [10, 0, -4, "n/a", "15 kg", "1e999"])
    second = _dataset("b.csv", "harvest_tons", [5])
    result = prediction_service.predict_yield([first, second])

    assert result.prediction.range.min == 10
    assert result.prediction.range.max == 15
    assert result.data_used == ["a.csv", "b.csv"]
    assert result.explanation.startswith("Based on analysis of 2 data points from 2 dataset(s).")


def test_predict_yield_ignores_harvest_only_columns() -> None:
    dataset = DatasetIn(
        name="seasons.csv",
        columns=["harvest_date", "crop"],
        rows=[{"harvest_date": 2023, "crop": "wheat"}, {"harvest_date": 2024, "crop": "wheat"}],
    )
    result = prediction_service.predict_yield([dataset])

    assert result.confidence == 0.2
    assert result.prediction is None
    assert result.data_used == ["seasons.csv"]


def test_predict_yield_skips_overflowing_cells() -> None:
    result = prediction_service.predict_yield([_dataset("y.csv", "yield", [10, "1e999"])])

    assert result.prediction.expected == 10
    assert result.confidence == 0.4


@pytest.mark.parametrize(
    ("values", "conditions"),
    [
        ([1e308, 1e308], None),
        ([1.6e308], YieldConditions(weather="good")),
    ],
)
def test_predict_yield_reports_overflowing_totals_as_insufficient(values, conditions) -> None:
    result = prediction_service.predict_yield([_dataset("huge.csv", "yield", values)], conditions)

    assert result.confidence == 0.2
    assert result.prediction is None
    assert result.explanation == "Insufficient yield data for reliable prediction"


def test_predict_yield_confidence_caps_at_085() -> None:
    result = prediction_service.predict_yield([_dataset("big.csv", "yield", list(range(1, 201)))])
    assert result.confidence == 0.85


def test_predict_yield_without_yield_columns(price_dataset: DatasetIn) -> None:
    result = prediction_service.predict_yield([price_dataset])

    assert result.confidence == 0.0
    assert result.prediction is None
    assert result.data_used == []
    assert result.explanation == "No yield data available for prediction"


def test_predict_yield_with_no_positive_values() -> None:
    result = prediction_service.predict_yield([_dataset("empty.csv", "yield", [0, "", "none"])])

    assert result.confidence == 0.2
    assert result.prediction is None
    assert result.data_used == ["empty.csv"]
    assert result.explanation == "Insufficient yield data for reliable prediction"


def test_predict_price_short_series_is_flat_and_decreasing(price_dataset: DatasetIn) -> None:
    result = prediction_service.predict_price([price_dataset], "wheat")

    assert result.kind == PredictionKind.price
    assert isinstance(result.prediction, PricePrediction)
    assert result.prediction.current_average == 2100
    assert result.prediction.recent_average == 2100
    assert result.prediction.trend == PriceTrend.decreasing
    assert result.prediction.trend_strength == 0
    assert result.prediction.predicted_next_month == 1995
    assert result.confidence == 0.4
    assert result.explanation == "Based on 3 price records. Current trend is decreasing with 0% strength."


def test_predict_price_detects_rising_recent_window() -> None:
    result = prediction_service.predict_price([_dataset("p.csv", "Price", [100, 100] + [200] * 10)])

    assert result.prediction.trend == PriceTrend.increasing
    assert result.prediction.recent_average == 200
    assert result.prediction.current_average == 183.33
    assert result.prediction.trend_strength == 9.09
    assert result.prediction.predicted_next_month == 210
    assert result.explanation.endswith("Current trend is increasing with 9% strength.")


def test_predict_price_reads_only_price_or_cost_columns() -> None:
    result = prediction_service.predict_price([_dataset("m.csv", "market_rate", [10, 20])])

    assert result.confidence == 0.2
    assert result.prediction is None
    assert result.data_used == ["m.csv"]

    cost = prediction_service.predict_price([_dataset("c.csv", "unit_cost", [10, 20])])
    assert cost.prediction.current_average == 15


def test_predict_price_reports_overflowing_totals_as_insufficient() -> None:
    result = prediction_service.predict_price([_dataset("huge.csv", "price", [1e308, 1e308])])

    assert result.confidence == 0.2
    assert result.prediction is None
    assert result.explanation == "Insufficient price data for reliable prediction"


def test_predict_price_without_price_data(yield_dataset: DatasetIn) -> None:
    missing = prediction_service.predict_price([yield_dataset])
    assert missing.confidence == 0.0
    assert missing.explanation == "No price data available for prediction"

    unusable = prediction_service.predict_price([_dataset("p.csv", "price", ["tbd", 0])])
    assert unusable.confidence == 0.2
    assert unusable.data_used == ["p.csv"]


def test_predict_dispatches_yield_with_profile_soil(yield_dataset: DatasetIn) -> None:
    loamy = FarmerProfileIn(name="Asha", soil_type="Loamy soil", crop_types=["Wheat"])
    clay = FarmerProfileIn(name="Ravi", soil_type="Clay soil")

    assert prediction_service.predict("expected yield?", loamy, [yield_dataset]).prediction.expected == 23.1
    assert prediction_service.predict("expected yield?", clay, [yield_dataset]).prediction.expected == 22.0
    assert prediction_service.predict("expected yield?", None, [yield_dataset]).prediction.expected == 22.0


def test_predict_dispatches_price(price_dataset: DatasetIn) -> None:
    result = prediction_service.predict("best time to sell?", None, [price_dataset])
    assert result is not None
    assert result.kind == PredictionKind.price


def test_predict_returns_none_for_assistant_questions(yield_dataset: DatasetIn, price_dataset: DatasetIn) -> None:
    assert prediction_service.predict("Will it rain tomorrow?", None, [yield_dataset]) is None
    assert prediction_service.predict("How do I treat blight disease?", None, [yield_dataset]) is None
    assert prediction_service.predict("what is the price trend", None, [yield_dataset]) is None
    assert prediction_service.predict("what is my yield", None, [price_dataset]) is None
    assert prediction_service.predict("what is my yield", None, []) is None


def test_summarize_datasets(yield_dataset: DatasetIn, price_dataset: DatasetIn) -> None:
    insights = prediction_service.summarize_datasets([yield_dataset, price_dataset])

    assert insights == [
        "📊 harvest_2023.csv: 3 records with 3 variables",
        "🔢 Numeric data available for: year, yield_kg",
        "📅 Time-series data detected - can analyze trends and patterns",
        "📊 mandi_prices.csv: 3 records with 3 variables",
        "🔢 Numeric data available for: date, price",
        "📅 Time-series data detected - can analyze trends and patterns",
        "🔗 Multiple datasets available for cross-analysis and correlation studies",
    ]


def test_summarize_truncates_numeric_columns() -> None:
    wide = DatasetIn(name="wide.csv", columns=["a", "b", "c", "d"], rows=[{"a": 1, "b": 2, "c": 3, "d": 4}])
    assert prediction_service.summarize_datasets([wide]) == [
        "📊 wide.csv: 1 records with 4 variables",
        "🔢 Numeric data available for: a, b, c...",
    ]


def test_summarize_empty_input() -> None:
    assert prediction_service.summarize_datasets([]) == []
    assert prediction_service.summarize_datasets([DatasetIn(name="blank.csv")]) == [
        "📊 blank.csv: 0 records with 0 variables"
    ]


def test_describe_prediction(yield_dataset: DatasetIn) -> None:
    text = prediction_service.describe_prediction(
        prediction_service.predict_yield([yield_dataset], YieldConditions(weather="good"))
    )
    assert "Expected yield: 22 (likely between 17.6 and 26.4)" in text
    assert "Data used: harvest_2023.csv" in text


@pytest.mark.asyncio
async def test_prediction_endpoint(client: AsyncClient, yield_dataset: DatasetIn) -> None:
    response = await client.post(
        "/api/v1/predictions",
        json={"query": "How much yield next season?", "datasets": [yield_dataset.model_dump()]},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["category"] == "yield"
    assert body["result"]["kind"] == "yield"
    assert body["result"]["prediction"]["expected"] == 22.0


@pytest.mark.asyncio
async def test_prediction_endpoint_defers_general_questions(client: AsyncClient) -> None:
    response = await client.post("/api/v1/predictions", json={"query": "hello"})

    assert response.status_code == 200
    assert response.json() == {"category": "general", "result": None}


@pytest.mark.asyncio
async def test_prediction_endpoint_with_extreme_values(client: AsyncClient) -> None:
    dataset = {"name": "huge.csv", "columns": ["yield"], "rows": [{"yield": 1e308}, {"yield": 1e308}]}
    response = await client.post("/api/v1/predictions", json={"query": "expected yield?", "datasets": [dataset]})

    assert response.status_code == 200
    result = response.json()["result"]
    assert result["confidence"] == 0.2
    assert result["prediction"] is None
