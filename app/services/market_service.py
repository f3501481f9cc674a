"""Reference crop price board (INR per ton)."""

from __future__ import annotations

from datetime import UTC, date, datetime

from app.schemas.market import CropPrice, CropPriceBoard, MarketTrend

# crop, price, trend, change %
_REFERENCE_PRICES: tuple[tuple[str, float, MarketTrend, float], ...] = (
	("Wheat", 20350, MarketTrend.up, 2.3),
	("Corn", 18750, MarketTrend.down, -1.2),
	("Soybeans", 42500, MarketTrend.up, 5.8),
	("Rice (Basmati)", 45000, MarketTrend.stable, 0.5),
	("Tomatoes", 25000, MarketTrend.up, 12.5),
	("Potatoes", 18000, MarketTrend.down, -3.2),
	("Cotton", 62000, MarketTrend.up, 3.5),
	("Sugarcane", 3200, MarketTrend.stable, 0.5),
	("Onions", 15000, MarketTrend.down, -8.2),
	("Turmeric", 95000, MarketTrend.up, 4.8),
	("Chickpeas", 55000, MarketTrend.up, 6.2),
)


def get_crop_prices(as_of: date | None = None) -> CropPriceBoard:
	as_of = as_of or datetime.now(UTC).date()
	return CropPriceBoard(
		items=[
			CropPrice(
				crop=crop,
				price=price,
				unit="per ton",
				currency="INR",
				trend=trend,
				change=change,
				date=as_of,
			)
			for crop, price, trend, change in _REFERENCE_PRICES
		]
	)
