"""Pydantic schemas for the crop price board."""

from __future__ import annotations

import datetime as dt
from enum import StrEnum

from pydantic import BaseModel, Field


class MarketTrend(StrEnum):
	up = "up"
	down = "down"
	stable = "stable"


class CropPrice(BaseModel):
	crop: str
	price: float = Field(gt=0)
	unit: str
	currency: str
	trend: MarketTrend
	change: float
	date: dt.date


class CropPriceBoard(BaseModel):
	items: list[CropPrice] = Field(default_factory=list)
