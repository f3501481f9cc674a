"""Crop market price routes."""

from __future__ import annotations

from fastapi import APIRouter

from app.schemas.market import CropPriceBoard
from app.services.market_service import get_crop_prices

router = APIRouter(prefix="/market", tags=["market"])


@router.get("/prices", response_model=CropPriceBoard)
async def list_crop_prices() -> CropPriceBoard:
	return get_crop_prices()
