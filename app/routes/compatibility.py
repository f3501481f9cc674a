"""Crop compatibility and recommendation routes."""

from __future__ import annotations

from fastapi import APIRouter

from app.schemas.compatibility import (
	CompatibilityCheckRequest,
	CompatibilityResult,
	CropCatalogResponse,
	RecommendationRequest,
	RecommendationResponse,
)
from app.services import compatibility_service
from app.services.crop_catalog import CROP_CATALOG

router = APIRouter(prefix="/compatibility", tags=["compatibility"])


@router.get("/crops", response_model=CropCatalogResponse)
async def list_crops() -> CropCatalogResponse:
	return CropCatalogResponse(items=list(CROP_CATALOG.values()))


@router.post("/check", response_model=CompatibilityResult)
async def check_compatibility(payload: CompatibilityCheckRequest) -> CompatibilityResult:
	return compatibility_service.evaluate(
		payload.crop,
		payload.soil_type,
		payload.irrigation_method,
		payload.location,
		payload.season,
	)


@router.post("/recommendations", response_model=RecommendationResponse)
async def recommend_crops(payload: RecommendationRequest) -> RecommendationResponse:
	crops = compatibility_service.recommend(
		payload.soil_type,
		payload.irrigation_method,
		payload.location,
		payload.season,
	)
	return RecommendationResponse(crops=crops)
