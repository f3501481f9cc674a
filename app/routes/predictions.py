"""Dataset-driven prediction route."""

from __future__ import annotations

from fastapi import APIRouter

from app.schemas.prediction import PredictionRequest, PredictionResponse
from app.services import prediction_service

router = APIRouter(prefix="/predictions", tags=["predictions"])


@router.post("", response_model=PredictionResponse)
async def create_prediction(payload: PredictionRequest) -> PredictionResponse:
	return PredictionResponse(
		category=prediction_service.classify_query(payload.query),
		result=prediction_service.predict(payload.query, payload.profile, payload.datasets),
	)
