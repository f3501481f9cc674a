"""Questionnaire and farmer profile routes."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.profile import (
	FarmerProfileIn,
	FarmerProfileRead,
	ProfileCompatibilityResponse,
	QuestionnaireResponse,
)
from app.services.profile_service import QUESTIONNAIRE, ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(
		status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
		detail="Unexpected profile service failure",
	)


@router.get("/questionnaire", response_model=QuestionnaireResponse)
async def get_questionnaire() -> QuestionnaireResponse:
	return QuestionnaireResponse(questions=QUESTIONNAIRE)


@router.post("", response_model=FarmerProfileRead, status_code=status.HTTP_201_CREATED)
async def create_profile(
	payload: FarmerProfileIn,
	db: AsyncSession = Depends(get_db),
) -> FarmerProfileRead:
	service = ProfileService(db)
	try:
		profile = await service.create_profile(payload)
	except Exception as exc:
		raise _map_error(exc) from exc
	return FarmerProfileRead.model_validate(profile)


@router.get("/{profile_id}", response_model=FarmerProfileRead)
async def get_profile(
	profile_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
) -> FarmerProfileRead:
	service = ProfileService(db)
	try:
		profile = await service.get_profile(profile_id)
	except Exception as exc:
		raise _map_error(exc) from exc
	return FarmerProfileRead.model_validate(profile)


@router.put("/{profile_id}", response_model=FarmerProfileRead)
async def update_profile(
	profile_id: uuid.UUID,
	payload: FarmerProfileIn,
	db: AsyncSession = Depends(get_db),
) -> FarmerProfileRead:
	service = ProfileService(db)
	try:
		profile = await service.update_profile(profile_id, payload)
	except Exception as exc:
		raise _map_error(exc) from exc
	return FarmerProfileRead.model_validate(profile)


@router.get("/{profile_id}/compatibility", response_model=ProfileCompatibilityResponse)
async def get_profile_compatibility(
	profile_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
) -> ProfileCompatibilityResponse:
	service = ProfileService(db)
	try:
		profile = await service.get_profile(profile_id)
		return service.compatibility_report(profile_id, service.to_schema(profile))
	except Exception as exc:
		raise _map_error(exc) from exc
