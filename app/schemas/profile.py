"""Pydantic schemas for farmer profiles and the onboarding questionnaire."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.compatibility import CompatibilityResult


class QuestionType(StrEnum):
	text = "text"
	radio = "radio"
	checkbox = "checkbox"


class QuestionnaireQuestion(BaseModel):
	id: str
	question: str
	type: QuestionType
	placeholder: str | None = None
	options: list[str] = Field(default_factory=list)


class QuestionnaireResponse(BaseModel):
	questions: list[QuestionnaireQuestion] = Field(default_factory=list)


class FarmerProfileIn(BaseModel):
	name: str = Field(min_length=1, max_length=255)
	farm_size: str | None = Field(default=None, max_length=100)
	location: str | None = Field(default=None, max_length=255)
	experience: str | None = Field(default=None, max_length=100)
	crop_types: list[str] = Field(default_factory=list)
	main_challenges: list[str] = Field(default_factory=list)
	soil_type: str | None = Field(default=None, max_length=100)
	planting_date: str | None = Field(default=None, max_length=100)
	irrigation_type: str | None = Field(default=None, max_length=100)


class FarmerProfileRead(FarmerProfileIn):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	created_at: datetime
	updated_at: datetime


class CropCompatibilityReport(BaseModel):
	crop: str
	result: CompatibilityResult


class ProfileCompatibilityResponse(BaseModel):
	profile_id: uuid.UUID
	crops: list[CropCompatibilityReport] = Field(default_factory=list)
	recommended_crops: list[str] = Field(default_factory=list)
