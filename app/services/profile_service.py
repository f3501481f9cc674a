"""Onboarding questionnaire, farmer profile CRUD and profile compatibility reports."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.profiles import FarmerProfile
from app.schemas.profile import (
	CropCompatibilityReport,
	FarmerProfileIn,
	ProfileCompatibilityResponse,
	QuestionnaireQuestion,
	QuestionType,
)
from app.services import compatibility_service
from app.services.crop_catalog import CROP_CATALOG, resolve_crop_id

SOIL_TYPE_OPTIONS = [
	"Loamy soil",
	"Clay soil",
	"Sandy soil",
	"Sandy loam",
	"Clay loam",
	"Alluvial soil",
	"Black soil",
	"Red soil",
]

IRRIGATION_OPTIONS = [
	"Drip irrigation",
	"Sprinkler irrigation",
	"Flood irrigation",
	"Furrow irrigation",
	"Center pivot",
	"Rain-fed",
]

SEASON_OPTIONS = [
	"Spring",
	"Summer",
	"Fall",
	"Winter",
	"Monsoon",
	"Kharif",
	"Rabi",
	"Year-round",
]

QUESTIONNAIRE: list[QuestionnaireQuestion] = [
	QuestionnaireQuestion(
		id="name",
		question="What's your name?",
		type=QuestionType.text,
		placeholder="Enter your name",
	),
	QuestionnaireQuestion(
		id="farm_size",
		question="What's the size of your farm?",
		type=QuestionType.radio,
		options=["Small (< 10 acres)", "Medium (10-100 acres)", "Large (100+ acres)"],
	),
	QuestionnaireQuestion(
		id="crop_types",
		question="What crops do you grow?",
		type=QuestionType.checkbox,
		options=[profile.name for profile in CROP_CATALOG.values()],
	),
	QuestionnaireQuestion(
		id="location",
		question="Where is your farm located?",
		type=QuestionType.text,
		placeholder="Enter your location (city, state/country)",
	),
	QuestionnaireQuestion(
		id="soil_type",
		question="What type of soil does your farm have?",
		type=QuestionType.radio,
		options=SOIL_TYPE_OPTIONS,
	),
	QuestionnaireQuestion(
		id="irrigation_type",
		question="How do you irrigate your fields?",
		type=QuestionType.radio,
		options=IRRIGATION_OPTIONS,
	),
	QuestionnaireQuestion(
		id="planting_date",
		question="When do you usually plant?",
		type=QuestionType.radio,
		options=SEASON_OPTIONS,
	),
	QuestionnaireQuestion(
		id="experience",
		question="How long have you been farming?",
		type=QuestionType.radio,
		options=["New farmer (< 2 years)", "Experienced (2-10 years)", "Veteran (10+ years)"],
	),
	QuestionnaireQuestion(
		id="main_challenges",
		question="What are your main farming challenges?",
		type=QuestionType.checkbox,
		options=[
			"Pest control",
			"Weather conditions",
			"Soil quality",
			"Market prices",
			"Water management",
			"Equipment",
		],
	),
]


class ProfileService:
	"""Service for farmer profile persistence and condition checks."""

	def __init__(self, db: AsyncSession):
		self.db = db

	async def create_profile(self, payload: FarmerProfileIn) -> FarmerProfile:
		profile = FarmerProfile(**payload.model_dump())
		self.db.add(profile)
		await self.db.flush()
		await self.db.refresh(profile)
		return profile

	async def get_profile(self, profile_id: uuid.UUID) -> FarmerProfile:
		row = await self.db.execute(select(FarmerProfile).where(FarmerProfile.id == profile_id))
		profile = row.scalar_one_or_none()
		if profile is None:
			raise LookupError(f"Profile {profile_id} not found")
		return profile

	async def update_profile(self, profile_id: uuid.UUID, payload: FarmerProfileIn) -> FarmerProfile:
		profile = await self.get_profile(profile_id)
		for field, value in payload.model_dump().items():
			setattr(profile, field, value)
		await self.db.flush()
		await self.db.refresh(profile)
		return profile

	@staticmethod
	def to_schema(profile: FarmerProfile) -> FarmerProfileIn:
		return FarmerProfileIn(
			name=profile.name,
			farm_size=profile.farm_size,
			location=profile.location,
			experience=profile.experience,
			crop_types=list(profile.crop_types or []),
			main_challenges=list(profile.main_challenges or []),
			soil_type=profile.soil_type,
			planting_date=profile.planting_date,
			irrigation_type=profile.irrigation_type,
		)

	@staticmethod
	def compatibility_report(profile_id: uuid.UUID, profile: FarmerProfileIn) -> ProfileCompatibilityResponse:
		missing = [
			field
			for field in ("soil_type", "irrigation_type", "planting_date")
			if not getattr(profile, field)
		]
		if missing:
			raise ValueError(f"profile is missing {', '.join(missing)}")

		assert profile.soil_type and profile.irrigation_type and profile.planting_date
		location = profile.location or ""
		reports = [
			CropCompatibilityReport(
				crop=crop,
				result=compatibility_service.evaluate(
					resolve_crop_id(crop),
					profile.soil_type,
					profile.irrigation_type,
					location,
					profile.planting_date,
				),
			)
			for crop in profile.crop_types
		]
		return ProfileCompatibilityResponse(
			profile_id=profile_id,
			crops=reports,
			recommended_crops=compatibility_service.recommend(
				profile.soil_type,
				profile.irrigation_type,
				location,
				profile.planting_date,
			),
		)
