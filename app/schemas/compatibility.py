"""Pydantic schemas for crop compatibility evaluation."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class WaterRequirement(StrEnum):
	low = "low"
	medium = "medium"
	high = "high"


class CompatibilityDimension(StrEnum):
	soil = "soil"
	irrigation = "irrigation"
	climate = "climate"
	season = "season"


class IssueSeverity(StrEnum):
	warning = "warning"
	error = "error"


class CropProfile(BaseModel):
	"""Static reference entry for one crop. Label tuples keep their display order."""

	model_config = ConfigDict(frozen=True)

	id: str = Field(min_length=1)
	name: str = Field(min_length=1)
	soil_types: tuple[str, ...]
	irrigation_methods: tuple[str, ...]
	climate_zones: tuple[str, ...]
	min_temperature: float
	max_temperature: float
	water_requirement: WaterRequirement
	growing_seasons: tuple[str, ...]
	common_issues: tuple[str, ...] = ()
	alternatives: tuple[str, ...] = ()


class CompatibilityIssue(BaseModel):
	model_config = ConfigDict(frozen=True)

	dimension: CompatibilityDimension
	severity: IssueSeverity
	message: str
	suggestions: list[str] = Field(default_factory=list)


class CompatibilityResult(BaseModel):
	compatible: bool
	issues: list[CompatibilityIssue] = Field(default_factory=list)
	recommended_alternatives: list[str] = Field(default_factory=list)
	score: int = Field(ge=0, le=100)


class CompatibilityCheckRequest(BaseModel):
	crop: str = Field(min_length=1, max_length=100)
	soil_type: str = Field(max_length=100)
	irrigation_method: str = Field(max_length=100)
	location: str = Field(default="", max_length=255)
	season: str = Field(max_length=100)


class RecommendationRequest(BaseModel):
	soil_type: str = Field(max_length=100)
	irrigation_method: str = Field(max_length=100)
	location: str = Field(default="", max_length=255)
	season: str = Field(max_length=100)


class RecommendationResponse(BaseModel):
	crops: list[str] = Field(default_factory=list)


class CropCatalogResponse(BaseModel):
	items: list[CropProfile] = Field(default_factory=list)
