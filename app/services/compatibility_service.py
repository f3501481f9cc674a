"""Rule-based crop/soil/irrigation/season/climate compatibility scoring.

Scores start at 100 and each failed check deducts a fixed penalty:

    soil        error    -30
    irrigation  warning  -20
    season      warning  -15
    climate     error    -35

``compatible`` depends only on whether an error-severity issue fired, not on
the numeric score.
"""

from __future__ import annotations

from collections.abc import Mapping

from app.schemas.compatibility import (
	CompatibilityDimension,
	CompatibilityIssue,
	CompatibilityResult,
	CropProfile,
	IssueSeverity,
)
from app.services.crop_catalog import CROP_CATALOG

SOIL_PENALTY = 30
IRRIGATION_PENALTY = 20
SEASON_PENALTY = 15
CLIMATE_PENALTY = 35

RECOMMENDATION_MIN_SCORE = 70
RECOMMENDATION_LIMIT = 5

_HOT_KEYWORDS = ("tropical", "hot")
_COLD_KEYWORDS = ("cold", "arctic")
_HOT_ZONES = ("tropical", "subtropical")
_COLD_ZONES = ("temperate", "cool temperate")


def _alternatives_hint(crop: CropProfile) -> str:
	return f"Alternative crops: {', '.join(crop.alternatives) or 'consult local extension'}"


def check_soil(crop: CropProfile, soil_type: str) -> CompatibilityIssue | None:
	if soil_type in crop.soil_types:
		return None
	return CompatibilityIssue(
		dimension=CompatibilityDimension.soil,
		severity=IssueSeverity.error,
		message=f"{crop.name} is not well-suited for {soil_type}",
		suggestions=[
			"Consider soil amendments to improve drainage/texture",
			f"Recommended soil types: {', '.join(crop.soil_types)}",
			_alternatives_hint(crop),
		],
	)


def check_irrigation(crop: CropProfile, irrigation_method: str) -> CompatibilityIssue | None:
	if irrigation_method in crop.irrigation_methods:
		return None
	return CompatibilityIssue(
		dimension=CompatibilityDimension.irrigation,
		severity=IssueSeverity.warning,
		message=f"{irrigation_method} may not be optimal for {crop.name}",
		suggestions=[
			f"Recommended irrigation: {', '.join(crop.irrigation_methods)}",
			"Monitor water stress carefully with current method",
			"Consider upgrading irrigation system for better yields",
		],
	)


def check_season(crop: CropProfile, season: str) -> CompatibilityIssue | None:
	if season in crop.growing_seasons:
		return None
	return CompatibilityIssue(
		dimension=CompatibilityDimension.season,
		severity=IssueSeverity.warning,
		message=f"{season} planting may not be optimal for {crop.name}",
		suggestions=[
			f"Recommended seasons: {', '.join(crop.growing_seasons)}",
			"Consider season extension techniques",
			"Plan for potential yield reduction",
		],
	)


def climate_compatible(crop: CropProfile, location: str) -> bool:
	"""Coarse climate inference from keywords in the free-text location.

	The cold rule is only consulted when the hot rule did not already fail,
	so a location mentioning both is rejected by whichever rule trips first.
	"""
	text = location.lower()
	zones = crop.climate_zones
	if any(word in text for word in _HOT_KEYWORDS) and not any(zone in zones for zone in _HOT_ZONES):
		return False
	if any(word in text for word in _COLD_KEYWORDS) and not any(zone in zones for zone in _COLD_ZONES):
		return False
	return True


def check_climate(crop: CropProfile, location: str) -> CompatibilityIssue | None:
	if climate_compatible(crop, location):
		return None
	return CompatibilityIssue(
		dimension=CompatibilityDimension.climate,
		severity=IssueSeverity.error,
		message=f"Climate in {location} may not be suitable for {crop.name}",
		suggestions=[
			f"Suitable climates: {', '.join(crop.climate_zones)}",
			"Consider greenhouse cultivation",
			_alternatives_hint(crop),
		],
	)


def evaluate(
	crop_id: str,
	soil_type: str,
	irrigation_method: str,
	location: str,
	season: str,
	catalog: Mapping[str, CropProfile] = CROP_CATALOG,
) -> CompatibilityResult:
	crop = catalog.get(crop_id.lower())
	if crop is None:
		return CompatibilityResult(
			compatible=False,
			issues=[
				CompatibilityIssue(
					dimension=CompatibilityDimension.climate,
					severity=IssueSeverity.error,
					message=f'Crop "{crop_id}" not found in database',
					suggestions=["Choose from available crops in the list"],
				)
			],
			recommended_alternatives=[],
			score=0,
		)

	checks = (
		(check_soil(crop, soil_type), SOIL_PENALTY),
		(check_irrigation(crop, irrigation_method), IRRIGATION_PENALTY),
		(check_season(crop, season), SEASON_PENALTY),
		(check_climate(crop, location), CLIMATE_PENALTY),
	)
	issues: list[CompatibilityIssue] = []
	score = 100
	for issue, penalty in checks:
		if issue is not None:
			issues.append(issue)
			score -= penalty

	compatible = not any(issue.severity == IssueSeverity.error for issue in issues)
	return CompatibilityResult(
		compatible=compatible,
		issues=issues,
		recommended_alternatives=[] if compatible else list(crop.alternatives),
		score=max(0, score),
	)


def recommend(
	soil_type: str,
	irrigation_method: str,
	location: str,
	season: str,
	catalog: Mapping[str, CropProfile] = CROP_CATALOG,
) -> list[str]:
	"""Top crops scoring above the threshold, best first; ties keep catalog order."""
	scored: list[tuple[str, int]] = []
	for crop_id, crop in catalog.items():
		result = evaluate(crop_id, soil_type, irrigation_method, location, season, catalog)
		if result.score > RECOMMENDATION_MIN_SCORE:
			scored.append((crop.name, result.score))

	scored.sort(key=lambda item: item[1], reverse=True)
	return [name for name, _score in scored[:RECOMMENDATION_LIMIT]]
