"""Static crop reference table used by the compatibility evaluator.

The catalog is built once at import time and exposed as a read-only mapping
keyed by lowercase crop identifier. Alternative-crop references are checked at
build time; identifiers that do not resolve to a catalog key are reported and
kept as plain advisory labels (``strict=True`` turns them into an error).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from app.schemas.compatibility import CropProfile, WaterRequirement

_logger = logging.getLogger("farmchat.crop_catalog")

_PROFILES: tuple[CropProfile, ...] = (
	CropProfile(
		id="wheat",
		name="Wheat",
		soil_types=("Loamy soil", "Clay soil", "Sandy loam"),
		irrigation_methods=("Rain-fed", "Sprinkler irrigation", "Flood irrigation"),
		climate_zones=("temperate", "continental", "semi-arid"),
		min_temperature=3,
		max_temperature=32,
		water_requirement=WaterRequirement.medium,
		growing_seasons=("Fall", "Winter", "Spring"),
		common_issues=("rust", "aphids", "drought stress"),
		alternatives=("barley", "oats", "rye"),
	),
	CropProfile(
		id="corn",
		name="Corn",
		soil_types=("Loamy soil", "Sandy loam", "Well-drained soil"),
		irrigation_methods=("Drip irrigation", "Sprinkler irrigation", "Center pivot"),
		climate_zones=("temperate", "subtropical", "continental"),
		min_temperature=10,
		max_temperature=35,
		water_requirement=WaterRequirement.high,
		growing_seasons=("Spring", "Summer"),
		common_issues=("corn borer", "drought", "nitrogen deficiency"),
		alternatives=("sorghum", "millet", "soybeans"),
	),
	CropProfile(
		id="rice",
		name="Rice",
		soil_types=("Clay soil", "Clay loam", "Heavy clay"),
		irrigation_methods=("Flood irrigation", "Paddy system", "Continuous flooding"),
		climate_zones=("tropical", "subtropical", "humid temperate"),
		min_temperature=16,
		max_temperature=38,
		water_requirement=WaterRequirement.high,
		growing_seasons=("Spring", "Summer", "Monsoon"),
		common_issues=("blast disease", "brown planthopper", "water management"),
		alternatives=("wheat", "barley", "millet"),
	),
	CropProfile(
		id="tomatoes",
		name="Tomatoes",
		soil_types=("Loamy soil", "Sandy loam", "Well-drained soil"),
		irrigation_methods=("Drip irrigation", "Micro-sprinkler", "Furrow irrigation"),
		climate_zones=("temperate", "subtropical", "mediterranean"),
		min_temperature=18,
		max_temperature=29,
		water_requirement=WaterRequirement.medium,
		growing_seasons=("Spring", "Summer", "Fall"),
		common_issues=("blight", "whitefly", "calcium deficiency"),
		alternatives=("peppers", "eggplant", "cucumber"),
	),
	CropProfile(
		id="potatoes",
		name="Potatoes",
		soil_types=("Sandy soil", "Sandy loam", "Loamy soil"),
		irrigation_methods=("Sprinkler irrigation", "Drip irrigation", "Furrow irrigation"),
		climate_zones=("temperate", "cool temperate", "highland tropical"),
		min_temperature=7,
		max_temperature=24,
		water_requirement=WaterRequirement.medium,
		growing_seasons=("Spring", "Fall"),
		common_issues=("late blight", "potato beetle", "scab"),
		alternatives=("sweet potatoes", "turnips", "carrots"),
	),
	CropProfile(
		id="soybeans",
		name="Soybeans",
		soil_types=("Loamy soil", "Clay loam", "Well-drained soil"),
		irrigation_methods=("Rain-fed", "Sprinkler irrigation", "Drip irrigation"),
		climate_zones=("temperate", "subtropical", "continental"),
		min_temperature=10,
		max_temperature=30,
		water_requirement=WaterRequirement.medium,
		growing_seasons=("Spring", "Summer"),
		common_issues=("soybean rust", "aphids", "white mold"),
		alternatives=("corn", "sunflower", "canola"),
	),
	CropProfile(
		id="carrots",
		name="Carrots",
		soil_types=("Sandy soil", "Sandy loam", "Deep loamy soil"),
		irrigation_methods=("Drip irrigation", "Sprinkler irrigation", "Surface irrigation"),
		climate_zones=("temperate", "cool temperate", "mediterranean"),
		min_temperature=7,
		max_temperature=24,
		water_requirement=WaterRequirement.medium,
		growing_seasons=("Spring", "Fall", "Winter"),
		common_issues=("carrot fly", "root rot", "splitting"),
		alternatives=("parsnips", "turnips", "beets"),
	),
	CropProfile(
		id="lettuce",
		name="Lettuce",
		soil_types=("Loamy soil", "Sandy loam", "Well-drained soil"),
		irrigation_methods=("Drip irrigation", "Micro-sprinkler", "Surface irrigation"),
		climate_zones=("temperate", "cool temperate", "mediterranean"),
		min_temperature=4,
		max_temperature=20,
		water_requirement=WaterRequirement.medium,
		growing_seasons=("Spring", "Fall", "Winter"),
		common_issues=("aphids", "downy mildew", "tip burn"),
		alternatives=("spinach", "kale", "chard"),
	),
	# Indian staple crops
	CropProfile(
		id="basmati_rice",
		name="Basmati Rice",
		soil_types=("Clay soil", "Clay loam", "Alluvial soil"),
		irrigation_methods=("Flood irrigation", "Paddy system", "Continuous flooding"),
		climate_zones=("subtropical", "tropical", "humid temperate"),
		min_temperature=20,
		max_temperature=37,
		water_requirement=WaterRequirement.high,
		growing_seasons=("Monsoon", "Kharif"),
		common_issues=("blast disease", "stem borer", "bacterial blight"),
		alternatives=("wheat", "sugarcane", "cotton"),
	),
	CropProfile(
		id="sugarcane",
		name="Sugarcane",
		soil_types=("Clay loam", "Sandy loam", "Alluvial soil"),
		irrigation_methods=("Flood irrigation", "Drip irrigation", "Furrow irrigation"),
		climate_zones=("tropical", "subtropical"),
		min_temperature=20,
		max_temperature=38,
		water_requirement=WaterRequirement.high,
		growing_seasons=("Year-round", "Monsoon", "Winter"),
		common_issues=("red rot", "smut", "aphids"),
		alternatives=("cotton", "maize", "sorghum"),
	),
	CropProfile(
		id="cotton",
		name="Cotton",
		soil_types=("Black cotton soil", "Clay loam", "Sandy loam"),
		irrigation_methods=("Drip irrigation", "Sprinkler irrigation", "Flood irrigation"),
		climate_zones=("semi-arid", "subtropical", "tropical"),
		min_temperature=15,
		max_temperature=35,
		water_requirement=WaterRequirement.medium,
		growing_seasons=("Kharif", "Monsoon"),
		common_issues=("bollworm", "aphids", "whitefly"),
		alternatives=("soybeans", "sunflower", "maize"),
	),
	CropProfile(
		id="onions",
		name="Onions",
		soil_types=("Sandy loam", "Loamy soil", "Clay loam"),
		irrigation_methods=("Drip irrigation", "Sprinkler irrigation", "Furrow irrigation"),
		climate_zones=("temperate", "subtropical", "semi-arid"),
		min_temperature=10,
		max_temperature=30,
		water_requirement=WaterRequirement.medium,
		growing_seasons=("Rabi", "Winter", "Spring"),
		common_issues=("purple blotch", "thrips", "neck rot"),
		alternatives=("garlic", "shallots", "leeks"),
	),
	CropProfile(
		id="turmeric",
		name="Turmeric",
		soil_types=("Sandy loam", "Clay loam", "Red soil"),
		irrigation_methods=("Drip irrigation", "Sprinkler irrigation", "Rain-fed"),
		climate_zones=("tropical", "subtropical"),
		min_temperature=20,
		max_temperature=35,
		water_requirement=WaterRequirement.medium,
		growing_seasons=("Monsoon", "Kharif"),
		common_issues=("rhizome rot", "leaf spot", "shoot borer"),
		alternatives=("ginger", "cardamom", "black pepper"),
	),
	CropProfile(
		id="chickpeas",
		name="Chickpeas (Chana)",
		soil_types=("Sandy loam", "Clay loam", "Black soil"),
		irrigation_methods=("Rain-fed", "Sprinkler irrigation", "Drip irrigation"),
		climate_zones=("semi-arid", "temperate", "subtropical"),
		min_temperature=10,
		max_temperature=30,
		water_requirement=WaterRequirement.low,
		growing_seasons=("Rabi", "Winter"),
		common_issues=("wilt", "pod borer", "aphids"),
		alternatives=("lentils", "field peas", "black gram"),
	),
	CropProfile(
		id="mustard",
		name="Mustard",
		soil_types=("Sandy loam", "Clay loam", "Alluvial soil"),
		irrigation_methods=("Rain-fed", "Sprinkler irrigation", "Flood irrigation"),
		climate_zones=("temperate", "semi-arid", "subtropical"),
		min_temperature=5,
		max_temperature=25,
		water_requirement=WaterRequirement.low,
		growing_seasons=("Rabi", "Winter"),
		common_issues=("aphids", "white rust", "alternaria blight"),
		alternatives=("sesame", "sunflower", "safflower"),
	),
	CropProfile(
		id="millet",
		name="Pearl Millet (Bajra)",
		soil_types=("Sandy soil", "Sandy loam", "Drought-prone soil"),
		irrigation_methods=("Rain-fed", "Drip irrigation", "Sprinkler irrigation"),
		climate_zones=("arid", "semi-arid", "tropical"),
		min_temperature=20,
		max_temperature=42,
		water_requirement=WaterRequirement.low,
		growing_seasons=("Kharif", "Monsoon"),
		common_issues=("downy mildew", "smut", "shoot fly"),
		alternatives=("sorghum", "maize", "finger millet"),
	),
	CropProfile(
		id="eggplant",
		name="Eggplant (Brinjal)",
		soil_types=("Sandy loam", "Clay loam", "Red soil"),
		irrigation_methods=("Drip irrigation", "Furrow irrigation", "Sprinkler irrigation"),
		climate_zones=("tropical", "subtropical"),
		min_temperature=18,
		max_temperature=32,
		water_requirement=WaterRequirement.medium,
		growing_seasons=("Year-round", "Kharif", "Rabi"),
		common_issues=("fruit borer", "bacterial wilt", "aphids"),
		alternatives=("tomatoes", "peppers", "okra"),
	),
	CropProfile(
		id="okra",
		name="Okra (Bhindi)",
		soil_types=("Sandy loam", "Clay loam", "Well-drained soil"),
		irrigation_methods=("Drip irrigation", "Furrow irrigation", "Rain-fed"),
		climate_zones=("tropical", "subtropical", "warm temperate"),
		min_temperature=20,
		max_temperature=35,
		water_requirement=WaterRequirement.medium,
		growing_seasons=("Kharif", "Summer", "Monsoon"),
		common_issues=("fruit borer", "aphids", "powdery mildew"),
		alternatives=("eggplant", "tomatoes", "peppers"),
	),
)


def unresolved_alternatives(catalog: Mapping[str, CropProfile]) -> dict[str, list[str]]:
	"""Map crop id → alternative ids that are not keys of ``catalog``."""
	missing: dict[str, list[str]] = {}
	for crop_id, profile in catalog.items():
		dangling = [alt for alt in profile.alternatives if alt.lower() not in catalog]
		if dangling:
			missing[crop_id] = dangling
	return missing


def build_crop_catalog(
	profiles: Iterable[CropProfile],
	*,
	strict: bool = False,
) -> Mapping[str, CropProfile]:
	"""Index ``profiles`` by lowercase id and validate them.

	Raises ``ValueError`` for duplicate ids or an inverted temperature range,
	and for dangling alternative references when ``strict`` is set.
	"""
	table: dict[str, CropProfile] = {}
	for profile in profiles:
		key = profile.id.lower()
		if key in table:
			raise ValueError(f"duplicate crop id: {profile.id}")
		if profile.min_temperature > profile.max_temperature:
			raise ValueError(f"crop {profile.id}: min_temperature exceeds max_temperature")
		table[key] = profile

	missing = unresolved_alternatives(table)
	if missing:
		if strict:
			raise ValueError(f"unresolved alternative crops: {missing}")
		_logger.debug("crop_catalog_unresolved_alternatives", extra={"unresolved": missing})
	return MappingProxyType(table)


CROP_CATALOG: Mapping[str, CropProfile] = build_crop_catalog(_PROFILES)


def get_crop(crop_id: str) -> CropProfile | None:
	return CROP_CATALOG.get(crop_id.lower())


def resolve_crop_id(label: str) -> str:
	"""Match a questionnaire label ("Basmati Rice", "corn") to a catalog id.

	Falls back to the label itself so an unknown crop surfaces as a
	not-found result from the evaluator.
	"""
	normalized = label.strip().lower()
	if normalized in CROP_CATALOG:
		return normalized
	for crop_id, profile in CROP_CATALOG.items():
		if profile.name.lower() == normalized:
			return crop_id
	return label
