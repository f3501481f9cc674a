from __future__ import annotations

import pytest

from app.schemas.compatibility import CropProfile, WaterRequirement
from app.services.crop_catalog import (
    CROP_CATALOG,
    build_crop_catalog,
    get_crop,
    resolve_crop_id,
    unresolved_alternatives,
)


def _crop(crop_id: str, **overrides) -> CropProfile:
    values = {
        "id": crop_id,
        "name": crop_id.title(),
        "soil_types": ("Loamy soil",),
        "irrigation_methods": ("Drip irrigation",),
        "climate_zones": ("temperate",),
        "min_temperature": 5,
        "max_temperature": 30,
        "water_requirement": WaterRequirement.low,
        "growing_seasons": ("Spring",),
    }
    values.update(overrides)
    return CropProfile(**values)


def test_catalog_contains_reference_crops() -> None:
    assert len(CROP_CATALOG) == 18
    for crop_id in ("wheat", "corn", "rice", "basmati_rice", "okra"):
        assert crop_id in CROP_CATALOG
    assert all(crop.min_temperature <= crop.max_temperature for crop in CROP_CATALOG.values())


def test_catalog_is_read_only() -> None:
    with pytest.raises(TypeError):
        CROP_CATALOG["barley"] = _crop("barley")  # type: ignore[index]


def test_crop_profiles_are_frozen() -> None:
    with pytest.raises(ValueError):
        CROP_CATALOG["wheat"].name = "Spelt"  # type: ignore[misc]


def test_get_crop_ignores_case() -> None:
    assert get_crop("Wheat") is CROP_CATALOG["wheat"]
    assert get_crop("barley") is None


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("wheat", "wheat"),
        ("Basmati Rice", "basmati_rice"),
        ("  CORN ", "corn"),
        ("Okra (Bhindi)", "okra"),
        ("Quinoa", "Quinoa"),
    ],
)
def test_resolve_crop_id(label: str, expected: str) -> None:
    assert resolve_crop_id(label) == expected


def test_build_rejects_duplicate_ids() -> None:
    with pytest.raises(ValueError, match="duplicate crop id"):
        build_crop_catalog([_crop("kale"), _crop("KALE")])


def test_build_rejects_inverted_temperature_range() -> None:
    with pytest.raises(ValueError, match="min_temperature"):
        build_crop_catalog([_crop("kale", min_temperature=30, max_temperature=5)])


def test_dangling_alternatives_are_tolerated_unless_strict() -> None:
    profiles = [_crop("kale", alternatives=("chard", "spinach")), _crop("chard", alternatives=("kale",))]

    catalog = build_crop_catalog(profiles)
    assert unresolved_alternatives(catalog) == {"kale": ["spinach"]}

    with pytest.raises(ValueError, match="unresolved alternative crops"):
        build_crop_catalog(profiles, strict=True)
