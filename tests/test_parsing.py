from __future__ import annotations

import pytest

from app.services.parsing import format_number, parse_number, round2, round_half_up


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (12, 12.0),
        (3.5, 3.5),
        ("42", 42.0),
        ("12.5 kg", 12.5),
        (" -3.25t", -3.25),
        (".5", 0.5),
        ("1e3", 1000.0),
        ("n/a", None),
        ("", None),
        (None, None),
        (True, None),
        (float("nan"), None),
        (float("inf"), None),
        ("1e999", None),
        ("-1e999 kg", None),
        (10**400, None),
    ],
)
def test_parse_number(value, expected) -> None:
    assert parse_number(value) == expected


def test_rounding_is_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(0.125, 2) == 0.13
    assert round2(22.0000001) == 22.0


def test_rounding_leaves_values_too_large_to_scale() -> None:
    assert round2(1e308) == 1e308
    assert round_half_up(-1e308, 2) == -1e308
    assert round_half_up(1e307, 0) == 1e307


def test_format_number_drops_trailing_zeros() -> None:
    assert format_number(20.0) == "20"
    assert format_number(20.5) == "20.5"
    assert format_number(1.239) == "1.24"
