"""Lenient numeric parsing for spreadsheet-style cells."""

from __future__ import annotations

import math
import re
from typing import Any

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_number(value: Any) -> float | None:
	"""Parse the leading numeric prefix of ``value`` ("12.5 kg" → 12.5).

	Finite numbers pass through; booleans, empty strings, text without a
	leading number and anything that overflows to infinity give ``None``.
	"""
	if isinstance(value, bool) or value is None:
		return None
	if isinstance(value, (int, float)):
		try:
			number = float(value)
		except OverflowError:
			return None
		return number if math.isfinite(number) else None
	match = _LEADING_NUMBER.match(str(value))
	if match is None:
		return None
	number = float(match.group(1))
	return number if math.isfinite(number) else None


def round_half_up(value: float, digits: int = 0) -> float:
	"""Round halves toward positive infinity; values too large to scale are returned unchanged."""
	scale = 10**digits
	scaled = value * scale + 0.5
	if not math.isfinite(scaled):
		return value
	return math.floor(scaled) / scale


def round2(value: float) -> float:
	return round_half_up(value, 2)


def format_number(value: float) -> str:
	"""Render a rounded value without a trailing ``.0`` ("20", "20.5")."""
	text = f"{round2(value):.2f}".rstrip("0").rstrip(".")
	return text or "0"
