"""Length parsing: bare numbers or unit-suffixed strings -> pixels.

No engine imports.
"""

from __future__ import annotations

import logging
import re

from svglayout.config import settings
from svglayout.errors import UnitParseError

logger = logging.getLogger(__name__)

Length = float | int | str | None

_UNIT_RE = re.compile(r"^(-?[\d.]+)([a-z%]*)$", re.IGNORECASE)

# CSS reference pixel is 1/96 in.
_PX_PER_IN = 96.0
_PX_PER_PT = 4.0 / 3.0
_PX_PER_CM = 37.8
_PX_PER_MM = 3.78


def parse_unit(value: Length, base: float | None = None) -> float:
    """Convert a length to pixels.

    ``None`` and ``"auto"`` resolve to 0. ``rem``/``em`` and ``%`` are relative
    to ``base`` (defaults to ``settings.rem_base``).
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise UnitParseError(f"Invalid unit value: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        raise UnitParseError(f"Invalid unit value: {value!r}")

    trimmed = value.strip()
    if trimmed == "auto":
        return 0.0

    match = _UNIT_RE.match(trimmed)
    if not match:
        raise UnitParseError(f"Invalid unit value: {value!r}")

    num_str, unit = match.groups()
    try:
        num = float(num_str)
    except ValueError as e:
        raise UnitParseError(f"Invalid unit value: {value!r}") from e

    ref = settings.rem_base if base is None else base
    unit = unit.lower()

    if unit in ("", "px"):
        return num
    if unit in ("rem", "em"):
        return num * ref
    if unit == "%":
        return num / 100 * ref
    if unit == "pt":
        return num * _PX_PER_PT
    if unit == "cm":
        return num * _PX_PER_CM
    if unit == "mm":
        return num * _PX_PER_MM
    if unit == "in":
        return num * _PX_PER_IN

    logger.warning("Unknown unit %r in %r, treating as pixels", unit, value)
    return num


def is_valid_unit(value: Length) -> bool:
    """True if ``parse_unit`` would accept the value without raising."""
    if value is None or isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return value == value  # NaN check
    if not isinstance(value, str):
        return False
    if value.strip() == "auto":
        return True
    match = _UNIT_RE.match(value.strip())
    if match is None:
        return False
    try:
        float(match.group(1))
    except ValueError:
        return False
    return True


def format_unit(pixels: float, unit: str = "px") -> str:
    return f"{pixels}{unit}"
