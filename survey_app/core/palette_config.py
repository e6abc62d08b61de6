"""Load and expose color palettes from YAML (with fallbacks)."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .config import (
    MISSING_ANSWER_COLOR,
    MULTIPLE_CHOICE_COLOR,
    QUALITATIVE_PALETTE,
    SEQUENTIAL_PALETTE,
    SETTINGS,
)

logger = logging.getLogger(__name__)

_CACHE: dict[str, tuple[str, ...]] | None = None


def _defaults() -> dict[str, tuple[str, ...]]:
    return {
        "qualitative": tuple(QUALITATIVE_PALETTE),
        "sequential": tuple(SEQUENTIAL_PALETTE),
        "multiple_choice": (MULTIPLE_CHOICE_COLOR,),
        "missing": (MISSING_ANSWER_COLOR,),
    }


def _as_colors(value, fallback: tuple[str, ...]) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return fallback
    colors = tuple(str(item).strip() for item in value if str(item).strip())
    return colors or fallback


def load_palettes(base_path: str | Path | None = None, *, refresh: bool = False):
    global _CACHE
    if _CACHE is not None and not refresh:
        return _CACHE
    base = Path(base_path or Path(__file__).resolve().parent.parent)
    yaml_path = base / SETTINGS.palette_file
    defaults = _defaults()
    if not yaml_path.exists():
        _CACHE = defaults
        return _CACHE
    try:
        data = yaml.safe_load(yaml_path.read_text()) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Ignoring unreadable palette file %s: %s", yaml_path, exc)
        _CACHE = defaults
        return _CACHE
    palettes = data.get("palettes", {}) if isinstance(data, dict) else {}
    if not isinstance(palettes, dict):
        logger.warning("Ignoring palette file %s: 'palettes' is not a mapping", yaml_path)
        palettes = {}
    _CACHE = {name: _as_colors(palettes.get(name), fallback) for name, fallback in defaults.items()}
    logger.debug("Loaded palettes from %s", yaml_path)
    return _CACHE


def get_palette(name: str) -> tuple[str, ...]:
    palettes = load_palettes()
    return palettes.get(name, ())


def qualitative_palette() -> tuple[str, ...]:
    return get_palette("qualitative")


def sequential_palette() -> tuple[str, ...]:
    return get_palette("sequential")


def multiple_choice_color() -> str:
    return get_palette("multiple_choice")[0]


def missing_answer_color() -> str:
    return get_palette("missing")[0]
