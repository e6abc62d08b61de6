"""Central configuration, constants, palettes, and shared column names."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# =============================================================================
# Record Columns
# =============================================================================
ID_COLUMN = "_id"
COUNT_COLUMN = "count"

# Reserved answer key for "no answer provided"
MISSING_ANSWER = None

# Raw cell values treated as "no answer" (compared after strip/lower)
MISSING_TOKENS: frozenset[str] = frozenset({"", "n/a"})

# =============================================================================
# Type Codec
# =============================================================================
MILLIS_IN_DAY: int = 86_400_000
DATE_DISPLAY_FORMAT = "%b %d, %Y"  # e.g. "Jan 05, 2015"
RANGE_SEPARATOR = " to "

# =============================================================================
# Binning
# =============================================================================
# A pleasant number of bins lies in [BIN_ROUGH_MIN, BIN_ROUGH_MAX);
# BIN_REAL_MAX caps the fallback when no candidate divides the span.
BIN_ROUGH_MIN: int = 7
BIN_ROUGH_MAX: int = 15
BIN_REAL_MAX: int = 24

# View-by always splits numeric/date answers into this many bins
VIEW_BY_NUM_BINS: int = 5

# =============================================================================
# Palettes
# =============================================================================
# Unordered categories (single-choice answers), assigned round-robin
QUALITATIVE_PALETTE: Sequence[str] = (
    "#f30",
    "#1f77b4",
    "#2ca02c",
    "#9467bd",
    "#ff7f0e",
    "#17becf",
    "#e377c2",
    "#8c564b",
    "#bcbd22",
    "#7f7f7f",
)

# Ordered bins (numeric/date answers), lightest first
SEQUENTIAL_PALETTE: Sequence[str] = (
    "#fee5d9",
    "#fcae91",
    "#fb6a4a",
    "#de2d26",
    "#a50f15",
)

# Every option of a multiple-choice field shares one color
MULTIPLE_CHOICE_COLOR = "#f30"

# Neutral color for the missing answer key; never taken from a palette slot
MISSING_ANSWER_COLOR = "#d9d9d9"

# =============================================================================
# Field Types
# =============================================================================
# Map raw xform/chart type strings to field kinds (lowercase keys)
FIELD_TYPE_ALIASES: dict[str, str] = {
    # Numeric
    "integer": "numeric",
    "int": "numeric",
    "decimal": "numeric",
    "range": "numeric",
    "calculate": "numeric",
    "numeric": "numeric",
    # Date / time
    "date": "date_or_time",
    "datetime": "date_or_time",
    "datetime_": "date_or_time",
    "time": "date_or_time",
    "start": "date_or_time",
    "end": "date_or_time",
    "today": "date_or_time",
    "time_based": "date_or_time",
    # Single choice
    "select one": "single_choice",
    "select_one": "single_choice",
    "select1": "single_choice",
    # Multiple choice
    "select all that apply": "multiple_choice",
    "select_multiple": "multiple_choice",
    "select multiple": "multiple_choice",
}

# Raw types whose values are clock times rather than calendar dates
TIME_FIELD_TYPES: frozenset[str] = frozenset({"time"})

# =============================================================================
# Chart Messages
# =============================================================================
NO_DATA_MESSAGE = "No data"
RESPONSE_COUNT_TEMPLATE = "Based on {count} responses."
IDENTICAL_VALUE_TEMPLATE = "{count} records have identical value: {value}"
NO_RESPONSE_LABEL = "No response"


@dataclass(slots=True)
class AppSettings:
    default_language: str | None = None
    view_by_num_bins: int = VIEW_BY_NUM_BINS
    palette_file: str = "palettes.yaml"


SETTINGS = AppSettings()
