"""Domain data models for survey fields, chart data, and view-by state."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

import pandas as pd

from .config import COUNT_COLUMN, TIME_FIELD_TYPES


class FieldKind(str, Enum):
    NUMERIC = "numeric"
    DATE_OR_TIME = "date_or_time"
    SINGLE_CHOICE = "single_choice"
    MULTIPLE_CHOICE = "multiple_choice"
    OTHER = "other"

    @property
    def is_categorical(self) -> bool:
        return self in (FieldKind.SINGLE_CHOICE, FieldKind.MULTIPLE_CHOICE)

    @property
    def is_binned(self) -> bool:
        return self in (FieldKind.NUMERIC, FieldKind.DATE_OR_TIME)


@dataclass(frozen=True, slots=True)
class FieldOption:
    name: str
    # Plain label, or a mapping of language -> label
    label: str | Mapping[str, str] | None = None


@dataclass(frozen=True, slots=True)
class Field:
    full_name: str
    kind: FieldKind
    type: str | None = None
    label: str | Mapping[str, str] | None = None
    options: tuple[FieldOption, ...] = ()

    @property
    def option_names(self) -> list[str]:
        return [opt.name for opt in self.options]

    @property
    def codec_kind(self) -> str | None:
        """Type Codec tag ("int", "date", "time") for binned fields, else None."""
        if self.kind is FieldKind.NUMERIC:
            return "int"
        if self.kind is FieldKind.DATE_OR_TIME:
            raw_type = (self.type or "").strip().lower()
            return "time" if raw_type in TIME_FIELD_TYPES else "date"
        return None


@dataclass(frozen=True, slots=True, eq=False)
class ChartData:
    """Aggregation unit: one field's answers with a per-row response count.

    ``data`` holds a column named after ``field_xpath`` and, optionally, a
    ``count`` column. Rows without a count stand for a single response.
    """

    field_xpath: str
    data: pd.DataFrame

    @classmethod
    def from_rows(cls, field_xpath: str, rows: Iterable[Mapping[str, Any]]) -> ChartData:
        frame = pd.DataFrame(list(rows))
        if field_xpath not in frame.columns:
            frame[field_xpath] = pd.Series(dtype=object)
        return cls(field_xpath, frame)

    @property
    def answers(self) -> pd.Series:
        return self.data[self.field_xpath]

    @property
    def counts(self) -> pd.Series:
        if COUNT_COLUMN in self.data.columns:
            return pd.to_numeric(self.data[COUNT_COLUMN], errors="coerce").fillna(0).astype(int)
        return pd.Series(1, index=self.data.index, dtype=int)

    @property
    def empty(self) -> bool:
        return self.data.empty


@dataclass(frozen=True, slots=True)
class ViewByInfo:
    field: Field
    answers: list[Hashable]
    id_to_answers: dict[Hashable, list[Hashable]]
    answer_to_count: dict[Hashable, int]
    answer_to_color: dict[Hashable, str]
    answer_to_selected: dict[Hashable, bool]

    def with_selection(self, answer_to_selected: Mapping[Hashable, bool]) -> ViewByInfo:
        return replace(self, answer_to_selected=dict(answer_to_selected))
