"""Missing-answer partitioning for chart data."""

from __future__ import annotations

from dataclasses import dataclass

from survey_app.core.forms import is_missing
from survey_app.core.models import ChartData


@dataclass(slots=True)
class NilPartition:
    chart_data: ChartData
    nil_count: int
    non_nil_count: int

    @property
    def total(self) -> int:
        return self.nil_count + self.non_nil_count


def extract_nil(chart_data: ChartData) -> NilPartition:
    """Split chart data into answered rows and totals for each side.

    Example: ``{"D": [None, 1], "count": [5, 10]}`` keeps only the row with
    ``D == 1`` and reports ``nil_count=5``, ``non_nil_count=10``.
    """
    if chart_data.empty:
        return NilPartition(chart_data, 0, 0)
    missing = chart_data.answers.map(is_missing).astype(bool)
    counts = chart_data.counts
    present = ChartData(chart_data.field_xpath, chart_data.data.loc[~missing].copy())
    return NilPartition(
        chart_data=present,
        nil_count=int(counts[missing].sum()),
        non_nil_count=int(counts[~missing].sum()),
    )
