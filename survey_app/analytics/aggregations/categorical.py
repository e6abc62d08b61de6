"""Categorical aggregations: label counts and count scaling helpers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import numpy as np
import pandas as pd

from survey_app.core.forms import answer_list, get_label, option_label, option_name
from survey_app.core.models import ChartData, Field, FieldKind


def resolve_label(answer: Any, language: str | None = None, field: Field | None = None) -> str:
    if isinstance(answer, Mapping):
        return get_label(answer, language) or ""
    if field is not None:
        return option_label(field, answer, language)
    return option_name(answer)


def label_count_pairs(
    chart_data: ChartData,
    language: str | None = None,
    field: Field | None = None,
) -> list[tuple[str, int]]:
    """Total response counts per display label, highest first.

    A row selecting several options adds its full count to each of them, so
    the totals can exceed the number of responses. Ties keep first-seen order.

    Examples
    --------
    >>> data = ChartData.from_rows("D", [
    ...     {"D": ["Option_1"], "count": 2},
    ...     {"D": ["Option_1", "O_2"], "count": 1},
    ... ])
    >>> label_count_pairs(data)
    [('Option_1', 3), ('O_2', 1)]
    """
    multiple = field is not None and field.kind is FieldKind.MULTIPLE_CHOICE
    pairs = [
        (resolve_label(answer, language, field), int(count))
        for value, count in zip(chart_data.answers, chart_data.counts)
        for answer in answer_list(value, multiple=multiple)
    ]
    if not pairs:
        return []
    totals = (
        pd.DataFrame(pairs, columns=["label", "count"])
        .groupby("label", sort=False)["count"]
        .sum()
        .sort_values(ascending=False, kind="stable")
    )
    return [(str(label), int(total)) for label, total in totals.items()]


def counts_to_lengths(
    counts: Sequence[float],
    max_length: float,
    *,
    total_as_max: bool = False,
    datamin_as_min: bool = False,
) -> list[float]:
    """Scale counts linearly onto ``[0, max_length]``.

    By default the largest count maps to ``max_length``; with
    ``total_as_max`` the sum of all counts does instead. With
    ``datamin_as_min`` the scale starts at the smallest count (or 0).
    """
    values = np.asarray(list(counts), dtype=float)
    if values.size == 0:
        return []
    upper = float(values.sum()) if total_as_max else max(0.0, float(values.max()))
    lower = min(0.0, float(values.min())) if datamin_as_min else 0.0
    if upper == lower:
        return [0.0] * int(values.size)
    return [float(v) for v in (values - lower) / (upper - lower) * max_length]


def percent_string(n: float, total: float) -> str:
    share = (float(n) / float(total) * 100.0) if total else 0.0
    return f"{share:.1f}%"
