"""Binning and histogram utilities for numeric and date answers.

This module picks a pleasant number of bins for a field, splits typed
answers into evenly spaced labelled ranges, and produces histogram-ready
``(start, width, count)`` triples.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, NamedTuple

import numpy as np
import pandas as pd

from survey_app.analytics.metrics.codec import format_range, parse_series
from survey_app.core.config import BIN_REAL_MAX, BIN_ROUGH_MAX, BIN_ROUGH_MIN
from survey_app.core.errors import NoDataError
from survey_app.core.models import ChartData

logger = logging.getLogger(__name__)


class HistogramBin(NamedTuple):
    start: float
    width: float
    count: int


@dataclass(slots=True)
class HistogramResult:
    triples: list[HistogramBin]
    bins: int


@dataclass(slots=True)
class BinnedValues:
    """Bin label per input value (``None`` for missing) plus the ordered bin labels."""

    labels: list[str | None]
    bins: list[str]


def num_bins(n: int) -> int:
    """Choose how many bins to use for data spanning ``n`` units.

    Candidates are counted in ``[BIN_ROUGH_MIN, BIN_ROUGH_MAX)``. The largest
    common divisor of ``n`` and a candidate wins when it is itself a pleasant
    count; otherwise the count falls back to the smallest of
    ``BIN_REAL_MAX``, ``n`` and the least common multiples.

    Parameters
    ----------
    n : int
        Span (max - min) of the field's non-missing values. A zero span is
        handled by callers, which force a single bin.

    Returns
    -------
    int
        Number of bins.

    Examples
    --------
    >>> num_bins(99)
    11
    >>> num_bins(5)
    5
    """
    n = int(n)
    candidates = range(BIN_ROUGH_MIN, BIN_ROUGH_MAX)
    best_guess = max(math.gcd(n, k) for k in candidates)
    if best_guess < BIN_ROUGH_MIN:
        return min(BIN_REAL_MAX, n, *(math.lcm(n, k) for k in candidates))
    return best_guess


def bucket_indices(numbers: np.ndarray, minimum: float, maximum: float, bin_count: int) -> np.ndarray:
    """Index of the half-open bucket ``[lo, hi)`` holding each number.

    The global maximum belongs to the last bucket. NaN stays NaN.
    """
    numbers = np.asarray(numbers, dtype=float)
    span = maximum - minimum
    if span <= 0:
        indices = np.zeros(numbers.shape, dtype=float)
    else:
        indices = np.floor((numbers - minimum) * bin_count / span)
    indices = np.clip(indices, 0, bin_count - 1)
    indices[np.isnan(numbers)] = np.nan
    return indices


def _bin_bounds(minimum: float, maximum: float, bin_count: int) -> list[tuple[float, float]]:
    lower_bounds = list(
        dict.fromkeys(float(minimum + (maximum - minimum) * i / bin_count) for i in range(bin_count))
    )
    # An integral boundary belongs to the next bin, so step the upper bound back one unit
    upper_bounds = [bound - 1 if bound == math.floor(bound) else bound for bound in lower_bounds[1:]]
    upper_bounds.append(float(maximum))
    return list(zip(lower_bounds, upper_bounds))


def evenly_spaced_bins(values: pd.Series | Iterable[Any], bin_count: int, kind: str) -> BinnedValues:
    """Label each answer with the evenly spaced bin it falls in.

    Parameters
    ----------
    values : pd.Series or iterable
        Raw answers, parsed with the type codec for ``kind``.
    bin_count : int
        Number of bins to split ``[min, max]`` into.
    kind : str
        Type codec tag: "int", "date" or "time".

    Returns
    -------
    BinnedValues
        ``labels`` has one entry per input value (``None`` when missing or
        unparseable); ``bins`` lists the distinct bin labels in ascending order.

    Examples
    --------
    >>> evenly_spaced_bins([1, 2, 10], 5, "int").labels
    ['1 to 2', '1 to 2', '9 to 10']
    >>> evenly_spaced_bins([1, 2, 10], 5, "int").bins
    ['1 to 2', '3 to 4', '5 to 6', '7 to 8', '9 to 10']
    """
    numbers = parse_series(kind, values)
    present = numbers.dropna()
    if present.empty:
        return BinnedValues(labels=[None] * len(numbers), bins=[])

    bin_count = max(int(bin_count), 1)
    minimum, maximum = float(present.min()), float(present.max())
    strings = [format_range(bounds, kind) for bounds in _bin_bounds(minimum, maximum, bin_count)]
    indices = bucket_indices(numbers.to_numpy(), minimum, maximum, bin_count)
    last = len(strings) - 1
    labels = [None if np.isnan(idx) else strings[min(int(idx), last)] for idx in indices]
    return BinnedValues(labels=labels, bins=list(dict.fromkeys(strings)))


def extract_histogram(chart_data: ChartData, kind: str = "int") -> HistogramResult:
    """Turn numeric or date chart data into histogram triples.

    Parameters
    ----------
    chart_data : ChartData
        Answers for one field with per-row response counts. Missing answers
        should already be removed (see ``extract_nil``); any that remain are
        ignored.
    kind : str
        Type codec tag: "int", "date" or "time".

    Returns
    -------
    HistogramResult
        ``triples`` holds one ``(start, width, count)`` per non-empty bin in
        ascending order; ``bins`` is the number of bins used.

    Raises
    ------
    NoDataError
        If no answer can be parsed.
    """
    numbers = parse_series(kind, chart_data.answers)
    frame = pd.DataFrame(
        {"value": numbers.to_numpy(), "count": chart_data.counts.to_numpy()}
    ).dropna(subset=["value"])
    if frame.empty:
        raise NoDataError(chart_data.field_xpath)

    minimum, maximum = float(frame["value"].min()), float(frame["value"].max())
    span = maximum - minimum
    bins = 1 if span == 0 else num_bins(math.ceil(span))
    width = span / bins
    frame["bin"] = bucket_indices(frame["value"].to_numpy(), minimum, maximum, bins).astype(int)
    totals = frame.groupby("bin")["count"].sum().sort_index()
    triples = [
        HistogramBin(start=minimum + span * int(idx) / bins, width=width, count=int(total))
        for idx, total in totals.items()
    ]
    logger.debug(
        "Histogram for %s: %s bins over span %s (%s non-empty)",
        chart_data.field_xpath,
        bins,
        span,
        len(triples),
    )
    return HistogramResult(triples=triples, bins=bins)
