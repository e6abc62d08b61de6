"""Pure helpers to build per-field chart context for presentation layers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal

from survey_app.analytics.aggregations.categorical import (
    counts_to_lengths,
    label_count_pairs,
    percent_string,
)
from survey_app.analytics.aggregations.missing import extract_nil
from survey_app.analytics.metrics.binning import HistogramResult, extract_histogram
from survey_app.analytics.metrics.codec import format_value
from survey_app.core.config import (
    IDENTICAL_VALUE_TEMPLATE,
    NO_DATA_MESSAGE,
    NO_RESPONSE_LABEL,
    RESPONSE_COUNT_TEMPLATE,
)
from survey_app.core.errors import NoDataError, UnsupportedFieldKindError
from survey_app.core.forms import get_label
from survey_app.core.models import ChartData, Field, FieldKind

logger = logging.getLogger(__name__)

ChartKind = Literal["no_data", "categorical", "histogram", "identical"]


@dataclass(slots=True)
class CategoryRow:
    label: str
    count: int
    percent: str  # share of answered responses, e.g. "12.5%"
    bar_share: float  # 0-100, relative to the largest count


@dataclass(slots=True)
class ChartContext:
    name: str
    label: str | None
    kind: ChartKind
    nil_count: int
    non_nil_count: int
    message: str
    rows: list[CategoryRow] = field(default_factory=list)
    nil_row: CategoryRow | None = None  # "No response" footer, single choice only
    histogram: HistogramResult | None = None
    tick_labels: list[str] = field(default_factory=list)


def _categorical_context(ctx: ChartContext, chart_data: ChartData, chart_field: Field, language) -> None:
    pairs = label_count_pairs(chart_data, language, chart_field)
    shares = counts_to_lengths([count for _, count in pairs], 100.0)
    ctx.rows = [
        CategoryRow(label=label, count=count, percent=percent_string(count, ctx.non_nil_count), bar_share=share)
        for (label, count), share in zip(pairs, shares)
    ]
    if chart_field.kind is not FieldKind.MULTIPLE_CHOICE and ctx.nil_count > 0:
        ctx.nil_row = CategoryRow(label=NO_RESPONSE_LABEL, count=ctx.nil_count, percent="", bar_share=0.0)


def _histogram_context(ctx: ChartContext, chart_data: ChartData, chart_field: Field) -> None:
    kind = chart_field.codec_kind
    histogram = extract_histogram(chart_data, kind)
    ctx.histogram = histogram
    first = histogram.triples[0]
    if len(histogram.triples) == 1 and first.width == 0:
        ctx.kind = "identical"
        ctx.message = IDENTICAL_VALUE_TEMPLATE.format(count=first.count, value=format_value(kind, first.start))
        return
    # Every other bin start, skipping the first
    ctx.tick_labels = [format_value(kind, triple.start) for triple in histogram.triples[1::2]]


def build_chart_context(chart_data: ChartData, chart_field: Field, language: str | None = None) -> ChartContext:
    """Summarize one field's chart data for rendering.

    Missing answers are counted separately; fields with no answers short
    circuit to a ``"no_data"`` context. Choice fields produce label/count
    rows, numeric and date fields produce histogram triples.

    Raises
    ------
    UnsupportedFieldKindError
        For fields that are neither choice nor numeric/date fields.
    """
    if not (chart_field.kind.is_categorical or chart_field.kind.is_binned):
        raise UnsupportedFieldKindError(chart_field.full_name, chart_field.kind)

    partition = extract_nil(chart_data)
    ctx = ChartContext(
        name=chart_field.full_name,
        label=get_label(chart_field.label, language),
        kind="no_data",
        nil_count=partition.nil_count,
        non_nil_count=partition.non_nil_count,
        message=NO_DATA_MESSAGE,
    )
    if partition.non_nil_count == 0 or partition.chart_data.empty:
        return ctx

    ctx.message = RESPONSE_COUNT_TEMPLATE.format(count=partition.non_nil_count)
    if chart_field.kind.is_categorical:
        ctx.kind = "categorical"
        _categorical_context(ctx, partition.chart_data, chart_field, language)
    else:
        ctx.kind = "histogram"
        try:
            _histogram_context(ctx, partition.chart_data, chart_field)
        except NoDataError:
            logger.debug("No parseable answers for %s", ctx.name)
            ctx.kind = "no_data"
            ctx.message = NO_DATA_MESSAGE
    logger.debug("Chart context for %s: %s (%s answered)", ctx.name, ctx.kind, ctx.non_nil_count)
    return ctx
