"""Pure builders for the view-by domain of a field (no rendering)."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Hashable, Sequence

import numpy as np
import pandas as pd

from survey_app.analytics.metrics.binning import evenly_spaced_bins
from survey_app.core.config import ID_COLUMN, MISSING_ANSWER, SETTINGS
from survey_app.core.errors import UnsupportedFieldKindError
from survey_app.core.forms import answer_list, option_name
from survey_app.core.models import Field, FieldKind, ViewByInfo
from survey_app.core.palette_config import (
    missing_answer_color,
    multiple_choice_color,
    qualitative_palette,
    sequential_palette,
)

logger = logging.getLogger(__name__)


def _record_ids(records: pd.DataFrame) -> list[Hashable]:
    if ID_COLUMN in records.columns:
        return list(records[ID_COLUMN])
    return list(records.index)


def _field_values(records: pd.DataFrame, field: Field) -> pd.Series:
    if field.full_name in records.columns:
        return records[field.full_name]
    return pd.Series([None] * len(records), index=records.index, dtype=object)


def _initial_selection(answers: Sequence[Hashable]) -> dict[Hashable, bool]:
    return {answer: answer is not MISSING_ANSWER for answer in answers}


def _sequential_colors(n: int) -> list[str]:
    """``n`` ascending colors spread over the sequential palette."""
    palette = sequential_palette()
    if n <= 0:
        return []
    positions = np.linspace(0, len(palette) - 1, n).round().astype(int)
    return [palette[pos] for pos in positions]


def _categorical_info(field: Field, records: pd.DataFrame) -> ViewByInfo:
    multiple = field.kind is FieldKind.MULTIPLE_CHOICE
    id_to_answers: dict[Hashable, list[Hashable]] = {}
    for record_id, value in zip(_record_ids(records), _field_values(records, field)):
        answers = list(dict.fromkeys(option_name(a) for a in answer_list(value, multiple=multiple)))
        id_to_answers[record_id] = answers or [MISSING_ANSWER]

    counts = Counter(answer for answers in id_to_answers.values() for answer in answers)
    known = field.option_names
    extras = [a for a in counts if a is not MISSING_ANSWER and a not in known]
    # Stable sort: ties keep schema order, unknown answers after options
    real = sorted(known + extras, key=lambda a: -counts.get(a, 0))
    answers = real + ([MISSING_ANSWER] if counts.get(MISSING_ANSWER) else [])

    if multiple:
        color = multiple_choice_color()
        answer_to_color = {answer: color for answer in real}
    else:
        palette = qualitative_palette()
        answer_to_color = {answer: palette[i % len(palette)] for i, answer in enumerate(real)}
    if MISSING_ANSWER in answers:
        answer_to_color[MISSING_ANSWER] = missing_answer_color()

    return ViewByInfo(
        field=field,
        answers=answers,
        id_to_answers=id_to_answers,
        answer_to_count={answer: int(counts.get(answer, 0)) for answer in answers},
        answer_to_color=answer_to_color,
        answer_to_selected=_initial_selection(answers),
    )


def _binned_info(field: Field, records: pd.DataFrame) -> ViewByInfo:
    binned = evenly_spaced_bins(_field_values(records, field), SETTINGS.view_by_num_bins, field.codec_kind)
    id_to_answers = {
        record_id: [MISSING_ANSWER if label is None else label]
        for record_id, label in zip(_record_ids(records), binned.labels)
    }
    counts = Counter(answers[0] for answers in id_to_answers.values())
    answers: list[Hashable] = list(binned.bins)
    if counts.get(MISSING_ANSWER):
        answers.append(MISSING_ANSWER)

    answer_to_color: dict[Hashable, str] = dict(zip(binned.bins, _sequential_colors(len(binned.bins))))
    if MISSING_ANSWER in answers:
        answer_to_color[MISSING_ANSWER] = missing_answer_color()

    return ViewByInfo(
        field=field,
        answers=answers,
        id_to_answers=id_to_answers,
        answer_to_count={answer: int(counts.get(answer, 0)) for answer in answers},
        answer_to_color=answer_to_color,
        answer_to_selected=_initial_selection(answers),
    )


def viewby_info(field: Field, records: pd.DataFrame) -> ViewByInfo:
    """Build the answer domain, counts, colors and initial selection for a field.

    Parameters
    ----------
    field : Field
        Field to view by. Choice fields keep their options as answers;
        numeric and date fields are split into evenly spaced bins.
    records : pd.DataFrame
        One row per record, with an ``_id`` column (the index is used when
        it is absent) and a column named after ``field.full_name``.

    Returns
    -------
    ViewByInfo
        Fresh view-by state. The missing answer key, when present, is the
        last answer, has the neutral color and starts deselected.

    Raises
    ------
    UnsupportedFieldKindError
        If the field is neither a choice nor a numeric/date field.
    """
    if field.kind.is_categorical:
        info = _categorical_info(field, records)
    elif field.kind.is_binned:
        info = _binned_info(field, records)
    else:
        raise UnsupportedFieldKindError(field.full_name, field.kind)
    logger.debug(
        "View-by %s (%s): %s answers over %s records",
        field.full_name,
        field.kind.value,
        len(info.answers),
        len(info.id_to_answers),
    )
    return info
