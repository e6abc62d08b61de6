"""Selection toggling and per-record color/selection lookups for view-by."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Mapping
from typing import NamedTuple

from survey_app.core.config import MISSING_ANSWER
from survey_app.core.errors import UnknownAnswerError
from survey_app.core.models import FieldKind, ViewByInfo
from survey_app.core.palette_config import missing_answer_color


class RecordLookup(NamedTuple):
    id_color: Callable[[Hashable], str]
    id_selected: Callable[[Hashable], bool]


def toggle_answer_selected(
    answer_to_selected: Mapping[Hashable, bool],
    reference: Mapping[Hashable, bool] | None,
    answer: Hashable,
) -> Mapping[Hashable, bool]:
    """Return a copy of the selection with ``answer`` flipped.

    The missing answer key cannot be toggled; the selection comes back
    unchanged. ``reference`` (the selection the toggle started from) is
    accepted but does not affect the result.

    Raises
    ------
    UnknownAnswerError
        If ``answer`` is not a key of ``answer_to_selected``.
    """
    if answer is MISSING_ANSWER:
        return answer_to_selected
    if answer not in answer_to_selected:
        raise UnknownAnswerError(answer)
    toggled = dict(answer_to_selected)
    toggled[answer] = not toggled[answer]
    return toggled


def id_color_selected(info: ViewByInfo) -> RecordLookup:
    """Derive record id -> color and record id -> selected? functions.

    Scalar fields read the color and flag of the record's only answer.
    Multiple-choice records share the field's single color and count as
    selected when any of their answers is selected. Records without an
    answer (or ids the info does not know) take the missing answer's
    color and flag. For multiple-choice fields this differs from painting
    every record with the shared color: unanswered records stay neutral so
    they can be told apart on the map.
    """
    multiple = info.field.kind is FieldKind.MULTIPLE_CHOICE
    colors = info.answer_to_color
    selected = info.answer_to_selected
    missing_color = colors.get(MISSING_ANSWER, missing_answer_color())

    def answers_for(record_id: Hashable) -> list[Hashable]:
        return info.id_to_answers.get(record_id) or [MISSING_ANSWER]

    if multiple:

        def id_color(record_id: Hashable) -> str:
            answers = [a for a in answers_for(record_id) if a is not MISSING_ANSWER]
            return colors[answers[0]] if answers else missing_color

        def id_selected(record_id: Hashable) -> bool:
            return any(selected.get(answer, False) for answer in answers_for(record_id))

    else:

        def id_color(record_id: Hashable) -> str:
            answer = answers_for(record_id)[0]
            return colors.get(answer, missing_color)

        def id_selected(record_id: Hashable) -> bool:
            return bool(selected.get(answers_for(record_id)[0], False))

    return RecordLookup(id_color, id_selected)
