"""Form schema helpers: field kinds, option labels, and answer normalization."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import numpy as np
import pandas as pd

from .config import FIELD_TYPE_ALIASES, MISSING_TOKENS, SETTINGS
from .models import Field, FieldKind, FieldOption

_LIST_LIKE = (list, tuple, set, frozenset, np.ndarray, pd.Series)


def is_missing(value: Any) -> bool:
    """Return True when an answer cell holds no answer.

    None, NaN/NaT, blank strings (and "n/a") and empty collections are all
    treated as missing.

    Examples
    --------
    >>> is_missing(None), is_missing([]), is_missing(" "), is_missing("0")
    (True, True, True, False)
    """
    if isinstance(value, str):
        return value.strip().lower() in MISSING_TOKENS
    if isinstance(value, _LIST_LIKE):
        return len(value) == 0
    if pd.api.types.is_scalar(value):
        return bool(pd.isna(value))
    return False


def split_multiple(value: Any) -> list[Any]:
    """Normalize a multiple-choice answer into a list of option names.

    Accepts a space separated string ("1 2") or any list-like; missing
    answers become an empty list.
    """
    if is_missing(value):
        return []
    if isinstance(value, str):
        return value.split()
    if isinstance(value, _LIST_LIKE):
        return [item for item in value if not is_missing(item)]
    return [value]


def answer_list(value: Any, *, multiple: bool = False) -> list[Any]:
    """Every answer a cell carries: 0..n for multiple choice, 0..1 otherwise.

    Strings are only split on whitespace for multiple-choice fields, so a
    single-choice label like "Option 1" stays whole. A language-keyed label
    mapping counts as one answer.
    """
    if isinstance(value, Mapping):
        return [value]
    if multiple or isinstance(value, _LIST_LIKE):
        return split_multiple(value)
    return [] if is_missing(value) else [value]


def get_label(label: str | Mapping[str, str] | None, language: str | None = None) -> str | None:
    """Pick one display label from a plain label or a language-keyed label set.

    Without ``language`` the configured default language is tried. When the
    language is missing from the set, the first label is used.
    """
    if label is None:
        return None
    if language is None:
        language = SETTINGS.default_language
    if isinstance(label, Mapping):
        if not label:
            return None
        if language is not None and language in label:
            return str(label[language])
        return str(next(iter(label.values())))
    return str(label)


def option_name(answer: Any) -> str:
    """Coerce a cell value to the option name it stands for.

    Option names are strings, but numeric cells arrive as ``1`` or ``1.0``.

    Examples
    --------
    >>> option_name(1.0), option_name(2), option_name("a")
    ('1', '2', 'a')
    """
    if isinstance(answer, str):
        return answer
    if isinstance(answer, float) and answer.is_integer():
        return str(int(answer))
    return str(answer)


def option_label(field: Field, name: Any, language: str | None = None) -> str:
    key = option_name(name)
    for option in field.options:
        if option.name == key:
            resolved = get_label(option.label, language)
            return resolved if resolved is not None else key
    return key


def field_kind(raw_type: str | None) -> FieldKind:
    if not raw_type:
        return FieldKind.OTHER
    alias = FIELD_TYPE_ALIASES.get(str(raw_type).strip().lower())
    if alias is None:
        return FieldKind.OTHER
    return FieldKind(alias)


def field_from_dict(entry: Mapping[str, Any]) -> Field:
    """Build a Field from a flat-form schema entry.

    Recognized keys: ``full_name`` (falls back to ``name``), ``type``,
    ``label`` and ``children`` (a list of ``{"name", "label"}`` options).
    """
    full_name = entry.get("full_name") or entry.get("name")
    if not full_name:
        raise ValueError(f"Schema entry has no name: {dict(entry)!r}")
    raw_type = entry.get("type")
    options = tuple(
        FieldOption(name=str(child["name"]), label=child.get("label"))
        for child in entry.get("children") or ()
        if child.get("name") is not None
    )
    return Field(
        full_name=str(full_name),
        kind=field_kind(raw_type),
        type=raw_type,
        label=entry.get("label"),
        options=options,
    )
