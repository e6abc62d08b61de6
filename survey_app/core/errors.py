"""Exceptions raised to callers of the aggregation and view-by engine."""

from __future__ import annotations


class SurveyEngineError(Exception):
    """Base class for engine errors."""


class UnsupportedFieldKindError(SurveyEngineError, ValueError):
    def __init__(self, field_name: str, kind: object):
        self.field_name = field_name
        self.kind = kind
        super().__init__(f"Unsupported field kind {kind!r} for field {field_name!r}")


class UnknownAnswerError(SurveyEngineError, LookupError):
    def __init__(self, answer: object):
        self.answer = answer
        super().__init__(f"Answer {answer!r} is not part of the selection domain")


class NoDataError(SurveyEngineError, ValueError):
    """Raised when an operation needs at least one non-missing value."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Field {field_name!r} has no non-missing values")
