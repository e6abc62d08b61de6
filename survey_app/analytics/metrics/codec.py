"""Type codec: convert survey answers between canonical numbers and display strings.

Three value kinds are supported:

- ``"int"``: base-10 integers, formatted as fixed-point decimals.
- ``"date"``: calendar dates, stored as whole UTC days since the epoch.
- ``"time"``: clock times, stored as the digits of ``HH:MM[:SS]`` (``"13:45"`` -> ``1345``).

Parsing never raises; unparseable or missing input yields ``None``.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Iterable
from datetime import date, datetime
from typing import Any

import pandas as pd
import pytz

from survey_app.core.config import DATE_DISPLAY_FORMAT, MILLIS_IN_DAY, RANGE_SEPARATOR

VALUE_KINDS = ("int", "date", "time")

_NANOS_IN_DAY = MILLIS_IN_DAY * 1_000_000
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_LAST_TWO = re.compile(r"..$")


def _is_missing_scalar(raw: Any) -> bool:
    if raw is None:
        return True
    if isinstance(raw, str):
        return not raw.strip()
    return pd.api.types.is_scalar(raw) and bool(pd.isna(raw))


def parse_int(raw: Any) -> int | None:
    """Parse the leading base-10 integer of ``raw``; ``None`` when there is none."""
    if _is_missing_scalar(raw):
        return None
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, (int, float)) or pd.api.types.is_number(raw):
        value = float(raw)
        if math.isinf(value):
            return None
        return int(math.trunc(value))
    match = _INT_PREFIX.match(str(raw))
    return int(match.group(1)) if match else None


def parse_date(raw: Any) -> int | None:
    """Parse a date/time literal into a whole number of UTC days since the epoch."""
    if _is_missing_scalar(raw):
        return None
    if pd.api.types.is_number(raw) and not isinstance(raw, bool):
        stamp = pd.to_datetime(raw, unit="ms", utc=True, errors="coerce")
    elif isinstance(raw, (str, date, datetime, pd.Timestamp)):
        stamp = pd.to_datetime(raw, utc=True, errors="coerce")
    else:
        return None
    if stamp is None or pd.isna(stamp):
        return None
    return int(stamp.value // _NANOS_IN_DAY)


def parse_time(raw: Any) -> int | None:
    """Drop the colon(s) of a clock time and parse the remaining digits."""
    if _is_missing_scalar(raw):
        return None
    return parse_int(str(raw).replace(":", ""))


_PARSERS: dict[str, Callable[[Any], int | None]] = {
    "int": parse_int,
    "date": parse_date,
    "time": parse_time,
}


def get_parser(kind: str) -> Callable[[Any], int | None]:
    try:
        return _PARSERS[kind]
    except KeyError:
        raise ValueError(f"Unknown value kind {kind!r}; expected one of {VALUE_KINDS}") from None


def parse(kind: str, raw: Any) -> int | None:
    return get_parser(kind)(raw)


def parse_series(kind: str, values: pd.Series | Iterable[Any]) -> pd.Series:
    """Parse every value of ``values``; the result is float with NaN for missing."""
    series = values if isinstance(values, pd.Series) else pd.Series(list(values), dtype=object)
    parser = get_parser(kind)
    parsed = series.astype(object).map(parser)
    return pd.to_numeric(parsed, errors="coerce").astype(float)


def _format_time(value: float) -> str:
    number = float(value)
    text = str(int(number)) if number.is_integer() else str(number)
    return _LAST_TWO.sub(lambda m: ":" + m.group(0), text)


def format_value(kind: str, value: float | None, digits: int = 1) -> str | None:
    """Render a canonical number as a display string.

    Examples
    --------
    >>> format_value("int", 3)
    '3.0'
    >>> format_value("time", 1345)
    '13:45'
    """
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    if kind == "int":
        return f"{float(value):.{digits}f}"
    if kind == "date":
        seconds = float(value) * MILLIS_IN_DAY / 1000.0
        return datetime.fromtimestamp(seconds, tz=pytz.UTC).strftime(DATE_DISPLAY_FORMAT)
    if kind == "time":
        return _format_time(value)
    raise ValueError(f"Unknown value kind {kind!r}; expected one of {VALUE_KINDS}")


def format_range(bounds: tuple[float, float] | list[float], kind: str) -> str:
    """Render an inclusive integer range, collapsing it when the bounds meet.

    The lower bound is rounded up and the upper bound down.

    Examples
    --------
    >>> format_range([1, 2], "int")
    '1 to 2'
    >>> format_range([5, 5], "int")
    '5'
    """
    lower, upper = bounds
    lower, upper = math.ceil(lower), math.floor(upper)
    if upper <= lower:
        return format_value(kind, lower, digits=0)
    return RANGE_SEPARATOR.join([format_value(kind, lower, digits=0), format_value(kind, upper, digits=0)])
