import pytest

from survey_app.analytics.metrics.binning import (
    HistogramBin,
    evenly_spaced_bins,
    extract_histogram,
    num_bins,
)
from survey_app.core.errors import NoDataError
from survey_app.core.models import ChartData


def _bounds(label):
    lower, _, upper = label.partition(" to ")
    return int(lower), int(upper or lower)


def test_num_bins_prefers_divisors():
    assert num_bins(99) == 11
    assert num_bins(100) == 10
    assert num_bins(60) == 12
    assert num_bins(14) == 14


def test_num_bins_falls_back():
    # no pleasant divisor: capped by the span, then by 24
    assert num_bins(5) == 5
    assert num_bins(17) == 17
    assert num_bins(1009) == 24


def test_num_bins_deterministic():
    assert all(num_bins(n) == num_bins(n) for n in range(1, 200))


def test_evenly_spaced_bins_docstring_case():
    binned = evenly_spaced_bins([1, 2, 10], 5, "int")
    assert binned.labels == ["1 to 2", "1 to 2", "9 to 10"]
    assert binned.bins == ["1 to 2", "3 to 4", "5 to 6", "7 to 8", "9 to 10"]


def test_evenly_spaced_bins_integral_boundaries_do_not_overlap():
    binned = evenly_spaced_bins([0, None, 10, 2], 5, "int")
    assert binned.bins == ["0 to 1", "2 to 3", "4 to 5", "6 to 7", "8 to 10"]
    assert binned.labels == ["0 to 1", None, "8 to 10", "2 to 3"]


def test_evenly_spaced_bins_coverage():
    values = list(range(100))
    binned = evenly_spaced_bins(values, 5, "int")
    assert binned.bins == ["0 to 19", "20 to 39", "40 to 59", "60 to 79", "80 to 99"]
    for value, label in zip(values, binned.labels):
        lower, upper = _bounds(label)
        assert lower <= value <= upper
    spans = [_bounds(label) for label in binned.bins]
    assert spans[0][0] == 0 and spans[-1][1] == 99
    for (_, prev_upper), (next_lower, _) in zip(spans, spans[1:]):
        assert next_lower == prev_upper + 1


def test_evenly_spaced_bins_zero_span():
    binned = evenly_spaced_bins([7, 7, "7"], 5, "int")
    assert binned.bins == ["7"]
    assert binned.labels == ["7", "7", "7"]


def test_evenly_spaced_bins_all_missing():
    binned = evenly_spaced_bins([None, "abc"], 5, "int")
    assert binned.labels == [None, None]
    assert binned.bins == []


def test_extract_histogram_counts():
    data = ChartData.from_rows(
        "age",
        [
            {"age": 0, "count": 1},
            {"age": "5", "count": 2},
            {"age": 10, "count": 3},
        ],
    )
    result = extract_histogram(data, "int")
    assert result.bins == 10
    assert result.triples == [
        HistogramBin(0.0, 1.0, 1),
        HistogramBin(5.0, 1.0, 2),
        HistogramBin(9.0, 1.0, 3),
    ]
    assert sum(t.count for t in result.triples) == 6


def test_extract_histogram_identical_values():
    data = ChartData.from_rows("age", [{"age": 4, "count": 2}, {"age": 4, "count": 3}])
    result = extract_histogram(data, "int")
    assert result.bins == 1
    assert result.triples == [HistogramBin(4.0, 0.0, 5)]


def test_extract_histogram_dates():
    data = ChartData.from_rows("when", [{"when": "2015-01-01"}, {"when": "2015-01-15"}])
    result = extract_histogram(data, "date")
    assert result.bins == 14
    assert [t.start for t in result.triples] == [16436.0, 16449.0]
    assert [t.count for t in result.triples] == [1, 1]


def test_extract_histogram_without_values():
    data = ChartData.from_rows("age", [{"age": None, "count": 2}])
    with pytest.raises(NoDataError):
        extract_histogram(data, "int")


def test_evenly_spaced_bins_clock_times():
    binned = evenly_spaced_bins(["09:00", "13:45", None, "17:30"], 5, "time")
    # bounds step through HHMM digits, so minutes can exceed 59
    assert binned.bins == [
        "9:00 to 10:65",
        "10:66 to 12:31",
        "12:32 to 13:97",
        "13:98 to 15:63",
        "15:64 to 17:30",
    ]
    assert binned.labels == ["9:00 to 10:65", "12:32 to 13:97", None, "15:64 to 17:30"]


def test_extract_histogram_clock_times():
    data = ChartData.from_rows(
        "arrival",
        [{"arrival": "09:00", "count": 2}, {"arrival": "13:45", "count": 1}, {"arrival": "17:30", "count": 3}],
    )
    result = extract_histogram(data, "time")
    assert result.bins == 10
    assert result.triples == [
        HistogramBin(900.0, 83.0, 2),
        HistogramBin(1315.0, 83.0, 1),
        HistogramBin(1647.0, 83.0, 3),
    ]
