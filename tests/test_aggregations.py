import pytest

from survey_app.analytics.aggregations.categorical import (
    counts_to_lengths,
    label_count_pairs,
    percent_string,
)
from survey_app.analytics.aggregations.missing import extract_nil
from survey_app.core.models import ChartData, Field, FieldKind, FieldOption


def _sample_chart_data():
    return ChartData.from_rows(
        "D",
        [
            {"D": None, "count": 5},
            {"D": 1, "count": 10},
            {"D": [], "count": 2},
            {"D": 3, "count": 4},
        ],
    )


def test_extract_nil_totals():
    partition = extract_nil(_sample_chart_data())
    assert partition.nil_count == 7
    assert partition.non_nil_count == 14
    assert partition.total == 21
    assert list(partition.chart_data.answers) == [1, 3]


def test_extract_nil_without_count_column():
    data = ChartData.from_rows("D", [{"D": "a"}, {"D": None}, {"D": ""}])
    partition = extract_nil(data)
    assert (partition.nil_count, partition.non_nil_count) == (2, 1)


def test_extract_nil_empty():
    partition = extract_nil(ChartData.from_rows("D", []))
    assert (partition.nil_count, partition.non_nil_count) == (0, 0)
    assert partition.chart_data.empty


def test_label_count_pairs_multi_valued():
    data = ChartData.from_rows(
        "D",
        [
            {"D": ["Option_1"], "count": 2},
            {"D": ["Option_1", "O_2"], "count": 1},
        ],
    )
    assert label_count_pairs(data) == [("Option_1", 3), ("O_2", 1)]


def test_label_count_pairs_language_labels():
    data = ChartData.from_rows(
        "D",
        [
            {"D": [{"English": "Yes", "French": "Oui"}], "count": 2},
            {"D": [{"English": "No", "French": "Non"}], "count": 3},
        ],
    )
    assert label_count_pairs(data, "French") == [("Non", 3), ("Oui", 2)]
    # unknown language falls back to the first label
    assert label_count_pairs(data, "Swahili") == [("No", 3), ("Yes", 2)]


def test_label_count_pairs_with_field_options():
    field = Field(
        "D",
        FieldKind.MULTIPLE_CHOICE,
        type="select all that apply",
        options=(FieldOption("1", {"en": "One", "fr": "Un"}), FieldOption("2", "Two")),
    )
    data = ChartData.from_rows("D", [{"D": "1 2", "count": 1}, {"D": "1", "count": 3}])
    assert label_count_pairs(data, "fr", field) == [("Un", 4), ("Two", 1)]


def test_label_count_pairs_single_choice_keeps_spaces():
    data = ChartData.from_rows("D", [{"D": "Very good", "count": 2}, {"D": "Bad", "count": 1}])
    assert label_count_pairs(data) == [("Very good", 2), ("Bad", 1)]


def test_multi_valued_count_inflation():
    data = ChartData.from_rows("D", [{"D": ["a", "b"], "count": 1} for _ in range(10)])
    pairs = label_count_pairs(data)
    assert sum(count for _, count in pairs) == 20


def test_label_count_pairs_empty():
    assert label_count_pairs(ChartData.from_rows("D", [])) == []


def test_counts_to_lengths():
    assert counts_to_lengths([1, 2, 4], 100) == [25.0, 50.0, 100.0]
    totals = counts_to_lengths([1, 3], 8, total_as_max=True)
    assert totals == pytest.approx([2.0, 6.0])
    assert counts_to_lengths([], 100) == []
    assert counts_to_lengths([0, 0], 100) == [0.0, 0.0]


def test_percent_string():
    assert percent_string(1, 8) == "12.5%"
    assert percent_string(3, 0) == "0.0%"


def test_label_count_pairs_numeric_cells_resolve_option_labels():
    field = Field(
        "q",
        FieldKind.SINGLE_CHOICE,
        type="select one",
        options=(FieldOption("1", "Option 1"), FieldOption("2", "Option 2")),
    )
    # the missing row turns the column into floats (1.0, 2.0, NaN)
    data = ChartData.from_rows(
        "q", [{"q": 1, "count": 3}, {"q": 2, "count": 1}, {"q": None, "count": 2}]
    )
    assert label_count_pairs(data, field=field) == [("Option 1", 3), ("Option 2", 1)]
    assert label_count_pairs(data) == [("1", 3), ("2", 1)]
