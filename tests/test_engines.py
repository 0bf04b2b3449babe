"""Contract tests for the in-process analysis engines.

Verifies that:
- Column types follow the fixed sampling and threshold policy
- Statistics count only finite numeric values and never raise
- Anomaly detection flags z-score outliers and ignores zero-spread columns
- Grouping keeps first-seen order and aggregation skips non-numeric values
"""
import math
from datetime import date, datetime

import pytest

from askdata.analysis.anomalies import find_anomalies
from askdata.analysis.coerce import is_date, is_null, to_number
from askdata.analysis.column_types import infer_column_types
from askdata.analysis.descriptive import calculate_statistics
from askdata.analysis.grouping import aggregate_groups, group_by


def _column(values: list, name: str = "x") -> list[dict]:
    return [{name: v} for v in values]


# ============================================================================
# Value coercion
# ============================================================================

class TestCoercion:
    @pytest.mark.parametrize("raw, expected", [
        (3, 3.0),
        (2.5, 2.5),
        (" 42 ", 42.0),
        ("1e3", 1000.0),
        ("-0.5", -0.5),
    ])
    def test_numbers(self, raw, expected):
        assert to_number(raw) == expected

    @pytest.mark.parametrize("raw", [
        True, False, None, "abc", "", "nan", "inf", float("nan"), float("inf"), [1], {"a": 1},
    ])
    def test_not_numbers(self, raw):
        assert to_number(raw) is None

    def test_nulls(self):
        assert is_null(None)
        assert is_null(float("nan"))
        assert is_null("   ")
        assert not is_null(0)
        assert not is_null("0")

    def test_dates(self):
        assert is_date("2024-03-15")
        assert is_date("2024-03-15T10:30:00")
        assert is_date(date(2024, 3, 15))
        assert is_date(datetime(2024, 3, 15, 8))
        assert not is_date("hello")
        assert not is_date("North")
        assert not is_date(12)


# ============================================================================
# Type Inference
# ============================================================================

class TestTypeInference:
    def test_numeric_strings(self):
        rows = _column(["1", "2.5", "3"])
        assert infer_column_types(rows, ["x"]) == {"x": "number"}

    def test_numeric_threshold_is_inclusive(self):
        rows = _column([1, 2, 3, 4, "oops"])
        assert infer_column_types(rows, ["x"])["x"] == "number"

    def test_below_numeric_threshold(self):
        rows = _column([1, 2, 3, "a", "b"])
        assert infer_column_types(rows, ["x"])["x"] == "category"

    def test_iso_dates(self):
        rows = _column(["2020-01-15", "2021-06-30", "2022-12-01", None])
        assert infer_column_types(rows, ["x"])["x"] == "date"

    def test_date_objects(self):
        rows = _column([date(2020, 1, 1), datetime(2021, 6, 15)])
        assert infer_column_types(rows, ["x"])["x"] == "date"

    def test_low_cardinality_strings_are_categories(self):
        rows = _column(["red", "blue", "red", "green"])
        assert infer_column_types(rows, ["x"])["x"] == "category"

    def test_high_cardinality_strings_are_text(self):
        rows = _column([f"comment number {i}" for i in range(30)])
        assert infer_column_types(rows, ["x"])["x"] == "text"

    def test_booleans_are_categories(self):
        rows = _column([True, False, True])
        assert infer_column_types(rows, ["x"])["x"] == "category"

    def test_empty_column_is_text(self):
        rows = _column([None, "", "  "])
        assert infer_column_types(rows, ["x"])["x"] == "text"

    def test_missing_column_is_text(self):
        rows = _column([1, 2])
        assert infer_column_types(rows, ["x", "ghost"]) == {"x": "number", "ghost": "text"}

    def test_malformed_values_are_skipped(self):
        rows = _column([{"nested": 1}, [1, 2], 5, 6])
        assert infer_column_types(rows, ["x"])["x"] == "number"

    def test_only_prefix_is_sampled(self):
        rows = _column(["1", "2", "a", "b", "c"])
        assert infer_column_types(rows, ["x"], sample_rows=2)["x"] == "number"
        assert infer_column_types(rows, ["x"], sample_rows=None)["x"] == "category"
        assert infer_column_types(rows, ["x"], sample_rows=0)["x"] == "category"

    def test_every_column_has_an_entry(self, sales_rows):
        types = infer_column_types(sales_rows, ["region", "date", "amount", "units", "note"])
        assert types == {
            "region": "category",
            "date": "date",
            "amount": "number",
            "units": "number",
            "note": "text",
        }


# ============================================================================
# Statistics
# ============================================================================

class TestStatistics:
    def test_even_median(self):
        stats = calculate_statistics(_column([1, 2, 3, 4]), "x")
        assert stats.median == 2.5

    def test_odd_median(self):
        stats = calculate_statistics(_column([3, 1, 2]), "x")
        assert stats.median == 2

    def test_summary_fields(self):
        stats = calculate_statistics(_column([2, 4, 4, 4, 5, 5, 7, 9]), "x")
        assert stats.count == 8
        assert stats.mean == 5
        assert stats.min == 2
        assert stats.max == 9
        assert stats.stddev == pytest.approx(2.0)

    def test_count_is_numeric_values_only(self):
        rows = _column([1, "2", None, "x", True, float("nan"), "inf", " 3 "])
        stats = calculate_statistics(rows, "x")
        assert stats.count == 3
        assert stats.mean == 2

    def test_no_numeric_values_returns_none(self):
        assert calculate_statistics(_column(["a", None, "b"]), "x") is None

    def test_missing_column_returns_none(self):
        assert calculate_statistics(_column([1, 2]), "nope") is None

    def test_single_value(self):
        stats = calculate_statistics(_column([7]), "x")
        assert stats.count == 1
        assert stats.stddev == 0

    def test_opposite_huge_values_stay_finite(self):
        stats = calculate_statistics(_column([1e200, -1e200, 5]), "x")
        assert math.isfinite(stats.stddev)
        assert stats.stddev == pytest.approx(math.sqrt(2 / 3) * 1e200)
        assert stats.mean == pytest.approx(5 / 3)

    def test_values_near_float_max(self):
        stats = calculate_statistics(_column([1.7e308, 1.7e308]), "x")
        assert stats.mean == 1.7e308
        assert stats.median == 1.7e308
        assert stats.stddev == 0


# ============================================================================
# Anomalies
# ============================================================================

class TestAnomalies:
    def test_single_outlier(self):
        anomalies = find_anomalies(_column([1, 1, 1, 1, 100]), "x")
        assert len(anomalies) == 1
        assert anomalies[0].index == 4
        assert anomalies[0].value == 100
        assert anomalies[0].deviation > 0

    def test_negative_deviation(self):
        anomalies = find_anomalies(_column([50, 50, 50, 50, 50, 50, 50, 50, 50, -400]), "x")
        assert [a.index for a in anomalies] == [9]
        assert anomalies[0].deviation < 0

    @pytest.mark.parametrize("threshold", [0.0, 0.5, 2.0, 10.0])
    def test_identical_values_never_anomalous(self, threshold):
        assert find_anomalies(_column([0.1] * 7), "x", threshold) == []

    def test_no_numeric_values(self):
        assert find_anomalies(_column(["a", "b", None]), "x") == []

    def test_row_indices_skip_non_numeric_rows(self):
        rows = _column(["n/a", 10, None, 10, 10, 10, 10, 10, 10, 10, 10, 500])
        anomalies = find_anomalies(rows, "x")
        assert [a.index for a in anomalies] == [11]

    def test_order_follows_table(self):
        values = [0] * 20
        values[3] = 100
        values[15] = -100
        anomalies = find_anomalies(_column(values), "x")
        assert [a.index for a in anomalies] == [3, 15]

    def test_higher_threshold_flags_fewer(self):
        rows = _column([1, 1, 1, 1, 100])
        assert find_anomalies(rows, "x", threshold=3.0) == []

    def test_deviation_is_z_score(self):
        anomalies = find_anomalies(_column([1, 1, 1, 1, 100]), "x", threshold=1.0)
        assert anomalies[0].deviation == pytest.approx(2.0)
        assert not math.isnan(anomalies[0].deviation)

    def test_value_on_mean_never_flagged_at_zero_threshold(self):
        anomalies = find_anomalies(_column([0, 1, 2]), "x", 0.0)
        assert [a.index for a in anomalies] == [0, 2]

    def test_threshold_just_above_deviation(self):
        assert find_anomalies(_column([1, 1, 1, 1, 100]), "x", 2.00001) == []

    def test_huge_values(self):
        anomalies = find_anomalies(_column([1e200, -1e200, 5]), "x", 1.0)
        assert [a.index for a in anomalies] == [0, 1]
        assert anomalies[0].deviation == pytest.approx(math.sqrt(1.5))


# ============================================================================
# Grouping
# ============================================================================

class TestGrouping:
    def test_city_mean(self, city_temps):
        groups = group_by(city_temps, "city")
        result = aggregate_groups(groups, "temp", "mean")
        assert [(r.group, r.value) for r in result] == [("A", 20), ("B", 20)]

    def test_first_seen_order(self):
        rows = _column(["b", "a", "b", "c", "a"], name="k")
        assert list(group_by(rows, "k")) == ["b", "a", "c"]

    def test_keys_are_stringified(self):
        rows = [{"k": 1, "v": 1}, {"k": 1.5, "v": 2}, {"k": None, "v": 3}, {"v": 4}]
        groups = group_by(rows, "k")
        assert list(groups) == ["1", "1.5", "null"]
        assert len(groups["null"]) == 2

    def test_boolean_and_whole_float_keys(self):
        rows = [{"k": True}, {"k": False}, {"k": 10.0}, {"k": 10}, {"k": True}]
        groups = group_by(rows, "k")
        assert list(groups) == ["true", "false", "10"]
        assert len(groups["10"]) == 2
        assert len(groups["true"]) == 2

    def test_absent_key_column_gives_empty_groups(self, city_temps):
        assert group_by(city_temps, "country") == {}

    @pytest.mark.parametrize("mode, expected", [
        ("sum", [40, 20]),
        ("count", [2, 1]),
        ("min", [10, 20]),
        ("max", [30, 20]),
    ])
    def test_modes(self, city_temps, mode, expected):
        result = aggregate_groups(group_by(city_temps, "city"), "temp", mode)
        assert [r.value for r in result] == expected

    def test_non_numeric_values_are_excluded(self):
        rows = [
            {"k": "a", "v": 10},
            {"k": "a", "v": "n/a"},
            {"k": "a", "v": None},
            {"k": "a", "v": "20"},
        ]
        [result] = aggregate_groups(group_by(rows, "k"), "v", "mean")
        assert result.value == 15
        [counted] = aggregate_groups(group_by(rows, "k"), "v", "count")
        assert counted.value == 2

    def test_group_without_numbers_is_zero(self):
        rows = [{"k": "a", "v": 5}, {"k": "b", "v": "x"}, {"k": "b", "v": None}]
        result = aggregate_groups(group_by(rows, "k"), "v", "mean")
        assert [(r.group, r.value) for r in result] == [("a", 5), ("b", 0)]

    def test_absent_value_column_gives_empty_result(self, city_temps):
        assert aggregate_groups(group_by(city_temps, "city"), "rain", "mean") == []

    def test_unknown_mode(self, city_temps):
        with pytest.raises(ValueError, match="Unknown aggregation mode"):
            aggregate_groups(group_by(city_temps, "city"), "temp", "median")
