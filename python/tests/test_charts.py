"""Tests for _charts.py: chart type parsing and plan dispatch."""

import pytest

from qtplot import Figure, InvalidChartTypeError
from qtplot._charts import ChartPlan, ChartType, Trace, build_plan, parse_chart_type


def _plan(code, build):
    fig = Figure("T", code)
    build(fig)
    return build_plan(fig.snapshot())


# ─── parse_chart_type ────────────────────────────────────────────────────────

class TestParseChartType:
    @pytest.mark.parametrize("code,expected", [
        ("l", ChartType.LINE), ("L", ChartType.LINE),
        ("s", ChartType.SCATTER), ("S", ChartType.SCATTER),
        ("h", ChartType.HISTOGRAM), ("H", ChartType.HISTOGRAM),
    ])
    def test_known_codes(self, code, expected):
        assert parse_chart_type(code) is expected

    @pytest.mark.parametrize("code", ["", "x", "line", "ls", " l"])
    def test_unknown_codes(self, code):
        with pytest.raises(InvalidChartTypeError) as info:
            parse_chart_type(code)
        assert info.value.code == code

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_chart_type("q")

    def test_non_string(self):
        with pytest.raises(InvalidChartTypeError):
            parse_chart_type(None)


# ─── Line / scatter dispatch ─────────────────────────────────────────────────

class TestXYPlan:
    def test_points_verbatim(self):
        pts = [(3, 1), (1, 5), (3, 1), (-2, 0)]
        plan = _plan("l", lambda f: f.add_numeric_series("a", pts))
        assert len(plan.traces) == 1
        assert plan.traces[0].points == tuple((float(x), float(y)) for x, y in pts)

    def test_series_order_preserved(self):
        def build(f):
            f.add_numeric_series("first", [(0, 0)])
            f.add_numeric_series("second", [(1, 1), (2, 2)])
            f.add_numeric_series("third", [])
        plan = _plan("s", build)
        assert [t.name for t in plan.traces] == ["first", "second", "third"]
        assert [len(t.points) for t in plan.traces] == [1, 2, 0]

    def test_line_flags(self):
        plan = _plan("l", lambda f: None)
        assert plan.lines and not plan.markers

    def test_scatter_flags(self):
        plan = _plan("S", lambda f: None)
        assert plan.markers and not plan.lines

    def test_labels_and_title(self):
        fig = Figure("My chart", "l")
        fig.x_label = "time"
        fig.y_label = "value"
        plan = build_plan(fig.snapshot())
        assert (plan.title, plan.x_label, plan.y_label) == ("My chart", "time", "value")

    def test_category_series_skipped(self):
        def build(f):
            f.add_category_series("cats", ["a", "b"])
            f.add_numeric_series("nums", [(0, 1)])
        plan = _plan("l", build)
        assert [t.name for t in plan.traces] == ["nums"]
        assert all(t.kind == "xy" for t in plan.traces)

    def test_empty_name_kept(self):
        plan = _plan("l", lambda f: f.add_numeric_series("", [(0, 1)]))
        assert plan.traces[0].name == ""


# ─── Histogram dispatch ──────────────────────────────────────────────────────

class TestHistogramPlan:
    def test_counts_first_seen(self):
        plan = _plan("h", lambda f: f.add_category_series("v", ["b", "a", "b", "c", "a", "a"]))
        trace = plan.traces[0]
        assert trace.kind == "bar"
        assert trace.categories == ("b", "a", "c")
        assert trace.counts == (2, 3, 1)

    def test_default_name(self):
        plan = _plan("h", lambda f: f.add_category_series("", ["a"]))
        assert plan.traces[0].name == "Series"

    def test_numeric_series_skipped(self):
        def build(f):
            f.add_numeric_series("nums", [(0, 1)])
            f.add_category_series("cats", ["x"])
        plan = _plan("h", build)
        assert [t.name for t in plan.traces] == ["cats"]

    def test_each_series_independent_trace(self):
        def build(f):
            f.add_category_series("one", ["a", "b"])
            f.add_category_series("two", ["c", "a", "a"])
        plan = _plan("h", build)
        assert plan.traces[0].categories == ("a", "b")
        assert plan.traces[1].categories == ("c", "a")
        assert plan.traces[1].counts == (1, 2)

    def test_shared_category_axis(self):
        def build(f):
            f.add_category_series("one", ["a", "b"])
            f.add_category_series("two", ["c", "a"])
        plan = _plan("h", build)
        assert plan.categories() == ["a", "b", "c"]
        assert plan.traces[0].count_for("c") == 0
        assert plan.traces[1].count_for("a") == 1

    def test_count_map_keeps_first_seen_order(self):
        plan = _plan("h", lambda f: f.add_category_series("v", ["b", "a", "b", "c", "a", "a"]))
        counts = plan.traces[0].count_map()
        assert list(counts.items()) == [("b", 2), ("a", 3), ("c", 1)]

    def test_bar_values_aligned_with_categories(self):
        def build(f):
            f.add_category_series("one", ["a", "b"])
            f.add_category_series("two", ["c", "a", "a"])
        plan = _plan("h", build)
        assert plan.categories() == ["a", "b", "c"]
        assert plan.bar_values() == [[1, 1, 0], [2, 0, 1]]

    def test_bar_values_many_categories(self):
        labels_a = [f"k{i}" for i in range(5000)]
        labels_b = [f"k{i}" for i in range(2500, 7500)] * 2

        def build(f):
            f.add_category_series("a", labels_a)
            f.add_category_series("b", labels_b)
        plan = _plan("h", build)
        categories = plan.categories()
        values_a, values_b = plan.bar_values()
        assert len(categories) == len(values_a) == len(values_b) == 7500
        assert categories[:3] == ["k0", "k1", "k2"]
        assert categories[-1] == "k7499"
        assert values_a[0] == 1 and values_b[0] == 0
        assert values_a[3000] == 1 and values_b[3000] == 2
        assert values_a[-1] == 0 and values_b[-1] == 2

    def test_bar_values_without_traces(self):
        assert _plan("h", lambda f: None).bar_values() == []

    def test_default_y_label(self):
        plan = _plan("h", lambda f: None)
        assert plan.y_label == "Frequency"
        assert plan.x_label == ""


# ─── Invalid type ────────────────────────────────────────────────────────────

class TestInvalidType:
    def test_raises_at_dispatch(self):
        fig = Figure("T", "pie")
        fig.add_numeric_series("a", [(0, 1)])
        with pytest.raises(InvalidChartTypeError):
            build_plan(fig.snapshot())

    def test_explicit_chart_type_overrides_code(self):
        fig = Figure("T", "pie")
        fig.add_category_series("a", ["x"])
        plan = build_plan(fig.snapshot(), ChartType.HISTOGRAM)
        assert plan.traces[0].counts == (1,)


# ─── Axis ranges ─────────────────────────────────────────────────────────────

class TestRanges:
    def test_xy_padding(self):
        plan = ChartPlan(ChartType.LINE, "", "", "", [Trace.xy("a", ((0.0, 10.0), (10.0, 20.0)))])
        assert plan.x_range() == pytest.approx((-0.5, 10.5))
        assert plan.y_range() == pytest.approx((9.5, 20.5))

    def test_single_point(self):
        plan = ChartPlan(ChartType.SCATTER, "", "", "", [Trace.xy("a", ((2.0, 3.0),))])
        assert plan.x_range() == pytest.approx((1.5, 2.5))

    def test_empty_defaults(self):
        plan = ChartPlan(ChartType.LINE, "", "", "", [])
        assert plan.x_range() == (0.0, 1.0)
        assert plan.y_range() == (0.0, 1.0)

    def test_nan_ignored(self):
        nan = float("nan")
        plan = ChartPlan(ChartType.LINE, "", "", "", [Trace.xy("a", ((nan, nan), (1.0, 1.0), (3.0, 5.0)))])
        assert plan.x_range() == pytest.approx((0.9, 3.1))

    def test_bars_start_at_zero(self):
        plan = ChartPlan(ChartType.HISTOGRAM, "", "", "", [Trace.bars("a", [("x", 4), ("y", 10)])])
        assert plan.y_range() == pytest.approx((0.0, 10.5))

    def test_bars_empty(self):
        plan = ChartPlan(ChartType.HISTOGRAM, "", "", "", [])
        assert plan.y_range() == (0.0, 1.0)
