"""
Tests for dashboard formatting and chart building.
"""

import pytest

from models.data_models import CampaignInputs
from business_logic.scenario_generator import ScenarioGenerator
from ui.formatting import format_number, format_currency, format_percent, toggle_series
from ui.charts import (
    build_channel_table, build_scenario_figure, build_channel_curves_figure,
    build_age_reach_figure, build_overlap_figure, build_intersections_figure,
    build_user_activity_figure
)


@pytest.fixture
def optimization_result():
    inputs = CampaignInputs(total_budget=10000, target_reach=50000, channel_selection=["Facebook", "Reddit"])
    return ScenarioGenerator(seed=9).generate(inputs)


class TestFormatting:
    """Test cases for number formatting."""

    @pytest.mark.parametrize("value,expected", [
        (950, "950"),
        (1000, "1.0k"),
        (1500, "1.5k"),
        (2500000, "2.5M"),
        (3000000000, "3.0B"),
        (12.0, "12"),
        (0.5, "0.5"),
    ])
    def test_format_number(self, value, expected):
        assert format_number(value) == expected

    def test_format_currency(self):
        assert format_currency(1500) == "€1.5k"
        assert format_currency(1500, symbol="$", compact=False) == "$1,500.0"

    def test_format_percent(self):
        assert format_percent(12.3456) == "12.35%"
        assert format_percent(50, decimals=0) == "50%"

    def test_toggle_series(self):
        hidden = toggle_series([], "Facebook")
        assert hidden == ["Facebook"]

        assert toggle_series(hidden, "Facebook") == []


class TestCharts:
    """Test cases for figure builders."""

    def test_channel_table(self, optimization_result):
        table = build_channel_table(optimization_result)

        assert list(table['Channel']) == ["Facebook", "Reddit"]
        assert table['Media Budget'][0].startswith("€")

    def test_scenario_figure_hides_series(self, optimization_result):
        fig = build_scenario_figure(optimization_result, hidden=["Strategy B (Max Reach)"])

        visibility = {trace.name: trace.visible for trace in fig.data}
        assert len(fig.data) == 3
        assert visibility["Strategy B (Max Reach)"] == 'legendonly'
        assert visibility["Strategy A (Default)"] is True

    def test_channel_curves_figure(self, optimization_result):
        fig = build_channel_curves_figure(optimization_result, hidden=["Reddit"])

        assert [trace.name for trace in fig.data] == ["Facebook", "Reddit"]
        assert fig.data[1].visible == 'legendonly'
        assert len(fig.data[0].x) == 10

    def test_budget_hover_uses_configured_currency(self, optimization_result):
        figures = [
            build_scenario_figure(optimization_result, currency="$"),
            build_channel_curves_figure(optimization_result, currency="$"),
        ]

        for fig in figures:
            for trace in fig.data:
                assert trace.hovertemplate.startswith("Budget: $")
                assert "€" not in trace.hovertemplate

    def test_budget_hover_defaults_to_euro(self, optimization_result):
        fig = build_scenario_figure(optimization_result)

        assert fig.data[0].hovertemplate.startswith("Budget: €")

    def test_overlap_figure(self, optimization_result):
        fig = build_overlap_figure(optimization_result)

        assert [trace.name for trace in fig.data] == ['Gross Reach', 'Net Reach']

    def test_other_figures_build(self, optimization_result):
        assert len(build_age_reach_figure(optimization_result).data) == 1
        assert len(build_intersections_figure(optimization_result).data) == 1
        assert [trace.name for trace in build_user_activity_figure(optimization_result).data] == ['MAU', 'DAU']
