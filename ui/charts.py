"""
Plotly figure builders for the results dashboard.

Each builder takes the optimization result (plus the list of series the
user has hidden) and returns a figure; rendering is left to the caller.
"""

from typing import List, Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from models.data_models import OptimizationResult

COLORS = ['#3b82f6', '#10b981', '#f59e0b', '#ef4444', '#8b5cf6', '#ec4899', '#06b6d4']


def _visibility(name: str, hidden: Optional[List[str]]):
    return 'legendonly' if hidden and name in hidden else True


def _budget_hover(currency: str) -> str:
    return f"Budget: {currency}%{{x:,.0f}}<br>Reach: %{{y:,}}<extra></extra>"


def build_channel_table(result: OptimizationResult, currency: str = "€") -> pd.DataFrame:
    """KPI forecast table with display formatting applied."""
    rows = []
    for channel in result.channels:
        rows.append({
            'Channel': channel.channel,
            'Media Budget': f"{currency}{channel.media_budget:,.1f}",
            'Share': f"{channel.budget_share_pct:.2f}%",
            'CPM': f"{channel.cpm:.2f}",
            'TV Factor': f"{channel.tv_factor:.1f}",
            'TV Reach': f"{channel.tv_reach_num:,}",
            'TV Reach %': f"{channel.tv_reach_pct:.2f}%",
            'Digital Impressions': f"{channel.digital_impressions:,}",
            'Digital Reach': f"{channel.digital_reach_num:,}",
            'Digital Reach %': f"{channel.digital_reach_pct:.2f}%",
            'Contact Freq': f"{channel.contact_freq:.2f}",
        })
    return pd.DataFrame(rows)


def build_scenario_figure(result: OptimizationResult, hidden: Optional[List[str]] = None,
                          currency: str = "€") -> go.Figure:
    """Reach vs budget line per strategy."""
    fig = go.Figure()
    if not result.candidate_comparison:
        return fig

    budgets = [point.budget for point in result.candidate_comparison]
    strategy_names = list(result.candidate_comparison[0].strategies.keys())

    for index, name in enumerate(strategy_names):
        fig.add_trace(go.Scatter(
            x=budgets,
            y=[point.strategies[name] for point in result.candidate_comparison],
            mode='lines+markers',
            name=name,
            line=dict(color=COLORS[index % len(COLORS)]),
            visible=_visibility(name, hidden),
            hovertemplate=_budget_hover(currency)
        ))

    fig.update_layout(
        title="Optimization Scenario Comparison",
        xaxis_title="Budget",
        yaxis_title="Reach"
    )
    return fig


def build_channel_curves_figure(result: OptimizationResult, hidden: Optional[List[str]] = None,
                                currency: str = "€") -> go.Figure:
    """Diminishing-returns reach curve per channel."""
    fig = go.Figure()
    for index, (channel, points) in enumerate(result.channel_curves.items()):
        fig.add_trace(go.Scatter(
            x=[point.budget for point in points],
            y=[point.reach for point in points],
            mode='lines',
            name=channel,
            line=dict(color=COLORS[index % len(COLORS)]),
            visible=_visibility(channel, hidden),
            hovertemplate=_budget_hover(currency)
        ))

    fig.update_layout(
        title="Reach Efficiency per Channel",
        xaxis_title="Budget",
        yaxis_title="Reach"
    )
    return fig


def build_age_reach_figure(result: OptimizationResult) -> go.Figure:
    df = pd.DataFrame([{'Age': row.bucket, 'Reach': row.reach} for row in result.age_demographics])
    fig = px.bar(df, x='Age', y='Reach', title="Demographic Reach Distribution",
                 color_discrete_sequence=[COLORS[2]])
    return fig


def build_age_budget_figure(result: OptimizationResult) -> go.Figure:
    df = pd.DataFrame([{'Age': row.bucket, 'Budget': row.budget} for row in result.age_demographics])
    fig = px.bar(df, x='Age', y='Budget', title="Demographic Budget Distribution",
                 color_discrete_sequence=[COLORS[4]])
    return fig


def build_overlap_figure(result: OptimizationResult) -> go.Figure:
    """Gross reach against net reach, with the gap being overlap."""
    budgets = [point.budget for point in result.overlap_data]
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=budgets, y=[point.gross_reach for point in result.overlap_data],
        name='Gross Reach', mode='lines', line=dict(color=COLORS[3])
    ))
    fig.add_trace(go.Scatter(
        x=budgets, y=[point.net_reach for point in result.overlap_data],
        name='Net Reach', mode='lines', fill='tonexty', line=dict(color=COLORS[1])
    ))
    fig.update_layout(
        title="Net vs Gross Reach (Overlap Analysis)",
        xaxis_title="Budget",
        yaxis_title="Reach"
    )
    return fig


def build_intersections_figure(result: OptimizationResult) -> go.Figure:
    """Audience size per channel combination."""
    df = pd.DataFrame([
        {
            'Channels': ' ∩ '.join(row.channels),
            'Size': row.size,
            'Overlap %': row.overlap_pct
        }
        for row in result.intersections
    ], columns=['Channels', 'Size', 'Overlap %'])
    fig = px.bar(df, x='Size', y='Channels', orientation='h', hover_data=['Overlap %'],
                 title="Channel Audience Intersections", color_discrete_sequence=[COLORS[0]])
    fig.update_layout(yaxis={'categoryorder': 'total ascending'})
    return fig


def build_user_activity_figure(result: OptimizationResult) -> go.Figure:
    labels = [row.label for row in result.user_activity]
    fig = go.Figure()
    fig.add_trace(go.Bar(x=labels, y=[row.mau for row in result.user_activity],
                         name='MAU', marker_color=COLORS[4]))
    fig.add_trace(go.Bar(x=labels, y=[row.dau for row in result.user_activity],
                         name='DAU', marker_color=COLORS[0]))
    fig.update_layout(title="User Activity (DAU / MAU)", barmode='group')
    return fig
