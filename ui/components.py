"""
Streamlit UI components for the Advantiv campaign planner.
"""

import streamlit as st
from dataclasses import replace
from typing import Dict, Any, List, Optional
import logging

from models.data_models import CampaignInputs, ChannelConfig, OptimizationResult, RunStatus
from data.catalog import (
    AVAILABLE_CHANNELS, GOAL_TYPES, GENDERS, COUNTRIES, STATUS_STEPS, ALL_CUSTOMERS,
    filter_customers, customer_name_from_selection
)
from data.export import build_workbook, export_filename
from business_logic.channel_selection import (
    update_channels, select_all, select_digital, select_tv_offline, clear_all, update_setting
)
from business_logic.run_state import RunState
from ui import charts
from ui.formatting import format_number, format_currency, toggle_series

logger = logging.getLogger(__name__)

INPUTS_KEY = 'campaign_inputs'
CHANNEL_WIDGET_KEY = 'channel_multiselect'
FORM_PREFIX = 'input_'
SETTING_PREFIX = 'cfg_'

# Widget key suffix -> CampaignInputs field
FORM_FIELDS = [
    'campaign_name', 'total_budget', 'goal_type', 'campaign_start_date',
    'campaign_end_date', 'country', 'gender', 'age_min', 'age_max',
    'minimal_contact_frequency', 'max_channels', 'target_reach'
]


def get_inputs() -> CampaignInputs:
    """Campaign inputs for this session, created with defaults on first access."""
    if INPUTS_KEY not in st.session_state:
        st.session_state[INPUTS_KEY] = CampaignInputs.defaults()
    return st.session_state[INPUTS_KEY]


def set_inputs(inputs: CampaignInputs):
    st.session_state[INPUTS_KEY] = inputs


def reset_inputs():
    """Drop every input widget value and restore default inputs."""
    for key in list(st.session_state.keys()):
        if key.startswith((FORM_PREFIX, SETTING_PREFIX)) or key in ('customer_search', 'customer_select'):
            del st.session_state[key]
    st.session_state[CHANNEL_WIDGET_KEY] = []
    set_inputs(CampaignInputs.defaults())


def display_notification(notification: Optional[Dict[str, Any]]):
    """Render an error-handler notification with the matching Streamlit element."""
    if not notification:
        return

    text = f"**{notification['title']}**: {notification['message']}"
    if notification['type'] == 'error':
        st.error(f"❌ {text}")
    elif notification['type'] == 'warning':
        st.warning(f"⚠️ {text}")
    else:
        st.info(text)

    if notification.get('action'):
        st.caption(notification['action'])


class CustomerDropdown:
    """Searchable customer picker; "All Customers" clears the customer name."""

    def render(self, inputs: CampaignInputs) -> CampaignInputs:
        col1, col2 = st.columns([1, 2])

        with col1:
            search = st.text_input("Search customers...", key='customer_search')

        options = filter_customers(search or "")
        current = inputs.customer_name or ALL_CUSTOMERS
        if current not in options:
            options = [current] + options

        with col2:
            selection = st.selectbox(
                "Customer",
                options=options,
                index=options.index(current),
                key='customer_select'
            )

        return replace(inputs, customer_name=customer_name_from_selection(selection))


class CampaignInputForm:
    """
    Campaign parameter fields.

    Widgets are keyed so values survive reruns; the duration in weeks is
    recomputed from the dates on every render.
    """

    def _init_widget_state(self, inputs: CampaignInputs):
        for name in FORM_FIELDS:
            key = FORM_PREFIX + name
            if key not in st.session_state:
                st.session_state[key] = getattr(inputs, name)

    def render(self, inputs: CampaignInputs) -> CampaignInputs:
        """
        Render the parameter form.

        Args:
            inputs: Current campaign inputs

        Returns:
            Updated CampaignInputs built from the widget values
        """
        self._init_widget_state(inputs)
        st.subheader("🎛️ Campaign Parameters")

        col1, col2, col3, col4 = st.columns(4)

        with col1:
            st.text_input("Campaign Name", key=FORM_PREFIX + 'campaign_name',
                          placeholder="Summer 2026 Launch")
            st.number_input("Total Budget (€)", min_value=0.0, step=1000.0,
                            key=FORM_PREFIX + 'total_budget', placeholder="0")
            st.radio("Goal Type", options=GOAL_TYPES, horizontal=True,
                     key=FORM_PREFIX + 'goal_type')

        with col2:
            st.date_input("Start Date", key=FORM_PREFIX + 'campaign_start_date')
            st.date_input("End Date", key=FORM_PREFIX + 'campaign_end_date')
            st.radio("Target Country", options=COUNTRIES, horizontal=True,
                     key=FORM_PREFIX + 'country')
            st.radio("Gender", options=GENDERS, horizontal=True,
                     key=FORM_PREFIX + 'gender')

        with col3:
            st.number_input("Min Age", min_value=0, step=1, key=FORM_PREFIX + 'age_min',
                            placeholder="e.g. 18")
            st.number_input("Max Age", min_value=0, step=1, key=FORM_PREFIX + 'age_max',
                            placeholder="e.g. 65")
            st.number_input("Min Contact Frequency", min_value=0, step=1,
                            key=FORM_PREFIX + 'minimal_contact_frequency')
            st.number_input("Max Channels", min_value=0, step=1,
                            key=FORM_PREFIX + 'max_channels')

        with col4:
            st.number_input("Target Reach", min_value=0.0, step=1000.0,
                            key=FORM_PREFIX + 'target_reach', placeholder="0")

        values = {name: st.session_state[FORM_PREFIX + name] for name in FORM_FIELDS}
        start_date = values.pop('campaign_start_date')
        end_date = values.pop('campaign_end_date')

        updated = replace(inputs, **values)
        updated.set_dates(start_date, end_date)

        with col2:
            st.text_input("Duration (Weeks)", value=str(updated.campaign_duration), disabled=True)

        return updated


class ChannelSelector:
    """Channel picker with bulk actions and per-channel constraints."""

    def _apply_bulk(self, action):
        inputs = action(get_inputs())
        set_inputs(inputs)
        st.session_state[CHANNEL_WIDGET_KEY] = list(inputs.channel_selection)

    def render(self, inputs: CampaignInputs) -> CampaignInputs:
        """
        Render the channel selection and settings.

        Args:
            inputs: Current campaign inputs

        Returns:
            Updated CampaignInputs
        """
        st.subheader("📡 Channel Selection")

        if CHANNEL_WIDGET_KEY not in st.session_state:
            st.session_state[CHANNEL_WIDGET_KEY] = list(inputs.channel_selection)

        col1, col2, col3, col4 = st.columns(4)
        col1.button("Select All", on_click=self._apply_bulk, args=(select_all,), use_container_width=True)
        col2.button("Digital", on_click=self._apply_bulk, args=(select_digital,), use_container_width=True)
        col3.button("TV / Offline", on_click=self._apply_bulk, args=(select_tv_offline,), use_container_width=True)
        col4.button("Clear", on_click=self._apply_bulk, args=(clear_all,), use_container_width=True)

        selection = st.multiselect("Channels", options=AVAILABLE_CHANNELS, key=CHANNEL_WIDGET_KEY)
        inputs = update_channels(inputs, selection)

        for channel in inputs.channel_selection:
            inputs = self._render_channel_settings(inputs, channel)

        return inputs

    def _render_channel_settings(self, inputs: CampaignInputs, channel: str) -> CampaignInputs:
        config = inputs.channel_settings.get(channel) or ChannelConfig()

        def widget_key(setting: str) -> str:
            key = f"{SETTING_PREFIX}{channel}_{setting}"
            if key not in st.session_state:
                st.session_state[key] = getattr(config, setting)
            return key

        with st.expander(f"⚙️ {channel}", expanded=False):
            col1, col2, col3, col4 = st.columns(4)
            with col1:
                st.number_input("Fixed Budget (€)", min_value=0.0, key=widget_key('fixed_budget'),
                                placeholder="Dynamic")
                st.checkbox("Always include", key=widget_key('always_include'))
            with col2:
                st.number_input("CPM (€)", min_value=0.0, key=widget_key('cpm'), placeholder="0.00")
                st.checkbox("Frequency capping", key=widget_key('frequency_capping'))
            with col3:
                st.number_input("TV Factor", min_value=0.0, key=widget_key('tv_factor'), placeholder="1.0")
            with col4:
                st.number_input("Scale Factor", min_value=0.0, key=widget_key('scale_factor'), placeholder="1.0")

        for setting in ('fixed_budget', 'cpm', 'tv_factor', 'scale_factor', 'always_include', 'frequency_capping'):
            value = st.session_state[f"{SETTING_PREFIX}{channel}_{setting}"]
            if value != getattr(config, setting):
                inputs = update_setting(inputs, channel, setting, value)

        return inputs


class StatusProgress:
    """Progress bar and stage list for a running optimization."""

    def render(self, state: RunState, container=None):
        container = container or st.container()
        with container.container():
            if state.status == RunStatus.IDLE:
                return

            st.markdown(f"**Engine Progress** · {state.status_label}")
            st.progress(int(state.progress_percent))

            columns = st.columns(len(STATUS_STEPS))
            for index, (column, step) in enumerate(zip(columns, STATUS_STEPS)):
                done = index <= state.current_step_index or not state.is_running
                marker = "🔵" if done else "⚪"
                column.caption(f"{marker} Step {index + 1}")
                column.write(step['label'])


class ResultsDashboard:
    """
    Results view: KPI cards, summary, channel table, charts and export.
    """

    def __init__(self, currency: str = "€"):
        self.currency = currency

    def render(self, result: OptimizationResult, inputs: CampaignInputs):
        self._render_export(result, inputs)
        self._render_kpi_cards(result)

        st.subheader("🧠 Executive Summary")
        st.markdown(result.summary)

        st.subheader("📊 KPI Forecast per Channel")
        st.dataframe(charts.build_channel_table(result, self.currency), use_container_width=True, hide_index=True)

        st.subheader("📈 Optimization Scenario Comparison")
        strategy_names = list(result.candidate_comparison[0].strategies.keys()) if result.candidate_comparison else []
        hidden = self._render_series_toggles('hidden_candidates', strategy_names)
        st.plotly_chart(charts.build_scenario_figure(result, hidden, self.currency), use_container_width=True)

        st.subheader("📉 Reach Efficiency per Channel")
        hidden = self._render_series_toggles('hidden_channels', list(result.channel_curves.keys()))
        st.plotly_chart(charts.build_channel_curves_figure(result, hidden, self.currency), use_container_width=True)

        col1, col2 = st.columns(2)
        with col1:
            st.plotly_chart(charts.build_age_reach_figure(result), use_container_width=True)
        with col2:
            st.plotly_chart(charts.build_age_budget_figure(result), use_container_width=True)

        st.plotly_chart(charts.build_overlap_figure(result), use_container_width=True)

        col1, col2 = st.columns(2)
        with col1:
            st.plotly_chart(charts.build_intersections_figure(result), use_container_width=True)
        with col2:
            st.plotly_chart(charts.build_user_activity_figure(result), use_container_width=True)

    def _render_kpi_cards(self, result: OptimizationResult):
        col1, col2, col3, col4 = st.columns(4)
        col1.metric("Total Projected Reach", format_number(result.total_projected_reach))
        col2.metric("Users Lost to Overlap", format_number(result.users_lost_to_overlap))
        col3.metric("Total Media Budget", format_currency(result.total_media_budget, self.currency))
        col4.metric("Target Population", format_number(result.target_population))

    def _render_series_toggles(self, state_key: str, series: List[str]) -> List[str]:
        """Checkbox per series; unchecking hides it from the chart legend."""
        if state_key not in st.session_state:
            st.session_state[state_key] = []

        def on_toggle(name: str):
            st.session_state[state_key] = toggle_series(st.session_state[state_key], name)

        columns = st.columns(max(1, len(series)))
        for column, name in zip(columns, series):
            column.checkbox(
                name,
                value=name not in st.session_state[state_key],
                key=f"{state_key}_{name}",
                on_change=on_toggle,
                args=(name,)
            )

        return st.session_state[state_key]

    def _render_export(self, result: OptimizationResult, inputs: CampaignInputs):
        try:
            workbook = build_workbook(inputs, result)
        except Exception as e:
            logger.error(f"Error building export workbook: {str(e)}")
            st.error(f"❌ Export generation failed: {str(e)}")
            return

        st.download_button(
            "📥 Export to Excel",
            data=workbook,
            file_name=export_filename(inputs),
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
