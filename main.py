"""
Main entry point for the Advantiv campaign planner.
"""
import logging
import streamlit as st

from config.settings import config_manager
from business_logic.campaign_controller import CampaignController
from business_logic.error_handler import error_handler
from business_logic.input_validator import InputValidator
from ui.components import (
    CustomerDropdown, CampaignInputForm, ChannelSelector, StatusProgress, ResultsDashboard,
    get_inputs, set_inputs, reset_inputs, display_notification
)

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CONTROLLER_KEY = 'campaign_controller'
RESULTS_KEY = 'run_results'
NOTIFICATION_KEY = 'run_notification'


def get_controller() -> CampaignController:
    """One controller per browser session."""
    if CONTROLLER_KEY not in st.session_state:
        st.session_state[CONTROLLER_KEY] = CampaignController(config_manager.load_config())
    return st.session_state[CONTROLLER_KEY]


def handle_reset():
    reset_inputs()
    get_controller().reset()
    st.session_state[RESULTS_KEY] = None
    st.session_state[NOTIFICATION_KEY] = None


def main():
    """Main application entry point."""
    st.set_page_config(
        page_title="Advantiv",
        page_icon="📊",
        layout="wide",
        initial_sidebar_state="collapsed"
    )

    config = config_manager.load_config()
    controller = get_controller()

    inputs = get_inputs()
    inputs = CustomerDropdown().render(inputs)

    header_col, reset_col, run_col = st.columns([6, 1, 2])
    with header_col:
        st.title("Advantiv")
        st.markdown(
            "Advantiv helps you get the most reach from your advertising budget by "
            "automatically finding the best way to spend across different channels."
        )
    reset_col.button("Reset", on_click=handle_reset, use_container_width=True)
    run_label = "🔁 Rerun Engine" if st.session_state.get(RESULTS_KEY) else "▶️ Run Optimization"
    run_clicked = run_col.button(
        run_label,
        type="primary",
        disabled=not controller.state.can_start,
        use_container_width=True
    )

    inputs = CampaignInputForm().render(inputs)
    inputs = ChannelSelector().render(inputs)
    set_inputs(inputs)

    for warning in InputValidator().validate(inputs).warnings:
        st.caption(f"⚠️ {warning.message}")

    progress_placeholder = st.empty()
    status_component = StatusProgress()

    if run_clicked:
        st.session_state[RESULTS_KEY] = None
        try:
            success, result, message, notification = controller.run_optimization(
                inputs,
                on_progress=lambda state: status_component.render(state, progress_placeholder)
            )
        except Exception as e:
            error_info = error_handler.classify_error(e, "optimization run")
            error_handler.log_error(error_info, "Optimization run")
            controller.reset()
            success, result, message = False, None, error_info.user_message
            notification = error_handler.create_user_notification(error_info)

        st.session_state[RESULTS_KEY] = result if success else None
        st.session_state[NOTIFICATION_KEY] = notification
        logger.info(f"Run finished: {message}")
    else:
        status_component.render(controller.state, progress_placeholder)

    display_notification(st.session_state.get(NOTIFICATION_KEY))

    result = st.session_state.get(RESULTS_KEY)
    if result:
        ResultsDashboard(config.currency_symbol).render(result, inputs)
    else:
        st.info('Fill in your campaign parameters and click "Run Optimization" to see results.')

    with st.expander("System Information"):
        col1, col2 = st.columns(2)

        with col1:
            st.write("**Configuration:**")
            st.write(f"Summary Model: {config.openai_model}")
            st.write(f"API Key Configured: {'Yes' if config.openai_api_key else 'No'}")
            st.write(f"Stage Delay: {config.stage_delay_seconds} s")
            st.write(f"Random Seed: {config.random_seed if config.random_seed is not None else 'None'}")

        with col2:
            st.write("**Run Status:**")
            st.write(f"Status: {controller.state.status.value}")
            stats = error_handler.get_error_statistics()
            st.write(f"Errors Logged: {stats['total_errors']}")

    st.caption("© 2026 Advantiv - Proprietary Optimization Engine by Springbok Media")


if __name__ == "__main__":
    main()
