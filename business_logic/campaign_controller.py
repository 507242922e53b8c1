"""
Campaign Controller - Orchestrates an optimization run.

This module ties together input validation, the staged progress sequence,
the executive summary request and scenario generation to provide one
entry point for the dashboard.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional, Tuple

from models.data_models import CampaignInputs, OptimizationResult
from config.settings import AppConfig, config_manager
from .input_validator import InputValidator
from .scenario_generator import ScenarioGenerator
from .summary_generator import SummaryGenerator
from .run_state import RunState, RunEvent, STAGE_STATUSES, reduce_run_state
from .error_handler import error_handler, InputValidationError

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


ProgressCallback = Callable[[RunState], None]


class CampaignController:
    """
    Main controller for the optimization run.

    Holds the run state for one session; a second run cannot start while
    one is in progress.
    """

    def __init__(self, config: Optional[AppConfig] = None,
                 summary_generator: Optional[SummaryGenerator] = None,
                 scenario_generator: Optional[ScenarioGenerator] = None,
                 sleep: Callable[[float], None] = time.sleep):
        """
        Initialize the campaign controller.

        Args:
            config: Application configuration; loaded from the config manager when omitted
            summary_generator: Optional SummaryGenerator instance
            scenario_generator: Optional ScenarioGenerator instance
            sleep: Function used to wait between progress stages
        """
        self.config = config or config_manager.load_config()
        self.validator = InputValidator()
        self.summary_generator = summary_generator or SummaryGenerator(self.config)
        self.scenario_generator = scenario_generator or ScenarioGenerator(
            seed=self.config.random_seed,
            target_population=self.config.target_population
        )
        self.sleep = sleep
        self.stage_delay = self.config.stage_delay_seconds
        self.state = RunState()

        logger.info("CampaignController initialized")

    def dispatch(self, event: RunEvent, on_progress: Optional[ProgressCallback] = None) -> RunState:
        """Apply an event to the run state and report the new state."""
        self.state = reduce_run_state(self.state, event)
        if on_progress:
            on_progress(self.state)
        return self.state

    def run_optimization(self, inputs: CampaignInputs,
                         on_progress: Optional[ProgressCallback] = None
                         ) -> Tuple[bool, Optional[OptimizationResult], str, Optional[Dict[str, Any]]]:
        """
        Run the full optimization sequence for a set of inputs.

        Args:
            inputs: Campaign inputs from the form
            on_progress: Called with the run state after every transition

        Returns:
            Tuple of (success, result, status message, user_notification)
        """
        if not self.state.can_start:
            message = "An optimization run is already in progress."
            logger.warning(message)
            return False, None, message, None

        validation = self.validator.validate(inputs)
        if not validation.is_valid:
            error_info = error_handler.handle_validation_error(
                InputValidationError(validation.errors[0].message), "run start"
            )
            error_handler.log_error(error_info, "Input validation")
            return False, None, error_info.user_message, error_handler.create_user_notification(error_info)

        logger.info(
            f"Starting optimization for {inputs.customer_name or 'unnamed customer'} "
            f"with {len(inputs.channel_selection)} channels"
        )

        try:
            self.dispatch(RunEvent.START, on_progress)
            for _ in range(len(STAGE_STATUSES) - 1):
                self.sleep(self.stage_delay)
                self.dispatch(RunEvent.ADVANCE, on_progress)

            summary = self.summary_generator.generate_summary(inputs)
            result = self.scenario_generator.generate(inputs, summary=summary)
        except Exception as e:
            error_info = error_handler.classify_error(e, "scenario generation")
            error_handler.log_error(error_info, "Scenario Generation")
            self.dispatch(RunEvent.RESET, on_progress)
            return False, None, error_info.user_message, error_handler.create_user_notification(error_info)
        except BaseException:
            # Streamlit stops a script mid-run with a BaseException; the
            # callback may not touch the page any more
            logger.info("Optimization run interrupted")
            self.dispatch(RunEvent.RESET)
            raise

        self.dispatch(RunEvent.COMPLETE, on_progress)
        logger.info(f"Optimization complete: {len(result.channels)} channels forecast")

        return True, result, "Optimization complete", None

    def reset(self, on_progress: Optional[ProgressCallback] = None) -> RunState:
        """Return the run state to idle."""
        return self.dispatch(RunEvent.RESET, on_progress)
