"""
Tests for the campaign controller run sequence.
"""

import pytest
from unittest.mock import Mock

from config.settings import AppConfig
from models.data_models import CampaignInputs, OptimizationResult, RunStatus
from business_logic.campaign_controller import CampaignController
from business_logic.scenario_generator import ScenarioGenerator
from business_logic.run_state import RunState
from business_logic.summary_generator import ERROR_FALLBACK_TEXT


@pytest.fixture
def valid_inputs():
    return CampaignInputs(
        total_budget=10000,
        target_reach=100000,
        channel_selection=["Facebook", "Youtube"]
    )


class TestCampaignController:
    """Test cases for CampaignController."""

    def setup_method(self):
        """Set up test fixtures."""
        self.config = AppConfig(stage_delay_seconds=1.5, random_seed=3)
        self.summary_generator = Mock()
        self.summary_generator.generate_summary.return_value = "Executive summary"
        self.sleep = Mock()
        self.controller = CampaignController(
            self.config,
            summary_generator=self.summary_generator,
            sleep=self.sleep
        )

    def test_successful_run(self, valid_inputs):
        success, result, message, notification = self.controller.run_optimization(valid_inputs)

        assert success
        assert isinstance(result, OptimizationResult)
        assert result.summary == "Executive summary"
        assert notification is None
        assert self.controller.state.status == RunStatus.COMPLETED

    def test_stage_sequence_and_delays(self, valid_inputs):
        seen = []

        self.controller.run_optimization(valid_inputs, on_progress=lambda state: seen.append(state.status))

        assert seen == [
            RunStatus.ANALYZING,
            RunStatus.OPTIMIZING,
            RunStatus.SIMULATING,
            RunStatus.FINALIZING,
            RunStatus.COMPLETED,
        ]
        assert self.sleep.call_count == 3
        self.sleep.assert_called_with(1.5)

    def test_summary_requested_before_generation(self, valid_inputs):
        manager = Mock()
        manager.summary.generate_summary.return_value = "text"
        manager.generator.generate.return_value = ScenarioGenerator(seed=1).generate(valid_inputs)
        controller = CampaignController(
            self.config,
            summary_generator=manager.summary,
            scenario_generator=manager.generator,
            sleep=self.sleep
        )

        controller.run_optimization(valid_inputs)

        assert [call[0] for call in manager.mock_calls] == ['summary.generate_summary', 'generator.generate']
        manager.generator.generate.assert_called_once_with(valid_inputs, summary="text")

    def test_empty_selection_rejected_before_generation(self):
        generator = Mock()
        self.controller.scenario_generator = generator
        inputs = CampaignInputs(total_budget=10000, target_reach=100000)

        success, result, message, notification = self.controller.run_optimization(inputs)

        assert not success
        assert result is None
        assert message == "Please select at least one channel."
        assert notification['type'] == 'warning'
        assert notification['title'] == "Input Validation Error"
        generator.generate.assert_not_called()
        self.summary_generator.generate_summary.assert_not_called()
        self.sleep.assert_not_called()
        assert self.controller.state.status == RunStatus.IDLE

    def test_missing_budget_rejected(self):
        inputs = CampaignInputs(target_reach=100000, channel_selection=["Facebook"])

        success, _, message, _ = self.controller.run_optimization(inputs)

        assert not success
        assert message == "Please fill in the Total Budget and Target Reach."

    def test_summary_fallback_does_not_block_results(self, valid_inputs):
        self.summary_generator.generate_summary.return_value = ERROR_FALLBACK_TEXT

        success, result, _, _ = self.controller.run_optimization(valid_inputs)

        assert success
        assert result.summary == ERROR_FALLBACK_TEXT
        assert len(result.channels) == 2

    def test_generation_failure_resets_state(self, valid_inputs):
        generator = Mock()
        generator.generate.side_effect = RuntimeError("unexpected")
        self.controller.scenario_generator = generator

        success, result, message, notification = self.controller.run_optimization(valid_inputs)

        assert not success
        assert result is None
        assert notification['title'] == "System Error"
        assert self.controller.state.status == RunStatus.IDLE

    def test_interrupted_run_returns_to_idle(self, valid_inputs):
        class ScriptStopped(BaseException):
            pass

        calls = []

        def on_progress(state):
            calls.append(state.status)
            if len(calls) == 2:
                raise ScriptStopped()

        with pytest.raises(ScriptStopped):
            self.controller.run_optimization(valid_inputs, on_progress=on_progress)

        assert self.controller.state == RunState()
        assert self.controller.state.can_start
        assert calls == [RunStatus.ANALYZING, RunStatus.OPTIMIZING]

        success, result, _, _ = self.controller.run_optimization(valid_inputs)
        assert success
        assert result is not None

    def test_summary_failure_propagating_resets_state(self, valid_inputs):
        self.summary_generator.generate_summary.side_effect = RuntimeError("unexpected")

        success, result, _, notification = self.controller.run_optimization(valid_inputs)

        assert not success
        assert notification['title'] == "System Error"
        assert self.controller.state.can_start

    def test_second_run_rejected_while_running(self, valid_inputs):
        self.controller.state = RunState(RunStatus.SIMULATING, 2)

        success, result, message, _ = self.controller.run_optimization(valid_inputs)

        assert not success
        assert message == "An optimization run is already in progress."
        self.summary_generator.generate_summary.assert_not_called()

    def test_rerun_replaces_results(self, valid_inputs):
        _, first, _, _ = self.controller.run_optimization(valid_inputs)
        _, second, _, _ = self.controller.run_optimization(valid_inputs)

        assert first is not second
        assert first.channels[0].run_id != second.channels[0].run_id

    def test_reset(self, valid_inputs):
        self.controller.run_optimization(valid_inputs)

        state = self.controller.reset()

        assert state.status == RunStatus.IDLE
        assert state.current_step_index == -1

    def test_generator_uses_configured_seed_and_population(self):
        controller = CampaignController(
            AppConfig(random_seed=11, target_population=1000),
            summary_generator=self.summary_generator,
            sleep=self.sleep
        )

        assert controller.scenario_generator.target_population == 1000
        assert controller.stage_delay == 1.5
