"""
Tests for executive summary generation.
"""

import pytest
import httpx
import openai
from datetime import date
from unittest.mock import Mock, patch

from config.settings import AppConfig
from models.data_models import CampaignInputs, ChannelConfig
from business_logic.summary_generator import (
    SummaryGenerator, EMPTY_RESPONSE_TEXT, ERROR_FALLBACK_TEXT
)
from business_logic.error_handler import error_handler


def make_completion(content):
    """Build a mock chat-completions response."""
    completion = Mock()
    completion.choices = [Mock()]
    completion.choices[0].message.content = content
    return completion


@pytest.fixture
def campaign_inputs():
    return CampaignInputs(
        total_budget=25000,
        target_reach=400000,
        goal_type="Reach",
        campaign_start_date=date(2026, 3, 1),
        campaign_end_date=date(2026, 3, 29),
        campaign_duration=4,
        country="BE",
        age_min=18,
        gender="Woman",
        channel_selection=["Facebook", "BNR"],
        channel_settings={
            "Facebook": ChannelConfig(always_include=True, fixed_budget=5000, cpm=2.85, tv_factor=7),
            "BNR": ChannelConfig(frequency_capping=True, scale_factor=1.5),
        },
        customer_name="Delta",
        campaign_name=""
    )


class TestSummaryGenerator:
    """Test cases for SummaryGenerator."""

    def setup_method(self):
        """Set up test fixtures."""
        self.config = AppConfig(openai_api_key="test-key", openai_model="test-model")
        self.mock_client = Mock()
        self.generator = SummaryGenerator(self.config, client=self.mock_client)

    def test_build_prompt_includes_inputs(self, campaign_inputs):
        prompt = self.generator.build_prompt(campaign_inputs)

        assert "Customer: Delta" in prompt
        assert "Campaign: N/A" in prompt
        assert "Total Budget: €25000" in prompt
        assert "Goal: Reach" in prompt
        assert "Target Reach: 400000" in prompt
        assert "Demographics: 18-Any years, Gender: Woman" in prompt
        assert "Location: BE" in prompt
        assert "Duration: 4 weeks" in prompt
        assert "2026-03-01 to 2026-03-29" in prompt

    def test_build_prompt_flattens_channel_settings(self, campaign_inputs):
        prompt = self.generator.build_prompt(campaign_inputs)

        assert (
            "Facebook (Always include: True, Freq Capping: False, Fixed budget: €5000, "
            "CPM: €2.85, TV Factor: 7)"
        ) in prompt
        assert "BNR (Always include: False, Freq Capping: True, Scale Factor: 1.5)" in prompt

    def test_channel_without_settings_uses_defaults(self):
        description = self.generator.describe_channel("Teads", None)

        assert description == "Teads (Always include: False, Freq Capping: False)"

    def test_generate_summary_success(self, campaign_inputs):
        self.mock_client.chat.completions.create.return_value = make_completion("Spend on Facebook.")

        summary = self.generator.generate_summary(campaign_inputs)

        assert summary == "Spend on Facebook."
        kwargs = self.mock_client.chat.completions.create.call_args.kwargs
        assert kwargs['model'] == "test-model"
        assert kwargs['temperature'] == 0.7
        assert kwargs['top_p'] == 0.95
        assert "Customer: Delta" in kwargs['messages'][0]['content']

    def test_empty_response_returns_placeholder(self, campaign_inputs):
        self.mock_client.chat.completions.create.return_value = make_completion("")

        assert self.generator.generate_summary(campaign_inputs) == EMPTY_RESPONSE_TEXT

    def test_no_choices_returns_placeholder(self, campaign_inputs):
        completion = Mock()
        completion.choices = []
        self.mock_client.chat.completions.create.return_value = completion

        assert self.generator.generate_summary(campaign_inputs) == EMPTY_RESPONSE_TEXT

    def test_api_failure_returns_fallback_without_retry(self, campaign_inputs):
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        self.mock_client.chat.completions.create.side_effect = openai.APIConnectionError(request=request)

        summary = self.generator.generate_summary(campaign_inputs)

        assert summary == ERROR_FALLBACK_TEXT
        assert self.mock_client.chat.completions.create.call_count == 1

    def test_unexpected_failure_is_logged(self, campaign_inputs):
        self.mock_client.chat.completions.create.side_effect = RuntimeError("boom")

        with patch.object(error_handler, 'log_error') as mock_log:
            summary = self.generator.generate_summary(campaign_inputs)

        assert summary == ERROR_FALLBACK_TEXT
        mock_log.assert_called_once()

    @patch('business_logic.summary_generator.OpenAI')
    def test_client_created_lazily(self, mock_openai_class, campaign_inputs):
        mock_openai_class.return_value.chat.completions.create.return_value = make_completion("ok")
        generator = SummaryGenerator(self.config)

        mock_openai_class.assert_not_called()
        assert generator.generate_summary(campaign_inputs) == "ok"
        mock_openai_class.assert_called_once_with(api_key="test-key")

    @patch('business_logic.summary_generator.OpenAI')
    def test_client_construction_failure_returns_fallback(self, mock_openai_class, campaign_inputs):
        mock_openai_class.side_effect = openai.OpenAIError("The api_key client option must be set")
        generator = SummaryGenerator(AppConfig(openai_api_key=None))

        assert generator.generate_summary(campaign_inputs) == ERROR_FALLBACK_TEXT
