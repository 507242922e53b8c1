"""
Executive summary generation using OpenAI.

Flattens the campaign inputs and channel constraints into a single prompt
and asks the chat-completions API for a short executive summary. There is
no retry: any failure is logged and replaced by a fixed fallback text so
the run can still complete.
"""

import logging
from typing import Optional

from openai import OpenAI

from models.data_models import CampaignInputs, ChannelConfig
from config.settings import AppConfig, config_manager
from .error_handler import error_handler

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


EMPTY_RESPONSE_TEXT = "Unable to generate insights at this time."
ERROR_FALLBACK_TEXT = "Error generating AI insights. Please check your inputs and try again."


class SummaryGenerator:
    """
    Requests a natural-language executive summary for a campaign.

    The OpenAI client is created lazily on the first request, so a missing
    API key only surfaces as the fallback text.
    """

    def __init__(self, config: Optional[AppConfig] = None, client: Optional[OpenAI] = None):
        """
        Initialize the summary generator.

        Args:
            config: Application configuration; loaded from the config manager when omitted
            client: Pre-built OpenAI client (tests inject a mock here)
        """
        self.config = config or config_manager.load_config()
        self.client = client
        self.model_name = self.config.openai_model
        self.temperature = self.config.summary_temperature
        self.top_p = self.config.summary_top_p
        self.currency = self.config.currency_symbol

    def _get_client(self) -> OpenAI:
        if self.client is None:
            self.client = OpenAI(api_key=self.config.openai_api_key)
            logger.info("OpenAI client initialized successfully")
        return self.client

    def describe_channel(self, name: str, config: Optional[ChannelConfig]) -> str:
        """One channel with its constraints, e.g. "Facebook (Always include: True, ...)"."""
        config = config or ChannelConfig()
        details = [
            f"Always include: {config.always_include}",
            f"Freq Capping: {config.frequency_capping}",
        ]
        if config.fixed_budget:
            details.append(f"Fixed budget: {self.currency}{config.fixed_budget}")
        if config.cpm:
            details.append(f"CPM: {self.currency}{config.cpm}")
        if config.tv_factor:
            details.append(f"TV Factor: {config.tv_factor}")
        if config.scale_factor:
            details.append(f"Scale Factor: {config.scale_factor}")
        return f"{name} ({', '.join(details)})"

    def build_prompt(self, inputs: CampaignInputs) -> str:
        """
        Create the summary prompt from every input field.

        Args:
            inputs: Campaign inputs including channel settings

        Returns:
            Prompt text
        """
        channel_details = ", ".join(
            self.describe_channel(name, inputs.channel_settings.get(name))
            for name in inputs.channel_selection
        )
        age_min = inputs.age_min if inputs.age_min else 'Any'
        age_max = inputs.age_max if inputs.age_max else 'Any'

        return f"""Based on the following marketing campaign parameters, provide a professional executive summary of the best outcome and strategy:
Customer: {inputs.customer_name or 'N/A'}
Campaign: {inputs.campaign_name or 'N/A'}
Total Budget: {self.currency}{inputs.total_budget or 0}
Goal: {inputs.goal_type}
Target Reach: {inputs.target_reach or 0}
Channels with constraints: {channel_details}
Max Channels: {inputs.max_channels}
Minimal Contact Frequency: {inputs.minimal_contact_frequency}
Demographics: {age_min}-{age_max} years, Gender: {inputs.gender}
Location: {inputs.country}
Campaign Period: {inputs.campaign_start_date.isoformat()} to {inputs.campaign_end_date.isoformat()}
Duration: {inputs.campaign_duration} weeks

The optimization engine must respect the fixed budgets, CPMs, TV factors, Scale Factors, and per-channel Frequency Capping settings provided.
Include a brief breakdown of the best channel combinations and why this strategy will succeed.
Keep it concise but data-driven."""

    def generate_summary(self, inputs: CampaignInputs) -> str:
        """
        Request the executive summary.

        Args:
            inputs: Campaign inputs

        Returns:
            Summary text, or a fixed fallback when the service fails
        """
        prompt = self.build_prompt(inputs)

        try:
            logger.info(f"Requesting executive summary from {self.model_name}")
            response = self._get_client().chat.completions.create(
                model=self.model_name,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                top_p=self.top_p
            )

            content = response.choices[0].message.content if response.choices else None
            if not content:
                logger.warning("OpenAI returned an empty summary")
                return EMPTY_RESPONSE_TEXT

            return content

        except Exception as e:
            error_info = error_handler.classify_error(e, "executive summary")
            error_handler.log_error(error_info, "Summary Generation")
            return ERROR_FALLBACK_TEXT
