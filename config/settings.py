"""
Configuration management for the Advantiv campaign planner.
Handles API keys, run settings, and environment configuration.
"""

import os
import logging
import streamlit as st
from typing import Optional
from dataclasses import dataclass
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


@dataclass
class AppConfig:
    """Application configuration settings."""
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    summary_temperature: float = 0.7
    summary_top_p: float = 0.95
    stage_delay_seconds: float = 1.5
    target_population: int = 5000000
    random_seed: Optional[int] = None
    currency_symbol: str = "€"


class ConfigManager:
    """Manages application configuration and settings."""

    def __init__(self):
        self._config: Optional[AppConfig] = None

    def load_config(self) -> AppConfig:
        """Load configuration from Streamlit secrets and environment."""
        if self._config is not None:
            return self._config

        openai_api_key = self._get_secret_or_env("OPENAI_API_KEY")
        if not openai_api_key:
            logger.warning("OPENAI_API_KEY is not set; executive summaries will use the fallback text")

        self._config = AppConfig(
            openai_api_key=openai_api_key or None,
            openai_model=self._get_setting("OPENAI_MODEL", "gpt-4o-mini"),
            summary_temperature=self._get_float_setting("SUMMARY_TEMPERATURE", 0.7),
            summary_top_p=self._get_float_setting("SUMMARY_TOP_P", 0.95),
            stage_delay_seconds=self._get_float_setting("STAGE_DELAY_SECONDS", 1.5),
            target_population=self._get_int_setting("TARGET_POPULATION", 5000000),
            random_seed=self._get_int_setting("RANDOM_SEED", None),
            currency_symbol=self._get_setting("CURRENCY_SYMBOL", "€")
        )

        return self._config

    def reset(self):
        """Drop the cached configuration so the next load re-reads the environment."""
        self._config = None

    def _get_secret_or_env(self, key: str) -> Optional[str]:
        """Get value from Streamlit secrets or environment variables."""
        # Streamlit raises when no secrets file exists
        try:
            if hasattr(st, 'secrets') and key in st.secrets:
                return st.secrets[key]
        except Exception as e:
            logger.debug(f"Streamlit secrets unavailable for {key}: {str(e)}")

        return os.getenv(key)

    def _get_setting(self, key: str, default: str) -> str:
        """Get string setting with default value."""
        value = self._get_secret_or_env(key)
        return value if value is not None else default

    def _get_int_setting(self, key: str, default: Optional[int]) -> Optional[int]:
        """Get integer setting with default value."""
        value = self._get_secret_or_env(key)
        if value is not None:
            try:
                return int(value)
            except ValueError:
                logger.warning(f"Ignoring non-integer value for {key}: {value}")
        return default

    def _get_float_setting(self, key: str, default: float) -> float:
        """Get float setting with default value."""
        value = self._get_secret_or_env(key)
        if value is not None:
            try:
                return float(value)
            except ValueError:
                logger.warning(f"Ignoring non-numeric value for {key}: {value}")
        return default


# Global configuration manager instance
config_manager = ConfigManager()
