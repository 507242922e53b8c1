"""
Channel selection and per-channel settings.

Settings are created with catalog defaults the first time a channel is
selected and are kept when the channel is deselected, so re-selecting a
channel restores what the user entered.
"""

import logging
from dataclasses import replace
from typing import Any, List

from models.data_models import CampaignInputs, ChannelConfig
from data.catalog import AVAILABLE_CHANNELS, DIGITAL_CHANNELS, TV_OFFLINE_CHANNELS, get_channel_defaults

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


EDITABLE_SETTINGS = (
    'always_include', 'frequency_capping', 'fixed_budget', 'cpm', 'tv_factor', 'scale_factor'
)


def update_channels(inputs: CampaignInputs, selection: List[str]) -> CampaignInputs:
    """
    Replace the channel selection, creating default settings for new channels.

    Args:
        inputs: Current campaign inputs
        selection: New ordered selection

    Returns:
        New CampaignInputs; the given inputs are left untouched
    """
    # Drop duplicates, keep first occurrence order
    selection = list(dict.fromkeys(selection))
    settings = dict(inputs.channel_settings)

    for channel in selection:
        if channel not in settings:
            defaults = get_channel_defaults(channel)
            settings[channel] = ChannelConfig(cpm=defaults['cpm'], tv_factor=defaults['tv_factor'])

    return replace(inputs, channel_selection=selection, channel_settings=settings)


def toggle_channel(inputs: CampaignInputs, channel: str) -> CampaignInputs:
    """Deselect a selected channel, or append an unselected one."""
    if channel in inputs.channel_selection:
        return update_channels(inputs, [c for c in inputs.channel_selection if c != channel])
    return update_channels(inputs, inputs.channel_selection + [channel])


def select_all(inputs: CampaignInputs) -> CampaignInputs:
    return update_channels(inputs, list(AVAILABLE_CHANNELS))


def select_digital(inputs: CampaignInputs) -> CampaignInputs:
    return update_channels(inputs, list(DIGITAL_CHANNELS))


def select_tv_offline(inputs: CampaignInputs) -> CampaignInputs:
    return update_channels(inputs, list(TV_OFFLINE_CHANNELS))


def clear_all(inputs: CampaignInputs) -> CampaignInputs:
    return update_channels(inputs, [])


def update_setting(inputs: CampaignInputs, channel: str, setting: str, value: Any) -> CampaignInputs:
    """
    Change one setting of one channel.

    Args:
        inputs: Current campaign inputs
        channel: Channel name
        setting: One of EDITABLE_SETTINGS
        value: New value; None clears an optional number

    Returns:
        New CampaignInputs with the updated settings
    """
    if setting not in EDITABLE_SETTINGS:
        raise ValueError(f"Unknown channel setting: {setting}")

    settings = dict(inputs.channel_settings)
    current = settings.get(channel) or ChannelConfig()
    settings[channel] = replace(current, **{setting: value})

    logger.debug(f"Updated {setting} for {channel}: {value}")
    return replace(inputs, channel_settings=settings)
