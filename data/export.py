"""
Excel export of campaign inputs and optimization results.
"""

import logging
from dataclasses import asdict
from datetime import date
from io import BytesIO
from typing import Dict, List, Optional

import pandas as pd

from models.data_models import CampaignInputs, OptimizationResult

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


SHEET_NAMES = [
    'Campaign Inputs',
    'KPI Forecast',
    'Optimization Scenarios',
    'Reach Efficiency',
    'Age Demographics',
    'Overlap Analysis',
]


def _blank_if_none(value):
    return '' if value is None else value


def build_inputs_rows(inputs: CampaignInputs) -> List[Dict[str, object]]:
    """Parameter/Value rows for the Campaign Inputs sheet."""
    return [
        {'Parameter': 'Customer Name', 'Value': inputs.customer_name},
        {'Parameter': 'Campaign Name', 'Value': inputs.campaign_name},
        {'Parameter': 'Total Budget', 'Value': _blank_if_none(inputs.total_budget)},
        {'Parameter': 'Goal Type', 'Value': inputs.goal_type},
        {'Parameter': 'Start Date', 'Value': inputs.campaign_start_date.isoformat()},
        {'Parameter': 'End Date', 'Value': inputs.campaign_end_date.isoformat()},
        {'Parameter': 'Duration (Weeks)', 'Value': inputs.campaign_duration},
        {'Parameter': 'Country', 'Value': inputs.country},
        {'Parameter': 'Min Age', 'Value': _blank_if_none(inputs.age_min)},
        {'Parameter': 'Max Age', 'Value': _blank_if_none(inputs.age_max)},
        {'Parameter': 'Gender', 'Value': inputs.gender},
        {'Parameter': 'Min Contact Frequency', 'Value': inputs.minimal_contact_frequency},
        {'Parameter': 'Max Channels', 'Value': inputs.max_channels},
        {'Parameter': 'Target Reach', 'Value': _blank_if_none(inputs.target_reach)},
        {'Parameter': 'Selected Channels', 'Value': ', '.join(inputs.channel_selection)},
    ]


def build_export_sheets(inputs: CampaignInputs, result: OptimizationResult) -> Dict[str, pd.DataFrame]:
    """
    Flatten inputs and results into one DataFrame per sheet.

    Args:
        inputs: Campaign inputs of the run
        result: Optimization result to export

    Returns:
        Ordered mapping of sheet name to DataFrame
    """
    scenario_rows = [
        {'step': point.step, 'budget': point.budget, **point.strategies}
        for point in result.candidate_comparison
    ]

    efficiency_rows = [
        {'Channel': channel, 'Budget': point.budget, 'Reach': point.reach}
        for channel, points in result.channel_curves.items()
        for point in points
    ]

    return {
        'Campaign Inputs': pd.DataFrame(build_inputs_rows(inputs)),
        'KPI Forecast': pd.DataFrame([asdict(channel) for channel in result.channels]),
        'Optimization Scenarios': pd.DataFrame(scenario_rows),
        'Reach Efficiency': pd.DataFrame(efficiency_rows, columns=['Channel', 'Budget', 'Reach']),
        'Age Demographics': pd.DataFrame([asdict(row) for row in result.age_demographics]),
        'Overlap Analysis': pd.DataFrame([asdict(row) for row in result.overlap_data]),
    }


def build_workbook(inputs: CampaignInputs, result: OptimizationResult) -> bytes:
    """
    Write the export workbook into memory.

    Returns:
        The .xlsx file content
    """
    buffer = BytesIO()
    sheets = build_export_sheets(inputs, result)

    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        for sheet_name, frame in sheets.items():
            frame.to_excel(writer, sheet_name=sheet_name, index=False)

    logger.info(f"Built export workbook with {len(sheets)} sheets")
    return buffer.getvalue()


def export_filename(inputs: CampaignInputs, today: Optional[date] = None) -> str:
    """Workbook file name embedding the customer and the export date."""
    today = today or date.today()
    return f"Advantiv_Export_{inputs.customer_name or 'Campaign'}_{today.isoformat()}.xlsx"
