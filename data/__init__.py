# Reference data and export for the campaign planner

from .catalog import AVAILABLE_CHANNELS, CHANNEL_DEFAULTS, CUSTOMERS, get_channel_defaults
from .export import build_workbook, export_filename

__all__ = ['AVAILABLE_CHANNELS', 'CHANNEL_DEFAULTS', 'CUSTOMERS', 'get_channel_defaults',
           'build_workbook', 'export_filename']
