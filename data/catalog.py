"""
Static reference data: channels, channel defaults, form options and customers.
"""

from typing import Dict, List


AVAILABLE_CHANNELS = [
    'Facebook', 'LinkedIn', 'Youtube', 'X (Twitter)', 'TikTok',
    'Pinterest', 'Instagram', 'Snapchat', 'Twitch', 'Reddit',
    'DPG Media', 'Teads', 'Opt Out', 'Spotify', 'BNR', 'FD Mediagroep'
]

DIGITAL_CHANNELS = [
    'Facebook', 'LinkedIn', 'Youtube', 'X (Twitter)', 'TikTok',
    'Pinterest', 'Instagram', 'Snapchat', 'Twitch', 'Reddit',
    'Teads', 'Spotify'
]

TV_OFFLINE_CHANNELS = [
    'DPG Media', 'Opt Out', 'BNR', 'FD Mediagroep'
]

CHANNEL_DEFAULTS: Dict[str, Dict[str, float]] = {
    'Facebook': {'cpm': 2.85, 'tv_factor': 7},
    'LinkedIn': {'cpm': 9.00, 'tv_factor': 5},
    'Youtube': {'cpm': 4.24, 'tv_factor': 2},
    'X (Twitter)': {'cpm': 1.77, 'tv_factor': 9},
    'TikTok': {'cpm': 2.50, 'tv_factor': 5},
    'Pinterest': {'cpm': 3.39, 'tv_factor': 7},
    'Instagram': {'cpm': 2.85, 'tv_factor': 6},
    'Snapchat': {'cpm': 5.00, 'tv_factor': 6},
    'Twitch': {'cpm': 11.44, 'tv_factor': 7},
    'Reddit': {'cpm': 3.00, 'tv_factor': 7},
    'DPG Media': {'cpm': 5.00, 'tv_factor': 5},
    'Teads': {'cpm': 17.00, 'tv_factor': 2},
    'Opt Out': {'cpm': 20.00, 'tv_factor': 1},
    'Spotify': {'cpm': 3.20, 'tv_factor': 2},
    'BNR': {'cpm': 42.00, 'tv_factor': 2},
    'FD Mediagroep': {'cpm': 20.00, 'tv_factor': 1}
}

# Used for channels missing from CHANNEL_DEFAULTS
FALLBACK_CHANNEL_DEFAULTS = {'cpm': 0.0, 'tv_factor': 1}

GOAL_TYPES = ['Budget', 'Reach']
GENDERS = ['All', 'Men', 'Woman']
COUNTRIES = ['NL', 'BE', 'UK']

STATUS_STEPS = [
    {'key': 'ANALYZING', 'label': 'Analyzing Target Audience'},
    {'key': 'OPTIMIZING', 'label': 'Optimizing Channel Mix'},
    {'key': 'SIMULATING', 'label': 'Running Scenario Simulations'},
    {'key': 'FINALIZING', 'label': 'Finalizing Recommendations'}
]

AGE_BUCKETS = [
    '15-19', '20-24', '25-29', '30-34', '35-39',
    '40-44', '45-49', '50-54', '55-59', '60-64'
]

ALL_CUSTOMERS = "All Customers"

CUSTOMERS = [
    ALL_CUSTOMERS,
    "123planten",
    "Art & Craft",
    "BENU",
    "Ben",
    "Blink",
    "Delta",
    "TechTrendz Inc.",
    "Springbok Agency",
    "Global Mart",
    "Eco Solutions",
    "Future Dynamics"
]


def get_channel_defaults(channel: str) -> Dict[str, float]:
    """Default CPM and TV factor for a channel."""
    defaults = CHANNEL_DEFAULTS.get(channel, FALLBACK_CHANNEL_DEFAULTS)
    return {key: float(value) for key, value in defaults.items()}


def filter_customers(search: str) -> List[str]:
    """Case-insensitive substring search over the customer list."""
    needle = search.strip().lower()
    return [customer for customer in CUSTOMERS if needle in customer.lower()]


def customer_name_from_selection(selection: str) -> str:
    """Map the dropdown choice to a customer name; "All Customers" means none."""
    return "" if selection == ALL_CUSTOMERS else selection
