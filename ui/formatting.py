"""
Number formatting helpers for the results dashboard.
"""

from typing import List, Union

Number = Union[int, float]


def format_number(value: Number) -> str:
    """Compact number: 1.2B, 3.4M, 5.6k, or the plain value below a thousand."""
    if value >= 1000000000:
        return f"{value / 1000000000:.1f}B"
    if value >= 1000000:
        return f"{value / 1000000:.1f}M"
    if value >= 1000:
        return f"{value / 1000:.1f}k"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_currency(value: Number, symbol: str = "€", compact: bool = True) -> str:
    if compact:
        return f"{symbol}{format_number(value)}"
    return f"{symbol}{value:,.1f}"


def format_percent(value: Number, decimals: int = 2) -> str:
    return f"{value:.{decimals}f}%"


def toggle_series(hidden: List[str], key: str) -> List[str]:
    """Show a hidden chart series or hide a visible one."""
    if key in hidden:
        return [item for item in hidden if item != key]
    return hidden + [key]
