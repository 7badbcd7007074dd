"""
Formatting utilities for text reports.

Used by reconciliation and validation reports and the CLI.
"""

from .formulas import round_half_up


def format_percent(value: float, decimals: int = 1) -> str:
    """
    Format a 0-100 percentage.

    Args:
        value: Percentage (e.g., 87.456)
        decimals: Digits after the decimal point

    Returns:
        Formatted string (e.g., '87.5%')
    """
    return f"{value:.{decimals}f}%"


def format_bar(percent: float, width: int = 10) -> str:
    """
    Render a percentage as a fixed-width text bar.

    Args:
        percent: Percentage 0-100
        width: Number of cells

    Returns:
        Bar string (e.g., '███████░░░' for 70%)
    """
    filled = round_half_up(max(0.0, min(100.0, percent)) / 100 * width)
    return "█" * filled + "░" * (width - filled)


def format_value(value: object) -> str:
    """
    Render a field value for display.

    Args:
        value: Any field value (None, enum, str, number)

    Returns:
        '—' for None, the enum value for enums, str() otherwise
    """
    if value is None:
        return "—"
    return str(getattr(value, "value", value))
