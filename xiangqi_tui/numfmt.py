"""Compact number formatting for the evaluation panel and status bar."""


def format_count_k(value: int) -> str:
    """Show counts of a thousand or more in ``k`` units, e.g. ``1.5k``."""
    if value < 1_000:
        return str(value)
    k = value / 1_000
    if k >= 100:
        return f"{k:.0f}k"
    return f"{k:.1f}k"