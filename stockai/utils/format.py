import math
import re

import humanize


def round2(value: float) -> float:
    """
    Round half up to two decimals (0.125 -> 0.13), where round() would go to even.
    """
    return math.floor(value * 100 + 0.5) / 100


def format_number(value: float) -> str:
    """
    Shortest decimal form of an already rounded value: 198.5, 21.3, 5420
    """
    if value == 0:
        return "0"
    return f"{value:.2f}".rstrip("0").rstrip(".")


def format_change_percent(change: float, change_percent: float) -> str:
    sign = "+" if change >= 0 else ""
    return f"{sign}{format_number(change_percent)}%"


def format_money(value: float) -> str:
    return f"${value:,.2f}"


def format_large_money(value: int) -> str:
    return f"${humanize.intword(value, format='%.2f').title()}"


def format_volume(value: int) -> str:
    return humanize.intword(value, format="%.1f")


def escape_markdown(text: str) -> str:
    return re.sub(r"(?<!\\)\$", r"\\$", text)
