#!/usr/bin/env python3
"""
General utilities for Tiny Solar System.
"""
from datetime import datetime
from typing import Optional

DATE_FORMAT = "%Y-%m-%d"


def try_float(val) -> Optional[float]:
    try:
        return float(val)
    except (TypeError, ValueError):
        return None


def try_parse_date(text) -> Optional[datetime]:
    """Parse a YYYY-MM-DD string from an input field; None if it is not a date."""
    try:
        return datetime.strptime(str(text).strip(), DATE_FORMAT)
    except ValueError:
        return None


def format_number(value: float) -> str:
    """Grouped decimal with at most two fraction digits, e.g. 4,333 or 0.21."""
    if value == 0:
        return "0"
    text = f"{value:,.2f}".rstrip("0").rstrip(".")
    return text


def format_scientific(value: float) -> str:
    """Compact scientific notation for masses, e.g. 5.97E+24."""
    return f"{value:.2E}".replace("E+0", "E+").replace("E-0", "E-")
