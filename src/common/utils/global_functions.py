# common/utils/global_functions.py
from datetime import date, datetime, timezone


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def format_date(value: date) -> str:
    """Render a date the way notification messages show it, e.g. 3/14/2025."""
    return f"{value.month}/{value.day}/{value.year}"
