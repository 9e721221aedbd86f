"""
Date helpers for daily event keys.

Days are written as dd/MM/yyyy (e.g. 01/01/2024), which is the format
stored inside ephemeral keys: insyte::<name>::<dd/MM/yyyy>.
"""

from datetime import date, datetime, timedelta
from typing import Optional

DATE_FORMAT = "%d/%m/%Y"


def get_date(sub: int = 0, now: Optional[datetime] = None) -> str:
    """
    Format the day `sub` days before now as dd/MM/yyyy.

    Args:
        sub: Number of days to go back (0 = today)
        now: Reference time, defaults to local current time

    Returns:
        Date string such as "01/01/2024"
    """
    now = now or datetime.now()
    return (now - timedelta(days=sub)).strftime(DATE_FORMAT)


def parse_date(value: str) -> date:
    """Parse a dd/MM/yyyy string into a comparable date"""
    return datetime.strptime(value, DATE_FORMAT).date()
