"""
Input checks shared by the entry and report services.
"""

from datetime import date

from bookkeeping.exceptions import ValidationError


def require_date_range(start_date: date, end_date: date) -> None:
    """Reject a window whose end falls before its start. Both ends are inclusive."""
    if end_date < start_date:
        raise ValidationError(
            f"end_date {end_date} is before start_date {start_date}"
        )
