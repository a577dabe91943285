"""
Shared enumerations for database models.

Using Python enums mapped to database enums ensures that
only valid values can be stored.
"""

import enum


class BalanceType(str, enum.Enum):
    """Side of the books a balance sits on."""
    DEBIT = "debit"
    CREDIT = "credit"

    def opposite(self) -> "BalanceType":
        if self is BalanceType.DEBIT:
            return BalanceType.CREDIT
        return BalanceType.DEBIT


class ContactType(str, enum.Enum):
    CUSTOMER = "customer"
    SUPPLIER = "supplier"
    BOTH = "both"


class ReportPeriod(str, enum.Enum):
    """Bucket size for daybook summaries."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
