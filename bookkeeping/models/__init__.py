"""
Database models package.

All models must be imported here so that they are registered
on Base.metadata before tables are created.
"""

from bookkeeping.models.base import Base
from bookkeeping.models.enums import (
    BalanceType,
    ContactType,
    ReportPeriod,
)
from bookkeeping.models.audit_log import AuditLog
from bookkeeping.models.group import Group
from bookkeeping.models.contact import Contact
from bookkeeping.models.ledger import Ledger
from bookkeeping.models.financial_year import FinancialYear
from bookkeeping.models.transaction_entry import TransactionEntry
from bookkeeping.models.transaction_detail import TransactionDetail
from bookkeeping.models.user import User

__all__ = [
    "Base",
    "BalanceType",
    "ContactType",
    "ReportPeriod",
    "AuditLog",
    "Group",
    "Contact",
    "Ledger",
    "FinancialYear",
    "TransactionEntry",
    "TransactionDetail",
    "User",
]
