"""Business logic services."""

from bookkeeping.services.auth_service import AuthService
from bookkeeping.services.contact_service import ContactService
from bookkeeping.services.financial_year_service import FinancialYearService
from bookkeeping.services.group_service import GroupService
from bookkeeping.services.ledger_service import LedgerService
from bookkeeping.services.report_service import ReportService
from bookkeeping.services.transaction_service import TransactionService

__all__ = [
    "AuthService",
    "ContactService",
    "FinancialYearService",
    "GroupService",
    "LedgerService",
    "ReportService",
    "TransactionService",
]
