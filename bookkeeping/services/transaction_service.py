"""
Transaction service: the only writer of entries and detail lines.

This service enforces the fundamental rules:
1. Every entry has at least two lines
2. Every line names a ledger that exists
3. Total debits equal total credits (within 0.01)
4. Entries are never edited; corrections are new entries

If any check fails, nothing is written. The service only
flushes; the caller owns the commit, so the entry row, its
lines and its audit record land together or not at all.
"""

import json
import logging
import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from bookkeeping.exceptions import (
    LedgerReferenceError,
    NotFoundError,
    ValidationError,
)
from bookkeeping.models.audit_log import AuditLog
from bookkeeping.models.ledger import Ledger
from bookkeeping.models.transaction_detail import TransactionDetail
from bookkeeping.models.transaction_entry import TransactionEntry
from bookkeeping.schemas.transaction import TransactionCreate
from bookkeeping.services.validation import require_date_range

logger = logging.getLogger(__name__)

MIN_LINES = 2
BALANCE_TOLERANCE = Decimal("0.01")
CENTS = Decimal("0.01")

ENTRY_PREFIX = "TXN"
CORRECTION_PREFIX = "COR"


def generate_entry_number(prefix: str, entry_date: date) -> str:
    """
    Build an entry number such as TXN-20240115-3F9A0C1B2D.

    The random part comes from a UUID4, and entry_number carries a
    unique constraint, so concurrent requests cannot collide silently.
    """
    return f"{prefix}-{entry_date:%Y%m%d}-{uuid.uuid4().hex[:10].upper()}"


class TransactionService:
    """
    All entry writes pass through this service.

    The service takes a database session as a constructor
    argument. The caller controls the transaction boundary.
    """

    def __init__(self, db: Session):
        self.db = db

    def _validate_lines(self, lines) -> Decimal:
        """
        Check line count, ledger references and balance.

        Returns the total debit amount, which becomes the
        entry's total_amount.
        """
        if len(lines) < MIN_LINES:
            raise ValidationError(
                f"An entry needs at least {MIN_LINES} lines, got {len(lines)}"
            )

        # --- Referential integrity ---
        ledger_ids = {line.ledger_id for line in lines}
        found = set(
            self.db.execute(
                select(Ledger.id).where(Ledger.id.in_(ledger_ids))
            ).scalars().all()
        )
        missing = ledger_ids - found
        if missing:
            raise LedgerReferenceError(missing)

        # --- Balance rule ---
        total_debits = sum((line.debit_amount for line in lines), Decimal("0"))
        total_credits = sum((line.credit_amount for line in lines), Decimal("0"))

        if abs(total_debits - total_credits) > BALANCE_TOLERANCE:
            raise ValidationError(
                f"Unbalanced entry: total debits must equal total credits "
                f"(debits={total_debits}, credits={total_credits})"
            )

        if total_debits == 0 and total_credits == 0:
            logger.warning("Posting an entry whose lines are all zero")

        return total_debits

    def _post(
        self,
        request: TransactionCreate,
        prefix: str,
        original: TransactionEntry | None = None,
    ) -> TransactionEntry:
        total_amount = self._validate_lines(request.lines)

        entry = TransactionEntry(
            entry_number=generate_entry_number(prefix, request.entry_date),
            entry_date=request.entry_date,
            description=request.description,
            total_amount=total_amount.quantize(CENTS),
            is_correction=original is not None,
            original_entry_id=original.id if original is not None else None,
        )
        entry.details = [
            TransactionDetail(
                ledger_id=line.ledger_id,
                debit_amount=line.debit_amount,
                credit_amount=line.credit_amount,
                description=line.description,
            )
            for line in request.lines
        ]
        self.db.add(entry)
        self.db.flush()

        self._audit(
            "ENTRY_CORRECTED" if original is not None else "ENTRY_CREATED",
            entry,
        )
        return entry

    def _audit(self, event_type: str, entry: TransactionEntry) -> None:
        self.db.add(AuditLog(
            event_type=event_type,
            entry_id=entry.id,
            entry_number=entry.entry_number,
            details=json.dumps({
                "entry_date": entry.entry_date.isoformat(),
                "total_amount": str(entry.total_amount),
                "original_entry_id": entry.original_entry_id,
                "lines": len(entry.details),
            }),
        ))
        self.db.flush()

    def create_entry(self, request: TransactionCreate) -> TransactionEntry:
        """
        Validate and post a new balanced entry.

        Raises LedgerReferenceError for unknown ledgers and
        ValidationError for an unbalanced or too-short entry.
        """
        entry = self._post(request, ENTRY_PREFIX)
        logger.info(
            "Created entry %s (%s lines, total %s)",
            entry.entry_number, len(entry.details), entry.total_amount,
        )
        return entry

    def correct_entry(
        self, original_entry_id: int, request: TransactionCreate
    ) -> TransactionEntry:
        """
        Post a correction for an existing entry.

        The original entry and its lines are left untouched; the
        correction is a new entry that points back to it. Whether
        the correction reverses the original is up to the caller.
        """
        original = self.db.get(TransactionEntry, original_entry_id)
        if not original:
            raise NotFoundError(f"Transaction {original_entry_id} not found")

        entry = self._post(request, CORRECTION_PREFIX, original=original)
        logger.info(
            "Created correction %s for %s",
            entry.entry_number, original.entry_number,
        )
        return entry

    def delete_entry(self, entry_id: int) -> None:
        """
        Delete an entry and all of its lines.

        The delete cascade makes the unit of work remove the
        detail rows before the entry row. Corrections that point
        at this entry keep their own rows; their reference is
        cleared.
        """
        entry = self.db.get(TransactionEntry, entry_id)
        if not entry:
            raise NotFoundError(f"Transaction {entry_id} not found")

        self._audit("ENTRY_DELETED", entry)
        entry_number = entry.entry_number
        self.db.delete(entry)
        self.db.flush()
        logger.info("Deleted entry %s", entry_number)

    def get_entry(self, entry_id: int) -> TransactionEntry:
        """Get an entry by ID, with its lines."""
        entry = self.db.execute(
            select(TransactionEntry)
            .options(selectinload(TransactionEntry.details))
            .where(TransactionEntry.id == entry_id)
        ).scalar_one_or_none()
        if not entry:
            raise NotFoundError(f"Transaction {entry_id} not found")
        return entry

    def list_entries(self) -> list[TransactionEntry]:
        """Return all entries, newest entry date first."""
        entries = self.db.execute(
            select(TransactionEntry)
            .options(selectinload(TransactionEntry.details))
            .order_by(
                TransactionEntry.entry_date.desc(),
                TransactionEntry.id.desc(),
            )
        ).scalars().all()
        return list(entries)

    def list_entries_by_date_range(
        self, start_date: date, end_date: date
    ) -> list[TransactionEntry]:
        """Return entries dated within [start_date, end_date], oldest first."""
        require_date_range(start_date, end_date)
        entries = self.db.execute(
            select(TransactionEntry)
            .options(selectinload(TransactionEntry.details))
            .where(
                TransactionEntry.entry_date >= start_date,
                TransactionEntry.entry_date <= end_date,
            )
            .order_by(
                TransactionEntry.entry_date,
                TransactionEntry.entry_number,
            )
        ).scalars().all()
        return list(entries)
