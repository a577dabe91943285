"""
Ledger service: the chart of accounts.

A ledger must belong to an existing group and may link to an
existing contact. Ledgers with posted lines cannot be deleted;
their history would otherwise vanish from every report.
"""

import logging

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from bookkeeping.exceptions import NotFoundError, ValidationError
from bookkeeping.models.contact import Contact
from bookkeeping.models.group import Group
from bookkeeping.models.ledger import Ledger
from bookkeeping.models.transaction_detail import TransactionDetail
from bookkeeping.schemas.ledger import LedgerCreate, LedgerUpdate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "group_id", "opening_balance", "opening_balance_type")


class LedgerService:
    """
    Ledger master data.

    The service takes a database session as a constructor
    argument. The caller decides when to commit or rollback.
    """

    def __init__(self, db: Session):
        self.db = db

    def _check_references(
        self, group_id: int | None, contact_id: int | None
    ) -> None:
        if group_id is not None and self.db.get(Group, group_id) is None:
            raise NotFoundError(f"Group {group_id} not found")
        if contact_id is not None and self.db.get(Contact, contact_id) is None:
            raise NotFoundError(f"Contact {contact_id} not found")

    def create_ledger(self, request: LedgerCreate) -> Ledger:
        """
        Create a new ledger.

        Raises NotFoundError if the group or contact does not exist.
        """
        self._check_references(request.group_id, request.contact_id)

        ledger = Ledger(
            name=request.name,
            group_id=request.group_id,
            contact_id=request.contact_id,
            opening_balance=request.opening_balance,
            opening_balance_type=request.opening_balance_type,
        )
        self.db.add(ledger)
        self.db.flush()
        logger.info(
            "Created ledger %s (%s, opening %s %s)",
            ledger.id, ledger.name, ledger.opening_balance,
            ledger.opening_balance_type.value,
        )
        return ledger

    def get_ledger(self, ledger_id: int) -> Ledger:
        ledger = self.db.get(Ledger, ledger_id)
        if not ledger:
            raise NotFoundError(f"Ledger {ledger_id} not found")
        return ledger

    def list_ledgers(self) -> list[Ledger]:
        ledgers = self.db.execute(
            select(Ledger).order_by(Ledger.name, Ledger.id)
        ).scalars().all()
        return list(ledgers)

    def update_ledger(self, ledger_id: int, request: LedgerUpdate) -> Ledger:
        """Apply a partial update, re-validating group and contact."""
        ledger = self.get_ledger(ledger_id)
        changes = request.model_dump(exclude_unset=True)

        for field in REQUIRED_FIELDS:
            if field in changes and changes[field] is None:
                raise ValidationError(f"Ledger {field} cannot be empty")
        self._check_references(changes.get("group_id"), changes.get("contact_id"))

        for field, value in changes.items():
            setattr(ledger, field, value)
        self.db.flush()
        return ledger

    def delete_ledger(self, ledger_id: int) -> None:
        """Delete a ledger that has no posted lines."""
        ledger = self.get_ledger(ledger_id)

        line_count = self.db.execute(
            select(func.count())
            .select_from(TransactionDetail)
            .where(TransactionDetail.ledger_id == ledger_id)
        ).scalar_one()
        if line_count:
            raise ValidationError(
                f"Ledger {ledger_id} has {line_count} posted line(s)"
            )

        self.db.delete(ledger)
        self.db.flush()
        logger.info("Deleted ledger %s", ledger_id)

    def search_ledgers(
        self, query: str, limit: int = 10, offset: int = 0
    ) -> list[Ledger]:
        """Case-insensitive substring match on the ledger name."""
        ledgers = self.db.execute(
            select(Ledger)
            .where(Ledger.name.ilike(f"%{query}%"))
            .order_by(Ledger.name, Ledger.id)
            .limit(limit)
            .offset(offset)
        ).scalars().all()
        return list(ledgers)
