"""
Contact service: customers and suppliers.
"""

import logging

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from bookkeeping.exceptions import NotFoundError, ValidationError
from bookkeeping.models.contact import Contact
from bookkeeping.models.ledger import Ledger
from bookkeeping.schemas.contact import ContactCreate, ContactUpdate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "contact_type")


class ContactService:

    def __init__(self, db: Session):
        self.db = db

    def create_contact(self, request: ContactCreate) -> Contact:
        contact = Contact(
            name=request.name,
            contact_type=request.contact_type,
            phone=request.phone,
            email=request.email,
            address=request.address,
        )
        self.db.add(contact)
        self.db.flush()
        logger.info("Created contact %s (%s)", contact.id, contact.name)
        return contact

    def get_contact(self, contact_id: int) -> Contact:
        contact = self.db.get(Contact, contact_id)
        if not contact:
            raise NotFoundError(f"Contact {contact_id} not found")
        return contact

    def list_contacts(self) -> list[Contact]:
        contacts = self.db.execute(
            select(Contact).order_by(Contact.name, Contact.id)
        ).scalars().all()
        return list(contacts)

    def update_contact(self, contact_id: int, request: ContactUpdate) -> Contact:
        contact = self.get_contact(contact_id)
        changes = request.model_dump(exclude_unset=True)

        for field in REQUIRED_FIELDS:
            if field in changes and changes[field] is None:
                raise ValidationError(f"Contact {field} cannot be empty")

        for field, value in changes.items():
            setattr(contact, field, value)
        self.db.flush()
        return contact

    def delete_contact(self, contact_id: int) -> None:
        """Delete a contact that no ledger refers to."""
        contact = self.get_contact(contact_id)

        ledger_count = self.db.execute(
            select(func.count()).select_from(Ledger).where(Ledger.contact_id == contact_id)
        ).scalar_one()
        if ledger_count:
            raise ValidationError(
                f"Contact {contact_id} is linked to {ledger_count} ledger(s)"
            )

        self.db.delete(contact)
        self.db.flush()
        logger.info("Deleted contact %s", contact_id)

    def search_contacts(
        self, query: str, limit: int = 10, offset: int = 0
    ) -> list[Contact]:
        """Case-insensitive substring match on the contact name."""
        contacts = self.db.execute(
            select(Contact)
            .where(Contact.name.ilike(f"%{query}%"))
            .order_by(Contact.name, Contact.id)
            .limit(limit)
            .offset(offset)
        ).scalars().all()
        return list(contacts)
