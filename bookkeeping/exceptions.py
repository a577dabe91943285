"""
Typed errors raised by the service layer.

Every error derives from ValueError so callers that only care
about "the request was rejected" can keep catching ValueError.
The API layer maps NotFoundError to 404 and everything else
to 400.
"""


class BookkeepingError(ValueError):
    """Base class for all business-rule failures."""


class NotFoundError(BookkeepingError):
    """A referenced entity (ledger, group, entry, ...) does not exist."""


class ValidationError(BookkeepingError):
    """A structural or business rule was violated. Nothing was written."""


class LedgerReferenceError(ValidationError):
    """One or more entry lines name a ledger that does not exist."""

    def __init__(self, ledger_ids):
        self.ledger_ids = sorted(ledger_ids)
        super().__init__(
            f"Ledger(s) do not exist: {', '.join(str(i) for i in self.ledger_ids)}"
        )
