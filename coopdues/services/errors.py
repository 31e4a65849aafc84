"""Exception classes for ledger and registry operations.

Every error carries a short machine-readable ``code`` so callers (the HTTP
layer, a desktop UI) can surface the failure kind verbatim.
"""


class LedgerError(Exception):
    """Base exception for dues ledger errors."""

    code = "ledger_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidAmountError(LedgerError):
    """Amount is negative, zero where a positive value is required, or malformed."""

    code = "invalid_amount"


class AmountBelowPaidError(LedgerError):
    """Edited amount would fall below what has already been paid."""

    code = "amount_below_paid"


class AlreadySettledError(LedgerError):
    """Payment attempted on a due that is already fully paid."""

    code = "already_settled"


class NotFoundError(LedgerError):
    """Unknown due, member, cooperative or coop-member id."""

    code = "not_found"


class DuplicatePeriodError(LedgerError):
    """A scheduled due already exists for the requested month."""

    code = "duplicate_period"


class DuplicateMemberError(LedgerError):
    """Member TC number or cooperative enrollment already exists."""

    code = "duplicate_member"


__all__ = [
    "LedgerError",
    "InvalidAmountError",
    "AmountBelowPaidError",
    "AlreadySettledError",
    "NotFoundError",
    "DuplicatePeriodError",
    "DuplicateMemberError",
]
