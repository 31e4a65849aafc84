"""Payment ledger service for single-due operations.

Provides methods for:
- Applying full or partial payments
- Editing the amount owed
- Deleting a due
- Adding ad-hoc (extra) dues
- Listing a member's dues and totalling them on read
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, NamedTuple

from sqlalchemy.orm import Session

from coopdues.models import CoopMember, Due, DueKind, DueStatus
from coopdues.services.due_store import DueStore, month_start
from coopdues.services.errors import (
    AlreadySettledError,
    AmountBelowPaidError,
    InvalidAmountError,
    NotFoundError,
)
from coopdues.services.money import to_money

logger = logging.getLogger(__name__)


class DueTotals(NamedTuple):
    """Aggregates over a list of dues, computed on read."""

    total_receivable: Decimal
    total_paid: Decimal
    total_debt: Decimal


def summarize(dues: Iterable[Due]) -> DueTotals:
    """Total the owed, paid and outstanding amounts of ``dues``."""
    receivable = Decimal("0.00")
    paid = Decimal("0.00")
    for due in dues:
        receivable += due.amount
        paid += due.paid_amount
    return DueTotals(
        total_receivable=receivable,
        total_paid=paid,
        total_debt=receivable - paid,
    )


class LedgerService:
    """Payments, edits and deletions on individual dues."""

    def __init__(self, db: Session):
        """Initialize ledger service.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db
        self.store = DueStore(db)

    def apply_payment(self, due_id: int, amount, payment_date: date) -> Due:
        """Record a payment against a due.

        The payment date is stored when the payment settles the due in full;
        partial payments leave ``payment_date`` untouched.

        Args:
            due_id: Due to pay
            amount: Payment amount, must be positive
            payment_date: Date the payment was received

        Returns:
            Updated Due

        Raises:
            InvalidAmountError: If amount <= 0 or it exceeds the remaining balance
            AlreadySettledError: If the due is already fully paid
            NotFoundError: If the due does not exist
        """
        payment = to_money(amount, field="payment amount")
        if payment <= 0:
            logger.warning("Rejected payment on due %s: amount=%s", due_id, payment)
            raise InvalidAmountError(f"Payment amount must be positive, got {payment}")

        def pay(due: Due) -> None:
            if due.status == DueStatus.PAID:
                logger.warning("Rejected payment on settled due %s", due_id)
                raise AlreadySettledError(f"Due {due_id} is already paid")
            if due.paid_amount + payment > due.amount:
                logger.warning(
                    "Rejected overpayment on due %s: paid=%s payment=%s amount=%s",
                    due_id,
                    due.paid_amount,
                    payment,
                    due.amount,
                )
                raise InvalidAmountError(
                    f"Payment {payment} exceeds remaining balance {due.amount - due.paid_amount}"
                )
            due.paid_amount = due.paid_amount + payment
            if due.status == DueStatus.PAID:
                due.payment_date = payment_date

        due = self.store.update(due_id, pay)
        logger.info(
            "Payment recorded on due %s: amount=%s paid=%s/%s status=%s",
            due_id,
            payment,
            due.paid_amount,
            due.amount,
            due.status.value,
        )
        return due

    def edit_amount(self, due_id: int, new_amount) -> Due:
        """Change the amount owed on a due.

        Raises:
            InvalidAmountError: If the new amount is negative or malformed
            AmountBelowPaidError: If the new amount is less than what was already paid
            NotFoundError: If the due does not exist
        """
        amount = to_money(new_amount, field="amount")
        if amount < 0:
            logger.warning("Rejected negative amount edit on due %s: %s", due_id, amount)
            raise InvalidAmountError(f"Due amount cannot be negative: {amount}")

        def edit(due: Due) -> None:
            if amount < due.paid_amount:
                logger.warning(
                    "Rejected amount edit on due %s: new=%s paid=%s",
                    due_id,
                    amount,
                    due.paid_amount,
                )
                raise AmountBelowPaidError(
                    f"Amount {amount} is below the paid amount {due.paid_amount}"
                )
            due.amount = amount

        due = self.store.update(due_id, edit)
        logger.info("Due %s amount set to %s (status=%s)", due_id, amount, due.status.value)
        return due

    def delete_due(self, due_id: int) -> None:
        """Delete a due unconditionally.

        Raises:
            NotFoundError: If the due does not exist
        """
        self.store.delete(due_id)
        logger.info("Deleted due %s", due_id)

    def add_extra_due(self, coop_member_id: int, year: int, month: int, amount) -> Due:
        """Insert an ad-hoc due for a month, independent of the schedule.

        Never merges with an existing due of the same month.

        Raises:
            InvalidAmountError: If the amount is negative or year/month is invalid
            NotFoundError: If the coop-member does not exist
        """
        value = to_money(amount, field="amount")
        if value < 0:
            raise InvalidAmountError(f"Due amount cannot be negative: {value}")
        period = month_start(year, month)
        self._require_coop_member(coop_member_id)

        due = Due(
            coop_member_id=coop_member_id,
            period=period,
            amount=value,
            paid_amount=Decimal("0.00"),
            kind=DueKind.EXTRA,
        )
        self.store.create(due)
        logger.info(
            "Added extra due id=%s for coop_member_id=%s period=%s amount=%s",
            due.id,
            coop_member_id,
            period,
            value,
        )
        return due

    def get_due(self, due_id: int) -> Due:
        return self.store.get(due_id)

    def list_dues(self, coop_member_id: int) -> list[Due]:
        """List a coop-member's dues ordered by period ascending.

        Raises:
            NotFoundError: If the coop-member does not exist
        """
        self._require_coop_member(coop_member_id)
        return self.store.list_by_member(coop_member_id)

    def _require_coop_member(self, coop_member_id: int) -> None:
        exists = self.db.query(CoopMember.id).filter(CoopMember.id == coop_member_id).first()
        if exists is None:
            logger.warning("Coop member %s not found", coop_member_id)
            raise NotFoundError(f"Coop member {coop_member_id} not found")


__all__ = ["LedgerService", "DueTotals", "summarize"]
