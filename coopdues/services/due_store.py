"""Persistence primitives for due records.

Every write goes through ``DueStore`` so the ledger invariants are checked in
one place before anything is committed:

- 0 <= paid_amount <= amount
- period is the first day of a month

Status is a property of the model and is never written.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Callable, Optional

from sqlalchemy.orm import Session

from coopdues.models import Due, DueKind
from coopdues.services.errors import InvalidAmountError, NotFoundError
from coopdues.services.locks import due_locks

logger = logging.getLogger(__name__)

_SNAPSHOT_FIELDS = ("coop_member_id", "period", "amount", "paid_amount", "kind", "payment_date")


def validate_due(due: Due) -> None:
    """Check the amount invariants of a due.

    Raises:
        InvalidAmountError: If an amount is missing, negative, or paid exceeds owed
    """
    if due.amount is None or due.paid_amount is None:
        raise InvalidAmountError("Due amount and paid amount are required")
    if due.amount < 0:
        raise InvalidAmountError(f"Due amount cannot be negative: {due.amount}")
    if due.paid_amount < 0:
        raise InvalidAmountError(f"Paid amount cannot be negative: {due.paid_amount}")
    if due.paid_amount > due.amount:
        raise InvalidAmountError(
            f"Paid amount {due.paid_amount} exceeds due amount {due.amount}"
        )


def month_start(year: int, month: int) -> date:
    """Return the period anchor for a year and month.

    Raises:
        InvalidAmountError: If year or month is out of range
    """
    if not 1 <= month <= 12:
        raise InvalidAmountError(f"Month must be between 1 and 12, got {month}")
    if not 1 <= year <= 9999:
        raise InvalidAmountError(f"Year must be between 1 and 9999, got {year}")
    return date(year, month, 1)


class DueStore:
    """CRUD access to ``Due`` rows with invariant checks at the boundary."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def create(self, due: Due, commit: bool = True) -> int:
        """Persist a new due.

        Args:
            due: Unsaved Due instance
            commit: Commit immediately; pass False when part of a larger batch

        Returns:
            ID of the created due

        Raises:
            InvalidAmountError: If the due violates the amount invariants
        """
        if due.paid_amount is None:
            due.paid_amount = Decimal("0.00")
        if due.kind is None:
            due.kind = DueKind.SCHEDULED
        due.period = due.period.replace(day=1)
        validate_due(due)

        self.db.add(due)
        self.db.flush()
        if commit:
            self.db.commit()
            self.db.refresh(due)
        logger.debug(
            "Created due id=%s coop_member_id=%s period=%s amount=%s kind=%s",
            due.id,
            due.coop_member_id,
            due.period,
            due.amount,
            due.kind.value,
        )
        return due.id

    def get(self, due_id: int) -> Due:
        """Get due by ID.

        Raises:
            NotFoundError: If no due has this ID
        """
        due = self.db.query(Due).filter(Due.id == due_id).first()
        if due is None:
            raise NotFoundError(f"Due {due_id} not found")
        return due

    def list_by_member(self, coop_member_id: int) -> list[Due]:
        """List all dues of a coop-member ordered by period ascending."""
        return (
            self.db.query(Due)
            .filter(Due.coop_member_id == coop_member_id)
            .order_by(Due.period.asc(), Due.id.asc())
            .all()
        )

    def list_for_year(
        self,
        coop_member_id: int,
        year: int,
        kind: Optional[DueKind] = None,
    ) -> list[Due]:
        """List a coop-member's dues whose period falls in ``year``.

        Args:
            coop_member_id: Coop-member link ID
            year: Calendar year
            kind: Restrict to scheduled or extra dues (default: both)
        """
        query = self.db.query(Due).filter(
            Due.coop_member_id == coop_member_id,
            Due.period >= date(year, 1, 1),
            Due.period <= date(year, 12, 1),
        )
        if kind is not None:
            query = query.filter(Due.kind == kind)
        return query.order_by(Due.period.asc(), Due.id.asc()).all()

    def update(
        self,
        due_id: int,
        mutator: Callable[[Due], None],
        commit: bool = True,
    ) -> Due:
        """Apply ``mutator`` to a due under its row lock.

        The row is re-read with ``SELECT ... FOR UPDATE`` so the mutator sees
        the latest committed amounts. If the mutator raises, or leaves the due
        violating the invariants, every field is restored and the error
        propagates. A standalone update (``commit=True``) also rolls back its
        transaction; inside a batch the caller decides.

        Raises:
            NotFoundError: If no due has this ID
            InvalidAmountError: If the mutation would break the invariants
            LedgerError: Whatever the mutator raises
        """
        with due_locks.hold(due_id):
            due = (
                self.db.query(Due)
                .filter(Due.id == due_id)
                .populate_existing()
                .with_for_update()
                .first()
            )
            if due is None:
                raise NotFoundError(f"Due {due_id} not found")

            snapshot = {field: getattr(due, field) for field in _SNAPSHOT_FIELDS}
            try:
                mutator(due)
                validate_due(due)
            except Exception:
                for field, value in snapshot.items():
                    setattr(due, field, value)
                if commit:
                    # Standalone update owns the transaction opened by FOR UPDATE
                    self.db.rollback()
                raise

            self.db.flush()
            if commit:
                self.db.commit()
                self.db.refresh(due)
            return due

    def delete(self, due_id: int, commit: bool = True) -> None:
        """Delete a due. Other dues are not affected.

        Raises:
            NotFoundError: If no due has this ID
        """
        with due_locks.hold(due_id):
            due = self.get(due_id)
            self.db.delete(due)
            self.db.flush()
            if commit:
                self.db.commit()
        logger.debug("Deleted due id=%s", due_id)

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()


__all__ = ["DueStore", "validate_due", "month_start"]
