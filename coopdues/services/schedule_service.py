"""Schedule service for writing a member's monthly dues.

Provides methods for:
- Generating (or regenerating) twelve monthly dues from an annual total
- Deleting every due of a year
- Appending the next month's due
- Back-filling dues from the member's entry date up to today
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from coopdues.models import CoopMember, Due, DueKind
from coopdues.services.due_store import DueStore, month_start
from coopdues.services.errors import (
    DuplicatePeriodError,
    InvalidAmountError,
    NotFoundError,
)
from coopdues.services.locks import due_locks, schedule_locks
from coopdues.services.money import from_minor_units, to_minor_units, to_money

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


def split_annual_total(total: Decimal) -> list[Decimal]:
    """Split an annual total into twelve monthly shares.

    Works in kuruş: every month gets ``total // 12`` and the first
    ``total % 12`` months get one extra kuruş, so the shares always add up
    to the total exactly.

    Args:
        total: Annual amount with at most two decimal places

    Returns:
        Twelve Decimal shares, January first
    """
    minor = to_minor_units(total)
    base, remainder = divmod(minor, MONTHS_PER_YEAR)
    return [
        from_minor_units(base + 1 if month < remainder else base)
        for month in range(MONTHS_PER_YEAR)
    ]


def next_month(period: date) -> date:
    if period.month == 12:
        return date(period.year + 1, 1, 1)
    return date(period.year, period.month + 1, 1)


class ScheduleService:
    """Bulk writer of scheduled dues."""

    def __init__(self, db: Session):
        """Initialize schedule service.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db
        self.store = DueStore(db)

    def _get_coop_member(self, coop_member_id: int) -> CoopMember:
        coop_member = self.db.query(CoopMember).filter(CoopMember.id == coop_member_id).first()
        if coop_member is None:
            logger.warning("Coop member %s not found", coop_member_id)
            raise NotFoundError(f"Coop member {coop_member_id} not found")
        return coop_member

    def generate_year(
        self,
        coop_member_id: int,
        year: int,
        total_annual_amount,
    ) -> list[Due]:
        """Create or update the twelve scheduled dues of a year.

        For each month:
        - no scheduled due yet: create one with the month's share
        - scheduled due with nothing paid: overwrite its amount
        - scheduled due with any payment: leave it as it is

        Extra dues are never touched. All twelve writes are committed together;
        any failure rolls the whole batch back.

        Args:
            coop_member_id: Coop-member link ID
            year: Calendar year to generate
            total_annual_amount: Annual total, must be positive

        Returns:
            The twelve scheduled dues of the year, January first

        Raises:
            InvalidAmountError: If the total is not positive or the year is invalid
            NotFoundError: If the coop-member does not exist
        """
        total = to_money(total_annual_amount, field="total_annual_amount")
        if total <= 0:
            logger.warning(
                "Rejected schedule generation for coop_member_id=%s: total=%s",
                coop_member_id,
                total,
            )
            raise InvalidAmountError(f"Annual total must be positive, got {total}")
        month_start(year, 1)
        self._get_coop_member(coop_member_id)

        shares = split_annual_total(total)

        with schedule_locks.hold((coop_member_id, year)):
            existing_dues = self.store.list_for_year(coop_member_id, year, kind=DueKind.SCHEDULED)
            existing: dict[int, Due] = {}
            for due in existing_dues:
                # First scheduled due of a month is the one generation owns
                existing.setdefault(due.period.month, due)

            with due_locks.hold(*(due.id for due in existing.values())):
                try:
                    result = []
                    for month, share in enumerate(shares, start=1):
                        due = existing.get(month)
                        if due is None:
                            due = Due(
                                coop_member_id=coop_member_id,
                                period=month_start(year, month),
                                amount=share,
                                paid_amount=Decimal("0.00"),
                                kind=DueKind.SCHEDULED,
                            )
                            self.store.create(due, commit=False)
                        else:
                            due = self.store.update(
                                due.id, _set_amount_if_unpaid(share), commit=False
                            )
                        result.append(due)
                    self.store.commit()
                except Exception:
                    self.store.rollback()
                    logger.error(
                        "Schedule generation rolled back for coop_member_id=%s year=%s",
                        coop_member_id,
                        year,
                    )
                    raise

        for due in result:
            self.db.refresh(due)
        logger.info(
            "Generated %s schedule for coop_member_id=%s: total=%s",
            year,
            coop_member_id,
            total,
        )
        return result

    def delete_year(self, coop_member_id: int, year: int) -> int:
        """Delete every due (scheduled and extra) of a coop-member in a year.

        Returns:
            Number of deleted dues

        Raises:
            InvalidAmountError: If the year is invalid
        """
        month_start(year, 1)
        with schedule_locks.hold((coop_member_id, year)):
            dues = self.store.list_for_year(coop_member_id, year)
            with due_locks.hold(*(due.id for due in dues)):
                for due in dues:
                    self.db.delete(due)
                self.store.commit()
        logger.info(
            "Deleted %d dues of %s for coop_member_id=%s", len(dues), year, coop_member_id
        )
        return len(dues)

    def add_next_due(self, coop_member_id: int, monthly_amount) -> Due:
        """Append a scheduled due for the month after the latest scheduled one.

        Without any scheduled dues the member's entry month is used.

        Raises:
            InvalidAmountError: If the amount is negative
            NotFoundError: If the coop-member does not exist
            DuplicatePeriodError: If a scheduled due already exists for that month
        """
        amount = to_money(monthly_amount, field="monthly_amount")
        if amount < 0:
            raise InvalidAmountError(f"Monthly amount cannot be negative: {amount}")
        coop_member = self._get_coop_member(coop_member_id)

        latest = (
            self.db.query(Due)
            .filter(Due.coop_member_id == coop_member_id, Due.kind == DueKind.SCHEDULED)
            .order_by(Due.period.desc())
            .first()
        )
        period = next_month(latest.period) if latest else coop_member.entry_date.replace(day=1)

        with schedule_locks.hold((coop_member_id, period.year)):
            if self._has_scheduled_due(coop_member_id, period):
                logger.warning(
                    "Scheduled due already exists for coop_member_id=%s period=%s",
                    coop_member_id,
                    period,
                )
                raise DuplicatePeriodError(f"A due already exists for {period:%Y-%m}")

            due = Due(
                coop_member_id=coop_member_id,
                period=period,
                amount=amount,
                kind=DueKind.SCHEDULED,
            )
            self.store.create(due)
        logger.info(
            "Added next due id=%s for coop_member_id=%s period=%s amount=%s",
            due.id,
            coop_member_id,
            period,
            amount,
        )
        return due

    def generate_since_entry(
        self,
        coop_member_id: int,
        monthly_amount,
        today: Optional[date] = None,
    ) -> list[Due]:
        """Create missing scheduled dues from the entry month through today.

        Months that already have a scheduled due are skipped.

        Returns:
            Newly created dues, oldest first

        Raises:
            InvalidAmountError: If the amount is negative
            NotFoundError: If the coop-member does not exist
        """
        amount = to_money(monthly_amount, field="monthly_amount")
        if amount < 0:
            raise InvalidAmountError(f"Monthly amount cannot be negative: {amount}")
        coop_member = self._get_coop_member(coop_member_id)
        today = today or date.today()

        created = []
        period = coop_member.entry_date.replace(day=1)
        years = range(period.year, today.year + 1)
        with schedule_locks.hold(*((coop_member_id, year) for year in years)):
            try:
                while period <= today:
                    if not self._has_scheduled_due(coop_member_id, period):
                        due = Due(
                            coop_member_id=coop_member_id,
                            period=period,
                            amount=amount,
                            kind=DueKind.SCHEDULED,
                        )
                        self.store.create(due, commit=False)
                        created.append(due)
                    period = next_month(period)
                self.store.commit()
            except Exception:
                self.store.rollback()
                raise

        logger.info(
            "Back-filled %d dues for coop_member_id=%s since %s",
            len(created),
            coop_member_id,
            coop_member.entry_date,
        )
        return created

    def _has_scheduled_due(self, coop_member_id: int, period: date) -> bool:
        return (
            self.db.query(Due.id)
            .filter(
                Due.coop_member_id == coop_member_id,
                Due.period == period,
                Due.kind == DueKind.SCHEDULED,
            )
            .first()
            is not None
        )


def _set_amount_if_unpaid(amount: Decimal):
    # Any recorded payment freezes the period
    def mutate(due: Due) -> None:
        if due.paid_amount == 0:
            due.amount = amount

    return mutate


__all__ = ["ScheduleService", "split_annual_total", "next_month"]
