"""Due ORM model: one monthly billing line of a cooperative member."""

from datetime import date
from decimal import Decimal
from enum import Enum

from sqlalchemy import Date, ForeignKey, Index, Numeric
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coopdues.models import Base, BaseModel


class DueStatus(str, Enum):
    """Payment status of a due, derived from its amounts."""

    UNPAID = "unpaid"
    PARTIAL = "partial"
    PAID = "paid"


class DueKind(str, Enum):
    """Origin of a due record."""

    SCHEDULED = "scheduled"
    """Written by annual schedule generation (one per month)"""

    EXTRA = "extra"
    """Ad-hoc charge added outside the regular schedule"""


def compute_status(amount: Decimal, paid_amount: Decimal) -> DueStatus:
    """Derive the status of a due from what is owed and what was paid.

    A zero-amount due with nothing paid counts as unpaid.
    """
    if paid_amount <= 0:
        return DueStatus.UNPAID
    if paid_amount >= amount:
        return DueStatus.PAID
    return DueStatus.PARTIAL


class Due(Base, BaseModel):
    """Model representing the amount a coop-member owes for one month.

    Status is never persisted: it is recomputed from ``amount`` and
    ``paid_amount`` whenever it is read.
    """

    __tablename__ = "dues"

    coop_member_id: Mapped[int] = mapped_column(
        ForeignKey("cooperative_members.id"),
        nullable=False,
        index=True,
        comment="Cooperative membership this due belongs to",
    )
    period: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="Month of the due, normalized to the 1st",
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        comment="Amount owed in Turkish Lira",
    )
    paid_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        default=Decimal("0.00"),
        comment="Amount paid so far",
    )
    kind: Mapped[DueKind] = mapped_column(
        SQLEnum(DueKind),
        nullable=False,
        default=DueKind.SCHEDULED,
        comment="scheduled (annual generation) or extra (ad-hoc)",
    )
    payment_date: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
        comment="Date of the payment that settled the due",
    )

    # Relationships
    coop_member: Mapped["CoopMember"] = relationship(  # noqa: F821
        "CoopMember",
        foreign_keys=[coop_member_id],
    )

    # Indexes for common queries
    __table_args__ = (
        Index("idx_due_member_period", "coop_member_id", "period"),
        Index("idx_due_member_kind_period", "coop_member_id", "kind", "period"),
    )

    @property
    def status(self) -> DueStatus:
        return compute_status(self.amount, self.paid_amount or Decimal("0"))

    @property
    def remaining(self) -> Decimal:
        return self.amount - (self.paid_amount or Decimal("0"))

    def __repr__(self) -> str:
        return (
            f"<Due(id={self.id}, coop_member_id={self.coop_member_id}, period={self.period}, "
            f"amount={self.amount}, paid_amount={self.paid_amount}, kind={self.kind})>"
        )


__all__ = ["Due", "DueKind", "DueStatus", "compute_status"]
