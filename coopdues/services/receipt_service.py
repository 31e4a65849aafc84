"""Receipt data assembly for paid and partially paid dues.

Builds the fields a collection receipt ("tahsilat makbuzu") shows. Rendering
the document itself is left to the caller.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Union

from sqlalchemy.orm import Session

from coopdues.models import Cooperative, CoopMember, Due, DueStatus, Member
from coopdues.services.amount_words import format_amount_as_words
from coopdues.services.due_store import DueStore
from coopdues.services.errors import NotFoundError
from coopdues.services.locale_service import format_amount, format_local_date

logger = logging.getLogger(__name__)

UNSET = "..."
"""Placeholder printed when a due has no payment date"""

RECEIPT_TITLE = "TAHSİLAT MAKBUZU"
PARTIAL_RECEIPT_TITLE = "TAHSİLAT MAKBUZU (KISMİ ÖDEME)"
FULL_PAYMENT_LABEL = "Tam Ödeme"
PARTIAL_PAYMENT_LABEL = "Kısmi Ödeme"
CURRENCY_SUFFIX = "TL"


@dataclass(frozen=True)
class MemberInfo:
    """Member fields printed on a receipt."""

    full_name: str
    tc_number: str
    phone: str


@dataclass(frozen=True)
class CoopInfo:
    """Cooperative fields printed on a receipt."""

    name: str


@dataclass(frozen=True)
class ReceiptData:
    """Everything needed to render a payment receipt for one due."""

    due_id: int
    period: date
    coop_name: str
    member_full_name: str
    member_tc: str
    member_phone: str
    amount: Decimal
    paid_amount: Decimal
    remaining: Decimal
    amount_in_words: str
    is_partial: bool
    payment_date: Union[date, str]

    @property
    def title(self) -> str:
        return PARTIAL_RECEIPT_TITLE if self.is_partial else RECEIPT_TITLE

    @property
    def payment_type(self) -> str:
        return PARTIAL_PAYMENT_LABEL if self.is_partial else FULL_PAYMENT_LABEL

    @property
    def payment_date_display(self) -> str:
        if isinstance(self.payment_date, date):
            return format_date(self.payment_date)
        return self.payment_date

    def as_display_dict(self) -> dict[str, str]:
        """Receipt fields formatted the way they are printed."""
        fields = {
            "title": self.title,
            "coop_name": self.coop_name,
            "member_full_name": self.member_full_name,
            "member_tc": self.member_tc,
            "member_phone": self.member_phone,
            "paid_amount": format_money(self.paid_amount),
            "amount_in_words": self.amount_in_words,
            "payment_type": self.payment_type,
            "payment_date": self.payment_date_display,
        }
        if self.is_partial:
            fields["total_amount"] = format_money(self.amount)
            fields["remaining_amount"] = format_money(self.remaining)
        return fields


def format_money(amount: Decimal) -> str:
    """Format an amount the way receipts print it, e.g. ``1.234,50 TL``."""
    return f"{format_amount(amount)} {CURRENCY_SUFFIX}"


def format_date(value: date) -> str:
    """Format a date the way receipts print it, e.g. ``30.04.2025``."""
    return format_local_date(value)


def build_receipt(
    due: Due,
    member_info: MemberInfo,
    coop_info: CoopInfo,
    payment_date: Optional[date] = None,
) -> ReceiptData:
    """Combine a due with member and cooperative details into receipt data.

    Pure: reads only its arguments.

    Args:
        due: Due the receipt is issued for
        member_info: Member fields to print
        coop_info: Cooperative fields to print
        payment_date: Date of the payment being receipted. Partial payments
            do not store a date on the due, so their receipts print this one.
            Settled dues print their stored date and fall back to this one.

    Returns:
        ReceiptData; ``payment_date`` is ``UNSET`` when no date is known
    """
    is_partial = due.status == DueStatus.PARTIAL
    stored_date = None if is_partial else due.payment_date
    printed_date = stored_date or payment_date

    return ReceiptData(
        due_id=due.id,
        period=due.period,
        coop_name=coop_info.name,
        member_full_name=member_info.full_name,
        member_tc=member_info.tc_number,
        member_phone=member_info.phone,
        amount=due.amount,
        paid_amount=due.paid_amount,
        remaining=due.amount - due.paid_amount,
        amount_in_words=format_amount_as_words(due.paid_amount),
        is_partial=is_partial,
        payment_date=printed_date if printed_date is not None else UNSET,
    )


class ReceiptService:
    """Loads the records a receipt needs and assembles it."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db
        self.store = DueStore(db)

    def get_receipt_info(self, coop_member_id: int) -> tuple[MemberInfo, CoopInfo]:
        """Look up member and cooperative details through a coop-member link.

        Raises:
            NotFoundError: If the coop-member link does not exist
        """
        row = (
            self.db.query(Cooperative.name, Member.full_name, Member.tc_number, Member.phone_1)
            .select_from(CoopMember)
            .join(Cooperative, CoopMember.coop_id == Cooperative.id)
            .join(Member, CoopMember.member_id == Member.id)
            .filter(CoopMember.id == coop_member_id)
            .first()
        )
        if row is None:
            logger.warning("Receipt info not found for coop_member_id=%s", coop_member_id)
            raise NotFoundError(f"Coop member {coop_member_id} not found")

        coop_name, full_name, tc_number, phone = row
        return MemberInfo(full_name=full_name, tc_number=tc_number, phone=phone), CoopInfo(
            name=coop_name
        )

    def build_receipt_for(
        self,
        due_id: int,
        member_info: Optional[MemberInfo] = None,
        coop_info: Optional[CoopInfo] = None,
        payment_date: Optional[date] = None,
    ) -> ReceiptData:
        """Build receipt data for a stored due.

        Member and cooperative details are looked up when not supplied.
        ``payment_date`` is the date of the payment being receipted; see
        ``build_receipt``.

        Raises:
            NotFoundError: If the due or its coop-member link does not exist
        """
        due = self.store.get(due_id)
        if member_info is None or coop_info is None:
            found_member, found_coop = self.get_receipt_info(due.coop_member_id)
            member_info = member_info or found_member
            coop_info = coop_info or found_coop

        receipt = build_receipt(due, member_info, coop_info, payment_date=payment_date)
        logger.debug("Built receipt for due %s (partial=%s)", due_id, receipt.is_partial)
        return receipt


__all__ = [
    "UNSET",
    "MemberInfo",
    "CoopInfo",
    "ReceiptData",
    "ReceiptService",
    "build_receipt",
    "format_money",
    "format_date",
]
