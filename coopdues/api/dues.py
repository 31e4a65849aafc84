"""Dues ledger API routes."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from coopdues.api.schemas import (
    AmountWordsResponse,
    DeletedCountResponse,
    DueListResponse,
    DueResponse,
    EditAmountPayload,
    ExtraDuePayload,
    GenerateYearPayload,
    MonthlyAmountPayload,
    PaymentPayload,
    ReceiptResponse,
)
from coopdues.services import get_db
from coopdues.services.amount_words import MAX_MAJOR, format_amount_as_words
from coopdues.services.ledger_service import LedgerService, summarize
from coopdues.services.receipt_service import ReceiptData, ReceiptService
from coopdues.services.schedule_service import ScheduleService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["dues"])


def _receipt_response(receipt: ReceiptData) -> ReceiptResponse:
    return ReceiptResponse(
        due_id=receipt.due_id,
        period=receipt.period,
        title=receipt.title,
        coop_name=receipt.coop_name,
        member_full_name=receipt.member_full_name,
        member_tc=receipt.member_tc,
        member_phone=receipt.member_phone,
        amount=receipt.amount,
        paid_amount=receipt.paid_amount,
        remaining=receipt.remaining,
        amount_in_words=receipt.amount_in_words,
        is_partial=receipt.is_partial,
        payment_type=receipt.payment_type,
        payment_date=receipt.payment_date if not isinstance(receipt.payment_date, str) else None,
        display=receipt.as_display_dict(),
    )


@router.get("/coop-members/{coop_member_id}/dues", response_model=DueListResponse)
def list_dues(coop_member_id: int, db: Session = Depends(get_db)) -> DueListResponse:
    """List a coop-member's dues (period ascending) with receivable, paid and debt totals."""
    dues = LedgerService(db).list_dues(coop_member_id)
    totals = summarize(dues)
    return DueListResponse(
        dues=[DueResponse.model_validate(due) for due in dues],
        total_receivable=totals.total_receivable,
        total_paid=totals.total_paid,
        total_debt=totals.total_debt,
    )


@router.post(
    "/coop-members/{coop_member_id}/dues/generate-year",
    response_model=list[DueResponse],
)
def generate_year(
    coop_member_id: int, payload: GenerateYearPayload, db: Session = Depends(get_db)
) -> list[DueResponse]:
    """Create or update the twelve monthly dues of a year from an annual total."""
    dues = ScheduleService(db).generate_year(coop_member_id, payload.year, payload.total_amount)
    return [DueResponse.model_validate(due) for due in dues]


@router.post(
    "/coop-members/{coop_member_id}/dues/extra",
    response_model=DueResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_extra_due(
    coop_member_id: int, payload: ExtraDuePayload, db: Session = Depends(get_db)
) -> DueResponse:
    due = LedgerService(db).add_extra_due(
        coop_member_id, payload.year, payload.month, payload.amount
    )
    return DueResponse.model_validate(due)


@router.post(
    "/coop-members/{coop_member_id}/dues/next",
    response_model=DueResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_next_due(
    coop_member_id: int, payload: MonthlyAmountPayload, db: Session = Depends(get_db)
) -> DueResponse:
    due = ScheduleService(db).add_next_due(coop_member_id, payload.monthly_amount)
    return DueResponse.model_validate(due)


@router.post(
    "/coop-members/{coop_member_id}/dues/since-entry",
    response_model=list[DueResponse],
)
def generate_since_entry(
    coop_member_id: int, payload: MonthlyAmountPayload, db: Session = Depends(get_db)
) -> list[DueResponse]:
    dues = ScheduleService(db).generate_since_entry(coop_member_id, payload.monthly_amount)
    return [DueResponse.model_validate(due) for due in dues]


@router.delete(
    "/coop-members/{coop_member_id}/dues/year/{year}",
    response_model=DeletedCountResponse,
)
def delete_year(
    coop_member_id: int, year: int, db: Session = Depends(get_db)
) -> DeletedCountResponse:
    deleted = ScheduleService(db).delete_year(coop_member_id, year)
    return DeletedCountResponse(deleted=deleted)


@router.post("/dues/{due_id}/payments", response_model=DueResponse)
def apply_payment(
    due_id: int, payload: PaymentPayload, db: Session = Depends(get_db)
) -> DueResponse:
    """Record a full or partial payment; overpayment is rejected."""
    due = LedgerService(db).apply_payment(due_id, payload.amount, payload.payment_date)
    return DueResponse.model_validate(due)


@router.patch("/dues/{due_id}", response_model=DueResponse)
def edit_amount(
    due_id: int, payload: EditAmountPayload, db: Session = Depends(get_db)
) -> DueResponse:
    due = LedgerService(db).edit_amount(due_id, payload.amount)
    return DueResponse.model_validate(due)


@router.delete("/dues/{due_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_due(due_id: int, db: Session = Depends(get_db)) -> None:
    LedgerService(db).delete_due(due_id)


@router.get("/dues/{due_id}/receipt", response_model=ReceiptResponse)
def get_receipt(
    due_id: int,
    payment_date: Optional[date] = Query(None, description="Date of the payment being receipted"),
    db: Session = Depends(get_db),
) -> ReceiptResponse:
    """Receipt data for a due; member and cooperative details come from its link.

    Partial payments store no date on the due, so their receipts print
    ``payment_date`` when it is given.
    """
    receipt = ReceiptService(db).build_receipt_for(due_id, payment_date=payment_date)
    return _receipt_response(receipt)


@router.get("/amount-words", response_model=AmountWordsResponse)
def amount_words(amount: Decimal = Query(..., ge=0, lt=MAX_MAJOR + 1)) -> AmountWordsResponse:
    return AmountWordsResponse(amount=amount, words=format_amount_as_words(amount))
