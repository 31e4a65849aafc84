"""Pydantic schemas for the dues API."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from coopdues.models import DueKind, DueStatus


# Request payloads


class GenerateYearPayload(BaseModel):
    """Request payload for annual schedule generation."""

    year: int = Field(..., description="Calendar year to generate")
    total_amount: Decimal = Field(..., description="Annual total split across twelve months")


class ExtraDuePayload(BaseModel):
    """Request payload for an ad-hoc due."""

    year: int
    month: int = Field(..., description="Month number, 1-12")
    amount: Decimal


class MonthlyAmountPayload(BaseModel):
    """Request payload for next-due and back-fill generation."""

    monthly_amount: Decimal


class PaymentPayload(BaseModel):
    """Request payload for recording a payment."""

    amount: Decimal = Field(..., description="Amount paid, at most the remaining balance")
    payment_date: date


class EditAmountPayload(BaseModel):
    """Request payload for changing the amount owed."""

    amount: Decimal


class MemberPayload(BaseModel):
    """Request payload for creating or updating a member."""

    tc_number: str = Field(..., min_length=1, max_length=11)
    full_name: str = Field(..., min_length=1)
    phone_1: str = Field(..., min_length=1)
    phone_2: str | None = None
    registration_date: date


class CooperativePayload(BaseModel):
    """Request payload for creating a cooperative."""

    name: str = Field(..., min_length=1)
    start_date: date


class EnrollmentPayload(BaseModel):
    """Request payload for enrolling members in a cooperative."""

    member_ids: list[int] = Field(..., min_length=1)
    entry_date: date


# Responses


class DueResponse(BaseModel):
    """A due with its derived status and remaining balance."""

    id: int
    coop_member_id: int
    period: date
    amount: Decimal
    paid_amount: Decimal
    remaining: Decimal
    status: DueStatus
    kind: DueKind
    payment_date: date | None = None

    model_config = ConfigDict(from_attributes=True)


class DueListResponse(BaseModel):
    """A coop-member's dues with totals computed on read."""

    dues: list[DueResponse]
    total_receivable: Decimal
    total_paid: Decimal
    total_debt: Decimal


class DeletedCountResponse(BaseModel):
    deleted: int


class ReceiptResponse(BaseModel):
    """Receipt data for one due; ``display`` holds the printed strings."""

    due_id: int
    period: date
    title: str
    coop_name: str
    member_full_name: str
    member_tc: str
    member_phone: str
    amount: Decimal
    paid_amount: Decimal
    remaining: Decimal
    amount_in_words: str
    is_partial: bool
    payment_type: str
    payment_date: date | None = None
    display: dict[str, str]


class AmountWordsResponse(BaseModel):
    amount: Decimal
    words: str


class MemberResponse(BaseModel):
    """Response schema for a member."""

    id: int
    tc_number: str
    full_name: str
    phone_1: str
    phone_2: str | None = None
    registration_date: date

    model_config = ConfigDict(from_attributes=True)


class CooperativeResponse(BaseModel):
    """Response schema for a cooperative."""

    id: int
    name: str
    start_date: date

    model_config = ConfigDict(from_attributes=True)


class CoopMemberResponse(BaseModel):
    """A member as enrolled in a cooperative; ``id`` is the coop-member link."""

    id: int
    member_id: int
    full_name: str
    tc_number: str
    phone_1: str
    entry_date: date
