"""Unit tests for receipt data assembly."""

from datetime import date
from decimal import Decimal

from coopdues.models import Due, DueKind
from coopdues.services.receipt_service import (
    UNSET,
    CoopInfo,
    MemberInfo,
    build_receipt,
    format_date,
    format_money,
)

MEMBER = MemberInfo(full_name="Mehmet Demir", tc_number="10987654321", phone="5329876543")
COOP = CoopInfo(name="Gül Bahçesi Konut Kooperatifi")


def make_due(amount: str, paid: str, payment_date=None) -> Due:
    return Due(
        id=7,
        coop_member_id=3,
        period=date(2025, 2, 1),
        amount=Decimal(amount),
        paid_amount=Decimal(paid),
        kind=DueKind.SCHEDULED,
        payment_date=payment_date,
    )


class TestBuildReceipt:
    def test_full_payment(self):
        receipt = build_receipt(make_due("1000", "1000", date(2025, 2, 10)), MEMBER, COOP)

        assert receipt.due_id == 7
        assert receipt.is_partial is False
        assert receipt.remaining == Decimal("0")
        assert receipt.amount_in_words == "Bin Türk Lirası"
        assert receipt.payment_date == date(2025, 2, 10)
        assert receipt.title == "TAHSİLAT MAKBUZU"
        assert receipt.payment_type == "Tam Ödeme"
        assert receipt.coop_name == COOP.name
        assert receipt.member_full_name == MEMBER.full_name
        assert receipt.member_tc == MEMBER.tc_number
        assert receipt.member_phone == MEMBER.phone

    def test_partial_payment_uses_unset_marker(self):
        receipt = build_receipt(make_due("1000", "400"), MEMBER, COOP)

        assert receipt.is_partial is True
        assert receipt.remaining == Decimal("600")
        assert receipt.amount_in_words == "Dört Yüz Türk Lirası"
        assert receipt.payment_date == UNSET
        assert receipt.payment_date_display == UNSET
        assert receipt.title == "TAHSİLAT MAKBUZU (KISMİ ÖDEME)"
        assert receipt.payment_type == "Kısmi Ödeme"

    def test_partial_payment_prints_given_date(self):
        receipt = build_receipt(
            make_due("1000", "400", date(2024, 12, 1)), MEMBER, COOP, payment_date=date(2025, 2, 4)
        )

        assert receipt.payment_date == date(2025, 2, 4)
        assert receipt.payment_date_display == "04.02.2025"

    def test_settled_due_without_stored_date_falls_back_to_given_date(self):
        receipt = build_receipt(
            make_due("400", "400"), MEMBER, COOP, payment_date=date(2025, 2, 4)
        )

        assert receipt.is_partial is False
        assert receipt.payment_date == date(2025, 2, 4)

    def test_display_dict_includes_totals_only_for_partial(self):
        partial = build_receipt(make_due("1000", "400"), MEMBER, COOP).as_display_dict()
        full = build_receipt(
            make_due("1000", "1000", date(2025, 2, 10)), MEMBER, COOP
        ).as_display_dict()

        assert partial["total_amount"] == "1.000,00 TL"
        assert partial["remaining_amount"] == "600,00 TL"
        assert "total_amount" not in full
        assert full["payment_date"] == "10.02.2025"
        assert full["paid_amount"] == "1.000,00 TL"


class TestFormatting:
    def test_format_money(self):
        assert format_money(Decimal("1234567.5")) == "1.234.567,50 TL"
        assert format_money(Decimal("0")) == "0,00 TL"

    def test_format_date(self):
        assert format_date(date(2025, 1, 5)) == "05.01.2025"
