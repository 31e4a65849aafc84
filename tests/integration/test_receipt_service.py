"""Integration tests for receipt assembly from stored records."""

from datetime import date
from decimal import Decimal

import pytest

from coopdues.services.errors import NotFoundError
from coopdues.services.ledger_service import LedgerService
from coopdues.services.receipt_service import UNSET, CoopInfo, MemberInfo, ReceiptService


@pytest.fixture
def due(db_session, coop_member):
    return LedgerService(db_session).add_extra_due(coop_member.id, 2025, 4, Decimal("1250.50"))


class TestReceiptService:
    def test_receipt_info_comes_from_link(self, db_session, coop_member, member, cooperative):
        member_info, coop_info = ReceiptService(db_session).get_receipt_info(coop_member.id)

        assert member_info == MemberInfo(
            full_name=member.full_name, tc_number=member.tc_number, phone=member.phone_1
        )
        assert coop_info == CoopInfo(name=cooperative.name)

    def test_receipt_info_unknown_link(self, db_session):
        with pytest.raises(NotFoundError):
            ReceiptService(db_session).get_receipt_info(999)

    def test_full_payment_receipt(self, db_session, due):
        LedgerService(db_session).apply_payment(due.id, Decimal("1250.50"), date(2025, 4, 30))

        receipt = ReceiptService(db_session).build_receipt_for(due.id)

        assert receipt.is_partial is False
        assert receipt.member_full_name == "Ayşe Yılmaz"
        assert receipt.coop_name == "Yeşilvadi Konut Kooperatifi"
        assert receipt.amount_in_words == "Bin İki Yüz Elli Türk Lirası, Elli Kuruş"
        assert receipt.as_display_dict()["payment_date"] == "30.04.2025"
        assert receipt.as_display_dict()["paid_amount"] == "1.250,50 TL"

    def test_partial_payment_receipt_uses_payment_date(self, db_session, due):
        LedgerService(db_session).apply_payment(due.id, Decimal("250.50"), date(2025, 4, 10))

        receipt = ReceiptService(db_session).build_receipt_for(
            due.id, payment_date=date(2025, 4, 10)
        )

        assert receipt.is_partial is True
        assert receipt.remaining == Decimal("1000.00")
        assert receipt.payment_date == date(2025, 4, 10)
        display = receipt.as_display_dict()
        assert display["payment_date"] == "10.04.2025"
        assert display["total_amount"] == "1.250,50 TL"
        assert display["remaining_amount"] == "1.000,00 TL"

    def test_partial_payment_receipt_without_date(self, db_session, due):
        LedgerService(db_session).apply_payment(due.id, Decimal("250.50"), date(2025, 4, 10))

        receipt = ReceiptService(db_session).build_receipt_for(due.id)

        assert receipt.payment_date == UNSET

    def test_settled_receipt_keeps_stored_date(self, db_session, due):
        LedgerService(db_session).apply_payment(due.id, Decimal("1250.50"), date(2025, 4, 30))

        receipt = ReceiptService(db_session).build_receipt_for(
            due.id, payment_date=date(2025, 5, 2)
        )

        assert receipt.payment_date == date(2025, 4, 30)

    def test_supplied_details_skip_lookup(self, db_session, due):
        member_info = MemberInfo(full_name="Vekil Kişi", tc_number="00000000000", phone="-")
        coop_info = CoopInfo(name="Başka Kooperatif")

        receipt = ReceiptService(db_session).build_receipt_for(due.id, member_info, coop_info)

        assert receipt.member_full_name == "Vekil Kişi"
        assert receipt.coop_name == "Başka Kooperatif"

    def test_unknown_due(self, db_session):
        with pytest.raises(NotFoundError):
            ReceiptService(db_session).build_receipt_for(404)
