"""Member registration and lookup service."""

import logging
from datetime import date
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from coopdues.models import Member
from coopdues.services.errors import DuplicateMemberError, NotFoundError

logger = logging.getLogger(__name__)


class MemberService:
    """Service for member database operations."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def create_member(
        self,
        tc_number: str,
        full_name: str,
        phone_1: str,
        registration_date: date,
        phone_2: Optional[str] = None,
    ) -> Member:
        """Register a new member.

        Raises:
            DuplicateMemberError: If a member with this TC number already exists
        """
        existing = self.db.query(Member).filter_by(tc_number=tc_number).first()
        if existing:
            logger.warning("Duplicate member registration for tc_number=%s", tc_number)
            raise DuplicateMemberError(f"A member with TC number {tc_number} already exists")

        member = Member(
            tc_number=tc_number,
            full_name=full_name,
            phone_1=phone_1,
            phone_2=phone_2,
            registration_date=registration_date,
        )
        try:
            self.db.add(member)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.error("IntegrityError creating member tc_number=%s: %s", tc_number, e)
            raise DuplicateMemberError(
                f"A member with TC number {tc_number} already exists"
            ) from e
        self.db.refresh(member)
        logger.info("Created member id=%s name=%s", member.id, full_name)
        return member

    def get_member(self, member_id: int) -> Member:
        """Get member by ID.

        Raises:
            NotFoundError: If the member does not exist
        """
        member = self.db.query(Member).filter(Member.id == member_id).first()
        if member is None:
            raise NotFoundError(f"Member {member_id} not found")
        return member

    def list_members(self) -> list[Member]:
        """List all members ordered by full name."""
        return self.db.query(Member).order_by(Member.full_name.asc()).all()

    def update_member(
        self,
        member_id: int,
        tc_number: str,
        full_name: str,
        phone_1: str,
        registration_date: date,
        phone_2: Optional[str] = None,
    ) -> Member:
        """Replace a member's details.

        Raises:
            NotFoundError: If the member does not exist
            DuplicateMemberError: If the new TC number belongs to another member
        """
        member = self.get_member(member_id)
        clash = (
            self.db.query(Member)
            .filter(Member.tc_number == tc_number, Member.id != member_id)
            .first()
        )
        if clash:
            logger.warning("TC number %s already used by member %s", tc_number, clash.id)
            raise DuplicateMemberError(f"A member with TC number {tc_number} already exists")

        member.tc_number = tc_number
        member.full_name = full_name
        member.phone_1 = phone_1
        member.phone_2 = phone_2
        member.registration_date = registration_date
        self.db.commit()
        self.db.refresh(member)
        logger.info("Updated member id=%s", member_id)
        return member

    def search_members(self, query: str) -> list[Member]:
        """Find members whose name or TC number contains ``query``."""
        pattern = f"%{query}%"
        return (
            self.db.query(Member)
            .filter(or_(Member.full_name.like(pattern), Member.tc_number.like(pattern)))
            .order_by(Member.full_name.asc())
            .all()
        )


__all__ = ["MemberService"]
