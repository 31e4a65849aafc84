"""Cooperative registration and enrollment service."""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from coopdues.models import Cooperative, CoopMember, Member
from coopdues.services.errors import DuplicateMemberError, NotFoundError

logger = logging.getLogger(__name__)


class CooperativeService:
    """Service for cooperatives and their member enrollments."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def create_cooperative(self, name: str, start_date: date) -> Cooperative:
        coop = Cooperative(name=name, start_date=start_date)
        self.db.add(coop)
        self.db.commit()
        self.db.refresh(coop)
        logger.info("Created cooperative id=%s name=%s", coop.id, name)
        return coop

    def list_cooperatives(self) -> list[Cooperative]:
        """List cooperatives, most recently founded first."""
        return self.db.query(Cooperative).order_by(Cooperative.start_date.desc()).all()

    def get_cooperative(self, coop_id: int) -> Cooperative:
        """Get cooperative by ID.

        Raises:
            NotFoundError: If the cooperative does not exist
        """
        coop = self.db.query(Cooperative).filter(Cooperative.id == coop_id).first()
        if coop is None:
            raise NotFoundError(f"Cooperative {coop_id} not found")
        return coop

    def add_members(
        self,
        coop_id: int,
        member_ids: list[int],
        entry_date: date,
    ) -> list[CoopMember]:
        """Enroll several members in a cooperative in one transaction.

        Either every member is enrolled or none is.

        Raises:
            NotFoundError: If the cooperative or any member does not exist
            DuplicateMemberError: If a member is already enrolled or listed twice
        """
        self.get_cooperative(coop_id)
        if len(set(member_ids)) != len(member_ids):
            raise DuplicateMemberError("Member list contains duplicates")

        found = {
            member_id
            for (member_id,) in self.db.query(Member.id).filter(Member.id.in_(member_ids)).all()
        }
        missing = [member_id for member_id in member_ids if member_id not in found]
        if missing:
            logger.warning("Enrollment in coop %s references unknown members %s", coop_id, missing)
            raise NotFoundError(f"Members not found: {missing}")

        enrolled = {
            member_id
            for (member_id,) in self.db.query(CoopMember.member_id)
            .filter(CoopMember.coop_id == coop_id, CoopMember.member_id.in_(member_ids))
            .all()
        }
        if enrolled:
            logger.warning("Members %s already enrolled in coop %s", sorted(enrolled), coop_id)
            raise DuplicateMemberError(
                f"Members already enrolled in cooperative {coop_id}: {sorted(enrolled)}"
            )

        links = [
            CoopMember(coop_id=coop_id, member_id=member_id, entry_date=entry_date)
            for member_id in member_ids
        ]
        try:
            self.db.add_all(links)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        for link in links:
            self.db.refresh(link)
        logger.info("Enrolled %d members in coop %s", len(links), coop_id)
        return links

    def get_coop_member(self, coop_member_id: int) -> CoopMember:
        """Get coop-member link by ID.

        Raises:
            NotFoundError: If the link does not exist
        """
        link = self.db.query(CoopMember).filter(CoopMember.id == coop_member_id).first()
        if link is None:
            raise NotFoundError(f"Coop member {coop_member_id} not found")
        return link

    def list_coop_members(self, coop_id: int) -> list[CoopMember]:
        """List a cooperative's enrollments ordered by member name."""
        self.get_cooperative(coop_id)
        return (
            self.db.query(CoopMember)
            .join(Member, CoopMember.member_id == Member.id)
            .filter(CoopMember.coop_id == coop_id)
            .order_by(Member.full_name.asc())
            .all()
        )

    def list_available_members(self, coop_id: int) -> list[Member]:
        """List members not yet enrolled in the cooperative."""
        self.get_cooperative(coop_id)
        enrolled = select(CoopMember.member_id).where(CoopMember.coop_id == coop_id)
        return (
            self.db.query(Member)
            .filter(Member.id.not_in(enrolled))
            .order_by(Member.full_name.asc())
            .all()
        )


__all__ = ["CooperativeService"]
