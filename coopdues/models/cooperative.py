"""Cooperative and cooperative membership ORM models."""

from datetime import date

from sqlalchemy import Date, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coopdues.models import Base, BaseModel


class Cooperative(Base, BaseModel):
    """A housing cooperative whose members owe monthly dues."""

    __tablename__ = "cooperatives"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Cooperative name",
    )
    start_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="Date the cooperative was founded",
    )

    # Relationships
    memberships: Mapped[list["CoopMember"]] = relationship(
        "CoopMember",
        back_populates="cooperative",
    )

    def __repr__(self) -> str:
        return f"<Cooperative(id={self.id}, name={self.name}, start_date={self.start_date})>"


class CoopMember(Base, BaseModel):
    """Enrollment of a member in a cooperative.

    This link, not the member, owns the dues: a person enrolled in two
    cooperatives has two independent due schedules.
    """

    __tablename__ = "cooperative_members"

    coop_id: Mapped[int] = mapped_column(
        ForeignKey("cooperatives.id"),
        nullable=False,
        index=True,
        comment="Cooperative the member is enrolled in",
    )
    member_id: Mapped[int] = mapped_column(
        ForeignKey("members.id"),
        nullable=False,
        index=True,
        comment="Enrolled member",
    )
    entry_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="Date the member joined the cooperative",
    )

    # Relationships
    cooperative: Mapped["Cooperative"] = relationship(
        "Cooperative",
        back_populates="memberships",
        foreign_keys=[coop_id],
    )
    member: Mapped["Member"] = relationship(  # noqa: F821
        "Member",
        back_populates="enrollments",
        foreign_keys=[member_id],
    )

    __table_args__ = (UniqueConstraint("coop_id", "member_id", name="uq_coop_member"),)

    def __repr__(self) -> str:
        return (
            f"<CoopMember(id={self.id}, coop_id={self.coop_id}, member_id={self.member_id}, "
            f"entry_date={self.entry_date})>"
        )


__all__ = ["Cooperative", "CoopMember"]
