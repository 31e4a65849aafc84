"""Member ORM model for people registered in the system."""

from datetime import date

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coopdues.models import Base, BaseModel


class Member(Base, BaseModel):
    """A person who can be enrolled in one or more cooperatives.

    The TC number (Turkish national identity number) is the natural key and
    must be unique across all members.
    """

    __tablename__ = "members"

    tc_number: Mapped[str] = mapped_column(
        String(11),
        nullable=False,
        unique=True,
        comment="Turkish national identity number",
    )
    full_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="First and last name",
    )
    phone_1: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="Primary phone number",
    )
    phone_2: Mapped[str | None] = mapped_column(
        String(20),
        nullable=True,
        comment="Secondary phone number",
    )
    registration_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="Date the member was registered",
    )

    # Relationships
    enrollments: Mapped[list["CoopMember"]] = relationship(  # noqa: F821
        "CoopMember",
        back_populates="member",
    )

    def __repr__(self) -> str:
        return f"<Member(id={self.id}, full_name={self.full_name}, tc_number={self.tc_number})>"


__all__ = ["Member"]
