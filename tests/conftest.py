"""Pytest configuration and shared fixtures."""

import os
from datetime import date

# Point the application engine at an in-memory database BEFORE importing coopdues
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

import pytest  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from coopdues.models import Base, Cooperative, CoopMember, Member  # noqa: E402
from coopdues.services import create_db_engine  # noqa: E402


def make_engine():
    return create_db_engine("sqlite:///:memory:")


@pytest.fixture
def db_session():
    """Create test database session with all tables."""
    engine = make_engine()
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def member(db_session):
    """A registered member."""
    member = Member(
        tc_number="12345678901",
        full_name="Ayşe Yılmaz",
        phone_1="5551234567",
        registration_date=date(2024, 1, 10),
    )
    db_session.add(member)
    db_session.commit()
    return member


@pytest.fixture
def cooperative(db_session):
    """A cooperative with no members."""
    coop = Cooperative(name="Yeşilvadi Konut Kooperatifi", start_date=date(2023, 5, 1))
    db_session.add(coop)
    db_session.commit()
    return coop


@pytest.fixture
def coop_member(db_session, member, cooperative):
    """Enrollment of ``member`` in ``cooperative``; owns the dues under test."""
    link = CoopMember(coop_id=cooperative.id, member_id=member.id, entry_date=date(2024, 3, 15))
    db_session.add(link)
    db_session.commit()
    return link
