"""Member and cooperative registry API routes."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from coopdues.api.schemas import (
    CoopMemberResponse,
    CooperativePayload,
    CooperativeResponse,
    EnrollmentPayload,
    MemberPayload,
    MemberResponse,
)
from coopdues.models import CoopMember
from coopdues.services import get_db
from coopdues.services.cooperative_service import CooperativeService
from coopdues.services.member_service import MemberService

router = APIRouter(prefix="/api", tags=["registry"])


def _coop_member_response(link: CoopMember) -> CoopMemberResponse:
    return CoopMemberResponse(
        id=link.id,
        member_id=link.member_id,
        full_name=link.member.full_name,
        tc_number=link.member.tc_number,
        phone_1=link.member.phone_1,
        entry_date=link.entry_date,
    )


# Members


@router.post("/members", response_model=MemberResponse, status_code=status.HTTP_201_CREATED)
def create_member(payload: MemberPayload, db: Session = Depends(get_db)) -> MemberResponse:
    member = MemberService(db).create_member(**payload.model_dump())
    return MemberResponse.model_validate(member)


@router.get("/members", response_model=list[MemberResponse])
def list_members(db: Session = Depends(get_db)) -> list[MemberResponse]:
    return [MemberResponse.model_validate(m) for m in MemberService(db).list_members()]


@router.get("/members/search", response_model=list[MemberResponse])
def search_members(
    q: str = Query(..., min_length=1), db: Session = Depends(get_db)
) -> list[MemberResponse]:
    """Substring search on full name or TC number."""
    return [MemberResponse.model_validate(m) for m in MemberService(db).search_members(q)]


@router.put("/members/{member_id}", response_model=MemberResponse)
def update_member(
    member_id: int, payload: MemberPayload, db: Session = Depends(get_db)
) -> MemberResponse:
    member = MemberService(db).update_member(member_id, **payload.model_dump())
    return MemberResponse.model_validate(member)


# Cooperatives


@router.post(
    "/cooperatives", response_model=CooperativeResponse, status_code=status.HTTP_201_CREATED
)
def create_cooperative(
    payload: CooperativePayload, db: Session = Depends(get_db)
) -> CooperativeResponse:
    coop = CooperativeService(db).create_cooperative(payload.name, payload.start_date)
    return CooperativeResponse.model_validate(coop)


@router.get("/cooperatives", response_model=list[CooperativeResponse])
def list_cooperatives(db: Session = Depends(get_db)) -> list[CooperativeResponse]:
    return [
        CooperativeResponse.model_validate(c)
        for c in CooperativeService(db).list_cooperatives()
    ]


@router.get("/cooperatives/{coop_id}", response_model=CooperativeResponse)
def get_cooperative(coop_id: int, db: Session = Depends(get_db)) -> CooperativeResponse:
    return CooperativeResponse.model_validate(CooperativeService(db).get_cooperative(coop_id))


@router.post(
    "/cooperatives/{coop_id}/members",
    response_model=list[CoopMemberResponse],
    status_code=status.HTTP_201_CREATED,
)
def add_members(
    coop_id: int, payload: EnrollmentPayload, db: Session = Depends(get_db)
) -> list[CoopMemberResponse]:
    links = CooperativeService(db).add_members(coop_id, payload.member_ids, payload.entry_date)
    return [_coop_member_response(link) for link in links]


@router.get("/cooperatives/{coop_id}/members", response_model=list[CoopMemberResponse])
def list_coop_members(coop_id: int, db: Session = Depends(get_db)) -> list[CoopMemberResponse]:
    links = CooperativeService(db).list_coop_members(coop_id)
    return [_coop_member_response(link) for link in links]


@router.get("/cooperatives/{coop_id}/available-members", response_model=list[MemberResponse])
def list_available_members(coop_id: int, db: Session = Depends(get_db)) -> list[MemberResponse]:
    """Members not yet enrolled in the cooperative."""
    members = CooperativeService(db).list_available_members(coop_id)
    return [MemberResponse.model_validate(m) for m in members]
