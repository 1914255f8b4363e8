"""Screening routes: draft editing, the review pipeline and queries.

Every transition is a POST on the screening; the service enforces the
actor relationship and the program/screening phase gates.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query, Response

from festival.api.dependencies.festival import (
    get_current_user,
    get_optional_user,
    get_screening_query_service,
    get_screening_service,
)
from festival.api.models.common import PageMeta
from festival.api.models.screenings import (
    AssignHandlerRequest,
    RejectRequest,
    ReviewRequest,
    ScheduleRequest,
    ScreeningDraftRequest,
    ScreeningListResponse,
    ScreeningResponse,
    ScreeningSortEnum,
    ScreeningStateEnum,
)
from festival.application.dtos.page import Page
from festival.application.dtos.search import ScreeningSearchCriteria, ScreeningSort
from festival.application.services.screening_query_service import (
    ScreeningQueryService,
)
from festival.application.services.screening_service import ScreeningService
from festival.domain.models.screening import Screening, ScreeningState
from festival.domain.models.user import User

router = APIRouter(prefix="/v1", tags=["screenings"])


def to_screening_response(screening: Screening) -> ScreeningResponse:
    return ScreeningResponse(
        id=screening.id,
        program_id=screening.program_id,
        submitter_id=screening.submitter_id,
        title=screening.title,
        genre=screening.genre,
        description=screening.description,
        state=ScreeningStateEnum(screening.state.value),
        handler_id=screening.handler_id,
        review_score=screening.review_score,
        review_comments=screening.review_comments,
        rejection_reason=screening.rejection_reason,
        room=screening.room,
        scheduled_on=screening.scheduled_on,
        created_at=screening.created_at,
        submitted_at=screening.submitted_at,
        reviewed_at=screening.reviewed_at,
        final_submitted_at=screening.final_submitted_at,
    )


def _to_list_response(page: Page[Screening]) -> ScreeningListResponse:
    return ScreeningListResponse(
        items=[to_screening_response(s) for s in page.items],
        page=PageMeta(
            total=page.total,
            offset=page.offset,
            limit=page.limit,
            has_more=page.has_more,
        ),
    )


def _domain_state(state: ScreeningStateEnum | None) -> ScreeningState | None:
    return ScreeningState(state.value) if state else None


# =============================================================================
# Program-scoped endpoints
# =============================================================================


@router.post(
    "/programs/{program_id}/screenings",
    response_model=ScreeningResponse,
    status_code=201,
)
def create_screening(
    program_id: int,
    request_data: ScreeningDraftRequest,
    actor: User = Depends(get_current_user),
    service: ScreeningService = Depends(get_screening_service),
) -> ScreeningResponse:
    """Create a draft screening owned by the caller."""
    screening = service.create_screening(
        actor.id,
        program_id,
        title=request_data.title,
        genre=request_data.genre,
        description=request_data.description,
    )
    return to_screening_response(screening)


@router.get(
    "/programs/{program_id}/screenings", response_model=ScreeningListResponse
)
def search_screenings(
    program_id: int,
    title: str | None = None,
    genre: str | None = None,
    state: ScreeningStateEnum | None = None,
    scheduled_from: date | None = None,
    scheduled_to: date | None = None,
    sort: ScreeningSortEnum = ScreeningSortEnum.TIMETABLE,
    offset: int | None = Query(default=None, ge=0),
    limit: int | None = Query(default=None, ge=1),
    actor: User | None = Depends(get_optional_user),
    service: ScreeningQueryService = Depends(get_screening_query_service),
) -> ScreeningListResponse:
    """Search screenings of one program; results are filtered by visibility."""
    criteria = ScreeningSearchCriteria(
        title=title,
        genre=genre,
        state=_domain_state(state),
        scheduled_from=scheduled_from,
        scheduled_to=scheduled_to,
        sort=ScreeningSort(sort.value),
    )
    page = service.search_in_program(
        actor.id if actor else None,
        program_id,
        criteria,
        offset=offset,
        limit=limit,
    )
    return _to_list_response(page)


# =============================================================================
# Caller-scoped lists (declared before /screenings/{screening_id})
# =============================================================================


@router.get("/screenings/mine", response_model=ScreeningListResponse)
def list_my_screenings(
    state: ScreeningStateEnum | None = None,
    offset: int | None = Query(default=None, ge=0),
    limit: int | None = Query(default=None, ge=1),
    actor: User = Depends(get_current_user),
    service: ScreeningQueryService = Depends(get_screening_query_service),
) -> ScreeningListResponse:
    page = service.list_for_submitter(
        actor.id, state=_domain_state(state), offset=offset, limit=limit
    )
    return _to_list_response(page)


@router.get("/screenings/assigned", response_model=ScreeningListResponse)
def list_assigned_screenings(
    offset: int | None = Query(default=None, ge=0),
    limit: int | None = Query(default=None, ge=1),
    actor: User = Depends(get_current_user),
    service: ScreeningQueryService = Depends(get_screening_query_service),
) -> ScreeningListResponse:
    page = service.list_for_handler(actor.id, offset=offset, limit=limit)
    return _to_list_response(page)


# =============================================================================
# Single screening
# =============================================================================


@router.get("/screenings/{screening_id}", response_model=ScreeningResponse)
def view_screening(
    screening_id: int,
    actor: User | None = Depends(get_optional_user),
    service: ScreeningQueryService = Depends(get_screening_query_service),
) -> ScreeningResponse:
    screening = service.view_screening(actor.id if actor else None, screening_id)
    return to_screening_response(screening)


@router.patch("/screenings/{screening_id}", response_model=ScreeningResponse)
def update_screening(
    screening_id: int,
    request_data: ScreeningDraftRequest,
    actor: User = Depends(get_current_user),
    service: ScreeningService = Depends(get_screening_service),
) -> ScreeningResponse:
    screening = service.update_screening(
        actor.id,
        screening_id,
        title=request_data.title,
        genre=request_data.genre,
        description=request_data.description,
    )
    return to_screening_response(screening)


@router.delete("/screenings/{screening_id}", status_code=204)
def withdraw_screening(
    screening_id: int,
    actor: User = Depends(get_current_user),
    service: ScreeningService = Depends(get_screening_service),
) -> Response:
    service.withdraw(actor.id, screening_id)
    return Response(status_code=204)


@router.post("/screenings/{screening_id}/submit", response_model=ScreeningResponse)
def submit_screening(
    screening_id: int,
    actor: User = Depends(get_current_user),
    service: ScreeningService = Depends(get_screening_service),
) -> ScreeningResponse:
    return to_screening_response(service.submit(actor.id, screening_id))


@router.post("/screenings/{screening_id}/handler", response_model=ScreeningResponse)
def assign_handler(
    screening_id: int,
    request_data: AssignHandlerRequest,
    actor: User = Depends(get_current_user),
    service: ScreeningService = Depends(get_screening_service),
) -> ScreeningResponse:
    screening = service.assign_handler(
        actor.id, screening_id, request_data.handler_id
    )
    return to_screening_response(screening)


@router.post("/screenings/{screening_id}/review", response_model=ScreeningResponse)
def review_screening(
    screening_id: int,
    request_data: ReviewRequest,
    actor: User = Depends(get_current_user),
    service: ScreeningService = Depends(get_screening_service),
) -> ScreeningResponse:
    screening = service.review(
        actor.id, screening_id, request_data.score, request_data.comments
    )
    return to_screening_response(screening)


@router.post("/screenings/{screening_id}/approve", response_model=ScreeningResponse)
def approve_screening(
    screening_id: int,
    actor: User = Depends(get_current_user),
    service: ScreeningService = Depends(get_screening_service),
) -> ScreeningResponse:
    return to_screening_response(service.approve(actor.id, screening_id))


@router.post("/screenings/{screening_id}/reject", response_model=ScreeningResponse)
def reject_screening(
    screening_id: int,
    request_data: RejectRequest,
    actor: User = Depends(get_current_user),
    service: ScreeningService = Depends(get_screening_service),
) -> ScreeningResponse:
    screening = service.reject(actor.id, screening_id, request_data.reason)
    return to_screening_response(screening)


@router.post(
    "/screenings/{screening_id}/final-submit", response_model=ScreeningResponse
)
def final_submit_screening(
    screening_id: int,
    actor: User = Depends(get_current_user),
    service: ScreeningService = Depends(get_screening_service),
) -> ScreeningResponse:
    return to_screening_response(service.final_submit(actor.id, screening_id))


@router.post("/screenings/{screening_id}/schedule", response_model=ScreeningResponse)
def schedule_screening(
    screening_id: int,
    request_data: ScheduleRequest,
    actor: User = Depends(get_current_user),
    service: ScreeningService = Depends(get_screening_service),
) -> ScreeningResponse:
    screening = service.schedule(
        actor.id, screening_id, request_data.scheduled_on, request_data.room
    )
    return to_screening_response(screening)
