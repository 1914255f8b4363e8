"""Program routes: lifecycle, membership, role-aware viewing and search."""

from datetime import date

from fastapi import APIRouter, Depends, Query, Response

from festival.api.dependencies.festival import (
    get_current_user,
    get_optional_user,
    get_program_service,
)
from festival.api.models.common import PageMeta
from festival.api.models.programs import (
    ChangeStateRequest,
    MemberRequest,
    ProgramListResponse,
    ProgramRequest,
    ProgramResponse,
    ProgramStateEnum,
)
from festival.application.dtos.program_view import ProgramView
from festival.application.dtos.search import ProgramSearchCriteria
from festival.application.services.program_service import ProgramService
from festival.domain.models.program import Program, ProgramState
from festival.domain.models.user import User

router = APIRouter(prefix="/v1/programs", tags=["programs"])


def to_program_response(view: ProgramView) -> ProgramResponse:
    program = view.program
    response = ProgramResponse(
        id=program.id,
        name=program.name,
        description=program.description,
        start_date=program.start_date,
        end_date=program.end_date,
        state=ProgramStateEnum(program.state.value),
    )
    if view.full:
        response.creator_id = program.creator_id
        response.programmers = sorted(program.programmers)
        response.staff = sorted(program.staff)
        response.created_at = program.created_at
    return response


def _member_view(program: Program) -> ProgramResponse:
    return to_program_response(ProgramView(program=program, full=True))


@router.post("", response_model=ProgramResponse, status_code=201)
def create_program(
    request_data: ProgramRequest,
    actor: User = Depends(get_current_user),
    service: ProgramService = Depends(get_program_service),
) -> ProgramResponse:
    """Create a program; the caller becomes its creator and first programmer."""
    program = service.create_program(
        actor.id,
        name=request_data.name,
        description=request_data.description,
        start_date=request_data.start_date,
        end_date=request_data.end_date,
    )
    return _member_view(program)


@router.get("", response_model=ProgramListResponse)
def search_programs(
    name: str | None = None,
    state: ProgramStateEnum | None = None,
    start_from: date | None = None,
    start_to: date | None = None,
    offset: int | None = Query(default=None, ge=0),
    limit: int | None = Query(default=None, ge=1),
    actor: User | None = Depends(get_optional_user),
    service: ProgramService = Depends(get_program_service),
) -> ProgramListResponse:
    criteria = ProgramSearchCriteria(
        name=name,
        state=ProgramState(state.value) if state else None,
        start_from=start_from,
        start_to=start_to,
    )
    page = service.search_programs(
        actor.id if actor else None, criteria, offset=offset, limit=limit
    )
    return ProgramListResponse(
        items=[to_program_response(view) for view in page.items],
        page=PageMeta(
            total=page.total,
            offset=page.offset,
            limit=page.limit,
            has_more=page.has_more,
        ),
    )


@router.get("/{program_id}", response_model=ProgramResponse)
def view_program(
    program_id: int,
    actor: User | None = Depends(get_optional_user),
    service: ProgramService = Depends(get_program_service),
) -> ProgramResponse:
    """View a program; visitors only see announced programs."""
    view = service.view_program(actor.id if actor else None, program_id)
    return to_program_response(view)


@router.patch("/{program_id}", response_model=ProgramResponse)
def update_program(
    program_id: int,
    request_data: ProgramRequest,
    actor: User = Depends(get_current_user),
    service: ProgramService = Depends(get_program_service),
) -> ProgramResponse:
    program = service.update_program(
        actor.id,
        program_id,
        name=request_data.name,
        description=request_data.description,
        start_date=request_data.start_date,
        end_date=request_data.end_date,
    )
    return _member_view(program)


@router.delete("/{program_id}", status_code=204)
def delete_program(
    program_id: int,
    actor: User = Depends(get_current_user),
    service: ProgramService = Depends(get_program_service),
) -> Response:
    service.delete_program(actor.id, program_id)
    return Response(status_code=204)


@router.post("/{program_id}/state", response_model=ProgramResponse)
def change_state(
    program_id: int,
    request_data: ChangeStateRequest,
    actor: User = Depends(get_current_user),
    service: ProgramService = Depends(get_program_service),
) -> ProgramResponse:
    """Advance the program to its successor phase."""
    program = service.change_state(
        actor.id, program_id, ProgramState(request_data.state.value)
    )
    return _member_view(program)


@router.post("/{program_id}/programmers", response_model=ProgramResponse)
def add_programmer(
    program_id: int,
    request_data: MemberRequest,
    actor: User = Depends(get_current_user),
    service: ProgramService = Depends(get_program_service),
) -> ProgramResponse:
    program = service.add_programmer(actor.id, program_id, request_data.user_id)
    return _member_view(program)


@router.delete("/{program_id}/programmers/{user_id}", response_model=ProgramResponse)
def remove_programmer(
    program_id: int,
    user_id: int,
    actor: User = Depends(get_current_user),
    service: ProgramService = Depends(get_program_service),
) -> ProgramResponse:
    program = service.remove_programmer(actor.id, program_id, user_id)
    return _member_view(program)


@router.post("/{program_id}/staff", response_model=ProgramResponse)
def add_staff(
    program_id: int,
    request_data: MemberRequest,
    actor: User = Depends(get_current_user),
    service: ProgramService = Depends(get_program_service),
) -> ProgramResponse:
    program = service.add_staff(actor.id, program_id, request_data.user_id)
    return _member_view(program)


@router.delete("/{program_id}/staff/{user_id}", response_model=ProgramResponse)
def remove_staff(
    program_id: int,
    user_id: int,
    actor: User = Depends(get_current_user),
    service: ProgramService = Depends(get_program_service),
) -> ProgramResponse:
    program = service.remove_staff(actor.id, program_id, user_id)
    return _member_view(program)
