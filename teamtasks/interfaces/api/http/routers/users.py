"""
===============================================================================
TARJETA CRC - interfaces/api/http/routers/users.py
===============================================================================

Responsibilities:
    - Exponer endpoints HTTP de usuarios (roster, pendientes, asignables,
      equipo, alta directa, aprobación/rechazo, patch, baja).
    - Convertir requests HTTP -> inputs de casos de uso.
    - Traducir ServiceError -> RFC7807 (error_mapping).

Collaborators:
    - teamtasks.application.usecases.users
    - teamtasks.identity.auth_users (require_session -> AuthSession.actor)
    - teamtasks.container (factories DI)
    - schemas.users (DTOs Pydantic)

Notas:
    - Rutas estáticas (/users/pending, /users/assignable) se declaran antes
      que /users/{user_id}.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from .....application.usecases import (
    ApproveUserInput,
    ApproveUserUseCase,
    CreateUserInput,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListAssignableUsersUseCase,
    ListPendingUsersUseCase,
    ListTeamUseCase,
    ListUsersUseCase,
    RejectUserUseCase,
    UpdateUserUseCase,
    UserListResult,
    UserResult,
)
from .....container import (
    get_approve_user_use_case,
    get_create_user_use_case,
    get_delete_user_use_case,
    get_get_user_use_case,
    get_list_assignable_users_use_case,
    get_list_pending_users_use_case,
    get_list_team_use_case,
    get_list_users_use_case,
    get_reject_user_use_case,
    get_update_user_use_case,
)
from .....crosscutting.error_responses import internal_error
from .....identity.auth_users import AuthSession, require_session
from ..error_mapping import raise_service_error
from ..schemas.users import (
    ApproveUserReq,
    CreateUserReq,
    DeleteUserRes,
    RejectUserReq,
    UpdateUserReq,
    UserRes,
    UsersListRes,
)

router = APIRouter()


# =============================================================================
# Helpers internos
# =============================================================================


def _user_or_raise(result: UserResult, user_id: UUID | None = None) -> UserRes:
    if result.error is not None:
        raise_service_error(result.error, resource="User", resource_id=user_id)
    if result.user is None:
        raise internal_error("User result was empty.")
    return UserRes.from_user(result.user, result.refs)


def _users_or_raise(result: UserListResult) -> UsersListRes:
    if result.error is not None:
        raise_service_error(result.error, resource="User")
    return UsersListRes(users=[UserRes.from_user(u, result.refs) for u in result.users])


# =============================================================================
# Endpoints: listados
# =============================================================================


@router.get("/users", response_model=UsersListRes, tags=["users"])
def list_users(
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
    session: AuthSession = Depends(require_session()),
):
    return _users_or_raise(use_case.execute(session.actor))


@router.get("/users/pending", response_model=UsersListRes, tags=["users"])
def list_pending_users(
    use_case: ListPendingUsersUseCase = Depends(get_list_pending_users_use_case),
    session: AuthSession = Depends(require_session()),
):
    return _users_or_raise(use_case.execute(session.actor))


@router.get("/users/assignable", response_model=UsersListRes, tags=["users"])
def list_assignable_users(
    use_case: ListAssignableUsersUseCase = Depends(get_list_assignable_users_use_case),
    session: AuthSession = Depends(require_session()),
):
    return _users_or_raise(use_case.execute(session.actor))


@router.get("/users/{user_id}/team", response_model=UsersListRes, tags=["users"])
def list_team(
    user_id: UUID,
    use_case: ListTeamUseCase = Depends(get_list_team_use_case),
    session: AuthSession = Depends(require_session()),
):
    return _users_or_raise(use_case.execute(user_id, session.actor))


# =============================================================================
# Endpoints: lectura / escritura
# =============================================================================


@router.get("/users/{user_id}", response_model=UserRes, tags=["users"])
def get_user(
    user_id: UUID,
    use_case: GetUserUseCase = Depends(get_get_user_use_case),
    session: AuthSession = Depends(require_session()),
):
    return _user_or_raise(use_case.execute(user_id, session.actor), user_id)


@router.post("/users", response_model=UserRes, status_code=201, tags=["users"])
def create_user(
    req: CreateUserReq,
    use_case: CreateUserUseCase = Depends(get_create_user_use_case),
    session: AuthSession = Depends(require_session()),
):
    result = use_case.execute(
        CreateUserInput(
            name=req.name,
            email=req.email,
            password=req.password,
            role=req.role,
            supervisor_id=req.supervisor_id,
            manager_id=req.manager_id,
            avatar_url=req.avatar_url,
            actor=session.actor,
        )
    )
    return _user_or_raise(result)


@router.post("/users/{user_id}/approve", response_model=UserRes, tags=["users"])
def approve_user(
    user_id: UUID,
    req: ApproveUserReq,
    use_case: ApproveUserUseCase = Depends(get_approve_user_use_case),
    session: AuthSession = Depends(require_session()),
):
    result = use_case.execute(
        ApproveUserInput(
            user_id=user_id,
            role=req.role,
            supervisor_id=req.supervisor_id,
            manager_id=req.manager_id,
            actor=session.actor,
        )
    )
    return _user_or_raise(result, user_id)


@router.post("/users/{user_id}/reject", response_model=DeleteUserRes, tags=["users"])
def reject_user(
    user_id: UUID,
    req: RejectUserReq | None = None,
    use_case: RejectUserUseCase = Depends(get_reject_user_use_case),
    session: AuthSession = Depends(require_session()),
):
    reason = req.reason if req is not None else None
    result = use_case.execute(user_id, reason, session.actor)
    if result.error is not None:
        raise_service_error(result.error, resource="User", resource_id=user_id)
    return DeleteUserRes(user_id=user_id, deleted=result.deleted)


@router.patch("/users/{user_id}", response_model=UserRes, tags=["users"])
def update_user(
    user_id: UUID,
    req: UpdateUserReq,
    use_case: UpdateUserUseCase = Depends(get_update_user_use_case),
    session: AuthSession = Depends(require_session()),
):
    fields = req.model_dump(exclude_unset=True)
    return _user_or_raise(use_case.execute(user_id, fields, session.actor), user_id)


@router.delete("/users/{user_id}", response_model=DeleteUserRes, tags=["users"])
def delete_user(
    user_id: UUID,
    use_case: DeleteUserUseCase = Depends(get_delete_user_use_case),
    session: AuthSession = Depends(require_session()),
):
    result = use_case.execute(user_id, session.actor)
    if result.error is not None:
        raise_service_error(result.error, resource="User", resource_id=user_id)
    return DeleteUserRes(user_id=user_id, deleted=result.deleted)
