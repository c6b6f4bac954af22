"""
Log API endpoints.

Reads are open to anonymous callers; private projects stay hidden from
everyone but their owner.
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lognest.api.v1.dependencies.auth import get_current_user, get_optional_user
from lognest.api.v1.dependencies.pagination import get_pagination
from lognest.core.pagination import Pagination, PaginationMeta
from lognest.core.security import TokenClaims
from lognest.db.session import get_db
from lognest.schemas.core import APIResponse, PaginatedResponse
from lognest.schemas.log import LogCreate, LogResponse, LogUpdate
from lognest.services.log_service import LogService


router = APIRouter()


def _viewer(user: TokenClaims | None) -> UUID | None:
    return user.user_id if user else None


@router.get("/projects/{project_id}", response_model=PaginatedResponse[LogResponse])
async def list_project_logs(
    project_id: UUID,
    pagination: Pagination = Depends(get_pagination),
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims | None = Depends(get_optional_user),
) -> PaginatedResponse[LogResponse]:
    logs = await LogService.list_project_logs(db, project_id, pagination, _viewer(current_user))
    return PaginatedResponse[LogResponse](
        message="logs retrieved",
        data=[LogResponse.model_validate(log) for log in logs],
        pagination=PaginationMeta.from_pagination(pagination),
    )


@router.get("/{log_id}", response_model=APIResponse[LogResponse])
async def get_log(
    log_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims | None = Depends(get_optional_user),
) -> APIResponse[LogResponse]:
    log = await LogService.get_log(db, log_id, _viewer(current_user))
    return APIResponse(message="log retrieved", data=LogResponse.model_validate(log))


@router.post("", response_model=APIResponse[LogResponse], status_code=201)
async def create_log(
    log_data: LogCreate,
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> APIResponse[LogResponse]:
    log = await LogService.create_log(db, log_data, current_user.user_id)
    return APIResponse(message="log created", data=LogResponse.model_validate(log))


@router.put("/{log_id}", response_model=APIResponse[LogResponse])
async def update_log(
    log_id: UUID,
    log_data: LogUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> APIResponse[LogResponse]:
    log = await LogService.update_log(db, log_id, log_data, current_user.user_id)
    return APIResponse(message="log updated", data=LogResponse.model_validate(log))


@router.delete("/{log_id}", response_model=APIResponse[None])
async def delete_log(
    log_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> APIResponse[None]:
    await LogService.delete_log(db, log_id, current_user.user_id)
    return APIResponse(message="log deleted")
