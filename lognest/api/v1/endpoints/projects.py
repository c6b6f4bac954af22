"""
Project API endpoints.
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lognest.api.v1.dependencies.auth import get_current_user
from lognest.api.v1.dependencies.pagination import get_pagination
from lognest.core.pagination import Pagination, PaginationMeta
from lognest.core.security import TokenClaims
from lognest.db.session import get_db
from lognest.schemas.core import APIResponse, PaginatedResponse
from lognest.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from lognest.services.project_service import ProjectService


router = APIRouter()


def _page(projects, pagination: Pagination, message: str) -> PaginatedResponse[ProjectResponse]:
    return PaginatedResponse[ProjectResponse](
        message=message,
        data=[ProjectResponse.model_validate(project) for project in projects],
        pagination=PaginationMeta.from_pagination(pagination),
    )


@router.get("", response_model=PaginatedResponse[ProjectResponse])
async def list_projects(
    pagination: Pagination = Depends(get_pagination),
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> PaginatedResponse[ProjectResponse]:
    """List public projects."""
    projects = await ProjectService.list_projects(db, pagination)
    return _page(projects, pagination, "projects retrieved")


@router.get("/me", response_model=PaginatedResponse[ProjectResponse])
async def list_my_projects(
    pagination: Pagination = Depends(get_pagination),
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> PaginatedResponse[ProjectResponse]:
    """List the caller's projects, private ones included."""
    projects = await ProjectService.list_user_projects(
        db, current_user.user_id, pagination, include_private=True
    )
    return _page(projects, pagination, "projects retrieved")


@router.get("/users/{user_id}", response_model=PaginatedResponse[ProjectResponse])
async def list_user_projects(
    user_id: UUID,
    pagination: Pagination = Depends(get_pagination),
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> PaginatedResponse[ProjectResponse]:
    """List another user's public projects."""
    projects = await ProjectService.list_user_projects(
        db, user_id, pagination, include_private=user_id == current_user.user_id
    )
    return _page(projects, pagination, "projects retrieved")


@router.get("/slug/{slug}", response_model=APIResponse[ProjectResponse])
async def get_project_by_slug(
    slug: str,
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> APIResponse[ProjectResponse]:
    project = await ProjectService.get_project_by_slug(db, slug, current_user.user_id)
    return APIResponse(message="project retrieved", data=ProjectResponse.model_validate(project))


@router.get("/{project_id}", response_model=APIResponse[ProjectResponse])
async def get_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> APIResponse[ProjectResponse]:
    project = await ProjectService.get_project(db, project_id, current_user.user_id)
    return APIResponse(message="project retrieved", data=ProjectResponse.model_validate(project))


@router.post("", response_model=APIResponse[ProjectResponse], status_code=201)
async def create_project(
    project_data: ProjectCreate,
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> APIResponse[ProjectResponse]:
    """
    Create a project owned by the caller.

    Raises:
        ValidationError: 400 if any tag id does not exist
    """
    project = await ProjectService.create_project(db, project_data, current_user.user_id)
    return APIResponse(message="project created", data=ProjectResponse.model_validate(project))


@router.put("/{project_id}", response_model=APIResponse[ProjectResponse])
async def update_project(
    project_id: UUID,
    project_data: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> APIResponse[ProjectResponse]:
    """
    Update one of the caller's projects.

    Raises:
        ResourceNotFoundError: 404 if the project is missing or belongs to someone else
        ValidationError: 400 if any tag id does not exist
    """
    project = await ProjectService.update_project(
        db, project_id, project_data, current_user.user_id
    )
    return APIResponse(message="project updated", data=ProjectResponse.model_validate(project))


@router.delete("/{project_id}", response_model=APIResponse[None])
async def delete_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> APIResponse[None]:
    await ProjectService.delete_project(db, project_id, current_user.user_id)
    return APIResponse(message="project deleted")
