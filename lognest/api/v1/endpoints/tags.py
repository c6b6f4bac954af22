"""
Tag API endpoints.
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
from lognest.schemas.tag import TagCreate, TagResponse, TagUpdate
from lognest.services.tag_service import TagService


router = APIRouter()


@router.get("", response_model=PaginatedResponse[TagResponse])
async def list_tags(
    pagination: Pagination = Depends(get_pagination),
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> PaginatedResponse[TagResponse]:
    tags = await TagService.list_tags(db, pagination)
    return PaginatedResponse[TagResponse](
        message="tags retrieved",
        data=[TagResponse.model_validate(tag) for tag in tags],
        pagination=PaginationMeta.from_pagination(pagination),
    )


@router.get("/{tag_id}", response_model=APIResponse[TagResponse])
async def get_tag(
    tag_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> APIResponse[TagResponse]:
    tag = await TagService.get_tag(db, tag_id)
    return APIResponse(message="tag retrieved", data=TagResponse.model_validate(tag))


@router.post("", response_model=APIResponse[TagResponse], status_code=201)
async def create_tag(
    tag_data: TagCreate,
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> APIResponse[TagResponse]:
    tag = await TagService.create_tag(db, tag_data)
    return APIResponse(message="tag created", data=TagResponse.model_validate(tag))


@router.put("/{tag_id}", response_model=APIResponse[TagResponse])
async def update_tag(
    tag_id: UUID,
    tag_data: TagUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> APIResponse[TagResponse]:
    tag = await TagService.update_tag(db, tag_id, tag_data)
    return APIResponse(message="tag updated", data=TagResponse.model_validate(tag))


@router.delete("/{tag_id}", response_model=APIResponse[None])
async def delete_tag(
    tag_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: TokenClaims = Depends(get_current_user),
) -> APIResponse[None]:
    """Soft delete a tag; it disappears from every project it was attached to."""
    await TagService.delete_tag(db, tag_id)
    return APIResponse(message="tag deleted")
