from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.core.config import settings
from app.core.database import get_db
from app.models.relationship import RelationshipType
from app.models.user import User
from app.modules.auth.dependencies import get_current_user
from app.schemas.relationship import (
    RelationshipCreate,
    RelationshipUpdate,
    RelationshipResponse,
    RelationshipDetailResponse,
    RelationshipListResponse,
)
from app.services.relationship_service import RelationshipService

router = APIRouter()


@router.get("/component/{component_id}/relationships", response_model=List[RelationshipDetailResponse])
async def list_component_relationships(
    component_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Relationships where the component is source or target"""
    return await RelationshipService(db).list_by_component(component_id, current_user.id)


@router.post("/{board_id}/relationships", response_model=RelationshipResponse, status_code=status.HTTP_201_CREATED)
async def create_relationship(
    board_id: str,
    relationship_data: RelationshipCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await RelationshipService(db).create(board_id, current_user.id, relationship_data)


@router.get("/{board_id}/relationships", response_model=RelationshipListResponse)
async def list_relationships(
    board_id: str,
    type: Optional[RelationshipType] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await RelationshipService(db).list(
        board_id, current_user.id, relationship_type=type, page=page, limit=limit
    )


@router.get("/{board_id}/relationships/{relationship_id}", response_model=RelationshipDetailResponse)
async def get_relationship(
    board_id: str,
    relationship_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await RelationshipService(db).get(relationship_id, current_user.id)


@router.patch("/{board_id}/relationships/{relationship_id}", response_model=RelationshipDetailResponse)
async def update_relationship(
    board_id: str,
    relationship_id: str,
    relationship_data: RelationshipUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await RelationshipService(db).update(relationship_id, current_user.id, relationship_data)


@router.delete("/{board_id}/relationships/{relationship_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_relationship(
    board_id: str,
    relationship_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await RelationshipService(db).delete(relationship_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
