from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.core.config import settings
from app.core.database import get_db
from app.models.user import User
from app.modules.auth.dependencies import get_current_user
from app.schemas.component import (
    ComponentCreate,
    ComponentUpdate,
    ComponentResponse,
    ComponentListResponse,
    PositionUpdateItem,
)
from app.services.component_service import ComponentService

router = APIRouter()


@router.post("/{board_id}/components", response_model=ComponentResponse, status_code=status.HTTP_201_CREATED)
async def create_component(
    board_id: str,
    component_data: ComponentCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Add a component; its type must belong to the board's reference model"""
    return await ComponentService(db).create(board_id, current_user.id, component_data)


@router.get("/{board_id}/components", response_model=ComponentListResponse)
async def list_components(
    board_id: str,
    type: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await ComponentService(db).list(
        board_id, current_user.id, component_type=type, search=search, page=page, limit=limit
    )


@router.patch("/{board_id}/positions", response_model=List[ComponentResponse])
async def update_positions(
    board_id: str,
    updates: List[PositionUpdateItem],
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Bulk canvas repositioning; all ids must be components of this board"""
    return await ComponentService(db).bulk_update_positions(board_id, current_user.id, updates)


@router.get("/{board_id}/components/{component_id}", response_model=ComponentResponse)
async def get_component(
    board_id: str,
    component_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await ComponentService(db).get(component_id, current_user.id)


@router.patch("/{board_id}/components/{component_id}", response_model=ComponentResponse)
async def update_component(
    board_id: str,
    component_id: str,
    component_data: ComponentUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await ComponentService(db).update(component_id, current_user.id, component_data)


@router.delete("/{board_id}/components/{component_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_component(
    board_id: str,
    component_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await ComponentService(db).delete(component_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
