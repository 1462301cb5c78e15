from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.core.config import settings
from app.core.database import get_db
from app.models.cross_board_link import LinkType
from app.models.user import User
from app.modules.auth.dependencies import get_current_user
from app.schemas.cross_board_link import (
    CrossBoardLinkCreate,
    CrossBoardLinkUpdate,
    CrossBoardLinkResponse,
    CrossBoardLinkDetailResponse,
    CrossBoardLinkListResponse,
    TransitionResponse,
)
from app.services.cross_board_link_service import CrossBoardLinkService

router = APIRouter()


@router.post("", response_model=CrossBoardLinkResponse, status_code=status.HTTP_201_CREATED)
async def create_cross_board_link(
    link_data: CrossBoardLinkCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Link two components on different boards along an allowed model transition"""
    return await CrossBoardLinkService(db).create(current_user.id, link_data)


@router.get("", response_model=CrossBoardLinkListResponse)
async def list_cross_board_links(
    link_type: Optional[LinkType] = Query(None, alias="linkType"),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_SIZE),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await CrossBoardLinkService(db).list(
        current_user.id, link_type=link_type, page=page, limit=limit
    )


@router.get("/valid-transitions", response_model=List[TransitionResponse])
async def get_valid_transitions(
    current_user: User = Depends(get_current_user),
):
    """The reference model transition table"""
    return CrossBoardLinkService.get_valid_transitions()


@router.get("/component/{component_id}", response_model=List[CrossBoardLinkDetailResponse])
async def list_component_links(
    component_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await CrossBoardLinkService(db).list_by_component(component_id, current_user.id)


@router.get("/{link_id}", response_model=CrossBoardLinkDetailResponse)
async def get_cross_board_link(
    link_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await CrossBoardLinkService(db).get(link_id, current_user.id)


@router.patch("/{link_id}", response_model=CrossBoardLinkDetailResponse)
async def update_cross_board_link(
    link_id: str,
    link_data: CrossBoardLinkUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await CrossBoardLinkService(db).update(link_id, current_user.id, link_data)


@router.delete("/{link_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cross_board_link(
    link_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    await CrossBoardLinkService(db).delete(link_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
