from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from app.core.config import settings
from app.core.database import get_db
from app.models.board import ReferenceModel
from app.models.user import User
from app.modules.auth.dependencies import get_current_user
from app.schemas.board import (
    BoardCreate,
    BoardUpdate,
    BoardResponse,
    BoardListResponse,
    BoardDetailResponse,
)
from app.services.board_service import BoardService

router = APIRouter()


@router.post("", response_model=BoardDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_board(
    board_data: BoardCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Create a board bound to one reference model"""
    return await BoardService(db).create(current_user.id, board_data)


@router.get("", response_model=BoardListResponse)
async def list_boards(
    search: Optional[str] = Query(None, description="Case-insensitive match on name or description"),
    reference_model: Optional[ReferenceModel] = Query(None, alias="referenceModel"),
    take: int = Query(settings.DEFAULT_BOARD_TAKE, ge=0, description=f"Page size, capped at {settings.MAX_PAGE_SIZE}"),
    skip: int = Query(0, ge=0),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await BoardService(db).list(
        current_user.id,
        search=search,
        reference_model=reference_model,
        take=take,
        skip=skip,
    )


@router.get("/{board_id}", response_model=BoardDetailResponse)
async def get_board(
    board_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await BoardService(db).get(board_id, current_user.id)


@router.patch("/{board_id}", response_model=BoardResponse)
async def update_board(
    board_id: str,
    board_data: BoardUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await BoardService(db).update(board_id, current_user.id, board_data)


@router.delete("/{board_id}", response_model=BoardResponse)
async def delete_board(
    board_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete a board with its components, relationships and cross-board links"""
    return await BoardService(db).delete(board_id, current_user.id)


@router.get("/{board_id}/export")
async def export_board(
    board_id: str,
    format: str = Query("json", description="json or csv"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    exported = await BoardService(db).export(board_id, current_user.id, format)
    if format == "csv":
        return Response(
            content=exported,
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="board-{board_id}.csv"'},
        )
    return exported
