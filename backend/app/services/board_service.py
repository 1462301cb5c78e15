"""
Board Service - boards owned by a single user, bound to one reference model
"""

import csv
import io
from typing import Optional, List, Dict, Any, Union

from sqlalchemy import select, delete, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.config import settings
from app.core.exceptions import BoardNotFoundError, DuplicateBoardNameError, InvalidExportFormatError
from app.core.logging_config import logger
from app.models.board import Board, ReferenceModel
from app.models.component import Component
from app.models.relationship import Relationship
from app.models.cross_board_link import CrossBoardLink
from app.modules.auth.ownership import ensure_owner
from app.schemas.board import BoardCreate, BoardUpdate, BoardResponse
from app.schemas.component import ComponentResponse
from app.schemas.relationship import RelationshipResponse
from app.services.cache_service import cache_service


EXPORT_FORMATS = ("json", "csv")


def contains_pattern(term: str) -> str:
    """LIKE pattern matching ``term`` anywhere, with wildcards escaped"""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


async def get_owned_board(
    db: AsyncSession,
    board_id: str,
    user_id: str,
    forbidden_message: str,
    not_found_message: Optional[str] = None,
    options: tuple = (),
) -> Board:
    """Load a board, 404 if missing, then 403 unless ``user_id`` owns it"""
    result = await db.execute(
        select(Board).where(Board.id == board_id).options(*options)
    )
    board = result.scalar_one_or_none()

    if not board:
        raise BoardNotFoundError(board_id, message=not_found_message)

    ensure_owner(board.user_id, user_id, forbidden_message)
    return board


class BoardService:
    """CRUD, listing and export for boards"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _name_taken(self, user_id: str, name: str) -> bool:
        result = await self.db.execute(
            select(Board.id).where(Board.user_id == user_id, Board.name == name)
        )
        return result.first() is not None

    async def create(self, user_id: str, data: BoardCreate) -> Board:
        if await self._name_taken(user_id, data.name):
            raise DuplicateBoardNameError(data.name)

        board = Board(
            user_id=user_id,
            name=data.name,
            description=data.description,
            reference_model=data.reference_model,
            components=[],
            relationships=[],
        )
        self.db.add(board)
        try:
            await self.db.commit()
        except IntegrityError:
            # Concurrent create with the same name
            await self.db.rollback()
            raise DuplicateBoardNameError(data.name)

        logger.log_domain_event(
            "Board", "created", board.id,
            owner_id=user_id, reference_model=board.reference_model.value
        )
        return board

    async def list(
        self,
        user_id: str,
        search: Optional[str] = None,
        reference_model: Optional[ReferenceModel] = None,
        take: int = 10,
        skip: int = 0,
    ) -> Dict[str, Any]:
        """Owner's boards, newest activity first, each with its component count"""
        take = max(0, min(take, settings.MAX_PAGE_SIZE))
        skip = max(0, skip)

        filters = [Board.user_id == user_id]
        if search:
            pattern = contains_pattern(search)
            filters.append(or_(
                Board.name.ilike(pattern, escape="\\"),
                Board.description.ilike(pattern, escape="\\"),
            ))
        if reference_model:
            filters.append(Board.reference_model == reference_model)

        counts = (
            select(Component.board_id, func.count(Component.id).label("component_count"))
            .group_by(Component.board_id)
            .subquery()
        )
        query = (
            select(Board, func.coalesce(counts.c.component_count, 0))
            .outerjoin(counts, counts.c.board_id == Board.id)
            .where(*filters)
            .order_by(Board.updated_at.desc(), Board.id)
            .offset(skip)
            .limit(take)
        )
        rows = (await self.db.execute(query)).all()

        total = (await self.db.execute(
            select(func.count(Board.id)).where(*filters)
        )).scalar() or 0

        boards = [
            {**BoardResponse.model_validate(board).model_dump(), "component_count": count}
            for board, count in rows
        ]
        return {"boards": boards, "total": total, "take": take, "skip": skip}

    async def get(self, board_id: str, user_id: str) -> Board:
        """Board with its components and relationships"""
        return await get_owned_board(
            self.db,
            board_id,
            user_id,
            forbidden_message="You do not have access to this board",
            not_found_message="Board not found",
            options=(selectinload(Board.components), selectinload(Board.relationships)),
        )

    async def update(self, board_id: str, user_id: str, data: BoardUpdate) -> Board:
        board = await self.get(board_id, user_id)

        if data.name and data.name != board.name:
            if await self._name_taken(user_id, data.name):
                raise DuplicateBoardNameError(data.name)

        changes = data.model_dump(exclude_unset=True)
        if changes.get("name") is None:
            changes.pop("name", None)
        for field, value in changes.items():
            setattr(board, field, value)

        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateBoardNameError(data.name)

        logger.log_domain_event("Board", "updated", board.id, fields=sorted(changes))
        return board

    async def delete(self, board_id: str, user_id: str) -> BoardResponse:
        """Remove the board, its components and every edge touching them"""
        board = await self.get(board_id, user_id)
        snapshot = BoardResponse.model_validate(board)

        component_ids = [c.id for c in board.components]
        relationship_ids = [r.id for r in board.relationships]
        link_ids: List[str] = []
        if component_ids:
            link_ids = list((await self.db.execute(
                select(CrossBoardLink.id).where(or_(
                    CrossBoardLink.source_component_id.in_(component_ids),
                    CrossBoardLink.target_component_id.in_(component_ids),
                ))
            )).scalars().all())

        if link_ids:
            await self.db.execute(delete(CrossBoardLink).where(CrossBoardLink.id.in_(link_ids)))
        await self.db.execute(delete(Relationship).where(Relationship.board_id == board_id))
        await self.db.execute(delete(Component).where(Component.board_id == board_id))
        await self.db.execute(delete(Board).where(Board.id == board_id))
        await self.db.commit()

        for component_id in component_ids:
            await cache_service.delete_component(component_id)
        for relationship_id in relationship_ids:
            await cache_service.delete_relationship(relationship_id)
        for link_id in link_ids:
            await cache_service.delete_cross_board_link(link_id)

        logger.log_domain_event(
            "Board", "deleted", board_id,
            components=len(component_ids), cross_board_links=len(link_ids)
        )
        return snapshot

    async def export(self, board_id: str, user_id: str, export_format: str) -> Union[Dict[str, Any], str]:
        """``json`` -> dict, ``csv`` -> text body"""
        board = await self.get(board_id, user_id)

        if export_format == "json":
            return self._export_json(board)
        if export_format == "csv":
            return self._export_csv(board)

        raise InvalidExportFormatError(export_format)

    @staticmethod
    def _export_json(board: Board) -> Dict[str, Any]:
        return {
            "board": {
                "id": board.id,
                "name": board.name,
                "description": board.description,
                "referenceModel": board.reference_model.value,
                "createdAt": board.created_at.isoformat(),
            },
            "components": [
                ComponentResponse.model_validate(c).model_dump(mode="json", by_alias=True)
                for c in board.components
            ],
            "relationships": [
                RelationshipResponse.model_validate(r).model_dump(mode="json", by_alias=True)
                for r in board.relationships
            ],
        }

    @staticmethod
    def _export_csv(board: Board) -> str:
        output = io.StringIO()
        # Header row unquoted, every body cell quoted
        output.write("Component,Type,Description\n")
        writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
        for component in board.components:
            writer.writerow([component.name, component.type, component.description or ""])
        return output.getvalue()
