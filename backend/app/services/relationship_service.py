"""
Relationship Service - directed, typed edges between components of one board
"""

from typing import Optional, List, Dict, Any

from sqlalchemy import select, delete, or_, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import (
    ComponentNotFoundError,
    RelationshipNotFoundError,
    InvalidRelationshipPairError,
    SelfLoopError,
    DuplicateRelationshipError,
)
from app.core.logging_config import logger
from app.models.component import Component
from app.models.relationship import Relationship, RelationshipType
from app.modules.auth.ownership import ensure_owner
from app.schemas.relationship import RelationshipCreate, RelationshipUpdate, RelationshipResponse
from app.services.board_service import get_owned_board
from app.services.cache_service import cache_service, cache_payload
from app.utils.pagination import paginate, PaginationParams


WITH_ENDPOINTS = (
    selectinload(Relationship.source_component),
    selectinload(Relationship.target_component),
)


class RelationshipService:
    """CRUD for relationships inside a board"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _cache(self, relationship: Relationship) -> None:
        await cache_service.set_relationship(
            relationship.id, cache_payload(RelationshipResponse, relationship)
        )

    async def create(self, board_id: str, user_id: str, data: RelationshipCreate) -> Relationship:
        board = await get_owned_board(
            self.db, board_id, user_id,
            forbidden_message="You do not have permission to add relationships to this board",
        )

        source = await self.db.get(Component, data.source_component_id)
        if not source:
            raise ComponentNotFoundError(data.source_component_id, role="Source")
        target = await self.db.get(Component, data.target_component_id)
        if not target:
            raise ComponentNotFoundError(data.target_component_id, role="Target")

        if source.board_id != board.id or target.board_id != board.id:
            raise InvalidRelationshipPairError()

        if source.id == target.id:
            raise SelfLoopError()

        existing = await self.db.execute(
            select(Relationship.id).where(
                Relationship.source_component_id == source.id,
                Relationship.target_component_id == target.id,
            )
        )
        if existing.first() is not None:
            raise DuplicateRelationshipError()

        relationship = Relationship(
            board_id=board.id,
            source_component_id=source.id,
            target_component_id=target.id,
            type=data.type,
            description=data.description or "",
        )
        self.db.add(relationship)
        await self.db.commit()

        await self._cache(relationship)
        logger.log_domain_event(
            "Relationship", "created", relationship.id,
            board_id=board.id, relationship_type=relationship.type.value
        )
        return relationship

    async def list(
        self,
        board_id: str,
        user_id: str,
        relationship_type: Optional[RelationshipType] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Dict[str, Any]:
        """Board relationships with endpoint snapshots, newest first"""
        await get_owned_board(
            self.db, board_id, user_id,
            forbidden_message="You do not have permission to view relationships from this board",
        )

        filters = [Relationship.board_id == board_id]
        if relationship_type:
            filters.append(Relationship.type == relationship_type)

        params = PaginationParams(page=page, limit=limit)
        items, total = await paginate(
            self.db,
            select(Relationship)
            .where(*filters)
            .options(*WITH_ENDPOINTS)
            .order_by(Relationship.created_at.desc()),
            offset=params.offset,
            limit=params.size,
            count_query=select(func.count(Relationship.id)).where(*filters),
        )
        return {"data": items, "total": total}

    async def get(self, relationship_id: str, user_id: str) -> Relationship:
        result = await self.db.execute(
            select(Relationship)
            .where(Relationship.id == relationship_id)
            .options(selectinload(Relationship.board), *WITH_ENDPOINTS)
        )
        relationship = result.scalar_one_or_none()

        if not relationship:
            raise RelationshipNotFoundError(relationship_id)

        ensure_owner(
            relationship.board.user_id, user_id,
            "You do not have permission to access this relationship",
        )
        return relationship

    async def update(self, relationship_id: str, user_id: str, data: RelationshipUpdate) -> Relationship:
        """Only type and description can change"""
        relationship = await self.get(relationship_id, user_id)

        if data.type is not None:
            relationship.type = data.type
        if data.description is not None:
            relationship.description = data.description

        await self.db.commit()

        await self._cache(relationship)
        logger.log_domain_event("Relationship", "updated", relationship.id, board_id=relationship.board_id)
        return relationship

    async def delete(self, relationship_id: str, user_id: str) -> None:
        relationship = await self.get(relationship_id, user_id)

        await self.db.execute(delete(Relationship).where(Relationship.id == relationship_id))
        await self.db.commit()

        await cache_service.delete_relationship(relationship_id)
        logger.log_domain_event("Relationship", "deleted", relationship_id, board_id=relationship.board_id)

    async def list_by_component(self, component_id: str, user_id: str) -> List[Relationship]:
        """Relationships where the component is either endpoint"""
        result = await self.db.execute(
            select(Component)
            .where(Component.id == component_id)
            .options(selectinload(Component.board))
        )
        component = result.scalar_one_or_none()

        if not component:
            raise ComponentNotFoundError(component_id)

        ensure_owner(component.board.user_id, user_id, "You do not have permission to access this component")

        result = await self.db.execute(
            select(Relationship)
            .where(or_(
                Relationship.source_component_id == component_id,
                Relationship.target_component_id == component_id,
            ))
            .options(*WITH_ENDPOINTS)
            .order_by(Relationship.created_at.desc())
        )
        return list(result.scalars().all())
