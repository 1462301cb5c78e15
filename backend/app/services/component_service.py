"""
Component Service - elements placed on a board

Component types are validated against the board's reference model; the
database is the source of truth and Redis mirrors each component for
CACHE_TTL_COMPONENT seconds.
"""

from typing import Optional, List, Dict, Any

from sqlalchemy import select, delete, or_, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import (
    ComponentNotFoundError,
    InvalidComponentTypeError,
    UnknownComponentsError,
)
from app.core.logging_config import logger
from app.models.board import Board
from app.models.component import Component
from app.models.relationship import Relationship
from app.models.cross_board_link import CrossBoardLink
from app.modules.auth.ownership import ensure_owner
from app.modules.feaf.reference_models import get_component_types
from app.schemas.component import ComponentCreate, ComponentUpdate, ComponentResponse, PositionUpdateItem
from app.services.board_service import get_owned_board, contains_pattern
from app.services.cache_service import cache_service, cache_payload
from app.utils.pagination import paginate, PaginationParams


def validate_component_type(board: Board, component_type: str) -> None:
    valid_types = get_component_types(board.reference_model)
    if component_type not in valid_types:
        raise InvalidComponentTypeError(component_type, board.reference_model.value, valid_types)


class ComponentService:
    """CRUD and bulk repositioning for components"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _cache(self, component: Component) -> None:
        await cache_service.set_component(component.id, cache_payload(ComponentResponse, component))

    async def create(self, board_id: str, user_id: str, data: ComponentCreate) -> Component:
        board = await get_owned_board(
            self.db, board_id, user_id,
            forbidden_message="You do not have permission to add components to this board",
        )
        validate_component_type(board, data.type)

        position = data.position
        component = Component(
            board_id=board.id,
            name=data.name,
            description=data.description or "",
            type=data.type,
            properties=data.properties or {},
            position_x=(position.x if position and position.x is not None else 0),
            position_y=(position.y if position and position.y is not None else 0),
            grid_position=position.grid_position if position else None,
        )
        self.db.add(component)
        await self.db.commit()

        await self._cache(component)
        logger.log_domain_event("Component", "created", component.id, board_id=board.id, type=component.type)
        return component

    async def list(
        self,
        board_id: str,
        user_id: str,
        component_type: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Dict[str, Any]:
        """Board components, newest first"""
        await get_owned_board(
            self.db, board_id, user_id,
            forbidden_message="You do not have permission to view components from this board",
        )

        filters = [Component.board_id == board_id]
        if component_type:
            filters.append(Component.type == component_type)
        if search:
            pattern = contains_pattern(search)
            filters.append(or_(
                Component.name.ilike(pattern, escape="\\"),
                Component.description.ilike(pattern, escape="\\"),
            ))

        params = PaginationParams(page=page, limit=limit)
        items, total = await paginate(
            self.db,
            select(Component).where(*filters).order_by(Component.created_at.desc()),
            offset=params.offset,
            limit=params.size,
            count_query=select(func.count(Component.id)).where(*filters),
        )
        return {"data": items, "total": total}

    async def get(self, component_id: str, user_id: str) -> Component:
        result = await self.db.execute(
            select(Component)
            .where(Component.id == component_id)
            .options(selectinload(Component.board))
        )
        component = result.scalar_one_or_none()

        if not component:
            raise ComponentNotFoundError(component_id)

        ensure_owner(component.board.user_id, user_id, "You do not have permission to access this component")
        return component

    async def update(self, component_id: str, user_id: str, data: ComponentUpdate) -> Component:
        """Write only the supplied fields; a type change is re-validated"""
        component = await self.get(component_id, user_id)

        if data.type is not None and data.type != component.type:
            board = await self.db.get(Board, component.board_id, populate_existing=True)
            validate_component_type(board, data.type)

        for field in ("name", "description", "type", "properties"):
            value = getattr(data, field)
            if value is not None:
                setattr(component, field, value)

        if data.position is not None:
            if data.position.x is not None:
                component.position_x = data.position.x
            if data.position.y is not None:
                component.position_y = data.position.y
            if data.position.grid_position is not None:
                component.grid_position = data.position.grid_position

        await self.db.commit()

        await self._cache(component)
        logger.log_domain_event("Component", "updated", component.id, board_id=component.board_id)
        return component

    async def delete(self, component_id: str, user_id: str) -> None:
        """Remove the component with its relationships and cross-board links"""
        component = await self.get(component_id, user_id)

        touches_relationship = or_(
            Relationship.source_component_id == component_id,
            Relationship.target_component_id == component_id,
        )
        touches_link = or_(
            CrossBoardLink.source_component_id == component_id,
            CrossBoardLink.target_component_id == component_id,
        )
        relationship_ids = list((await self.db.execute(
            select(Relationship.id).where(touches_relationship)
        )).scalars().all())
        link_ids = list((await self.db.execute(
            select(CrossBoardLink.id).where(touches_link)
        )).scalars().all())

        await self.db.execute(delete(CrossBoardLink).where(touches_link))
        await self.db.execute(delete(Relationship).where(touches_relationship))
        await self.db.execute(delete(Component).where(Component.id == component_id))
        await self.db.commit()

        await cache_service.delete_component(component_id)
        for relationship_id in relationship_ids:
            await cache_service.delete_relationship(relationship_id)
        for link_id in link_ids:
            await cache_service.delete_cross_board_link(link_id)

        logger.log_domain_event("Component", "deleted", component_id, board_id=component.board_id)

    async def bulk_update_positions(
        self,
        board_id: str,
        user_id: str,
        updates: List[PositionUpdateItem],
    ) -> List[Component]:
        """
        Overwrite canvas positions for several components of one board.

        Every id must belong to ``board_id``; otherwise nothing is written and
        UnknownComponentsError lists the offending ids. Missing coordinates
        become 0.
        """
        await get_owned_board(
            self.db, board_id, user_id,
            forbidden_message="You do not have permission to update this board",
        )
        if not updates:
            return []

        requested = list(dict.fromkeys(item.id for item in updates))
        result = await self.db.execute(
            select(Component).where(Component.board_id == board_id, Component.id.in_(requested))
        )
        found = {component.id: component for component in result.scalars().all()}

        unknown = [component_id for component_id in requested if component_id not in found]
        if unknown:
            raise UnknownComponentsError(board_id, unknown)

        for item in updates:
            component = found[item.id]
            component.position_x = item.position.x if item.position.x is not None else 0
            component.position_y = item.position.y if item.position.y is not None else 0

        await self.db.commit()

        for component in found.values():
            await self._cache(component)

        logger.log_domain_event("Board", "positions_updated", board_id, components=len(found))
        return [found[item.id] for item in updates]
