"""
Cross-Board Link Service - directed links between components on different boards

A link is only allowed along the reference model transition table
(PRM -> BRM, ARM -> SRM, ...). The source and target models are
snapshotted on the link when it is created.
"""

from typing import Optional, List, Dict, Any

from sqlalchemy import select, delete, or_, and_, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload, aliased

from app.core.exceptions import (
    ComponentNotFoundError,
    CrossBoardLinkNotFoundError,
    DifferentBoardsRequiredError,
    InvalidTransitionError,
    DuplicateCrossBoardLinkError,
)
from app.core.logging_config import logger
from app.models.board import Board
from app.models.component import Component
from app.models.cross_board_link import CrossBoardLink, LinkType
from app.modules.auth.ownership import ensure_owner, ensure_owns_all
from app.modules.feaf.transitions import is_valid_transition, get_valid_targets, get_valid_transitions
from app.schemas.cross_board_link import CrossBoardLinkCreate, CrossBoardLinkUpdate, CrossBoardLinkResponse
from app.services.cache_service import cache_service, cache_payload
from app.utils.pagination import paginate, PaginationParams


WITH_ENDPOINT_BOARDS = (
    selectinload(CrossBoardLink.source_component).selectinload(Component.board),
    selectinload(CrossBoardLink.target_component).selectinload(Component.board),
)


class CrossBoardLinkService:
    """Create, query and maintain cross-board links"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _cache(self, link: CrossBoardLink) -> None:
        await cache_service.set_cross_board_link(link.id, cache_payload(CrossBoardLinkResponse, link))

    async def _component_with_board(self, component_id: str) -> Optional[Component]:
        result = await self.db.execute(
            select(Component)
            .where(Component.id == component_id)
            .options(selectinload(Component.board))
        )
        return result.scalar_one_or_none()

    def _visible_links(self, user_id: str, *columns, require_both: bool = False):
        """
        Select over links joined to both endpoint components, restricted to
        links with one (or, with require_both, both) endpoint boards owned
        by ``user_id``.
        """
        source = aliased(Component)
        target = aliased(Component)
        owned_boards = select(Board.id).where(Board.user_id == user_id)
        source_owned = source.board_id.in_(owned_boards)
        target_owned = target.board_id.in_(owned_boards)
        return (
            select(*(columns or (CrossBoardLink,)))
            .select_from(CrossBoardLink)
            .join(source, CrossBoardLink.source_component_id == source.id)
            .join(target, CrossBoardLink.target_component_id == target.id)
            .where(and_(source_owned, target_owned) if require_both else or_(source_owned, target_owned))
        )

    async def create(self, user_id: str, data: CrossBoardLinkCreate) -> CrossBoardLink:
        source = await self._component_with_board(data.source_component_id)
        if not source:
            raise ComponentNotFoundError(data.source_component_id, role="Source")
        target = await self._component_with_board(data.target_component_id)
        if not target:
            raise ComponentNotFoundError(data.target_component_id, role="Target")

        ensure_owns_all(
            (source.board.user_id, target.board.user_id), user_id,
            "You do not have permission to link components from these boards",
        )

        if source.board_id == target.board_id:
            raise DifferentBoardsRequiredError()

        source_model = source.board.reference_model
        target_model = target.board.reference_model
        if not is_valid_transition(source_model, target_model):
            raise InvalidTransitionError(
                source_model.value,
                target_model.value,
                [model.value for model in get_valid_targets(source_model)],
            )

        existing = await self.db.execute(
            select(CrossBoardLink.id).where(
                CrossBoardLink.source_component_id == source.id,
                CrossBoardLink.target_component_id == target.id,
            )
        )
        if existing.first() is not None:
            raise DuplicateCrossBoardLinkError()

        link = CrossBoardLink(
            source_component_id=source.id,
            target_component_id=target.id,
            source_board_ref=source_model,
            target_board_ref=target_model,
            description=data.description or "",
            link_type=data.link_type or LinkType.MANUAL,
        )
        self.db.add(link)
        await self.db.commit()

        await self._cache(link)
        logger.log_domain_event(
            "CrossBoardLink", "created", link.id,
            transition=f"{source_model.value}->{target_model.value}"
        )
        return link

    async def list(
        self,
        user_id: str,
        link_type: Optional[LinkType] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Dict[str, Any]:
        """Links with at least one endpoint on a board owned by the caller, newest first"""
        query = self._visible_links(user_id)
        count_query = self._visible_links(user_id, func.count(CrossBoardLink.id))
        if link_type:
            query = query.where(CrossBoardLink.link_type == link_type)
            count_query = count_query.where(CrossBoardLink.link_type == link_type)

        params = PaginationParams(page=page, limit=limit)
        items, total = await paginate(
            self.db,
            query.options(*WITH_ENDPOINT_BOARDS).order_by(CrossBoardLink.created_at.desc()),
            offset=params.offset,
            limit=params.size,
            count_query=count_query,
        )
        return {"data": items, "total": total}

    async def get(self, link_id: str, user_id: str) -> CrossBoardLink:
        """Both endpoint boards must belong to the caller"""
        result = await self.db.execute(
            select(CrossBoardLink)
            .where(CrossBoardLink.id == link_id)
            .options(*WITH_ENDPOINT_BOARDS)
        )
        link = result.scalar_one_or_none()

        if not link:
            raise CrossBoardLinkNotFoundError(link_id)

        ensure_owns_all(
            (link.source_component.board.user_id, link.target_component.board.user_id), user_id,
            "You do not have permission to access this cross-board link",
        )

        return link

    async def update(self, link_id: str, user_id: str, data: CrossBoardLinkUpdate) -> CrossBoardLink:
        """Only the description can change"""
        link = await self.get(link_id, user_id)

        if data.description is not None:
            link.description = data.description

        await self.db.commit()

        await self._cache(link)
        logger.log_domain_event("CrossBoardLink", "updated", link.id)
        return link

    async def delete(self, link_id: str, user_id: str) -> None:
        await self.get(link_id, user_id)

        await self.db.execute(delete(CrossBoardLink).where(CrossBoardLink.id == link_id))
        await self.db.commit()

        await cache_service.delete_cross_board_link(link_id)
        logger.log_domain_event("CrossBoardLink", "deleted", link_id)

    async def list_by_component(self, component_id: str, user_id: str) -> List[CrossBoardLink]:
        """Links touching the component whose both endpoint boards are the caller's"""
        component = await self._component_with_board(component_id)
        if not component:
            raise ComponentNotFoundError(component_id)

        ensure_owner(component.board.user_id, user_id, "You do not have permission to access this component")

        result = await self.db.execute(
            self._visible_links(user_id, require_both=True)
            .where(or_(
                CrossBoardLink.source_component_id == component_id,
                CrossBoardLink.target_component_id == component_id,
            ))
            .options(*WITH_ENDPOINT_BOARDS)
            .order_by(CrossBoardLink.created_at.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    def get_valid_transitions() -> List[Dict[str, Any]]:
        return get_valid_transitions()
