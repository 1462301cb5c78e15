# Services layer - business logic for the board API

from app.services.cache_service import CacheService, cache_service
from app.services.board_service import BoardService
from app.services.component_service import ComponentService
from app.services.relationship_service import RelationshipService
from app.services.cross_board_link_service import CrossBoardLinkService

__all__ = [
    "CacheService",
    "cache_service",
    "BoardService",
    "ComponentService",
    "RelationshipService",
    "CrossBoardLinkService",
]
