# Re-export all models for convenient imports
from app.models.user import User
from app.models.board import Board, ReferenceModel
from app.models.component import Component
from app.models.relationship import Relationship, RelationshipType
from app.models.cross_board_link import CrossBoardLink, LinkType

__all__ = [
    # User
    "User",
    # Board
    "Board",
    "ReferenceModel",
    "Component",
    "Relationship",
    "RelationshipType",
    # Cross-board
    "CrossBoardLink",
    "LinkType",
]
