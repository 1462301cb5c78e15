from pydantic import Field
from typing import Optional, List
from datetime import datetime

from app.models.board import ReferenceModel
from app.schemas.common import CamelModel
from app.schemas.component import ComponentResponse
from app.schemas.relationship import RelationshipResponse


class BoardCreate(CamelModel):
    name: str = Field(..., min_length=3, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    reference_model: ReferenceModel


class BoardUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=3, max_length=100)
    description: Optional[str] = Field(None, max_length=500)


class BoardResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    reference_model: ReferenceModel
    user_id: str
    created_at: datetime
    updated_at: datetime


class BoardListItem(BoardResponse):
    component_count: int = 0


class BoardListResponse(CamelModel):
    boards: List[BoardListItem]
    total: int
    take: int
    skip: int


class BoardDetailResponse(BoardResponse):
    """Board with its components (and relationships on read)"""
    components: List[ComponentResponse] = []
    relationships: List[RelationshipResponse] = []
