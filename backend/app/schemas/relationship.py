from pydantic import Field
from typing import Optional, List
from datetime import datetime

from app.models.relationship import RelationshipType
from app.schemas.common import CamelModel
from app.schemas.component import ComponentResponse


class RelationshipCreate(CamelModel):
    source_component_id: str
    target_component_id: str
    type: RelationshipType
    description: Optional[str] = Field(None, max_length=1000)


class RelationshipUpdate(CamelModel):
    type: Optional[RelationshipType] = None
    description: Optional[str] = Field(None, max_length=1000)


class RelationshipResponse(CamelModel):
    id: str
    board_id: str
    source_component_id: str
    target_component_id: str
    type: RelationshipType
    description: str = ""
    created_at: datetime
    updated_at: datetime


class RelationshipDetailResponse(RelationshipResponse):
    """Relationship with endpoint component snapshots"""
    source_component: Optional[ComponentResponse] = None
    target_component: Optional[ComponentResponse] = None


class RelationshipListResponse(CamelModel):
    data: List[RelationshipDetailResponse]
    total: int
