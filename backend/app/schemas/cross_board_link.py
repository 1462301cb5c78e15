from pydantic import Field
from typing import Optional, List
from datetime import datetime

from app.models.board import ReferenceModel
from app.models.cross_board_link import LinkType
from app.schemas.common import CamelModel
from app.schemas.board import BoardResponse
from app.schemas.component import ComponentResponse


class CrossBoardLinkCreate(CamelModel):
    source_component_id: str
    target_component_id: str
    description: Optional[str] = Field(None, max_length=1000)
    link_type: Optional[LinkType] = None


class CrossBoardLinkUpdate(CamelModel):
    description: Optional[str] = Field(None, max_length=1000)


class LinkedComponentResponse(ComponentResponse):
    board: Optional[BoardResponse] = None


class CrossBoardLinkResponse(CamelModel):
    id: str
    source_component_id: str
    target_component_id: str
    source_board_ref: ReferenceModel
    target_board_ref: ReferenceModel
    description: str = ""
    link_type: LinkType
    created_at: datetime
    updated_at: datetime


class CrossBoardLinkDetailResponse(CrossBoardLinkResponse):
    """Link with both endpoints and their boards"""
    source_component: Optional[LinkedComponentResponse] = None
    target_component: Optional[LinkedComponentResponse] = None


class CrossBoardLinkListResponse(CamelModel):
    data: List[CrossBoardLinkDetailResponse]
    total: int


class TransitionResponse(CamelModel):
    from_: ReferenceModel = Field(..., alias="from")
    to: List[ReferenceModel]
