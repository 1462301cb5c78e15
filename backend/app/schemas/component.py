from pydantic import Field
from typing import Optional, Dict, Any, List
from datetime import datetime

from app.schemas.common import CamelModel


class Position(CamelModel):
    """Canvas position; missing coordinates are stored as 0"""
    x: Optional[float] = None
    y: Optional[float] = None
    grid_position: Optional[str] = Field(None, max_length=50)


class ComponentCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    type: str = Field(..., min_length=1, max_length=50)
    properties: Optional[Dict[str, Any]] = None
    position: Optional[Position] = None


class ComponentUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    type: Optional[str] = Field(None, min_length=1, max_length=50)
    properties: Optional[Dict[str, Any]] = None
    position: Optional[Position] = None


class ComponentResponse(CamelModel):
    id: str
    board_id: str
    name: str
    description: str = ""
    type: str
    properties: Dict[str, Any] = {}
    position_x: float = 0
    position_y: float = 0
    grid_position: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ComponentListResponse(CamelModel):
    data: List[ComponentResponse]
    total: int


class PositionUpdateItem(CamelModel):
    id: str
    position: Position = Position()
