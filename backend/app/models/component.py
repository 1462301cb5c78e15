from sqlalchemy import Column, String, DateTime, Text, ForeignKey, JSON, Float, Index
from sqlalchemy.orm import relationship
from datetime import datetime

from app.core.database import Base
from app.core.types import GUID, generate_uuid


class Component(Base):
    """
    An element placed on a board.

    ``type`` must be one of the board's reference model component types; the
    check happens in ComponentService on create and on type change.
    """
    __tablename__ = "components"

    __table_args__ = (
        Index('ix_components_board_created', 'board_id', 'created_at'),
        Index('ix_components_type', 'type'),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    board_id = Column(GUID, ForeignKey("boards.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    description = Column(Text, default="", nullable=False)
    type = Column(String(50), nullable=False)
    properties = Column(JSON, default=dict, nullable=False)

    # Canvas placement
    position_x = Column(Float, default=0, nullable=False)
    position_y = Column(Float, default=0, nullable=False)
    grid_position = Column(String(50), nullable=True)  # Layout hint, e.g. 'prm'

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    board = relationship("Board", back_populates="components")

    def __repr__(self):
        return f"<Component {self.name} [{self.type}]>"
