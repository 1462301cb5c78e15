from sqlalchemy import Column, DateTime, Enum as SQLEnum, Text, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid


class RelationshipType(str, enum.Enum):
    """Kinds of directed edge between two components on one board"""
    DEPENDS_ON = "DEPENDS_ON"
    COMMUNICATES_WITH = "COMMUNICATES_WITH"
    CONTAINS = "CONTAINS"
    SUPPORTS = "SUPPORTS"
    IMPLEMENTS = "IMPLEMENTS"


class Relationship(Base):
    """Directed edge between two components of the same board"""
    __tablename__ = "relationships"

    __table_args__ = (
        UniqueConstraint('source_component_id', 'target_component_id', name='uq_relationships_pair'),
        Index('ix_relationships_board_created', 'board_id', 'created_at'),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    board_id = Column(GUID, ForeignKey("boards.id", ondelete="CASCADE"), nullable=False, index=True)
    source_component_id = Column(
        GUID, ForeignKey("components.id", ondelete="CASCADE"), nullable=False, index=True
    )
    target_component_id = Column(
        GUID, ForeignKey("components.id", ondelete="CASCADE"), nullable=False, index=True
    )

    type = Column(SQLEnum(RelationshipType), nullable=False)
    description = Column(Text, default="", nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    board = relationship("Board", back_populates="relationships")
    source_component = relationship("Component", foreign_keys=[source_component_id])
    target_component = relationship("Component", foreign_keys=[target_component_id])

    def __repr__(self):
        return f"<Relationship {self.source_component_id} -{self.type}-> {self.target_component_id}>"
