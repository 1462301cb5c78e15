from sqlalchemy import Column, DateTime, Enum as SQLEnum, Text, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid
from app.models.board import ReferenceModel


class LinkType(str, enum.Enum):
    """How a cross-board link came to exist"""
    MANUAL = "manual"
    AUTOMATED = "automated"
    INFERRED = "inferred"


class CrossBoardLink(Base):
    """
    Directed link between components on two different boards.

    source_board_ref / target_board_ref snapshot the boards' reference models
    at creation and are never re-derived.
    """
    __tablename__ = "cross_board_links"

    __table_args__ = (
        UniqueConstraint('source_component_id', 'target_component_id', name='uq_cross_board_links_pair'),
        Index('ix_cross_board_links_created', 'created_at'),
        Index('ix_cross_board_links_link_type', 'link_type'),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    source_component_id = Column(
        GUID, ForeignKey("components.id", ondelete="CASCADE"), nullable=False, index=True
    )
    target_component_id = Column(
        GUID, ForeignKey("components.id", ondelete="CASCADE"), nullable=False, index=True
    )

    source_board_ref = Column(SQLEnum(ReferenceModel), nullable=False)
    target_board_ref = Column(SQLEnum(ReferenceModel), nullable=False)
    description = Column(Text, default="", nullable=False)
    link_type = Column(
        SQLEnum(LinkType, values_callable=lambda e: [m.value for m in e]),
        default=LinkType.MANUAL,
        nullable=False,
    )

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    source_component = relationship("Component", foreign_keys=[source_component_id])
    target_component = relationship("Component", foreign_keys=[target_component_id])

    def __repr__(self):
        return f"<CrossBoardLink {self.source_board_ref}->{self.target_board_ref}>"
