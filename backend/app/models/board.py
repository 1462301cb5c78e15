from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, Text, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid


class ReferenceModel(str, enum.Enum):
    """The six FEAF reference models"""
    PRM = "PRM"
    BRM = "BRM"
    DRM = "DRM"
    ARM = "ARM"
    IRM = "IRM"
    SRM = "SRM"


class Board(Base):
    """A named canvas bound to exactly one reference model"""
    __tablename__ = "boards"

    __table_args__ = (
        UniqueConstraint('user_id', 'name', name='uq_boards_user_name'),
        Index('ix_boards_user_updated', 'user_id', 'updated_at'),  # Listing order
        Index('ix_boards_reference_model', 'reference_model'),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    reference_model = Column(SQLEnum(ReferenceModel), nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="boards")
    components = relationship(
        "Component",
        back_populates="board",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Component.created_at",
    )
    relationships = relationship(
        "Relationship",
        back_populates="board",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Relationship.created_at",
    )

    def __repr__(self):
        return f"<Board {self.name} ({self.reference_model})>"
