"""Criterion ORM model."""
from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import List, Optional
import uuid

from risk_scoring.database.base import Base


class Criterion(Base):
    """Named sub-dimension owning a private impact scale."""
    __tablename__ = "risk_criteria"

    # Primary key
    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )

    # Fields
    risk_configuration_id: Mapped[str] = mapped_column(
        ForeignKey("risk_configurations.id", ondelete="CASCADE"),
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    order: Mapped[int] = mapped_column(Integer)

    # Relationships
    risk_configuration: Mapped["RiskConfiguration"] = relationship(
        "RiskConfiguration",
        back_populates="criteria"
    )
    impacts: Mapped[List["ScaleLevel"]] = relationship(
        "ScaleLevel",
        back_populates="criterion",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ScaleLevel.order",
    )

    def __repr__(self):
        return f"<Criterion(id={self.id}, name={self.name}, order={self.order})>"
