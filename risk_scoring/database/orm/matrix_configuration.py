"""RiskMatrixConfiguration ORM model."""
from sqlalchemy import Boolean, DateTime, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import List, Optional
from datetime import datetime
import uuid

from risk_scoring.database.base import Base


class RiskMatrixConfiguration(Base):
    """N×M matrix configuration with auto-partitioned severity levels."""
    __tablename__ = "risk_matrix_configurations"
    __table_args__ = (
        # At most one active matrix per organization
        Index(
            "uq_risk_matrix_active_org",
            "organization_id",
            unique=True,
            sqlite_where=text("is_active = 1"),
            postgresql_where=text("is_active"),
        ),
    )

    # Primary key
    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )

    # Fields
    organization_id: Mapped[int] = mapped_column(Integer, index=True)
    name: Mapped[str] = mapped_column(String(255))
    rows: Mapped[int] = mapped_column(Integer)
    columns: Mapped[int] = mapped_column(Integer)
    number_of_levels: Mapped[int] = mapped_column(Integer)
    is_active: Mapped[bool] = mapped_column(Boolean, default=False)
    is_custom: Mapped[bool] = mapped_column(Boolean, default=False)
    preset_used: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow
    )

    # Relationships
    levels: Mapped[List["ScoreBand"]] = relationship(
        "ScoreBand",
        back_populates="matrix_configuration",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ScoreBand.order",
    )

    @property
    def max_score(self) -> int:
        return self.rows * self.columns

    def __repr__(self):
        return (
            f"<RiskMatrixConfiguration(id={self.id}, organization_id={self.organization_id}, "
            f"{self.rows}x{self.columns}, active={self.is_active})>"
        )
