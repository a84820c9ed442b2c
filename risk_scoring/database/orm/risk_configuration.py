"""RiskConfiguration ORM model."""
from sqlalchemy import Boolean, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import List
from datetime import datetime
import uuid

from risk_scoring.database.base import Base
from risk_scoring.models.enums import ScaleKind


class RiskConfiguration(Base):
    """Root of a configuration tree, scoped to one organization."""
    __tablename__ = "risk_configurations"
    __table_args__ = (
        Index("idx_risk_configurations_org_name", "organization_id", "name"),
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
    impact_scale_max: Mapped[int] = mapped_column(Integer)
    probability_scale_max: Mapped[int] = mapped_column(Integer)
    calculation_method: Mapped[str] = mapped_column(String(10), default="average")
    use_criteria: Mapped[bool] = mapped_column(Boolean, default=False)
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
    scale_levels: Mapped[List["ScaleLevel"]] = relationship(
        "ScaleLevel",
        back_populates="risk_configuration",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ScaleLevel.order",
    )
    criteria: Mapped[List["Criterion"]] = relationship(
        "Criterion",
        back_populates="risk_configuration",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Criterion.order",
    )
    score_bands: Mapped[List["ScoreBand"]] = relationship(
        "ScoreBand",
        back_populates="risk_configuration",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ScoreBand.order",
    )

    @property
    def impacts(self) -> List["ScaleLevel"]:
        """Impact scale, ordered by ``order``."""
        return self._levels_of(ScaleKind.IMPACT)

    @property
    def probabilities(self) -> List["ScaleLevel"]:
        """Probability scale, ordered by ``order``."""
        return self._levels_of(ScaleKind.PROBABILITY)

    @property
    def max_score(self) -> int:
        return self.impact_scale_max * self.probability_scale_max

    def _levels_of(self, kind: ScaleKind) -> List["ScaleLevel"]:
        levels = [level for level in self.scale_levels if level.kind == kind.value]
        return sorted(levels, key=lambda level: level.order)

    def __repr__(self):
        return (
            f"<RiskConfiguration(id={self.id}, organization_id={self.organization_id}, "
            f"name={self.name}, method={self.calculation_method})>"
        )
