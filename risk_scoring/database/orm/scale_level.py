"""ScaleLevel ORM model.

One table holds every scale level. ``kind`` tells which scale a row belongs
to: the configuration's impact or probability scale, or a criterion's private
impact scale. Configuration-level rows carry ``risk_configuration_id``,
criterion rows carry ``criterion_id``; never both.
"""
from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import Optional
from decimal import Decimal
import uuid

from risk_scoring.database.base import Base


class ScaleLevel(Base):
    """Single labelled, scored level of an impact or probability scale."""
    __tablename__ = "scale_levels"
    __table_args__ = (
        CheckConstraint(
            "(risk_configuration_id IS NULL) <> (criterion_id IS NULL)",
            name="ck_scale_levels_single_owner",
        ),
        UniqueConstraint("risk_configuration_id", "kind", "order", name="uq_scale_levels_config_order"),
        UniqueConstraint("criterion_id", "order", name="uq_scale_levels_criterion_order"),
    )

    # Primary key
    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )

    # Fields
    kind: Mapped[str] = mapped_column(String(20))
    risk_configuration_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("risk_configurations.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    criterion_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("risk_criteria.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    label: Mapped[str] = mapped_column(String(255))
    score: Mapped[Decimal] = mapped_column(Numeric(5, 2))
    color: Mapped[Optional[str]] = mapped_column(String(7), nullable=True)
    order: Mapped[int] = mapped_column(Integer)

    # Relationships
    risk_configuration: Mapped[Optional["RiskConfiguration"]] = relationship(
        "RiskConfiguration",
        back_populates="scale_levels"
    )
    criterion: Mapped[Optional["Criterion"]] = relationship(
        "Criterion",
        back_populates="impacts"
    )

    @property
    def owner_id(self) -> Optional[str]:
        return self.risk_configuration_id or self.criterion_id

    def __repr__(self):
        return f"<ScaleLevel(id={self.id}, kind={self.kind}, label={self.label}, score={self.score})>"
