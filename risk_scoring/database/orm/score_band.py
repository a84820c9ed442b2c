"""ScoreBand ORM model."""
from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import Optional
import uuid

from risk_scoring.database.base import Base


class ScoreBand(Base):
    """Labelled ``[min, max]`` severity tier.

    Owned by either a risk configuration or a matrix configuration.
    """
    __tablename__ = "score_bands"
    __table_args__ = (
        CheckConstraint(
            "(risk_configuration_id IS NULL) <> (matrix_configuration_id IS NULL)",
            name="ck_score_bands_single_owner",
        ),
        CheckConstraint('"min" <= "max"', name="ck_score_bands_min_max"),
        UniqueConstraint("risk_configuration_id", "order", name="uq_score_bands_config_order"),
        UniqueConstraint("matrix_configuration_id", "order", name="uq_score_bands_matrix_order"),
    )

    # Primary key
    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )

    # Fields
    risk_configuration_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("risk_configurations.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    matrix_configuration_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("risk_matrix_configurations.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    label: Mapped[str] = mapped_column(String(255))
    min: Mapped[int] = mapped_column(Integer)
    max: Mapped[int] = mapped_column(Integer)
    color: Mapped[Optional[str]] = mapped_column(String(7), nullable=True)
    order: Mapped[int] = mapped_column(Integer)

    # Relationships
    risk_configuration: Mapped[Optional["RiskConfiguration"]] = relationship(
        "RiskConfiguration",
        back_populates="score_bands"
    )
    matrix_configuration: Mapped[Optional["RiskMatrixConfiguration"]] = relationship(
        "RiskMatrixConfiguration",
        back_populates="levels"
    )

    @property
    def owner_id(self) -> Optional[str]:
        return self.risk_configuration_id or self.matrix_configuration_id

    def __repr__(self):
        return f"<ScoreBand(id={self.id}, label={self.label}, min={self.min}, max={self.max})>"
