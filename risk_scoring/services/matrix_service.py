"""Matrix configuration lifecycle.

Each organization may have many matrix configurations but at most one active
one. Activation clears every other active flag of the organization and sets
the new one inside a single transaction; the partial unique index on
``(organization_id) WHERE is_active`` rejects anything that slips past.
"""
from typing import Optional, Sequence

import structlog
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from risk_scoring.config import Settings, get_settings
from risk_scoring.database.connection import transaction
from risk_scoring.database.orm import RiskMatrixConfiguration, ScoreBand
from risk_scoring.exceptions import ConfigurationPersistenceError, ConfigurationValidationError
from risk_scoring.models import RiskMatrixCreate, RiskMatrixUpdate, ScoreBandCreate
from risk_scoring.scoring.classifier import check_band_contiguity, classify_band
from risk_scoring.scoring.matrix_levels import MatrixLevelGenerator

logger = structlog.get_logger(__name__)


class MatrixService:
    """Create, resize, activate and score matrix configurations."""

    def __init__(
        self,
        generator: Optional[MatrixLevelGenerator] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.generator = generator or MatrixLevelGenerator()
        self.settings = settings or get_settings()

    # ── queries ───────────────────────────────────────────────────────────

    def list_matrices(self, session: Session, organization_id: int) -> list[RiskMatrixConfiguration]:
        stmt = (
            select(RiskMatrixConfiguration)
            .where(RiskMatrixConfiguration.organization_id == organization_id)
            .order_by(RiskMatrixConfiguration.created_at, RiskMatrixConfiguration.id)
        )
        return list(session.scalars(stmt))

    def get_matrix(
        self, session: Session, organization_id: int, matrix_id: str
    ) -> Optional[RiskMatrixConfiguration]:
        """Matrix by id, only if it belongs to the organization."""
        matrix = session.get(RiskMatrixConfiguration, matrix_id)
        if matrix is None or matrix.organization_id != organization_id:
            return None
        return matrix

    def get_active_matrix(
        self, session: Session, organization_id: int
    ) -> Optional[RiskMatrixConfiguration]:
        stmt = select(RiskMatrixConfiguration).where(
            RiskMatrixConfiguration.organization_id == organization_id,
            RiskMatrixConfiguration.is_active.is_(True),
        )
        return session.scalars(stmt).first()

    # ── writes ────────────────────────────────────────────────────────────

    def create_matrix(
        self, session: Session, organization_id: int, payload: RiskMatrixCreate
    ) -> RiskMatrixConfiguration:
        """Create a matrix, generating its levels unless they are supplied."""
        self.check_dimensions(payload.rows, payload.columns)
        levels = self._resolve_levels(
            payload.rows, payload.columns, payload.number_of_levels, payload.levels
        )

        try:
            with transaction(session):
                if payload.is_active:
                    self._deactivate_others(session, organization_id)
                matrix = RiskMatrixConfiguration(
                    organization_id=organization_id,
                    name=payload.name.strip(),
                    rows=payload.rows,
                    columns=payload.columns,
                    number_of_levels=len(levels),
                    is_active=payload.is_active,
                    is_custom=payload.is_custom,
                    preset_used=payload.preset_used.value if payload.preset_used else None,
                )
                session.add(matrix)
                self._replace_levels(session, matrix, levels)
        except SQLAlchemyError as e:
            raise ConfigurationPersistenceError(
                "Failed to persist risk matrix configuration", details=str(e)
            ) from e

        logger.info(
            "risk_matrix_created",
            matrix_id=matrix.id,
            organization_id=organization_id,
            rows=matrix.rows,
            columns=matrix.columns,
            number_of_levels=matrix.number_of_levels,
            is_active=matrix.is_active,
        )
        return matrix

    def update_matrix(
        self, session: Session, matrix: RiskMatrixConfiguration, payload: RiskMatrixUpdate
    ) -> RiskMatrixConfiguration:
        """Rename, resize or relabel a matrix.

        A change of dimensions or level count regenerates the levels,
        keeping the labels and colors of the levels that survive. Explicit
        ``levels`` replace them instead and must partition the score range.
        """
        rows = payload.rows if payload.rows is not None else matrix.rows
        columns = payload.columns if payload.columns is not None else matrix.columns
        self.check_dimensions(rows, columns)

        resized = (rows, columns) != (matrix.rows, matrix.columns)
        number_of_levels = payload.number_of_levels or matrix.number_of_levels
        levels: Optional[list[ScoreBandCreate]] = None
        if payload.levels is not None:
            expected = payload.number_of_levels if payload.number_of_levels is not None else len(payload.levels)
            levels = self._resolve_levels(rows, columns, expected, payload.levels)
        elif resized or number_of_levels != matrix.number_of_levels:
            current = sorted(matrix.levels, key=lambda level: level.order)
            levels = self.generator.generate(rows, columns, number_of_levels, current)

        try:
            with transaction(session):
                if payload.name is not None:
                    matrix.name = payload.name.strip()
                if resized:
                    matrix.rows, matrix.columns = rows, columns
                    matrix.is_custom = True
                if levels is not None:
                    matrix.number_of_levels = len(levels)
                    self._replace_levels(session, matrix, levels)
                if payload.is_active is True and not matrix.is_active:
                    self._deactivate_others(session, matrix.organization_id)
                    matrix.is_active = True
                elif payload.is_active is False:
                    matrix.is_active = False
        except SQLAlchemyError as e:
            raise ConfigurationPersistenceError(
                "Failed to update risk matrix configuration", details=str(e)
            ) from e

        logger.info(
            "risk_matrix_updated",
            matrix_id=matrix.id,
            rows=matrix.rows,
            columns=matrix.columns,
            number_of_levels=matrix.number_of_levels,
        )
        return matrix

    def activate_matrix(self, session: Session, matrix: RiskMatrixConfiguration) -> RiskMatrixConfiguration:
        """Make ``matrix`` the organization's only active matrix."""
        try:
            with transaction(session):
                self._deactivate_others(session, matrix.organization_id)
                matrix.is_active = True
        except SQLAlchemyError as e:
            raise ConfigurationPersistenceError(
                "Failed to activate risk matrix configuration", details=str(e)
            ) from e
        logger.info("risk_matrix_activated", matrix_id=matrix.id, organization_id=matrix.organization_id)
        return matrix

    def delete_matrix(self, session: Session, matrix: RiskMatrixConfiguration) -> None:
        matrix_id = matrix.id
        try:
            with transaction(session):
                session.delete(matrix)
        except SQLAlchemyError as e:
            raise ConfigurationPersistenceError(
                "Failed to delete risk matrix configuration", details=str(e)
            ) from e
        logger.info("risk_matrix_deleted", matrix_id=matrix_id)

    # ── scoring ───────────────────────────────────────────────────────────

    def score_cell(
        self, matrix: RiskMatrixConfiguration, likelihood: int, impact: int
    ) -> tuple[int, Optional[ScoreBand]]:
        """Score of the ``(likelihood, impact)`` cell and the level it falls in."""
        errors = []
        if not 1 <= likelihood <= matrix.rows:
            errors.append(f"likelihood must be between 1 and {matrix.rows}, got {likelihood}")
        if not 1 <= impact <= matrix.columns:
            errors.append(f"impact must be between 1 and {matrix.columns}, got {impact}")
        if errors:
            raise ConfigurationValidationError(errors)
        score = likelihood * impact
        return score, classify_band(matrix.levels, score)

    # ── helpers ───────────────────────────────────────────────────────────

    def check_dimensions(self, rows: int, columns: int) -> None:
        """Reject dimensions outside ``[1, matrix_max_dimension]``."""
        limit = self.settings.matrix_max_dimension
        errors = [
            f"{name} must be between 1 and {limit}, got {value}"
            for name, value in (("rows", rows), ("columns", columns))
            if not 1 <= value <= limit
        ]
        if errors:
            raise ConfigurationValidationError(errors)

    def _resolve_levels(
        self,
        rows: int,
        columns: int,
        number_of_levels: int,
        levels: Optional[Sequence[ScoreBandCreate]],
    ) -> list[ScoreBandCreate]:
        if levels is None:
            return self.generator.generate(rows, columns, number_of_levels)
        if not levels:
            raise ConfigurationValidationError(["A matrix needs at least one level"])
        if len(levels) != number_of_levels:
            raise ConfigurationValidationError(
                [f"number_of_levels ({number_of_levels}) does not match the {len(levels)} levels given"]
            )
        errors = check_band_contiguity(levels, rows * columns)
        if errors:
            raise ConfigurationValidationError(errors)
        return sorted(levels, key=lambda level: level.order)

    @staticmethod
    def _deactivate_others(session: Session, organization_id: int) -> None:
        session.execute(
            update(RiskMatrixConfiguration)
            .where(
                RiskMatrixConfiguration.organization_id == organization_id,
                RiskMatrixConfiguration.is_active.is_(True),
            )
            .values(is_active=False)
            .execution_options(synchronize_session="fetch")
        )
        session.flush()

    @staticmethod
    def _replace_levels(
        session: Session, matrix: RiskMatrixConfiguration, levels: Sequence[ScoreBandCreate]
    ) -> None:
        if matrix.levels:
            matrix.levels.clear()
            session.flush()
        for level in levels:
            matrix.levels.append(
                ScoreBand(
                    label=level.label,
                    min=level.min,
                    max=level.max,
                    color=level.color,
                    order=level.order,
                )
            )
        session.flush()
