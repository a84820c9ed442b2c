"""Organization-scoped scoring on top of the stored configuration."""
from typing import Iterable, Optional

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from risk_scoring.database.orm import RiskConfiguration
from risk_scoring.exceptions import ConfigurationNotFoundError, ConfigurationValidationError
from risk_scoring.models import (
    ConfigurationExport,
    CriteriaScoreResponse,
    RiskScoreResponse,
    ScaleLevelExport,
    ScoreBandExport,
)
from risk_scoring.scoring import calculator
from risk_scoring.scoring.classifier import classify, classify_band
from risk_scoring.scoring.utils import Number, to_decimal
from risk_scoring.services.serialization import serialize_configuration

logger = structlog.get_logger(__name__)


def _export(model, record):
    return model.model_validate(record) if record is not None else None


class RiskCalculationService:
    """Look up an organization's configuration, then score and classify."""

    def list_configurations(self, session: Session, organization_id: int) -> list[RiskConfiguration]:
        stmt = (
            select(RiskConfiguration)
            .where(RiskConfiguration.organization_id == organization_id)
            .order_by(RiskConfiguration.created_at, RiskConfiguration.id)
        )
        return list(session.scalars(stmt))

    def get_configuration(
        self,
        session: Session,
        organization_id: int,
        configuration_id: Optional[str] = None,
    ) -> RiskConfiguration:
        """Return the given configuration, or the organization's first one.

        Raises:
            ConfigurationNotFoundError: Nothing matches, or the configuration
                belongs to another organization.
        """
        if configuration_id is not None:
            configuration = session.get(RiskConfiguration, configuration_id)
            if configuration is None or configuration.organization_id != organization_id:
                raise ConfigurationNotFoundError(
                    organization_id, details=f"configuration_id={configuration_id}"
                )
            return configuration

        configuration = session.scalars(
            select(RiskConfiguration)
            .where(RiskConfiguration.organization_id == organization_id)
            .order_by(RiskConfiguration.created_at, RiskConfiguration.id)
            .limit(1)
        ).first()
        if configuration is None:
            raise ConfigurationNotFoundError(organization_id)
        return configuration

    def calculate_risk_score(
        self,
        session: Session,
        organization_id: int,
        impact_score: Number,
        probability_score: Number,
        configuration_id: Optional[str] = None,
    ) -> RiskScoreResponse:
        """Score an impact/probability pair with the organization's method."""
        configuration = self.get_configuration(session, organization_id, configuration_id)
        impact = to_decimal(impact_score)
        probability = to_decimal(probability_score)
        risk_score = calculator.calculate_risk_score(
            impact, probability, configuration.calculation_method
        )
        band = classify_band(configuration.score_bands, risk_score)

        logger.debug(
            "risk_score_calculated",
            configuration_id=configuration.id,
            risk_score=str(risk_score),
            band=band.label if band else None,
        )
        return RiskScoreResponse(
            configuration_id=configuration.id,
            risk_score=risk_score,
            impact_score=impact,
            probability_score=probability,
            impact_level=_export(ScaleLevelExport, classify(configuration.impacts, impact)),
            probability_level=_export(
                ScaleLevelExport, classify(configuration.probabilities, probability)
            ),
            score_band=_export(ScoreBandExport, band),
            classified=band is not None,
        )

    def calculate_risk_score_with_criteria(
        self,
        session: Session,
        organization_id: int,
        criteria_scores: Iterable[Number],
        configuration_id: Optional[str] = None,
    ) -> CriteriaScoreResponse:
        """Aggregate per-criterion scores.

        Raises:
            ConfigurationValidationError: The configuration does not score by
                criteria.
            EmptyInputError: No score given.
        """
        configuration = self.get_configuration(session, organization_id, configuration_id)
        if not configuration.use_criteria:
            raise ConfigurationValidationError(
                [f"Configuration {configuration.id} does not use criteria"]
            )
        scores = [to_decimal(score) for score in criteria_scores]
        risk_score = calculator.calculate_risk_score_with_criteria(
            scores, configuration.calculation_method
        )
        band = classify_band(configuration.score_bands, risk_score)
        return CriteriaScoreResponse(
            configuration_id=configuration.id,
            risk_score=risk_score,
            criteria_scores=scores,
            score_band=_export(ScoreBandExport, band),
            classified=band is not None,
        )

    def get_risk_matrix_data(self, session: Session, organization_id: int) -> ConfigurationExport:
        """Export of the configuration the organization scores with."""
        return serialize_configuration(self.get_configuration(session, organization_id))
