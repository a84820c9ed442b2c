"""Atomic assembly of risk configuration trees.

A configuration is written as a whole or not at all:

  1. normalize raw input into Pydantic models (flat or wrapped criteria)
  2. check the domain rules; any violation raises before the first write
  3. inside one transaction persist, in order: root, impact levels,
     probability levels, score bands, then each criterion followed by its
     impact levels

Any exception in step 3 rolls the whole tree back.
"""
from typing import Any, Iterable, Optional, Sequence, Type, TypeVar, Union

import structlog
from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from risk_scoring.config import Settings, get_settings
from risk_scoring.database.connection import transaction
from risk_scoring.database.orm import Criterion, RiskConfiguration, ScaleLevel, ScoreBand
from risk_scoring.exceptions import ConfigurationPersistenceError, ConfigurationValidationError
from risk_scoring.models import (
    CriterionCreate,
    RiskConfigurationBase,
    RiskConfigurationData,
    ScaleKind,
    ScaleLevelCreate,
    ScoreBandCreate,
)
from risk_scoring.scoring.classifier import check_band_contiguity

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=BaseModel)
Payload = Union[BaseModel, dict[str, Any]]


def _coerce(model: Type[M], item: Payload) -> M:
    if isinstance(item, model):
        return item
    if isinstance(item, BaseModel):
        item = item.model_dump()
    return model.model_validate(item)


def _format_validation_error(prefix: str, error: ValidationError) -> list[str]:
    messages = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"])
        where = f"{prefix}.{location}" if location else prefix
        messages.append(f"{where}: {detail['msg']}")
    return messages


def _duplicate_orders(items: Iterable[Any]) -> set[int]:
    seen: set[int] = set()
    duplicates: set[int] = set()
    for item in items:
        if item.order in seen:
            duplicates.add(item.order)
        seen.add(item.order)
    return duplicates


class ConfigurationBuilder:
    """Create, replace and delete configuration trees atomically.

    Parameters
    ----------
    settings:
        Source of the scale size bounds; defaults to the cached settings.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()

    # ── validation ────────────────────────────────────────────────────────

    def normalize(
        self,
        config: Payload,
        impacts: Sequence[Payload],
        probabilities: Sequence[Payload],
        criteria: Sequence[Payload] = (),
        score_bands: Sequence[Payload] = (),
        config_model: Type[RiskConfigurationBase] = RiskConfigurationData,
    ) -> tuple[
        RiskConfigurationBase,
        list[ScaleLevelCreate],
        list[ScaleLevelCreate],
        list[CriterionCreate],
        list[ScoreBandCreate],
    ]:
        """Coerce raw dicts into models, collecting every shape error."""
        errors: list[str] = []

        def coerce_all(model: Type[M], items: Sequence[Payload], name: str) -> list[M]:
            result = []
            for index, item in enumerate(items):
                try:
                    result.append(_coerce(model, item))
                except ValidationError as e:
                    errors.extend(_format_validation_error(f"{name}[{index}]", e))
            return result

        root = None
        try:
            root = _coerce(config_model, config)
        except ValidationError as e:
            errors.extend(_format_validation_error("configuration", e))

        impact_levels = coerce_all(ScaleLevelCreate, impacts, "impacts")
        probability_levels = coerce_all(ScaleLevelCreate, probabilities, "probabilities")
        criteria_models = coerce_all(CriterionCreate, criteria, "criteria")
        bands = coerce_all(ScoreBandCreate, score_bands, "score_bands")

        if errors:
            raise ConfigurationValidationError(errors)
        return root, impact_levels, probability_levels, criteria_models, bands

    def validate_configuration(
        self,
        config: RiskConfigurationBase,
        impacts: Sequence[ScaleLevelCreate],
        probabilities: Sequence[ScaleLevelCreate],
        criteria: Sequence[CriterionCreate] = (),
        score_bands: Sequence[ScoreBandCreate] = (),
    ) -> list[str]:
        """Return the domain rule violations of a normalized tree."""
        errors: list[str] = []
        low, high = self.settings.scale_min_levels, self.settings.scale_max_levels

        if not config.name.strip():
            errors.append("Configuration name is required")

        for scale_name, scale_max, levels in (
            ("impact", config.impact_scale_max, impacts),
            ("probability", config.probability_scale_max, probabilities),
        ):
            if not low <= scale_max <= high:
                errors.append(f"{scale_name.capitalize()} scale max must be between {low} and {high}")
            if len(levels) != scale_max:
                errors.append(
                    f"Number of {scale_name} levels must match {scale_name}_scale_max ({scale_max})"
                )
            for order in sorted(_duplicate_orders(levels)):
                errors.append(f"Duplicate order {order} in {scale_name} levels")

        if config.use_criteria and not criteria:
            errors.append("Criteria mode requires at least one criterion")
        for order in sorted(_duplicate_orders(criteria)):
            errors.append(f"Duplicate order {order} in criteria")
        if config.use_criteria:
            for index, criterion in enumerate(criteria):
                if not criterion.name.strip():
                    errors.append(f"Criteria #{index} name is required")
                if not criterion.impacts:
                    errors.append(f"Criteria #{index} must have impact levels")
        for index, criterion in enumerate(criteria):
            for order in sorted(_duplicate_orders(criterion.impacts)):
                errors.append(f"Duplicate order {order} in impact levels of criteria #{index}")

        errors.extend(
            check_band_contiguity(score_bands, config.impact_scale_max * config.probability_scale_max)
        )
        return errors

    # ── writes ────────────────────────────────────────────────────────────

    def create_with_data(
        self,
        session: Session,
        config: Payload,
        impacts: Sequence[Payload],
        probabilities: Sequence[Payload],
        criteria: Sequence[Payload] = (),
        score_bands: Sequence[Payload] = (),
    ) -> RiskConfiguration:
        """Persist a new configuration tree in one transaction.

        Raises:
            ConfigurationValidationError: Input rejected; nothing written.
            ConfigurationPersistenceError: Storage failed; nothing written.
        """
        root, impact_levels, probability_levels, criteria_models, bands = self.normalize(
            config, impacts, probabilities, criteria, score_bands
        )
        self._raise_if_invalid(root, impact_levels, probability_levels, criteria_models, bands)

        try:
            with transaction(session):
                configuration = RiskConfiguration(
                    organization_id=root.organization_id,
                    **self._root_values(root),
                )
                session.add(configuration)
                session.flush()
                self._persist_tree(
                    session, configuration, impact_levels, probability_levels, criteria_models, bands
                )
        except SQLAlchemyError as e:
            raise ConfigurationPersistenceError(
                "Failed to persist risk configuration", details=str(e)
            ) from e

        logger.info(
            "risk_configuration_created",
            configuration_id=configuration.id,
            organization_id=configuration.organization_id,
            impacts=len(impact_levels),
            probabilities=len(probability_levels),
            criteria=len(criteria_models),
            score_bands=len(bands),
        )
        return configuration

    def update_with_data(
        self,
        session: Session,
        configuration: RiskConfiguration,
        config: Payload,
        impacts: Sequence[Payload],
        probabilities: Sequence[Payload],
        criteria: Sequence[Payload] = (),
        score_bands: Sequence[Payload] = (),
    ) -> RiskConfiguration:
        """Replace the root fields and the whole nested tree in one transaction."""
        root, impact_levels, probability_levels, criteria_models, bands = self.normalize(
            config, impacts, probabilities, criteria, score_bands,
            config_model=RiskConfigurationBase,
        )
        self._raise_if_invalid(root, impact_levels, probability_levels, criteria_models, bands)

        try:
            with transaction(session):
                for field, value in self._root_values(root).items():
                    setattr(configuration, field, value)
                configuration.scale_levels.clear()
                configuration.criteria.clear()
                configuration.score_bands.clear()
                # Old rows must be gone before new rows reuse their order values
                session.flush()
                self._persist_tree(
                    session, configuration, impact_levels, probability_levels, criteria_models, bands
                )
        except SQLAlchemyError as e:
            raise ConfigurationPersistenceError(
                "Failed to update risk configuration", details=str(e)
            ) from e

        logger.info(
            "risk_configuration_updated",
            configuration_id=configuration.id,
            organization_id=configuration.organization_id,
        )
        return configuration

    def delete(self, session: Session, configuration: RiskConfiguration) -> None:
        """Delete a configuration and everything it owns."""
        configuration_id = configuration.id
        try:
            with transaction(session):
                session.delete(configuration)
        except SQLAlchemyError as e:
            raise ConfigurationPersistenceError(
                "Failed to delete risk configuration", details=str(e)
            ) from e
        logger.info("risk_configuration_deleted", configuration_id=configuration_id)

    # ── helpers ───────────────────────────────────────────────────────────

    def _raise_if_invalid(self, *tree) -> None:
        errors = self.validate_configuration(*tree)
        if errors:
            logger.warning("risk_configuration_rejected", errors=errors)
            raise ConfigurationValidationError(errors)

    @staticmethod
    def _root_values(root: RiskConfigurationBase) -> dict[str, Any]:
        return {
            "name": root.name.strip(),
            "impact_scale_max": root.impact_scale_max,
            "probability_scale_max": root.probability_scale_max,
            "calculation_method": root.calculation_method.value,
            "use_criteria": root.use_criteria,
        }

    def _persist_tree(
        self,
        session: Session,
        configuration: RiskConfiguration,
        impacts: Sequence[ScaleLevelCreate],
        probabilities: Sequence[ScaleLevelCreate],
        criteria: Sequence[CriterionCreate],
        score_bands: Sequence[ScoreBandCreate],
    ) -> None:
        self._persist_levels(session, configuration, ScaleKind.IMPACT, impacts)
        self._persist_levels(session, configuration, ScaleKind.PROBABILITY, probabilities)
        self._persist_score_bands(session, configuration, score_bands)
        for criterion in criteria:
            self._persist_criterion(session, configuration, criterion)

    def _persist_levels(
        self,
        session: Session,
        configuration: RiskConfiguration,
        kind: ScaleKind,
        levels: Sequence[ScaleLevelCreate],
    ) -> None:
        for level in levels:
            session.add(
                ScaleLevel(
                    kind=kind.value,
                    risk_configuration=configuration,
                    label=level.label,
                    score=level.score,
                    color=level.color,
                    order=level.order,
                )
            )
        session.flush()

    def _persist_score_bands(
        self,
        session: Session,
        configuration: RiskConfiguration,
        score_bands: Sequence[ScoreBandCreate],
    ) -> None:
        for band in score_bands:
            session.add(
                ScoreBand(
                    risk_configuration=configuration,
                    label=band.label,
                    min=band.min,
                    max=band.max,
                    color=band.color,
                    order=band.order,
                )
            )
        session.flush()

    def _persist_criterion(
        self,
        session: Session,
        configuration: RiskConfiguration,
        criterion: CriterionCreate,
    ) -> Criterion:
        record = Criterion(
            risk_configuration=configuration,
            name=criterion.name,
            description=criterion.description,
            order=criterion.order,
        )
        session.add(record)
        session.flush()
        for level in criterion.impacts:
            session.add(
                ScaleLevel(
                    kind=ScaleKind.CRITERION_IMPACT.value,
                    criterion=record,
                    label=level.label,
                    score=level.score,
                    color=level.color,
                    order=level.order,
                )
            )
        session.flush()
        return record
