"""Tests for atomic configuration create / update / delete."""
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from risk_scoring.database.orm import Criterion, RiskConfiguration, ScaleLevel, ScoreBand
from risk_scoring.exceptions import ConfigurationPersistenceError, ConfigurationValidationError
from risk_scoring.models import (
    CriterionCreate,
    RiskConfigurationCreate,
    ScaleLevelCreate,
)
from risk_scoring.services.configuration_builder import ConfigurationBuilder

ALL_TABLES = (RiskConfiguration, Criterion, ScaleLevel, ScoreBand)


def _count(session, model):
    return session.scalar(select(func.count()).select_from(model))


def _assert_empty(session):
    for model in ALL_TABLES:
        assert _count(session, model) == 0, model.__tablename__


@pytest.fixture
def builder():
    return ConfigurationBuilder()


@pytest.fixture
def criteria_config_data(sample_config_data):
    return {**sample_config_data, "use_criteria": True, "calculation_method": "max"}


class TestCreateWithData:
    """Creating whole configuration trees."""

    def test_create_standard(
        self, builder, db_session, sample_config_data, sample_impacts,
        sample_probabilities, sample_score_bands,
    ):
        configuration = builder.create_with_data(
            db_session, sample_config_data, sample_impacts, sample_probabilities,
            score_bands=sample_score_bands,
        )

        assert configuration.id
        assert configuration.calculation_method == "average"
        assert [level.label for level in configuration.impacts] == ["Low", "Medium", "High"]
        assert [level.label for level in configuration.probabilities] == ["Rare", "Possible", "Likely"]
        assert _count(db_session, ScaleLevel) == 6
        assert _count(db_session, ScoreBand) == 3
        assert _count(db_session, Criterion) == 0

    def test_create_with_criteria(
        self, builder, db_session, criteria_config_data, sample_impacts,
        sample_probabilities, sample_criteria, sample_score_bands,
    ):
        configuration = builder.create_with_data(
            db_session, criteria_config_data, sample_impacts, sample_probabilities,
            sample_criteria, sample_score_bands,
        )

        assert configuration.use_criteria is True
        assert [criterion.name for criterion in configuration.criteria] == ["Financial", "Reputational"]
        assert [level.label for level in configuration.criteria[1].impacts] == [
            "Local", "National", "Global",
        ]
        assert _count(db_session, Criterion) == 2
        assert _count(db_session, ScaleLevel) == 6 + 2 + 3

    def test_criterion_levels_not_in_configuration_scales(
        self, builder, db_session, criteria_config_data, sample_impacts,
        sample_probabilities, sample_criteria,
    ):
        configuration = builder.create_with_data(
            db_session, criteria_config_data, sample_impacts, sample_probabilities, sample_criteria,
        )
        assert len(configuration.impacts) == 3
        assert len(configuration.scale_levels) == 6

    def test_accepts_models(self, builder, db_session, sample_configuration_payload, organization_id):
        payload = RiskConfigurationCreate.model_validate(sample_configuration_payload)
        configuration = builder.create_with_data(
            db_session, payload.to_data(organization_id), payload.impacts,
            payload.probabilities, payload.criteria, payload.score_bands,
        )
        assert configuration.organization_id == organization_id
        assert configuration.impacts[2].score == Decimal("3")

    def test_name_trimmed(self, builder, db_session, sample_config_data, sample_impacts, sample_probabilities):
        sample_config_data["name"] = "  Padded  "
        configuration = builder.create_with_data(
            db_session, sample_config_data, sample_impacts, sample_probabilities,
        )
        assert configuration.name == "Padded"


class TestValidation:
    """Rule violations are rejected before any write."""

    def test_level_count_must_match_scale_max(
        self, builder, db_session, sample_config_data, sample_impacts, sample_probabilities,
    ):
        sample_config_data["impact_scale_max"] = 4
        with pytest.raises(ConfigurationValidationError) as exc_info:
            builder.create_with_data(db_session, sample_config_data, sample_impacts, sample_probabilities)
        assert "Number of impact levels must match impact_scale_max (4)" in exc_info.value.errors
        _assert_empty(db_session)

    def test_scale_max_bounds(self, builder, db_session, sample_config_data, sample_probabilities):
        sample_config_data["impact_scale_max"] = 11
        impacts = [{"label": f"L{i}", "score": i, "order": i} for i in range(1, 12)]
        with pytest.raises(ConfigurationValidationError) as exc_info:
            builder.create_with_data(db_session, sample_config_data, impacts, sample_probabilities)
        assert "Impact scale max must be between 2 and 10" in exc_info.value.errors
        _assert_empty(db_session)

    def test_duplicate_orders(self, builder, db_session, sample_config_data, sample_impacts, sample_probabilities):
        sample_impacts[2]["order"] = 2
        with pytest.raises(ConfigurationValidationError) as exc_info:
            builder.create_with_data(db_session, sample_config_data, sample_impacts, sample_probabilities)
        assert "Duplicate order 2 in impact levels" in exc_info.value.errors

    def test_criteria_mode_requires_criteria(
        self, builder, db_session, criteria_config_data, sample_impacts, sample_probabilities,
    ):
        with pytest.raises(ConfigurationValidationError) as exc_info:
            builder.create_with_data(db_session, criteria_config_data, sample_impacts, sample_probabilities)
        assert "Criteria mode requires at least one criterion" in exc_info.value.errors
        _assert_empty(db_session)

    def test_criterion_needs_impacts(
        self, builder, db_session, criteria_config_data, sample_impacts, sample_probabilities,
    ):
        criteria = [{"name": "Empty", "order": 1, "impacts": []}]
        with pytest.raises(ConfigurationValidationError) as exc_info:
            builder.create_with_data(
                db_session, criteria_config_data, sample_impacts, sample_probabilities, criteria,
            )
        assert "Criteria #0 must have impact levels" in exc_info.value.errors

    def test_band_gap(
        self, builder, db_session, sample_config_data, sample_impacts,
        sample_probabilities, sample_score_bands,
    ):
        sample_score_bands[1]["min"] = 5
        with pytest.raises(ConfigurationValidationError) as exc_info:
            builder.create_with_data(
                db_session, sample_config_data, sample_impacts, sample_probabilities,
                score_bands=sample_score_bands,
            )
        assert "Score band order 2 must start at 4, got 5" in exc_info.value.errors
        _assert_empty(db_session)

    def test_bands_must_cover_score_range(
        self, builder, db_session, sample_config_data, sample_impacts,
        sample_probabilities, sample_score_bands,
    ):
        sample_score_bands[2]["max"] = 8
        with pytest.raises(ConfigurationValidationError) as exc_info:
            builder.create_with_data(
                db_session, sample_config_data, sample_impacts, sample_probabilities,
                score_bands=sample_score_bands,
            )
        assert "Last score band must end at 9, got 8" in exc_info.value.errors

    def test_shape_errors_collected(self, builder, db_session, sample_config_data, sample_impacts, sample_probabilities):
        sample_impacts[0]["color"] = "green"
        sample_probabilities[1]["label"] = ""
        with pytest.raises(ConfigurationValidationError) as exc_info:
            builder.create_with_data(db_session, sample_config_data, sample_impacts, sample_probabilities)
        errors = exc_info.value.errors
        assert any(error.startswith("impacts[0].color") for error in errors)
        assert any(error.startswith("probabilities[1].label") for error in errors)

    def test_blank_level_label_rejected(
        self, builder, db_session, sample_config_data, sample_impacts, sample_probabilities,
    ):
        sample_impacts[1]["label"] = "   "
        with pytest.raises(ConfigurationValidationError) as exc_info:
            builder.create_with_data(db_session, sample_config_data, sample_impacts, sample_probabilities)
        assert any(error.startswith("impacts[1].label") for error in exc_info.value.errors)
        _assert_empty(db_session)

    def test_validate_configuration_valid(
        self, builder, sample_config_data, sample_impacts, sample_probabilities, sample_score_bands,
    ):
        tree = builder.normalize(
            sample_config_data, sample_impacts, sample_probabilities, score_bands=sample_score_bands,
        )
        assert builder.validate_configuration(*tree) == []


class TestAtomicity:
    """A failure part-way through persistence leaves no rows behind."""

    def test_rollback_on_failure_after_partial_writes(
        self, builder, db_session, monkeypatch, criteria_config_data, sample_impacts,
        sample_probabilities, sample_criteria, sample_score_bands,
    ):
        def explode(*args, **kwargs):
            raise RuntimeError("criterion write failed")

        monkeypatch.setattr(ConfigurationBuilder, "_persist_criterion", explode)

        with pytest.raises(RuntimeError):
            builder.create_with_data(
                db_session, criteria_config_data, sample_impacts, sample_probabilities,
                sample_criteria, sample_score_bands,
            )
        _assert_empty(db_session)

    def test_database_error_becomes_persistence_error(
        self, builder, db_session, criteria_config_data, sample_impacts, sample_probabilities,
    ):
        # Skips validation so the NOT NULL constraint is the one to trip
        broken_level = ScaleLevelCreate.model_construct(label=None, score=Decimal(1), color=None, order=1)
        broken = CriterionCreate.model_construct(
            name="Broken", description=None, order=1, impacts=[broken_level]
        )

        with pytest.raises(ConfigurationPersistenceError):
            builder.create_with_data(
                db_session, criteria_config_data, sample_impacts, sample_probabilities, [broken],
            )
        _assert_empty(db_session)


class TestUpdateAndDelete:
    """Replacing and deleting trees."""

    @pytest.fixture
    def configuration(
        self, builder, db_session, criteria_config_data, sample_impacts,
        sample_probabilities, sample_criteria, sample_score_bands,
    ):
        return builder.create_with_data(
            db_session, criteria_config_data, sample_impacts, sample_probabilities,
            sample_criteria, sample_score_bands,
        )

    def test_update_replaces_tree(self, builder, db_session, configuration, sample_probabilities):
        old_ids = {level.id for level in configuration.scale_levels}
        impacts = [{"label": f"I{i}", "score": i, "order": i} for i in range(1, 5)]
        bands = [
            {"label": "Low", "min": 1, "max": 6, "order": 1},
            {"label": "High", "min": 7, "max": 12, "order": 2},
        ]
        root = {
            "name": "Four by three",
            "impact_scale_max": 4,
            "probability_scale_max": 3,
            "calculation_method": "average",
            "use_criteria": False,
        }

        builder.update_with_data(db_session, configuration, root, impacts, sample_probabilities, [], bands)

        assert configuration.name == "Four by three"
        assert configuration.use_criteria is False
        assert [level.label for level in configuration.impacts] == ["I1", "I2", "I3", "I4"]
        assert not old_ids & {level.id for level in configuration.scale_levels}
        assert _count(db_session, Criterion) == 0
        assert _count(db_session, ScaleLevel) == 7
        assert _count(db_session, ScoreBand) == 2
        assert _count(db_session, RiskConfiguration) == 1

    def test_invalid_update_keeps_original(self, builder, db_session, configuration, sample_impacts):
        root = {"name": "Broken", "impact_scale_max": 3, "probability_scale_max": 3, "use_criteria": True}
        with pytest.raises(ConfigurationValidationError):
            builder.update_with_data(db_session, configuration, root, sample_impacts, [], [])

        db_session.expire_all()
        stored = db_session.get(RiskConfiguration, configuration.id)
        assert stored.name == "Default risk scale"
        assert _count(db_session, Criterion) == 2

    def test_delete_cascades(self, builder, db_session, configuration):
        builder.delete(db_session, configuration)
        _assert_empty(db_session)
