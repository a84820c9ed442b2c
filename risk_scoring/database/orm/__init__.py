"""SQLAlchemy ORM models for the risk scoring engine."""
from risk_scoring.database.base import Base
from risk_scoring.database.orm.risk_configuration import RiskConfiguration
from risk_scoring.database.orm.criterion import Criterion
from risk_scoring.database.orm.scale_level import ScaleLevel
from risk_scoring.database.orm.score_band import ScoreBand
from risk_scoring.database.orm.matrix_configuration import RiskMatrixConfiguration

__all__ = [
    "Base",
    "RiskConfiguration",
    "Criterion",
    "ScaleLevel",
    "ScoreBand",
    "RiskMatrixConfiguration",
]
