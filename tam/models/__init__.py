"""
Serializable state models
"""
from tam.models.state import (
    AdxPhase,
    IndicatorState,
    CorrelationState,
    RsiState,
    AdxState,
)

__all__ = [
    "AdxPhase",
    "IndicatorState",
    "CorrelationState",
    "RsiState",
    "AdxState",
]
