"""Streaming indicator framework.

Every indicator consumes one data point per call to next() and keeps its
own state; none of them rescans history.
"""

from .base import (
    BarData,
    PriceBar,
    Indicator,
    IndicatorType,
)
from .registry import (
    INDICATOR_REGISTRY,
    indicator,
    create_indicator,
    list_indicators,
)

# Import all indicators to trigger registration
from .trend import AverageDirectionalIndex
from .momentum import RelativeStrengthIndex
from .statistic import Correlation

__all__ = [
    "BarData",
    "PriceBar",
    "Indicator",
    "IndicatorType",
    "INDICATOR_REGISTRY",
    "indicator",
    "create_indicator",
    "list_indicators",
    "AverageDirectionalIndex",
    "RelativeStrengthIndex",
    "Correlation",
]
