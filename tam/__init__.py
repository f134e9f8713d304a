"""
tam - incremental technical-analysis indicators (ADX, RSI, Pearson correlation)
"""
from tam.core.exceptions import IndicatorError, InvalidParameterError, UnknownIndicatorError
from tam.logger import logger
from tam.indicators import (
    AverageDirectionalIndex,
    BarData,
    Correlation,
    Indicator,
    PriceBar,
    RelativeStrengthIndex,
    create_indicator,
    list_indicators,
)

__version__ = "0.1.0"

# Silent inside host applications until LoggerManager.setup_logger() runs
logger.disable("tam")

__all__ = [
    "AverageDirectionalIndex",
    "RelativeStrengthIndex",
    "Correlation",
    "BarData",
    "PriceBar",
    "Indicator",
    "create_indicator",
    "list_indicators",
    "IndicatorError",
    "InvalidParameterError",
    "UnknownIndicatorError",
]
