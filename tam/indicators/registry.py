"""Indicator registry and construction dispatcher."""

from typing import Dict, List, Optional, Type

from tam.core.exceptions import UnknownIndicatorError
from tam.logger import logger
from .base import Indicator, IndicatorType


class IndicatorRegistry:
    """Central registry of all indicator classes.

    This provides a single source of truth for all indicators.
    """

    def __init__(self):
        self._classes: Dict[str, Type[Indicator]] = {}
        self._metadata: Dict[str, Dict[str, str]] = {}

    def register(
        self,
        name: str,
        indicator_class: Type[Indicator],
        description: str = "",
        indicator_type: Optional[IndicatorType] = None
    ):
        """Register an indicator class.

        Args:
            name: Indicator name (e.g., "adx", "rsi")
            indicator_class: Class implementing period/next/reset
            description: Brief description
            indicator_type: Classification shown by listings
        """
        if name in self._classes:
            logger.warning(f"Overwriting existing indicator: {name}")

        self._classes[name] = indicator_class
        self._metadata[name] = {
            "description": description,
            "type": indicator_type.value if indicator_type else "",
        }
        logger.trace(f"Registered indicator: {name}")

    def get(self, name: str) -> Optional[Type[Indicator]]:
        """Get the class registered under a name, or None."""
        return self._classes.get(name)

    def list_all(self) -> List[str]:
        """List all registered indicators."""
        return sorted(self._classes.keys())

    def is_registered(self, name: str) -> bool:
        """Check if indicator is registered."""
        return name in self._classes

    def get_metadata(self, name: str) -> Optional[Dict[str, str]]:
        """Get metadata for an indicator."""
        return self._metadata.get(name)


# Global registry instance
INDICATOR_REGISTRY = IndicatorRegistry()


def indicator(name: str, description: str = "", indicator_type: Optional[IndicatorType] = None):
    """Decorator to register an indicator class.

    Usage:
        @indicator("rsi", "Relative Strength Index", IndicatorType.MOMENTUM)
        class RelativeStrengthIndex:
            ...
    """
    def decorator(cls):
        INDICATOR_REGISTRY.register(name, cls, description, indicator_type)
        return cls
    return decorator


def create_indicator(name: str, period: Optional[int] = None) -> Indicator:
    """Build a fresh indicator by registered name.

    Args:
        name: Registered indicator name (case-insensitive)
        period: Lookback period; the configured default when omitted

    Returns:
        New indicator instance

    Raises:
        UnknownIndicatorError: If no indicator is registered under name
        InvalidParameterError: If period is outside the indicator's range
    """
    key = name.lower()
    indicator_class = INDICATOR_REGISTRY.get(key)
    if indicator_class is None:
        raise UnknownIndicatorError(
            f"Unknown indicator: {name}. "
            f"Registered indicators: {INDICATOR_REGISTRY.list_all()}"
        )

    if period is None:
        return indicator_class.default()
    return indicator_class(period)


def list_indicators() -> List[str]:
    """List all registered indicators.

    Returns:
        Sorted list of indicator names
    """
    return INDICATOR_REGISTRY.list_all()
