"""Base types and the shared contract for streaming indicators."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class PriceBar(Protocol):
    """Anything exposing high/low/close prices can be fed to a bar indicator."""
    high: float
    low: float
    close: float


@dataclass
class BarData:
    """Single bar of OHLCV data.

    Only high, low and close are read by the indicators; the other
    fields are carried for callers that load full bars.
    """
    high: float
    low: float
    close: float
    open: float = 0.0
    volume: float = 0.0
    timestamp: Optional[datetime] = None


@runtime_checkable
class Indicator(Protocol):
    """Capability set every streaming indicator satisfies.

    There is no shared base class; each engine implements these three
    operations on its own state.
    """

    def period(self) -> int:
        """Configured lookback period."""
        ...

    def next(self, *args: Any) -> float:
        """Consume one tick and return the updated indicator value."""
        ...

    def reset(self) -> None:
        """Return to the freshly constructed state."""
        ...


class IndicatorType(Enum):
    """Indicator classification."""
    TREND = "trend"
    MOMENTUM = "momentum"
    STATISTIC = "statistic"
