"""Momentum indicators - streamed one close at a time."""

import math
from collections import deque
from typing import Union

from tam.core.exceptions import InvalidParameterError
from tam.logger import logger
from tam.models.state import RsiState
from .base import IndicatorType, PriceBar
from .registry import indicator
from .utils import running_mean, wilder_average

DEFAULT_PERIOD = 14


@indicator("rsi", "Relative Strength Index", IndicatorType.MOMENTUM)
class RelativeStrengthIndex:
    """Relative Strength Index.

    Formula: RSI = 100 - (100 / (1 + RS))
    where RS = Average Gain / Average Loss

    The first averages are plain means of the first ``period`` gains and
    losses; after that both are Wilder-smoothed:

        avg = (avg * (period - 1) + current) / period

    Returns NaN until ``period`` price changes have been seen (so the first
    ``period`` calls), then a value in [0, 100]. With no losses the result
    is 100, and 50 when there was no movement at all.

    Example:
        >>> rsi = RelativeStrengthIndex(3)
        >>> [rsi.next(p) for p in (10.0, 10.5, 10.0)]
        [nan, nan, nan]
        >>> round(rsi.next(9.5))
        33
    """

    def __init__(self, period: int = DEFAULT_PERIOD):
        if period < 1:
            logger.warning(f"Rejected RSI period {period}: must be at least 1")
            raise InvalidParameterError(f"RSI period must be at least 1, got {period}")

        self._period = period
        self._prev_val = 0.0
        self._is_new = True
        self._price_changes = deque(maxlen=period)
        self._avg_gain = 0.0
        self._avg_loss = 0.0

    @classmethod
    def default(cls) -> "RelativeStrengthIndex":
        from tam.config import settings
        return cls(settings.INDICATORS.rsi_period)

    def period(self) -> int:
        return self._period

    def next(self, value: Union[float, PriceBar]) -> float:
        """Add one price (or a bar, whose close is used) and return the RSI."""
        if hasattr(value, "close"):
            value = value.close

        if self._is_new:
            self._is_new = False
            self._prev_val = value
            return math.nan

        change = value - self._prev_val
        self._prev_val = value

        if change >= 0.0:
            gain, loss = change, 0.0
        else:
            gain, loss = 0.0, -change

        # deque drops the oldest pair once period is reached
        self._price_changes.append((gain, loss))

        if len(self._price_changes) < self._period:
            return math.nan

        if self._avg_gain == 0.0 and self._avg_loss == 0.0:
            self._avg_gain = running_mean((g for g, _ in self._price_changes), self._period)
            self._avg_loss = running_mean((l for _, l in self._price_changes), self._period)
            logger.debug(
                f"{self} seeded: avg_gain={self._avg_gain}, avg_loss={self._avg_loss}"
            )
        else:
            self._avg_gain = wilder_average(self._avg_gain, gain, self._period)
            self._avg_loss = wilder_average(self._avg_loss, loss, self._period)

        if self._avg_loss == 0.0:
            if self._avg_gain == 0.0:
                return 50.0  # No movement
            return 100.0  # Only gains

        rs = self._avg_gain / self._avg_loss
        return 100.0 - (100.0 / (1.0 + rs))

    def reset(self) -> None:
        self._is_new = True
        self._prev_val = 0.0
        self._price_changes.clear()
        self._avg_gain = 0.0
        self._avg_loss = 0.0
        logger.debug(f"{self} reset")

    def to_state(self) -> RsiState:
        """Snapshot every field of the engine."""
        return RsiState(
            period=self._period,
            prev_val=self._prev_val,
            is_new=self._is_new,
            price_changes=list(self._price_changes),
            avg_gain=self._avg_gain,
            avg_loss=self._avg_loss,
        )

    @classmethod
    def from_state(cls, state: RsiState) -> "RelativeStrengthIndex":
        """Rebuild an engine from a snapshot taken by to_state()."""
        engine = cls(state.period)
        if len(state.price_changes) > state.period:
            raise InvalidParameterError(
                f"RSI({state.period}) state holds {len(state.price_changes)} price changes"
            )

        engine._prev_val = state.prev_val
        engine._is_new = state.is_new
        engine._price_changes.extend(tuple(pair) for pair in state.price_changes)
        engine._avg_gain = state.avg_gain
        engine._avg_loss = state.avg_loss
        logger.debug(f"{engine} restored with {len(engine._price_changes)} price changes")
        return engine

    def copy(self) -> "RelativeStrengthIndex":
        return type(self).from_state(self.to_state())

    def __eq__(self, other) -> bool:
        if not isinstance(other, RelativeStrengthIndex):
            return NotImplemented
        return self.to_state() == other.to_state()

    def __str__(self) -> str:
        return f"RSI({self._period})"

    def __repr__(self) -> str:
        return f"RelativeStrengthIndex(period={self._period})"
