"""Statistical indicators over two parallel series."""

import math
from typing import Optional, Tuple, Union

from tam.core.exceptions import InvalidParameterError
from tam.logger import logger
from tam.models.state import CorrelationState
from .base import IndicatorType
from .registry import indicator

DEFAULT_PERIOD = 30


@indicator("correl", "Pearson Correlation Coefficient", IndicatorType.STATISTIC)
class Correlation:
    """Rolling Pearson correlation coefficient (r) between two series.

    Formula:
        r = (Σxy - Σx·Σy/n) / sqrt((Σx² - (Σx)²/n) · (Σy² - (Σy)²/n))

    The five sums are kept for the last ``period`` points by subtracting the
    value leaving the circular buffer, so each tick costs O(1).

    Output is 0.0 until two points are available, and 0.0 whenever the
    denominator is not positive (flat window, or rounding pushing it below
    zero).

    Example:
        >>> corr = Correlation(3)
        >>> corr.next(2.0, 3.0)
        0.0
        >>> corr.next(3.0, 2.0)
        -1.0
    """

    def __init__(self, period: int = DEFAULT_PERIOD):
        if period < 1:
            logger.warning(f"Rejected CORREL period {period}: must be at least 1")
            raise InvalidParameterError(f"CORREL period must be at least 1, got {period}")

        self._period = period
        self._index = 0
        self._count = 0
        self._sum_x = 0.0
        self._sum_y = 0.0
        self._sum_xy = 0.0
        self._sum_x2 = 0.0
        self._sum_y2 = 0.0
        self._values_x = [0.0] * period
        self._values_y = [0.0] * period

    @classmethod
    def default(cls) -> "Correlation":
        from tam.config import settings
        return cls(settings.INDICATORS.correl_period)

    def period(self) -> int:
        return self._period

    def next(self, x: Union[float, Tuple[float, float]], y: Optional[float] = None) -> float:
        """Add one (x, y) pair and return the correlation over the window.

        Accepts either ``next(x, y)`` or ``next((x, y))``.
        """
        if y is None:
            x, y = x

        # Values about to be overwritten; zeros until the buffer wraps
        trailing_x = self._values_x[self._index]
        trailing_y = self._values_y[self._index]

        self._values_x[self._index] = x
        self._values_y[self._index] = y

        self._index = self._index + 1 if self._index + 1 < self._period else 0

        if self._count < self._period:
            self._count += 1

            self._sum_x += x
            self._sum_y += y
            self._sum_xy += x * y
            self._sum_x2 += x * x
            self._sum_y2 += y * y
        else:
            self._sum_x = self._sum_x - trailing_x + x
            self._sum_y = self._sum_y - trailing_y + y
            self._sum_xy = self._sum_xy - (trailing_x * trailing_y) + (x * y)
            self._sum_x2 = self._sum_x2 - (trailing_x * trailing_x) + (x * x)
            self._sum_y2 = self._sum_y2 - (trailing_y * trailing_y) + (y * y)

        if self._count < 2:
            return 0.0

        n = float(self._count)
        numerator = self._sum_xy - ((self._sum_x * self._sum_y) / n)
        denominator_x = self._sum_x2 - ((self._sum_x * self._sum_x) / n)
        denominator_y = self._sum_y2 - ((self._sum_y * self._sum_y) / n)
        denominator = denominator_x * denominator_y

        if denominator <= 0.0:
            return 0.0

        return numerator / math.sqrt(denominator)

    def reset(self) -> None:
        self._index = 0
        self._count = 0
        self._sum_x = 0.0
        self._sum_y = 0.0
        self._sum_xy = 0.0
        self._sum_x2 = 0.0
        self._sum_y2 = 0.0
        self._values_x = [0.0] * self._period
        self._values_y = [0.0] * self._period
        logger.debug(f"{self} reset")

    def to_state(self) -> CorrelationState:
        """Snapshot every field of the engine."""
        return CorrelationState(
            period=self._period,
            index=self._index,
            count=self._count,
            sum_x=self._sum_x,
            sum_y=self._sum_y,
            sum_xy=self._sum_xy,
            sum_x2=self._sum_x2,
            sum_y2=self._sum_y2,
            values_x=list(self._values_x),
            values_y=list(self._values_y),
        )

    @classmethod
    def from_state(cls, state: CorrelationState) -> "Correlation":
        """Rebuild an engine from a snapshot taken by to_state()."""
        engine = cls(state.period)
        if len(state.values_x) != state.period or len(state.values_y) != state.period:
            raise InvalidParameterError(
                f"CORREL({state.period}) state needs buffers of length {state.period}, "
                f"got {len(state.values_x)} and {len(state.values_y)}"
            )
        if not 0 <= state.index < state.period or not 0 <= state.count <= state.period:
            raise InvalidParameterError(
                f"CORREL({state.period}) state has index {state.index}, count {state.count}"
            )

        engine._index = state.index
        engine._count = state.count
        engine._sum_x = state.sum_x
        engine._sum_y = state.sum_y
        engine._sum_xy = state.sum_xy
        engine._sum_x2 = state.sum_x2
        engine._sum_y2 = state.sum_y2
        engine._values_x = list(state.values_x)
        engine._values_y = list(state.values_y)
        logger.debug(f"{engine} restored at count {engine._count}")
        return engine

    def copy(self) -> "Correlation":
        return type(self).from_state(self.to_state())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Correlation):
            return NotImplemented
        return self.to_state() == other.to_state()

    def __str__(self) -> str:
        return f"CORREL({self._period})"

    def __repr__(self) -> str:
        return f"Correlation(period={self._period}, count={self._count})"
