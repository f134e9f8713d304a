"""Trend indicators - streamed one bar at a time."""

import math
from typing import List, Optional

from tam.core.exceptions import InvalidParameterError
from tam.logger import logger
from tam.models.state import AdxPhase, AdxState
from .base import IndicatorType, PriceBar
from .registry import indicator
from .utils import (
    directional_movement,
    round_half_away,
    running_mean,
    true_range,
    wilder_average,
    wilder_sum,
)

DEFAULT_PERIOD = 14
UNSTABLE_PERIOD = 15


@indicator("adx", "Average Directional Movement Index", IndicatorType.TREND)
class AverageDirectionalIndex:
    """Average Directional Movement Index.

    Measures trend strength regardless of direction.

    Formula:
    - +DM / -DM from consecutive highs and lows (only the larger move counts)
    - TR = max(H - L, |H - prev_C|, |L - prev_C|)
    - Wilder sums: S = S - S / period + raw
    - +DI = 100 * S(+DM) / S(TR),  -DI = 100 * S(-DM) / S(TR)
    - DX = 100 * |+DI - -DI| / (+DI + -DI)
    - ADX = mean of the first ``period`` DX values, then
      ADX = (ADX * (period - 1) + DX) / period

    Output for period p:
    - 0.0 for the first p bars (one to prime, p - 1 accumulating)
    - NaN for the next p - 1 bars while the DX history fills
    - ADX in [0, 100] from bar 2p on

    The unstable-period counter is tracked but values are emitted during it.

    Args:
        period: Smoothing period, at least 2
    """

    def __init__(self, period: int = DEFAULT_PERIOD):
        if period < 2:
            logger.warning(f"Rejected ADX period {period}: must be at least 2")
            raise InvalidParameterError(f"ADX period must be at least 2, got {period}")

        self._period = period
        self._round_pos = False
        self._clear()

    def _clear(self):
        self._phase = AdxPhase.UNINITIALIZED
        self._prev_high: Optional[float] = None
        self._prev_low: Optional[float] = None
        self._prev_close: Optional[float] = None
        self._plus_dm = 0.0
        self._minus_dm = 0.0
        self._tr = 0.0
        self._adx = 0.0
        self._dx_values: List[float] = []
        self._accumulated = 0
        self._unstable_period_count = 0

    @classmethod
    def default(cls) -> "AverageDirectionalIndex":
        from tam.config import settings
        adx = cls(settings.INDICATORS.adx_period)
        if settings.INDICATORS.adx_rounding:
            adx.with_rounding()
        return adx

    def with_rounding(self) -> "AverageDirectionalIndex":
        """Round every DI, DX and ADX value to the nearest integer.

        Halves round away from zero. Set it right after construction;
        returns self so it can be chained.
        """
        self._round_pos = True
        return self

    @property
    def rounding(self) -> bool:
        return self._round_pos

    @property
    def phase(self) -> AdxPhase:
        return self._phase

    def period(self) -> int:
        return self._period

    def _round(self, x: float) -> float:
        return round_half_away(x) if self._round_pos else x

    def _remember(self, bar: PriceBar):
        self._prev_high = bar.high
        self._prev_low = bar.low
        self._prev_close = bar.close

    def _smooth(self, plus_dm: float, minus_dm: float, tr: float):
        self._plus_dm = wilder_sum(self._plus_dm, plus_dm, self._period)
        self._minus_dm = wilder_sum(self._minus_dm, minus_dm, self._period)
        self._tr = wilder_sum(self._tr, tr, self._period)

    def _dx(self) -> float:
        if self._tr > 0.0:
            plus_di = self._round(100.0 * (self._plus_dm / self._tr))
            minus_di = self._round(100.0 * (self._minus_dm / self._tr))
        else:
            plus_di = 0.0
            minus_di = 0.0

        di_diff = abs(plus_di - minus_di)
        di_sum = plus_di + minus_di

        if di_sum > 0.0:
            return self._round(100.0 * (di_diff / di_sum))
        return 0.0

    def next(self, bar: PriceBar) -> float:
        """Add one bar and return the ADX (0.0 or NaN while warming up)."""
        if self._phase is AdxPhase.UNINITIALIZED:
            self._remember(bar)
            self._phase = AdxPhase.ACCUMULATING
            return 0.0

        plus_dm, minus_dm = directional_movement(
            bar.high, bar.low, self._prev_high, self._prev_low
        )
        tr = true_range(bar.high, bar.low, self._prev_close)
        self._remember(bar)

        if self._phase is AdxPhase.ACCUMULATING:
            self._plus_dm += plus_dm
            self._minus_dm += minus_dm
            self._tr += tr
            self._accumulated += 1

            if self._accumulated == self._period - 1:
                self._phase = AdxPhase.SEEDING
                self._accumulated = 0
                logger.debug(f"{self}: accumulated {self._period - 1} moves, seeding DX")
            return 0.0

        if self._phase is AdxPhase.SEEDING:
            if not self._dx_values:
                # The period-th raw value completes the plain sums
                self._plus_dm += plus_dm
                self._minus_dm += minus_dm
                self._tr += tr
                self._dx_values.append(self._dx())
                self._smooth(plus_dm, minus_dm, tr)
            else:
                self._smooth(plus_dm, minus_dm, tr)
                self._dx_values.append(self._dx())

            if len(self._dx_values) < self._period:
                return math.nan

            self._adx = self._round(running_mean(self._dx_values, self._period))
            self._unstable_period_count = 0
            self._phase = AdxPhase.STEADY
            logger.debug(f"{self}: first ADX {self._adx} from {self._period} DX values")
            return self._adx

        self._smooth(plus_dm, minus_dm, tr)
        dx = self._dx()
        self._adx = self._round(wilder_average(self._adx, dx, self._period))

        if self._unstable_period_count < UNSTABLE_PERIOD:
            self._unstable_period_count += 1

        return self._adx

    def reset(self) -> None:
        self._clear()
        logger.debug(f"{self} reset")

    def to_state(self) -> AdxState:
        """Snapshot every field of the engine."""
        return AdxState(
            period=self._period,
            phase=self._phase,
            prev_high=self._prev_high,
            prev_low=self._prev_low,
            prev_close=self._prev_close,
            plus_dm=self._plus_dm,
            minus_dm=self._minus_dm,
            tr=self._tr,
            adx=self._adx,
            dx_values=list(self._dx_values),
            accumulated=self._accumulated,
            unstable_period_count=self._unstable_period_count,
            round_pos=self._round_pos,
        )

    @classmethod
    def from_state(cls, state: AdxState) -> "AverageDirectionalIndex":
        """Rebuild an engine from a snapshot taken by to_state()."""
        engine = cls(state.period)
        primed = state.prev_high is not None and state.prev_low is not None
        if (state.phase is AdxPhase.UNINITIALIZED) == primed:
            raise InvalidParameterError(
                f"ADX({state.period}) state in phase {state.phase.value} "
                f"{'has' if primed else 'lacks'} previous prices"
            )
        if len(state.dx_values) > state.period or state.accumulated >= state.period:
            raise InvalidParameterError(
                f"ADX({state.period}) state holds {len(state.dx_values)} DX values "
                f"and {state.accumulated} accumulated moves"
            )

        engine._round_pos = state.round_pos
        engine._phase = state.phase
        engine._prev_high = state.prev_high
        engine._prev_low = state.prev_low
        engine._prev_close = state.prev_close
        engine._plus_dm = state.plus_dm
        engine._minus_dm = state.minus_dm
        engine._tr = state.tr
        engine._adx = state.adx
        engine._dx_values = list(state.dx_values)
        engine._accumulated = state.accumulated
        engine._unstable_period_count = state.unstable_period_count
        logger.debug(f"{engine} restored in phase {engine._phase.value}")
        return engine

    def copy(self) -> "AverageDirectionalIndex":
        return type(self).from_state(self.to_state())

    def __eq__(self, other) -> bool:
        if not isinstance(other, AverageDirectionalIndex):
            return NotImplemented
        return self.to_state() == other.to_state()

    def __str__(self) -> str:
        return f"ADX({self._period})"

    def __repr__(self) -> str:
        return (
            f"AverageDirectionalIndex(period={self._period}, "
            f"phase={self._phase.value}, rounding={self._round_pos})"
        )
