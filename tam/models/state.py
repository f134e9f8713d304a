"""Plain-data snapshots of indicator state.

Every field an engine keeps is mirrored here so a snapshot can be written
with any pydantic serializer and restored bit-for-bit. NaN and infinity are
serialized as JSON constants instead of null.
"""
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class AdxPhase(str, Enum):
    """Lifecycle of the ADX engine."""
    UNINITIALIZED = "uninitialized"  # no bar seen yet
    ACCUMULATING = "accumulating"    # plain sums of the first period-1 moves
    SEEDING = "seeding"              # Wilder sums running, DX history filling
    STEADY = "steady"                # ADX itself Wilder-smoothed


class IndicatorState(BaseModel):
    """Common base for snapshots."""
    model_config = ConfigDict(ser_json_inf_nan="constants", extra="forbid")

    period: int = Field(ge=1)


class CorrelationState(IndicatorState):
    index: int = 0
    count: int = 0
    sum_x: float = 0.0
    sum_y: float = 0.0
    sum_xy: float = 0.0
    sum_x2: float = 0.0
    sum_y2: float = 0.0
    values_x: List[float]
    values_y: List[float]


class RsiState(IndicatorState):
    prev_val: float = 0.0
    is_new: bool = True
    price_changes: List[Tuple[float, float]] = Field(default_factory=list)
    avg_gain: float = 0.0
    avg_loss: float = 0.0


class AdxState(IndicatorState):
    phase: AdxPhase = AdxPhase.UNINITIALIZED
    prev_high: Optional[float] = None
    prev_low: Optional[float] = None
    prev_close: Optional[float] = None
    plus_dm: float = 0.0
    minus_dm: float = 0.0
    tr: float = 0.0
    adx: float = 0.0
    dx_values: List[float] = Field(default_factory=list)
    accumulated: int = 0
    unstable_period_count: int = 0
    round_pos: bool = False
