"""Snapshots taken with to_state() restore engines that continue identically."""
import json
import math

import pytest

from tam.core.exceptions import InvalidParameterError
from tam.indicators import AverageDirectionalIndex, Correlation, RelativeStrengthIndex
from tam.models import AdxPhase, AdxState, CorrelationState, RsiState


def _same(a: float, b: float) -> bool:
    return (math.isnan(a) and math.isnan(b)) or a == b


def _through_json(engine):
    """Serialize a snapshot to JSON text and rebuild the engine from it."""
    state = engine.to_state()
    payload = state.model_dump_json()
    return type(engine).from_state(type(state).model_validate_json(payload))


class TestRoundTrip:
    """Resume after restore gives the same outputs as the original."""

    @pytest.mark.parametrize("split", [0, 1, 5, 9, 20, 35])
    def test_adx(self, bar_factory, split):
        bars = bar_factory(50)
        original = AverageDirectionalIndex(5).with_rounding()
        for bar in bars[:split]:
            original.next(bar)

        restored = _through_json(original)

        assert restored == original
        for bar in bars[split:]:
            assert _same(original.next(bar), restored.next(bar))

    @pytest.mark.parametrize("split", [0, 1, 3, 4, 20])
    def test_rsi(self, bar_factory, split):
        bars = bar_factory(40)
        original = RelativeStrengthIndex(4)
        for bar in bars[:split]:
            original.next(bar)

        restored = _through_json(original)

        assert restored == original
        for bar in bars[split:]:
            assert _same(original.next(bar), restored.next(bar))

    @pytest.mark.parametrize("split", [0, 1, 2, 6, 25])
    def test_correlation(self, bar_factory, split):
        pairs = [(bar.close, bar.high - bar.low) for bar in bar_factory(40)]
        original = Correlation(6)
        for pair in pairs[:split]:
            original.next(pair)

        restored = _through_json(original)

        assert restored == original
        for pair in pairs[split:]:
            assert original.next(pair) == restored.next(pair)

    def test_copy_is_independent(self, test_bars):
        original = AverageDirectionalIndex(4)
        for bar in test_bars[:6]:
            original.next(bar)

        clone = original.copy()
        original.next(test_bars[6])

        assert clone != original
        assert clone.phase is AdxPhase.SEEDING

    def test_nan_survives_json(self):
        rsi = RelativeStrengthIndex(3)
        rsi.next(float("nan"))

        payload = rsi.to_state().model_dump_json()
        assert json.loads(payload.replace("NaN", "null"))["prev_val"] is None

        restored = RelativeStrengthIndex.from_state(RsiState.model_validate_json(payload))
        assert math.isnan(restored.to_state().prev_val)

    def test_state_is_plain_data(self, test_bars):
        adx = AverageDirectionalIndex(3)
        for bar in test_bars[:8]:
            adx.next(bar)

        dumped = adx.to_state().model_dump(mode="json")

        assert dumped["period"] == 3
        assert dumped["phase"] == "steady"
        assert len(dumped["dx_values"]) == 3


class TestRestoreValidation:
    """Inconsistent snapshots are rejected."""

    def test_adx_period_checked(self):
        with pytest.raises(InvalidParameterError):
            AverageDirectionalIndex.from_state(AdxState(period=1))

    def test_adx_primed_without_prices(self):
        with pytest.raises(InvalidParameterError):
            AverageDirectionalIndex.from_state(AdxState(period=3, phase=AdxPhase.SEEDING))

    def test_adx_history_too_long(self):
        state = AdxState(
            period=2, phase=AdxPhase.STEADY, prev_high=1.0, prev_low=0.5, prev_close=0.7,
            dx_values=[1.0, 2.0, 3.0],
        )
        with pytest.raises(InvalidParameterError):
            AverageDirectionalIndex.from_state(state)

    def test_rsi_queue_too_long(self):
        state = RsiState(period=2, is_new=False, price_changes=[(1.0, 0.0)] * 3)
        with pytest.raises(InvalidParameterError):
            RelativeStrengthIndex.from_state(state)

    def test_correlation_buffer_length(self):
        state = CorrelationState(period=3, values_x=[0.0] * 2, values_y=[0.0] * 3)
        with pytest.raises(InvalidParameterError):
            Correlation.from_state(state)
