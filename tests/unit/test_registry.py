"""Unit tests for the indicator registry."""
import pytest

from tam.core.exceptions import InvalidParameterError, UnknownIndicatorError
from tam.indicators import (
    INDICATOR_REGISTRY,
    AverageDirectionalIndex,
    Correlation,
    RelativeStrengthIndex,
    create_indicator,
    list_indicators,
)
from tam.indicators.registry import IndicatorRegistry


class TestIndicatorRegistry:
    """Registration and lookup."""

    def test_builtin_indicators_registered(self):
        assert list_indicators() == ["adx", "correl", "rsi"]

    def test_metadata(self):
        metadata = INDICATOR_REGISTRY.get_metadata("adx")

        assert metadata["type"] == "trend"
        assert "Directional" in metadata["description"]

    def test_get_unknown_returns_none(self):
        assert INDICATOR_REGISTRY.get("macd") is None
        assert INDICATOR_REGISTRY.is_registered("macd") is False

    def test_register_overwrites(self):
        registry = IndicatorRegistry()
        registry.register("x", RelativeStrengthIndex, "first")
        registry.register("x", Correlation, "second")

        assert registry.get("x") is Correlation
        assert registry.get_metadata("x")["description"] == "second"
        assert registry.list_all() == ["x"]


class TestCreateIndicator:
    """Construction by name."""

    @pytest.mark.parametrize("name, cls", [
        ("adx", AverageDirectionalIndex),
        ("RSI", RelativeStrengthIndex),
        ("correl", Correlation),
    ])
    def test_creates_by_name(self, name, cls):
        indicator = create_indicator(name, 7)

        assert isinstance(indicator, cls)
        assert indicator.period() == 7

    def test_default_period_when_omitted(self):
        assert str(create_indicator("correl")) == "CORREL(30)"

    def test_unknown_name(self):
        with pytest.raises(UnknownIndicatorError, match="Registered indicators"):
            create_indicator("macd", 12)

    def test_invalid_period_propagates(self):
        with pytest.raises(InvalidParameterError):
            create_indicator("adx", 1)
