"""Pytest Configuration and Shared Fixtures

This file is automatically loaded by pytest and makes all fixtures available to all tests.
"""
import pytest
from typing import List

from tam.indicators import BarData


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "unit: Unit tests (fast)"
    )
    config.addinivalue_line(
        "markers",
        "cli: Tests driving the command line interface"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


def create_test_bars(
    count: int = 50,
    base_price: float = 100.0,
    volatility: float = 1.0
) -> List[BarData]:
    """Create test bars with realistic OHLC relationships.

    Args:
        count: Number of bars to create
        base_price: Starting price
        volatility: Price movement range

    Returns:
        List of BarData objects
    """
    bars = []
    current_price = base_price

    for i in range(count):
        # Oscillating pattern with a slow upward drift
        price_change = (i % 5 - 2) * volatility + 0.1 * volatility
        current_price += price_change

        open_price = current_price
        high = open_price + abs(price_change) + volatility * 0.5
        low = open_price - abs(price_change) - volatility * 0.5
        close = open_price + price_change

        high = max(high, open_price, close)
        low = min(low, open_price, close)

        bars.append(BarData(high=high, low=low, close=close, open=open_price, volume=1000.0 + i))

    return bars


@pytest.fixture
def test_bars() -> List[BarData]:
    """Fifty oscillating bars."""
    return create_test_bars(50)


@pytest.fixture
def trending_bars() -> List[BarData]:
    """Thirty bars climbing steadily."""
    bars = []
    for i in range(30):
        price = 100.0 + i * 2.0
        bars.append(BarData(high=price + 1.0, low=price - 0.5, close=price + 0.5, open=price))
    return bars


@pytest.fixture
def bar_factory():
    """Build oscillating bars on demand: bar_factory(count, base_price, volatility)."""
    return create_test_bars
