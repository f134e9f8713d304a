"""
Core primitives shared by every indicator.

This package contains:
- exceptions.py: Custom exceptions
"""

from tam.core.exceptions import (
    IndicatorError,
    InvalidParameterError,
    UnknownIndicatorError,
)

__all__ = [
    'IndicatorError',
    'InvalidParameterError',
    'UnknownIndicatorError',
]
