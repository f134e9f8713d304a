"""
Custom exceptions for the indicator library.

All custom exceptions should be defined here for easy discovery
and consistent error handling throughout the package.
"""


class IndicatorError(Exception):
    """Base exception for all indicator errors."""
    pass


class InvalidParameterError(IndicatorError):
    """Raised when an indicator is built with a period outside its allowed range,
    or restored from a state that breaks its invariants."""
    pass


class UnknownIndicatorError(IndicatorError):
    """Raised when the registry has no indicator under the requested name."""
    pass

