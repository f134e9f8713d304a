"""
Configuration module
"""
from tam.config.settings import settings, Settings, LoggerConfig, IndicatorDefaults

__all__ = [
    "settings",
    "Settings",
    "LoggerConfig",
    "IndicatorDefaults",
]
