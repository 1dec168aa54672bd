"""Configuration module for Retro Insights.

This module provides configuration loading and error handling utilities.
"""

from .exceptions import ConfigError
from .loader import config_to_options, default_options

__all__ = ["config_to_options", "default_options", "ConfigError"]
