"""Configuration exceptions for Retro Insights."""

from ..exceptions import RetroInsightsError


class ConfigError(RetroInsightsError):
    """
    Exception raised for errors in the configuration.
    """
