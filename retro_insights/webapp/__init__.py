"""Flask upload dashboard for Retro Insights."""
