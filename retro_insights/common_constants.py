"""Common constants used across Retro Insights modules."""

from typing import Final, List

# Data filename keys used in config parsing; each accepts a list of files
DATA_FILENAME_KEYS: Final[List[str]] = [
    "summary_data",
    "velocity_data",
    "burnup_data",
    "module_assignee_data",
    "efficiency_data",
]

# Chart filename keys used in config parsing
CHART_FILENAME_KEYS: Final[List[str]] = [
    "velocity_chart",
    "burnup_chart",
    "module_assignee_chart",
    "efficiency_chart",
]

CHART_TITLE_KEYS: Final[List[str]] = [f"{key}_title" for key in CHART_FILENAME_KEYS]
