"""Canonical work-item fields and the source columns they are read from.

Each export tool names its columns differently, so every canonical field
carries an ordered list of aliases. The first alias present in a row wins.
"""

from typing import Dict, Final, List, Tuple

EPIC: Final[str] = "epic"
TICKET_ID: Final[str] = "ticket_id"
MODULE: Final[str] = "module"
ASSIGNEE: Final[str] = "assignee"
POINTS: Final[str] = "points"
RELEASE: Final[str] = "release"
SPRINT_COUNT: Final[str] = "sprint_count"

WORK_ITEM_FIELDS: Final[Tuple[str, ...]] = (
    EPIC,
    TICKET_ID,
    MODULE,
    ASSIGNEE,
    POINTS,
    RELEASE,
    SPRINT_COUNT,
)

# Source column aliases, highest priority first
DEFAULT_ALIASES: Final[Dict[str, List[str]]] = {
    EPIC: ["Epic Link", "Epic", "epic"],
    TICKET_ID: ["JIRA No", "Issue key", "jira"],
    MODULE: ["Module", "Component", "module"],
    ASSIGNEE: ["Assignee", "assignee"],
    POINTS: ["Story Points", "Points", "points"],
    RELEASE: ["Release Name", "Fix Version", "release"],
    SPRINT_COUNT: ["Sprint Count", "Sprints"],
}

NOT_AVAILABLE: Final[str] = "N/A"
DEFAULT_MODULE: Final[str] = "General"
UNASSIGNED: Final[str] = "Unassigned"
UNKNOWN_RELEASE: Final[str] = "Unknown"

FIELD_DEFAULTS: Final[Dict[str, object]] = {
    EPIC: NOT_AVAILABLE,
    TICKET_ID: NOT_AVAILABLE,
    MODULE: DEFAULT_MODULE,
    ASSIGNEE: UNASSIGNED,
    POINTS: 0.0,
    RELEASE: UNKNOWN_RELEASE,
    SPRINT_COUNT: 0,
}

VELOCITY_COLUMNS: Final[List[str]] = ["release", "total_points", "ticket_count"]

BURNUP_COLUMNS: Final[List[str]] = VELOCITY_COLUMNS + ["cumulative_points"]

EFFICIENCY_COLUMNS: Final[List[str]] = [
    "label",
    "sprint_count",
    "points",
    "module",
    "index",
]

SUMMARY_COLUMNS: Final[List[str]] = [
    "total_points",
    "total_items",
    "avg_complexity",
    "distinct_release_sprint_pairs",
]
