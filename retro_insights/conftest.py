"""Test configuration and fixtures for Retro Insights.

This module provides sample export rows and work items shared across the
test modules.
"""

import pytest

from .config import default_options
from .models import WorkItem
from .utils import extend_dict

# Fixtures


@pytest.fixture(name="example_rows")
def example_rows_fixture():
    """Three rows from a minimal Jira release export."""
    return [
        {"Epic": "A", "Story Points": "3", "Fix Version": "R1"},
        {"Epic": "B", "Story Points": "5", "Fix Version": "R1"},
        {"Epic": "C", "Story Points": "2", "Fix Version": "R2"},
    ]


@pytest.fixture(name="jira_rows")
def jira_rows_fixture():
    """A fuller export using Jira column names."""
    return [
        {
            "Epic Link": "EP-1",
            "Issue key": "APP-1",
            "Component": "Payments",
            "Assignee": "Alice",
            "Story Points": 5,
            "Fix Version": "R1",
            "Sprint Count": 2,
        },
        {
            "Epic Link": "EP-1",
            "Issue key": "APP-2",
            "Component": "Payments",
            "Assignee": "Bob",
            "Story Points": 3,
            "Fix Version": "R1",
            "Sprint Count": 1,
        },
        {
            "Epic Link": "EP-2",
            "Issue key": "APP-3",
            "Component": "Search",
            "Assignee": "Alice",
            "Story Points": 8,
            "Fix Version": "R2",
            "Sprint Count": 3,
        },
        {
            "Epic Link": "EP-2",
            "Issue key": "APP-4",
            "Component": "Search",
            "Assignee": "Carol",
            "Story Points": "2",
            "Fix Version": "R2",
            "Sprint Count": "1",
        },
    ]


def make_item(**fields):
    """Build a `WorkItem`, defaulting anything not given."""
    return WorkItem(
        **extend_dict(
            {
                "epic": "N/A",
                "ticket_id": "N/A",
                "module": "General",
                "assignee": "Unassigned",
                "points": 0.0,
                "release": "Unknown",
                "sprint_count": 0,
            },
            fields,
        )
    )


@pytest.fixture(name="work_items")
def work_items_fixture():
    """Work items equivalent to `jira_rows` after normalization."""
    return [
        make_item(
            epic="EP-1",
            ticket_id="APP-1",
            module="Payments",
            assignee="Alice",
            points=5.0,
            release="R1",
            sprint_count=2,
        ),
        make_item(
            epic="EP-1",
            ticket_id="APP-2",
            module="Payments",
            assignee="Bob",
            points=3.0,
            release="R1",
            sprint_count=1,
        ),
        make_item(
            epic="EP-2",
            ticket_id="APP-3",
            module="Search",
            assignee="Alice",
            points=8.0,
            release="R2",
            sprint_count=3,
        ),
        make_item(
            epic="EP-2",
            ticket_id="APP-4",
            module="Search",
            assignee="Carol",
            points=2.0,
            release="R2",
            sprint_count=1,
        ),
    ]


@pytest.fixture(name="base_settings")
def base_settings_fixture():
    """Settings with every output switched off."""
    return default_options()["settings"]


@pytest.fixture(name="output_settings")
def output_settings_fixture(base_settings):
    """Settings that write every data file and chart."""
    return extend_dict(
        base_settings,
        {
            "summary_data": ["summary.json"],
            "velocity_data": ["velocity.csv", "velocity.json", "velocity.xlsx"],
            "velocity_chart": "velocity.png",
            "velocity_chart_title": "Velocity",
            "burnup_data": ["burnup.csv"],
            "burnup_chart": "burnup.png",
            "module_assignee_data": ["module_assignee.csv"],
            "module_assignee_chart": "module_assignee.png",
            "efficiency_data": ["efficiency.csv"],
            "efficiency_chart": "efficiency.png",
        },
    )
