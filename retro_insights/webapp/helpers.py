"""Helper functions for the web application."""

import io
import logging

from bokeh.models import (
    ColumnDataSource,
    FactorRange,
    HoverTool,
    LinearAxis,
    Range1d,
)
from bokeh.plotting import figure

from ..aggregator import aggregate
from ..chart_styling_utils import (
    BURNUP_COLOR,
    COUNT_COLOR,
    POINTS_COLOR,
    chart_color,
)
from ..normalizer import normalize
from ..reader import read_rows

logger = logging.getLogger(__name__)


def aggregate_upload(file_storage, sheet=None):
    """Decode an uploaded file and return its `Aggregates`.

    Raises DecodeError or EmptyInputError from the pipeline unchanged.
    """
    content = io.BytesIO(file_storage.read())
    rows = read_rows(content, filename=file_storage.filename, sheet=sheet)
    items = normalize(rows)
    return aggregate(items)


def velocity_figure(velocity):
    """Ticket count bars on a right-hand axis with a points line on top."""
    releases = [point.release for point in velocity]
    source = ColumnDataSource(
        data={
            "release": releases,
            "points": [point.total_points for point in velocity],
            "count": [point.ticket_count for point in velocity],
        }
    )

    max_count = max((point.ticket_count for point in velocity), default=0)

    p = figure(
        title="Release Velocity",
        x_range=FactorRange(*releases),
        width=1000,
        height=400,
        toolbar_location=None,
    )
    p.extra_y_ranges = {"count": Range1d(start=0, end=max_count * 1.2 + 1)}
    p.add_layout(LinearAxis(y_range_name="count", axis_label="Ticket count"), "right")

    p.vbar(
        x="release",
        top="count",
        source=source,
        width=0.5,
        color=COUNT_COLOR,
        y_range_name="count",
        legend_label="Ticket count",
    )
    p.line(
        x="release",
        y="points",
        source=source,
        line_width=4,
        color=POINTS_COLOR,
        legend_label="Story points",
    )
    p.scatter(x="release", y="points", source=source, size=10, color=POINTS_COLOR)

    p.add_tools(
        HoverTool(
            tooltips=[("Release", "@release"), ("Points", "@points"), ("Tickets", "@count")]
        )
    )
    p.legend.location = "top_left"
    p.xaxis.axis_label = "Release"
    p.yaxis[0].axis_label = "Story points"
    p.y_range.start = 0
    return p


def burnup_figure(burnup):
    releases = [point.release for point in burnup]
    source = ColumnDataSource(
        data={
            "release": releases,
            "total": [point.cumulative_points for point in burnup],
        }
    )

    p = figure(
        title="Burn-Up Trajectory",
        x_range=FactorRange(*releases),
        width=500,
        height=250,
        toolbar_location=None,
    )
    p.varea(x="release", y1=0, y2="total", source=source, color=BURNUP_COLOR, alpha=0.2)
    p.line(x="release", y="total", source=source, line_width=3, color=BURNUP_COLOR)
    p.add_tools(HoverTool(tooltips=[("Release", "@release"), ("Total", "@total")]))
    p.y_range.start = 0
    return p


def module_assignee_figure(matrix):
    """Grouped bars of points per assignee within each module."""
    factors = [
        (module, assignee) for module in matrix.modules for assignee in matrix.assignees
    ]
    colors = [
        chart_color(i) for _ in matrix.modules for i in range(len(matrix.assignees))
    ]
    source = ColumnDataSource(
        data={
            "x": factors,
            "points": [matrix.value(module, assignee) for module, assignee in factors],
            "color": colors,
        }
    )

    p = figure(
        title="Knowledge Radar: points per module across the team",
        x_range=FactorRange(*factors),
        width=500,
        height=400,
        toolbar_location=None,
    )
    p.vbar(x="x", top="points", source=source, width=0.9, color="color")
    p.add_tools(HoverTool(tooltips=[("Module, assignee", "@x"), ("Points", "@points")]))
    p.xaxis.major_label_orientation = 1.2
    p.xgrid.grid_line_color = None
    p.y_range.start = 0
    return p


def efficiency_figure(efficiency):
    """Scatter of sprints spent against points delivered per ticket."""
    source = ColumnDataSource(
        data={
            "name": [point.label for point in efficiency],
            "sprints": [point.sprint_count for point in efficiency],
            "points": [point.points for point in efficiency],
            "module": [point.module for point in efficiency],
            "color": [chart_color(point.index) for point in efficiency],
        }
    )

    p = figure(
        title="Efficiency Scatter: sprints vs points",
        width=500,
        height=400,
        toolbar_location=None,
    )
    p.scatter(
        x="sprints", y="points", source=source, size=12, color="color", alpha=0.8
    )
    p.add_tools(
        HoverTool(
            tooltips=[
                ("Ticket", "@name"),
                ("Module", "@module"),
                ("Sprints", "@sprints"),
                ("Points", "@points"),
            ]
        )
    )
    p.xaxis.axis_label = "Sprints"
    p.yaxis.axis_label = "Points"
    return p


def dashboard_figures(aggregates, tab):
    """Bokeh figures for the given dashboard tab, keyed by template slot."""
    if tab == "deep":
        return {
            "module_assignee": module_assignee_figure(aggregates.module_assignee),
            "efficiency": efficiency_figure(aggregates.efficiency),
        }
    return {
        "velocity": velocity_figure(aggregates.velocity),
        "burnup": burnup_figure(aggregates.burnup),
    }
