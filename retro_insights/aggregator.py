"""Derive the dashboard views from a sequence of work items.

Each `calculate_*` function is an independent, pure derivation over the
same work items. `aggregate` runs all of them and bundles the results.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal

from .models import (
    Aggregates,
    BurnUpPoint,
    EfficiencyPoint,
    ModuleAssigneeMatrix,
    SummaryStats,
    VelocityPoint,
)

logger = logging.getLogger(__name__)


def round_one_decimal(value):
    """Round to one decimal place, halves away from zero."""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def calculate_velocity(items):
    """Total points and ticket count per release.

    Releases are ordered by plain string comparison, so "R10" sorts before
    "R2".
    """
    totals = {}
    counts = {}
    for item in items:
        totals[item.release] = totals.get(item.release, 0.0) + item.points
        counts[item.release] = counts.get(item.release, 0) + 1

    return [
        VelocityPoint(
            release=release,
            total_points=totals[release],
            ticket_count=counts[release],
        )
        for release in sorted(totals)
    ]


def calculate_burnup(velocity):
    """Running total of points across releases in velocity order."""
    burnup = []
    running_total = 0.0
    for point in velocity:
        running_total += point.total_points
        burnup.append(
            BurnUpPoint(
                release=point.release,
                total_points=point.total_points,
                ticket_count=point.ticket_count,
                cumulative_points=running_total,
            )
        )
    return burnup


def calculate_module_assignee_matrix(items):
    """Sum points for every (module, assignee) pair, zero-filling gaps."""
    modules = {}
    assignees = {}
    sums = {}
    for item in items:
        modules.setdefault(item.module, None)
        assignees.setdefault(item.assignee, None)
        key = (item.module, item.assignee)
        sums[key] = sums.get(key, 0.0) + item.points

    points = {
        module: {
            assignee: sums.get((module, assignee), 0.0) for assignee in assignees
        }
        for module in modules
    }
    return ModuleAssigneeMatrix(
        modules=tuple(modules),
        assignees=tuple(assignees),
        points=points,
    )


def calculate_efficiency(items):
    return [
        EfficiencyPoint(
            label=item.ticket_id,
            sprint_count=item.sprint_count,
            points=item.points,
            module=item.module,
            index=index,
        )
        for index, item in enumerate(items)
    ]


def calculate_summary(items):
    """Headline totals. The average is undefined (None) for no items."""
    total_points = 0.0
    total_items = 0
    pairs = set()
    for item in items:
        total_points += item.points
        total_items += 1
        pairs.add((item.release, item.sprint_count))

    avg_complexity = None
    if total_items > 0:
        avg_complexity = round_one_decimal(total_points / total_items)

    return SummaryStats(
        total_points=total_points,
        total_items=total_items,
        avg_complexity=avg_complexity,
        distinct_release_sprint_pairs=len(pairs),
    )


def aggregate(items):
    """Compute every derived view from `items`.

    Results are rebuilt from scratch on each call; nothing is cached or
    shared between calls.
    """
    items = list(items)
    velocity = calculate_velocity(items)

    logger.debug(
        "Aggregating %d work items across %d releases", len(items), len(velocity)
    )

    return Aggregates(
        summary=calculate_summary(items),
        velocity=tuple(velocity),
        burnup=tuple(calculate_burnup(velocity)),
        module_assignee=calculate_module_assignee_matrix(items),
        efficiency=tuple(calculate_efficiency(items)),
    )
