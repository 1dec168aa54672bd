"""Data models shared by the normalizer, aggregator and renderers.

Every model is an immutable value with no behaviour beyond conversion to
plain dictionaries, so results can be handed to any rendering layer or
written out as JSON.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class WorkItem:
    """One ticket, with every field populated."""

    epic: str
    ticket_id: str
    module: str
    assignee: str
    points: float
    release: str
    sprint_count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class VelocityPoint:
    """Effort and ticket count delivered in one release."""

    release: str
    total_points: float
    ticket_count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BurnUpPoint:
    """A velocity point plus the running total up to and including it."""

    release: str
    total_points: float
    ticket_count: int
    cumulative_points: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class EfficiencyPoint:
    label: str
    sprint_count: int
    points: float
    module: str
    index: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SummaryStats:
    """Headline numbers for a whole export.

    ``avg_complexity`` is ``None`` when there are no items to average over.
    """

    total_points: float
    total_items: int
    avg_complexity: Optional[float]
    distinct_release_sprint_pairs: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ModuleAssigneeMatrix:
    """Points per (module, assignee) pair.

    ``points`` maps module -> assignee -> summed points. Every module row
    holds an entry for every assignee in ``assignees``, zero where no item
    matched. Both dimensions keep first-seen order.
    """

    modules: Tuple[str, ...] = ()
    assignees: Tuple[str, ...] = ()
    points: Mapping[str, Mapping[str, float]] = field(default_factory=dict)

    def value(self, module: str, assignee: str) -> float:
        return self.points[module][assignee]

    def to_radar_rows(self) -> List[Dict[str, Any]]:
        """Flatten to one ``{"subject": module, <assignee>: points}`` row per
        module, the shape radar and grouped bar charts expect.
        """
        rows = []
        for module in self.modules:
            row: Dict[str, Any] = {"subject": module}
            row.update(self.points[module])
            rows.append(row)
        return rows

    def to_dict(self) -> Dict[str, Any]:
        return {
            "modules": list(self.modules),
            "assignees": list(self.assignees),
            "points": {
                module: dict(self.points[module]) for module in self.modules
            },
        }


@dataclass(frozen=True)
class Aggregates:
    """Everything derived from one work-item sequence."""

    summary: SummaryStats
    velocity: Tuple[VelocityPoint, ...]
    burnup: Tuple[BurnUpPoint, ...]
    module_assignee: ModuleAssigneeMatrix
    efficiency: Tuple[EfficiencyPoint, ...]

    @property
    def release_count(self) -> int:
        return len(self.velocity)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "velocity": [point.to_dict() for point in self.velocity],
            "burnup": [point.to_dict() for point in self.burnup],
            "module_assignee": self.module_assignee.to_dict(),
            "efficiency": [point.to_dict() for point in self.efficiency],
        }
