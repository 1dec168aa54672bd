from .calculators.burnup import BurnupCalculator
from .calculators.efficiency import EfficiencyCalculator
from .calculators.module_assignee import ModuleAssigneeCalculator
from .calculators.summary import SummaryCalculator
from .calculators.velocity import VelocityCalculator

CALCULATORS = (
    SummaryCalculator,
    VelocityCalculator,  # burn-up depends on results from this one
    BurnupCalculator,
    ModuleAssigneeCalculator,
    EfficiencyCalculator,
)
