"""Summary calculator for Retro Insights.

This module produces the headline KPIs shown above every dashboard tab.
"""

import logging

import pandas as pd

from ..aggregator import calculate_summary
from ..calculator import Calculator
from ..columns import SUMMARY_COLUMNS

logger = logging.getLogger(__name__)


class SummaryCalculator(Calculator):
    """Total points, ticket count, average complexity and the number of
    distinct (release, sprint count) pairs.
    """

    def run(self):
        return calculate_summary(self.items)

    def write(self):
        data = pd.DataFrame([self.get_result().to_dict()], columns=SUMMARY_COLUMNS)
        self.write_data(data, "summary_data", "Summary")
