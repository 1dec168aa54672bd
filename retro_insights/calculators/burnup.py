"""Burn-up calculator for Retro Insights.

This module accumulates release velocity into a burn-up trajectory.
"""

import logging

import matplotlib.pyplot as plt

from ..aggregator import calculate_burnup
from ..calculator import Calculator
from ..chart_styling_utils import (
    BURNUP_COLOR,
    save_chart_with_styling,
    set_chart_style,
)
from ..columns import BURNUP_COLUMNS
from ..utils import records_to_dataframe
from .velocity import VelocityCalculator

logger = logging.getLogger(__name__)


class BurnupCalculator(Calculator):
    """Running total of points across releases, in velocity order."""

    def run(self):
        velocity = self.get_result(VelocityCalculator)
        return calculate_burnup(velocity)

    def write(self):
        data = records_to_dataframe(self.get_result(), BURNUP_COLUMNS)
        self.write_data(data, "burnup_data", "Burnup")

        if self.settings.get("burnup_chart"):
            self.write_chart(data, self.settings["burnup_chart"])
        else:
            logger.debug("No output file specified for burnup chart")

    def write_chart(self, data, output_file):
        if len(data.index) == 0:
            logger.warning("Cannot draw burnup chart with no releases")
            return

        fig, ax = plt.subplots()

        title = self.chart_title("burnup_chart")
        if title:
            ax.set_title(title)

        positions = list(range(len(data.index)))
        ax.fill_between(
            positions, data["cumulative_points"], color=BURNUP_COLOR, alpha=0.2
        )
        ax.plot(positions, data["cumulative_points"], color=BURNUP_COLOR, linewidth=3)

        ax.set_xticks(positions)
        ax.set_xticklabels(data["release"], rotation=70, size="small")
        ax.set_xlabel("Release")
        ax.set_ylabel("Cumulative story points")
        ax.set_ylim(bottom=0)

        set_chart_style()

        save_chart_with_styling(fig, output_file, "burnup")
