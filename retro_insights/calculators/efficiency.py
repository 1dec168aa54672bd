"""Efficiency calculator for Retro Insights.

This module projects each work item to a (sprints, points) pair for the
efficiency scatter plot.
"""

import logging

import matplotlib.pyplot as plt

from ..aggregator import calculate_efficiency
from ..calculator import Calculator
from ..chart_styling_utils import chart_color, save_chart_with_styling, set_chart_style
from ..columns import EFFICIENCY_COLUMNS
from ..utils import records_to_dataframe

logger = logging.getLogger(__name__)


class EfficiencyCalculator(Calculator):
    """Build a list of `EfficiencyPoint`, one per work item in input order."""

    def run(self):
        return calculate_efficiency(self.items)

    def write(self):
        data = records_to_dataframe(self.get_result(), EFFICIENCY_COLUMNS)
        self.write_data(data, "efficiency_data", "Efficiency")

        if self.settings.get("efficiency_chart"):
            self.write_chart(data, self.settings["efficiency_chart"])
        else:
            logger.debug("No output file specified for efficiency chart")

    def write_chart(self, data, output_file):
        if len(data.index) == 0:
            logger.warning("Cannot draw efficiency chart with no items")
            return

        fig, ax = plt.subplots()

        title = self.chart_title("efficiency_chart")
        if title:
            ax.set_title(title)

        ax.scatter(
            data["sprint_count"],
            data["points"],
            s=60,
            c=[chart_color(i) for i in data["index"]],
            alpha=0.8,
        )

        for _, row in data.iterrows():
            ax.annotate(
                row["label"],
                xy=(row["sprint_count"], row["points"]),
                xytext=(4, 4),
                textcoords="offset points",
                fontsize="xx-small",
            )

        ax.set_xlabel("Sprints")
        ax.set_ylabel("Story points")

        set_chart_style()

        save_chart_with_styling(fig, output_file, "efficiency")
