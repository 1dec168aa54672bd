"""Velocity calculator for Retro Insights.

This module computes points and ticket counts per release and draws the
release velocity chart.
"""

import logging

import matplotlib.pyplot as plt
from scipy import stats

from ..aggregator import calculate_velocity
from ..calculator import Calculator
from ..chart_styling_utils import (
    COUNT_COLOR,
    POINTS_COLOR,
    save_chart_with_styling,
    set_chart_style,
)
from ..columns import VELOCITY_COLUMNS
from ..utils import records_to_dataframe

logger = logging.getLogger(__name__)


class VelocityCalculator(Calculator):
    """Build a list of `VelocityPoint`, one per release in string order.

    The chart shows ticket count as bars and points as a line, with a
    fitted linear trend over the points.
    """

    def run(self):
        velocity = calculate_velocity(self.items)
        logger.debug("Calculated velocity for %d releases", len(velocity))
        return velocity

    def write(self):
        data = records_to_dataframe(self.get_result(), VELOCITY_COLUMNS)
        self.write_data(data, "velocity_data", "Velocity")

        if self.settings.get("velocity_chart"):
            self.write_chart(data, self.settings["velocity_chart"])
        else:
            logger.debug("No output file specified for velocity chart")

    def write_chart(self, data, output_file):
        if len(data.index) == 0:
            logger.warning("Cannot draw velocity chart with no releases")
            return

        fig, ax = plt.subplots()
        count_ax = ax.twinx()

        title = self.chart_title("velocity_chart")
        if title:
            ax.set_title(title)

        positions = list(range(len(data.index)))

        count_ax.bar(
            positions, data["ticket_count"], color=COUNT_COLOR, alpha=0.6, width=0.5
        )
        count_ax.set_ylabel("Ticket count")

        ax.plot(
            positions,
            data["total_points"],
            color=POINTS_COLOR,
            marker="o",
            linewidth=3,
        )
        # Draw the points line above the count bars
        ax.set_zorder(count_ax.get_zorder() + 1)
        ax.patch.set_visible(False)

        if len(positions) > 1:
            slope, intercept, _, _, _ = stats.linregress(
                positions, data["total_points"]
            )
            ax.plot(
                positions,
                [slope * x + intercept for x in positions],
                "--",
                color=POINTS_COLOR,
                linewidth=1,
            )

        ax.set_xticks(positions)
        ax.set_xticklabels(data["release"], rotation=70, size="small")
        ax.set_xlabel("Release")
        ax.set_ylabel("Story points")

        _, top = ax.get_ylim()
        ax.set_ylim(0, top)

        set_chart_style(despine=False)

        save_chart_with_styling(fig, output_file, "velocity")
