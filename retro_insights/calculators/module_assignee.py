"""Module x assignee calculator for Retro Insights.

This module sums points per module and assignee, the data behind the
"knowledge radar" view of who works on which part of the system.
"""

import logging

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from ..aggregator import calculate_module_assignee_matrix
from ..calculator import Calculator
from ..chart_styling_utils import chart_color, save_chart_with_styling, set_chart_style

logger = logging.getLogger(__name__)


def matrix_to_dataframe(matrix):
    """One row per module, one column per assignee, module as first column."""
    data = pd.DataFrame(
        [[matrix.value(m, a) for a in matrix.assignees] for m in matrix.modules],
        columns=list(matrix.assignees),
    )
    # An assignee may itself be called "module"
    data.insert(0, "module", list(matrix.modules), allow_duplicates=True)
    return data


class ModuleAssigneeCalculator(Calculator):
    """Build a `ModuleAssigneeMatrix` of points per (module, assignee)."""

    def run(self):
        matrix = calculate_module_assignee_matrix(self.items)
        logger.debug(
            "Calculated %d modules x %d assignees",
            len(matrix.modules),
            len(matrix.assignees),
        )
        return matrix

    def write(self):
        matrix = self.get_result()
        self.write_data(
            matrix_to_dataframe(matrix), "module_assignee_data", "Module assignee"
        )

        if self.settings.get("module_assignee_chart"):
            self.write_chart(matrix, self.settings["module_assignee_chart"])
        else:
            logger.debug("No output file specified for module assignee chart")

    def write_chart(self, matrix, output_file):
        """Draw a radar chart with one axis per module and one trace per
        assignee.
        """
        if len(matrix.modules) == 0:
            logger.warning("Cannot draw module assignee chart with no modules")
            return

        angles = np.linspace(0, 2 * np.pi, len(matrix.modules), endpoint=False)
        # Repeat the first angle to close each polygon
        closed_angles = np.concatenate([angles, angles[:1]])

        fig = plt.figure()
        ax = fig.add_subplot(projection="polar")

        title = self.chart_title("module_assignee_chart")
        if title:
            ax.set_title(title)

        for i, assignee in enumerate(matrix.assignees):
            values = [matrix.value(module, assignee) for module in matrix.modules]
            values.append(values[0])
            color = chart_color(i)
            ax.plot(closed_angles, values, color=color, linewidth=1, label=assignee)
            ax.fill(closed_angles, values, color=color, alpha=0.2)

        ax.set_xticks(angles)
        ax.set_xticklabels(matrix.modules, size="small")
        ax.legend(loc="center left", bbox_to_anchor=(1.1, 0.5))

        # Polar axes have no top/right spines to remove
        set_chart_style(despine=False)

        save_chart_with_styling(fig, output_file, "module assignee")
