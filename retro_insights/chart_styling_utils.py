"""Common chart styling utilities shared by the chart writers."""

import logging

import matplotlib.pyplot as plt
import seaborn as sns

# Series colours, cycled when there are more series than entries
CHART_COLORS = [
    "#2563EB",
    "#F59E0B",
    "#10B981",
    "#6366F1",
    "#EC4899",
    "#06B6D4",
    "#8B5CF6",
    "#F43F5E",
]

POINTS_COLOR = CHART_COLORS[0]
COUNT_COLOR = CHART_COLORS[1]
BURNUP_COLOR = CHART_COLORS[2]


def chart_color(index):
    """Colour for the series at `index`."""
    return CHART_COLORS[index % len(CHART_COLORS)]


def set_chart_style(style="whitegrid", despine=True):
    """Set seaborn chart style."""
    sns.set_style(style)
    if despine:
        sns.despine()


def save_chart_with_styling(fig, output_file, title="Chart"):
    """Save chart with common styling and logging.

    Args:
        fig: Matplotlib figure object
        output_file: Output file path
        title: Chart title for logging
    """
    logger = logging.getLogger(__name__)

    logger.info("Writing %s chart to %s", title, output_file)
    fig.savefig(output_file, bbox_inches="tight", dpi=300)
    plt.close(fig)
