"""Utility functions for Retro Insights.

This module provides small helpers shared by the calculators, the command
line interface and the web application.
"""

import logging
import os.path

import pandas as pd
import seaborn as sns

logger = logging.getLogger(__name__)


def extend_dict(d, e):
    """Extend dictionary d with entries from e, returning a new dictionary."""
    r = d.copy()
    r.update(e)
    return r


def get_extension(filename):
    """Get file extension from filename."""
    return os.path.splitext(filename)[1].lower()


def set_chart_context(context):
    """Set seaborn chart context."""
    sns.set_context(context)


def records_to_dataframe(records, columns):
    """Build a DataFrame from model objects exposing `to_dict()`."""
    return pd.DataFrame([record.to_dict() for record in records], columns=columns)


def write_dataframe(data, output_files, sheet_name):
    """Write `data` to each output file, choosing the format by extension.

    ``.json`` files get a list of records, ``.xlsx`` files a single sheet
    called `sheet_name`, anything else CSV.
    """
    for output_file in output_files:
        output_extension = get_extension(output_file)

        logger.info("Writing %s data to %s", sheet_name.lower(), output_file)
        if output_extension == ".json":
            data.to_json(output_file, orient="records", indent=2)
        elif output_extension == ".xlsx":
            data.to_excel(output_file, sheet_name=sheet_name, index=False)
        else:
            data.to_csv(output_file, header=True, index=False)
