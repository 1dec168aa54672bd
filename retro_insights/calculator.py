"""Base class and runner for the calculators that produce each view."""

import logging

from .utils import write_dataframe

logger = logging.getLogger(__name__)


class Calculator:
    """Base class for calculators.

    A calculator derives one dataset from the normalized work items in
    `run()` and writes any configured data files or charts in `write()`.
    Results of calculators that ran earlier are available via
    `get_result()`.
    """

    def __init__(self, items, settings, results):
        """Initialise with the work items, settings, and the shared results
        dict keyed by calculator class.
        """
        self.items = items
        self.settings = settings
        self._results = results

    def get_result(self, calculator=None, default=None):
        """Return the result of `calculator`, or of this calculator."""
        return self._results.get(calculator or self.__class__, default)

    def run(self):
        """Run the calculator and return its result.

        The result is stored under this calculator's class and passed back
        through `get_result()`.
        """

    def write(self):
        """Write output files, if any are configured."""

    def write_data(self, data, setting, sheet_name):
        """Write `data` to the files listed in `settings[setting]`."""
        output_files = self.settings.get(setting)
        if not output_files:
            logger.debug("No output file specified for %s data", sheet_name.lower())
            return
        write_dataframe(data, output_files, sheet_name)

    def chart_title(self, setting):
        return self.settings.get(f"{setting}_title")


def run_calculators(calculators, items, settings):
    """Run each calculator in order, then write each one's outputs.

    Returns a dict mapping calculator class to its result.
    """
    results = {}
    instances = [C(items, settings, results) for C in calculators]

    # Run all calculators first
    for c in instances:
        logger.info("%s running", c.__class__.__name__)
        results[c.__class__] = c.run()
        logger.info("%s completed", c.__class__.__name__)

    # Write all files as a second pass
    for c in instances:
        logger.info("Writing file for %s...", c.__class__.__name__)
        try:
            c.write()
        except (OSError, ValueError):
            logger.exception(
                "Writing file for %s failed with a fatal error. "
                "Attempting to run subsequent writers regardless.",
                c.__class__.__name__,
            )
        else:
            logger.info("%s completed", c.__class__.__name__)

    return results
