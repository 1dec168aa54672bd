"""Tests for calculator functionality in Retro Insights.

This module contains unit tests for the base Calculator class and calculator utilities.
"""

import logging

from .calculator import Calculator, run_calculators


def test_run_calculator():
    """Test run_calculator functionality."""
    written = []

    class Enabled(Calculator):
        """Test calculator that is enabled."""

        def run(self):
            return "Enabled"

        def write(self):
            written.append("Enabled")

    class Disabled(Calculator):
        """Test calculator that is disabled."""

        def run(self):
            return "Disabled"

        def write(self):
            pass

    class GetPreviousResult(Calculator):
        """Test calculator that gets previous results."""

        def run(self):
            return self.get_result(Enabled) + " " + self.settings["foo"]

        def write(self):
            written.append(self.get_result())

    calculators = [Enabled, Disabled, GetPreviousResult]
    items = []
    settings = {"foo": "bar"}

    results = run_calculators(calculators, items, settings)

    assert results == {
        Enabled: "Enabled",
        Disabled: "Disabled",
        GetPreviousResult: "Enabled bar",
    }

    assert written == ["Enabled", "Enabled bar"]


def test_calculator_sees_items(work_items):
    class CountItems(Calculator):
        def run(self):
            return len(self.items)

    results = run_calculators([CountItems], work_items, {})

    assert results[CountItems] == 4


def test_failed_writer_does_not_stop_others(caplog):
    """Test a writer raising an I/O error is logged and the rest still run."""
    written = []

    class Broken(Calculator):
        def write(self):
            raise OSError("disk full")

    class Fine(Calculator):
        def write(self):
            written.append("Fine")

    with caplog.at_level(logging.ERROR):
        run_calculators([Broken, Fine], [], {})

    assert written == ["Fine"]
    assert "Writing file for Broken failed" in caplog.text


def test_get_result_default():
    calculator = Calculator([], {}, {})

    assert calculator.get_result(default="missing") == "missing"


def test_write_data_without_files(mocker):
    mock_write = mocker.patch("retro_insights.calculator.write_dataframe")
    calculator = Calculator([], {"velocity_data": None}, {})

    calculator.write_data(object(), "velocity_data", "Velocity")

    mock_write.assert_not_called()
