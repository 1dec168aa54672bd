"""Retro Insights - retrospective analytics for agile work-item exports.

This package normalizes spreadsheet exports of tickets into canonical work
items and derives velocity, burn-up, module/assignee and efficiency views
from them.
"""
