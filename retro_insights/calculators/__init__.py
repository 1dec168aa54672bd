"""Calculators for each dashboard view."""
