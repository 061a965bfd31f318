"""Utility functions for expensetrack."""

from expensetrack.utils.date_parser import parse_date
from expensetrack.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_amount"]
