"""Utility functions for debtbook."""

from debtbook.utils.date_parser import parse_date, truncate_to_day
from debtbook.utils.amount_parser import digits_amount, parse_amount, to_whole_units

__all__ = ["parse_date", "truncate_to_day", "digits_amount", "parse_amount", "to_whole_units"]
