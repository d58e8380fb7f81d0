"""Utility functions for ledgernotes."""

from ledgernotes.utils.date_parser import get_date_range, get_month_range, parse_date

__all__ = ["parse_date", "get_date_range", "get_month_range"]
