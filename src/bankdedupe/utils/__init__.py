"""Utility functions for bankdedupe."""

from bankdedupe.utils.date_parser import parse_date, parse_datetime
from bankdedupe.utils.target_parser import parse_targets

__all__ = ["parse_date", "parse_datetime", "parse_targets"]
