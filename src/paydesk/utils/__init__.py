"""Utility functions for paydesk."""

from paydesk.utils.date_parser import parse_date
from paydesk.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_amount"]
