"""Utilities"""

from .config import get_settings, Settings
from .date_utils import generate_dates, date_key, format_de_datetime, parse_int

__all__ = ["get_settings", "Settings", "generate_dates", "date_key", "format_de_datetime", "parse_int"]
