"""Utility functions and helpers."""

from edi_dashboard.utils.datetime_utils import to_api_timezone, utc_now
from edi_dashboard.utils.request_helpers import get_client_ip, get_user_agent

__all__ = [
    "to_api_timezone",
    "utc_now",
    "get_client_ip",
    "get_user_agent",
]
