"""
clients package — HTTP access to the XBRL US API.
"""

from .xbrlus_client import XbrlUsClient  # noqa: F401
