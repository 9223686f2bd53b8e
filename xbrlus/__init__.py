"""
xbrlus — Client for the XBRL US API returning pandas DataFrames.

All tasks except the CIK lookup need an API key, read from the
XBRLUS_API_KEY environment variable (or a .env file).
"""

from xbrlus.core.errors import (  # noqa: F401
    XbrlUsClientError,
    XbrlUsConfigurationError,
    XbrlUsParseError,
    XbrlUsTransportError,
)
from xbrlus.operations.api import (  # noqa: F401
    base_element,
    children,
    cik_lookup,
    extension_element,
    network,
    run_operation,
    tax_children,
    values,
)

__all__ = [
    "XbrlUsClientError",
    "XbrlUsConfigurationError",
    "XbrlUsParseError",
    "XbrlUsTransportError",
    "base_element",
    "children",
    "cik_lookup",
    "extension_element",
    "network",
    "run_operation",
    "tax_children",
    "values",
]
