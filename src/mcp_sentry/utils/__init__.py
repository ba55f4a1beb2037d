"""
Utility functions for the MCP Sentry integration.
"""

from .env import get_env_float, is_env_ssl_verify, is_env_truthy
from .fields import parse_field_spec, prune, select_fields

__all__ = [
    "get_env_float",
    "is_env_ssl_verify",
    "is_env_truthy",
    "parse_field_spec",
    "prune",
    "select_fields",
]
