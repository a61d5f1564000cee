"""DDL template composition utilities."""

from .ddl import DDLRenderer, StatementSpec
from .dialect import CURRENT, LEGACY, format_zone_config, is_syntax_error

__all__ = [
    "CURRENT",
    "DDLRenderer",
    "LEGACY",
    "StatementSpec",
    "format_zone_config",
    "is_syntax_error",
]
