"""Dialect-specific zone configuration syntax."""

from __future__ import annotations

CURRENT = "current"
LEGACY = "legacy"

# Marker carried by the driver's message when the server rejects the grammar.
SYNTAX_ERROR_MARKER = "syntax error"


def format_zone_config(partition: str, table: str, constraints: str, dialect: str) -> str:
    """
    Render the partition zone-constraint statement for the requested dialect.

    Servers that predate the ``CONFIGURE ZONE USING`` grammar only understand
    the ``EXPERIMENTAL CONFIGURE ZONE`` form with a YAML-ish payload.
    """

    if dialect == CURRENT:
        return (
            f"ALTER PARTITION {partition} OF TABLE {table} "
            f"CONFIGURE ZONE USING constraints = '{constraints}'"
        )
    if dialect == LEGACY:
        return (
            f"ALTER PARTITION {partition} OF TABLE {table} "
            f"EXPERIMENTAL CONFIGURE ZONE 'constraints: {constraints}'"
        )
    raise ValueError(f"Unsupported zone config dialect: {dialect}")


def is_syntax_error(error: BaseException) -> bool:
    """Return True when ``error`` means the statement's grammar was rejected."""

    return SYNTAX_ERROR_MARKER in str(error)
