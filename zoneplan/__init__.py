"""
Zone placement planner (zoneplan) package.

This package splits a warehouse keyspace into balanced partitions, picks the
active warehouses inside each partition, and issues the range-partitioning and
zone-constraint DDL that pins every partition to a rack or geographic zone.
"""

from .errors import (
    ExistenceCheckError,
    InvalidArgument,
    PlacementError,
    StatementExecutionError,
)
from .partitioner import IndexSource, Partitioner

__all__ = [
    "ExistenceCheckError",
    "IndexSource",
    "InvalidArgument",
    "Partitioner",
    "PlacementError",
    "StatementExecutionError",
    "catalog",
    "cli",
    "db",
    "emit",
    "orchestrator",
    "schema",
    "templates",
    "zone",
]
