"""Dry-run executor that records statements instead of running them."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .base import DatabaseError, Executor

logger = logging.getLogger(__name__)


class RecordingExecutor(Executor):
    """
    Collect every executed statement in order.

    ``existing_indexes`` answers index probes: ``None`` means every index
    exists, otherwise only the listed ``(table, index)`` pairs do. ``failures``
    maps a substring to an error message; any statement containing the
    substring raises ``DatabaseError`` with that message.
    """

    def __init__(
        self,
        existing_indexes: Optional[Iterable[Tuple[str, str]]] = None,
        failures: Optional[Dict[str, str]] = None,
        partition_count: int = 0,
    ) -> None:
        self._existing = None if existing_indexes is None else set(existing_indexes)
        self._failures = dict(failures or {})
        self._partition_count = partition_count
        self.statements: List[str] = []
        self.queries: List[Tuple[str, Optional[Sequence[object]]]] = []

    def execute(self, statement: str, params: Optional[Sequence[object]] = None) -> None:
        logger.debug("exec: %s", statement)
        self.statements.append(statement)
        for needle, message in self._failures.items():
            if needle in statement:
                raise DatabaseError(message)

    def query(
        self, statement: str, params: Optional[Sequence[object]] = None
    ) -> List[Tuple[object, ...]]:
        self.queries.append((statement, params))
        if "information_schema.statistics" in statement:
            if self._existing is None:
                return [(True,)]
            table, index = params
            return [((table, index) in self._existing,)]
        if "crdb_internal.partitions" in statement:
            return [(self._partition_count,)]
        raise DatabaseError(f"unsupported dry-run query: {statement}")
