"""Range-partition DDL emission and per-partition zone configuration."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .catalog import index_exists
from .db.base import DatabaseError, Executor
from .errors import InvalidArgument, StatementExecutionError
from .partitioner import Partitioner
from .templates.ddl import DDLRenderer, partition_name, rack_constraint, zone_constraint
from .templates.dialect import CURRENT, LEGACY, is_syntax_error

logger = logging.getLogger(__name__)


class ZoneConfigurator:
    """
    Issue partitioning and placement statements for one partitioner.

    When ``zones`` is empty, partition ``i`` is constrained to ``+rack=i``;
    otherwise to ``+zone=zones[i]``. Every statement runs synchronously on the
    given executor, one at a time.
    """

    def __init__(
        self,
        db: Executor,
        partitioner: Partitioner,
        zones: Optional[Sequence[str]] = None,
        renderer: Optional[DDLRenderer] = None,
    ) -> None:
        self.db = db
        self.partitioner = partitioner
        self.zones = list(zones or [])
        self.renderer = renderer or DDLRenderer()

    # ------------------------------------------------------------------ helpers
    def _exec(self, statement: str) -> None:
        try:
            self.db.execute(statement)
        except DatabaseError as err:
            raise StatementExecutionError(statement, err) from err

    def constraints_for(self, constraint: int) -> str:
        if self.zones:
            if not 0 <= constraint < len(self.zones):
                raise InvalidArgument(
                    f"no zone for constraint {constraint}; {len(self.zones)} zones given"
                )
            return zone_constraint(self.zones[constraint])
        return rack_constraint(constraint)

    # ------------------------------------------------------------------- zones
    def configure_zone(self, table: str, partition: str, constraint: int) -> None:
        """
        Constrain ``partition`` of ``table`` to a rack or zone.

        The current grammar is tried first. Only a syntax error earns one more
        attempt with the legacy ``EXPERIMENTAL`` grammar.
        """

        constraints = self.constraints_for(constraint)
        statement = self.renderer.configure_zone(partition, table, constraints, CURRENT).sql
        try:
            self.db.execute(statement)
            return
        except DatabaseError as err:
            if not is_syntax_error(err):
                raise StatementExecutionError(statement, err) from err
            logger.info(
                "zone config for %s of %s rejected (%s); retrying with legacy syntax",
                partition,
                table,
                err,
            )

        legacy = self.renderer.configure_zone(partition, table, constraints, LEGACY).sql
        self._exec(legacy)

    # -------------------------------------------------------------- partitions
    def partition_object(
        self, kind: str, name: str, column: str, table: str, disambiguator: int
    ) -> None:
        """Range-partition a TABLE or INDEX, then place each of its partitions."""

        spec = self.renderer.partition_by_range(
            kind, name, column, self.partitioner.bounds, disambiguator
        )
        self._exec(spec.sql)
        for i in range(self.partitioner.parts):
            self.configure_zone(table, partition_name(disambiguator, i), i)

    def partition_table(self, table: str, column: str, disambiguator: int = 0) -> None:
        self.partition_object("TABLE", table, column, table, disambiguator)

    def partition_index(
        self, table: str, index: str, column: str, disambiguator: int
    ) -> bool:
        """
        Partition ``table@index`` if the index exists.

        Returns False, having executed nothing, when the index is absent. Some
        indexes only exist while foreign keys are enforced.
        """

        if not index_exists(self.db, table, index):
            logger.info("index %s@%s not found; skipping", table, index)
            return False
        self.partition_object("INDEX", f"{table}@{index}", column, table, disambiguator)
        return True

    # -------------------------------------------------------------- replication
    def replicate_reference_table(
        self, table: str, primary_key: Sequence[str], storing: Sequence[str]
    ) -> int:
        """
        Give every zone a covering index of ``table`` with a local leaseholder.

        Only valid for tables that are never written during a run. Returns the
        number of indexes created.
        """

        for i, zone in enumerate(self.zones):
            index = f"replicated_idx_{i}"
            create = self.renderer.create_replicated_index(table, index, primary_key, storing)
            self._exec(create.sql)
            lease = self.renderer.lease_preference(table, index, zone)
            self._exec(lease.sql)
        return len(self.zones)
