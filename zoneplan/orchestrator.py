"""Drive partitioning and placement over the whole schema, in order."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .db.base import Executor
from .errors import InvalidArgument
from .partitioner import Partitioner
from .schema import TPCC_CATALOG, TPCC_ITEM, PartitionTarget, ReferenceTable
from .zone import ZoneConfigurator

logger = logging.getLogger(__name__)


@dataclass
class PlacementReport:
    """What a placement run touched."""

    tables: int = 0
    indexes: int = 0
    skipped_indexes: int = 0
    replicated_indexes: int = 0


def partition_tables(
    db: Executor,
    partitioner: Partitioner,
    zones: Optional[Sequence[str]] = None,
    catalog: Sequence[PartitionTarget] = TPCC_CATALOG,
    reference: Optional[ReferenceTable] = TPCC_ITEM,
) -> PlacementReport:
    """
    Partition every target in ``catalog`` and replicate ``reference`` per zone.

    Statements run strictly one after another. The first terminal failure
    propagates and nothing already applied is rolled back.
    """

    zones = list(zones or [])
    if zones and len(zones) < partitioner.parts:
        raise InvalidArgument(
            f"zones < parts; {len(zones)} < {partitioner.parts}"
        )

    configurator = ZoneConfigurator(db, partitioner, zones)
    report = PlacementReport()
    for target in catalog:
        logger.info("partitioning %s on %s", target.table, target.column)
        configurator.partition_table(target.table, target.column, 0)
        report.tables += 1
        for index in target.indexes:
            if configurator.partition_index(
                target.table, index.name, index.column, index.disambiguator
            ):
                report.indexes += 1
            else:
                report.skipped_indexes += 1

    if reference is not None:
        report.replicated_indexes = configurator.replicate_reference_table(
            reference.name, reference.primary_key, reference.storing
        )
    logger.info("placement finished: %s", report)
    return report
