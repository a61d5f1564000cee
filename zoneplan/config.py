"""YAML-backed placement configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from .errors import InvalidArgument
from .partitioner import Partitioner
from .schema import (
    TPCC_CATALOG,
    TPCC_ITEM,
    PartitionTarget,
    ReferenceTable,
    build_catalog,
    build_reference,
)


@dataclass
class PlacementConfig:
    """
    Inputs of one placement run.

    ``active_warehouses`` defaults to ``warehouses``. An optional ``tables``
    section (same shape as ``TPCC_TABLES``) and ``reference`` section replace
    the built-in TPC-C catalog.
    """

    warehouses: int
    partitions: int
    active_warehouses: Optional[int] = None
    zones: List[str] = field(default_factory=list)
    catalog: List[PartitionTarget] = field(default_factory=lambda: list(TPCC_CATALOG))
    reference: Optional[ReferenceTable] = TPCC_ITEM

    @property
    def active(self) -> int:
        return self.warehouses if self.active_warehouses is None else self.active_warehouses

    def build_partitioner(self) -> Partitioner:
        return Partitioner(total=self.warehouses, active=self.active, parts=self.partitions)

    @classmethod
    def from_dict(cls, payload: Dict[str, object]) -> "PlacementConfig":
        if not isinstance(payload, dict):
            raise InvalidArgument(f"placement config must be a mapping; got {type(payload).__name__}")
        if "warehouses" not in payload:
            raise InvalidArgument("placement config requires 'warehouses'")
        active = payload.get("active_warehouses")
        zones = payload.get("zones") or []
        if isinstance(zones, str):
            zones = [z.strip() for z in zones.split(",") if z.strip()]
        try:
            config = cls(
                warehouses=int(payload["warehouses"]),
                partitions=int(payload.get("partitions", 1)),
                active_warehouses=None if active is None else int(active),
                zones=[str(z) for z in zones],
            )
        except (TypeError, ValueError) as err:
            raise InvalidArgument(f"malformed placement config: {err}") from err
        tables = payload.get("tables")
        if tables:
            if not isinstance(tables, dict):
                raise InvalidArgument("'tables' must map table names to partition targets")
            config.catalog = build_catalog(tables)
        if "reference" in payload:
            ref = payload["reference"]
            config.reference = None if ref is None else build_reference(ref)
        return config

    @classmethod
    def from_yaml(cls, path: str | Path) -> "PlacementConfig":
        """Load a config file; ``OSError`` and ``yaml.YAMLError`` propagate."""

        with Path(path).open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle) or {}
        return cls.from_dict(payload)
