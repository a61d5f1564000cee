"""YAML plan emission."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence

import yaml

from ..errors import InvalidArgument
from ..partitioner import Partitioner
from ..templates.ddl import partition_name, rack_constraint, zone_constraint


def plan_payload(
    partitioner: Partitioner, zones: Optional[Sequence[str]] = None
) -> Dict[str, object]:
    """Describe the partition layout and where each partition is placed."""

    zones = list(zones or [])
    if zones and len(zones) < partitioner.parts:
        raise InvalidArgument(f"zones < parts; {len(zones)} < {partitioner.parts}")
    partitions: List[Dict[str, object]] = []
    for i, elems in enumerate(partitioner.partition_elements):
        lo, hi = partitioner.partition_range(i)
        partitions.append(
            {
                "name": partition_name(0, i),
                "range": [lo, hi],
                "active": list(elems),
                "constraints": zone_constraint(zones[i]) if zones else rack_constraint(i),
            }
        )
    return {
        "total": partitioner.total,
        "active": partitioner.active,
        "parts": partitioner.parts,
        "bounds": list(partitioner.bounds),
        "partitions": partitions,
    }


def write_plan(
    path: str | Path,
    partitioner: Partitioner,
    zones: Optional[Sequence[str]] = None,
) -> None:
    """Persist the plan summary to YAML."""

    payload = {"plan": plan_payload(partitioner, zones)}
    with Path(path).open("w", encoding="utf-8") as handle:
        yaml.safe_dump(payload, handle, sort_keys=False)
