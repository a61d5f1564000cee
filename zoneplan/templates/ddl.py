"""DDL template helpers for partitioning and placement."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from .dialect import CURRENT, format_zone_config


@dataclass
class StatementSpec:
    """Concrete statement instance produced by a renderer."""

    name: str
    sql: str
    params: Dict[str, object] = field(default_factory=dict)


def partition_name(disambiguator: int, part: int) -> str:
    """Name of sub-partition ``part`` for a pass using ``disambiguator``."""

    return f"p{disambiguator}_{part}"


def rack_constraint(index: int) -> str:
    return f"[+rack={index}]"


def zone_constraint(zone: str) -> str:
    return f"[+zone={zone}]"


class DDLRenderer:
    """Render the range-partition, zone and replicated-index statements."""

    def partition_by_range(
        self,
        kind: str,
        name: str,
        column: str,
        bounds: Sequence[int],
        disambiguator: int,
    ) -> StatementSpec:
        """``ALTER <kind> <name> PARTITION BY RANGE`` with one clause per range."""

        kind = kind.upper()
        if kind not in {"TABLE", "INDEX"}:
            raise ValueError(f"kind must be TABLE or INDEX; {kind}")
        parts = len(bounds) - 1
        lines: List[str] = [f"ALTER {kind} {name} PARTITION BY RANGE ({column}) (\n"]
        for i in range(parts):
            clause = (
                f"  PARTITION {partition_name(disambiguator, i)} "
                f"VALUES FROM ({bounds[i]}) to ({bounds[i + 1]})"
            )
            if i + 1 < parts:
                clause += ","
            lines.append(clause + "\n")
        lines.append(")\n")
        params = {
            "kind": kind,
            "name": name,
            "column": column,
            "disambiguator": disambiguator,
            "parts": parts,
        }
        return StatementSpec(name="partition_by_range", sql="".join(lines), params=params)

    def configure_zone(
        self,
        partition: str,
        table: str,
        constraints: str,
        dialect: str = CURRENT,
    ) -> StatementSpec:
        sql = format_zone_config(partition, table, constraints, dialect)
        params = {
            "partition": partition,
            "table": table,
            "constraints": constraints,
            "dialect": dialect,
        }
        return StatementSpec(name="configure_zone", sql=sql, params=params)

    def create_replicated_index(
        self,
        table: str,
        index: str,
        primary_key: Sequence[str],
        storing: Sequence[str],
    ) -> StatementSpec:
        """Covering unique index over the primary key that stores every other column."""

        sql = (
            f"CREATE UNIQUE INDEX {index} ON {table} ({', '.join(primary_key)}) "
            f"STORING ({', '.join(storing)})"
        )
        return StatementSpec(
            name="create_replicated_index",
            sql=sql,
            params={"table": table, "index": index},
        )

    def lease_preference(self, table: str, index: str, zone: str) -> StatementSpec:
        sql = (
            f"ALTER INDEX {table}@{index} "
            f"CONFIGURE ZONE USING lease_preferences = '[{zone_constraint(zone)}]'"
        )
        return StatementSpec(
            name="lease_preference",
            sql=sql,
            params={"table": table, "index": index, "zone": zone},
        )
