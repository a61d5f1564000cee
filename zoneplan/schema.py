"""Partition targets for the TPC-C schema."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Mapping, Tuple

from .errors import InvalidArgument


@dataclass(frozen=True)
class IndexTarget:
    """Secondary index partitioned on ``column`` with its own name prefix."""

    name: str
    column: str
    disambiguator: int


@dataclass(frozen=True)
class PartitionTarget:
    """Table partitioned on ``column`` (prefix ``p0_``) plus its indexes."""

    table: str
    column: str
    indexes: Tuple[IndexTarget, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ReferenceTable:
    """Immutable table replicated to every zone instead of partitioned."""

    name: str
    primary_key: Tuple[str, ...]
    storing: Tuple[str, ...]


def _index(name, column, disambiguator):
    return {"name": name, "column": column, "disambiguator": disambiguator}


TPCC_TABLES = {
    "warehouse": {"column": "w_id", "indexes": []},
    "district": {"column": "d_w_id", "indexes": []},
    "new_order": {"column": "no_w_id", "indexes": []},
    '"order"': {
        "column": "o_w_id",
        "indexes": [_index("order_idx", "o_w_id", 1)],
    },
    "order_line": {
        "column": "ol_w_id",
        "indexes": [_index("order_line_stock_fk_idx", "ol_supply_w_id", 1)],
    },
    # stock_item_fk_idx has no warehouse prefix, so it cannot be range
    # partitioned by warehouse.
    "stock": {"column": "s_w_id", "indexes": []},
    "customer": {
        "column": "c_w_id",
        "indexes": [_index("customer_idx", "c_w_id", 1)],
    },
    "history": {
        "column": "h_w_id",
        "indexes": [
            _index("history_customer_fk_idx", "h_c_w_id", 1),
            _index("history_district_fk_idx", "h_w_id", 2),
        ],
    },
}

TPCC_REFERENCE = {
    "name": "item",
    "primary_key": ["i_id"],
    "storing": ["i_im_id", "i_name", "i_price", "i_data"],
}


def build_catalog(tables: Mapping[str, Mapping[str, object]]) -> List[PartitionTarget]:
    """
    Turn a ``{table: {"column": ..., "indexes": [...]}}`` mapping into targets.

    Disambiguator ``0`` belongs to the table-level pass; two passes over the
    same table may not share a disambiguator.
    """

    targets: List[PartitionTarget] = []
    for table, entry in tables.items():
        try:
            column = str(entry["column"])
            indexes = tuple(
                IndexTarget(
                    name=str(idx["name"]),
                    column=str(idx["column"]),
                    disambiguator=int(idx["disambiguator"]),
                )
                for idx in entry.get("indexes") or []
            )
        except (KeyError, TypeError, ValueError, AttributeError) as err:
            raise InvalidArgument(f"malformed partition target {table}: {err!r}") from err
        seen = {0}
        for idx in indexes:
            if idx.disambiguator in seen:
                raise InvalidArgument(
                    f"duplicate partition disambiguator {idx.disambiguator} on {table}"
                )
            seen.add(idx.disambiguator)
        targets.append(PartitionTarget(table=table, column=column, indexes=indexes))
    return targets


def build_reference(entry: Mapping[str, object]) -> ReferenceTable:
    try:
        return ReferenceTable(
            name=str(entry["name"]),
            primary_key=tuple(entry["primary_key"]),
            storing=tuple(entry["storing"]),
        )
    except (KeyError, TypeError) as err:
        raise InvalidArgument(f"malformed reference table: {err!r}") from err


TPCC_CATALOG = build_catalog(TPCC_TABLES)
TPCC_ITEM = build_reference(TPCC_REFERENCE)
TABLE_LIST = [target.table for target in TPCC_CATALOG]

__all__: List[str] = [
    "IndexTarget",
    "PartitionTarget",
    "ReferenceTable",
    "TABLE_LIST",
    "TPCC_CATALOG",
    "TPCC_ITEM",
    "TPCC_REFERENCE",
    "TPCC_TABLES",
    "build_catalog",
    "build_reference",
]
