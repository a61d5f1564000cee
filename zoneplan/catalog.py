"""Read-only catalog probes: index existence and partition counts."""

from __future__ import annotations

from .db.base import DatabaseError, Executor
from .errors import ExistenceCheckError

INDEX_EXISTS_SQL = """
SELECT count(*) > 0
FROM information_schema.statistics
WHERE table_name = %s
AND   index_name = %s
"""

PARTITION_COUNT_SQL = """
SELECT count(*)
FROM crdb_internal.tables t
JOIN crdb_internal.partitions p
USING (table_id)
WHERE t.name = %s
AND p.name ~ %s
"""


def unquote_identifier(name: str) -> str:
    """Strip SQL double quotes, e.g. ``"order"`` -> ``order``, for catalog lookups."""

    if len(name) >= 2 and name[0] == '"' and name[-1] == '"':
        return name[1:-1].replace('""', '"')
    return name


def index_exists(db: Executor, table: str, index: str) -> bool:
    """
    Return whether ``index`` exists on ``table``.

    A missing index is a normal answer (``False``); only a failed query raises
    ``ExistenceCheckError``.
    """

    try:
        rows = db.query(INDEX_EXISTS_SQL, (unquote_identifier(table), index))
    except DatabaseError as err:
        raise ExistenceCheckError(table, index, err) from err
    if not rows:
        return False
    return bool(rows[0][0])


def partition_count(db: Executor, table: str = "warehouse", disambiguator: int = 0) -> int:
    """Count partitions of ``table`` named ``p<disambiguator>_<digits>``."""

    pattern = f"^p{disambiguator}_\\d+$"
    try:
        rows = db.query(PARTITION_COUNT_SQL, (unquote_identifier(table), pattern))
    except DatabaseError as err:
        raise ExistenceCheckError(table, None, err) from err
    if not rows:
        return 0
    return int(rows[0][0])
