"""PostgreSQL wire-protocol executor."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import psycopg2

from .base import DatabaseError, Executor

logger = logging.getLogger(__name__)


class PostgresExecutor(Executor):
    """Issue statements over a single autocommit psycopg2 connection."""

    def __init__(self, dsn: str) -> None:
        self._dsn = dsn
        self._conn = None

    def __enter__(self) -> "PostgresExecutor":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def connect(self) -> None:
        if self._conn is not None:
            return
        try:
            self._conn = psycopg2.connect(self._dsn)
        except psycopg2.Error as err:
            raise DatabaseError(str(err).strip()) from err
        # Schema changes must not sit inside an explicit transaction.
        self._conn.autocommit = True

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def execute(self, statement: str, params: Optional[Sequence[object]] = None) -> None:
        self.connect()
        logger.debug("exec: %s", statement)
        try:
            with self._conn.cursor() as cursor:
                cursor.execute(statement, params)
        except psycopg2.Error as err:
            raise DatabaseError(str(err).strip()) from err

    def query(
        self, statement: str, params: Optional[Sequence[object]] = None
    ) -> List[Tuple[object, ...]]:
        self.connect()
        logger.debug("query: %s params=%s", statement, params)
        try:
            with self._conn.cursor() as cursor:
                cursor.execute(statement, params)
                return cursor.fetchall()
        except psycopg2.Error as err:
            raise DatabaseError(str(err).strip()) from err
