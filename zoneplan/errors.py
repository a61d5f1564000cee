"""Error taxonomy for partition planning and zone placement."""

from __future__ import annotations


class PlacementError(Exception):
    """Base class for every failure raised by ``zoneplan``."""


class InvalidArgument(PlacementError, ValueError):
    """Numeric or placement preconditions do not hold."""


class StatementExecutionError(PlacementError):
    """A DDL statement failed terminally."""

    def __init__(self, statement: str, cause: BaseException) -> None:
        self.statement = statement
        self.cause = cause
        super().__init__(f"Couldn't exec {statement!r}: {cause}")


class ExistenceCheckError(PlacementError):
    """A catalog probe could not be answered."""

    def __init__(self, table: str, index: str | None, cause: BaseException) -> None:
        self.table = table
        self.index = index
        self.cause = cause
        target = table if index is None else f"{table}@{index}"
        super().__init__(f"catalog probe for {target} failed: {cause}")
