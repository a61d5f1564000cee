"""Abstract statement executor definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple


class DatabaseError(Exception):
    """Driver-level failure; the message is the server's, unmodified."""


class Executor(ABC):
    """Common interface for issuing statements against one database session."""

    @abstractmethod
    def execute(self, statement: str, params: Optional[Sequence[object]] = None) -> None:
        """Run a statement that returns no rows; raise ``DatabaseError`` on failure."""

    @abstractmethod
    def query(
        self, statement: str, params: Optional[Sequence[object]] = None
    ) -> List[Tuple[object, ...]]:
        """Run a read-only statement and return all rows."""
