"""Database collaborators that statements are issued against."""

from .base import DatabaseError, Executor
from .postgres import PostgresExecutor
from .recording import RecordingExecutor

__all__ = [
    "DatabaseError",
    "Executor",
    "PostgresExecutor",
    "RecordingExecutor",
]
