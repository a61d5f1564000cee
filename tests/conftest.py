import pytest

from zoneplan import Partitioner
from zoneplan.db.base import DatabaseError, Executor


@pytest.fixture
def partitioner():
    return Partitioner(total=20, active=10, parts=3)


class FailingProbeExecutor(Executor):
    """Executes nothing and fails every catalog query."""

    def __init__(self):
        self.statements = []

    def execute(self, statement, params=None):
        self.statements.append(statement)

    def query(self, statement, params=None):
        raise DatabaseError("relation \"information_schema.statistics\" is unavailable")


@pytest.fixture
def failing_probe_db():
    return FailingProbeExecutor()
