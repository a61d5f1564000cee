from typer.testing import CliRunner

from zoneplan.cli import main as cli_main
from zoneplan.cli.main import app
from zoneplan.db.recording import RecordingExecutor

runner = CliRunner()


def test_plan_prints_statements():
    result = runner.invoke(
        app, ["plan", "--warehouses", "20", "--active-warehouses", "10", "--partitions", "3"]
    )
    assert result.exit_code == 0, result.output
    assert "PARTITION p0_2 VALUES FROM (13) to (20)" in result.output
    assert "statements=52" in result.output


def test_plan_writes_files(tmp_path):
    result = runner.invoke(
        app,
        [
            "plan", "--warehouses", "20", "--partitions", "3",
            "--zones", "a,b,c",
            "--sql-dir", str(tmp_path / "sql"),
            "--plan-out", str(tmp_path / "out" / "plan.yaml"),
        ],
    )
    assert result.exit_code == 0, result.output
    assert len(list((tmp_path / "sql").glob("*.sql"))) == 58
    assert (tmp_path / "out" / "plan.yaml").exists()


def test_plan_rejects_bad_inputs():
    result = runner.invoke(app, ["plan", "--warehouses", "10", "--partitions", "11"])
    assert result.exit_code == 1


def test_plan_requires_warehouses():
    result = runner.invoke(app, ["plan", "--partitions", "3"])
    assert result.exit_code != 0


class FakeCluster(RecordingExecutor):
    """Recording executor that stands in for a live connection."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.dsn = None
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.closed = True


def _patch_cluster(monkeypatch, cluster):
    def factory(dsn):
        cluster.dsn = dsn
        return cluster

    monkeypatch.setattr(cli_main, "PostgresExecutor", factory)


def test_apply_runs_every_statement(monkeypatch):
    cluster = FakeCluster(existing_indexes=[])
    _patch_cluster(monkeypatch, cluster)
    result = runner.invoke(
        app, ["apply", "--dsn", "postgresql://localhost/tpcc", "--warehouses", "20", "--partitions", "3"]
    )
    assert result.exit_code == 0, result.output
    assert cluster.dsn == "postgresql://localhost/tpcc"
    assert cluster.closed is True
    assert len(cluster.statements) == 8 * 4
    assert "skipped_indexes=5" in result.output


def test_apply_failed_statement_exits_1(monkeypatch):
    cluster = FakeCluster(failures={"ALTER TABLE district": "relation \"district\" does not exist"})
    _patch_cluster(monkeypatch, cluster)
    result = runner.invoke(
        app, ["apply", "--dsn", "postgresql://localhost/tpcc", "--warehouses", "20", "--partitions", "3"]
    )
    assert result.exit_code == 1
    assert "ALTER TABLE district" in result.output
    assert "does not exist" in result.output
    assert len(cluster.statements) == 4 + 1


def test_verify_matching_count(monkeypatch):
    _patch_cluster(monkeypatch, FakeCluster(partition_count=3))
    result = runner.invoke(app, ["verify", "--dsn", "postgresql://localhost/tpcc", "--partitions", "3"])
    assert result.exit_code == 0, result.output
    assert "found 3 partitions, expected 3" in result.output


def test_verify_count_mismatch(monkeypatch):
    _patch_cluster(monkeypatch, FakeCluster(partition_count=2))
    result = runner.invoke(app, ["verify", "--dsn", "postgresql://localhost/tpcc", "--partitions", "3"])
    assert result.exit_code == 1
    assert "found 2 partitions, expected 3" in result.output


def test_plan_config_with_colliding_disambiguator(tmp_path):
    path = tmp_path / "placement.yaml"
    path.write_text(
        "warehouses: 20\n"
        "partitions: 3\n"
        "tables:\n"
        "  t:\n"
        "    column: c\n"
        "    indexes:\n"
        "      - {name: i, column: c, disambiguator: 0}\n"
    )
    result = runner.invoke(app, ["plan", "--config", str(path)])
    assert result.exit_code == 1
    assert not isinstance(result.exception, ValueError)
    assert "duplicate partition disambiguator 0 on t" in result.output


def test_plan_missing_config_file(tmp_path):
    result = runner.invoke(app, ["plan", "--config", str(tmp_path / "absent.yaml")])
    assert result.exit_code == 2
    assert not isinstance(result.exception, FileNotFoundError)


def test_plan_malformed_yaml(tmp_path):
    path = tmp_path / "placement.yaml"
    path.write_text("warehouses: [20\n")
    result = runner.invoke(app, ["plan", "--config", str(path)])
    assert result.exit_code == 2
