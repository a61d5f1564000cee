"""Typer-based CLI entry points for partition planning and zone placement."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
import yaml

# ---- project imports ----
from zoneplan.catalog import partition_count
from zoneplan.config import PlacementConfig
from zoneplan.db.base import DatabaseError
from zoneplan.db.postgres import PostgresExecutor
from zoneplan.db.recording import RecordingExecutor
from zoneplan.emit.sql_emit import write_sql_dir
from zoneplan.emit.yaml_emit import write_plan
from zoneplan.errors import PlacementError
from zoneplan.orchestrator import partition_tables

# -----------------------------------------------------------------------------
# Typer app
# -----------------------------------------------------------------------------
app = typer.Typer(help="Warehouse partitioning and zone placement CLI.")


# -----------------------------------------------------------------------------
# Utility helpers (shared by commands)
# -----------------------------------------------------------------------------
def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )


def _parse_zones(zones: Optional[str]) -> Optional[List[str]]:
    if zones is None:
        return None
    return [z.strip() for z in zones.split(",") if z.strip()]


def _load_config(
    config: Optional[Path],
    warehouses: Optional[int],
    active_warehouses: Optional[int],
    partitions: Optional[int],
    zones: Optional[str],
) -> PlacementConfig:
    """Read the optional YAML config, then let explicit options override it."""
    if config is not None:
        try:
            cfg = PlacementConfig.from_yaml(config)
        except (OSError, yaml.YAMLError) as err:
            raise typer.BadParameter(f"cannot read config {config}: {err}", param_hint="--config")
    elif warehouses is None:
        raise typer.BadParameter("--warehouses is required without --config.")
    else:
        cfg = PlacementConfig.from_dict({"warehouses": warehouses})
    if warehouses is not None:
        cfg.warehouses = warehouses
    if active_warehouses is not None:
        cfg.active_warehouses = active_warehouses
    if partitions is not None:
        cfg.partitions = partitions
    parsed = _parse_zones(zones)
    if parsed is not None:
        cfg.zones = parsed
    return cfg


def _fail(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


# -----------------------------------------------------------------------------
# PLAN: dry run, nothing touches a database
# -----------------------------------------------------------------------------
@app.command(name="plan")
def plan(
    config: Optional[Path] = typer.Option(None, help="Placement config YAML."),
    warehouses: Optional[int] = typer.Option(None, help="Total number of warehouses."),
    active_warehouses: Optional[int] = typer.Option(None, help="Warehouses under load (default: all)."),
    partitions: Optional[int] = typer.Option(None, help="Number of partitions."),
    zones: Optional[str] = typer.Option(None, help="Comma-separated zone names, one per partition."),
    sql_dir: Optional[Path] = typer.Option(None, help="Optional dir to emit numbered .sql files."),
    plan_out: Optional[Path] = typer.Option(None, help="Optional YAML plan summary path."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every statement."),
) -> None:
    """Print (or write) every statement a placement run would issue."""
    _configure_logging(verbose)
    try:
        cfg = _load_config(config, warehouses, active_warehouses, partitions, zones)
        partitioner = cfg.build_partitioner()
        recorder = RecordingExecutor()
        report = partition_tables(recorder, partitioner, cfg.zones, cfg.catalog, cfg.reference)
    except PlacementError as err:
        _fail(f"[plan] {err}")
        return

    typer.echo(f"[plan] {partitioner!r} bounds={list(partitioner.bounds)}")
    if sql_dir is not None:
        written = write_sql_dir(sql_dir, recorder.statements)
        typer.echo(f"[plan] Wrote {len(written)} SQL files to {sql_dir}")
    else:
        for statement in recorder.statements:
            typer.echo(statement.strip() + ";")
    if plan_out is not None:
        if plan_out.parent and not plan_out.parent.exists():
            plan_out.parent.mkdir(parents=True, exist_ok=True)
        write_plan(plan_out, partitioner, cfg.zones)
        typer.echo(f"[plan] Wrote plan YAML to {plan_out}")
    typer.echo(
        f"[plan] tables={report.tables} indexes={report.indexes} "
        f"replicated={report.replicated_indexes} statements={len(recorder.statements)}"
    )


# -----------------------------------------------------------------------------
# APPLY: run the placement against a live cluster
# -----------------------------------------------------------------------------
@app.command(name="apply")
def apply(
    dsn: str = typer.Option(..., help="postgres:// connection string of the cluster."),
    config: Optional[Path] = typer.Option(None, help="Placement config YAML."),
    warehouses: Optional[int] = typer.Option(None, help="Total number of warehouses."),
    active_warehouses: Optional[int] = typer.Option(None, help="Warehouses under load (default: all)."),
    partitions: Optional[int] = typer.Option(None, help="Number of partitions."),
    zones: Optional[str] = typer.Option(None, help="Comma-separated zone names, one per partition."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every statement."),
) -> None:
    """Partition the TPC-C tables and configure zones on the target cluster."""
    _configure_logging(verbose)
    try:
        cfg = _load_config(config, warehouses, active_warehouses, partitions, zones)
        partitioner = cfg.build_partitioner()
        with PostgresExecutor(dsn) as db:
            report = partition_tables(db, partitioner, cfg.zones, cfg.catalog, cfg.reference)
    except (PlacementError, DatabaseError) as err:
        _fail(f"[apply] {err}")
        return
    typer.echo(
        f"[apply] tables={report.tables} indexes={report.indexes} "
        f"skipped_indexes={report.skipped_indexes} replicated={report.replicated_indexes}"
    )


# -----------------------------------------------------------------------------
# VERIFY: count the warehouse partitions that exist on the cluster
# -----------------------------------------------------------------------------
@app.command(name="verify")
def verify(
    dsn: str = typer.Option(..., help="postgres:// connection string of the cluster."),
    partitions: int = typer.Option(..., help="Expected number of partitions."),
    table: str = typer.Option("warehouse", help="Table whose p0_N partitions are counted."),
) -> None:
    """Check that the cluster holds the expected number of partitions."""
    if partitions <= 0:
        raise typer.BadParameter("--partitions must be positive.")
    try:
        with PostgresExecutor(dsn) as db:
            found = partition_count(db, table)
    except (PlacementError, DatabaseError) as err:
        _fail(f"[verify] {err}")
        return
    typer.echo(f"[verify] {table}: found {found} partitions, expected {partitions}")
    if found != partitions:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
