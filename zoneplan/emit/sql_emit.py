"""Emit planned DDL statements to a directory."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List


def write_sql_dir(
    directory: str | Path,
    statements: Iterable[str],
    prefix: str = "ddl_",
) -> List[Path]:
    """
    Write statements to sequentially numbered ``.sql`` files.

    File order is execution order, so replaying the files sorted by name
    reproduces the run.
    """

    output_dir = Path(directory)
    output_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for idx, sql_text in enumerate(statements, start=1):
        filename = output_dir / f"{prefix}{idx:03d}.sql"
        body = sql_text.strip() + ";\n"
        with filename.open("w", encoding="utf-8") as handle:
            handle.write(body)
        written.append(filename)
    return written
