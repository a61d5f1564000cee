"""Emit placement plans to external representations."""

from .sql_emit import write_sql_dir
from .yaml_emit import plan_payload, write_plan

__all__ = ["plan_payload", "write_plan", "write_sql_dir"]
