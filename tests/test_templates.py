import pytest

from zoneplan.templates import CURRENT, LEGACY, DDLRenderer, format_zone_config, is_syntax_error
from zoneplan.db.base import DatabaseError

WAREHOUSE_DDL = (
    "ALTER TABLE warehouse PARTITION BY RANGE (w_id) (\n"
    "  PARTITION p0_0 VALUES FROM (0) to (6),\n"
    "  PARTITION p0_1 VALUES FROM (6) to (13),\n"
    "  PARTITION p0_2 VALUES FROM (13) to (20)\n"
    ")\n"
)


def test_partition_by_range_warehouse(partitioner):
    spec = DDLRenderer().partition_by_range("TABLE", "warehouse", "w_id", partitioner.bounds, 0)
    assert spec.sql == WAREHOUSE_DDL
    assert spec.params["parts"] == 3


def test_partition_by_range_index_uses_disambiguator(partitioner):
    spec = DDLRenderer().partition_by_range(
        "index", "history@history_district_fk_idx", "h_w_id", partitioner.bounds, 2
    )
    assert spec.sql.startswith(
        "ALTER INDEX history@history_district_fk_idx PARTITION BY RANGE (h_w_id) (\n"
    )
    assert "PARTITION p2_0 VALUES FROM (0) to (6)," in spec.sql
    assert "PARTITION p2_2 VALUES FROM (13) to (20)\n)" in spec.sql


def test_partition_by_range_rejects_unknown_kind(partitioner):
    with pytest.raises(ValueError):
        DDLRenderer().partition_by_range("VIEW", "v", "c", partitioner.bounds, 0)


def test_zone_config_dialects():
    assert format_zone_config("p0_1", "district", "[+rack=1]", CURRENT) == (
        "ALTER PARTITION p0_1 OF TABLE district CONFIGURE ZONE USING constraints = '[+rack=1]'"
    )
    assert format_zone_config("p0_1", "district", "[+zone=us-east1]", LEGACY) == (
        "ALTER PARTITION p0_1 OF TABLE district EXPERIMENTAL CONFIGURE ZONE "
        "'constraints: [+zone=us-east1]'"
    )
    with pytest.raises(ValueError):
        format_zone_config("p0_1", "district", "[+rack=1]", "future")


def test_replicated_index_statements():
    renderer = DDLRenderer()
    create = renderer.create_replicated_index(
        "item", "replicated_idx_0", ["i_id"], ["i_im_id", "i_name", "i_price", "i_data"]
    )
    assert create.sql == (
        "CREATE UNIQUE INDEX replicated_idx_0 ON item (i_id) "
        "STORING (i_im_id, i_name, i_price, i_data)"
    )
    lease = renderer.lease_preference("item", "replicated_idx_0", "europe-west2")
    assert lease.sql == (
        "ALTER INDEX item@replicated_idx_0 "
        "CONFIGURE ZONE USING lease_preferences = '[[+zone=europe-west2]]'"
    )


def test_is_syntax_error():
    assert is_syntax_error(DatabaseError('at or near "using": syntax error'))
    assert not is_syntax_error(DatabaseError("permission denied"))
