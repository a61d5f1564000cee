import pytest
import yaml

from zoneplan import InvalidArgument
from zoneplan.emit import plan_payload, write_plan, write_sql_dir


def test_write_sql_dir(tmp_path):
    written = write_sql_dir(tmp_path / "ddl", ["SELECT 1", "SELECT 2\n"])
    assert [p.name for p in written] == ["ddl_001.sql", "ddl_002.sql"]
    assert written[1].read_text() == "SELECT 2;\n"


def test_plan_payload(partitioner):
    payload = plan_payload(partitioner, ["a", "b", "c"])
    assert payload["bounds"] == [0, 6, 13, 20]
    assert payload["partitions"][2] == {
        "name": "p0_2",
        "range": [13, 20],
        "active": [13, 14, 15, 16],
        "constraints": "[+zone=c]",
    }
    assert plan_payload(partitioner)["partitions"][0]["constraints"] == "[+rack=0]"
    with pytest.raises(InvalidArgument):
        plan_payload(partitioner, ["a"])


def test_write_plan(tmp_path, partitioner):
    path = tmp_path / "plan.yaml"
    write_plan(path, partitioner)
    loaded = yaml.safe_load(path.read_text())
    assert loaded["plan"]["active"] == 10
    assert loaded["plan"]["partitions"][1]["active"] == [6, 7, 8]
