"""End-to-end CLI tests through click's CliRunner."""

import json
from pathlib import Path

from click.testing import CliRunner

from erd_layout.__main__ import main

BLOG = (Path(__file__).parent.parent.parent / "examples" / "blog.json").read_text()


def _invoke(args: list[str], input: str | None = None):
    return CliRunner().invoke(main, args, input=input)


def test_stdin_default_layout():
    result = _invoke([], input=BLOG)
    assert result.exit_code == 0
    doc = json.loads(result.stdout)
    assert doc["layout"] == "linear"
    assert [n["position"] for n in doc["nodes"]][:2] == [{"x": 200, "y": 500}, {"x": 450, "y": 500}]


def test_file_input_hierarchical(tmp_path):
    src = tmp_path / "schema.json"
    src.write_text(BLOG)
    result = _invoke([str(src), "--layout", "hierarchical"])
    assert result.exit_code == 0
    nodes = {n["id"]: n for n in json.loads(result.stdout)["nodes"]}
    assert nodes["users"]["position"] == {"x": 400, "y": 200}
    assert nodes["tags"]["position"]["y"] < nodes["users"]["position"]["y"]


def test_output_file(tmp_path):
    out = tmp_path / "layout.json"
    result = _invoke(["-l", "box", "-o", str(out)], input=BLOG)
    assert result.exit_code == 0
    assert result.stdout == ""
    assert json.loads(out.read_text())["layout"] == "box"


def test_invalid_json_exits_1():
    result = _invoke([], input="[{")
    assert result.exit_code == 1
    assert "parse error" in result.output


def test_unsupported_source_exits_1():
    result = _invoke([], input="Table users {}")
    assert result.exit_code == 1


def test_unknown_layout_exits_2():
    result = _invoke(["--layout", "spiral"], input=BLOG)
    assert result.exit_code == 2


def test_missing_input_file():
    result = _invoke(["does-not-exist.json"])
    assert result.exit_code == 2


def test_config_file(tmp_path):
    cfg = tmp_path / "layout.json"
    cfg.write_text(json.dumps({"layout": "x", "centerX": 0, "offset": 0, "y": 40}))
    result = _invoke(["-c", str(cfg)], input=BLOG)
    assert result.exit_code == 0
    doc = json.loads(result.stdout)
    assert doc["layout"] == "x"
    assert [n["position"]["x"] for n in doc["nodes"]] == [-480, -160, 160, 480]
    assert {n["position"]["y"] for n in doc["nodes"]} == {40}


def test_layout_flag_overrides_config(tmp_path):
    cfg = tmp_path / "layout.json"
    cfg.write_text(json.dumps({"layout": "x"}))
    result = _invoke(["-c", str(cfg), "-l", "y"], input=BLOG)
    assert json.loads(result.stdout)["layout"] == "y"


def test_bad_config_exits_1(tmp_path):
    cfg = tmp_path / "layout.json"
    cfg.write_text("[1, 2]")
    result = _invoke(["-c", str(cfg)], input=BLOG)
    assert result.exit_code == 1
    assert "must be a JSON object" in result.output


def test_seeded_force_is_reproducible():
    first = _invoke(["-l", "force", "-s", "3"], input=BLOG)
    second = _invoke(["-l", "force", "-s", "3"], input=BLOG)
    assert first.exit_code == 0
    assert first.stdout == second.stdout
    assert json.loads(first.stdout)["layout"] == "force-directed"


def test_compact_box():
    result = _invoke(["-l", "box", "--compact"], input=BLOG)
    assert result.exit_code == 0
    assert len(json.loads(result.stdout)["nodes"]) == 4


def test_pair_policy_flag():
    schema = json.dumps(
        [
            {"name": "a", "columns": [{"name": "id"}]},
            {
                "name": "b",
                "columns": [
                    {"name": "x", "foreignTo": {"name": "a", "column": "id"}},
                    {"name": "y", "foreignTo": {"name": "a", "column": "id"}},
                ],
            },
        ]
    )
    kept = json.loads(_invoke([], input=schema).stdout)
    collapsed = json.loads(_invoke(["--pair-policy", "collapse"], input=schema).stdout)
    assert len(kept["edges"]) == 2
    assert len(collapsed["edges"]) == 1


def test_split_isolated_flag():
    result = _invoke(["-l", "x", "--split-isolated"], input=BLOG)
    nodes = {n["id"]: n for n in json.loads(result.stdout)["nodes"]}
    assert nodes["tags"]["position"]["x"] == 400


def test_config_value_of_wrong_type_exits_1(tmp_path):
    cfg = tmp_path / "layout.json"
    cfg.write_text(json.dumps({"layout": "hierarchical", "nodeSpacing": "wide"}))
    result = _invoke(["-c", str(cfg)], input=BLOG)
    assert result.exit_code == 1
    assert "'node_spacing' must be a number" in result.output


def test_config_numeric_string_accepted(tmp_path):
    cfg = tmp_path / "layout.json"
    cfg.write_text(json.dumps({"layout": "hierarchical", "nodeSpacing": "250", "compact": "false"}))
    result = _invoke(["-c", str(cfg)], input=BLOG)
    assert result.exit_code == 0
    assert json.loads(result.stdout)["layout"] == "hierarchical"
