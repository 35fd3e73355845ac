"""Smoke tests: imports work, CLI --help works."""

from click.testing import CliRunner

from erd_layout.__main__ import main


def test_import():
    import erd_layout

    assert erd_layout.layout_entities is not None
    assert erd_layout.layout_json is not None


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "Entity-relationship" in result.output
