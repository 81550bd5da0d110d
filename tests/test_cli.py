"""CLI tests using Typer's CliRunner."""

import json

import pytest
import yaml
from typer.testing import CliRunner

from keynav import __version__
from keynav.main import app
from test_fixtures import sample_layout

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    for name in ("KEYNAV_DEBUG", "KEYNAV_MUTED", "KEYNAV_DUPLICATE_POLICY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("KEYNAV_CONFIG", str(tmp_path / "navigation.yaml"))


@pytest.fixture
def layout_file(tmp_path):
    path = tmp_path / "layout.yaml"
    path.write_text(yaml.safe_dump(sample_layout()))
    return path


def invoke_json(*args):
    result = runner.invoke(app, [*args, "--json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestBasics:
    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "simulate" in result.stdout

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert f"keynav version {__version__}" in result.stdout

    def test_invalid_command(self):
        result = runner.invoke(app, ["nonexistent-command"])
        assert result.exit_code != 0


class TestSimulate:
    def test_moves_across_zones(self, layout_file):
        data = invoke_json("simulate", str(layout_file), "right", "down", "right", "select")

        assert [move["result"] for move in data["moves"]] == [True, True, True, False]
        assert data["state"]["active_zone"] == "library"
        assert data["state"]["active_index"] == 1
        assert data["history"][-1] == {"region": "main", "zone": "library", "index": 1}

    def test_dead_end_error_expires(self, layout_file):
        data = invoke_json("simulate", str(layout_file), "up")
        assert data["state"]["last_error"] == {"zone": "featured", "index": 0}

        data = invoke_json("simulate", str(layout_file), "up", "wait:0.5")
        assert data["moves"][1]["result"] is True
        assert data["state"]["last_error"] is None

    def test_route_round_trip(self, layout_file):
        data = invoke_json(
            "simulate", str(layout_file), "down", "right", "route:/details", "up", "route:/"
        )

        assert [move["result"] for move in data["moves"]] == [True, True, False, True, True]
        assert data["path"] == "/"
        assert data["state"]["active_zone"] == "library"
        assert data["state"]["active_index"] == 1
        assert data["state"]["memory"]["path"] == "/"

    def test_vim_flag(self, layout_file):
        data = invoke_json("simulate", str(layout_file), "--vim", "l")
        assert data["state"]["active_index"] == 1

    def test_unknown_step(self, layout_file):
        result = runner.invoke(app, ["simulate", str(layout_file), "jump"])
        assert result.exit_code != 0

    def test_missing_layout(self, tmp_path):
        result = runner.invoke(app, ["simulate", str(tmp_path / "missing.yaml")])
        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_table_output(self, layout_file):
        result = runner.invoke(app, ["simulate", str(layout_file), "right"])
        assert result.exit_code == 0
        assert "Steps" in result.stdout


class TestInspect:
    def test_json(self, layout_file):
        data = invoke_json("inspect", str(layout_file))

        assert data["problems"] == []
        assert [region["id"] for region in data["state"]["regions"]] == ["main", "sidebar"]
        assert data["state"]["active_zone"] == "featured"

    def test_tree(self, layout_file):
        result = runner.invoke(app, ["inspect", str(layout_file)])
        assert result.exit_code == 0
        assert "library" in result.stdout


class TestConfig:
    def test_defaults(self, tmp_path):
        data = invoke_json("config")
        assert data["path"] == str(tmp_path / "navigation.yaml")
        assert data["settings"]["on_duplicate"] == "error"

    def test_file_settings(self, tmp_path):
        (tmp_path / "navigation.yaml").write_text("history_limit: 5\n")
        data = invoke_json("config")
        assert data["settings"]["history_limit"] == 5

    def test_invalid_settings(self, tmp_path):
        (tmp_path / "navigation.yaml").write_text("on_duplicate: ignore\n")
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 1

    def test_env(self, monkeypatch):
        monkeypatch.setenv("KEYNAV_MUTED", "true")
        data = invoke_json("config", "--env")
        assert data["KEYNAV_MUTED"]["value"] == "true"
        assert data["KEYNAV_DEBUG"]["is_set"] is False


class TestDemo:
    def test_missing_layout(self, tmp_path):
        result = runner.invoke(app, ["demo", str(tmp_path / "missing.yaml")])
        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_builtin_layout_is_valid(self):
        from keynav.commands.demo import DEMO_LAYOUT
        from keynav.services.layout_loader import parse_layout

        parsed = parse_layout(DEMO_LAYOUT)
        assert [region.id for region, _ in parsed] == ["sidebar", "main"]
