"""Tests for the questwright command-line entry point."""

import json

import pytest

from questwright.cli.app import build_config, build_parser, main
from questwright.models.config import DiceMode, GMBehavior


def _write_adventure(root, adventure_id, scenes, guide=None):
    directory = root / adventure_id
    directory.mkdir(parents=True)
    (directory / "scenes.json").write_text(json.dumps(scenes), encoding="utf-8")
    if guide is not None:
        (directory / "guide.json").write_text(json.dumps(guide), encoding="utf-8")


@pytest.fixture
def content_dir(tmp_path, sample_scene_dicts, sample_guide):
    """Provide an adventures directory holding the sample adventure as "demo"."""
    root = tmp_path / "adventures"
    _write_adventure(root, "demo", sample_scene_dicts, sample_guide)
    _write_adventure(
        root,
        "deathtrap",
        [{"id": "pit", "exits": ["x"], "challenges": [{"skill": "Evasion", "dc": 30, "failure_damage": 1}]}],
    )
    return root


class TestParser:
    """Tests for argument parsing and config building."""

    def test_defaults(self):
        """Test parsing with only an adventure uses the config defaults."""
        args = build_parser().parse_args(["--adventure", "demo"])
        config = build_config(args)
        assert config.dice_mode == DiceMode.FAIR
        assert config.gm_behavior == GMBehavior.THOROUGH
        assert config.max_scenes == 10
        assert config.loop_visit_threshold is None
        assert args.format == "both"

    def test_invalid_choice_exits(self):
        """Test an unknown dice mode is rejected by argparse."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--adventure", "demo", "--dice", "loaded"])

    def test_out_of_range_config(self):
        """Test an out-of-range value fails config validation."""
        args = build_parser().parse_args(["--adventure", "demo", "--max-wounds", "0"])
        with pytest.raises(ValueError):
            build_config(args)


class TestMain:
    """Tests for main() exit codes and outputs."""

    def test_completed_run_writes_reports(self, content_dir, tmp_path, capsys):
        """Test a completed run exits 0 and writes both report files."""
        out = tmp_path / "out"
        code = main(
            [
                "--adventure", "demo",
                "--content-path", str(content_dir),
                "--output", str(out),
                "--dice", "blessed",
                "--seed", "4",
            ]
        )
        assert code == 0
        assert (out / "simulation-demo-blessed.json").exists()
        assert (out / "simulation-demo-blessed.txt").exists()
        assert "demo: completed" in capsys.readouterr().out

    def test_json_only(self, content_dir, tmp_path):
        """Test --format json writes only the JSON report."""
        out = tmp_path / "out"
        main(
            [
                "--adventure", "demo",
                "--content-path", str(content_dir),
                "--output", str(out),
                "--format", "json",
                "--archetype", "detective",
            ]
        )
        assert (out / "simulation-demo-detective.json").exists()
        assert not (out / "simulation-demo-detective.txt").exists()

    def test_death_exits_nonzero(self, content_dir, tmp_path):
        """Test a run that ends in player death exits 1."""
        code = main(
            [
                "--adventure", "deathtrap",
                "--content-path", str(content_dir),
                "--output", str(tmp_path / "out"),
                "--dice", "cursed",
                "--max-wounds", "1",
            ]
        )
        assert code == 1

    def test_unknown_archetype_exits_2(self, content_dir, tmp_path):
        """Test an unknown archetype is a usage error."""
        code = main(
            [
                "--adventure", "demo",
                "--content-path", str(content_dir),
                "--output", str(tmp_path / "out"),
                "--archetype", "bard",
            ]
        )
        assert code == 2

    def test_all_archetypes(self, content_dir, tmp_path):
        """Test --all-archetypes writes one report per archetype."""
        out = tmp_path / "out"
        main(
            [
                "--adventure", "demo",
                "--content-path", str(content_dir),
                "--output", str(out),
                "--all-archetypes",
                "--dice", "blessed",
                "--format", "text",
                "--seed", "1",
            ]
        )
        assert len(list(out.glob("simulation-demo-*.txt"))) == 8

    def test_list(self, content_dir, capsys):
        """Test --list prints the available adventures."""
        assert main(["--list", "--content-path", str(content_dir)]) == 0
        assert capsys.readouterr().out.split() == ["deathtrap", "demo"]

    def test_adventure_required(self, content_dir):
        """Test running without an adventure is a usage error."""
        with pytest.raises(SystemExit):
            main(["--content-path", str(content_dir)])
