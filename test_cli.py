"""
Test CLI
========

Subcommands of the lookglass command line.

Usage:
    source .venv/bin/activate && python -m pytest test_cli.py
"""

import json
import re
from pathlib import Path

import pytest

from lookglass_cli.cli import main

LEVELS_DIR = Path(__file__).parent / "levels"
FIRST_LEVEL = str(LEVELS_DIR / "01_first_reflection.yaml")


def test_trace_command(capsys):
    print("\n" + "=" * 60)
    print("TEST: lookglass trace")
    print("=" * 60)
    capsys.readouterr()

    main(["trace", FIRST_LEVEL])
    payload = json.loads(capsys.readouterr().out)

    assert payload['level_id'] == "first_reflection"
    terminal = payload['ray']['terminal']
    assert terminal['kind'] == "hit_item"
    assert terminal['item']['kind'] == "target"
    assert len(payload['ray']['bounces']) == 1
    print("✓ Default aim hits the target")


def test_trace_command_overrides_aim(capsys):
    main(["trace", FIRST_LEVEL, "--degrees", "180", "--budget", "1.5"])
    payload = json.loads(capsys.readouterr().out)

    ray = payload['ray']
    assert ray['budget'] == 1.5
    assert ray['bounces'] == []
    assert ray['terminal']['kind'] == "exhausted_budget"
    assert ray['terminal']['x'] == pytest.approx(0.5)
    assert ray['terminal']['y'] == pytest.approx(2.0)
    print("✓ --degrees and --budget override the level")


def test_unfold_command(capsys):
    main(["unfold", FIRST_LEVEL])
    payload = json.loads(capsys.readouterr().out)

    assert payload['depth'] == 1
    assert len(payload['hallway']) == 2
    assert len(payload['series']) == 2
    assert payload['series'][1]['bounces'] == []
    assert len(payload['series'][1]['trail']) == 1
    print("✓ Hallway and uncurled series printed")


def test_levels_command(capsys):
    main(["levels", str(LEVELS_DIR)])
    lines = capsys.readouterr().out.strip().splitlines()

    assert lines == [
        "first_reflection\tFirst Reflection",
        "corner_pocket\tCorner Pocket",
        "hall_of_mirrors\tHall of Mirrors",
    ]
    print("✓ Levels listed in file order")


def test_help_examples_point_at_shipped_levels(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--help"])
    assert excinfo.value.code == 0

    help_text = capsys.readouterr().out
    examples = sorted(set(re.findall(r"levels/\S+\.yaml", help_text)))
    assert examples
    for example in examples:
        assert (Path(__file__).parent / example).is_file(), example
    print(f"✓ {len(examples)} example level paths exist")


def test_errors_exit_with_code_1(capsys, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["trace", str(tmp_path / "missing.yaml")])
    assert excinfo.value.code == 1
    assert "Error" in capsys.readouterr().err

    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 1
    print("✓ Missing file and missing command exit with 1")


def main_tests():
    """Run all tests (requires pytest fixtures, use pytest)."""
    raise SystemExit(pytest.main([__file__, "-v"]))


if __name__ == "__main__":
    main_tests()
