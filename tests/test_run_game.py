"""
Tests for the command-line entry point.
"""

import builtins

import matplotlib
matplotlib.use("Agg")
import pytest
import yaml

import run_game

ENV_VARS = [
    'WAR_PLAYER_FACTION', 'WAR_MIN_TROOPS', 'WAR_MAX_TROOPS', 'WAR_SEED',
    'WAR_LOG_LEVEL', 'WAR_LOG_FILE', 'WAR_SNAPSHOT_DIR',
]


@pytest.fixture
def workdir(monkeypatch, tmp_path):
    # setenv first so teardown also removes values python-dotenv writes
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def write_config(path, **data):
    data.setdefault('log_file', None)
    with open(path, 'w') as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
    return str(path)


def feed_input(monkeypatch, answers):
    remaining = list(answers)

    def _input(prompt=""):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    monkeypatch.setattr(builtins, 'input', _input)


def test_quit_returns_zero(workdir, monkeypatch, capsys):
    config = write_config(workdir / "game.yaml")
    feed_input(monkeypatch, ["0"])

    assert run_game.main(["--config", config, "--seed", "42"]) == 0
    out = capsys.readouterr().out
    assert "WELCOME TO WAR" in out
    assert "Thanks for playing" in out


def test_invalid_config_returns_one(workdir):
    config = write_config(workdir / "bad.yaml", player_faction="Orange")
    assert run_game.main(["--config", config]) == 1


def test_missing_config_file_returns_one(workdir):
    assert run_game.main(["--config", str(workdir / "missing.yaml")]) == 1


def test_map_allocation_failure_returns_one(workdir, monkeypatch, capsys):
    def fail(*args, **kwargs):
        raise MemoryError

    monkeypatch.setattr(run_game.Game, 'new', fail)
    config = write_config(workdir / "game.yaml")

    assert run_game.main(["--config", config]) == 1
    assert "could not allocate memory" in capsys.readouterr().out


def test_visualize_saves_snapshot_after_battle(workdir, monkeypatch):
    config = write_config(
        workdir / "game.yaml",
        snapshot_dir=str(workdir / "shots"),
        territories=[
            {'name': 'Alaska', 'faction': 'Blue', 'troops': 3},
            {'name': 'Alberta', 'faction': 'Red', 'troops': 1},
        ],
    )
    feed_input(monkeypatch, ["1", "1", "2", "", "0"])

    assert run_game.main(["--config", config, "--visualize", "--seed", "1"]) == 0
    assert len(list((workdir / "shots").glob("*.png"))) == 1


def test_log_file_directory_is_created(workdir, monkeypatch):
    log_file = workdir / "logs" / "war.log"
    config = write_config(workdir / "game.yaml", log_file=str(log_file))
    feed_input(monkeypatch, ["0"])

    assert run_game.main(["--config", config, "--seed", "42"]) == 0
    assert log_file.exists()


def test_unopenable_log_file_returns_one(workdir):
    # A directory cannot be opened as a log file
    (workdir / "taken").mkdir()
    config = write_config(workdir / "game.yaml", log_file=str(workdir / "taken"))

    assert run_game.main(["--config", config]) == 1


def test_objective_target_faction_returns_one(workdir):
    config = write_config(workdir / "game.yaml")
    assert run_game.main(["--config", config, "--faction", "Red"]) == 1
