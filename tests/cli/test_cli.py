import json
import logging
import textwrap
from pathlib import Path

import pytest

from flowcut import cli
from flowcut.logging import reset_logging

NETWORK = textwrap.dedent(
    """
    vertices: 6
    one_based: true
    source: 1
    sink: 6
    arcs:
      - [1, 2, 16]
      - [1, 3, 13]
      - [2, 3, 10]
      - [2, 4, 12]
      - [3, 2, 4]
      - [3, 5, 14]
      - [4, 3, 9]
      - [4, 6, 20]
      - [5, 4, 7]
      - [5, 6, 4]
    """
)


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    reset_logging()


@pytest.fixture
def network_path(tmp_path: Path) -> Path:
    path = tmp_path / "clrs.yaml"
    path.write_text(NETWORK)
    return path


def test_solve_prints_flow_and_cut(network_path: Path, capsys) -> None:
    cli.main(["solve", str(network_path)])
    out = capsys.readouterr().out

    assert "MAXIMUM FLOW" in out
    assert "Maximum Flow: 23" in out
    assert "Total Cut Capacity: 23" in out
    assert "Source partition: {1, 2, 3, 5}" in out
    assert "Sink partition: {4, 6}" in out
    assert "Flow on Arcs:" in out


def test_solve_json(network_path: Path, capsys) -> None:
    cli.main(["solve", str(network_path), "--json"])
    payload = json.loads(capsys.readouterr().out)

    assert payload["max_flow"] == 23
    assert payload["source"] == 1 and payload["sink"] == 6
    assert payload["min_cut"]["sink_side"] == [4, 6]


def test_solve_terminal_overrides(network_path: Path, capsys) -> None:
    # 1 -> 2 alone: both arcs out of 1 can reach 2 (16 direct, 4 via 3)
    cli.main(["solve", str(network_path), "--sink", "2", "--json"])
    payload = json.loads(capsys.readouterr().out)

    assert payload["sink"] == 2
    assert payload["max_flow"] == 20


def test_solve_requires_terminals(tmp_path: Path, capsys) -> None:
    path = tmp_path / "bare.yaml"
    path.write_text("vertices: 2\narcs: [[0, 1, 5]]\n")

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["solve", str(path)])
    assert exc_info.value.code == 1
    assert "No source given" in capsys.readouterr().out

    cli.main(["solve", str(path), "-s", "0", "-t", "1"])
    assert "Maximum Flow: 5" in capsys.readouterr().out


def test_solve_same_source_and_sink_fails(network_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["solve", str(network_path), "--sink", "1"])
    assert exc_info.value.code == 1
    assert "must differ" in capsys.readouterr().out


def test_solve_missing_file(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["solve", str(tmp_path / "nope.yaml")])
    assert exc_info.value.code == 1
    assert "Network file not found" in capsys.readouterr().out


def test_inspect(network_path: Path, capsys) -> None:
    cli.main(["inspect", str(network_path)])
    out = capsys.readouterr().out

    assert "Vertices: 6" in out
    assert "Arcs: 10" in out
    assert "Total capacity: 109" in out
    assert "Numbering: 1-based" in out
    assert "Source: 1" in out
    assert "Sink: 6" in out


def test_inspect_invalid_file(tmp_path: Path, capsys) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("vertices: 2\n")

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["inspect", str(path)])
    assert exc_info.value.code == 1
    assert "Invalid network file" in capsys.readouterr().out


@pytest.mark.parametrize(
    "body",
    ["vertices: 2\narcs: [5]\n", "adjacency: [5, []]\n", "matrix: [5]\n"],
)
@pytest.mark.parametrize("command", ["solve", "inspect"])
def test_malformed_entries_exit_cleanly(
    tmp_path: Path, capsys, command: str, body: str
) -> None:
    path = tmp_path / "malformed.yaml"
    path.write_text("source: 0\nsink: 1\n" + body)

    with pytest.raises(SystemExit) as exc_info:
        cli.main([command, str(path)])
    assert exc_info.value.code == 1
    assert "ERROR:" in capsys.readouterr().out


def test_no_args_prints_help(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code == 0
    assert "solve" in capsys.readouterr().out


@pytest.mark.parametrize(
    "flag, level",
    [("--verbose", logging.DEBUG), ("--quiet", logging.WARNING), (None, logging.INFO)],
)
def test_log_level_flags(network_path: Path, capsys, flag, level) -> None:
    argv = ["solve", str(network_path), "--json"]
    if flag:
        argv.insert(0, flag)
    cli.main(argv)
    capsys.readouterr()

    assert logging.getLogger("flowcut").level == level


def test_format_helpers() -> None:
    assert cli._format_number(23.0) == "23"
    assert cli._format_number(2.5) == "2.5"
    assert cli._format_duration(0.5) == "500.0 ms"
    assert cli._format_duration(2.0) == "2.00 s"
    assert cli._format_table(["A"], []) == ""
