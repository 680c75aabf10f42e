import gzip
import json
import os
from pathlib import Path

import pytest

from grid_astar.main import ExitCode, build_parser, main

MAP = "4\nOVVV\nVWWV\nV#VV\nVVVX\n"
EXPECTED = "6\nO***\nVWW*\nV#V*\nVVVX\n"


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GRID_ASTAR_CONFIG", raising=False)
    monkeypatch.delenv("GRID_ASTAR_LOG_LEVEL", raising=False)
    (tmp_path / "map.txt").write_text(MAP, encoding="utf-8")
    return tmp_path


def test_parser_defaults():
    args = build_parser().parse_args(["in.txt"])
    assert args.input == Path("in.txt")
    assert args.output is None
    assert args.frontier is None
    assert not args.show


def test_writes_output_file(workdir: Path):
    assert main(["map.txt", "out/result.txt"]) == ExitCode.FOUND
    assert (workdir / "out" / "result.txt").read_text(encoding="utf-8") == EXPECTED


def test_prints_to_stdout(workdir: Path, capsys):
    assert main(["map.txt"]) == 0
    assert capsys.readouterr().out == EXPECTED


@pytest.mark.parametrize("frontier", ["heap", "sorted_list"])
def test_frontier_option(workdir: Path, capsys, frontier):
    assert main(["map.txt", "--frontier", frontier]) == 0
    assert capsys.readouterr().out == EXPECTED


def test_unreachable_writes_unmarked_grid(workdir: Path, capsys):
    (workdir / "blocked.txt").write_text("3\nO#X\n##V\nVVV\n", encoding="utf-8")
    assert main(["blocked.txt", "out.txt"]) == ExitCode.UNREACHABLE
    assert (workdir / "out.txt").read_text(encoding="utf-8") == "-1\nO#X\n##V\nVVV\n"

    assert main(["blocked.txt"]) == ExitCode.UNREACHABLE
    assert capsys.readouterr().out == "-1\nO#X\n##V\nVVV\n"


def test_expansion_cap(workdir: Path):
    assert main(["map.txt", "--max-expansions", "1"]) == ExitCode.UNREACHABLE


def test_invalid_input_exit_code(workdir: Path):
    (workdir / "bad.txt").write_text("2\nOVZX\n", encoding="utf-8")
    assert main(["bad.txt"]) == ExitCode.INVALID_INPUT


def test_missing_input_exit_code(workdir: Path):
    assert main(["nope.txt"]) == ExitCode.IO_ERROR


def test_unwritable_output(workdir: Path):
    (workdir / "taken").mkdir()
    assert main(["map.txt", "taken"]) == ExitCode.IO_ERROR


def test_allocation_error_exit_code(workdir: Path, monkeypatch):
    import grid_astar.main as main_mod
    from grid_astar.search.engine import Error

    monkeypatch.setattr(main_mod, "run", lambda grid, **kw: Error("AllocationError", "full"))
    assert main(["map.txt"]) == ExitCode.ALLOCATION_ERROR


def test_png_trace_and_profile(workdir: Path, capsys):
    code = main([
        "map.txt",
        "--png", "img/path.png",
        "--trace", "trace.jsonl",
        "--profile", "run.prof",
    ])
    assert code == 0
    capsys.readouterr()
    assert (workdir / "img" / "path.png").exists()
    assert (workdir / "run.prof").exists()
    lines = (workdir / "trace.jsonl").read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[-1])["event_type"] == "GOAL_FOUND"


def test_show_renders_to_stderr(workdir: Path, capsys):
    assert main(["map.txt", "out.txt", "--show"]) == 0
    err = capsys.readouterr().err
    assert "\x1b[31m*" in err


def test_config_file(workdir: Path):
    (workdir / "small.yaml").write_text("grid:\n  max_size: 3\n", encoding="utf-8")
    assert main(["map.txt", "--config", "small.yaml"]) == ExitCode.INVALID_INPUT


def test_config_from_dotenv(workdir: Path):
    (workdir / "marker.yaml").write_text("render:\n  path_marker: '+'\n", encoding="utf-8")
    (workdir / ".env").write_text("GRID_ASTAR_CONFIG=marker.yaml\n", encoding="utf-8")
    try:
        assert main(["map.txt", "out.txt"]) == 0
    finally:
        os.environ.pop("GRID_ASTAR_CONFIG", None)
    assert (workdir / "out.txt").read_text(encoding="utf-8") == EXPECTED.replace("*", "+")


def test_unknown_frontier_in_config(workdir: Path):
    (workdir / "bad.yaml").write_text("search:\n  frontier: fibonacci\n", encoding="utf-8")
    assert main(["map.txt", "--config", "bad.yaml"]) == ExitCode.INVALID_INPUT


def test_trace_retention_from_config(workdir: Path, capsys):
    (workdir / "tiny.yaml").write_text("trace:\n  retention_mb: 0\n", encoding="utf-8")
    args = ["map.txt", "--config", "tiny.yaml", "--trace", "t.jsonl"]
    assert main(args) == ExitCode.FOUND
    assert main(args) == ExitCode.FOUND
    capsys.readouterr()

    archives = sorted(workdir.glob("t_*.jsonl.gz"))
    assert len(archives) == 1
    with gzip.open(archives[0], "rt", encoding="utf-8") as fh:
        first_run = [json.loads(line) for line in fh]
    assert first_run[-1]["event_type"] == "GOAL_FOUND"
    current = (workdir / "t.jsonl").read_text(encoding="utf-8").splitlines()
    assert len(current) == len(first_run)


def test_multi_character_marker_in_config(workdir: Path):
    (workdir / "m.yaml").write_text("render:\n  path_marker: '**'\n", encoding="utf-8")
    assert main(["map.txt", "out.txt", "--config", "m.yaml"]) == ExitCode.INVALID_INPUT
    assert not (workdir / "out.txt").exists()


def test_malformed_config_file(workdir: Path):
    (workdir / "broken.yaml").write_text("grid: [1, 2\n", encoding="utf-8")
    assert main(["map.txt", "--config", "broken.yaml"]) == ExitCode.INVALID_INPUT


def test_unwritable_trace(workdir: Path):
    (workdir / "taken").write_text("", encoding="utf-8")
    assert main(["map.txt", "out.txt", "--trace", "taken/t.jsonl"]) == ExitCode.IO_ERROR
