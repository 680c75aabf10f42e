from pathlib import Path

import pytest
import yaml

from grid_astar.config import (
    CONFIG,
    CONFIG_PATH,
    GridConfig,
    LoggingConfig,
    SearchConfig,
    load_config,
)


def test_repository_config_loads():
    assert CONFIG_PATH.name == "config.yaml"
    assert isinstance(CONFIG.grid, GridConfig)
    assert isinstance(CONFIG.search, SearchConfig)
    assert isinstance(CONFIG.logging, LoggingConfig)
    assert CONFIG.grid.min_size == 2
    assert CONFIG.grid.max_size == 15000
    assert CONFIG.search.frontier == "heap"
    assert CONFIG.search.max_expansions is None
    assert CONFIG.render.path_marker == "*"


def test_repository_config_keys():
    data = yaml.safe_load(CONFIG_PATH.read_text(encoding="utf-8"))
    assert set(data) >= {"grid", "search", "render", "trace", "logging"}


def test_missing_file_gives_defaults(tmp_path: Path):
    cfg = load_config(tmp_path / "nope.yaml")
    assert cfg.grid.max_size == 15000
    assert cfg.search.frontier == "heap"
    assert cfg.trace.retention_mb == 50
    assert cfg.logging.global_level == "INFO"
    assert cfg.logging.module_levels == {}


def test_partial_file_overrides(tmp_path: Path):
    path = tmp_path / "cfg.yaml"
    path.write_text(
        "search:\n  frontier: sorted_list\n  max_expansions: 50\n"
        "logging:\n  global_level: debug\n",
        encoding="utf-8",
    )
    cfg = load_config(path)
    assert cfg.search.frontier == "sorted_list"
    assert cfg.search.max_expansions == 50
    assert cfg.logging.global_level == "DEBUG"
    assert cfg.render.png_scale == 8


def test_empty_file(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path).grid.min_size == 2


@pytest.mark.parametrize(
    "text, message",
    [
        ("render:\n  path_marker: '**'\n", "single character"),
        ("render:\n  path_marker: ''\n", "single character"),
        ("render:\n  png_scale: 0\n", "png_scale"),
        ("trace:\n  retention_mb: -1\n", "retention_mb"),
        ("- just\n- a list\n", "mapping"),
    ],
)
def test_unusable_values_rejected(tmp_path: Path, text, message):
    path = tmp_path / "cfg.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ValueError, match=message):
        load_config(path)


def test_malformed_yaml_propagates(tmp_path: Path):
    path = tmp_path / "cfg.yaml"
    path.write_text("grid: [1, 2\n", encoding="utf-8")
    with pytest.raises(yaml.YAMLError):
        load_config(path)
