from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
import yaml

from xydata import UnknownGeneratorError, create_generator, list_generators, register_generator
from xydata.cli.generate import main
from xydata.config.loader import dump_config, load_config
from xydata.config.models import RunConfig
from xydata.generators.progressive_function import ProgressiveFunctionStrategy
from xydata.generators.registry import normalize_name
from xydata.runner import RunManager, encode_point, execute_from_yaml
from xydata.types import OHLCPoint


def _write_config(tmp_path: Path, **extra) -> Path:
    data = {
        "info": "counting",
        "generator": {"type": "progressive_function", "options": {"start": 0, "end": 3, "step": 1}},
        "stream": {"infinite": True, "max_windows": 2},
        "output": {"path": str(tmp_path / "out" / "windows.jsonl")},
    }
    data.update(extra)
    path = tmp_path / "run.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


def _read_lines(path: Path) -> list:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_registry_lists_builtin_families() -> None:
    names = set(list_generators())
    assert names == {
        "delta_function",
        "ohlc",
        "parametric_function",
        "progressive_function",
        "progressive_random",
        "progressive_trace",
        "sampled_data",
        "spectrum_data",
        "trace",
        "water_drop",
        "white_noise",
    }


def test_registry_name_normalization() -> None:
    assert normalize_name("ParametricFunctionGenerator") == "parametric_function"
    assert normalize_name("water-drop") == "water_drop"
    assert create_generator("OHLCGenerator").strategy.name == "ohlc"
    assert create_generator("WaterDrop", options={"rows": 2}).point_count() == 2


def test_registry_rejects_unknown_and_duplicates() -> None:
    with pytest.raises(UnknownGeneratorError, match="Available"):
        create_generator("sawtooth")
    with pytest.raises(ValueError):
        create_generator("sawtooth")
    with pytest.raises(ValueError, match="already registered"):
        register_generator("progressive_function")(ProgressiveFunctionStrategy)


def test_load_config_validates(tmp_path: Path) -> None:
    cfg = load_config(str(_write_config(tmp_path, seed=4)))
    assert cfg.generator.type == "progressive_function"
    assert cfg.seed == 4
    assert cfg.stream.max_windows == 2
    assert cfg.scheduler is None

    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))


def test_runner_logs_run_info(tmp_path: Path, caplog) -> None:
    cfg = load_config(str(_write_config(tmp_path)))
    with caplog.at_level(logging.INFO, logger="xydata.runner"):
        RunManager(cfg, run_id="info").run()
    assert "Run info: counting" in caplog.text


def test_unknown_config_keys_are_ignored(tmp_path: Path) -> None:
    cfg = load_config(str(_write_config(tmp_path, db_path="perf.sqlite")))
    assert "db_path" not in cfg.model_dump()


def test_dump_config_round_trips(tmp_path: Path) -> None:
    cfg = load_config(str(_write_config(tmp_path)))
    again = RunConfig.model_validate(yaml.safe_load(dump_config(cfg)))
    assert again == cfg


def test_encode_point() -> None:
    assert encode_point(OHLCPoint(1, 2, 3, 0.5, 2.5)) == {
        "timestamp": 1,
        "open": 2,
        "high": 3,
        "low": 0.5,
        "close": 2.5,
    }
    assert encode_point([[1.0, 2.0]]) == [[1.0, 2.0]]


def test_execute_from_yaml_writes_windows(tmp_path: Path) -> None:
    run_id = execute_from_yaml(str(_write_config(tmp_path)), run_id="r1")

    lines = _read_lines(tmp_path / "out" / "windows.jsonl")
    assert run_id == "r1"
    assert [line["window"] for line in lines] == [0, 1]
    assert [[p["x"] for p in line["points"]] for line in lines] == [[0, 1, 2], [3, 4, 5]]


def test_runner_batches_and_seed(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        generator={"type": "white_noise", "options": {"number_of_points": 4}},
        output={"path": str(tmp_path / "batches.jsonl"), "batches": True},
        stream={"infinite": True, "max_windows": 2, "batch_size": 3},
        seed=12,
        scheduler={"batch_size": 2, "budget_seconds": 0.0},
    )
    cfg = load_config(str(path))
    RunManager(cfg, run_id="a").run()
    first = _read_lines(tmp_path / "batches.jsonl")
    RunManager(cfg, run_id="b").run()
    second = _read_lines(tmp_path / "batches.jsonl")

    assert [line["count"] for line in first] == [3, 3, 2]
    assert [line["points"] for line in first] == [line["points"] for line in second]


def test_cli_overrides(tmp_path: Path, capsys) -> None:
    path = _write_config(tmp_path, stream={})
    out = tmp_path / "cli.jsonl"

    main(["-c", str(path), "--windows", "3", "--output", str(out), "--seed", "1", "--run-id", "cli"])

    lines = _read_lines(out)
    assert len(lines) == 3
    assert lines[2]["points"][0]["x"] == 6
    assert "run_id=cli" in capsys.readouterr().err
