"""YAML configuration loading for the engine, arena and scripts."""

from __future__ import annotations

from dataclasses import fields
from pathlib import Path
from typing import Any, Dict

import yaml

from mcts.tree import MCTSConfig, clamp_time_budget
from othello.errors import InvalidConfiguration

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "engine.yaml"

KNOWN_SECTIONS = ("mcts", "arena", "self_play")

_MCTS_TYPES = {
    "time_budget_ms": (int,),
    "exploration": (int, float),
    "max_iterations": (int, type(None)),
    "seed": (int, type(None)),
    "workers": (int,),
}


def load_config(config_path: Path) -> dict:
    try:
        config = yaml.safe_load(Path(config_path).read_text())
    except yaml.YAMLError as exc:
        raise InvalidConfiguration(f"Could not parse {config_path}: {exc}") from exc

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise InvalidConfiguration(f"{config_path}: top level must be a mapping")

    for section, values in config.items():
        if section not in KNOWN_SECTIONS:
            raise InvalidConfiguration(f"{config_path}: unknown section {section!r}")
        if not isinstance(values, dict):
            raise InvalidConfiguration(f"{config_path}: section {section!r} must be a mapping")
    return config


def mcts_config_from_dict(values: Dict[str, Any] | None) -> MCTSConfig:
    values = values or {}
    known = {f.name for f in fields(MCTSConfig)}
    for key, value in values.items():
        if key not in known:
            raise InvalidConfiguration(f"Unknown mcts option {key!r}")
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, _MCTS_TYPES[key]):
            raise InvalidConfiguration(f"mcts.{key} has invalid value {value!r}")

    config = MCTSConfig(**values)
    config.time_budget_ms = clamp_time_budget(config.time_budget_ms)
    if config.workers < 1:
        raise InvalidConfiguration(f"mcts.workers must be >= 1, got {config.workers}")
    if config.max_iterations is not None and config.max_iterations < 1:
        raise InvalidConfiguration(f"mcts.max_iterations must be >= 1, got {config.max_iterations}")
    if config.exploration < 0:
        raise InvalidConfiguration(f"mcts.exploration must be >= 0, got {config.exploration}")
    return config


def load_mcts_config(config_path: Path = DEFAULT_CONFIG_PATH) -> MCTSConfig:
    return mcts_config_from_dict(load_config(config_path).get("mcts"))
