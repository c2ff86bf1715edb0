from __future__ import annotations

import json
from dataclasses import dataclass, field, fields, is_dataclass, replace
from pathlib import Path
from typing import Any, Dict


@dataclass(frozen=True)
class DiggerConfig:
    iterations: int = 5
    turn_chance_step: float = 0.01
    ideal_walkable_portion: float = 0.2


@dataclass(frozen=True)
class RoomConfig:
    count: int = 8
    min_width: int = 2
    max_width: int = 6
    min_height: int = 2
    max_height: int = 6


@dataclass(frozen=True)
class ScatterConfig:
    portion_of_level_to_be_floor: float = 0.5


@dataclass(frozen=True)
class RefineConfig:
    # Wall insertions are portion * level area.
    scatter_wall_portion: float = 4.0
    preserving_wall_portion: float = 0.5
    attempts: int = 32


@dataclass(frozen=True)
class PlacerConfig:
    gold_chance: float = 0.07
    enemy_chance: float = 0.03
    spikes_chance: float = 0.03


@dataclass(frozen=True)
class GenerationConfig:
    # Upper bound for every rejection-sampling loop.
    max_placement_attempts: int = 4096
    digger: DiggerConfig = field(default_factory=DiggerConfig)
    rooms: RoomConfig = field(default_factory=RoomConfig)
    scatter: ScatterConfig = field(default_factory=ScatterConfig)
    refine: RefineConfig = field(default_factory=RefineConfig)
    placer: PlacerConfig = field(default_factory=PlacerConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationConfig":
        return _apply(cls(), data, "config")

    @classmethod
    def from_json(cls, path: Path) -> "GenerationConfig":
        """Load overrides from a JSON object; keys mirror the dataclass fields.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the JSON is invalid or names an unknown setting.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"{path}: invalid JSON at line {e.lineno}, col {e.colno}: {e.msg}") from e
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a JSON object")
        return cls.from_dict(data)


DEFAULT_CONFIG = GenerationConfig()


def _apply(obj, data: Dict[str, Any], where: str):
    known = {f.name: f for f in fields(obj)}
    changes = {}
    for key, value in data.items():
        if key not in known:
            raise ValueError(f"unknown setting {where}.{key}")
        current = getattr(obj, key)
        if is_dataclass(current):
            if not isinstance(value, dict):
                raise ValueError(f"{where}.{key} must be an object")
            changes[key] = _apply(current, value, f"{where}.{key}")
        else:
            changes[key] = type(current)(value)
    return replace(obj, **changes)
