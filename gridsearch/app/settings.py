# gridsearch/app/settings.py
#!/usr/bin/env python3
"""
Viewer configuration.

Resolution order (last wins): defaults -> environment -> argv flags.

- ENV: GRIDSEARCH_ROWS, GRIDSEARCH_COLS, GRIDSEARCH_CELL, GRIDSEARCH_SPEED,
       GRIDSEARCH_ALGO, GRIDSEARCH_LOG_LEVEL
- CLI: --rows=20 --cols=35 --cell=25 --speed=normal --algo=dijkstra --log-level=INFO
"""

import os
import sys
from dataclasses import dataclass, replace
from typing import Dict, List, Mapping, Optional

from gridsearch.core.playback import SpeedPreset
from gridsearch.core.types import AlgorithmKind

ENV_PREFIX = "GRIDSEARCH_"


@dataclass(frozen=True)
class Settings:
    rows: int = 20
    cols: int = 35
    cell_size: int = 25
    speed: SpeedPreset = SpeedPreset.NORMAL
    algorithm: AlgorithmKind = AlgorithmKind.DIJKSTRA
    log_level: str = "INFO"


# flag / env key -> Settings field
_KEYS = {
    "rows": "rows",
    "cols": "cols",
    "cell": "cell_size",
    "speed": "speed",
    "algo": "algorithm",
    "log_level": "log_level",
}


def _coerce(field_name: str, raw: str):
    if field_name in ("rows", "cols", "cell_size"):
        value = int(raw)
        if value <= 0:
            raise ValueError(f"{field_name} must be positive, got {raw!r}")
        return value
    if field_name == "speed":
        return SpeedPreset.parse(raw)
    if field_name == "algorithm":
        return AlgorithmKind.parse(raw)
    return raw.upper()


def _from_env(env: Mapping[str, str]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for key in _KEYS:
        raw = env.get(ENV_PREFIX + key.upper())
        if raw:
            out[key] = raw
    return out


def _from_argv(argv: List[str]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for arg in argv:
        if not arg.startswith("--") or "=" not in arg:
            continue
        key, raw = arg[2:].split("=", 1)
        key = key.replace("-", "_").lower()
        if key in _KEYS:
            out[key] = raw
    return out


def resolve_settings(argv: Optional[List[str]] = None,
                     env: Optional[Mapping[str, str]] = None) -> Settings:
    argv = sys.argv[1:] if argv is None else argv
    env = os.environ if env is None else env

    raw = _from_env(env)
    raw.update(_from_argv(argv))
    return replace(Settings(), **{_KEYS[k]: _coerce(_KEYS[k], v) for k, v in raw.items()})
