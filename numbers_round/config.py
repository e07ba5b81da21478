from __future__ import annotations
from typing import Any, Dict, Iterable, Optional
import copy
import json
import os

import yaml

DEFAULT_ENV_PREFIX = "NUMBERS_ROUND__"

DEFAULT_CONFIG: Dict[str, Any] = {
    "round": {"large_count": 2, "seed": None},
    "evaluation": {"zero_as_missing": False},
    "logging": {"level": "WARNING"},
}

def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(a)
    for k, v in (b or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out

def _load_one(path: str) -> Dict[str, Any]:
    """Read one config file; ``.json`` files go through json, the rest through YAML.

    Files whose top level is not a mapping contribute nothing.
    """
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    try:
        data = json.loads(text) if path.lower().endswith(".json") else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ValueError(f"Could not parse config file {path}: {exc}") from exc
    return data if isinstance(data, dict) else {}

def load_configs(paths: Iterable[str] | None) -> Dict[str, Any]:
    cfg: Dict[str, Any] = {}
    for p in (paths or []):
        cfg = _deep_merge(cfg, _load_one(p))
    return cfg

def env_overrides(prefix: str = DEFAULT_ENV_PREFIX) -> Dict[str, Any]:
    """Collect ``<prefix>SECTION__KEY=value`` variables into a nested dict.

    ``NUMBERS_ROUND__ROUND__LARGE_COUNT=3`` becomes ``{"round": {"large_count": 3}}``.
    """
    out: Dict[str, Any] = {}
    for name, raw in os.environ.items():
        if not name.startswith(prefix):
            continue
        *sections, leaf = name[len(prefix):].lower().split("__")
        section = out
        for key in sections:
            section = section.setdefault(key, {})
        section[leaf] = _coerce(raw)
    return out

_LITERALS = {"true": True, "false": False, "none": None, "null": None, "": None}

def _coerce(s: str) -> Any:
    t = s.strip().lower()
    if t in _LITERALS:
        return _LITERALS[t]
    for number in (int, float):
        try:
            return number(t)
        except ValueError:
            continue
    return s

def apply_cli_overrides(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    return _deep_merge(base, overrides or {})

def resolve_config(
    paths: Iterable[str] | None = None,
    env_prefix: str = DEFAULT_ENV_PREFIX,
    cli_overrides: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Defaults, then config files, then environment, then command line."""
    cfg = _deep_merge(copy.deepcopy(DEFAULT_CONFIG), load_configs(paths))
    cfg = _deep_merge(cfg, env_overrides(env_prefix))
    return apply_cli_overrides(cfg, cli_overrides or {})

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_ENV_PREFIX",
    "load_configs",
    "env_overrides",
    "apply_cli_overrides",
    "resolve_config",
    "_deep_merge",
]
