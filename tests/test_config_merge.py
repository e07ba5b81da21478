import json

import pytest

from numbers_round.config import (
    DEFAULT_CONFIG,
    _deep_merge,
    env_overrides,
    load_configs,
    resolve_config,
)

def test_deep_merge_simple():
    a = {"round": {"large_count": 2, "seed": None}, "evaluation": {"zero_as_missing": False}}
    b = {"round": {"seed": 7}, "logging": {"level": "DEBUG"}}
    c = _deep_merge(a, b)
    assert c["round"]["large_count"] == 2 and c["round"]["seed"] == 7
    assert c["evaluation"]["zero_as_missing"] is False and c["logging"]["level"] == "DEBUG"

def test_env_overrides_parsing(monkeypatch):
    monkeypatch.setenv("NUMBERS_ROUND__ROUND__LARGE_COUNT", "3")
    monkeypatch.setenv("NUMBERS_ROUND__EVALUATION__ZERO_AS_MISSING", "true")
    monkeypatch.setenv("NUMBERS_ROUND__ROUND__SEED", "null")
    d = env_overrides()
    assert d["round"]["large_count"] == 3
    assert d["round"]["seed"] is None
    assert d["evaluation"]["zero_as_missing"] is True

def test_load_yaml_and_json(tmp_path):
    y = tmp_path / "a.yaml"
    y.write_text("round:\n  large_count: 4\nlogging:\n  level: INFO\n", encoding="utf-8")
    j = tmp_path / "b.json"
    j.write_text(json.dumps({"round": {"seed": 11}}), encoding="utf-8")
    cfg = load_configs([str(y), str(j)])
    assert cfg == {"round": {"large_count": 4, "seed": 11}, "logging": {"level": "INFO"}}

def test_non_mapping_file_ignored(tmp_path):
    p = tmp_path / "list.yaml"
    p.write_text("- 1\n- 2\n", encoding="utf-8")
    assert load_configs([str(p)]) == {}

def test_resolve_precedence(tmp_path, monkeypatch):
    p = tmp_path / "cfg.yaml"
    p.write_text("round:\n  large_count: 1\n  seed: 5\n", encoding="utf-8")
    monkeypatch.setenv("NUMBERS_ROUND__ROUND__SEED", "9")
    cfg = resolve_config([str(p)], cli_overrides={"logging": {"level": "DEBUG"}})
    assert cfg["round"] == {"large_count": 1, "seed": 9}
    assert cfg["evaluation"] == {"zero_as_missing": False}
    assert cfg["logging"]["level"] == "DEBUG"
    # defaults are not mutated
    assert DEFAULT_CONFIG["round"]["seed"] is None

def test_env_overrides_coerce_floats_and_strings(monkeypatch):
    monkeypatch.setenv("NUMBERS_ROUND__LOGGING__LEVEL", "debug")
    monkeypatch.setenv("NUMBERS_ROUND__EXTRA__RATIO", "0.5")
    d = env_overrides()
    assert d["logging"]["level"] == "debug"
    assert d["extra"]["ratio"] == 0.5

def test_malformed_file_reports_path(tmp_path):
    p = tmp_path / "broken.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError, match="broken.json"):
        load_configs([str(p)])
