import io
import json

import pytest

from numbers_round import cli
from numbers_round.tiles import TilePoolGenerator


def _last_json(text: str):
    return json.loads(text.strip().splitlines()[-1])


def test_deal_is_seeded(capsys):
    assert cli.main(["deal", "--large", "3", "--seed", "21"]) == 0
    data = json.loads(capsys.readouterr().out)
    expected = TilePoolGenerator.from_seed(21).generate(3)
    assert data == expected.to_dict()


def test_deal_reads_config_file(tmp_path, capsys):
    cfg = tmp_path / "round.yaml"
    cfg.write_text("round:\n  large_count: 4\n  seed: 3\n", encoding="utf-8")
    assert cli.main(["deal", "--config", str(cfg)]) == 0
    data = json.loads(capsys.readouterr().out)
    assert sorted(t["value"] for t in data["tiles"][:4]) == [25, 50, 75, 100]


def test_deal_bad_large_count(capsys):
    assert cli.main(["deal", "--large", "9"]) == 2
    assert "large_count" in capsys.readouterr().err


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["3 4 + 2 *"], 14),
        (["10", "4", "-"], 6),
        (["5", "/"], 5),
        (["10 10 - 5 +"], 5),
    ],
)
def test_eval(argv, expected, capsys):
    assert cli.main(["eval", *argv]) == 0
    assert json.loads(capsys.readouterr().out) == expected


def test_eval_zero_as_missing(capsys):
    assert cli.main(["eval", "10 10 - 5 +", "--zero-as-missing"]) == 0
    assert json.loads(capsys.readouterr().out) is None


def test_eval_rejects_unknown_symbol(capsys):
    assert cli.main(["eval", "3 4 ^"]) == 2
    assert "Unknown token" in capsys.readouterr().err


def test_play_round(monkeypatch, capsys):
    setup = TilePoolGenerator.from_seed(8).generate(4)
    monkeypatch.setattr("sys.stdin", io.StringIO("25 50\n25\n+\nundo\n*\ncommit\n"))

    assert cli.main(["play", "--large", "4", "--seed", "8"]) == 0
    out = capsys.readouterr().out
    assert f"Target: {setup.target}" in out
    assert "Rejected: No unused tile with value 25" in out
    score = _last_json(out)
    assert score["target"] == setup.target
    assert score["final_value"] == 1250


def test_play_commits_at_end_of_input(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("*\nundo\nundo\n"))
    assert cli.main(["play", "--large", "1", "--seed", "2"]) == 0
    out = capsys.readouterr().out
    assert "Rejected: There is no token to remove" in out
    assert _last_json(out)["final_value"] == 0


def test_malformed_config_exits_cleanly(tmp_path, capsys):
    cfg = tmp_path / "round.yaml"
    cfg.write_text("round: [unclosed\n", encoding="utf-8")
    assert cli.main(["deal", "--config", str(cfg)]) == 2
    assert "round.yaml" in capsys.readouterr().err
