from __future__ import annotations
import argparse, json, logging, sys
from typing import Any, Dict, TextIO

from .config import DEFAULT_ENV_PREFIX, resolve_config
from .expression import (
    ExpressionEngine,
    TokenError,
    evaluate,
    format_tokens,
    format_value,
    parse_tokens,
    tiles_from_values,
)
from .game_models import Phase
from .round_flow import RoundController, RoundError
from .scoring import score_round
from .tiles import TilePoolGenerator


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="python -m numbers_round.cli",
        description="Numbers round: deal tiles, evaluate postfix input, play a round"
    )
    sub = p.add_subparsers(dest="cmd")

    # deal
    dl = sub.add_parser("deal", help="Deal six tiles and a target, print as JSON")
    _add_common_args(dl)

    # eval
    ev = sub.add_parser("eval", help="Evaluate a postfix token string, e.g. '3 4 + 2 *'")
    ev.add_argument("tokens", nargs="+", help="Numbers and operators (+ - * /)")
    ev.add_argument("--zero-as-missing", action="store_true", default=None,
                    help="Treat zero operands as missing (legacy behaviour)")
    _add_config_args(ev)

    # play
    pl = sub.add_parser("play", help="Play one round reading commands from stdin")
    _add_common_args(pl)
    pl.add_argument("--zero-as-missing", action="store_true", default=None,
                    help="Treat zero operands as missing (legacy behaviour)")

    args = p.parse_args(argv)
    if getattr(args, "cmd", None) is None:
        p.print_help()
        sys.exit(2)
    return args


def _add_common_args(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("--large", type=int, default=None, help="Number of large tiles (0-4)")
    ap.add_argument("--seed", type=int, default=None)
    _add_config_args(ap)


def _add_config_args(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("--config", type=str, action="append", default=[], help="YAML/JSON config files (merged)")
    ap.add_argument("--env-prefix", type=str, default=DEFAULT_ENV_PREFIX, help="Env prefix for overrides")


def _cli_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if getattr(args, "large", None) is not None:
        out.setdefault("round", {})["large_count"] = args.large
    if getattr(args, "seed", None) is not None:
        out.setdefault("round", {})["seed"] = args.seed
    if getattr(args, "zero_as_missing", None):
        out.setdefault("evaluation", {})["zero_as_missing"] = True
    return out


def _configure_logging(cfg: Dict[str, Any]) -> None:
    level_name = str((cfg.get("logging") or {}).get("level", "WARNING")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _controller(cfg: Dict[str, Any]) -> RoundController:
    return RoundController(
        generator=TilePoolGenerator.from_seed(cfg["round"].get("seed")),
        engine=ExpressionEngine(zero_as_missing=bool(cfg["evaluation"].get("zero_as_missing"))),
    )


def _deal(cfg: Dict[str, Any]) -> Dict[str, Any]:
    setup = TilePoolGenerator.from_seed(cfg["round"].get("seed")).generate(int(cfg["round"]["large_count"]))
    return setup.to_dict()


def _eval(args: argparse.Namespace, cfg: Dict[str, Any]) -> Any:
    text = " ".join(args.tokens)
    numbers = [int(w) for w in text.split() if w.lstrip("-").isdigit()]
    tokens = parse_tokens(text, tiles_from_values(numbers))
    return evaluate(tokens, zero_as_missing=bool(cfg["evaluation"].get("zero_as_missing")))


def _print_playing(ctl: RoundController, out: TextIO) -> None:
    setup = ctl.setup
    print(f"Target: {setup.target}", file=out)
    print("Tiles:  " + " ".join(str(t.value) for t in ctl.available_tiles), file=out)
    print(f"Input:  {format_tokens(ctl.tokens)}", file=out)
    print(f"Answer: {format_value(ctl.current_value)}", file=out)


def _play(cfg: Dict[str, Any], stdin: TextIO, out: TextIO) -> int:
    """Line-driven round. Numbers/operators append, plus undo, commit, reset."""
    ctl = _controller(cfg)
    large = int(cfg["round"]["large_count"])
    ctl.start_round(large)
    _print_playing(ctl, out)

    for line in stdin:
        cmd = line.strip()
        if not cmd:
            continue
        try:
            if cmd == "undo":
                ctl.remove_last_token()
            elif cmd == "commit":
                score = score_round(ctl.commit())
                print(json.dumps(score.to_dict()), file=out)
                return 0
            elif cmd == "reset":
                ctl.reset()
                ctl.start_round(large)
            elif cmd in ("quit", "exit"):
                ctl.reset()
                return 0
            else:
                for token in parse_tokens(cmd, ctl.setup.tiles, ctl.tokens):
                    ctl.append_token(token)
        except (RoundError, TokenError) as exc:
            print(f"Rejected: {exc}", file=out)
        if ctl.phase is Phase.PLAYING:
            _print_playing(ctl, out)

    # end of input commits whatever is on the board
    if ctl.phase is Phase.PLAYING:
        print(json.dumps(score_round(ctl.commit()).to_dict()), file=out)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        cfg = resolve_config(args.config, args.env_prefix, _cli_overrides(args))
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    _configure_logging(cfg)

    if args.cmd == "deal":
        try:
            print(json.dumps(_deal(cfg)))
        except ValueError as exc:
            print(str(exc), file=sys.stderr)
            return 2
        return 0

    if args.cmd == "eval":
        try:
            res = _eval(args, cfg)
        except TokenError as exc:
            print(str(exc), file=sys.stderr)
            return 2
        print(json.dumps(res))
        return 0

    if args.cmd == "play":
        try:
            return _play(cfg, sys.stdin, sys.stdout)
        except ValueError as exc:
            print(str(exc), file=sys.stderr)
            return 2

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
