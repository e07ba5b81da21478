"""Numbers round: deal tiles, evaluate postfix input, and run a single round."""

from importlib import import_module
from typing import Any

__version__ = "0.1.0"
__all__ = [
    "Tile",
    "Operator",
    "RoundSetup",
    "Phase",
    "Initial",
    "Playing",
    "Done",
    "TilePoolGenerator",
    "ExpressionEngine",
    "evaluate",
    "RoundController",
    "RoundError",
    "InvalidTransition",
    "DuplicateTileUse",
    "UnknownTile",
    "EmptyTokenStream",
    "RoundScore",
    "score_round",
    "__version__",
]

_EXPORTS = {
    "Tile": ("game_models", "Tile"),
    "Operator": ("game_models", "Operator"),
    "RoundSetup": ("game_models", "RoundSetup"),
    "Phase": ("game_models", "Phase"),
    "Initial": ("game_models", "Initial"),
    "Playing": ("game_models", "Playing"),
    "Done": ("game_models", "Done"),
    "TilePoolGenerator": ("tiles", "TilePoolGenerator"),
    "ExpressionEngine": ("expression", "ExpressionEngine"),
    "evaluate": ("expression", "evaluate"),
    "RoundController": ("round_flow", "RoundController"),
    "RoundError": ("round_flow", "RoundError"),
    "InvalidTransition": ("round_flow", "InvalidTransition"),
    "DuplicateTileUse": ("round_flow", "DuplicateTileUse"),
    "UnknownTile": ("round_flow", "UnknownTile"),
    "EmptyTokenStream": ("round_flow", "EmptyTokenStream"),
    "RoundScore": ("scoring", "RoundScore"),
    "score_round": ("scoring", "score_round"),
}


def __getattr__(name: str) -> Any:
    if name in _EXPORTS:
        module_name, attr_name = _EXPORTS[name]
        module = import_module(f".{module_name}", __name__)
        attr = getattr(module, attr_name)
        globals()[name] = attr
        return attr
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


def __dir__() -> list[str]:
    return sorted(set(list(globals().keys()) + list(__all__)))
