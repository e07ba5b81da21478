from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union
from enum import Enum

Number = Union[int, float]


@dataclass(frozen=True)
class Tile:
    """One numbered tile of a round.

    ``index`` is the tile's slot in the six-tile setup, so two tiles that share
    a value stay distinct.
    """

    index: int
    value: int

    def to_dict(self) -> Dict[str, int]:
        return {"index": self.index, "value": self.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tile":
        return cls(index=int(data["index"]), value=int(data["value"]))


class Operator(str, Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    def apply(self, b: Number, a: Number) -> Number:
        """Return ``b OP a``; ``a`` is the most recently pushed operand."""
        if self is Operator.ADD:
            return b + a
        if self is Operator.SUBTRACT:
            return b - a
        if self is Operator.MULTIPLY:
            return b * a
        return _divide(b, a)


def _divide(b: Number, a: Number) -> Number:
    if a == 0:
        if b == 0 or (isinstance(b, float) and math.isnan(b)):
            return math.nan
        return math.copysign(math.inf, b)
    if isinstance(a, int) and isinstance(b, int) and b % a == 0:
        return b // a
    return b / a


Token = Union[Tile, Operator]


def token_to_dict(token: Token) -> Dict[str, Any]:
    if isinstance(token, Operator):
        return {"operator": token.value}
    return {"tile": token.to_dict()}


def token_from_dict(data: Dict[str, Any]) -> Token:
    if "operator" in data:
        return Operator(data["operator"])
    return Tile.from_dict(data["tile"])


@dataclass(frozen=True)
class RoundSetup:
    target: int
    tiles: Tuple[Tile, ...]

    @property
    def values(self) -> Tuple[int, ...]:
        return tuple(t.value for t in self.tiles)

    def to_dict(self) -> Dict[str, Any]:
        return {"target": self.target, "tiles": [t.to_dict() for t in self.tiles]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundSetup":
        return cls(
            target=int(data["target"]),
            tiles=tuple(Tile.from_dict(t) for t in data.get("tiles", [])),
        )


class Phase(str, Enum):
    INITIAL = "initial"
    PLAYING = "playing"
    DONE = "done"


@dataclass(frozen=True)
class Initial:
    phase: Phase = field(default=Phase.INITIAL, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"phase": self.phase.value}


@dataclass(frozen=True)
class Playing:
    setup: RoundSetup
    tokens: Tuple[Token, ...] = ()
    current_value: Optional[Number] = None
    phase: Phase = field(default=Phase.PLAYING, init=False)

    @property
    def used_tiles(self) -> Tuple[Tile, ...]:
        return tuple(t for t in self.tokens if isinstance(t, Tile))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phase": self.phase.value,
            "setup": self.setup.to_dict(),
            "tokens": [token_to_dict(t) for t in self.tokens],
            "current_value": self.current_value,
        }


@dataclass(frozen=True)
class Done:
    target: int
    final_value: Number
    phase: Phase = field(default=Phase.DONE, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"phase": self.phase.value, "target": self.target, "final_value": self.final_value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Done":
        return cls(target=int(data["target"]), final_value=data["final_value"])


RoundState = Union[Initial, Playing, Done]


__all__ = [
    "Number",
    "Tile",
    "Operator",
    "Token",
    "token_to_dict",
    "token_from_dict",
    "RoundSetup",
    "Phase",
    "Initial",
    "Playing",
    "Done",
    "RoundState",
]
