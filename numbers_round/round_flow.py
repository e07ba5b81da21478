from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Tuple

from .expression import ExpressionEngine
from .game_models import (
    Done,
    Initial,
    Number,
    Operator,
    Phase,
    Playing,
    RoundSetup,
    RoundState,
    Tile,
    Token,
)
from .tiles import TilePoolGenerator

logger = logging.getLogger(__name__)


class RoundError(RuntimeError):
    """Base class for commands rejected by a RoundController."""


class InvalidTransition(RoundError):
    """Raised when a command is issued in a phase that does not allow it."""


class DuplicateTileUse(RoundError):
    """Raised when a tile already in the token stream is appended again."""


class UnknownTile(RoundError):
    """Raised for a tile that is not part of the current round's setup."""


class EmptyTokenStream(RoundError):
    """Raised when removing a token from an empty stream."""


# ---------------------------------------------------------------------------
# Round controller
# ---------------------------------------------------------------------------

class RoundController:
    """Owns the state of one round and applies commands to it.

    Every command either applies fully and recomputes ``current_value`` or
    raises a ``RoundError`` and leaves the state as it was.
    """

    def __init__(
        self,
        generator: Optional[TilePoolGenerator] = None,
        engine: Optional[ExpressionEngine] = None,
    ):
        self.generator = generator or TilePoolGenerator()
        self.engine = engine or ExpressionEngine()
        self._state: RoundState = Initial()

    # --- Queries ---

    @property
    def state(self) -> RoundState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def setup(self) -> Optional[RoundSetup]:
        return self._state.setup if isinstance(self._state, Playing) else None

    @property
    def tokens(self) -> Tuple[Token, ...]:
        return self._state.tokens if isinstance(self._state, Playing) else ()

    @property
    def current_value(self) -> Optional[Number]:
        return self._state.current_value if isinstance(self._state, Playing) else None

    @property
    def available_tiles(self) -> Tuple[Tile, ...]:
        if not isinstance(self._state, Playing):
            return ()
        used = set(self._state.used_tiles)
        return tuple(t for t in self._state.setup.tiles if t not in used)

    def can_append(self, token: Token) -> bool:
        if not isinstance(self._state, Playing):
            return False
        if isinstance(token, Operator):
            return True
        return token in self.available_tiles

    def can_remove(self) -> bool:
        return isinstance(self._state, Playing) and bool(self._state.tokens)

    def can_commit(self) -> bool:
        return isinstance(self._state, Playing)

    # --- Commands ---

    def start_round(self, large_count: int) -> Playing:
        setup = self.generator.generate(large_count)
        self._state = Playing(setup=setup)
        logger.info("Round started: target %d, tiles %s", setup.target, list(setup.values))
        return self._state

    def append_token(self, token: Token) -> Optional[Number]:
        playing = self._require_playing("append_token")
        if isinstance(token, Tile):
            if token not in playing.setup.tiles:
                raise UnknownTile(f"Tile {token.value} (slot {token.index}) is not part of this round")
            if token in playing.tokens:
                raise DuplicateTileUse(f"Tile {token.value} (slot {token.index}) has already been used")
        elif not isinstance(token, Operator):
            raise TypeError(f"Expected a Tile or Operator, got {type(token).__name__}")
        return self._recompute(playing, playing.tokens + (token,))

    def remove_last_token(self) -> Optional[Number]:
        playing = self._require_playing("remove_last_token")
        if not playing.tokens:
            raise EmptyTokenStream("There is no token to remove")
        return self._recompute(playing, playing.tokens[:-1])

    def commit(self) -> Done:
        playing = self._require_playing("commit")
        final_value = playing.current_value if playing.current_value is not None else 0
        self._state = Done(target=playing.setup.target, final_value=final_value)
        logger.info("Round committed: %s against target %d", final_value, playing.setup.target)
        return self._state

    def reset(self) -> Initial:
        if self._state.phase is not Phase.INITIAL:
            logger.info("Round reset from %s", self._state.phase.value)
        self._state = Initial()
        return self._state

    # --- Internals ---

    def _require_playing(self, command: str) -> Playing:
        if not isinstance(self._state, Playing):
            raise InvalidTransition(f"{command} is only allowed while playing (phase is {self._state.phase.value})")
        return self._state

    def _recompute(self, playing: Playing, tokens: Tuple[Token, ...]) -> Optional[Number]:
        value = self.engine.evaluate(tokens)
        self._state = replace(playing, tokens=tokens, current_value=value)
        logger.debug("Recomputed %d tokens -> %s", len(tokens), value)
        return value


__all__ = [
    "RoundError",
    "InvalidTransition",
    "DuplicateTileUse",
    "UnknownTile",
    "EmptyTokenStream",
    "RoundController",
]
