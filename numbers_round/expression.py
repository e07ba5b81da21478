"""Postfix evaluation of a round's token stream.

Tokens are folded left to right over an operand stack. An operator combines
the two most recent operands as ``b OP a`` where ``a`` was pushed last, so
``10 4 -`` is ``6``. The stream is allowed to be incomplete at any point:

- an operator with fewer than two operands beneath it is skipped and leaves
  the stack untouched;
- the result is the bottom-most value left on the stack, or ``None`` when the
  stack is empty. Leftover values above it are not checked.
"""
from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional, Sequence

from .game_models import Number, Operator, Tile, Token

logger = logging.getLogger(__name__)


class TokenError(ValueError):
    """Raised when token text cannot be mapped onto a round's tiles."""


def evaluate(tokens: Iterable[Token], *, zero_as_missing: bool = False) -> Optional[Number]:
    """Evaluate ``tokens`` and return the current answer.

    With ``zero_as_missing`` an operand equal to zero (or NaN) counts as absent,
    the old falsy check: both operands are popped first and dropped together,
    so ``10 10 - 5 +`` ends with an empty stack and evaluates to ``None``.
    An operator with fewer than two operands is skipped in either mode.
    """
    stack: List[Number] = []
    for position, token in enumerate(tokens):
        if isinstance(token, Tile):
            stack.append(token.value)
            continue
        if len(stack) < 2:
            logger.debug("Skipping %s at position %d: not enough operands on %s", token.value, position, stack)
            continue
        a = stack.pop()
        b = stack.pop()
        if zero_as_missing and (_is_falsy(a) or _is_falsy(b)):
            logger.debug("Dropping %s at position %d: falsy operand in %s, %s", token.value, position, b, a)
            continue
        stack.append(Operator(token).apply(b, a))
    return stack[0] if stack else None


def _is_falsy(value: Number) -> bool:
    return value == 0 or (isinstance(value, float) and math.isnan(value))


class ExpressionEngine:
    """Stateless evaluator bound to one zero-operand policy."""

    def __init__(self, zero_as_missing: bool = False):
        self.zero_as_missing = zero_as_missing

    def evaluate(self, tokens: Iterable[Token]) -> Optional[Number]:
        return evaluate(tokens, zero_as_missing=self.zero_as_missing)

    __call__ = evaluate


def format_value(value: Optional[Number]) -> str:
    if value is None:
        return "-"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return f"{value:g}"
    return str(value)


def format_tokens(tokens: Iterable[Token]) -> str:
    """Render the input line the way the player typed it, e.g. ``3 4 + 2 *``."""
    return " ".join(str(t.value) for t in tokens)


def parse_tokens(text: str, tiles: Sequence[Tile], used: Iterable[Tile] = ()) -> List[Token]:
    """Map whitespace separated ``text`` onto operators and unused ``tiles``.

    A number picks the first tile with that value that is neither in ``used``
    nor already picked earlier in ``text``.
    """
    taken = set(used)
    out: List[Token] = []
    for word in text.split():
        if word in _OPERATOR_SYMBOLS:
            out.append(Operator(word))
            continue
        try:
            value = int(word)
        except ValueError:
            raise TokenError(f"Unknown token '{word}'") from None
        tile = next((t for t in tiles if t.value == value and t not in taken), None)
        if tile is None:
            raise TokenError(f"No unused tile with value {value}")
        taken.add(tile)
        out.append(tile)
    return out


def tiles_from_values(values: Iterable[int]) -> List[Tile]:
    return [Tile(index=i, value=int(v)) for i, v in enumerate(values)]


_OPERATOR_SYMBOLS = {op.value for op in Operator}


__all__ = [
    "TokenError",
    "evaluate",
    "ExpressionEngine",
    "format_value",
    "format_tokens",
    "parse_tokens",
    "tiles_from_values",
]
