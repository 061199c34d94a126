from __future__ import annotations

from typing import Iterable, Optional, Tuple

Coord = Tuple[int, int]


class FormatError(ValueError):
    """Malformed level source: bad bitmap text, unmapped layout char, bad key."""


class InvariantViolation(RuntimeError):
    """The grid's fragment partition would be (or has been) corrupted."""


class GrammarError(Exception):
    """A structural problem found while validating a grid. Collected, not raised to callers."""
    kind = 'grammar'

    def __init__(self, message: str, coords: Iterable[Coord] = ()) -> None:
        super().__init__(message)
        self.coords: Tuple[Coord, ...] = tuple(coords)

    @property
    def coord(self) -> Optional[Coord]:
        return self.coords[0] if self.coords else None


class AmbiguousDirectionError(GrammarError):
    kind = 'direction'


class UnexpectedTokenError(GrammarError):
    kind = 'token'


class ModifierError(GrammarError):
    kind = 'modifier'


class LeftoverSymbolsError(GrammarError):
    kind = 'leftover'
