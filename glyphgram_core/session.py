from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .board import Coord, Grid, Held, relative_to
from .errors import InvariantViolation
from .grammar import Verdict, validate
from .level import Level


@dataclass
class Holding:
    """A fragment picked up off the board."""
    origin: Coord   # cell the player grabbed
    cells: Held     # ORIGINAL absolute positions, used to put it back on cancel

    def offsets(self) -> Held:
        return relative_to(self.cells, self.origin)


@dataclass
class PlaySession:
    """One play-through of a level: a working grid and at most one fragment in flight."""
    level_id: str
    grid: Grid
    holding: Optional[Holding] = None
    moves: int = 0
    last_drop: Optional[Tuple[Coord, ...]] = field(default=None, repr=False)

    @classmethod
    def from_level(cls, level: Level) -> 'PlaySession':
        return cls(level_id=level.id, grid=level.new_grid())

    def pick_up(self, coord: Coord) -> bool:
        """Lifts the fragment under ``coord``. Returns False if there is none."""
        if self.holding is not None:
            raise InvariantViolation('already holding a fragment')
        idx = self.grid.fragment_at(coord)
        if idx is None:
            return False
        cells = self.grid.lift(idx)
        self.holding = Holding(origin=coord, cells=cells)
        return True

    def drop(self, coord: Coord) -> bool:
        """Places the held fragment so the grabbed cell lands on ``coord``."""
        if self.holding is None:
            raise InvariantViolation('not holding a fragment')
        held = self.holding.offsets()
        if not self.grid.can_place(held, coord):
            return False
        self.last_drop = self.grid.place(held, coord)
        self.holding = None
        self.moves += 1
        return True

    def cancel(self) -> None:
        """Puts the held fragment back where it was picked up."""
        if self.holding is None:
            return
        self.grid.place(self.holding.offsets(), self.holding.origin)
        self.holding = None

    def check(self) -> Verdict:
        if self.holding is not None:
            raise InvariantViolation('cannot check the board with a fragment in flight')
        return validate(self.grid)

    def solved(self) -> bool:
        return self.check().solves(self.grid)
