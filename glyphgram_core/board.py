from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from .errors import InvariantViolation
from .symbols import Symbol

Coord = Tuple[int, int]  # (x, y), y grows downward
Held = List[Tuple[Coord, Symbol]]

DEFAULT_WIDTH = 13
DEFAULT_HEIGHT = 13


class Direction(Enum):
    NORTH = (0, -1)
    EAST = (1, 0)
    SOUTH = (0, 1)
    WEST = (-1, 0)

    @property
    def delta(self) -> Coord:
        return self.value

    def clockwise(self) -> 'Direction':
        order = list(Direction)
        return order[(order.index(self) + 1) % 4]

    def counter_clockwise(self) -> 'Direction':
        order = list(Direction)
        return order[(order.index(self) - 1) % 4]


def step(coord: Coord, direction: Direction, times: int = 1) -> Coord:
    dx, dy = direction.delta
    return coord[0] + dx * times, coord[1] + dy * times


def offset(coord: Coord, by: Coord) -> Coord:
    return coord[0] + by[0], coord[1] + by[1]


def relative_to(held: Sequence[Tuple[Coord, Symbol]], origin: Coord) -> Held:
    """Re-expresses absolute cells (as returned by ``Grid.lift``) as offsets from ``origin``."""
    ox, oy = origin
    return [((x - ox, y - oy), sym) for (x, y), sym in held]


@dataclass
class Grid:
    """
    The playfield the player moves symbols around.
    ``fragments`` partitions the occupied cells into rigid groups.
    """
    symbols: Dict[Coord, Symbol] = field(default_factory=dict)
    fragments: List[Tuple[Coord, ...]] = field(default_factory=list)
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT

    def in_bounds(self, coord: Coord) -> bool:
        x, y = coord
        return 0 <= x < self.width and 0 <= y < self.height

    def at(self, coord: Coord) -> Optional[Symbol]:
        return self.symbols.get(coord)

    def occupied(self) -> Set[Coord]:
        return set(self.symbols)

    def clone(self) -> 'Grid':
        return Grid(dict(self.symbols), list(self.fragments), self.width, self.height)

    def fragment_at(self, coord: Coord) -> Optional[int]:
        for idx, frag in enumerate(self.fragments):
            if coord in frag:
                return idx
        return None

    def lift(self, index: int) -> Held:
        """Removes a fragment from the board, returning its original cells and symbols."""
        if not 0 <= index < len(self.fragments):
            return []
        frag = self.fragments.pop(index)
        lifted: Held = []
        for pos in frag:
            sym = self.symbols.pop(pos, None)
            if sym is None:
                raise InvariantViolation(f'fragment {index} referenced empty cell {pos}')
            lifted.append((pos, sym))
        return lifted

    def can_place(self, held: Iterable[Tuple[Coord, Symbol]], anchor: Coord) -> bool:
        for rel, _sym in held:
            target = offset(anchor, rel)
            if not self.in_bounds(target) or target in self.symbols:
                return False
        return True

    def place(self, held: Sequence[Tuple[Coord, Symbol]], anchor: Coord) -> Tuple[Coord, ...]:
        """Puts held symbols down at ``anchor`` + offset. Caller must have checked ``can_place``."""
        if not self.can_place(held, anchor):
            raise InvariantViolation(f'cannot place fragment at {anchor}: occupied or out of bounds')
        targets = tuple(offset(anchor, rel) for rel, _sym in held)
        if len(set(targets)) != len(targets):
            raise InvariantViolation('held fragment has overlapping cells')
        for target, (_rel, sym) in zip(targets, held):
            self.symbols[target] = sym
        self.fragments.append(targets)
        return targets

    def check_partition(self) -> None:
        """Raises InvariantViolation unless fragments exactly partition the occupied cells."""
        seen: Set[Coord] = set()
        for idx, frag in enumerate(self.fragments):
            for pos in frag:
                if pos in seen:
                    raise InvariantViolation(f'cell {pos} belongs to more than one fragment')
                if pos not in self.symbols:
                    raise InvariantViolation(f'fragment {idx} referenced empty cell {pos}')
                seen.add(pos)
        stray = set(self.symbols) - seen
        if stray:
            raise InvariantViolation(f'cells without a fragment: {sorted(stray)}')

    def pretty(self, key: Optional[Mapping[Symbol, str]] = None) -> str:
        """Layout-style text of the board; symbols missing from ``key`` show as '?'."""
        lookup = key or {}
        lines: List[str] = []
        for y in range(self.height):
            row: List[str] = []
            for x in range(self.width):
                sym = self.symbols.get((x, y))
                if sym is None:
                    row.append('.')
                    continue
                row.append(lookup.get(sym, '?'))
            lines.append(''.join(row).rstrip('.') or '')
        while lines and not lines[-1]:
            lines.pop()
        return '\n'.join(lines)
