from __future__ import annotations

from typing import FrozenSet, Iterable, List, Set, Tuple

Coord = Tuple[int, int]

OFFSETS4: Tuple[Coord, ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))


def neighbors4(coord: Coord) -> List[Coord]:
    """Gets the orthogonal neighbors of a coordinate (unbounded lattice)."""
    x, y = coord
    return [(x + dx, y + dy) for dx, dy in OFFSETS4]


def flood_from(seed: Coord, cells: Set[Coord]) -> Set[Coord]:
    """Collects the 4-connected region of ``cells`` containing ``seed``."""
    region: Set[Coord] = set()
    to_check: List[Coord] = [seed]
    while to_check:
        pos = to_check.pop()
        if pos in region:
            continue
        region.add(pos)
        for nxt in neighbors4(pos):
            if nxt in cells and nxt not in region:
                to_check.append(nxt)
    return region


def flood_components(cells: Iterable[Coord]) -> List[FrozenSet[Coord]]:
    """
    Partitions a coordinate set into its maximal 4-connected components.
    Seeds are taken in sorted order so the output order is stable; the
    partition itself does not depend on it.
    """
    remaining: Set[Coord] = set(cells)
    out: List[FrozenSet[Coord]] = []
    for seed in sorted(remaining, key=lambda c: (c[1], c[0])):
        if seed not in remaining:
            continue
        region = flood_from(seed, remaining)
        remaining -= region
        out.append(frozenset(region))
    return out

