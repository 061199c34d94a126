from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Sequence, Set, Tuple, Union

from .errors import FormatError
from .floodfill import flood_components

SIDE = 5
# Hollow square, and hollow square with a centre dot. Authoring constants.
START_CODE = 0b11111_10001_10001_10001_11111
COLLATE_CODE = 0b11111_10001_10101_10001_11111

BLANK_CHARS = ('.', '_')


def is_blank(ch: str) -> bool:
    return ch.isspace() or ch in BLANK_CHARS


@dataclass(frozen=True)
class ParticleStart:
    """What every sentence starts with."""


@dataclass(frozen=True)
class ParticleCollate:
    """Closes a list of two or more nouns."""


@dataclass(frozen=True)
class Noun:
    islands: int
    depth: int


@dataclass(frozen=True)
class Verb:
    islands: int
    depth: int


Category = Union[ParticleStart, ParticleCollate, Noun, Verb]


def text_rows(text: Union[str, Sequence[str]], what: str = 'symbol pattern') -> List[str]:
    """Splits multi-line text, or checks an already split list of rows."""
    if isinstance(text, str):
        return text.splitlines()
    if isinstance(text, (list, tuple)) and all(isinstance(row, str) for row in text):
        return list(text)
    raise FormatError(f'{what} must be a string or a list of strings, got {text!r}')


def parse_pattern(pattern: Union[str, Sequence[str]]) -> int:
    """Compile up to 5 rows of up to 5 characters into a 25-bit code.

    Bit index is ``row * 5 + column``. Whitespace, '.' and '_' are empty
    cells, anything else is filled.
    """
    rows = text_rows(pattern)
    if len(rows) > SIDE:
        raise FormatError(f'too many lines in symbol pattern ({len(rows)} > {SIDE})')
    code = 0
    for y, line in enumerate(rows):
        if len(line) > SIDE:
            raise FormatError(f'line {y} of symbol pattern has too many characters ({len(line)} > {SIDE})')
        for x, ch in enumerate(line):
            if not is_blank(ch):
                code |= 1 << (y * SIDE + x)
    return code


def code_cells(code: int) -> Set[Tuple[int, int]]:
    """Filled (x, y) cells of a bitmap code."""
    cells: Set[Tuple[int, int]] = set()
    for y in range(SIDE):
        for x in range(SIDE):
            if code & (1 << (y * SIDE + x)):
                cells.add((x, y))
    return cells


def is_point_symmetric(cells: Set[Tuple[int, int]]) -> bool:
    """True when the bitmap is unchanged by a 180 degree turn about its centre."""
    for x in range(SIDE // 2 + 1):
        for y in range(SIDE):
            if ((x, y) in cells) != ((SIDE - 1 - x, SIDE - 1 - y) in cells):
                return False
    return True


@lru_cache(maxsize=None)
def classify(code: int) -> Category:
    """Map a bitmap code to its part of speech. Pure and total."""
    if code == START_CODE:
        return ParticleStart()
    if code == COLLATE_CODE:
        return ParticleCollate()

    cells = code_cells(code)
    islands = flood_components(cells)
    depth = sum(1 for island in islands if len(island) == 1)
    if is_point_symmetric(cells):
        return Noun(islands=len(islands), depth=depth)
    return Verb(islands=len(islands), depth=depth)


@dataclass(frozen=True)
class Symbol:
    """A 5x5 bitmap placed on the grid. Identity is the code alone."""
    code: int
    category: Category = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not 0 <= self.code < (1 << SIDE * SIDE):
            raise FormatError(f'symbol code out of range: {self.code}')
        object.__setattr__(self, 'category', classify(self.code))

    @classmethod
    def from_pattern(cls, pattern: Union[str, Sequence[str]]) -> 'Symbol':
        return cls(parse_pattern(pattern))

    def rows(self, filled: str = '#', empty: str = ' ') -> List[str]:
        cells = code_cells(self.code)
        return [
            ''.join(filled if (x, y) in cells else empty for x in range(SIDE))
            for y in range(SIDE)
        ]

    def is_start(self) -> bool:
        return isinstance(self.category, ParticleStart)


def category_name(category: Category) -> str:
    if isinstance(category, ParticleStart):
        return 'start'
    if isinstance(category, ParticleCollate):
        return 'collate'
    if isinstance(category, Noun):
        return 'noun'
    if isinstance(category, Verb):
        return 'verb'
    raise TypeError(f'unknown category {category!r}')


def category_to_json(category: Category) -> dict:
    out = {'kind': category_name(category)}
    if isinstance(category, (Noun, Verb)):
        out['islands'] = category.islands
        out['depth'] = category.depth
    return out
