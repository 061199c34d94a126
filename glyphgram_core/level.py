from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Sequence, Union

from .board import DEFAULT_HEIGHT, DEFAULT_WIDTH, Coord, Grid
from .errors import FormatError
from .floodfill import flood_components
from .symbols import Symbol, is_blank, text_rows

Pattern = Union[str, Sequence[str]]


@dataclass(frozen=True)
class Level:
    """Immutable level template. ``initial_grid`` and ``new_grid`` return fresh copies."""
    id: str
    name: str
    _grid: Grid = field(compare=False, repr=False)
    symbol_key: Mapping[str, Symbol] = field(default_factory=dict, compare=False)

    @property
    def initial_grid(self) -> Grid:
        return self._grid.clone()

    def new_grid(self) -> Grid:
        return self._grid.clone()

    def reverse_key(self) -> Dict[Symbol, str]:
        return {sym: ch for ch, sym in self.symbol_key.items()}


def compile_key(symbol_key: Mapping[str, Pattern]) -> Dict[str, Symbol]:
    out: Dict[str, Symbol] = {}
    for ch, pattern in symbol_key.items():
        if not isinstance(ch, str) or len(ch) != 1 or is_blank(ch):
            raise FormatError(f'symbol key {ch!r} must be a single non-blank character')
        try:
            out[ch] = Symbol.from_pattern(pattern)
        except FormatError as e:
            raise FormatError(f'symbol {ch!r}: {e}') from e
    return out


def build(
    name: str,
    symbol_key: Mapping[str, Pattern],
    layout: Pattern,
    level_id: str = '',
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
) -> Level:
    """Compiles symbols, places layout characters and groups them into fragments."""
    key = compile_key(symbol_key)
    lines = text_rows(layout, 'layout')

    symbols: Dict[Coord, Symbol] = {}
    for y, line in enumerate(lines):
        for x, ch in enumerate(line):
            if is_blank(ch):
                continue
            sym = key.get(ch)
            if sym is None:
                raise FormatError(f'layout character {ch!r} at ({x}, {y}) has no symbol')
            if not (0 <= x < width and 0 <= y < height):
                raise FormatError(f'layout character {ch!r} at ({x}, {y}) is outside the {width}x{height} board')
            symbols[(x, y)] = sym

    fragments = [tuple(sorted(region, key=lambda c: (c[1], c[0]))) for region in flood_components(symbols)]
    grid = Grid(symbols=symbols, fragments=fragments, width=width, height=height)
    return Level(id=level_id or name, name=name, _grid=grid, symbol_key=MappingProxyType(key))


def _dimension(doc: Mapping[str, Any], name: str, default: int) -> int:
    value = doc.get(name)
    if value is None:
        return default
    if isinstance(value, bool):
        raise FormatError(f'"{name}" must be a positive integer, got {value!r}')
    try:
        n = int(value)
    except (TypeError, ValueError) as e:
        raise FormatError(f'"{name}" must be a positive integer, got {value!r}') from e
    if n <= 0:
        raise FormatError(f'"{name}" must be a positive integer, got {value!r}')
    return n


def level_from_document(level_id: str, doc: Mapping[str, Any]) -> Level:
    """Builds a Level from a parsed level document (see catalog)."""
    if not isinstance(doc, Mapping):
        raise FormatError('level document must be an object')
    try:
        name = str(doc['name'])
        symbol_key = doc['symbols']
        layout = doc['layout']
    except KeyError as e:
        raise FormatError(f'level document missing field {e.args[0]!r}') from e
    if not isinstance(symbol_key, Mapping):
        raise FormatError('"symbols" must map characters to patterns')
    return build(
        name,
        symbol_key,
        layout,
        level_id=level_id,
        width=_dimension(doc, 'width', DEFAULT_WIDTH),
        height=_dimension(doc, 'height', DEFAULT_HEIGHT),
    )
