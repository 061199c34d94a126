"""
Sentence checking over a grid.

Every start particle opens a sentence. Its single occupied neighbor fixes the
reading direction; the spine is read along it by a small state machine, then
each spine noun/verb is probed sideways for modifiers.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, List, Mapping, NamedTuple, Optional, Set, Union

from .board import Coord, Direction, Grid, step
from .errors import (
    AmbiguousDirectionError,
    GrammarError,
    LeftoverSymbolsError,
    ModifierError,
    UnexpectedTokenError,
)
from .symbols import Noun, ParticleCollate, ParticleStart, Symbol, Verb

logger = logging.getLogger(__name__)


class Kind(Enum):
    """What a spine cell reads as."""
    START = 'start'
    COLLATOR = 'collator'
    NOUN = 'noun'
    VERB = 'verb'
    EOF = 'eof'


class SpineState(Enum):
    ORIGIN = 'origin'                      # expecting the start particle itself
    START = 'start'                        # read the start particle, want a noun
    SUBJECT1 = 'subject1'                  # one subject noun; verb or more nouns
    SUBJECT_N = 'subject_n'                # two+ subject nouns; must collate
    SUBJECT_COLLATOR = 'subject_collator'  # collated subjects; must have a verb
    VERB = 'verb'                          # end or an object noun
    OBJECT1 = 'object1'                    # one object noun; end or more nouns
    OBJECT_N = 'object_n'                  # two+ object nouns; must collate
    OBJECT_COLLATOR = 'object_collator'    # collated objects; must end
    SATISFIED = 'satisfied'


TRANSITIONS: Dict[SpineState, Dict[Kind, SpineState]] = {
    SpineState.ORIGIN: {Kind.START: SpineState.START},
    SpineState.START: {Kind.NOUN: SpineState.SUBJECT1},
    SpineState.SUBJECT1: {Kind.NOUN: SpineState.SUBJECT_N, Kind.VERB: SpineState.VERB},
    SpineState.SUBJECT_N: {Kind.NOUN: SpineState.SUBJECT_N, Kind.COLLATOR: SpineState.SUBJECT_COLLATOR},
    SpineState.SUBJECT_COLLATOR: {Kind.VERB: SpineState.VERB},
    SpineState.VERB: {Kind.NOUN: SpineState.OBJECT1, Kind.EOF: SpineState.SATISFIED},
    SpineState.OBJECT1: {Kind.NOUN: SpineState.OBJECT_N, Kind.EOF: SpineState.SATISFIED},
    SpineState.OBJECT_N: {Kind.NOUN: SpineState.OBJECT_N, Kind.COLLATOR: SpineState.OBJECT_COLLATOR},
    SpineState.OBJECT_COLLATOR: {Kind.EOF: SpineState.SATISFIED},
    SpineState.SATISFIED: {},
}


class Verdict(NamedTuple):
    valid: Set[Coord]
    errors: List[GrammarError]

    def solves(self, grid: Grid) -> bool:
        """No errors and every occupied cell is part of a valid sentence."""
        return not self.errors and self.valid == grid.occupied()


def spine_kind(symbol: Optional[Symbol], pos: Coord) -> Kind:
    if symbol is None:
        return Kind.EOF
    cat = symbol.category
    if isinstance(cat, ParticleStart):
        return Kind.START
    if isinstance(cat, ParticleCollate):
        return Kind.COLLATOR
    if isinstance(cat, (Noun, Verb)):
        if cat.depth != 0:
            raise UnexpectedTokenError(f'{cat} at {pos} has non-zero depth and cannot sit on a spine', [pos])
        return Kind.NOUN if isinstance(cat, Noun) else Kind.VERB
    raise TypeError(f'unknown category {cat!r}')


def reading_direction(symbols: Mapping[Coord, Symbol], origin: Coord) -> Direction:
    occupied = [d for d in Direction if step(origin, d) in symbols]
    if len(occupied) != 1:
        raise AmbiguousDirectionError(
            f'start at {origin} wanted exactly 1 occupied neighbor but got {[d.name for d in occupied]}',
            [origin],
        )
    return occupied[0]


def read_spine(symbols: Mapping[Coord, Symbol], origin: Coord, direction: Direction) -> List[Coord]:
    """Runs the spine state machine from ``origin``; returns the spine cells (EOF excluded)."""
    state = SpineState.ORIGIN
    idx = 0
    while True:
        pos = step(origin, direction, idx)
        kind = spine_kind(symbols.get(pos), pos)
        nxt = TRANSITIONS[state].get(kind)
        if nxt is None:
            raise UnexpectedTokenError(f'{state.value} does not accept {kind.value} at {pos}', [pos])
        if nxt is SpineState.SATISFIED:
            return [step(origin, direction, i) for i in range(idx)]
        state = nxt
        idx += 1


def _modifier_chain(
    symbols: Mapping[Coord, Symbol],
    base_pos: Coord,
    base: Union[Noun, Verb],
    look: Direction,
    side_name: str,
) -> List[Coord]:
    found: List[Coord] = []
    distance = 1
    while True:
        pos = step(base_pos, look, distance)
        sym = symbols.get(pos)
        if sym is None:
            return found
        cat = sym.category
        if isinstance(cat, (ParticleStart, ParticleCollate)):
            return found
        if not isinstance(cat, (Noun, Verb)):
            raise TypeError(f'unknown category {cat!r}')
        if type(cat) is not type(base):
            raise ModifierError(
                f'the {side_name} at {pos}, {cat}, does not match the {type(base).__name__.lower()} at {base_pos}',
                [pos],
            )
        if cat.depth != 1:
            raise ModifierError(f'the {side_name} at {pos}, {cat}, had a bad depth', [pos])
        if cat.islands != base.islands:
            raise ModifierError(
                f'the {side_name} at {pos}, {cat}, did not have the right island count (wanted {base.islands})',
                [pos],
            )
        found.append(pos)
        distance += 1


def check_from_start(symbols: Mapping[Coord, Symbol], origin: Coord) -> List[Coord]:
    """Cells of the sentence opened at ``origin``; raises GrammarError if it is not grammatical."""
    direction = reading_direction(symbols, origin)
    spine = read_spine(symbols, origin, direction)

    seen = list(spine)
    adj_dir = direction.clockwise()
    adv_dir = direction.counter_clockwise()
    for spine_pos in spine:
        cat = symbols[spine_pos].category
        if not isinstance(cat, (Noun, Verb)):
            continue
        seen.extend(_modifier_chain(symbols, spine_pos, cat, adj_dir, 'adjective'))
        seen.extend(_modifier_chain(symbols, spine_pos, cat, adv_dir, 'adverb'))
    return seen


def validate(grid: Grid) -> Verdict:
    """Collects every grammatical cell and every structural error on the grid."""
    symbols = grid.symbols
    valid: Set[Coord] = set()
    errors: List[GrammarError] = []
    starts = sorted((pos for pos, sym in symbols.items() if sym.is_start()), key=lambda c: (c[1], c[0]))
    for start in starts:
        try:
            valid.update(check_from_start(symbols, start))
        except GrammarError as e:
            logger.debug('sentence at %s rejected: %s', start, e)
            errors.append(e)

    leftover = sorted((pos for pos in symbols if pos not in valid), key=lambda c: (c[1], c[0]))
    if leftover:
        errors.append(LeftoverSymbolsError(f'leftover ungrammatical symbols at: {leftover}', leftover))
    return Verdict(valid, errors)


def is_solved(grid: Grid) -> bool:
    return validate(grid).solves(grid)
