from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from .catalog import default_levels_dir, load_catalog, load_level_file
from .errors import FormatError
from .grammar import validate
from .level import Level
from .symbols import Symbol, category_to_json


def _debug_enabled() -> bool:
    return os.getenv('GLYPHGRAM_DEBUG', '0').lower() in ('1', 'true', 'yes', 'on')


def report_level(level: Level) -> bool:
    """Prints a level's board and verdict; returns True if it is solved as laid out."""
    grid = level.new_grid()
    print(f"[{level.id}] {level.name}")
    print(grid.pretty(level.reverse_key()))
    verdict = validate(grid)
    valid, errors = verdict
    solved = verdict.solves(grid)
    print(f"fragments: {len(grid.fragments)}  valid cells: {len(valid)}/{len(grid.symbols)}")
    for err in errors:
        print(f"  {err.kind}: {err}")
    print('solved' if solved else 'not solved')
    return solved


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Glyphgram level checker')
    parser.add_argument('--levels', default=None, help='Levels directory (default: $GLYPHGRAM_LEVELS_DIR or ./levels)')
    parser.add_argument('--level', action='append', default=None, help='Level id to check (repeatable); default all')
    parser.add_argument('--file', default=None, help='Check a single level JSON file instead of the catalog')
    parser.add_argument('--classify', default=None, help="Classify a 5x5 pattern file ('-' for stdin)")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if _debug_enabled() else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s %(message)s',
    )

    if args.classify is not None:
        if args.classify == '-':
            text = sys.stdin.read()
        else:
            with open(args.classify, 'r', encoding='utf-8') as f:
                text = f.read()
        try:
            sym = Symbol.from_pattern(text.strip('\n'))
        except FormatError as e:
            print(f"error: {e}")
            return 2
        print('\n'.join(sym.rows()))
        print(f"code: {sym.code}  category: {category_to_json(sym.category)}")
        return 0

    if args.file:
        try:
            levels = [load_level_file(args.file)]
        except FormatError as e:
            print(f"error: {e}")
            return 2
    else:
        levels = load_catalog(args.levels or default_levels_dir())
        if args.level:
            wanted = set(args.level)
            levels = [lvl for lvl in levels if lvl.id in wanted]
            missing = wanted - {lvl.id for lvl in levels}
            if missing:
                print(f"error: unknown level(s): {', '.join(sorted(missing))}")
                return 2

    for idx, level in enumerate(levels):
        if idx:
            print()
        report_level(level)
    return 0
