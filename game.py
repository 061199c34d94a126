from __future__ import annotations

# Facade module that re-exports the glyphgram engine.
# The Flask app and tests import from here; the logic lives under glyphgram_core/*.

try:
    from .glyphgram_core.symbols import (  # type: ignore
        START_CODE,
        COLLATE_CODE,
        Category,
        ParticleStart,
        ParticleCollate,
        Noun,
        Verb,
        Symbol,
        classify,
        parse_pattern,
        code_cells,
        is_point_symmetric,
        category_to_json,
    )
    from .glyphgram_core.floodfill import flood_components, flood_from, neighbors4  # type: ignore
    from .glyphgram_core.board import Coord, Direction, Grid, relative_to, step  # type: ignore
    from .glyphgram_core.level import Level, build, level_from_document  # type: ignore
    from .glyphgram_core.grammar import (  # type: ignore
        Kind,
        SpineState,
        TRANSITIONS,
        Verdict,
        check_from_start,
        is_solved,
        read_spine,
        reading_direction,
        validate,
    )
    from .glyphgram_core.errors import (  # type: ignore
        FormatError,
        InvariantViolation,
        GrammarError,
        AmbiguousDirectionError,
        UnexpectedTokenError,
        ModifierError,
        LeftoverSymbolsError,
    )
    from .glyphgram_core.session import PlaySession  # type: ignore
    from .glyphgram_core.catalog import load_catalog, load_level_file, default_levels_dir  # type: ignore
    from .glyphgram_core.atlas import SymbolAtlas  # type: ignore
except ImportError:
    from glyphgram_core.symbols import (  # type: ignore
        START_CODE,
        COLLATE_CODE,
        Category,
        ParticleStart,
        ParticleCollate,
        Noun,
        Verb,
        Symbol,
        classify,
        parse_pattern,
        code_cells,
        is_point_symmetric,
        category_to_json,
    )
    from glyphgram_core.floodfill import flood_components, flood_from, neighbors4  # type: ignore
    from glyphgram_core.board import Coord, Direction, Grid, relative_to, step  # type: ignore
    from glyphgram_core.level import Level, build, level_from_document  # type: ignore
    from glyphgram_core.grammar import (  # type: ignore
        Kind,
        SpineState,
        TRANSITIONS,
        Verdict,
        check_from_start,
        is_solved,
        read_spine,
        reading_direction,
        validate,
    )
    from glyphgram_core.errors import (  # type: ignore
        FormatError,
        InvariantViolation,
        GrammarError,
        AmbiguousDirectionError,
        UnexpectedTokenError,
        ModifierError,
        LeftoverSymbolsError,
    )
    from glyphgram_core.session import PlaySession  # type: ignore
    from glyphgram_core.catalog import load_catalog, load_level_file, default_levels_dir  # type: ignore
    from glyphgram_core.atlas import SymbolAtlas  # type: ignore


def main() -> None:
    # CLI driver delegated to glyphgram_core.cli
    try:
        from .glyphgram_core.cli import main as _main  # type: ignore
    except ImportError:
        from glyphgram_core.cli import main as _main  # type: ignore
    raise SystemExit(_main())


if __name__ == '__main__':
    main()
