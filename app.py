from __future__ import annotations

import logging
import os
import sys
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, jsonify, request

# Ensure package imports work when executed directly from repo root or as module
if __package__ in (None, ""):
    sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

try:
    from .game import (  # type: ignore
        FormatError,
        InvariantViolation,
        Grid,
        Level,
        Symbol,
        SymbolAtlas,
        category_to_json,
        default_levels_dir,
        load_catalog,
        parse_pattern,
        relative_to,
        validate,
    )
except ImportError:
    from game import (  # type: ignore
        FormatError,
        InvariantViolation,
        Grid,
        Level,
        Symbol,
        SymbolAtlas,
        category_to_json,
        default_levels_dir,
        load_catalog,
        parse_pattern,
        relative_to,
        validate,
    )

logger = logging.getLogger(__name__)

LEVELS_DIR = os.getenv("GLYPHGRAM_LEVELS_DIR") or default_levels_dir()

app = Flask(__name__)

# Texture slots for every symbol code this server has handed out.
atlas = SymbolAtlas()

_levels: Optional[List[Level]] = None


def _catalog() -> List[Level]:
    global _levels
    if _levels is None:
        _levels = load_catalog(LEVELS_DIR)
    return _levels


def _find_level(level_id: str) -> Optional[Level]:
    for lvl in _catalog():
        if lvl.id == level_id:
            return lvl
    return None


def _bad_request(message: str) -> Any:
    return jsonify({"ok": False, "error": message}), 400


def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    return body if isinstance(body, dict) else {}


# ---------- JSON <-> engine ----------

def _coord_from_json(value: Any) -> Tuple[int, int]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise FormatError(f"coordinate must be [x, y], got {value!r}")
    return int(value[0]), int(value[1])


def _symbol_to_json(sym: Symbol) -> Dict[str, Any]:
    return {
        "code": sym.code,
        "category": category_to_json(sym.category),
        "atlas": atlas.index_for(sym.code),
    }


def _grid_to_json(g: Grid) -> Dict[str, Any]:
    cells = []
    for (x, y), sym in sorted(g.symbols.items(), key=lambda kv: (kv[0][1], kv[0][0])):
        cell = {"x": x, "y": y}
        cell.update(_symbol_to_json(sym))
        cells.append(cell)
    return {
        "width": g.width,
        "height": g.height,
        "cells": cells,
        "fragments": [[[x, y] for (x, y) in frag] for frag in g.fragments],
    }


def _json_to_grid(obj: Any) -> Grid:
    if not isinstance(obj, dict):
        raise FormatError("grid must be an object")
    try:
        symbols = {}
        for cell in obj.get("cells", []):
            pos = (int(cell["x"]), int(cell["y"]))
            if pos in symbols:
                raise FormatError(f"two symbols at {pos}")
            symbols[pos] = Symbol(int(cell["code"]))
        fragments = [tuple(_coord_from_json(c) for c in frag) for frag in obj.get("fragments", [])]
        g = Grid(
            symbols=symbols,
            fragments=fragments,
            width=int(obj.get("width", 13)),
            height=int(obj.get("height", 13)),
        )
    except FormatError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise FormatError(f"bad grid: {e}") from e
    try:
        g.check_partition()
    except InvariantViolation as e:
        # Client-supplied grids are input, not engine state.
        raise FormatError(f"bad grid: {e}") from e
    return g


def _verdict_to_json(g: Grid) -> Dict[str, Any]:
    verdict = validate(g)
    valid, errors = verdict
    return {
        "solved": verdict.solves(g),
        "valid": [[x, y] for (x, y) in sorted(valid, key=lambda c: (c[1], c[0]))],
        "errors": [
            {"kind": e.kind, "message": str(e), "coords": [[x, y] for (x, y) in e.coords]}
            for e in errors
        ],
    }


# ---------- API ----------

@app.get("/api/levels")
def api_levels() -> Any:
    return jsonify({
        "ok": True,
        "levels": [{"id": lvl.id, "name": lvl.name} for lvl in _catalog()],
    })


@app.get("/api/levels/<level_id>")
def api_level(level_id: str) -> Any:
    lvl = _find_level(level_id)
    if lvl is None:
        return jsonify({"ok": False, "error": f"unknown level {level_id}"}), 404
    g = lvl.new_grid()
    out = {"ok": True, "id": lvl.id, "name": lvl.name, "grid": _grid_to_json(g)}
    out.update(_verdict_to_json(g))
    return jsonify(out)


@app.post("/api/classify")
def api_classify() -> Any:
    body = _body()
    try:
        if "code" in body:
            sym = Symbol(int(body["code"]))
        elif "pattern" in body:
            sym = Symbol(parse_pattern(body["pattern"]))
        else:
            return _bad_request("pattern or code required")
    except (FormatError, TypeError, ValueError) as e:
        return _bad_request(str(e))
    out = {"ok": True, "rows": sym.rows()}
    out.update(_symbol_to_json(sym))
    return jsonify(out)


@app.post("/api/check")
def api_check() -> Any:
    body = _body()
    try:
        g = _json_to_grid(body.get("grid"))
    except FormatError as e:
        return _bad_request(str(e))
    out = {"ok": True}
    out.update(_verdict_to_json(g))
    return jsonify(out)


@app.post("/api/move")
def api_move() -> Any:
    """Picks up the fragment under "from" and drops it so that cell lands on "to"."""
    body = _body()
    try:
        g = _json_to_grid(body.get("grid"))
        src = _coord_from_json(body.get("from"))
        dst = _coord_from_json(body.get("to"))
    except (FormatError, TypeError, ValueError) as e:
        return _bad_request(str(e))

    idx = g.fragment_at(src)
    if idx is None:
        return _bad_request(f"no fragment at {list(src)}")
    lifted = g.lift(idx)
    held = relative_to(lifted, src)
    if not g.can_place(held, dst):
        return jsonify({"ok": False, "error": "Blocked or out of bounds", "to": list(dst)}), 400
    g.place(held, dst)
    logger.debug("moved fragment %d from %s to %s", idx, src, dst)
    out = {"ok": True, "grid": _grid_to_json(g)}
    out.update(_verdict_to_json(g))
    return jsonify(out)


if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    logging.basicConfig(
        level=logging.DEBUG if debug or os.getenv("GLYPHGRAM_DEBUG", "0").lower() in ("1", "true", "yes", "on") else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
