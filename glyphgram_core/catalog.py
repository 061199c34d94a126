from __future__ import annotations

import json
import logging
import os
from typing import List, Optional

from .errors import FormatError
from .level import Level, level_from_document

logger = logging.getLogger(__name__)

MANIFEST = 'manifest.json'


def default_levels_dir() -> str:
    env = os.getenv('GLYPHGRAM_LEVELS_DIR')
    if env:
        return env
    base = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return os.path.join(base, 'levels')


def load_level_file(path: str, level_id: Optional[str] = None) -> Level:
    """Reads and builds one level document. Raises FormatError naming the file."""
    stem = level_id or os.path.splitext(os.path.basename(path))[0]
    try:
        with open(path, 'r', encoding='utf-8') as f:
            doc = json.load(f)
    except json.JSONDecodeError as e:
        raise FormatError(f'{path}: invalid JSON: {e}') from e
    try:
        return level_from_document(stem, doc)
    except FormatError as e:
        raise FormatError(f'{path}: {e}') from e


def read_manifest(directory: str) -> List[str]:
    path = os.path.join(directory, MANIFEST)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise FormatError(f'{path}: invalid JSON: {e}') from e
    stems = data.get('levels') if isinstance(data, dict) else None
    if not isinstance(stems, list) or not all(isinstance(s, str) for s in stems):
        raise FormatError(f'{path}: "levels" must be a list of level names')
    return stems


def load_catalog(directory: Optional[str] = None) -> List[Level]:
    """Loads every level in manifest order; levels that fail to build are logged and skipped."""
    directory = directory or default_levels_dir()
    out: List[Level] = []
    for stem in read_manifest(directory):
        path = os.path.join(directory, stem + '.json')
        try:
            out.append(load_level_file(path, stem))
        except FormatError as e:
            logger.warning('skipping level %s: %s', stem, e)
        except OSError as e:
            logger.warning('skipping level %s: cannot read %s (%s)', stem, path, e)
    logger.debug('loaded %d level(s) from %s', len(out), directory)
    return out

