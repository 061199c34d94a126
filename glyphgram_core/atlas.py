from __future__ import annotations

from typing import Dict, Iterable, List, Tuple


class SymbolAtlas:
    """Bitmap code -> texture slot, filled lazily in first-seen order. Owned by a renderer."""

    def __init__(self) -> None:
        self._indices: Dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._indices)

    def __contains__(self, code: int) -> bool:
        return code in self._indices

    def index_for(self, code: int) -> int:
        idx = self._indices.get(code)
        if idx is None:
            idx = len(self._indices)
            self._indices[code] = idx
        return idx

    def stitch(self, codes: Iterable[int]) -> Dict[int, int]:
        for code in codes:
            self.index_for(code)
        return dict(self._indices)

    def entries(self) -> List[Tuple[int, int]]:
        return sorted((idx, code) for code, idx in self._indices.items())
