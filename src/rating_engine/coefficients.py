"""Position coefficient catalog and position -> group resolution.

The catalog maps a position-group key to the stat weights used for that
group's overall rating. Group keys are either a bare position code
(``"CB"``) or several codes joined by ``/`` (``"LS/ST/RS"``) that share one
coefficient set.

Resolution rule:

* an exact key match wins;
* otherwise the first grouped key (in catalog order) listing the code.

The reverse index is built once at load time so lookups are O(1).
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from src.rating_engine.config import COEFFICIENTS_FILE
from src.rating_engine.models import CoefficientLookup, KeyStat

logger = logging.getLogger(__name__)

GROUP_SEPARATOR = "/"


class UnknownPositionError(KeyError):
    """Raised when a position code matches no coefficient group."""

    def __init__(self, position: str):
        super().__init__(position)
        self.position = position

    def __str__(self) -> str:
        return f"Position {self.position!r} not found in coefficients"


class PositionCatalog:
    """Immutable lookup table of coefficient sets keyed by position group."""

    def __init__(self, coefficients: Mapping[str, Mapping[str, Dict]]):
        # Preserve definition order; it decides grouped-match precedence.
        self._coefficients: Dict[str, Dict[str, Dict]] = {
            group_key: dict(entries) for group_key, entries in coefficients.items()
        }
        self._reverse_index = self._build_reverse_index(self._coefficients)

    @classmethod
    def from_file(cls, path: Optional[Path] = None) -> "PositionCatalog":
        """Load a catalog from a JSON file (defaults to the packaged one)."""
        path = Path(path) if path is not None else COEFFICIENTS_FILE
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        logger.debug("Loaded %d coefficient groups from %s", len(data), path)
        return cls(data)

    @staticmethod
    def _build_reverse_index(coefficients: Dict[str, Dict]) -> Dict[str, str]:
        """Map every position code to the group key that governs it."""
        index: Dict[str, str] = {}

        for group_key in coefficients:
            if GROUP_SEPARATOR in group_key:
                for code in group_key.split(GROUP_SEPARATOR):
                    # First grouped key wins.
                    index.setdefault(code, group_key)

        # Direct keys always beat grouped membership.
        for group_key in coefficients:
            index[group_key] = group_key

        return index

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def find_group_key(self, position: str) -> Optional[str]:
        """Return the group key for *position*, or None if unknown."""
        return self._reverse_index.get(position)

    def resolve(self, position: str) -> Dict[str, Dict]:
        """Return the coefficient set governing *position*.

        Raises:
            UnknownPositionError: If no direct or grouped key matches.
        """
        group_key = self.find_group_key(position)
        if group_key is None:
            raise UnknownPositionError(position)
        return self._coefficients[group_key]

    def lookup(self, position: str) -> CoefficientLookup:
        """Resolve *position* and report which group key matched."""
        coefficients = self.resolve(position)
        return CoefficientLookup(
            position=position,
            group_key=self._reverse_index[position],
            coefficients=coefficients,
        )

    # ------------------------------------------------------------------
    # Catalog queries
    # ------------------------------------------------------------------

    @property
    def group_keys(self) -> List[str]:
        return list(self._coefficients)

    def all_positions(self) -> List[str]:
        """Every individual position code, grouped keys expanded in order."""
        positions: List[str] = []
        for group_key in self._coefficients:
            positions.extend(group_key.split(GROUP_SEPARATOR))
        return positions

    def as_dict(self) -> Dict[str, Dict[str, Dict]]:
        """Copy of the whole catalog (group key -> coefficient set)."""
        return {key: dict(entries) for key, entries in self._coefficients.items()}

    def key_stats(self, position: str, top_n: int = 5) -> List[KeyStat]:
        """Most heavily weighted stats for *position*, highest first.

        Ties keep catalog order. Unknown positions yield an empty list.
        """
        group_key = self.find_group_key(position)
        if group_key is None:
            return []

        stats = [
            KeyStat(key=key, name=entry.get("name", key), coefficient=entry["coefficient"])
            for key, entry in self._coefficients[group_key].items()
        ]
        stats.sort(key=lambda s: s.coefficient, reverse=True)
        return stats[:top_n]

    def __contains__(self, position: str) -> bool:
        return position in self._reverse_index

    def __len__(self) -> int:
        return len(self._coefficients)


def resolve(position: str, catalog: Mapping[str, Mapping[str, Dict]]) -> Dict[str, Dict]:
    """Resolve *position* against a plain mapping catalog.

    Builds a throwaway :class:`PositionCatalog`; callers resolving many
    positions should build one catalog and reuse it.
    """
    return PositionCatalog(catalog).resolve(position)


_default_catalog: Optional[PositionCatalog] = None


def get_default_catalog() -> PositionCatalog:
    """Packaged catalog, loaded on first use."""
    global _default_catalog
    if _default_catalog is None:
        _default_catalog = PositionCatalog.from_file()
    return _default_catalog
