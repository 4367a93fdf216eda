"""Closest-name matching for template suggestions.

Names are compared as bags of overlapping character n-grams (bigrams by
default). A candidate only scores when it shares at least one gram with
the query; rare grams and short candidates weigh more.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Set, Tuple


def split_grams(word: str, size: int = 2) -> Set[str]:
    """Split a word into its set of overlapping lowercase n-grams."""
    lowered = word.lower()
    if not lowered:
        return set()
    if len(lowered) <= size:
        return {lowered}
    return {lowered[i : i + size] for i in range(len(lowered) - size + 1)}


class ClosestMatch:
    def __init__(self, names: Iterable[str], size: int = 2) -> None:
        self.size = size
        self._grams: Dict[str, Set[str]] = {}
        self._df: Dict[str, int] = {}
        for name in names:
            grams = split_grams(name, size)
            if not grams:
                continue
            self._grams[name] = grams
            for gram in grams:
                self._df[gram] = self._df.get(gram, 0) + 1

    def scores(self, word: str) -> Dict[str, float]:
        """Score every candidate that shares at least one gram with word."""
        query = split_grams(word, self.size)
        out: Dict[str, float] = {}
        if not query:
            return out
        for name, grams in self._grams.items():
            shared = query & grams
            if not shared:
                continue
            weight = sum(1.0 / self._df[g] for g in shared)
            out[name] = weight / len(query | grams)
        return out

    def closest_n(self, word: str, n: int) -> List[str]:
        """Return up to n candidate names, best first."""
        ranked: List[Tuple[float, str]] = sorted(
            ((-score, name) for name, score in self.scores(word).items())
        )
        return [name for _, name in ranked[: max(0, n)]]
