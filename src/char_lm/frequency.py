"""
Frequency Table Module

Per-window statistics for the character language model. A `WindowTable`
records, in order of first appearance, every character that followed one
window in the corpus, and turns those counts into a cumulative distribution
that can be sampled with a single uniform draw.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional

import numpy as np

from .errors import PreconditionError


@dataclass
class CharObservation:
    """
    One distinct character seen after a window.

    Attributes:
        character: The follower character
        count: Number of times it followed the window
        p: Probability, count / total observations of the window
        cp: Cumulative probability in insertion order
    """
    character: str
    count: int = 1
    p: float = 0.0
    cp: float = 0.0

    def __str__(self) -> str:
        return f"({self.character!r} {self.count} {self.p} {self.cp})"


class WindowTable:
    """Ordered, character-unique list of observations for a single window."""

    def __init__(self) -> None:
        self._observations: List[CharObservation] = []

    def __len__(self) -> int:
        return len(self._observations)

    def __iter__(self) -> Iterator[CharObservation]:
        return iter(self._observations)

    def __contains__(self, character: object) -> bool:
        return self.index_of(character) != -1

    def __str__(self) -> str:
        return "(" + " ".join(str(obs) for obs in self._observations) + ")"

    @property
    def total(self) -> int:
        return sum(obs.count for obs in self._observations)

    def index_of(self, character: object) -> int:
        for i, obs in enumerate(self._observations):
            if obs.character == character:
                return i
        return -1

    def get(self, character: str) -> Optional[CharObservation]:
        i = self.index_of(character)
        return self._observations[i] if i != -1 else None

    def observe(self, character: str) -> None:
        """Count one more occurrence of `character` after this window."""
        obs = self.get(character)
        if obs is None:
            self._observations.append(CharObservation(character))
        else:
            obs.count += 1

    def finalize_probabilities(self) -> None:
        """Set `p` and `cp` of every observation once counting is done."""
        if not self._observations:
            raise PreconditionError("cannot compute probabilities of an empty table")

        total = self.total
        previous_cp = 0.0
        for obs in self._observations:
            obs.p = obs.count / total
            obs.cp = previous_cp + obs.p
            previous_cp = obs.cp

    def pick(self, r: float) -> str:
        """Return the first character whose cumulative probability exceeds `r`.

        Falls back to the last character when rounding leaves every `cp`
        at or below `r`.
        """
        for obs in self._observations:
            if obs.cp > r:
                return obs.character
        return self._observations[-1].character

    def sample(self, random_source: np.random.Generator) -> str:
        return self.pick(random_source.random())
