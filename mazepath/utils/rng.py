"""Per-session random source for maze generation and exploration."""

import random
from typing import Optional


class SeededRNG:
    """
    Random source owned by a single training session or maze build.

    Each instance wraps its own ``random.Random``, so two sessions never
    share generator state. Pass a seed to make a run reproducible.
    """

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def random(self) -> float:
        """Exploration draw, compared against epsilon."""
        return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        """Random action index in ``[a, b]``."""
        return self._rng.randint(a, b)

    def choice(self, seq):
        """Pick the next unvisited neighbour while carving a maze."""
        return self._rng.choice(seq)

    def shuffle(self, seq) -> None:
        """Reorder candidate walls in place before opening loops."""
        self._rng.shuffle(seq)


def make_rng(seed: Optional[int] = None, rng: Optional[SeededRNG] = None) -> SeededRNG:
    """Return the injected generator, or a fresh one built from ``seed``."""
    if rng is not None:
        return rng
    return SeededRNG(seed)
