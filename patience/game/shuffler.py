"""Shuffling collaborator."""

import random
from typing import Protocol, Sequence

from patience.models.card import Card


class Shuffler(Protocol):
    """Anything that returns a uniformly random permutation of a deck."""

    def shuffle(self, cards: Sequence[Card]) -> list[Card]: ...


class RandomShuffler:
    """Shuffler backed by ``random.Random``; a seed makes deals repeatable."""

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def shuffle(self, cards: Sequence[Card]) -> list[Card]:
        shuffled = list(cards)
        self._rng.shuffle(shuffled)
        return shuffled


class IdentityShuffler:
    """Returns the deck unchanged. Handy for scripted deals."""

    def shuffle(self, cards: Sequence[Card]) -> list[Card]:
        return list(cards)
