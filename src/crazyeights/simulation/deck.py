"""Standard 52-card deck construction."""

from __future__ import annotations

import random
import uuid
from typing import Optional

from crazyeights.simulation.state import Card, Rank, Suit


def _card_id(rng: random.Random) -> str:
    # Ids come from the injected RNG so seeded decks are fully reproducible
    return uuid.UUID(int=rng.getrandbits(128), version=4).hex


def build_shuffled_deck(rng: Optional[random.Random] = None) -> tuple[Card, ...]:
    """Build one face-down card per (suit, rank) pair in random order.

    Args:
        rng: Random source used for ids and the shuffle. A fresh unseeded
            ``random.Random`` is used when omitted.

    Returns:
        Tuple of 52 cards; the last element is the top of the deck.
    """
    if rng is None:
        rng = random.Random()

    deck: list[Card] = []
    for suit in Suit:
        for rank in Rank:
            deck.append(Card(id=_card_id(rng), rank=rank, suit=suit))

    # random.Random.shuffle is Fisher-Yates
    rng.shuffle(deck)
    return tuple(deck)
