"""
Deck construction, shuffling and the discard policies that shrink the
match-wide universe of playable cards.
"""

import random
from typing import List, Optional, Tuple

from .card import Card, SUIT_PRIORITY, RANKS
from .errors import ConfigurationError

STANDARD_DECK_SIZE = 52


def build_standard_deck() -> List[Card]:
    """Full, ordered 52-card deck: suits in priority order, ranks ascending"""
    cards = []
    for suit in SUIT_PRIORITY:
        for rank in RANKS:
            cards.append(Card(suit, rank))
    return cards


def shuffle(cards: List[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """Return a uniformly shuffled copy of ``cards`` (Fisher-Yates)"""
    rng = rng or random.Random()
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def _check_discard_count(universe: List[Card], count: int):
    if count < 0 or count > len(universe):
        raise ConfigurationError(
            f"Cannot discard {count} cards from a deck of {len(universe)}",
            reason="INVALID_DISCARD",
        )


def discard_lowest_priority(universe: List[Card], count: int) -> Tuple[List[Card], List[Card]]:
    """
    Remove the ``count`` weakest cards: lowest rank first, ties broken by
    suit priority (Club < Diamond < Heart < Spade).

    Returns (kept, removed). The input list is left alone.
    """
    _check_discard_count(universe, count)
    ordered = sorted(universe, key=Card.discard_key)
    removed = ordered[:count]
    removed_set = set(removed)
    kept = [card for card in universe if card not in removed_set]
    return kept, removed


def discard_random(
    universe: List[Card], count: int, rng: Optional[random.Random] = None
) -> Tuple[List[Card], List[Card]]:
    """
    Remove ``count`` cards chosen uniformly at random.

    Returns (kept, removed). The input list is left alone.
    """
    _check_discard_count(universe, count)
    rng = rng or random.Random()
    removed = rng.sample(universe, count)
    removed_set = set(removed)
    kept = [card for card in universe if card not in removed_set]
    return kept, removed


def deal(cards: List[Card], cards_per_player: int, num_players: int) -> List[List[Card]]:
    """Split ``cards`` into contiguous, non-overlapping hands in seat order"""
    needed = cards_per_player * num_players
    if needed > len(cards):
        raise ConfigurationError(
            f"Cannot deal {needed} cards, only {len(cards)} available",
            reason="TOO_MANY_CARDS",
        )
    return [
        cards[i * cards_per_player:(i + 1) * cards_per_player]
        for i in range(num_players)
    ]
