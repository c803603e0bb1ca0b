"""
Round controller: per-round parameters, universe shrinkage and the deal
"""

import logging
import random
from typing import Any, Dict, List, Optional

from .card import Card, Suit
from .deck import deal, discard_lowest_priority, discard_random, shuffle
from .errors import ConfigurationError
from .player import Player
from .trick import Trick

logger = logging.getLogger(__name__)

TRUMP_CYCLE = [Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS]


def trump_for_round(round_number: int) -> Suit:
    """Round 1 is Spades, then Hearts, Diamonds, Clubs, and around again"""
    return TRUMP_CYCLE[(round_number - 1) % len(TRUMP_CYCLE)]


class RoundInfo:
    """Parameters fixed for the duration of one round"""

    def __init__(
        self,
        number: int,
        total_rounds: int,
        cards_per_player: int,
        trump_suit: Suit,
        dealer_id: str,
        dealer_index: int,
    ):
        self.number = number
        self.total_rounds = total_rounds
        self.cards_per_player = cards_per_player
        self.trump_suit = trump_suit
        self.dealer_id = dealer_id
        self.dealer_index = dealer_index

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "totalRounds": self.total_rounds,
            "cardsPerPlayer": self.cards_per_player,
            "trumpSuit": self.trump_suit.value,
            "dealerInfo": {"id": self.dealer_id, "index": self.dealer_index},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundInfo":
        return cls(
            number=data["number"],
            total_rounds=data["totalRounds"],
            cards_per_player=data["cardsPerPlayer"],
            trump_suit=Suit(data["trumpSuit"]),
            dealer_id=data["dealerInfo"]["id"],
            dealer_index=data["dealerInfo"]["index"],
        )


class PlayState:
    """Turn pointer, in-progress trick and the tricks resolved this round"""

    def __init__(self, current_turn_index: int, trump: Suit):
        self.current_turn_index = current_turn_index
        self.trick = Trick(trump)
        self.trick_history: List[Dict[str, Any]] = []

    @property
    def lead_suit(self) -> Optional[Suit]:
        return self.trick.lead_suit

    def record_trick(self, winner_id: str):
        self.trick_history.append({
            "winnerId": winner_id,
            "cards": self.trick.plays_to_list(),
        })
        self.trick.clear()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currentTurnIndex": self.current_turn_index,
            "leadSuit": self.lead_suit.value if self.lead_suit else None,
            "currentTrick": self.trick.plays_to_list(),
            "trickHistory": self.trick_history,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], trump: Suit) -> "PlayState":
        play = cls(data["currentTurnIndex"], trump)
        play.trick.plays = Trick.plays_from_list(data.get("currentTrick", []))
        if data.get("leadSuit"):
            play.trick.lead_suit = Suit(data["leadSuit"])
        play.trick_history = list(data.get("trickHistory", []))
        return play


class RoundDeal:
    """Outcome of starting a round"""

    def __init__(self, universe: List[Card], removed: List[Card], info: RoundInfo, play: PlayState):
        self.universe = universe
        self.removed = removed
        self.info = info
        self.play = play


def start_round(
    universe: List[Card],
    round_number: int,
    cards_per_player: int,
    players: List[Player],
    dealer_index: int,
    total_rounds: int,
    rng: Optional[random.Random] = None,
) -> RoundDeal:
    """
    Shrink the universe for this round and deal from it.

    Round 1 trims the weakest cards; later rounds discard at random. The
    returned universe replaces the match's universe. Hands are dealt from a
    separate shuffled copy, so the universe itself keeps its order.
    """
    num_players = len(players)
    needed = cards_per_player * num_players
    to_discard = len(universe) - needed
    if to_discard < 0:
        raise ConfigurationError(
            f"Need {needed} cards but only {len(universe)} remain in play",
            reason="TOO_MANY_CARDS",
        )

    if round_number == 1:
        new_universe, removed = discard_lowest_priority(universe, to_discard)
    else:
        new_universe, removed = discard_random(universe, to_discard, rng)

    working = shuffle(new_universe, rng)
    hands = deal(working, cards_per_player, num_players)
    for player, hand in zip(players, hands):
        player.hand = hand
        player.reset_round()

    dealer = players[dealer_index]
    trump = trump_for_round(round_number)
    info = RoundInfo(
        number=round_number,
        total_rounds=total_rounds,
        cards_per_player=cards_per_player,
        trump_suit=trump,
        dealer_id=dealer.id,
        dealer_index=dealer_index,
    )
    play = PlayState((dealer_index + 1) % num_players, trump)

    logger.debug(
        "Round %d: %d cards each, trump %s, dealer %s, discarded %d, universe %d",
        round_number, cards_per_player, trump.name, dealer.id, len(removed), len(new_universe),
    )
    return RoundDeal(new_universe, removed, info, play)
