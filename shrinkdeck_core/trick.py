"""
Trick management: the in-progress trick and winner resolution
"""

from typing import Any, Dict, List, Optional, Tuple

from .card import Card, Suit


def determine_trick_winner(
    plays: List[Tuple[str, Card]], trump: Suit, lead_suit: Suit
) -> Optional[str]:
    """
    Return the id of the player who won the trick.

    The highest trump wins if any trump was played; otherwise the highest
    card of the lead suit. Cards of any other suit never win.
    """
    if not plays:
        return None

    trumps = [(pid, card) for pid, card in plays if card.suit == trump]
    if trumps:
        contenders = trumps
    else:
        contenders = [(pid, card) for pid, card in plays if card.suit == lead_suit]

    winner_id, _ = max(contenders, key=lambda play: play[1].rank.value)
    return winner_id


class Trick:
    """Represents the trick currently being played"""

    def __init__(self, trump: Suit):
        self.trump = trump
        self.plays: List[Tuple[str, Card]] = []  # (player_id, card)
        self.lead_suit: Optional[Suit] = None

    def add_card(self, player_id: str, card: Card):
        """Add a card played by a player to this trick"""
        # First card determines lead suit
        if not self.plays:
            self.lead_suit = card.suit

        self.plays.append((player_id, card))

    def is_complete(self, num_players: int) -> bool:
        """Check if every seat has played"""
        return len(self.plays) == num_players

    def get_winner(self) -> str:
        if not self.plays:
            raise ValueError("Cannot determine winner - no cards played")
        return determine_trick_winner(self.plays, self.trump, self.lead_suit)

    def clear(self):
        self.plays = []
        self.lead_suit = None

    def plays_to_list(self) -> List[Dict[str, Any]]:
        return [{"playerId": pid, "card": card.to_dict()} for pid, card in self.plays]

    @staticmethod
    def plays_from_list(data: List[Dict[str, Any]]) -> List[Tuple[str, Card]]:
        return [(item["playerId"], Card.from_dict(item["card"])) for item in data]
