"""
Player abstraction for the shrinking-deck game
"""

from typing import Any, Dict, List, Optional

from .card import Card, Suit


class Player:
    """Represents a seated player in a match"""

    def __init__(self, player_id: str, name: str, is_host: bool = False):
        """
        Initialize a player.

        Args:
            player_id: Opaque identifier handed to the client on create/join
            name: Player's display name
            is_host: Whether this player may start the match
        """
        self.id = player_id
        self.name = name
        self.is_host = is_host
        self.is_ready = False
        self.connected = True
        self.hand: List[Card] = []
        self.current_bet: Optional[int] = None
        self.tricks_won = 0
        self.score = 0

    def find_card(self, card_id: str) -> Optional[Card]:
        """Look up a card in hand by its id"""
        for card in self.hand:
            if card.id == card_id:
                return card
        return None

    def remove_card(self, card: Card) -> Card:
        """Remove and return a card from the player's hand"""
        if card not in self.hand:
            raise ValueError(f"Card {card} not in hand")
        self.hand.remove(card)
        return card

    def has_suit(self, suit: Suit) -> bool:
        return any(card.suit == suit for card in self.hand)

    def get_valid_cards(self, lead_suit: Optional[Suit]) -> List[Card]:
        """
        Get list of valid cards that can be played.

        A player holding the lead suit must follow it; otherwise anything
        goes, trump included.
        """
        if not lead_suit:
            # First card of trick - any card is valid
            return self.hand.copy()

        following = [card for card in self.hand if card.suit == lead_suit]
        if following:
            return following

        return self.hand.copy()

    def reset_round(self):
        """Clear per-round bidding and trick counters"""
        self.current_bet = None
        self.tricks_won = 0

    def __repr__(self):
        return f"Player(id={self.id}, name={self.name}, host={self.is_host})"

    def to_dict(self, include_hand: bool = True) -> Dict[str, Any]:
        """Convert player to dictionary for JSON serialization"""
        data = {
            "id": self.id,
            "name": self.name,
            "isHost": self.is_host,
            "isReady": self.is_ready,
            "connected": self.connected,
            "score": self.score,
            "currentBet": self.current_bet,
            "tricksWon": self.tricks_won,
            "handCount": len(self.hand),
        }
        if include_hand:
            data["hand"] = [card.to_dict() for card in self.hand]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        player = cls(data["id"], data.get("name", ""), data.get("isHost", False))
        player.is_ready = data.get("isReady", False)
        player.connected = data.get("connected", True)
        player.score = data.get("score", 0)
        player.current_bet = data.get("currentBet")
        player.tricks_won = data.get("tricksWon", 0)
        player.hand = [Card.from_dict(c) for c in data.get("hand", [])]
        return player
