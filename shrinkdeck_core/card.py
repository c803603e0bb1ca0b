"""
Card, Suit and Rank definitions for the shrinking-deck game
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class Suit(Enum):
    """Card suits, declared in discard priority order (low to high)"""
    CLUBS = "C"
    DIAMONDS = "D"
    HEARTS = "H"
    SPADES = "S"

    def __str__(self):
        symbols = {
            "C": "♣",
            "D": "♦",
            "H": "♥",
            "S": "♠"
        }
        return symbols[self.value]

    @property
    def priority(self) -> int:
        """Position in the Club < Diamond < Heart < Spade ordering"""
        return SUIT_PRIORITY.index(self)

    @classmethod
    def from_string(cls, s: str) -> "Suit":
        """Create Suit from string representation"""
        mapping = {
            "C": cls.CLUBS,
            "D": cls.DIAMONDS,
            "H": cls.HEARTS,
            "S": cls.SPADES,
            "♣": cls.CLUBS,
            "♦": cls.DIAMONDS,
            "♥": cls.HEARTS,
            "♠": cls.SPADES,
        }
        try:
            return mapping[s.upper()]
        except KeyError:
            raise ValueError(f"Invalid suit: {s}") from None


class Rank(Enum):
    """Card ranks, 2 through Ace"""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self):
        names = {
            11: "J",
            12: "Q",
            13: "K",
            14: "A"
        }
        return names.get(self.value, str(self.value))

    @classmethod
    def from_string(cls, s: str) -> "Rank":
        """Create Rank from string representation ('2'..'10', 'J', 'Q', 'K', 'A')"""
        for rank in cls:
            if str(rank) == s.upper():
                return rank
        raise ValueError(f"Invalid rank: {s}")


SUIT_PRIORITY = [Suit.CLUBS, Suit.DIAMONDS, Suit.HEARTS, Suit.SPADES]
RANKS = list(Rank)


@dataclass(frozen=True)
class Card:
    """Represents a single card. Cards never change once created."""

    suit: Suit
    rank: Rank

    @property
    def id(self) -> str:
        return f"{self.suit.value}{self.rank}"

    def __str__(self):
        return f"{self.rank}{self.suit}"

    def __repr__(self):
        return f"Card({self.suit.name}, {self.rank.name})"

    def discard_key(self):
        """Sort key for round-1 discards: rank first, suit priority breaks ties"""
        return (self.rank.value, self.suit.priority)

    def to_dict(self) -> Dict[str, Any]:
        """Convert card to dictionary for JSON serialization"""
        return {
            "id": self.id,
            "suit": self.suit.value,
            "rank": str(self.rank),
        }

    @classmethod
    def from_id(cls, s: str) -> "Card":
        """
        Create a Card from an id like 'C2', 'S10', 'HA'.
        """
        if not isinstance(s, str) or len(s) < 2:
            raise ValueError(f"Invalid card id: {s!r}")

        suit = Suit.from_string(s[0])
        rank = Rank.from_string(s[1:])

        return cls(suit, rank)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Card":
        """Create a Card from its serialized form. The id wins if present."""
        if "id" in data:
            return cls.from_id(data["id"])
        return cls(Suit.from_string(data["suit"]), Rank.from_string(str(data["rank"])))
