"""
Bid validation and the dealer's no-exact-total rule
"""

from typing import List, Optional

from .errors import IllegalMoveError
from .player import Player


def forbidden_dealer_bid(players: List[Player], dealer_index: int, cards_per_player: int) -> Optional[int]:
    """
    The one bid the dealer may not make, or None when that value is out of
    range anyway.
    """
    others = sum(
        p.current_bet for i, p in enumerate(players)
        if i != dealer_index and p.current_bet is not None
    )
    forbidden = cards_per_player - others
    if 0 <= forbidden <= cards_per_player:
        return forbidden
    return None


def validate_bid(bet, players: List[Player], bidder_index: int, dealer_index: int, cards_per_player: int):
    """Raise IllegalMoveError unless ``bet`` is acceptable for this bidder"""
    if isinstance(bet, bool) or not isinstance(bet, int):
        raise IllegalMoveError(f"Bet must be a whole number, got {bet!r}", reason="INVALID_BID")
    if bet < 0 or bet > cards_per_player:
        raise IllegalMoveError(
            f"Bet must be between 0 and {cards_per_player}", reason="INVALID_BID"
        )

    if bidder_index == dealer_index:
        if bet == forbidden_dealer_bid(players, dealer_index, cards_per_player):
            raise IllegalMoveError(
                f"Dealer cannot bet {bet} (total would equal {cards_per_player})",
                reason="DEALER_BID_SUM",
            )
