"""
Round scoring
"""

from typing import Any, Dict, List, Optional

from .player import Player

EXACT_BID_BONUS = 10
POINTS_PER_TRICK_BID = 11
MISSED_BID_POINTS = 0


def calculate_score(bid: Optional[int], tricks_won: int) -> int:
    """Exact bid earns 10 + 11 per trick bid; any miss earns nothing"""
    if bid is None:
        bid = 0
    if bid == tricks_won:
        return EXACT_BID_BONUS + POINTS_PER_TRICK_BID * bid
    return MISSED_BID_POINTS


def score_round(players: List[Player], round_number: int) -> Dict[str, Any]:
    """
    Add each player's round score to their total and reset their bid and
    trick count. Returns the round summary kept in the match history.
    """
    results = []
    for player in players:
        points = calculate_score(player.current_bet, player.tricks_won)
        player.score += points
        results.append({
            "playerId": player.id,
            "bet": player.current_bet,
            "tricksWon": player.tricks_won,
            "points": points,
            "total": player.score,
        })
        player.reset_round()

    return {"round": round_number, "results": results}
