"""
Random bots used to fill empty seats in local games
"""

import random
from typing import Optional

from shrinkdeck_core import PlayCard, SubmitBet, valid_moves
from shrinkdeck_core.actions import Action
from shrinkdeck_core.game import GamePhase, GameState


def choose_action(state: GameState, player_id: str, rng: Optional[random.Random] = None) -> Action:
    """Pick a random legal bid or card for the player whose turn it is"""
    rng = rng or random.Random()
    moves = valid_moves(state, player_id)

    if state.status == GamePhase.BETTING:
        bets = [b for b in range(moves["maxBet"] + 1) if b != moves["forbiddenBet"]]
        return SubmitBet(player_id, rng.choice(bets))

    if state.status == GamePhase.PLAYING:
        return PlayCard(player_id, rng.choice(moves["validCards"]))

    raise ValueError(f"Bots cannot act during {state.status.value}")
