"""
Builders for games in a known state
"""

import random

from shrinkdeck_core import StartGame, SubmitBet, apply_action, create_game, join_game


def new_lobby(num_players=4):
    """A LOBBY game with a host and num_players - 1 joined players"""
    state = create_game("Host", game_id="TEST01", now=0)
    for i in range(1, num_players):
        state, _ = join_game(state, f"Player {i}", now=0)
    return state


def started_game(num_players=4, initial_cards=7, seed=42):
    """A game that has just been started (round 1, BETTING)"""
    state = new_lobby(num_players)
    host_id = state.players[0].id
    return apply_action(state, StartGame(host_id, initial_cards), rng=random.Random(seed), now=1)


def place_bets(state, bets):
    """Submit bets in turn order, starting from whoever is to act"""
    for bet in bets:
        bidder = state.get_current_player()
        state = apply_action(state, SubmitBet(bidder.id, bet))
    return state
