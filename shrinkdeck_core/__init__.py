"""
Shrinkdeck Core Game Engine
"""

from .card import Card, Suit, Rank
from .deck import build_standard_deck, shuffle, discard_lowest_priority, discard_random
from .player import Player
from .trick import Trick, determine_trick_winner
from .rounds import RoundInfo, PlayState, start_round, trump_for_round
from .scoring import calculate_score
from .actions import Action, ToggleReady, StartGame, SubmitBet, PlayCard, parse_action
from .errors import GameError
from .game import GameState, GamePhase, apply_action, create_game, join_game, valid_moves

__version__ = "0.1.0"

__all__ = [
    "Card",
    "Suit",
    "Rank",
    "build_standard_deck",
    "shuffle",
    "discard_lowest_priority",
    "discard_random",
    "Player",
    "Trick",
    "determine_trick_winner",
    "RoundInfo",
    "PlayState",
    "start_round",
    "trump_for_round",
    "calculate_score",
    "Action",
    "ToggleReady",
    "StartGame",
    "SubmitBet",
    "PlayCard",
    "parse_action",
    "GameError",
    "GameState",
    "GamePhase",
    "apply_action",
    "create_game",
    "join_game",
    "valid_moves",
]
