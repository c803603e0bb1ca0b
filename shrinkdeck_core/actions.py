"""
Player actions accepted by the game engine.

Every action a client can submit is one of the dataclasses below. Request
bodies are turned into them by ``parse_action``; anything else is rejected
before it reaches the engine.
"""

from dataclasses import dataclass
from typing import Any, Dict, Union

from .errors import MalformedActionError

DEFAULT_INITIAL_CARDS = 7


@dataclass(frozen=True)
class ToggleReady:
    player_id: str


@dataclass(frozen=True)
class StartGame:
    player_id: str
    initial_cards: int = DEFAULT_INITIAL_CARDS


@dataclass(frozen=True)
class SubmitBet:
    player_id: str
    bet: int


@dataclass(frozen=True)
class PlayCard:
    player_id: str
    card_id: str


Action = Union[ToggleReady, StartGame, SubmitBet, PlayCard]


def _card_id(value: Any) -> str:
    # Clients send either the card object they were dealt or its bare id
    if isinstance(value, dict):
        value = value.get("id")
    if not isinstance(value, str) or not value:
        raise MalformedActionError("Card required")
    return value


def parse_action(payload: Dict[str, Any]) -> Action:
    """
    Build an Action from a request body like
    ``{"action": "SUBMIT_BET", "playerId": "...", "bet": 2}``.
    """
    if not isinstance(payload, dict):
        raise MalformedActionError("Request body must be a JSON object")

    name = payload.get("action")
    player_id = payload.get("playerId")
    if not name or not player_id:
        raise MalformedActionError("Missing required fields")

    if name == "TOGGLE_READY":
        return ToggleReady(player_id)

    if name == "START_GAME":
        initial_cards = payload.get("initialCards")
        if initial_cards is None:
            return StartGame(player_id)
        return StartGame(player_id, initial_cards)

    if name == "SUBMIT_BET":
        if "bet" not in payload or payload["bet"] is None:
            raise MalformedActionError("Bet required")
        return SubmitBet(player_id, payload["bet"])

    if name == "PLAY_CARD":
        return PlayCard(player_id, _card_id(payload.get("card")))

    raise MalformedActionError(f"Unknown action: {name}", reason="UNKNOWN_ACTION")
