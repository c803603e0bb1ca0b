"""
Main game engine: match state and the action dispatcher
"""

import copy
import logging
import random
import time
import uuid
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from .actions import Action, PlayCard, StartGame, SubmitBet, ToggleReady
from .betting import forbidden_dealer_bid, validate_bid
from .card import Card
from .deck import STANDARD_DECK_SIZE, build_standard_deck
from .errors import (
    ConfigurationError,
    IllegalMoveError,
    LobbyError,
    MalformedActionError,
    NotHostError,
    PhaseError,
    PlayerNotFoundError,
    TurnError,
)
from .player import Player
from .rounds import PlayState, RoundInfo, start_round
from .scoring import score_round

logger = logging.getLogger(__name__)

ROOM_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
ROOM_CODE_LENGTH = 6
DEFAULT_MAX_PLAYERS = 8
MIN_PLAYERS = 2


class GamePhase(Enum):
    """Phases of a match"""
    LOBBY = "LOBBY"
    BETTING = "BETTING"
    PLAYING = "PLAYING"
    FINISHED = "FINISHED"


# PLAYING goes back to BETTING once per round until the last round ends
PHASE_TRANSITIONS = {
    GamePhase.LOBBY: {GamePhase.BETTING},
    GamePhase.BETTING: {GamePhase.PLAYING},
    GamePhase.PLAYING: {GamePhase.BETTING, GamePhase.FINISHED},
    GamePhase.FINISHED: set(),
}

ACTION_PHASES = {
    ToggleReady: GamePhase.LOBBY,
    StartGame: GamePhase.LOBBY,
    SubmitBet: GamePhase.BETTING,
    PlayCard: GamePhase.PLAYING,
}


def _now_ms() -> int:
    return int(time.time() * 1000)


class GameSettings:
    def __init__(self, max_players: int = DEFAULT_MAX_PLAYERS, initial_cards_per_player: Optional[int] = None):
        self.max_players = max_players
        self.initial_cards_per_player = initial_cards_per_player

    def to_dict(self) -> Dict[str, Any]:
        return {
            "maxPlayers": self.max_players,
            "initialCardsPerPlayer": self.initial_cards_per_player,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameSettings":
        return cls(
            max_players=data.get("maxPlayers", DEFAULT_MAX_PLAYERS),
            initial_cards_per_player=data.get("initialCardsPerPlayer"),
        )


class GameState:
    """Represents the complete state of one match"""

    def __init__(self, game_id: str):
        self.id = game_id
        self.status = GamePhase.LOBBY
        self.players: List[Player] = []
        self.settings = GameSettings()

        # Universe of cards still in play, and everything trimmed from it
        self.deck: List[Card] = []
        self.discarded: List[Card] = []

        # Active round
        self.round: Optional[RoundInfo] = None
        self.play: Optional[PlayState] = None
        self.round_history: List[Dict[str, Any]] = []

        self.updated_at = _now_ms()
        self.version = 0

    def player_index(self, player_id: str) -> int:
        """Seat index of a player, or PlayerNotFoundError"""
        for index, player in enumerate(self.players):
            if player.id == player_id:
                return index
        raise PlayerNotFoundError("Player not found in game")

    def get_player(self, player_id: str) -> Player:
        return self.players[self.player_index(player_id)]

    def get_current_player(self) -> Optional[Player]:
        """Get the player whose turn it is"""
        if self.play is None:
            return None
        return self.players[self.play.current_turn_index]

    def next_turn(self):
        """Move to the next seat clockwise"""
        self.play.current_turn_index = (self.play.current_turn_index + 1) % len(self.players)

    def transition_to(self, phase: GamePhase):
        if phase not in PHASE_TRANSITIONS[self.status]:
            raise PhaseError(f"Cannot move from {self.status.value} to {phase.value}")
        logger.debug("Game %s: %s -> %s", self.id, self.status.value, phase.value)
        self.status = phase

    def to_dict(self, include_hands: bool = True, perspective_player_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Convert game state to dictionary for JSON serialization.

        Args:
            include_hands: Whether to include all player hands
            perspective_player_id: If set, also show that player's hand
        """
        return {
            "id": self.id,
            "status": self.status.value,
            "players": [
                p.to_dict(include_hand=include_hands or p.id == perspective_player_id)
                for p in self.players
            ],
            "deck": [card.to_dict() for card in self.deck],
            "discarded": [card.to_dict() for card in self.discarded],
            "settings": self.settings.to_dict(),
            "round": self.round.to_dict() if self.round else None,
            "play": self.play.to_dict() if self.play else None,
            "roundHistory": self.round_history,
            "updatedAt": self.updated_at,
            "version": self.version,
        }

    def public_view(self, player_id: Optional[str]) -> Dict[str, Any]:
        """State as seen by one player: only their own hand, no undealt cards"""
        state = self.to_dict(include_hands=False, perspective_player_id=player_id)
        del state["deck"]
        del state["discarded"]
        state["deckSize"] = len(self.deck)
        return state

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        state = cls(data["id"])
        state.status = GamePhase(data["status"])
        state.players = [Player.from_dict(p) for p in data.get("players", [])]
        state.settings = GameSettings.from_dict(data.get("settings", {}))
        state.deck = [Card.from_dict(c) for c in data.get("deck", [])]
        state.discarded = [Card.from_dict(c) for c in data.get("discarded", [])]
        if data.get("round"):
            state.round = RoundInfo.from_dict(data["round"])
            if data.get("play"):
                state.play = PlayState.from_dict(data["play"], state.round.trump_suit)
        state.round_history = list(data.get("roundHistory", []))
        state.updated_at = data.get("updatedAt", state.updated_at)
        state.version = data.get("version", 0)
        return state


# Lobby ----------------------------------------------------------------------

def generate_room_code(rng: Optional[random.Random] = None) -> str:
    rng = rng or random.SystemRandom()
    return "".join(rng.choice(ROOM_CODE_ALPHABET) for _ in range(ROOM_CODE_LENGTH))


def _check_name(name: str):
    if not isinstance(name, str) or not name.strip():
        raise MalformedActionError("Player name is required")


def create_game(host_name: str, game_id: Optional[str] = None, now: Optional[int] = None) -> GameState:
    """New match in LOBBY with its creator seated as host"""
    _check_name(host_name)
    state = GameState((game_id or generate_room_code()).upper())
    state.players.append(Player(str(uuid.uuid4()), host_name.strip(), is_host=True))
    state.updated_at = now if now is not None else _now_ms()
    return state


def join_game(state: GameState, player_name: str, now: Optional[int] = None) -> Tuple[GameState, Player]:
    """Seat a new player. Returns the new state and the seated player."""
    _check_name(player_name)
    if state.status != GamePhase.LOBBY:
        raise LobbyError("Game has already started", reason="GAME_STARTED")
    if len(state.players) >= state.settings.max_players:
        raise LobbyError("Game is full", reason="GAME_FULL")

    new_state = copy.deepcopy(state)
    player = Player(str(uuid.uuid4()), player_name.strip())
    new_state.players.append(player)
    new_state.version += 1
    new_state.updated_at = now if now is not None else _now_ms()
    return new_state, player


# Action handlers -------------------------------------------------------------

def _toggle_ready(state: GameState, index: int, action: ToggleReady, rng):
    player = state.players[index]
    player.is_ready = not player.is_ready


def _start_game(state: GameState, index: int, action: StartGame, rng):
    if not state.players[index].is_host:
        raise NotHostError("Only host can start")

    num_players = len(state.players)
    if num_players < MIN_PLAYERS:
        raise ConfigurationError(
            f"At least {MIN_PLAYERS} players are needed", reason="NOT_ENOUGH_PLAYERS"
        )

    initial_cards = action.initial_cards
    if isinstance(initial_cards, bool) or not isinstance(initial_cards, int) or initial_cards < 1:
        raise ConfigurationError(
            f"Cards per player must be a positive whole number, got {initial_cards!r}",
            reason="INVALID_CARD_COUNT",
        )
    if initial_cards * num_players > STANDARD_DECK_SIZE:
        raise ConfigurationError("Too many cards for this many players", reason="TOO_MANY_CARDS")

    state.settings.initial_cards_per_player = initial_cards
    for player in state.players:
        player.score = 0

    deal = start_round(
        build_standard_deck(),
        round_number=1,
        cards_per_player=initial_cards,
        players=state.players,
        dealer_index=0,
        total_rounds=initial_cards,
        rng=rng,
    )
    state.deck = deal.universe
    state.discarded = deal.removed
    state.round = deal.info
    state.play = deal.play
    state.round_history = []
    state.transition_to(GamePhase.BETTING)

    logger.info(
        "Game %s started: %d players, %d cards each, %d discarded",
        state.id, num_players, initial_cards, len(deal.removed),
    )


def _require_turn(state: GameState, index: int):
    if state.play.current_turn_index != index:
        raise TurnError("Not your turn")


def _submit_bet(state: GameState, index: int, action: SubmitBet, rng):
    _require_turn(state, index)
    dealer_index = state.round.dealer_index
    validate_bid(action.bet, state.players, index, dealer_index, state.round.cards_per_player)

    state.players[index].current_bet = action.bet

    if index == dealer_index:
        # Dealer bids last; the seat after the dealer leads the first trick
        state.play.current_turn_index = (dealer_index + 1) % len(state.players)
        state.play.trick.clear()
        state.transition_to(GamePhase.PLAYING)
    else:
        state.next_turn()


def _play_card(state: GameState, index: int, action: PlayCard, rng):
    _require_turn(state, index)
    player = state.players[index]
    play = state.play

    card = player.find_card(action.card_id)
    if card is None:
        raise IllegalMoveError("Card not in hand", reason="CARD_NOT_IN_HAND")
    if card not in player.get_valid_cards(play.lead_suit):
        raise IllegalMoveError("Must follow suit", reason="MUST_FOLLOW_SUIT")

    player.remove_card(card)
    play.trick.add_card(player.id, card)

    if not play.trick.is_complete(len(state.players)):
        state.next_turn()
        return

    winner_id = play.trick.get_winner()
    winner_index = state.player_index(winner_id)
    state.players[winner_index].tricks_won += 1
    play.current_turn_index = winner_index
    play.record_trick(winner_id)
    logger.debug("Game %s: trick won by %s", state.id, winner_id)

    if all(not p.hand for p in state.players):
        _end_round(state, rng)


def _end_round(state: GameState, rng):
    """Score the finished round, then deal the next one or finish the match"""
    summary = score_round(state.players, state.round.number)
    state.round_history.append(summary)

    next_cards = state.round.cards_per_player - 1
    if next_cards < 1:
        state.transition_to(GamePhase.FINISHED)
        logger.info("Game %s finished after %d rounds", state.id, state.round.number)
        return

    next_dealer = (state.round.dealer_index + 1) % len(state.players)
    deal = start_round(
        state.deck,
        round_number=state.round.number + 1,
        cards_per_player=next_cards,
        players=state.players,
        dealer_index=next_dealer,
        total_rounds=state.round.total_rounds,
        rng=rng,
    )
    state.deck = deal.universe
    state.discarded.extend(deal.removed)
    state.round = deal.info
    state.play = deal.play
    state.transition_to(GamePhase.BETTING)


_HANDLERS: Dict[type, Callable] = {
    ToggleReady: _toggle_ready,
    StartGame: _start_game,
    SubmitBet: _submit_bet,
    PlayCard: _play_card,
}


def apply_action(
    state: GameState,
    action: Action,
    rng: Optional[random.Random] = None,
    now: Optional[int] = None,
) -> GameState:
    """
    Apply one player action and return the resulting state.

    The action is applied to a private copy. On any GameError the copy is
    dropped, so ``state`` is never modified whether the action succeeds or
    not.
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        raise MalformedActionError(f"Unsupported action: {action!r}", reason="UNKNOWN_ACTION")

    index = state.player_index(action.player_id)
    required = ACTION_PHASES[type(action)]
    if state.status != required:
        raise PhaseError(f"Not allowed during {state.status.value} (needs {required.value})")

    new_state = copy.deepcopy(state)
    handler(new_state, index, action, rng)
    new_state.version += 1
    new_state.updated_at = now if now is not None else _now_ms()
    return new_state


def valid_moves(state: GameState, player_id: str) -> Dict[str, Any]:
    """Playable cards and the dealer's forbidden bid, for one player"""
    index = state.player_index(player_id)
    player = state.players[index]

    valid_cards: List[Card] = []
    forbidden_bet = None
    lead_suit = state.play.lead_suit if state.play else None

    if state.status == GamePhase.PLAYING:
        valid_cards = player.get_valid_cards(lead_suit)
    elif state.status == GamePhase.BETTING and index == state.round.dealer_index:
        forbidden_bet = forbidden_dealer_bid(state.players, index, state.round.cards_per_player)

    in_round = state.status in (GamePhase.BETTING, GamePhase.PLAYING)
    is_turn = in_round and state.play.current_turn_index == index

    return {
        "playerId": player.id,
        "isYourTurn": is_turn,
        "validCards": [card.id for card in valid_cards],
        "hand": [card.id for card in player.hand],
        "mustFollowSuit": lead_suit is not None and player.has_suit(lead_suit),
        "leadSuit": lead_suit.value if lead_suit else None,
        "trumpSuit": state.round.trump_suit.value if state.round else None,
        "maxBet": state.round.cards_per_player if state.round else None,
        "forbiddenBet": forbidden_bet,
    }
