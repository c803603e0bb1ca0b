"""
Game management routes
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from shrinkdeck_core import apply_action, create_game, join_game, parse_action, valid_moves
from shrinkdeck_core.errors import ConcurrentUpdateError, MalformedActionError, NotHostError

logger = logging.getLogger(__name__)

game_bp = Blueprint("game", __name__)

MAX_ROOM_CODE_ATTEMPTS = 5


def get_store():
    return current_app.extensions["game_store"]


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise MalformedActionError("Request body must be a JSON object")
    return data


@game_bp.route("/games", methods=["POST"])
def create():
    """Create a new game with the caller as host"""
    data = _json_body()
    store = get_store()

    for _ in range(MAX_ROOM_CODE_ATTEMPTS):
        state = create_game(data.get("playerName"))
        if store.create(state):
            break
    else:
        raise ConcurrentUpdateError("Could not allocate a room code, please retry")

    host = state.players[0]
    logger.info("Game %s created by %s", state.id, host.id)

    return jsonify({
        "gameId": state.id,
        "playerId": host.id,
        "gameState": state.public_view(host.id),
    }), 201


@game_bp.route("/games/join", methods=["POST"])
def join():
    """Join an existing game while it is still in the lobby"""
    data = _json_body()
    game_id = data.get("gameId")
    if not game_id or not data.get("playerName"):
        raise MalformedActionError("Game ID and Player Name are required")

    seated = {}

    def seat(state):
        new_state, player = join_game(state, data["playerName"])
        seated["player"] = player
        return new_state

    state = get_store().update(game_id, seat)
    player = seated["player"]

    return jsonify({
        "gameId": state.id,
        "playerId": player.id,
        "gameState": state.public_view(player.id),
    })


@game_bp.route("/games/<game_id>", methods=["GET"])
def get_game(game_id):
    """Get game state as seen by one player (or by a spectator)"""
    player_id = request.args.get("playerId")

    state = get_store().load(game_id)
    if player_id:
        state.player_index(player_id)

    return jsonify(state.public_view(player_id))


@game_bp.route("/games/<game_id>/action", methods=["POST"])
def submit_action(game_id):
    """Apply one player action: TOGGLE_READY, START_GAME, SUBMIT_BET or PLAY_CARD"""
    action = parse_action(_json_body())

    state = get_store().update(game_id, lambda current: apply_action(current, action))

    return jsonify({"success": True, "gameState": state.public_view(action.player_id)})


@game_bp.route("/games/<game_id>/valid-moves", methods=["GET"])
def get_valid_moves(game_id):
    """Get valid moves for a player"""
    player_id = request.args.get("playerId")
    if not player_id:
        raise MalformedActionError("playerId required")

    state = get_store().load(game_id)
    return jsonify(valid_moves(state, player_id))


@game_bp.route("/games/<game_id>", methods=["DELETE"])
def delete_game(game_id):
    """Delete/abandon a game. Only the host may do this."""
    player_id = request.args.get("playerId")
    if not player_id:
        raise MalformedActionError("playerId required")

    store = get_store()
    state = store.load(game_id)
    if not state.get_player(player_id).is_host:
        raise NotHostError("Only host can delete the game")

    store.delete(game_id)
    logger.info("Game %s deleted by %s", state.id, player_id)

    return jsonify({"success": True, "message": "Game deleted"})
