"""
Test the game HTTP endpoints
"""

from unittest import mock

import pytest
import redis

from shrinkdeck_api import create_app
from shrinkdeck_api.routes import game_routes
from shrinkdeck_core import apply_action


def create(client, name="Host"):
    response = client.post("/api/games", json={"playerName": name})
    assert response.status_code == 201
    return response.json


def join(client, game_id, name):
    response = client.post("/api/games/join", json={"gameId": game_id, "playerName": name})
    assert response.status_code == 200
    return response.json


def act(client, game_id, player_id, action, **fields):
    body = {"action": action, "playerId": player_id}
    body.update(fields)
    return client.post(f"/api/games/{game_id}/action", json=body)


@pytest.fixture
def lobby(client):
    """A game with a host and two joined players"""
    created = create(client)
    game_id = created["gameId"]
    player_ids = [created["playerId"]]
    for name in ("Ana", "Bo"):
        player_ids.append(join(client, game_id, name)["playerId"])
    return game_id, player_ids


@pytest.fixture
def started(client, lobby):
    game_id, player_ids = lobby
    response = act(client, game_id, player_ids[0], "START_GAME", initialCards=5)
    assert response.status_code == 200
    return game_id, player_ids


def test_health(client):
    assert client.get("/health").json["status"] == "healthy"


class TestLobbyEndpoints:
    def test_create_game(self, client):
        data = create(client)

        assert len(data["gameId"]) == 6
        assert data["gameId"] == data["gameId"].upper()
        state = data["gameState"]
        assert state["status"] == "LOBBY"
        assert state["players"][0]["id"] == data["playerId"]
        assert state["players"][0]["isHost"] is True

    def test_create_requires_name(self, client):
        response = client.post("/api/games", json={})
        assert response.status_code == 400
        assert response.json["reason"] == "MALFORMED_ACTION"

    def test_join_is_case_insensitive(self, client):
        game_id = create(client)["gameId"]
        data = join(client, game_id.lower(), "Ana")

        assert data["gameId"] == game_id
        assert [p["name"] for p in data["gameState"]["players"]] == ["Host", "Ana"]
        assert data["gameState"]["players"][1]["isHost"] is False

    def test_join_unknown_game(self, client):
        response = client.post("/api/games/join", json={"gameId": "ZZZZZZ", "playerName": "Ana"})
        assert response.status_code == 404

    def test_join_after_start(self, client, started):
        game_id, _ = started
        response = client.post("/api/games/join", json={"gameId": game_id, "playerName": "Late"})
        assert response.status_code == 400
        assert response.json["reason"] == "GAME_STARTED"

    def test_join_full_game(self, client):
        game_id = create(client)["gameId"]
        for i in range(7):
            join(client, game_id, f"P{i}")

        response = client.post("/api/games/join", json={"gameId": game_id, "playerName": "Ninth"})
        assert response.status_code == 400
        assert response.json["reason"] == "GAME_FULL"

    def test_get_unknown_game(self, client):
        assert client.get("/api/games/NOPE00").status_code == 404

    def test_get_as_stranger(self, client, lobby):
        game_id, _ = lobby
        response = client.get(f"/api/games/{game_id}?playerId=stranger")
        assert response.status_code == 403

    def test_delete(self, client, lobby):
        game_id, player_ids = lobby
        assert client.delete(f"/api/games/{game_id}?playerId={player_ids[0]}").status_code == 200
        assert client.get(f"/api/games/{game_id}").status_code == 404

    def test_delete_requires_host(self, client, lobby):
        game_id, player_ids = lobby

        assert client.delete(f"/api/games/{game_id}").status_code == 400

        response = client.delete(f"/api/games/{game_id}?playerId=stranger")
        assert response.status_code == 403
        assert response.json["reason"] == "PLAYER_NOT_FOUND"

        response = client.delete(f"/api/games/{game_id}?playerId={player_ids[1]}")
        assert response.status_code == 403
        assert response.json["reason"] == "NOT_HOST"

        assert client.get(f"/api/games/{game_id}").status_code == 200


class TestActionEndpoint:
    def test_toggle_ready(self, client, lobby):
        game_id, player_ids = lobby
        response = act(client, game_id, player_ids[1], "TOGGLE_READY")

        assert response.status_code == 200
        assert response.json["success"] is True
        assert response.json["gameState"]["players"][1]["isReady"] is True

    def test_start_game_shows_only_own_hand(self, client, lobby):
        game_id, player_ids = lobby
        response = act(client, game_id, player_ids[0], "START_GAME", initialCards=5)

        state = response.json["gameState"]
        assert state["status"] == "BETTING"
        assert state["round"]["totalRounds"] == 5
        assert state["round"]["trumpSuit"] == "S"
        assert state["deckSize"] == 15
        assert len(state["players"][0]["hand"]) == 5
        assert "hand" not in state["players"][1]
        assert state["players"][1]["handCount"] == 5

    def test_only_host_can_start(self, client, lobby):
        game_id, player_ids = lobby
        response = act(client, game_id, player_ids[1], "START_GAME")
        assert response.status_code == 403
        assert response.json["reason"] == "NOT_HOST"

    def test_too_many_cards(self, client, lobby):
        game_id, player_ids = lobby
        response = act(client, game_id, player_ids[0], "START_GAME", initialCards=18)
        assert response.status_code == 400
        assert response.json["reason"] == "TOO_MANY_CARDS"

    def test_unknown_player(self, client, lobby):
        game_id, _ = lobby
        response = act(client, game_id, "stranger", "TOGGLE_READY")
        assert response.status_code == 403
        assert response.json["reason"] == "PLAYER_NOT_FOUND"

    def test_unknown_game(self, client):
        response = act(client, "NOPE00", "someone", "TOGGLE_READY")
        assert response.status_code == 404

    def test_unknown_action(self, client, lobby):
        game_id, player_ids = lobby
        response = act(client, game_id, player_ids[0], "SHUFFLE")
        assert response.status_code == 400
        assert response.json["reason"] == "UNKNOWN_ACTION"

    def test_malformed_body(self, client, lobby):
        game_id, _ = lobby
        response = client.post(f"/api/games/{game_id}/action", data="not json")
        assert response.status_code == 400
        assert response.json["reason"] == "MALFORMED_ACTION"

    def test_wrong_phase(self, client, started):
        game_id, player_ids = started
        response = act(client, game_id, player_ids[1], "PLAY_CARD", card="SA")
        assert response.status_code == 400
        assert response.json["reason"] == "WRONG_PHASE"

    def test_not_your_turn(self, client, started):
        game_id, player_ids = started
        response = act(client, game_id, player_ids[2], "SUBMIT_BET", bet=1)
        assert response.status_code == 403
        assert response.json["reason"] == "NOT_YOUR_TURN"

    def test_rejected_action_leaves_stored_state(self, client, started):
        game_id, player_ids = started
        before = client.get(f"/api/games/{game_id}").json

        for _ in range(2):
            response = act(client, game_id, player_ids[2], "SUBMIT_BET", bet=1)
            assert response.status_code == 403
            assert client.get(f"/api/games/{game_id}").json == before

    def test_betting_and_first_play(self, client, started):
        game_id, player_ids = started

        # Seat 1 and seat 2 bid, then the dealer (host, seat 0)
        assert act(client, game_id, player_ids[1], "SUBMIT_BET", bet=2).status_code == 200
        assert act(client, game_id, player_ids[2], "SUBMIT_BET", bet=1).status_code == 200

        moves = client.get(f"/api/games/{game_id}/valid-moves?playerId={player_ids[0]}").json
        assert moves["forbiddenBet"] == 2

        response = act(client, game_id, player_ids[0], "SUBMIT_BET", bet=2)
        assert response.status_code == 400
        assert response.json["reason"] == "DEALER_BID_SUM"

        response = act(client, game_id, player_ids[0], "SUBMIT_BET", bet=0)
        assert response.status_code == 200
        assert response.json["gameState"]["status"] == "PLAYING"
        assert response.json["gameState"]["play"]["currentTurnIndex"] == 1

        # Leader plays their first valid card, sent as the full card object
        moves = client.get(f"/api/games/{game_id}/valid-moves?playerId={player_ids[1]}").json
        assert moves["isYourTurn"] is True
        hand = client.get(f"/api/games/{game_id}?playerId={player_ids[1]}").json["players"][1]["hand"]
        card = next(c for c in hand if c["id"] == moves["validCards"][0])

        response = act(client, game_id, player_ids[1], "PLAY_CARD", card=card)
        assert response.status_code == 200
        play = response.json["gameState"]["play"]
        assert play["currentTrick"][0]["card"]["id"] == card["id"]
        assert play["leadSuit"] == card["suit"]
        assert play["currentTurnIndex"] == 2

    def test_card_not_in_hand(self, client, started):
        game_id, player_ids = started
        act(client, game_id, player_ids[1], "SUBMIT_BET", bet=2)
        act(client, game_id, player_ids[2], "SUBMIT_BET", bet=1)
        act(client, game_id, player_ids[0], "SUBMIT_BET", bet=0)

        other_hand = client.get(f"/api/games/{game_id}?playerId={player_ids[2]}").json["players"][2]["hand"]
        response = act(client, game_id, player_ids[1], "PLAY_CARD", card=other_hand[0])

        assert response.status_code == 400
        assert response.json["reason"] == "CARD_NOT_IN_HAND"

    def test_valid_moves_requires_player(self, client, started):
        game_id, _ = started
        assert client.get(f"/api/games/{game_id}/valid-moves").status_code == 400


def test_conflict_is_409(client, redis_client, lobby, monkeypatch):
    game_id, player_ids = lobby

    def apply_after_concurrent_write(state, action):
        # Another request rewrites the game while this one is applying
        redis_client.set(f"game:{game_id}", redis_client.get(f"game:{game_id}"))
        return apply_action(state, action)

    monkeypatch.setattr(game_routes, "apply_action", apply_after_concurrent_write)

    response = act(client, game_id, player_ids[1], "TOGGLE_READY")

    assert response.status_code == 409
    assert response.json["reason"] == "CONFLICT"
    monkeypatch.undo()
    assert client.get(f"/api/games/{game_id}").json["players"][1]["isReady"] is False


def test_storage_failure_is_500():
    broken = mock.MagicMock()
    broken.get.side_effect = redis.ConnectionError("connection refused")
    app = create_app({"TESTING": True, "REDIS_CLIENT": broken})

    with app.test_client() as client:
        response = client.get("/api/games/ABCDEF")

    assert response.status_code == 500
    assert response.json["reason"] == "STORAGE_UNAVAILABLE"
