"""
Exceptions raised by the game engine.

Every rejection carries a machine-checkable ``reason`` code and the
HTTP-style ``status`` a transport layer should answer with. A rejected
action never changes the state it was applied to.
"""


class GameError(Exception):
    """Base class for every rule, lookup and storage rejection"""

    status = 400
    reason = "GAME_ERROR"

    def __init__(self, message: str, reason: str = None):
        super().__init__(message)
        self.message = message
        if reason is not None:
            self.reason = reason

    def to_dict(self):
        return {"error": self.message, "reason": self.reason}


class ConfigurationError(GameError):
    """Match settings that cannot produce a legal deal"""

    reason = "INVALID_CONFIGURATION"


class PhaseError(GameError):
    """Action submitted while the game is in a phase that does not accept it"""

    reason = "WRONG_PHASE"


class TurnError(GameError):
    """Acting player is not the one whose turn it is"""

    status = 403
    reason = "NOT_YOUR_TURN"


class NotHostError(GameError):
    status = 403
    reason = "NOT_HOST"


class IllegalMoveError(GameError):
    """Bid or card play that breaks a game rule"""

    reason = "ILLEGAL_MOVE"


class MalformedActionError(GameError):
    reason = "MALFORMED_ACTION"


class LobbyError(GameError):
    """Joining a game that has started or is full"""

    reason = "LOBBY_CLOSED"


class PlayerNotFoundError(GameError):
    status = 403
    reason = "PLAYER_NOT_FOUND"


class GameNotFoundError(GameError):
    status = 404
    reason = "GAME_NOT_FOUND"


class ConcurrentUpdateError(GameError):
    """Stored state kept changing underneath us; the client should retry"""

    status = 409
    reason = "CONFLICT"
