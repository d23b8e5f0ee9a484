"""
String enum definitions for Burako game concepts.
"""

from enum import Enum


class CardColor(str, Enum):
    """Colors of standard cards."""

    BLACK = "black"
    RED = "red"
    BLUE = "blue"
    YELLOW = "yellow"


class CardKind(str, Enum):
    """Discriminator for card models."""

    STANDARD = "standard"
    JOKER = "joker"


class MeldType(str, Enum):
    """Shapes a meld can take."""

    SET = "set"
    SEQUENCE = "sequence"


class CanastaBonus(str, Enum):
    """
    Canasta bonus tier already paid for a meld.

    Tiers only move forward: none -> dirty -> clean.
    """

    NONE = "none"
    DIRTY = "dirty"
    CLEAN = "clean"


# forward-only ordering of bonus tiers
CANASTA_BONUS_RANK: dict[CanastaBonus, int] = {
    CanastaBonus.NONE: 0,
    CanastaBonus.DIRTY: 1,
    CanastaBonus.CLEAN: 2,
}


class TurnStep(str, Enum):
    """Sub-phase of a single player's turn."""

    DRAW = "draw"
    DISCARD = "discard"


class DrawSource(str, Enum):
    """Where the current turn's card was drawn from."""

    NONE = "none"
    STOCK = "stock"
    DISCARD = "discard"


class GamePhase(str, Enum):
    """Phase of a Burako game."""

    PLAYING = "playing"
    FINISHED = "finished"


class TableStatus(str, Enum):
    """Lifecycle status of a table as seen by the lobby."""

    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


class GameAction(str, Enum):
    """Actions dispatched from client to the session manager."""

    DRAW_STOCK = "draw_stock"
    DRAW_DISCARD = "draw_discard"
    DISCARD = "discard"
    PLAY_MELD = "play_meld"
    EXTEND_MELD = "extend_meld"
    REQUEST_STATE = "request_state"


class GameErrorCode(str, Enum):
    """Error codes sent to clients for rejected actions."""

    NOT_YOUR_TURN = "not_your_turn"
    WRONG_STEP = "wrong_step"
    INSUFFICIENT_PLAYERS = "insufficient_players"
    DECK_EXHAUSTED = "deck_exhausted"
    NO_CARDS_AVAILABLE = "no_cards_available"
    EMPTY_DISCARD = "empty_discard"
    CARD_NOT_IN_HAND = "card_not_in_hand"
    INVALID_MELD_COMPOSITION = "invalid_meld_composition"
    MELD_NOT_FOUND = "meld_not_found"
    NO_ACTIVE_GAME = "no_active_game"
    GAME_NOT_PLAYING = "game_not_playing"
    PLAYER_CONFLICT = "player_conflict"
    TABLE_NOT_FOUND = "table_not_found"
    NOT_AT_TABLE = "not_at_table"
    NOT_HOST = "not_host"
    INVALID_ACTION = "invalid_action"
    VALIDATION_ERROR = "validation_error"
    UNSUPPORTED_SETTINGS = "unsupported_settings"
