"""Typed domain exceptions for game rule violations.

All domain-level rule violations use subclasses of GameRuleError
rather than raw ValueError. Each subclass carries a GameErrorCode so the
session boundary can convert it into an error result for the acting
player without inspecting message strings.
"""

from burako.logic.enums import GameErrorCode


class GameRuleError(Exception):
    """Base exception for game rule violations.

    Raised by domain logic (engine.py, melds.py, turn.py) when a player
    action violates game rules. Caught at the session boundary
    (session/manager.py) and converted to a failed ActionResult.
    """

    code: GameErrorCode = GameErrorCode.INVALID_ACTION


class NotYourTurnError(GameRuleError):
    """Action attempted by a player who does not hold the turn."""

    code = GameErrorCode.NOT_YOUR_TURN


class WrongStepError(GameRuleError):
    """Action attempted in the wrong draw/discard step of the turn."""

    code = GameErrorCode.WRONG_STEP


class InsufficientPlayersError(GameRuleError):
    """Game start requested with fewer than the minimum seated players."""

    code = GameErrorCode.INSUFFICIENT_PLAYERS


class DeckExhaustedError(GameRuleError):
    """Deck ran out while dealing, before the first discard could be turned."""

    code = GameErrorCode.DECK_EXHAUSTED


class NoCardsAvailableError(GameRuleError):
    """Stock and recyclable discard pile are both empty."""

    code = GameErrorCode.NO_CARDS_AVAILABLE


class EmptyDiscardError(GameRuleError):
    """Draw from the discard pile attempted while it is empty."""

    code = GameErrorCode.EMPTY_DISCARD


class CardNotInHandError(GameRuleError):
    """Referenced card id(s) are not held by the acting player."""

    code = GameErrorCode.CARD_NOT_IN_HAND


class InvalidMeldError(GameRuleError):
    """Rank, color, contiguity or joker-count rule violated."""

    code = GameErrorCode.INVALID_MELD_COMPOSITION


class MeldNotFoundError(GameRuleError):
    """Extend target does not exist on the table."""

    code = GameErrorCode.MELD_NOT_FOUND


class NoActiveGameError(GameRuleError):
    """Table has no game yet."""

    code = GameErrorCode.NO_ACTIVE_GAME


class GameNotPlayingError(GameRuleError):
    """Game exists but is already finished."""

    code = GameErrorCode.GAME_NOT_PLAYING


class PlayerConflictError(GameRuleError):
    """Rebind target id already belongs to another participant."""

    code = GameErrorCode.PLAYER_CONFLICT


class TableNotFoundError(GameRuleError):
    """No table registered under the requested id."""

    code = GameErrorCode.TABLE_NOT_FOUND


class NotAtTableError(GameRuleError):
    """Acting player is not part of the table roster."""

    code = GameErrorCode.NOT_AT_TABLE


class NotHostError(GameRuleError):
    """Host-only action requested by another player."""

    code = GameErrorCode.NOT_HOST


class InvalidActionError(GameRuleError):
    """Action is not valid in the current game or table state."""

    code = GameErrorCode.INVALID_ACTION


class UnsupportedSettingsError(GameRuleError):
    """Game settings contain unsupported values that cannot be silently ignored."""

    code = GameErrorCode.UNSUPPORTED_SETTINGS
