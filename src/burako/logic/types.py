"""
Pydantic models for data that crosses the engine boundary.

Contains client-facing views (per-viewer game state, lobby summary) and the
typed action payloads the session layer parses before calling the engine.
"""

from pydantic import BaseModel, ConfigDict, Field

from burako.logic.cards import Card
from burako.logic.enums import CanastaBonus, DrawSource, GameErrorCode, GamePhase, MeldType, TurnStep


class DiscardActionData(BaseModel):
    """Data for discard action."""

    card_id: str


class PlayMeldActionData(BaseModel):
    """Data for laying down a new meld."""

    card_ids: list[str] = Field(min_length=1)
    type: MeldType


class ExtendMeldActionData(BaseModel):
    """Data for adding cards to a meld already on the table."""

    meld_id: str
    card_ids: list[str] = Field(min_length=1)


class TurnView(BaseModel):
    model_config = ConfigDict(frozen=True)

    player_id: str
    seat: int | None
    step: TurnStep
    drawn_from: DrawSource


class MeldView(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    owner_id: str | None  # None once the owner has left the table
    cards: list[Card]
    type: MeldType
    is_clean: bool
    canasta_bonus: CanastaBonus


class PublicPlayerState(BaseModel):
    """One seat as seen by a particular viewer. `hand` is only set for the viewer."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    seat: int | None
    is_connected: bool
    score: int
    hand_count: int
    is_self: bool
    hand: list[Card] | None = None
    melds: list[MeldView]
    dead_count: int
    has_taken_dead: bool


class PublicGameState(BaseModel):
    model_config = ConfigDict(frozen=True)

    table_id: str
    phase: GamePhase
    round: int
    current_turn: TurnView
    stock_count: int
    discard_top: Card | None
    table_melds: list[MeldView]
    players: list[PublicPlayerState]
    winner_id: str | None = None


class GameSummary(BaseModel):
    """Lobby-level game summary, independent of any viewer."""

    model_config = ConfigDict(frozen=True)

    phase: GamePhase
    round: int
    current_player_id: str | None
    stock_count: int
    discard_top: Card | None
    meld_count: int
    winner_id: str | None = None


class ActionResult(BaseModel):
    """
    Outcome of one session-level action.

    On success `states` maps each recipient's player id to their own view.
    On failure only the acting player is told, via `code` and `error`.
    """

    ok: bool
    code: GameErrorCode | None = None
    error: str | None = None
    states: dict[str, PublicGameState] = Field(default_factory=dict)
