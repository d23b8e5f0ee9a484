"""
Game state models for Burako.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from burako.logic.enums import CanastaBonus, DrawSource, GamePhase, MeldType, TurnStep
from burako.logic.types import GameSummary, MeldView, PublicGameState, PublicPlayerState, TurnView

if TYPE_CHECKING:
    from burako.logic.cards import Card
    from burako.logic.table import Table


@dataclass
class Meld:
    """
    A face-up group of cards on the table.

    `owner_id` is a back-reference to the player who laid it down. It is not
    cleared when that player leaves: orphaned melds keep the stale id.
    """

    id: str
    owner_id: str
    cards: list[Card]
    type: MeldType
    is_clean: bool  # no joker in the meld
    canasta_bonus: CanastaBonus = CanastaBonus.NONE  # highest bonus tier already paid


@dataclass
class TurnState:
    """Whose turn it is and which step of the turn they are in."""

    player_id: str
    seat: int | None  # last known seat, for display
    step: TurnStep = TurnStep.DRAW
    drawn_from: DrawSource = DrawSource.NONE


@dataclass
class PlayerRoundState:
    """
    Everything the game tracks for one participant.
    """

    seat: int | None
    hand: list[Card] = field(default_factory=list)
    dead_pile: list[Card] = field(default_factory=list)  # closed second hand, earned by emptying the first
    melds: list[Meld] = field(default_factory=list)  # melds this player laid down
    score: int = 0

    # round flags
    has_taken_dead: bool = False
    is_out: bool = False

    def find_card(self, card_id: str) -> Card | None:
        return next((c for c in self.hand if c.id == card_id), None)


@dataclass
class GameState:
    """
    The single authoritative copy of a table's game.
    """

    id: str
    turn: TurnState
    phase: GamePhase = GamePhase.PLAYING
    round: int = 1

    stock: list[Card] = field(default_factory=list)  # face down, draw from the end
    discard_pile: list[Card] = field(default_factory=list)  # face up, top is the last element

    players: dict[str, PlayerRoundState] = field(default_factory=dict)  # player_id -> state
    table_melds: list[Meld] = field(default_factory=list)  # every meld on the table, any owner
    turn_order: list[str] = field(default_factory=list)  # cyclic, only ever shrinks after start

    winner_id: str | None = None

    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)

    @property
    def discard_top(self) -> Card | None:
        return self.discard_pile[-1] if self.discard_pile else None

    @property
    def is_playing(self) -> bool:
        return self.phase == GamePhase.PLAYING

    def find_meld(self, meld_id: str) -> Meld | None:
        return next((m for m in self.table_melds if m.id == meld_id), None)

    def touch(self) -> None:
        self.updated_at = time.time()

    def all_card_ids(self) -> list[str]:
        """
        Collect every card id in play across all locations.

        Melds are counted once, from the table meld list.
        """
        ids = [c.id for c in self.stock]
        ids.extend(c.id for c in self.discard_pile)
        for player in self.players.values():
            ids.extend(c.id for c in player.hand)
            ids.extend(c.id for c in player.dead_pile)
        for meld in self.table_melds:
            ids.extend(c.id for c in meld.cards)
        return ids


def get_player_view(table: Table, game: GameState, viewer_id: str) -> PublicGameState:
    """
    Return the visible game state for a specific viewer.

    Each viewer can see:
    - Their own hand
    - Every player's hand count, dead pile count, score and dead pile flag
    - All melds on the table
    - Discard top, stock count and the current turn

    They cannot see:
    - Other players' hands
    - Any dead pile contents
    - Stock order
    """
    players_view: list[PublicPlayerState] = []
    for p in table.players:
        state = game.players.get(p.id)
        is_self = p.id == viewer_id
        players_view.append(
            PublicPlayerState(
                id=p.id,
                name=p.name,
                seat=p.seat,
                is_connected=p.is_connected,
                score=state.score if state else 0,
                hand_count=len(state.hand) if state else 0,
                is_self=is_self,
                hand=list(state.hand) if is_self and state else None,
                melds=[_meld_to_view(m, game) for m in state.melds] if state else [],
                dead_count=len(state.dead_pile) if state else 0,
                has_taken_dead=state.has_taken_dead if state else False,
            )
        )

    return PublicGameState(
        table_id=table.id,
        phase=game.phase,
        round=game.round,
        current_turn=_turn_to_view(game.turn),
        stock_count=len(game.stock),
        discard_top=game.discard_top,
        table_melds=[_meld_to_view(m, game) for m in game.table_melds],
        players=players_view,
        winner_id=game.winner_id,
    )


def summarize_game(game: GameState) -> GameSummary:
    """Return the lobby-level summary of a game (no hand data)."""
    return GameSummary(
        phase=game.phase,
        round=game.round,
        current_player_id=game.turn.player_id if game.is_playing else None,
        stock_count=len(game.stock),
        discard_top=game.discard_top,
        meld_count=len(game.table_melds),
        winner_id=game.winner_id,
    )


def _meld_to_view(meld: Meld, game: GameState) -> MeldView:
    """
    Convert a Meld to its client view.

    The owner is reported as None once the owning player record is gone.
    """
    return MeldView(
        id=meld.id,
        owner_id=meld.owner_id if meld.owner_id in game.players else None,
        cards=list(meld.cards),
        type=meld.type,
        is_clean=meld.is_clean,
        canasta_bonus=meld.canasta_bonus,
    )


def _turn_to_view(turn: TurnState) -> TurnView:
    return TurnView(
        player_id=turn.player_id,
        seat=turn.seat,
        step=turn.step,
        drawn_from=turn.drawn_from,
    )
