from __future__ import annotations

from typing import TYPE_CHECKING

from burako.logic.cards import JokerCard, StandardCard, create_joker, create_standard_card
from burako.logic.enums import CardColor, DrawSource, TableStatus, TurnStep
from burako.logic.rng import SEED_BYTES
from burako.logic.state import GameState, PlayerRoundState, TurnState
from burako.logic.table import Player, Table

if TYPE_CHECKING:
    from collections.abc import Sequence

    from burako.logic.cards import Card

FIXED_SEED = "ab" * SEED_BYTES


def card(color: str, rank: int, deck: int = 0) -> StandardCard:
    """Build a standard card with the same id the deck builder would give it."""
    return create_standard_card(CardColor(color), rank, f"{deck}-{color}-{rank}")


def joker(n: int = 0, deck: int = 0) -> JokerCard:
    return create_joker(f"{deck}-joker-{n}")


def make_table(num_players: int = 2, table_id: str = "table-1") -> Table:
    """Table with players p0..pN seated in order, p0 hosting."""
    players = [Player(id=f"p{i}", name=f"Player{i}", seat=i, is_host=i == 0) for i in range(num_players)]
    return Table(id=table_id, host_id="p0", players=players)


def install_game(  # noqa: PLR0913
    table: Table,
    *,
    hands: dict[str, Sequence[Card]] | None = None,
    dead_piles: dict[str, Sequence[Card]] | None = None,
    stock: Sequence[Card] = (),
    discard_pile: Sequence[Card] = (),
    turn_player: str | None = None,
    step: TurnStep = TurnStep.DRAW,
) -> GameState:
    """
    Attach a hand-built game to the table for scenario tests.

    Players without an explicit hand or dead pile get empty ones.
    """
    hands = hands or {}
    dead_piles = dead_piles or {}
    players = {
        p.id: PlayerRoundState(
            seat=p.seat,
            hand=list(hands.get(p.id, ())),
            dead_pile=list(dead_piles.get(p.id, ())),
        )
        for p in table.players
    }
    turn_order = [p.id for p in sorted(table.players, key=lambda p: p.seat or 0)]
    current = turn_player or turn_order[0]
    game = GameState(
        id="game-1",
        turn=TurnState(
            player_id=current,
            seat=players[current].seat,
            step=step,
            drawn_from=DrawSource.STOCK if step == TurnStep.DISCARD else DrawSource.NONE,
        ),
        stock=list(stock),
        discard_pile=list(discard_pile),
        players=players,
        turn_order=turn_order,
    )
    table.game = game
    table.status = TableStatus.PLAYING
    return game


def filler(count: int, color: str = "yellow", deck: int = 1) -> list[StandardCard]:
    """Distinct cards for padding hands; ranks cycle 1..13, deck shifts after 13."""
    return [card(color, (i % 13) + 1, deck + i // 13) for i in range(count)]
