"""
Turn state machine for Burako.

Each turn is draw -> discard. Melds may be played or extended freely during
the discard step; discarding one card ends the turn and hands the draw step
to the next player in turn order. There is no pass.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from burako.logic.enums import DrawSource, GamePhase, TableStatus, TurnStep
from burako.logic.exceptions import GameNotPlayingError, NoActiveGameError, NotYourTurnError, WrongStepError
from burako.logic.state import TurnState

if TYPE_CHECKING:
    from burako.logic.state import GameState
    from burako.logic.table import Table

logger = structlog.get_logger()


def require_game(table: Table) -> GameState:
    if table.game is None:
        raise NoActiveGameError("this table has no game")
    return table.game


def require_active_game(table: Table) -> GameState:
    game = require_game(table)
    if game.phase != GamePhase.PLAYING:
        raise GameNotPlayingError("the game is not in progress")
    return game


def require_turn(game: GameState, player_id: str, step: TurnStep) -> None:
    """
    Reject actions from anyone but the turn holder, or in the wrong step.
    """
    if game.turn.player_id != player_id:
        raise NotYourTurnError("it is not your turn")
    if game.turn.step != step:
        raise WrongStepError(f"you must {game.turn.step.value} first")


def advance_turn(game: GameState, current_player_id: str) -> None:
    """
    Hand the turn to the player after `current_player_id`.

    A player no longer in the turn order restarts the cycle at index 0. With
    an empty turn order the turn stays on `current_player_id` with no seat.
    """
    if not game.turn_order:
        game.turn = TurnState(player_id=current_player_id, seat=None)
        return

    try:
        next_index = (game.turn_order.index(current_player_id) + 1) % len(game.turn_order)
    except ValueError:
        next_index = 0

    next_player_id = game.turn_order[next_index]
    player = game.players.get(next_player_id)
    game.turn = TurnState(
        player_id=next_player_id,
        seat=player.seat if player else None,
        step=TurnStep.DRAW,
        drawn_from=DrawSource.NONE,
    )
    game.touch()


def finish_game(
    table: Table,
    game: GameState,
    winner_id: str | None,
    closing_bonus: int,
    reason: str,
) -> None:
    """
    End the game terminally, paying the closing bonus to the winner if any.
    """
    winner = game.players.get(winner_id) if winner_id is not None else None
    if winner is not None:
        winner.score += closing_bonus

    game.phase = GamePhase.FINISHED
    game.winner_id = winner_id
    game.touch()
    table.status = TableStatus.FINISHED
    logger.info("game finished", table_id=table.id, game_id=game.id, winner_id=winner_id, reason=reason)
