"""
Table session manager: the in-process request handler in front of the engine.

Resolves a table by id, runs exactly one engine operation under that table's
lock, and answers with fresh per-viewer states for every seated player.
Rule violations are converted into failed ActionResults for the acting
player only; anything else propagates.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from burako.logic.enums import GameAction, GameErrorCode
from burako.logic.exceptions import (
    GameRuleError,
    InvalidActionError,
    NotAtTableError,
    NotHostError,
    PlayerConflictError,
    TableNotFoundError,
)
from burako.logic.types import ActionResult, DiscardActionData, ExtendMeldActionData, PlayMeldActionData

if TYPE_CHECKING:
    from burako.logic.engine import GameEngine
    from burako.logic.table import Table

logger = structlog.get_logger()


class TableSessionManager:
    def __init__(self, engine: GameEngine, max_tables: int = 100) -> None:
        self._engine = engine
        self._max_tables = max_tables
        self._tables: dict[str, Table] = {}  # table_id -> Table
        self._locks: dict[str, asyncio.Lock] = {}  # table_id -> Lock

    @property
    def engine(self) -> GameEngine:
        return self._engine

    @property
    def table_count(self) -> int:
        return len(self._tables)

    def register_table(self, table: Table) -> None:
        """Track a table whose roster the lobby has already validated."""
        if table.id not in self._tables and len(self._tables) >= self._max_tables:
            raise InvalidActionError(f"table capacity reached ({self._max_tables})")
        self._tables[table.id] = table
        self._locks.setdefault(table.id, asyncio.Lock())

    def get_table(self, table_id: str) -> Table | None:
        return self._tables.get(table_id)

    def remove_table(self, table_id: str) -> None:
        self._tables.pop(table_id, None)
        self._locks.pop(table_id, None)

    # --- actions ---

    async def start_game(self, table_id: str, requester_id: str) -> ActionResult:
        """Start a game; only the table host may do this."""
        try:
            table = self._require_table(table_id)
            async with self._locks[table_id]:
                self._require_seated(table, requester_id)
                if table.host_id != requester_id:
                    raise NotHostError("only the host can start the game")
                self._engine.start_game(table)
                return self._success(table)
        except GameRuleError as e:
            return self._failure(table_id, requester_id, "start_game", e)

    async def handle_action(
        self,
        table_id: str,
        player_id: str,
        action: GameAction,
        data: dict[str, Any] | None = None,
    ) -> ActionResult:
        """
        Run one gameplay action for `player_id`.

        On success every seated player gets their own view, except for
        REQUEST_STATE which answers only the requester.
        """
        data = data or {}
        try:
            table = self._require_table(table_id)
            async with self._locks[table_id]:
                self._require_seated(table, player_id)
                if action == GameAction.REQUEST_STATE:
                    return self._success(table, only=player_id)
                self._dispatch(table, player_id, action, data)
                return self._success(table)
        except ValidationError as e:
            logger.warning("invalid action data", table_id=table_id, player_id=player_id, action=action, error=str(e))
            return ActionResult(ok=False, code=GameErrorCode.VALIDATION_ERROR, error=f"invalid action data: {e}")
        except GameRuleError as e:
            return self._failure(table_id, player_id, action, e)

    async def disconnect(self, table_id: str, player_id: str) -> None:
        """
        Mark a player disconnected; their seat and game state are kept.
        """
        table = self._tables.get(table_id)
        if table is None:
            return
        async with self._locks[table_id]:
            player = table.find_player(player_id)
            if player is not None:
                player.is_connected = False
                logger.info("player disconnected", table_id=table_id, player_id=player_id)

    async def reconnect(self, table_id: str, player_name: str, new_player_id: str) -> ActionResult:
        """
        Bind a new connection id to the disconnected seat with this display name.

        The roster entry, host id and all game state move to the new id under
        the table lock, so no action can observe a half-relabeled table.
        """
        try:
            table = self._require_table(table_id)
            async with self._locks[table_id]:
                player = next((p for p in table.players if p.name == player_name and not p.is_connected), None)
                if player is None:
                    raise NotAtTableError(f"no disconnected player named {player_name} at this table")
                if table.has_player(new_player_id) and new_player_id != player.id:
                    raise PlayerConflictError(f"player {new_player_id} is already at this table")

                previous_id = player.id
                self._engine.rebind_player(table, previous_id, new_player_id)
                player.id = new_player_id
                player.is_connected = True
                if table.host_id == previous_id:
                    table.host_id = new_player_id

                logger.info("player reconnected", table_id=table_id, previous_id=previous_id, next_id=new_player_id)
                return self._success(table) if table.game is not None else ActionResult(ok=True)
        except GameRuleError as e:
            return self._failure(table_id, new_player_id, "reconnect", e)

    async def leave(self, table_id: str, player_id: str) -> ActionResult:
        """
        Remove a player from the table and from the running game.

        The first remaining player becomes host if the host left; the table
        is dropped once nobody is left.
        """
        try:
            table = self._require_table(table_id)
            async with self._locks[table_id]:
                self._require_seated(table, player_id)
                table.players = [p for p in table.players if p.id != player_id]
                self._engine.handle_player_leave(table, player_id)
                if not table.players:
                    self.remove_table(table_id)
                    logger.info("table removed", table_id=table_id)
                    return ActionResult(ok=True)
                if not any(p.is_host for p in table.players):
                    next_host = table.players[0]
                    next_host.is_host = True
                    table.host_id = next_host.id
                    logger.info("host reassigned", table_id=table_id, host_id=next_host.id)
                return self._success(table) if table.game is not None else ActionResult(ok=True)
        except GameRuleError as e:
            return self._failure(table_id, player_id, "leave", e)

    # --- internals ---

    def _dispatch(self, table: Table, player_id: str, action: GameAction, data: dict[str, Any]) -> None:
        # actions without data parameters
        no_data_handlers = {
            GameAction.DRAW_STOCK: lambda: self._engine.draw_from_stock(table, player_id),
            GameAction.DRAW_DISCARD: lambda: self._engine.draw_from_discard(table, player_id),
        }
        handler = no_data_handlers.get(action)
        if handler is not None:
            handler()
            return

        # actions with data parameters
        if action == GameAction.DISCARD:
            discard = DiscardActionData(**data)
            self._engine.discard_card(table, player_id, discard.card_id)
        elif action == GameAction.PLAY_MELD:
            play = PlayMeldActionData(**data)
            self._engine.play_meld(table, player_id, play.card_ids, play.type)
        elif action == GameAction.EXTEND_MELD:
            extend = ExtendMeldActionData(**data)
            self._engine.extend_meld(table, player_id, extend.meld_id, extend.card_ids)
        else:
            raise InvalidActionError(f"unknown action: {action}")

    def _require_table(self, table_id: str) -> Table:
        table = self._tables.get(table_id)
        if table is None:
            raise TableNotFoundError("table not found")
        return table

    @staticmethod
    def _require_seated(table: Table, player_id: str) -> None:
        if not table.has_player(player_id):
            raise NotAtTableError("player is not part of this table")

    def _success(self, table: Table, only: str | None = None) -> ActionResult:
        """Build a success result with a fresh view for each recipient."""
        if table.game is None:
            return ActionResult(ok=True)
        recipients = [only] if only is not None else [p.id for p in table.players]
        states = {pid: self._engine.get_public_state(table, pid) for pid in recipients}
        return ActionResult(ok=True, states=states)

    @staticmethod
    def _failure(table_id: str, player_id: str, action: object, error: GameRuleError) -> ActionResult:
        logger.info(
            "action rejected",
            table_id=table_id,
            player_id=player_id,
            action=action,
            code=error.code,
            reason=str(error),
        )
        return ActionResult(ok=False, code=error.code, error=str(error))
