"""
Table roster values consumed by the engine.

Seat assignment and host election belong to the lobby; the engine only reads
the roster and writes `status` and `game`.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from burako.logic.enums import TableStatus

if TYPE_CHECKING:
    from burako.logic.state import GameState


@dataclass
class Player:
    """A seated player as known to the lobby.

    `id` is the current connection-scoped identifier; it changes when the
    player reconnects, `name` does not.
    """

    id: str
    name: str
    seat: int | None = None
    is_host: bool = False
    joined_at: float = field(default_factory=time.time)
    is_connected: bool = True


@dataclass
class Table:
    id: str
    host_id: str
    status: TableStatus = TableStatus.WAITING
    created_at: float = field(default_factory=time.time)
    players: list[Player] = field(default_factory=list)
    game: GameState | None = None

    def find_player(self, player_id: str) -> Player | None:
        return next((p for p in self.players if p.id == player_id), None)

    def has_player(self, player_id: str) -> bool:
        return self.find_player(player_id) is not None

    @property
    def player_count(self) -> int:
        return len(self.players)
