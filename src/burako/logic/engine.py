"""
Burako game engine: every operation that mutates a table's game.

Operations either succeed completely or raise a GameRuleError before any
collection is touched. The engine holds no per-table state of its own; the
caller owns the Table values and serializes operations per table.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

import structlog

from burako.logic.cards import create_deck, deck_size
from burako.logic.enums import DrawSource, GamePhase, MeldType, TableStatus, TurnStep
from burako.logic.exceptions import (
    CardNotInHandError,
    DeckExhaustedError,
    EmptyDiscardError,
    InsufficientPlayersError,
    InvalidActionError,
    MeldNotFoundError,
    NoCardsAvailableError,
    PlayerConflictError,
)
from burako.logic.melds import apply_canasta_bonus, remove_cards_from_hand, select_cards_from_hand, validate_meld
from burako.logic.rng import create_rng, shuffle_in_place
from burako.logic.settings import GameSettings, validate_settings
from burako.logic.state import GameState, Meld, PlayerRoundState, TurnState, get_player_view, summarize_game
from burako.logic.turn import advance_turn, finish_game, require_active_game, require_game, require_turn

if TYPE_CHECKING:
    from burako.logic.cards import Card
    from burako.logic.table import Table
    from burako.logic.types import GameSummary, PublicGameState

logger = structlog.get_logger()


class GameEngine:
    """
    Rules engine shared by all tables of one process.

    The only state it keeps is the settings and the shuffle RNG; pass a seed
    to make decks and recycles reproducible.
    """

    def __init__(self, settings: GameSettings | None = None, seed: str | None = None) -> None:
        self.settings = settings or GameSettings()
        validate_settings(self.settings)
        self._rng = create_rng(seed)

    # --- lifecycle ---

    def start_game(self, table: Table) -> GameState:
        """
        Deal a fresh game for the table's roster.

        Each player gets a hand and then a dead pile of `hand_size` cards, in
        ascending seat order; one more card starts the discard pile.
        """
        if table.game is not None and table.game.is_playing:
            raise InvalidActionError("a game is already in progress at this table")
        if table.player_count < self.settings.min_players:
            raise InsufficientPlayersError(f"at least {self.settings.min_players} players are needed to start")
        if table.player_count > self.settings.max_players:
            raise InvalidActionError(f"at most {self.settings.max_players} players can sit at a table")

        seated = sorted(table.players, key=lambda p: p.seat if p.seat is not None else 0)
        hand_size = self.settings.hand_size
        if deck_size(self.settings) <= len(seated) * hand_size * 2:
            raise DeckExhaustedError("not enough cards to deal and turn the first discard")

        deck = create_deck(self.settings, self._rng)

        players: dict[str, PlayerRoundState] = {}
        for player in seated:
            hand, deck = deck[:hand_size], deck[hand_size:]
            dead_pile, deck = deck[:hand_size], deck[hand_size:]
            players[player.id] = PlayerRoundState(seat=player.seat, hand=hand, dead_pile=dead_pile)

        discard_pile = [deck.pop()]
        turn_order = [p.id for p in seated]
        first = turn_order[0]

        game = GameState(
            id=uuid.uuid4().hex,
            turn=TurnState(player_id=first, seat=players[first].seat),
            phase=GamePhase.PLAYING,
            round=1,
            stock=deck,
            discard_pile=discard_pile,
            players=players,
            turn_order=turn_order,
        )

        table.status = TableStatus.PLAYING
        table.game = game
        logger.info("game started", table_id=table.id, game_id=game.id, players=turn_order, stock=len(deck))
        return game

    # --- draw step ---

    def draw_from_stock(self, table: Table, player_id: str) -> None:
        game = require_active_game(table)
        require_turn(game, player_id, TurnStep.DRAW)

        if not game.stock:
            self._recycle_stock(game)
        if not game.stock:
            raise NoCardsAvailableError("there are no cards left to draw")

        game.players[player_id].hand.append(game.stock.pop())
        game.turn.step = TurnStep.DISCARD
        game.turn.drawn_from = DrawSource.STOCK
        game.touch()

    def draw_from_discard(self, table: Table, player_id: str) -> None:
        """Take the top discard only; the rest of the pile stays put."""
        game = require_active_game(table)
        require_turn(game, player_id, TurnStep.DRAW)

        if not game.discard_pile:
            raise EmptyDiscardError("the discard pile is empty")

        game.players[player_id].hand.append(game.discard_pile.pop())
        game.turn.step = TurnStep.DISCARD
        game.turn.drawn_from = DrawSource.DISCARD
        game.touch()

    # --- discard step ---

    def discard_card(self, table: Table, player_id: str, card_id: str) -> None:
        """
        Discard one card and end the turn.

        Emptying the hand picks up the dead pile (with a bonus) if it is still
        unclaimed; the new cards are played on the player's next turn. Emptying
        the hand with no dead pile left closes the game.
        """
        game = require_active_game(table)
        require_turn(game, player_id, TurnStep.DISCARD)

        player = game.players[player_id]
        card = player.find_card(card_id)
        if card is None:
            raise CardNotInHandError(f"card {card_id} is not in your hand")

        player.hand.remove(card)
        game.discard_pile.append(card)
        game.touch()

        if player.hand:
            advance_turn(game, player_id)
            return

        if not player.has_taken_dead and player.dead_pile:
            player.score += self.settings.dead_pile_bonus
            player.hand = player.dead_pile
            player.dead_pile = []
            player.has_taken_dead = True
            logger.info("dead pile taken", table_id=table.id, player_id=player_id, cards=len(player.hand))
            advance_turn(game, player_id)
            return

        player.is_out = True
        finish_game(table, game, player_id, self.settings.closing_bonus, reason="player went out")

    def play_meld(self, table: Table, player_id: str, card_ids: list[str], meld_type: MeldType) -> Meld:
        game = require_active_game(table)
        require_turn(game, player_id, TurnStep.DISCARD)

        if len(card_ids) < self.settings.min_meld_cards:
            raise InvalidActionError(f"a meld needs at least {self.settings.min_meld_cards} cards")

        player = game.players[player_id]
        selected = select_cards_from_hand(player, card_ids)
        _require_card_left(player, selected)
        ordered, is_clean = validate_meld(selected, meld_type, self.settings)
        remove_cards_from_hand(player, selected)

        meld = Meld(
            id=uuid.uuid4().hex,
            owner_id=player_id,
            cards=ordered,
            type=meld_type,
            is_clean=is_clean,
        )
        player.melds.append(meld)
        game.table_melds.append(meld)
        game.touch()
        apply_canasta_bonus(game, meld, self.settings)
        return meld

    def extend_meld(self, table: Table, player_id: str, meld_id: str, card_ids: list[str]) -> Meld:
        """Add cards to any meld on the table, keeping its original type."""
        game = require_active_game(table)
        require_turn(game, player_id, TurnStep.DISCARD)

        if not card_ids:
            raise InvalidActionError("select cards to add to the meld")

        target = game.find_meld(meld_id)
        if target is None:
            raise MeldNotFoundError(f"meld {meld_id} is not on the table")

        player = game.players[player_id]
        selected = select_cards_from_hand(player, card_ids)
        _require_card_left(player, selected)
        ordered, is_clean = validate_meld([*target.cards, *selected], target.type, self.settings)
        remove_cards_from_hand(player, selected)

        target.cards = ordered
        target.is_clean = is_clean
        game.touch()
        apply_canasta_bonus(game, target, self.settings)
        return target

    # --- roster changes ---

    def rebind_player(self, table: Table, previous_id: str, next_id: str) -> None:
        """
        Move every piece of game state keyed by `previous_id` to `next_id`.

        All checks run before anything is relabeled, so a rejected rebind
        leaves the game untouched.
        """
        game = table.game
        if game is None or previous_id == next_id:
            return

        if previous_id not in game.players and previous_id not in game.turn_order:
            logger.warning("rebind for unknown player ignored", table_id=table.id, player_id=previous_id)
            return

        taken = next_id in game.players or next_id in game.turn_order
        if taken or any(meld.owner_id == next_id for meld in game.table_melds):
            raise PlayerConflictError(f"player {next_id} is already part of this game")

        players = {(next_id if pid == previous_id else pid): state for pid, state in game.players.items()}
        turn_order = [next_id if pid == previous_id else pid for pid in game.turn_order]

        game.players = players
        game.turn_order = turn_order
        for meld in game.table_melds:
            if meld.owner_id == previous_id:
                meld.owner_id = next_id
        if game.turn.player_id == previous_id:
            game.turn.player_id = next_id
        if game.winner_id == previous_id:
            game.winner_id = next_id
        game.touch()

        logger.info("player rebound", table_id=table.id, previous_id=previous_id, next_id=next_id)

    def handle_player_leave(self, table: Table, player_id: str) -> None:
        """
        Drop a departing player's state and remove them from the turn order.

        Their melds stay on the table as orphans. Fewer than two remaining
        players ends a running game.
        """
        game = table.game
        if game is None:
            return

        game.players.pop(player_id, None)
        game.turn_order = [pid for pid in game.turn_order if pid != player_id]
        game.touch()
        logger.info("player left game", table_id=table.id, player_id=player_id, remaining=len(game.turn_order))

        if not game.is_playing:
            return

        if game.turn.player_id == player_id:
            advance_turn(game, player_id)

        if len(game.turn_order) < self.settings.min_players:
            if game.turn_order:
                finish_game(table, game, game.turn_order[0], self.settings.closing_bonus, reason="players left")
            else:
                finish_game(table, game, None, 0, reason="all players left")

    # --- read-only ---

    def get_public_state(self, table: Table, viewer_id: str) -> PublicGameState:
        return get_player_view(table, require_game(table), viewer_id)

    def summarize(self, table: Table) -> GameSummary | None:
        if table.game is None:
            return None
        return summarize_game(table.game)

    # --- internals ---

    def _recycle_stock(self, game: GameState) -> None:
        """Shuffle all but the top discard back into the stock."""
        if len(game.discard_pile) <= 1:
            return

        top = game.discard_pile.pop()
        recycled = game.discard_pile
        shuffle_in_place(recycled, self._rng)
        game.stock = recycled
        game.discard_pile = [top]
        logger.info("stock recycled", game_id=game.id, cards=len(recycled))


def _require_card_left(player: PlayerRoundState, selected: list[Card]) -> None:
    """A turn ends with a discard, so melding may never empty the hand."""
    if len(player.hand) - len(selected) < 1:
        raise InvalidActionError("you must keep a card in your hand to discard")
