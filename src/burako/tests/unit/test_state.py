"""
Unit tests for per-viewer projections and lobby summaries.
"""

import pytest

from burako.logic.enums import GamePhase, MeldType, TurnStep
from burako.logic.exceptions import NoActiveGameError
from burako.logic.state import get_player_view, summarize_game
from burako.tests.helpers import card, filler, install_game


class TestPlayerView:
    def test_only_own_hand_is_visible(self, engine, table):
        game = install_game(
            table,
            hands={"p0": [card("red", 1)], "p1": [card("blue", 2), card("blue", 3)]},
            dead_piles={"p0": filler(11), "p1": filler(11, color="black")},
        )
        view = get_player_view(table, game, "p0")

        me, other = view.players
        assert me.is_self
        assert me.hand == [card("red", 1)]
        assert not other.is_self
        assert other.hand is None
        assert other.hand_count == 2
        assert me.dead_count == other.dead_count == 11

    def test_dead_pile_contents_never_exposed(self, engine, table):
        game = install_game(table, dead_piles={"p0": filler(11)})
        payload = get_player_view(table, game, "p0").model_dump_json()
        assert "1-yellow-5" not in payload

    def test_public_fields(self, engine, table):
        top = card("black", 4)
        game = install_game(table, stock=filler(5), discard_pile=[card("black", 3), top])
        view = get_player_view(table, game, "p1")
        assert view.table_id == table.id
        assert view.phase == GamePhase.PLAYING
        assert view.stock_count == 5
        assert view.discard_top == top
        assert view.current_turn.player_id == "p0"
        assert view.current_turn.step == TurnStep.DRAW
        assert [p.name for p in view.players] == ["Player0", "Player1"]

    def test_connection_flag_from_roster(self, engine, table):
        game = install_game(table)
        table.players[1].is_connected = False
        view = get_player_view(table, game, "p0")
        assert view.players[1].is_connected is False

    def test_orphaned_meld_has_no_owner(self, engine, four_table):
        sevens = [card("red", 7), card("blue", 7), card("black", 7)]
        game = install_game(four_table, hands={"p0": [*sevens, card("red", 1)]}, step=TurnStep.DISCARD)
        engine.play_meld(four_table, "p0", [c.id for c in sevens], MeldType.SET)
        assert get_player_view(four_table, game, "p1").table_melds[0].owner_id == "p0"

        four_table.players = four_table.players[1:]
        engine.handle_player_leave(four_table, "p0")

        view = get_player_view(four_table, game, "p1")
        assert view.table_melds[0].owner_id is None
        assert len(view.table_melds[0].cards) == 3

    def test_engine_requires_a_game(self, engine, table):
        with pytest.raises(NoActiveGameError):
            engine.get_public_state(table, "p0")


class TestSummary:
    def test_playing_summary(self, engine, table):
        game = install_game(table, stock=filler(3), discard_pile=[card("red", 9)], turn_player="p1")
        summary = summarize_game(game)
        assert summary.phase == GamePhase.PLAYING
        assert summary.current_player_id == "p1"
        assert summary.stock_count == 3
        assert summary.discard_top == card("red", 9)
        assert summary.meld_count == 0

    def test_finished_summary_has_no_current_player(self, engine, table):
        last = card("red", 1)
        install_game(table, hands={"p0": [last]}, step=TurnStep.DISCARD)
        engine.discard_card(table, "p0", last.id)
        summary = engine.summarize(table)
        assert summary.phase == GamePhase.FINISHED
        assert summary.current_player_id is None
        assert summary.winner_id == "p0"

    def test_no_game(self, engine, table):
        assert engine.summarize(table) is None
