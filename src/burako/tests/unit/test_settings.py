import pytest
from pydantic import ValidationError

from burako.logic.engine import GameEngine
from burako.logic.exceptions import GameRuleError, UnsupportedSettingsError
from burako.logic.settings import GameSettings, validate_settings


class TestGameSettings:
    def test_defaults(self):
        settings = GameSettings()
        assert settings.hand_size == 11
        assert settings.canasta_min_cards == 7
        assert settings.canasta_dirty_bonus == 100
        assert settings.canasta_clean_bonus == 200
        assert settings.dead_pile_bonus == 100
        assert settings.closing_bonus == 100

    def test_frozen(self):
        settings = GameSettings()
        with pytest.raises(ValidationError):
            settings.hand_size = 5

    def test_defaults_are_supported(self):
        validate_settings(GameSettings())


class TestValidateSettings:
    @pytest.mark.parametrize(
        ("overrides", "match"),
        [
            ({"max_players": 6}, "max_players=6"),
            ({"min_players": 1}, "min_players=1"),
            ({"max_jokers_per_meld": 2}, "max_jokers_per_meld=2"),
            ({"min_meld_cards": 2}, "min_meld_cards=2"),
            ({"hand_size": 0}, "hand_size=0"),
            ({"canasta_dirty_bonus": 300}, "must not exceed canasta_clean_bonus"),
            ({"closing_bonus": -5}, "non-negative"),
        ],
    )
    def test_rejects_unsupported(self, overrides, match):
        with pytest.raises(UnsupportedSettingsError, match=match):
            validate_settings(GameSettings(**overrides))

    def test_collects_all_errors(self):
        with pytest.raises(UnsupportedSettingsError) as exc_info:
            validate_settings(GameSettings(max_players=5, max_jokers_per_meld=0))
        assert "max_players=5" in str(exc_info.value)
        assert "max_jokers_per_meld=0" in str(exc_info.value)

    def test_is_game_rule_error(self):
        with pytest.raises(GameRuleError):
            validate_settings(GameSettings(max_players=8))

    def test_engine_validates_on_construction(self):
        with pytest.raises(UnsupportedSettingsError):
            GameEngine(GameSettings(max_players=8))
