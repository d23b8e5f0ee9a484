"""Centralized game settings for Burako - all configurable gameplay rules."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from burako.logic.exceptions import UnsupportedSettingsError

MAX_SUPPORTED_PLAYERS = 4
SUPPORTED_JOKERS_PER_MELD = 1


class GameSettings(BaseModel):
    """
    Centralized configuration for all Burako game rules.

    All fields have default values matching the standard table rules.
    """

    model_config = ConfigDict(frozen=True)

    # --- Table ---
    min_players: int = 2
    max_players: int = 4

    # --- Deck / Deal ---
    num_decks: int = 2
    jokers_per_deck: int = 2
    hand_size: int = 11  # also the size of each dead pile

    # --- Meld Rules ---
    min_meld_cards: int = 3
    max_jokers_per_meld: int = 1

    # --- Scoring ---
    canasta_min_cards: int = 7
    canasta_dirty_bonus: int = 100
    canasta_clean_bonus: int = 200
    dead_pile_bonus: int = 100
    closing_bonus: int = 100


def validate_settings(settings: GameSettings) -> None:
    """Validate that all settings values are supported by the engine.

    Raises UnsupportedSettingsError for any setting value the engine
    cannot honor.
    """
    errors: list[str] = []

    if settings.min_players < 2:  # noqa: PLR2004
        errors.append(f"min_players={settings.min_players} is not supported (at least 2 players)")

    if settings.max_players > MAX_SUPPORTED_PLAYERS:
        errors.append(f"max_players={settings.max_players} is not supported (at most 4 seats)")

    if settings.min_players > settings.max_players:
        errors.append("min_players must not exceed max_players")

    if settings.hand_size < 1:
        errors.append(f"hand_size={settings.hand_size} is not supported (must deal at least 1 card)")

    if settings.num_decks < 1:
        errors.append(f"num_decks={settings.num_decks} is not supported (at least 1 deck)")

    if settings.max_jokers_per_meld != SUPPORTED_JOKERS_PER_MELD:
        errors.append(
            f"max_jokers_per_meld={settings.max_jokers_per_meld} is not supported (exactly one joker per meld)"
        )

    if settings.min_meld_cards < 3:  # noqa: PLR2004
        errors.append(f"min_meld_cards={settings.min_meld_cards} is not supported (at least 3 cards)")

    if settings.canasta_dirty_bonus > settings.canasta_clean_bonus:
        errors.append("canasta_dirty_bonus must not exceed canasta_clean_bonus")

    bonuses = (
        settings.canasta_dirty_bonus,
        settings.canasta_clean_bonus,
        settings.dead_pile_bonus,
        settings.closing_bonus,
    )
    if any(bonus < 0 for bonus in bonuses):
        errors.append("bonuses must be non-negative")

    if errors:
        raise UnsupportedSettingsError("; ".join(errors))
