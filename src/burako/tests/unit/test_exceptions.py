"""Tests for the domain exception hierarchy."""

import pytest

from burako.logic.enums import GameErrorCode
from burako.logic.exceptions import (
    CardNotInHandError,
    DeckExhaustedError,
    EmptyDiscardError,
    GameNotPlayingError,
    GameRuleError,
    InsufficientPlayersError,
    InvalidActionError,
    InvalidMeldError,
    MeldNotFoundError,
    NoActiveGameError,
    NoCardsAvailableError,
    NotYourTurnError,
    PlayerConflictError,
    WrongStepError,
)

ALL_RULE_ERRORS = (
    NotYourTurnError,
    WrongStepError,
    InsufficientPlayersError,
    DeckExhaustedError,
    NoCardsAvailableError,
    EmptyDiscardError,
    CardNotInHandError,
    InvalidMeldError,
    MeldNotFoundError,
    NoActiveGameError,
    GameNotPlayingError,
    PlayerConflictError,
    InvalidActionError,
)


class TestGameRuleErrorHierarchy:
    def test_catch_base_catches_all_subclasses(self) -> None:
        for exc_class in ALL_RULE_ERRORS:
            with pytest.raises(GameRuleError, match="test message"):
                raise exc_class("test message")

    def test_message_preserved(self) -> None:
        err = CardNotInHandError("card 0-red-7 is not in your hand")
        assert str(err) == "card 0-red-7 is not in your hand"

    def test_codes_are_distinct(self) -> None:
        codes = [exc_class.code for exc_class in ALL_RULE_ERRORS]
        assert len(set(codes)) == len(codes)

    @pytest.mark.parametrize(
        ("exc_class", "code"),
        [
            (NotYourTurnError, GameErrorCode.NOT_YOUR_TURN),
            (WrongStepError, GameErrorCode.WRONG_STEP),
            (InvalidMeldError, GameErrorCode.INVALID_MELD_COMPOSITION),
            (MeldNotFoundError, GameErrorCode.MELD_NOT_FOUND),
            (NoActiveGameError, GameErrorCode.NO_ACTIVE_GAME),
        ],
    )
    def test_code_mapping(self, exc_class, code) -> None:
        assert exc_class("x").code == code
