"""
Card representation and deck construction for Burako.

A game uses two decks shuffled together. Each deck holds one card per
color and rank (4 x 13) plus two jokers, so the default game has 108 cards.

Card ids are stable per deck position ("<deck>-<color>-<rank>" or
"<deck>-joker-<n>"); identity is the id, never the face.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from burako.logic.enums import CardColor, CardKind
from burako.logic.rng import shuffle_in_place

if TYPE_CHECKING:
    import random

    from burako.logic.settings import GameSettings

MIN_RANK = 1
MAX_RANK = 13
JOKER_VALUE = 50

# ascending rank order used for sequence contiguity
RANK_ORDER: tuple[int, ...] = tuple(range(MIN_RANK, MAX_RANK + 1))

CARD_VALUES: dict[int, int] = {
    1: 15,
    2: 20,
    3: 5,
    4: 5,
    5: 5,
    6: 5,
    7: 5,
    8: 10,
    9: 10,
    10: 10,
    11: 10,
    12: 10,
    13: 10,
}


class StandardCard(BaseModel):
    """A colored, ranked card."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[CardKind.STANDARD] = CardKind.STANDARD
    id: str
    color: CardColor
    rank: int = Field(ge=MIN_RANK, le=MAX_RANK)
    value: int


class JokerCard(BaseModel):
    """A wild card; at most one may appear in any meld."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[CardKind.JOKER] = CardKind.JOKER
    id: str
    value: int = JOKER_VALUE


Card = Annotated[StandardCard | JokerCard, Field(discriminator="kind")]


def create_standard_card(color: CardColor, rank: int, card_id: str) -> StandardCard:
    """Build a standard card with its value taken from the rank table."""
    return StandardCard(id=card_id, color=color, rank=rank, value=CARD_VALUES[rank])


def create_joker(card_id: str) -> JokerCard:
    return JokerCard(id=card_id)


def is_joker(card: StandardCard | JokerCard) -> bool:
    return card.kind == CardKind.JOKER


def deck_size(settings: GameSettings) -> int:
    """Total number of cards built for one game."""
    return settings.num_decks * (len(CardColor) * len(RANK_ORDER) + settings.jokers_per_deck)


def build_deck(settings: GameSettings) -> list[StandardCard | JokerCard]:
    """Build the unshuffled deck in deck, color, rank order."""
    cards: list[StandardCard | JokerCard] = []
    for deck in range(settings.num_decks):
        for color in CardColor:
            cards.extend(create_standard_card(color, rank, f"{deck}-{color.value}-{rank}") for rank in RANK_ORDER)
        cards.extend(create_joker(f"{deck}-joker-{n}") for n in range(settings.jokers_per_deck))
    return cards


def create_deck(settings: GameSettings, rng: random.Random) -> list[StandardCard | JokerCard]:
    """Build and shuffle a fresh deck for one game."""
    cards = build_deck(settings)
    shuffle_in_place(cards, rng)
    return cards
