"""
Meld operations for Burako (sets, sequences, canasta bonus).

Validation works on a candidate card list and never touches a hand; callers
remove cards from the hand only after validation succeeds.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from burako.logic.cards import RANK_ORDER, StandardCard, is_joker
from burako.logic.enums import CANASTA_BONUS_RANK, CanastaBonus, MeldType
from burako.logic.exceptions import CardNotInHandError, InvalidMeldError

if TYPE_CHECKING:
    from burako.logic.cards import Card
    from burako.logic.settings import GameSettings
    from burako.logic.state import GameState, Meld, PlayerRoundState

logger = structlog.get_logger()


def select_cards_from_hand(player: PlayerRoundState, card_ids: list[str]) -> list[Card]:
    """
    Resolve card ids against a hand without modifying it.

    Raises CardNotInHandError if any id is missing or repeated.
    """
    if len(set(card_ids)) != len(card_ids):
        raise CardNotInHandError("the same card was selected more than once")

    by_id = {card.id: card for card in player.hand}
    selected: list[Card] = []
    for card_id in card_ids:
        card = by_id.get(card_id)
        if card is None:
            raise CardNotInHandError(f"card {card_id} is not in your hand")
        selected.append(card)
    return selected


def remove_cards_from_hand(player: PlayerRoundState, cards: list[Card]) -> None:
    """Remove already-validated cards from a hand."""
    removed = {card.id for card in cards}
    player.hand = [card for card in player.hand if card.id not in removed]


def validate_meld(cards: list[Card], meld_type: MeldType, settings: GameSettings) -> tuple[list[Card], bool]:
    """
    Validate a candidate meld and return (ordered_cards, is_clean).

    Rules shared by both shapes:
    - at least `min_meld_cards` cards
    - at most `max_jokers_per_meld` jokers
    - at least one standard card

    Ordering: sets keep their input order with jokers last; sequences are
    sorted ascending by rank with jokers appended.
    """
    if len(cards) < settings.min_meld_cards:
        raise InvalidMeldError(f"a meld needs at least {settings.min_meld_cards} cards")

    jokers = [c for c in cards if is_joker(c)]
    if len(jokers) > settings.max_jokers_per_meld:
        raise InvalidMeldError("only one joker is allowed per meld")

    standards = [c for c in cards if isinstance(c, StandardCard)]
    if not standards:
        raise InvalidMeldError("a meld needs at least one standard card")

    if meld_type == MeldType.SET:
        ordered = _validate_set(standards)
    else:
        ordered = _validate_sequence(standards, len(jokers))

    return [*ordered, *jokers], not jokers


def _validate_set(standards: list[StandardCard]) -> list[StandardCard]:
    target_rank = standards[0].rank
    if any(card.rank != target_rank for card in standards):
        raise InvalidMeldError("all cards in a set must share the same rank")
    return list(standards)


def _validate_sequence(standards: list[StandardCard], joker_count: int) -> list[StandardCard]:
    """
    Check color, rank uniqueness and contiguity of a sequence.

    Jokers may fill gaps between the lowest and highest rank but the run can
    never be longer than the number of cards available to cover it.
    """
    color = standards[0].color
    if any(card.color != color for card in standards):
        raise InvalidMeldError("all cards in a sequence must share the same color")

    positions = sorted(RANK_ORDER.index(card.rank) for card in standards)
    if len(set(positions)) != len(positions):
        raise InvalidMeldError("a sequence cannot repeat a rank")

    span = positions[-1] - positions[0] + 1
    if span > len(standards) + joker_count:
        raise InvalidMeldError("ranks are not consecutive, even using the joker")

    return sorted(standards, key=lambda card: RANK_ORDER.index(card.rank))


def apply_canasta_bonus(game: GameState, meld: Meld, settings: GameSettings) -> int:
    """
    Pay any canasta bonus the meld has newly earned; return the points paid.

    Tiers only move forward (none -> dirty -> clean) and each tier is paid at
    most once: reaching clean from dirty pays only the difference. A meld
    whose owner has left still advances its tier but pays nobody.
    """
    if len(meld.cards) < settings.canasta_min_cards:
        return 0

    earned = CanastaBonus.CLEAN if meld.is_clean else CanastaBonus.DIRTY
    if CANASTA_BONUS_RANK[earned] <= CANASTA_BONUS_RANK[meld.canasta_bonus]:
        return 0

    points = _tier_points(earned, settings) - _tier_points(meld.canasta_bonus, settings)
    meld.canasta_bonus = earned

    owner = game.players.get(meld.owner_id)
    if owner is None:
        logger.info("canasta bonus on orphaned meld", meld_id=meld.id, tier=earned)
        return 0

    owner.score += points
    logger.info("canasta bonus", player_id=meld.owner_id, meld_id=meld.id, tier=earned, points=points)
    return points


def _tier_points(tier: CanastaBonus, settings: GameSettings) -> int:
    if tier == CanastaBonus.CLEAN:
        return settings.canasta_clean_bonus
    if tier == CanastaBonus.DIRTY:
        return settings.canasta_dirty_bonus
    return 0
