"""Weighted-rarity reward rolling."""

from __future__ import annotations

import logging
import random
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence

from .models import RewardItem

log = logging.getLogger("hoccoo.roller")


def pick_rarity(rarity_weights: Mapping[str, float], rng: random.Random) -> str:
    """Sample one rarity tier with a single uniform draw.

    Tiers are checked in the mapping's iteration order against cumulative
    weights, so the highest rarity should come first. The last tier absorbs
    any remainder when the weights sum to less than one.
    """
    if not rarity_weights:
        raise ValueError("rarity_weights must not be empty")
    r = rng.random()
    cumulative = 0.0
    tier = ""
    for tier, weight in rarity_weights.items():
        cumulative += weight
        if r < cumulative:
            return tier
    return tier


def roll_hand(
    pool: Sequence[RewardItem],
    rarity_weights: Mapping[str, float],
    hand_size: int,
    rng: random.Random | None = None,
) -> list[RewardItem]:
    """Draw ``hand_size`` reward items, each rarity-sampled then item-sampled.

    Draws are independent and with replacement. When the sampled tier has no
    items in ``pool`` the slot yields nothing, so the returned hand may be
    shorter than ``hand_size``.
    """
    if hand_size < 0:
        raise ValueError("hand_size must be non-negative")
    rng = rng or random.Random()

    by_tier: dict[str, list[RewardItem]] = {}
    for item in pool:
        by_tier.setdefault(item.rarity, []).append(item)

    hand: list[RewardItem] = []
    for slot in range(hand_size):
        tier = pick_rarity(rarity_weights, rng)
        candidates = by_tier.get(tier)
        if not candidates:
            log.debug("slot %d: no %s items in pool, skipping", slot, tier)
            continue
        hand.append(rng.choice(candidates))
    return hand


def tier_counts(items: Iterable[RewardItem]) -> Counter[str]:
    return Counter(item.rarity for item in items)
