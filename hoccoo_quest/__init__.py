"""Core package for Hoccoo Quest.

This module exposes the pure quest and reward functions, the data models
and the application store so that consumers of the package can simply
import them from ``hoccoo_quest``. The Discord shell lives in
:mod:`hoccoo_quest.bot` and is imported separately.
"""

from .core.matcher import (
    generate_hand,
    generate_quest,
    is_mulligan_post,
    quest_is_satisfied_by_post,
)
from .core.models import ActionTemplate, Person, Quest, RewardItem
from .core.roller import roll_hand
from .core.storage import JSONFileStore
from .data.store import QuestStore

__all__ = [
    "ActionTemplate",
    "JSONFileStore",
    "Person",
    "Quest",
    "QuestStore",
    "RewardItem",
    "generate_hand",
    "generate_quest",
    "is_mulligan_post",
    "quest_is_satisfied_by_post",
    "roll_hand",
]
