"""Quest generation and bulletin-post matching.

Everything here is a pure function of its inputs plus an injectable source
of randomness. Storage and presentation live in :mod:`hoccoo_quest.data`
and :mod:`hoccoo_quest.ui`.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence

from .models import ActionTemplate, Person, Post, Quest, new_id, now_iso

GENERIC_COMPLETION_WORDS: tuple[str, ...] = ("達成", "完了", "できた", "やった", "クリア")

# Two-stage bonus draw: the 8% check only runs when the 25% check fails.
BONUS_SMALL_CHANCE = 0.25
BONUS_SMALL = 3
BONUS_LARGE_CHANCE = 0.08
BONUS_LARGE = 6


class QuestConfigError(ValueError):
    """The roster or action catalog cannot support quest generation."""


class EmptyRosterError(QuestConfigError):
    def __init__(self) -> None:
        super().__init__("No people available to target with quests.")


class EmptyCatalogError(QuestConfigError):
    def __init__(self) -> None:
        super().__init__("The action catalog is empty.")


def validate_catalog(roster: Sequence[Person], actions: Sequence[ActionTemplate]) -> None:
    """Raise :class:`QuestConfigError` when quests cannot be generated."""
    if not actions:
        raise EmptyCatalogError()
    if not roster:
        raise EmptyRosterError()
    for action in actions:
        if not action.text_templates:
            raise QuestConfigError(f"Action {action.key!r} has no text templates.")


def normalize(text: str | None) -> str:
    return (text or "").strip().lower()


def includes_any(text: str, candidates: Iterable[str]) -> bool:
    """Case-insensitive substring test of ``text`` against ``candidates``."""
    haystack = normalize(text)
    for candidate in candidates:
        needle = normalize(candidate)
        if needle and needle in haystack:
            return True
    return False


def draw_bonus(rng: random.Random) -> int:
    if rng.random() < BONUS_SMALL_CHANCE:
        return BONUS_SMALL
    if rng.random() < BONUS_LARGE_CHANCE:
        return BONUS_LARGE
    return 0


def render_text(template: str, person: Person) -> str:
    return template.replace("{dept}", person.department).replace("{name}", person.name)


def generate_quest(
    roster: Sequence[Person],
    actions: Sequence[ActionTemplate],
    rng: random.Random | None = None,
    now: str | None = None,
) -> Quest:
    """Build one active quest for a random person and a random action."""
    if not roster:
        raise EmptyRosterError()
    if not actions:
        raise EmptyCatalogError()
    rng = rng or random.Random()

    target = rng.choice(roster)
    action = rng.choice(actions)
    text = render_text(rng.choice(action.text_templates), target)
    points = action.base_points + draw_bonus(rng)
    return Quest(
        id=new_id("q"),
        created_at=now or now_iso(),
        target_person_id=target.id,
        target_department=target.department,
        target_name=target.name,
        action_key=action.key,
        action_label=action.label,
        points=points,
        text=text,
        status="active",
    )


def generate_hand(
    roster: Sequence[Person],
    actions: Sequence[ActionTemplate],
    hand_size: int,
    rng: random.Random | None = None,
) -> list[Quest]:
    rng = rng or random.Random()
    return [generate_quest(roster, actions, rng) for _ in range(hand_size)]


def quest_is_satisfied_by_post(
    post: Post,
    quest: Quest,
    actions: Sequence[ActionTemplate],
    completion_words: Sequence[str] = GENERIC_COMPLETION_WORDS,
) -> bool:
    """Return ``True`` when ``post`` completes ``quest``.

    The post must name the quest's target as companion. A ``complete`` post
    then matches on any action keyword or any generic completion word; every
    other post type needs an action keyword. An action key that is not in
    ``actions`` contributes no keywords.
    """
    if quest.status != "active":
        return False
    if not post.with_whom_person_id:
        return False
    if post.with_whom_person_id != quest.target_person_id:
        return False

    action = next((a for a in actions if a.key == quest.action_key), None)
    keywords = action.keywords if action else ()

    if includes_any(post.body, keywords):
        return True
    if post.type == "complete":
        return includes_any(post.body, completion_words)
    return False


def is_mulligan_post(post: Post) -> bool:
    """A lunch post with a companion rerolls the author's whole hand."""
    return post.type == "lunch" and bool(post.with_whom_person_id)


def find_completed_quest(
    post: Post,
    hand: Sequence[Quest],
    actions: Sequence[ActionTemplate],
    completion_words: Sequence[str] = GENERIC_COMPLETION_WORDS,
) -> Quest | None:
    """First quest in ``hand`` (insertion order) satisfied by ``post``."""
    return next(
        (
            q
            for q in hand
            if quest_is_satisfied_by_post(post, q, actions, completion_words)
        ),
        None,
    )
