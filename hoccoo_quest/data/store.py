"""Application state for users, hands, posts and points."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from pydantic import ValidationError

from ..core.catalog import DEFAULT_ACTIONS, DEFAULT_PEOPLE, SAMPLE_POSTS
from ..core.matcher import (
    GENERIC_COMPLETION_WORDS,
    find_completed_quest,
    generate_hand,
    generate_quest,
    is_mulligan_post,
)
from ..core.models import POST_TYPES, ActionTemplate, Person, Post, PostAdapter, Quest
from ..core.storage import KeyValueStore
from .models import LeaderboardRow, PostOutcome

log = logging.getLogger("hoccoo.store")

KEY_AUTH = "hq_auth"
KEY_PEOPLE = "hq_people"
KEY_POSTS = "hq_posts"
KEY_POINTS = "hq_points"
KEY_ACTIVE_QUESTS = "hq_active_quests"
KEY_SEEDED = "hq_seeded"

DEFAULT_PASSWORD = "Suwarika"
DEFAULT_HAND_SIZE = 5

T = TypeVar("T")


class QuestStore:
    """Session and application state on top of a :class:`KeyValueStore`.

    The store owns every mutation: it calls the pure quest functions and
    flushes the affected key right away. User-facing problems are returned
    as message strings rather than raised.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        actions: Sequence[ActionTemplate] = DEFAULT_ACTIONS,
        hand_size: int = DEFAULT_HAND_SIZE,
        password: str = DEFAULT_PASSWORD,
        completion_words: Sequence[str] = GENERIC_COMPLETION_WORDS,
        rng: random.Random | None = None,
        seed: bool = True,
    ) -> None:
        self.kv = kv
        self.actions = tuple(actions)
        self.hand_size = hand_size
        self.password = password
        self.completion_words = tuple(completion_words)
        self.rng = rng or random.Random()
        if seed:
            self.seed_if_needed()
        self._load()

    # ------------------------------------------------------------------
    # Persistence helpers
    # ------------------------------------------------------------------
    def _load_list(self, key: str, parse: Callable[[Any], T]) -> list[T]:
        raw = self.kv.load(key, [])
        if not isinstance(raw, list):
            log.warning("Ignoring malformed %s (expected a list)", key)
            return []
        items: list[T] = []
        for entry in raw:
            try:
                items.append(parse(entry))
            except ValidationError:
                log.warning("Dropping malformed entry in %s: %r", key, entry)
        return items

    def _load_dict(self, key: str) -> dict:
        raw = self.kv.load(key, {})
        if not isinstance(raw, dict):
            log.warning("Ignoring malformed %s (expected an object)", key)
            return {}
        return raw

    def _load(self) -> None:
        self.people: list[Person] = self._load_list(KEY_PEOPLE, Person.model_validate)
        self.posts: list[Post] = self._load_list(KEY_POSTS, PostAdapter.validate_python)
        self.sessions: dict[str, str] = {
            str(k): str(v) for k, v in self._load_dict(KEY_AUTH).items() if v
        }

        self.points: dict[str, int] = {}
        for user, value in self._load_dict(KEY_POINTS).items():
            try:
                self.points[user] = int(value)
            except (TypeError, ValueError):
                log.warning("Ignoring non-numeric points for %s: %r", user, value)

        self.hands: dict[str, list[Quest]] = {}
        for user, raw_hand in self._load_dict(KEY_ACTIVE_QUESTS).items():
            if not isinstance(raw_hand, list):
                continue
            hand: list[Quest] = []
            for entry in raw_hand:
                try:
                    hand.append(Quest.model_validate(entry))
                except ValidationError:
                    log.warning("Dropping malformed quest for %s", user)
            self.hands[user] = hand

    def _save_people(self) -> None:
        self.kv.save(KEY_PEOPLE, [p.model_dump() for p in self.people])

    def _save_posts(self) -> None:
        self.kv.save(KEY_POSTS, [p.model_dump() for p in self.posts])

    def _save_points(self) -> None:
        self.kv.save(KEY_POINTS, dict(self.points))

    def _save_hands(self) -> None:
        self.kv.save(
            KEY_ACTIVE_QUESTS,
            {u: [q.model_dump() for q in hand] for u, hand in self.hands.items()},
        )

    def _save_sessions(self) -> None:
        self.kv.save(KEY_AUTH, dict(self.sessions))

    def seed_if_needed(self) -> None:
        """Write the default roster and sample posts on first run."""
        if self.kv.load(KEY_SEEDED, False):
            return

        people = self.kv.load(KEY_PEOPLE, None)
        if not isinstance(people, list) or not people:
            people = [p.model_dump() for p in DEFAULT_PEOPLE]
            self.kv.save(KEY_PEOPLE, people)

        posts = self.kv.load(KEY_POSTS, [])
        if not isinstance(posts, list) or not posts:
            labels = {p["id"]: f"{p['department']} {p['name']}" for p in people}
            samples = [
                POST_TYPES[ptype](
                    author="demo",
                    body=body,
                    with_whom_person_id=pid,
                    with_whom_label=labels.get(pid, ""),
                )
                for ptype, pid, body in SAMPLE_POSTS
            ]
            self.kv.save(KEY_POSTS, [p.model_dump() for p in samples])

        self.kv.save(KEY_POINTS, self.kv.load(KEY_POINTS, {}))
        self.kv.save(KEY_ACTIVE_QUESTS, self.kv.load(KEY_ACTIVE_QUESTS, {}))
        self.kv.save(KEY_SEEDED, True)
        log.info("Seeded default roster and sample posts")

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------
    def login(self, account_id: str, username: str, password: str) -> str | None:
        username = username.strip()
        if not username:
            return "Please enter a username."
        if password != self.password:
            return "Wrong password."
        self.sessions[str(account_id)] = username
        self._save_sessions()
        self.ensure_hand(username)
        log.info("%s logged in as %s", account_id, username)
        return None

    def logout(self, account_id: str) -> bool:
        if self.sessions.pop(str(account_id), None) is None:
            return False
        self._save_sessions()
        return True

    def current_user(self, account_id: str) -> str | None:
        return self.sessions.get(str(account_id))

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------
    def get_person(self, person_id: str) -> Person | None:
        return next((p for p in self.people if p.id == person_id), None)

    def person_label(self, person_id: str | None) -> str:
        person = self.get_person(person_id) if person_id else None
        return person.label if person else ""

    def add_person(self, department: str, name: str) -> str | None:
        department = department.strip()
        name = name.strip()
        if not department or not name:
            return "Both department and name are required."
        self.people.insert(0, Person(department=department, name=name))
        self._save_people()
        return None

    def remove_person(self, person_id: str) -> bool:
        """Delete a person. Quests already targeting them are left as-is."""
        before = len(self.people)
        self.people = [p for p in self.people if p.id != person_id]
        if len(self.people) == before:
            return False
        self._save_people()
        return True

    # ------------------------------------------------------------------
    # Hands
    # ------------------------------------------------------------------
    def hand_for(self, username: str) -> list[Quest]:
        return [q for q in self.hands.get(username, []) if q.status == "active"]

    def ensure_hand(self, username: str) -> list[Quest]:
        """Regenerate the hand when it does not hold exactly ``hand_size`` quests."""
        hand = self.hands.get(username, [])
        if len(hand) != self.hand_size and self.people:
            self.hands[username] = generate_hand(
                self.people, self.actions, self.hand_size, self.rng
            )
            self._save_hands()
        return self.hand_for(username)

    def pull(self, username: str) -> str | None:
        """Discard the user's hand and draw a fresh one."""
        if not self.people:
            return "No people are registered yet. Ask an admin to add some."
        self.hands[username] = generate_hand(
            self.people, self.actions, self.hand_size, self.rng
        )
        self._save_hands()
        return None

    # ------------------------------------------------------------------
    # Posts
    # ------------------------------------------------------------------
    def submit_post(
        self,
        author: str,
        post_type: str,
        body: str,
        with_whom_person_id: str | None = None,
    ) -> PostOutcome:
        """Append a post, then settle quest completion and mulligan.

        The post is matched against the hand as it was before the post. If it
        is also a lunch mulligan, the whole hand is rerolled afterwards, so
        the matched quest's points are still credited. A hand restored with a
        different size is redrawn before matching.
        """
        body = body.strip()
        if not body:
            return PostOutcome(error="Please write something in the post body.")
        post_cls = POST_TYPES.get(post_type)
        if post_cls is None:
            return PostOutcome(error=f"Unknown post type: {post_type}.")
        with_whom_person_id = with_whom_person_id or None
        if with_whom_person_id and self.get_person(with_whom_person_id) is None:
            return PostOutcome(error="Person not found.")

        post = post_cls(
            author=author,
            body=body,
            with_whom_person_id=with_whom_person_id,
            with_whom_label=self.person_label(with_whom_person_id),
        )
        self.posts.insert(0, post)
        self._save_posts()
        outcome = PostOutcome(post=post)

        hand = self.ensure_hand(author)
        hit = find_completed_quest(post, hand, self.actions, self.completion_words)
        if hit:
            self.add_points(author, hit.points)
            remaining = [q for q in hand if q.id != hit.id]
            remaining.append(generate_quest(self.people, self.actions, self.rng))
            self.hands[author] = remaining
            self._save_hands()
            outcome.completed = hit.model_copy(update={"status": "completed"})
            outcome.points_awarded = hit.points
            log.info("%s completed %s (+%d)", author, hit.id, hit.points)

        if is_mulligan_post(post):
            self.hands[author] = generate_hand(
                self.people, self.actions, self.hand_size, self.rng
            )
            self._save_hands()
            outcome.rerolled = True
            log.info("%s rerolled their hand with a lunch post", author)

        return outcome

    def recent_posts(self, limit: int = 10) -> list[Post]:
        return self.posts[:limit]

    # ------------------------------------------------------------------
    # Points
    # ------------------------------------------------------------------
    def points_for(self, username: str) -> int:
        return self.points.get(username, 0)

    def add_points(self, username: str, delta: int) -> None:
        if delta < 0:
            raise ValueError("points can only increase")
        self.points[username] = self.points_for(username) + delta
        self._save_points()

    def leaderboard(self) -> list[LeaderboardRow]:
        ordered = sorted(self.points.items(), key=lambda kv: (-kv[1], kv[0]))
        return [
            LeaderboardRow(rank=i, user=user, points=pts)
            for i, (user, pts) in enumerate(ordered, start=1)
        ]
