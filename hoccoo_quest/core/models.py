"""Data models for Hoccoo Quest's core entities.

The models are implemented using :mod:`pydantic` so that they provide
runtime validation and convenient serialisation to and from the JSON blobs
kept by the persistence layer.
"""

from __future__ import annotations

import datetime
import uuid
from datetime import UTC
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


def new_id(prefix: str) -> str:
    """Return a short random identifier such as ``q_1f3a9c0b2d4e``."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def now_iso() -> str:
    return datetime.datetime.now(tz=UTC).isoformat()


class Person(BaseModel):
    """Someone a quest can target.

    Attributes
    ----------
    id:
        Identity of the person. Quests and posts refer to it.
    department:
        Display label for the person's department.
    name:
        Display name.

    """

    id: str = Field(default_factory=lambda: new_id("p"))
    department: str
    name: str

    @property
    def label(self) -> str:
        return f"{self.department} {self.name}"


class ActionTemplate(BaseModel):
    """Static catalog entry describing one kind of quest action."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    base_points: int = Field(ge=0)
    keywords: tuple[str, ...]
    text_templates: tuple[str, ...]


class Quest(BaseModel):
    """A generated micro-task worth ``points`` once a matching post arrives.

    The target's department/name and the action label are copied in at
    creation time so the quest still renders after the person is removed.
    """

    id: str = Field(default_factory=lambda: new_id("q"))
    created_at: str = Field(default_factory=now_iso)
    target_person_id: str
    target_department: str = ""
    target_name: str = ""
    action_key: str
    action_label: str = ""
    points: int
    text: str
    status: Literal["active", "completed"] = "active"

    @property
    def target_label(self) -> str:
        return f"{self.target_department} {self.target_name}".strip()


class RewardItem(BaseModel):
    """A reward card tagged with its rarity tier."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    rarity: str
    description: str = ""


# ----------------------------------------------------------------------
# Bulletin board posts
# ----------------------------------------------------------------------
class _PostBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: new_id("post"))
    created_at: str = Field(default_factory=now_iso)
    author: str
    body: str
    with_whom_person_id: str | None = None
    with_whom_label: str = ""


class ChatPost(_PostBase):
    type: Literal["chat"] = "chat"


class CompletePost(_PostBase):
    """Explicit completion report; generic completion words also count."""

    type: Literal["complete"] = "complete"


class LunchPost(_PostBase):
    """Lunch with a companion rerolls the author's whole hand."""

    type: Literal["lunch"] = "lunch"


class SharePost(_PostBase):
    type: Literal["share"] = "share"


Post = Annotated[
    Union[ChatPost, CompletePost, LunchPost, SharePost],
    Field(discriminator="type"),
]
PostAdapter: TypeAdapter[Post] = TypeAdapter(Post)

POST_TYPES: dict[str, type[_PostBase]] = {
    "chat": ChatPost,
    "complete": CompletePost,
    "lunch": LunchPost,
    "share": SharePost,
}

POST_TYPE_LABELS: dict[str, str] = {
    "chat": "雑談",
    "complete": "完了報告",
    "lunch": "ランチ",
    "share": "共有",
}
