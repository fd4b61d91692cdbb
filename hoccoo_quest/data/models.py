from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.models import Post, Quest


@dataclass
class PostOutcome:
    post: Optional[Post] = None
    completed: Optional[Quest] = None   # quest credited by this post
    points_awarded: int = 0
    rerolled: bool = False              # lunch mulligan replaced the whole hand
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class LeaderboardRow:
    rank: int
    user: str
    points: int
