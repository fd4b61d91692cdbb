"""Base interface for pushing announcements to a chat platform."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Announcer(ABC):
    """Abstract sink for quest-completion announcements."""

    @abstractmethod
    async def send_message(self, channel_id: str, content: str) -> None:
        """Send ``content`` to the specified ``channel_id``."""

    async def close(self) -> None:
        """Release any resources held by the announcer."""
