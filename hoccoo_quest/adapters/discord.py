"""Announcer that talks to Discord's HTTP API directly.

Completion announcements can target a channel in a guild the gateway
connection never joined, so they go through :mod:`httpx` with the bot token
instead of through the ``discord.py`` client.
"""

from __future__ import annotations

import logging

import httpx

from ..core.models import Quest
from .base import Announcer

log = logging.getLogger("hoccoo.announce")


class DiscordAnnouncer(Announcer):
    """Announcer that posts messages through the Discord REST API."""

    api_base = "https://discord.com/api/v10"

    def __init__(self, token: str, client: httpx.AsyncClient | None = None) -> None:
        """Store authentication ``token`` and optional HTTP ``client``."""
        self.token = token
        self.client = client or httpx.AsyncClient(timeout=10.0)

    async def send_message(self, channel_id: str, content: str) -> None:
        """Send a message to a channel.

        Parameters
        ----------
        channel_id:
            Identifier of the Discord channel.
        content:
            Message body to send. Mentions are suppressed.

        """
        url = f"{self.api_base}/channels/{channel_id}/messages"
        headers = {"Authorization": f"Bot {self.token}"}
        payload = {"content": content, "allowed_mentions": {"parse": []}}
        response = await self.client.post(url, json=payload, headers=headers)
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying :class:`httpx.AsyncClient`."""
        await self.client.aclose()


def completion_message(user: str, quest: Quest, total: int) -> str:
    return (
        f"🎉 **{user}** completed 「{quest.text}」 "
        f"(+{quest.points}pt, total {total}pt)"
    )


async def announce_completion(
    announcer: Announcer | None,
    channel_id: str,
    user: str,
    quest: Quest,
    total: int,
) -> bool:
    """Best-effort announcement; returns ``False`` when nothing was sent."""
    if announcer is None or not channel_id:
        return False
    try:
        await announcer.send_message(channel_id, completion_message(user, quest, total))
    except httpx.HTTPError:
        log.exception("Failed to announce completion for %s", user)
        return False
    return True
