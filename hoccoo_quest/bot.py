"""Discord bot hosting the quest commands."""

from __future__ import annotations

from typing import Any

import discord
from discord.ext import commands

from .logging_config import setup_logging


class QuestBot(commands.Bot):
    """Small ``discord.py`` bot exposing Hoccoo Quest as slash commands."""

    def __init__(self, **kwargs: Any) -> None:  # pragma: no cover - trivial
        """Initialize the bot with the minimal intents required."""
        intents = kwargs.pop("intents", None) or discord.Intents.default()
        # Slash commands only; message content intent not needed.
        intents.message_content = False
        super().__init__(
            command_prefix=kwargs.pop("command_prefix", "!"),
            intents=intents,
        )
        self.log = setup_logging()

    async def setup_hook(self) -> None:
        """Sync slash commands and make sure every guild has a quest board."""
        # New slash commands only show up for users once the tree is synced.
        tree = getattr(self, "tree", None)
        if tree is not None:  # pragma: no cover - exercised in integration
            await tree.sync()

        from .commands.utils import ensure_board_channel

        for guild in self.guilds:
            try:
                await ensure_board_channel(guild)
            except discord.HTTPException:
                self.log.exception(
                    "Failed to ensure quest board for guild %s",
                    getattr(guild, "id", "?"),
                )

        await super().setup_hook()

    async def on_ready(self) -> None:  # pragma: no cover - requires discord
        """Log a short confirmation once the bot connected successfully."""
        await self.change_presence(activity=discord.Game(name="Hoccoo Quest"))
        self.log.info(
            "Logged in as %s (%s)",
            self.user,
            self.user.id if self.user else "?",
        )


__all__ = ["QuestBot"]
