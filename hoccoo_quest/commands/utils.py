from __future__ import annotations

import logging

import discord

from ..adapters.base import Announcer
from ..adapters.discord import announce_completion
from ..data.models import PostOutcome
from ..data.store import QuestStore
from ..ui.views import board_embed, outcome_message

BOARD_CHANNEL = "quest-board"

log = logging.getLogger("hoccoo.commands")


async def ensure_board_channel(guild: discord.Guild) -> discord.TextChannel:
    """Return the ``#quest-board`` channel of ``guild``, creating it if needed."""
    board = discord.utils.get(guild.text_channels, name=BOARD_CHANNEL)
    if board is None:
        board = await guild.create_text_channel(BOARD_CHANNEL)
    return board


async def finish_post(
    interaction: discord.Interaction,
    store: QuestStore,
    username: str,
    outcome: PostOutcome,
    announcer: Announcer | None = None,
    announce_channel_id: str = "",
) -> None:
    """Reply to the poster, mirror the post to the board and announce a completion."""
    if outcome.error or outcome.post is None:
        await interaction.response.send_message(outcome.error or "Post failed.", ephemeral=True)
        return
    total = store.points_for(username)
    await interaction.response.send_message(outcome_message(outcome, total), ephemeral=True)

    if interaction.guild is not None:
        try:
            board = await ensure_board_channel(interaction.guild)
            await board.send(embed=board_embed([outcome.post]))
        except discord.HTTPException:
            log.warning("Could not mirror post %s to #%s", outcome.post.id, BOARD_CHANNEL)

    if outcome.completed:
        await announce_completion(
            announcer, announce_channel_id, username, outcome.completed, total
        )
