"""Registration of slash commands for the bot."""

from __future__ import annotations

import discord
from discord.ext import commands

from ..adapters.base import Announcer
from ..config import Settings
from ..core.catalog import DEFAULT_RARITY_WEIGHTS, DEFAULT_REWARDS
from ..core.roller import roll_hand
from ..data.store import QuestStore
from ..ui.modals import PostModal
from ..ui.reveal import play_reveal
from ..ui.views import (
    HandView,
    board_embed,
    hand_embed,
    leaderboard_embed,
    people_embed,
    rewards_embed,
)
from .utils import finish_post

POST_TYPE_CHOICES = [
    ("雑談", "chat"),
    ("完了報告（クエスト達成）", "complete"),
    ("ランチ（引き直し）", "lunch"),
    ("共有", "share"),
]


def person_choices(
    store: QuestStore, current: str
) -> list[discord.app_commands.Choice[str]]:
    """Roster entries whose label or id contains ``current``, at most 25."""
    current_lower = current.lower()
    return [
        discord.app_commands.Choice(name=p.label, value=p.id)
        for p in store.people
        if current_lower in p.label.lower() or current_lower in p.id.lower()
    ][:25]


def register_commands(
    bot: commands.Bot,
    store: QuestStore,
    settings: Settings,
    announcer: Announcer | None = None,
) -> None:
    """Register bot commands with optional compatibility shims."""
    tree = bot.tree
    async def require_user(interaction: discord.Interaction) -> str | None:
        username = store.current_user(str(interaction.user.id))
        if not username:
            await interaction.response.send_message(
                "Please `/login` first.", ephemeral=True
            )
        return username

    async def require_manager(interaction: discord.Interaction) -> bool:
        perms = getattr(interaction.user, "guild_permissions", None)
        if perms is None or not perms.manage_guild:
            await interaction.response.send_message(
                "Only a server manager can edit the roster.", ephemeral=True
            )
            return False
        return True

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------
    @tree.command(name="login", description="Log in to Hoccoo Quest")
    @discord.app_commands.describe(
        username="Name shown on the leaderboard",
        password="Shared password",
    )
    async def login(
        interaction: discord.Interaction, username: str, password: str
    ) -> None:
        err = store.login(str(interaction.user.id), username, password)
        if err:
            await interaction.response.send_message(err, ephemeral=True)
            return
        name = store.current_user(str(interaction.user.id)) or username
        await interaction.response.send_message(
            f"Logged in as `{name}`.",
            embed=hand_embed(store, name),
            ephemeral=True,
        )

    @tree.command(name="logout", description="Log out of Hoccoo Quest")
    async def logout(interaction: discord.Interaction) -> None:
        if store.logout(str(interaction.user.id)):
            await interaction.response.send_message("Logged out.", ephemeral=True)
        else:
            await interaction.response.send_message(
                "You are not logged in.", ephemeral=True
            )

    # ------------------------------------------------------------------
    # Gacha
    # ------------------------------------------------------------------
    @tree.command(name="gacha", description="Draw a fresh hand of quests")
    async def gacha(interaction: discord.Interaction) -> None:
        username = await require_user(interaction)
        if not username:
            return
        await interaction.response.send_message("ガチャ準備中…", ephemeral=True)

        async def show(line: str) -> None:
            await interaction.edit_original_response(content=line)

        await play_reveal(show, total_seconds=settings.reveal_seconds)
        err = store.pull(username)
        if err:
            await interaction.edit_original_response(content=err)
            return
        await interaction.edit_original_response(
            content=None,
            embed=hand_embed(store, username),
            view=HandView(store, username, settings.reveal_seconds),
        )

    @tree.command(name="hand", description="Show your current quests")
    async def hand(interaction: discord.Interaction) -> None:
        username = await require_user(interaction)
        if not username:
            return
        store.ensure_hand(username)
        await interaction.response.send_message(
            embed=hand_embed(store, username),
            view=HandView(store, username, settings.reveal_seconds),
            ephemeral=True,
        )

    @tree.command(name="cards", description="Draw reward cards")
    async def cards(interaction: discord.Interaction) -> None:
        username = await require_user(interaction)
        if not username:
            return
        await interaction.response.send_message("ガチャ準備中…", ephemeral=True)

        async def show(line: str) -> None:
            await interaction.edit_original_response(content=line)

        await play_reveal(show, total_seconds=settings.reveal_seconds)
        items = roll_hand(
            DEFAULT_REWARDS, DEFAULT_RARITY_WEIGHTS, settings.hand_size, store.rng
        )
        await interaction.edit_original_response(
            content=None, embed=rewards_embed(items, settings.hand_size)
        )

    # ------------------------------------------------------------------
    # Bulletin board
    # ------------------------------------------------------------------
    @tree.command(name="post", description="Post to the bulletin board")
    @discord.app_commands.describe(
        post_type="Kind of post",
        with_whom="Who you did it with (needed for quest completion)",
        body="What happened; leave empty to open an editor",
    )
    @discord.app_commands.choices(
        post_type=[
            discord.app_commands.Choice(name=label, value=value)
            for label, value in POST_TYPE_CHOICES
        ]
    )
    async def post(
        interaction: discord.Interaction,
        post_type: discord.app_commands.Choice[str],
        with_whom: str | None = None,
        body: str | None = None,
    ) -> None:
        username = await require_user(interaction)
        if not username:
            return
        if not body:
            await interaction.response.send_modal(
                PostModal(
                    store,
                    username,
                    post_type.value,
                    with_whom,
                    announcer,
                    settings.announce_channel_id,
                )
            )
            return
        outcome = store.submit_post(username, post_type.value, body, with_whom)
        await finish_post(
            interaction,
            store,
            username,
            outcome,
            announcer,
            settings.announce_channel_id,
        )

    if hasattr(post, "autocomplete"):
        @post.autocomplete("with_whom")
        async def post_with_whom_autocomplete(
            interaction: discord.Interaction, current: str
        ) -> list[discord.app_commands.Choice[str]]:
            return person_choices(store, current)

    @tree.command(name="board", description="Show recent bulletin board posts")
    @discord.app_commands.describe(limit="How many posts to show (max 20)")
    async def board(interaction: discord.Interaction, limit: int = 10) -> None:
        limit = max(1, min(limit, 20))
        await interaction.response.send_message(
            embed=board_embed(store.recent_posts(limit)), ephemeral=True
        )

    @tree.command(name="rank", description="Show the points leaderboard")
    async def rank(interaction: discord.Interaction) -> None:
        me = store.current_user(str(interaction.user.id))
        await interaction.response.send_message(
            embed=leaderboard_embed(store.leaderboard(), me), ephemeral=True
        )

    # ------------------------------------------------------------------
    # Roster administration
    # ------------------------------------------------------------------
    @tree.command(name="people", description="List people quests can target")
    async def people(interaction: discord.Interaction) -> None:
        await interaction.response.send_message(
            embed=people_embed(store.people), ephemeral=True
        )

    @tree.command(name="people_add", description="Add a person to the roster")
    @discord.app_commands.describe(department="Department", name="Name")
    async def people_add(
        interaction: discord.Interaction, department: str, name: str
    ) -> None:
        if not await require_manager(interaction):
            return
        err = store.add_person(department, name)
        if err:
            await interaction.response.send_message(err, ephemeral=True)
            return
        await interaction.response.send_message(
            f"Added {department.strip()} {name.strip()}.", ephemeral=True
        )

    @tree.command(name="people_remove", description="Remove a person from the roster")
    @discord.app_commands.describe(person_id="Person to remove")
    async def people_remove(interaction: discord.Interaction, person_id: str) -> None:
        if not await require_manager(interaction):
            return
        label = store.person_label(person_id)
        if not store.remove_person(person_id):
            await interaction.response.send_message(
                "Person not found.", ephemeral=True
            )
            return
        await interaction.response.send_message(f"Removed {label}.", ephemeral=True)

    if hasattr(people_remove, "autocomplete"):
        @people_remove.autocomplete("person_id")
        async def people_remove_person_id_autocomplete(
            interaction: discord.Interaction, current: str
        ) -> list[discord.app_commands.Choice[str]]:
            return person_choices(store, current)
