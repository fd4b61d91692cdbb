from __future__ import annotations
import discord
from typing import Optional
from ..adapters.base import Announcer
from ..data.store import QuestStore

class PostModal(discord.ui.Modal, title="掲示板に投稿"):
    def __init__(
        self,
        store: QuestStore,
        username: str,
        post_type: str,
        with_whom_person_id: Optional[str] = None,
        announcer: Optional[Announcer] = None,
        announce_channel_id: str = "",
    ) -> None:
        super().__init__()
        self.store = store
        self.username = username
        self.post_type = post_type
        self.with_whom_person_id = with_whom_person_id
        self.announcer = announcer
        self.announce_channel_id = announce_channel_id
        self.body_input = discord.ui.TextInput(
            label="本文",
            style=discord.TextStyle.long,
            placeholder="例）自販機でジュース買いました！/ ランチ行きました！/ 10分雑談できた など",
            required=True,
            max_length=2000,
        )
        self.add_item(self.body_input)

    async def on_submit(self, interaction: discord.Interaction) -> None:
        from ..commands.utils import finish_post

        outcome = self.store.submit_post(
            self.username, self.post_type, self.body_input.value, self.with_whom_person_id
        )
        await finish_post(
            interaction,
            self.store,
            self.username,
            outcome,
            self.announcer,
            self.announce_channel_id,
        )
