from __future__ import annotations
import datetime
from collections.abc import Sequence
import discord
from ..core.models import POST_TYPE_LABELS, Person, Post, RewardItem
from ..core.roller import tier_counts
from ..data.models import LeaderboardRow, PostOutcome
from ..data.store import QuestStore
from .reveal import play_reveal

RARITY_BADGES = {"rare": "🌟 RARE", "uncommon": "✨ UNCOMMON", "common": "・COMMON"}

def format_timestamp(iso: str) -> str:
    try:
        return datetime.datetime.fromisoformat(iso).strftime("%Y/%m/%d %H:%M")
    except ValueError:
        return iso

def hand_embed(store: QuestStore, username: str) -> discord.Embed:
    hand = store.hand_for(username)
    e = discord.Embed(title=f"ガチャ（1回で{store.hand_size}枚）", color=discord.Color.gold())
    if not hand:
        e.description = "まだクエストがありません。`/gacha` でガチャを引いてください。"
    for i, q in enumerate(hand, start=1):
        e.add_field(
            name=f"{i}. {q.action_label or q.action_key}  +{q.points}pt",
            value=f"{q.text}\n対象：{q.target_label or '?'}",
            inline=False,
        )
    e.set_footer(text=f"{username} • 合計ポイント：{store.points_for(username)}")
    return e

def board_embed(posts: Sequence[Post]) -> discord.Embed:
    e = discord.Embed(title="社内掲示板", color=discord.Color.blurple())
    if not posts:
        e.description = "まだ投稿がありません。"
    for p in posts:
        head = f"{p.author} · {POST_TYPE_LABELS.get(p.type, p.type)}"
        if p.with_whom_label:
            head += f" · with {p.with_whom_label}"
        body = p.body if len(p.body) <= 900 else p.body[:900] + "…"
        e.add_field(name=head, value=f"{body}\n{format_timestamp(p.created_at)}", inline=False)
    return e

def leaderboard_embed(rows: Sequence[LeaderboardRow], current_user: str | None = None) -> discord.Embed:
    e = discord.Embed(title="ポイントランキング", color=discord.Color.green())
    if not rows:
        e.description = "まだポイントがありません。"
        return e
    lines = []
    for r in rows[:25]:
        marker = " ← you" if r.user == current_user else ""
        lines.append(f"**{r.rank}.** {r.user} — {r.points} pt{marker}")
    e.description = "\n".join(lines)
    return e

def people_embed(people: Sequence[Person]) -> discord.Embed:
    e = discord.Embed(title="人物リスト", color=discord.Color.light_grey())
    if not people:
        e.description = "登録されている人物がいません。"
        return e
    e.description = "\n".join(f"`{p.id}` {p.label}" for p in people[:50])
    return e

def rewards_embed(items: Sequence[RewardItem], hand_size: int) -> discord.Embed:
    e = discord.Embed(title="報酬カード", color=discord.Color.purple())
    for item in items:
        e.add_field(
            name=f"{RARITY_BADGES.get(item.rarity, item.rarity)} {item.name}",
            value=item.description or "-",
            inline=False,
        )
    missed = hand_size - len(items)
    counts = tier_counts(items)
    summary = ", ".join(f"{tier}×{n}" for tier, n in sorted(counts.items()))
    e.set_footer(text=summary + (f" (空振り {missed})" if missed else ""))
    return e

def outcome_message(outcome: PostOutcome, total: int) -> str:
    lines = ["投稿しました。"]
    if outcome.completed:
        lines.append(
            f"🎉 クエスト達成！「{outcome.completed.text}」 +{outcome.points_awarded}pt（合計 {total}pt）"
        )
    if outcome.rerolled:
        lines.append("🍱 ランチ投稿のため、クエストを全部引き直しました。")
    return "\n".join(lines)

class HandView(discord.ui.View):
    """Buttons under a user's hand: reroll it or refresh the display."""

    def __init__(self, store: QuestStore, username: str, reveal_seconds: float = 1.3) -> None:
        super().__init__(timeout=300)
        self.store = store
        self.username = username
        self.reveal_seconds = reveal_seconds
        self.rolling = False

    @discord.ui.button(label="ガチャを引く（全部引き直し）", style=discord.ButtonStyle.primary)
    async def pull(self, interaction: discord.Interaction, button: discord.ui.Button) -> None:
        if self.rolling:
            await interaction.response.send_message("ガチャ演出中です。", ephemeral=True)
            return
        self.rolling = True
        try:
            await interaction.response.edit_message(content="ガチャ準備中…", embed=None, view=None)

            async def show(line: str) -> None:
                await interaction.edit_original_response(content=line)

            await play_reveal(show, total_seconds=self.reveal_seconds)
            err = self.store.pull(self.username)
            if err:
                await interaction.edit_original_response(content=err)
                return
            await interaction.edit_original_response(
                content=None, embed=hand_embed(self.store, self.username), view=self
            )
        finally:
            self.rolling = False

    @discord.ui.button(label="更新", style=discord.ButtonStyle.secondary)
    async def refresh(self, interaction: discord.Interaction, button: discord.ui.Button) -> None:
        self.store.ensure_hand(self.username)
        await interaction.response.edit_message(embed=hand_embed(self.store, self.username), view=self)
