"""Tests for the slash command handlers using fake interactions."""

import asyncio
import random
import types

import discord

from hoccoo_quest.adapters.base import Announcer
from hoccoo_quest.commands import register
from hoccoo_quest.config import Settings
from hoccoo_quest.core.models import ActionTemplate, Quest
from hoccoo_quest.core.storage import JSONFileStore
from hoccoo_quest.data.store import QuestStore
from hoccoo_quest.ui.modals import PostModal
from hoccoo_quest.ui.views import HandView

COFFEE = ActionTemplate(
    key="coffee", label="Coffee", base_points=8, keywords=("coffee",),
    text_templates=("Coffee with {name}",),
)


class DummyTree:
    def command(self, *args, **kwargs):
        def deco(func):
            setattr(self, func.__name__, func)
            return func
        return deco


class DummyBot:
    def __init__(self):
        self.tree = DummyTree()


class Response:
    def __init__(self):
        self.messages = []
        self.modal = None

    async def send_message(self, content=None, **kwargs):
        self.messages.append((content, kwargs))

    async def send_modal(self, modal):
        self.modal = modal


class Interaction:
    def __init__(self, user_id=1, manage_guild=False):
        self.user = types.SimpleNamespace(
            id=user_id,
            guild_permissions=types.SimpleNamespace(manage_guild=manage_guild),
        )
        self.guild = None
        self.response = Response()
        self.edits = []

    async def edit_original_response(self, **kwargs):
        self.edits.append(kwargs)


class RecordingAnnouncer(Announcer):
    def __init__(self):
        self.sent = []

    async def send_message(self, channel_id, content):
        self.sent.append((channel_id, content))


def setup(tmp_path, announcer=None):
    store = QuestStore(
        JSONFileStore(tmp_path / "data.json"), actions=[COFFEE], rng=random.Random(3)
    )
    settings = Settings(token="", reveal_seconds=0.0, announce_channel_id="777")
    bot = DummyBot()
    register.register_commands(bot, store, settings, announcer)
    return bot.tree, store


def choice(value):
    return discord.app_commands.Choice(name=value, value=value)


def test_commands_require_login(tmp_path):
    tree, store = setup(tmp_path)
    inter = Interaction()
    asyncio.run(tree.gacha(inter))
    assert inter.response.messages[0][0] == "Please `/login` first."
    assert store.hands == {}


def test_login_then_hand(tmp_path):
    tree, store = setup(tmp_path)

    bad = Interaction()
    asyncio.run(tree.login(bad, "sato", "nope"))
    assert bad.response.messages == [("Wrong password.", {"ephemeral": True})]

    inter = Interaction()
    asyncio.run(tree.login(inter, "sato", "Suwarika"))
    content, kwargs = inter.response.messages[0]
    assert content == "Logged in as `sato`."
    assert isinstance(kwargs["embed"], discord.Embed)
    assert len(kwargs["embed"].fields) == 5

    hand = Interaction()
    asyncio.run(tree.hand(hand))
    assert isinstance(hand.response.messages[0][1]["view"], HandView)


def test_gacha_reveals_then_rerolls(tmp_path):
    tree, store = setup(tmp_path)
    asyncio.run(tree.login(Interaction(), "sato", "Suwarika"))
    before = {q.id for q in store.hand_for("sato")}

    inter = Interaction()
    asyncio.run(tree.gacha(inter))

    assert inter.response.messages[0][0] == "ガチャ準備中…"
    assert inter.edits[0] == {"content": "ガチャ起動…"}
    final = inter.edits[-1]
    assert final["content"] is None
    assert isinstance(final["embed"], discord.Embed)
    assert before.isdisjoint({q.id for q in store.hand_for("sato")})


def test_post_completes_quest_and_announces(tmp_path):
    announcer = RecordingAnnouncer()
    tree, store = setup(tmp_path, announcer)
    asyncio.run(tree.login(Interaction(), "sato", "Suwarika"))
    store.hands["sato"] = [
        Quest(id=f"q{i}", target_person_id="p_dev_1", action_key="coffee", points=8, text=f"q{i}")
        for i in range(5)
    ]

    inter = Interaction()
    asyncio.run(tree.post(inter, choice("chat"), "p_dev_1", "coffee break"))

    content = inter.response.messages[0][0]
    assert "+8pt" in content
    assert store.points_for("sato") == 8
    assert len(store.hand_for("sato")) == 5
    assert announcer.sent and announcer.sent[0][0] == "777"


def test_post_without_body_opens_modal(tmp_path):
    tree, store = setup(tmp_path)
    asyncio.run(tree.login(Interaction(), "sato", "Suwarika"))

    async def scenario():
        inter = Interaction()
        await tree.post(inter, choice("complete"), "p_hr_1", None)
        modal = inter.response.modal
        assert isinstance(modal, PostModal)
        assert modal.post_type == "complete"

        modal.body_input = types.SimpleNamespace(value="クリア！")
        submit = Interaction()
        await modal.on_submit(submit)
        return submit

    submit = asyncio.run(scenario())
    assert submit.response.messages[0][0].startswith("投稿しました。")
    assert store.posts[0].body == "クリア！"
    assert store.posts[0].with_whom_person_id == "p_hr_1"


def test_post_errors_are_reported(tmp_path):
    tree, store = setup(tmp_path)
    asyncio.run(tree.login(Interaction(), "sato", "Suwarika"))
    inter = Interaction()
    asyncio.run(tree.post(inter, choice("chat"), "p_ghost", "hello"))
    assert inter.response.messages == [("Person not found.", {"ephemeral": True})]


def test_roster_commands_need_manager(tmp_path):
    tree, store = setup(tmp_path)

    denied = Interaction(manage_guild=False)
    asyncio.run(tree.people_add(denied, "品質", "山本"))
    assert denied.response.messages[0][0] == "Only a server manager can edit the roster."
    assert all(p.name != "山本" for p in store.people)

    ok = Interaction(manage_guild=True)
    asyncio.run(tree.people_add(ok, "品質", "山本"))
    assert ok.response.messages[0][0] == "Added 品質 山本."
    new_id = store.people[0].id

    rm = Interaction(manage_guild=True)
    asyncio.run(tree.people_remove(rm, new_id))
    assert rm.response.messages[0][0] == "Removed 品質 山本."

    missing = Interaction(manage_guild=True)
    asyncio.run(tree.people_remove(missing, new_id))
    assert missing.response.messages[0][0] == "Person not found."


def test_rank_board_and_cards(tmp_path):
    tree, store = setup(tmp_path)
    store.add_points("sato", 20)
    asyncio.run(tree.login(Interaction(), "sato", "Suwarika"))

    rank = Interaction()
    asyncio.run(tree.rank(rank))
    assert "sato" in rank.response.messages[0][1]["embed"].description

    board = Interaction()
    asyncio.run(tree.board(board, 2))
    assert len(board.response.messages[0][1]["embed"].fields) == 2

    cards = Interaction()
    asyncio.run(tree.cards(cards))
    assert isinstance(cards.edits[-1]["embed"], discord.Embed)


def test_person_choices_filters_and_caps(tmp_path):
    _, store = setup(tmp_path)
    for i in range(30):
        store.add_person("Ops", f"Member{i}")

    dev = register.person_choices(store, "DEV")
    assert dev and all("dev" in (c.name + c.value).lower() for c in dev)
    assert all(isinstance(c, discord.app_commands.Choice) for c in dev)

    by_label = register.person_choices(store, "member1")
    assert {c.name for c in by_label} == {"Ops Member1"} | {f"Ops Member{i}" for i in range(10, 20)}
    assert all(store.get_person(c.value).label == c.name for c in by_label)

    assert len(register.person_choices(store, "")) == 25
    assert register.person_choices(store, "nobody-here") == []
