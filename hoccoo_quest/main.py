from __future__ import annotations

import asyncio

from .adapters.discord import DiscordAnnouncer
from .bot import QuestBot
from .commands.register import register_commands
from .config import load_settings
from .core.catalog import DEFAULT_ACTIONS
from .core.matcher import QuestConfigError, validate_catalog
from .core.storage import JSONFileStore
from .data.store import QuestStore
from .logging_config import setup_logging


def main() -> int:
    log = setup_logging()
    settings = load_settings()
    if not settings.token:
        log.error(
            "DISCORD_BOT_TOKEN is not set. "
            "Export it in your environment before running."
        )
        return 2
    store = QuestStore(
        JSONFileStore(settings.data_path),
        actions=DEFAULT_ACTIONS,
        hand_size=settings.hand_size,
        password=settings.password,
        completion_words=settings.completion_words,
    )
    try:
        validate_catalog(store.people, store.actions)
    except QuestConfigError as exc:
        log.error("Cannot start: %s", exc)
        return 2

    announcer = DiscordAnnouncer(settings.token) if settings.announce_channel_id else None
    bot = QuestBot()
    register_commands(bot, store, settings, announcer)

    async def runner():
        try:
            async with bot:
                await bot.start(settings.token)
        except KeyboardInterrupt:
            log.info("Shutting down...")
        finally:
            if announcer is not None:
                await announcer.close()
        return 0

    return asyncio.run(runner())


if __name__ == "__main__":
    raise SystemExit(main())
