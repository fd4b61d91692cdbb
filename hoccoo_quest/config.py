import logging
import os
from dataclasses import dataclass

from .core.matcher import GENERIC_COMPLETION_WORDS

log = logging.getLogger("hoccoo.config")

@dataclass(frozen=True)
class Settings:
    token: str
    data_path: str = "hoccoo_data.json"
    password: str = "Suwarika"
    hand_size: int = 5
    completion_words: tuple[str, ...] = GENERIC_COMPLETION_WORDS
    # Duration of the "rolling..." reveal shown before a gacha result
    reveal_seconds: float = 1.3
    # Channel that receives quest-completion announcements; empty disables them
    announce_channel_id: str = ""

def _env_number(name: str, default, cast):
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        log.warning("Ignoring invalid %s=%r; using %r", name, raw, default)
        return default

def load_settings() -> Settings:
    token = os.getenv("DISCORD_BOT_TOKEN", "").strip()
    words = tuple(
        w.strip() for w in os.getenv("QUEST_COMPLETION_WORDS", "").split(",") if w.strip()
    )
    hand_size = _env_number("QUEST_HAND_SIZE", 5, int)
    if hand_size < 1:
        log.warning("QUEST_HAND_SIZE must be positive; using 5")
        hand_size = 5
    return Settings(
        token=token or "",
        data_path=os.getenv("QUEST_DATA_PATH", "").strip() or "hoccoo_data.json",
        password=os.getenv("QUEST_PASSWORD", "") or "Suwarika",
        hand_size=hand_size,
        completion_words=words or GENERIC_COMPLETION_WORDS,
        reveal_seconds=_env_number("QUEST_REVEAL_SECONDS", 1.3, float),
        announce_channel_id=os.getenv("QUEST_ANNOUNCE_CHANNEL_ID", "").strip(),
    )
