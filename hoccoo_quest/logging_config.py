import logging
import os
import sys

def setup_logging(level: int | str | None = None) -> logging.Logger:
    """Configure the ``hoccoo`` logger once and return it.

    ``level`` may be a number or a name such as ``"DEBUG"``; when omitted the
    ``QUEST_LOG_LEVEL`` environment variable is consulted.
    """
    logger = logging.getLogger("hoccoo")
    if logger.handlers:
        return logger  # already configured
    if level is None:
        level = os.getenv("QUEST_LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if isinstance(level, str):
        level = logging.getLevelName(level)
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)
    handler = logging.StreamHandler(sys.stdout)
    fmt = logging.Formatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    handler.setFormatter(fmt)
    logger.addHandler(handler)
    # discord.py is chatty at INFO; keep it to warnings unless we debug
    discord_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in ("discord", "discord.client", "discord.gateway", "discord.http"):
        logging.getLogger(name).setLevel(discord_level)
    return logger
