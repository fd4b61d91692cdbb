import logging

from hoccoo_quest.config import load_settings
from hoccoo_quest.core.matcher import GENERIC_COMPLETION_WORDS
from hoccoo_quest.logging_config import setup_logging


def test_load_settings(monkeypatch):
    for name in ("QUEST_DATA_PATH", "QUEST_PASSWORD", "QUEST_HAND_SIZE",
                 "QUEST_COMPLETION_WORDS", "QUEST_REVEAL_SECONDS", "QUEST_ANNOUNCE_CHANNEL_ID"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "abc123")
    s = load_settings()
    assert s.token == "abc123"
    assert s.data_path == "hoccoo_data.json"
    assert s.password == "Suwarika"
    assert s.hand_size == 5
    assert s.completion_words == GENERIC_COMPLETION_WORDS
    assert s.reveal_seconds == 1.3
    assert s.announce_channel_id == ""

    # empty token environment
    monkeypatch.setenv("DISCORD_BOT_TOKEN", "")
    s2 = load_settings()
    assert s2.token == ""


def test_settings_overrides(monkeypatch):
    monkeypatch.setenv("QUEST_HAND_SIZE", "3")
    monkeypatch.setenv("QUEST_COMPLETION_WORDS", "done, finished ,")
    monkeypatch.setenv("QUEST_REVEAL_SECONDS", "0")
    monkeypatch.setenv("QUEST_PASSWORD", "hunter2")
    s = load_settings()
    assert s.hand_size == 3
    assert s.completion_words == ("done", "finished")
    assert s.reveal_seconds == 0.0
    assert s.password == "hunter2"


def test_invalid_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("QUEST_HAND_SIZE", "five")
    monkeypatch.setenv("QUEST_REVEAL_SECONDS", "slow")
    s = load_settings()
    assert s.hand_size == 5
    assert s.reveal_seconds == 1.3

    monkeypatch.setenv("QUEST_HAND_SIZE", "0")
    assert load_settings().hand_size == 5


def test_setup_logging_idempotent():
    logger1 = setup_logging(logging.DEBUG)
    logger2 = setup_logging("WARNING")
    assert logger1 is logger2
    assert logger1.name == "hoccoo"
    assert logger1.handlers  # at least one handler installed
