import py_compile
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent


def test_bot_and_main_compile() -> None:
    """The Discord shell modules should at least be syntactically valid.

    They are only imported when the bot starts, so compiling them here
    catches syntax errors without a Discord connection.
    """

    for rel in ("bot.py", "main.py", "ui/views.py", "ui/modals.py", "commands/register.py"):
        py_compile.compile(str(ROOT / "hoccoo_quest" / rel), doraise=True)
