"""Timed "rolling..." sequence shown before a gacha result is revealed."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence

GACHA_LINES: tuple[str, ...] = ("ガチャ起動…", "候補を生成中…", "マッチング中…", "完成！")
LINE_INTERVAL = 0.35


async def play_reveal(
    show: Callable[[str], Awaitable[None]],
    lines: Sequence[str] = GACHA_LINES,
    total_seconds: float = 1.3,
    interval: float = LINE_INTERVAL,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> None:
    """Show ``lines`` one by one, then wait out the rest of ``total_seconds``.

    Lines that would land after ``total_seconds`` are dropped. Purely
    presentational: the caller commits the result once this returns.
    """
    elapsed = 0.0
    for i, line in enumerate(lines):
        if i and elapsed + interval >= total_seconds:
            break
        if i:
            await sleep(interval)
            elapsed += interval
        await show(line)
    if total_seconds > elapsed:
        await sleep(total_seconds - elapsed)
