"""Tests for the single-timer debouncer."""

import asyncio

from app.client.debounce import Debouncer

DELAY = 0.02


async def test_fires_after_delay():
    fired = []
    debouncer = Debouncer(DELAY)
    debouncer.replace(fired.append, "a")
    assert debouncer.pending
    assert fired == []
    await asyncio.sleep(DELAY * 4)
    assert fired == ["a"]
    assert not debouncer.pending


async def test_replace_supersedes_previous_timer():
    fired = []
    debouncer = Debouncer(DELAY)
    for value in ["j", "ja", "jav"]:
        debouncer.replace(fired.append, value)
    await asyncio.sleep(DELAY * 4)
    assert fired == ["jav"]


async def test_cancel():
    fired = []
    debouncer = Debouncer(DELAY)
    debouncer.replace(fired.append, "a")
    debouncer.cancel()
    assert not debouncer.pending
    await asyncio.sleep(DELAY * 4)
    assert fired == []
