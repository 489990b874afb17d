from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from markdown_pane.storage import JsonFileStore, Persistence


class FakeLoop:
    """Records `call_later` timers so tests decide when they fire."""

    def __init__(self) -> None:
        self.timers: list[tuple[float, Callable[..., object], tuple[object, ...]]] = []

    def call_later(self, delay: float, callback: Callable[..., object], *args: object) -> None:
        self.timers.append((delay, callback, args))

    def run_all(self) -> int:
        timers, self.timers = self.timers, []
        for _, callback, args in timers:
            callback(*args)
        return len(timers)


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def fake_loop() -> FakeLoop:
    return FakeLoop()


@pytest.fixture()
def store(tmp_path: Path) -> JsonFileStore:
    return JsonFileStore(tmp_path / "storage.json")


@pytest.fixture()
def persistence(store: JsonFileStore) -> Persistence:
    return Persistence(store)
