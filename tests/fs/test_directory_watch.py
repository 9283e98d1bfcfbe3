"""Tests for Directory.watch using polling observers."""

import asyncio
from pathlib import Path

import pytest

from superfs.fs.directory import Directory
from superfs.fs.entry import DirectoryEntry


async def _wait_for(predicate, timeout: float = 5.0) -> bool:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while loop.time() < deadline:
        if predicate():
            return True
        await asyncio.sleep(0.05)
    return predicate()


class TestDirectoryWatch:
    """Tests for watch setup and delivery."""

    @pytest.mark.asyncio
    async def test_watches_root_and_every_subdirectory(self, tree: Path) -> None:
        session = await Directory(tree).watch(lambda entry: None, use_polling=True, poll_interval=0.1)
        try:
            assert [e.path for e in session.entries] == [
                tree,
                tree / "empty",
                tree / "sub",
                tree / "sub" / "deep",
            ]
            assert all(isinstance(e, DirectoryEntry) for e in session)
            assert session.is_watching
        finally:
            session.stop()

        assert not session.is_watching

    @pytest.mark.asyncio
    async def test_ignore_skips_directories_by_full_path(self, tree: Path) -> None:
        session = await Directory(tree).watch(
            {"ignore": "*/sub*", "use_polling": True, "poll_interval": 0.1},
            lambda entry: None,
        )
        try:
            assert [e.path for e in session.entries] == [tree, tree / "empty"]
        finally:
            session.stop()

    @pytest.mark.asyncio
    async def test_change_is_delivered_once_per_quiet_period(self, tree: Path) -> None:
        received = []

        async with await Directory(tree).watch(
            received.append,
            quiet_period=30.0,
            use_polling=True,
            poll_interval=0.1,
        ):
            (tree / "new.txt").write_text("x")
            (tree / "a.txt").write_text("changed")
            assert await _wait_for(lambda: len(received) >= 1)
            # Let further polls report the same burst
            await asyncio.sleep(0.5)

        root_events = [e for e in received if e.path == tree]
        assert len(root_events) == 1
        assert root_events[0].change_mode in {"created", "modified"}
        assert root_events[0].changed_file in {"new.txt", "a.txt", "root"}

    @pytest.mark.asyncio
    async def test_coroutine_callback(self, tree: Path) -> None:
        received = []
        deep = tree / "sub" / "deep"

        async def on_change(entry):
            received.append(entry)

        session = await Directory(tree / "sub").watch(on_change, use_polling=True, poll_interval=0.1)
        try:
            (tree / "sub" / "deep" / "e.txt").write_text("e")
            assert await _wait_for(lambda: any(e.path == deep for e in received))
        finally:
            session.stop()

        # sub also sees its child directory change
        assert {e.path for e in received} <= {tree / "sub", deep}

    @pytest.mark.asyncio
    async def test_callback_required(self, tree: Path) -> None:
        with pytest.raises(TypeError):
            await Directory(tree).watch({"use_polling": True})

    @pytest.mark.asyncio
    async def test_quiet_period_defaults_to_config(self, tree: Path, default_config) -> None:
        default_config.watch.quiet_period = 2.5
        default_config.watch.use_polling = True

        session = await Directory(tree).watch(lambda entry: None)
        try:
            assert session.channel.throttle.quiet_period == 2.5
            assert session.use_polling is True
        finally:
            session.stop()
