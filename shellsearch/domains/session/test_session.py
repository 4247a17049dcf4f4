"""
Tests for the search session protocol.
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from shellsearch.config.errors import (
    ErrorCode,
    LaunchFailedError,
    ResultNotFoundError,
    SourceUnavailableError,
)
from shellsearch.domains.matching import RecentItem

from .contracts import ItemsSource, LaunchClient
from .models import AppInfo, ResultMeta
from .session import SearchSession


class GatedSource:
    """Items source whose fetches complete only when released by the test."""

    def __init__(self) -> None:
        self._fetches: list[tuple[asyncio.Event, dict[str, RecentItem]]] = []
        self._calls = 0

    def prepare(self, items: dict[str, RecentItem]) -> asyncio.Event:
        """Queue the result of the next fetch; it returns once the gate is set."""
        gate = asyncio.Event()
        self._fetches.append((gate, items))
        return gate

    async def find_recent_items(self) -> dict[str, RecentItem]:
        gate, items = self._fetches[self._calls]
        self._calls += 1
        await gate.wait()
        return items


@pytest.fixture
def app() -> AppInfo:
    """The app behind the session."""
    return AppInfo(id="jetbrains-idea.desktop", icon="jetbrains-idea")


@pytest.fixture
def items() -> dict[str, RecentItem]:
    """Two recent items, only one of which contains "foo"."""
    return {
        "a": RecentItem(name="Foo Bar", uri="/home/x/foo"),
        "b": RecentItem(name="Baz", uri="/home/x/baz"),
    }


@pytest.fixture
def mock_source(items: dict[str, RecentItem]) -> AsyncMock:
    """Create a mock items source."""
    mock = AsyncMock()
    mock.find_recent_items.return_value = items
    return mock


@pytest.fixture
def mock_launcher() -> AsyncMock:
    """Create a mock launch client."""
    return AsyncMock()


@pytest.fixture
def session(
    app: AppInfo,
    mock_source: AsyncMock,
    mock_launcher: AsyncMock,
) -> SearchSession[RecentItem]:
    """Create a session with mocked collaborators."""
    return SearchSession(app, mock_source, mock_launcher)


@pytest.fixture
async def cached_session(session: SearchSession[RecentItem]) -> SearchSession[RecentItem]:
    """A session that already completed one initial search."""
    await session.get_initial_result_set(["x"])
    return session


# --- Contract Tests ---


class RecordingLauncher:
    """Launch client remembering what it launched."""

    def __init__(self) -> None:
        self.launched: list[tuple[str, ...]] = []

    async def launch_uri(self, app_id: str, uri: str) -> None:
        self.launched.append((app_id, uri))

    async def launch_app(self, app_id: str) -> None:
        self.launched.append((app_id,))


def test_collaborators_satisfy_contracts() -> None:
    """Test the collaborator protocols are runtime checkable."""
    assert isinstance(GatedSource(), ItemsSource)
    assert isinstance(RecordingLauncher(), LaunchClient)
    assert not isinstance(GatedSource(), LaunchClient)


async def test_session_with_plain_collaborators(
    app: AppInfo,
    items: dict[str, RecentItem],
) -> None:
    """Test a full round trip with non-mock collaborators."""
    source = GatedSource()
    source.prepare(items).set()
    launcher = RecordingLauncher()
    session = SearchSession(app, source, launcher)

    ids = await session.get_initial_result_set(["foo"])
    await session.activate_result(ids[0], ["foo"], 0)
    await session.launch_search(["foo"], 0)

    assert launcher.launched == [(app.id, "/home/x/foo"), (app.id,)]


def test_new_session_is_empty(session: SearchSession[RecentItem]) -> None:
    """Test a fresh session has no result set yet."""
    assert session.generation == 0
    assert session.items == {}
    assert session.get_subsearch_result_set(["a"], ["foo"]) == []
    assert session.get_result_metas(["a"]) == []


# --- Initial Search Tests ---


async def test_initial_search(
    session: SearchSession[RecentItem],
    mock_source: AsyncMock,
) -> None:
    """Test initial search fetches, caches and ranks."""
    assert await session.get_initial_result_set(["foo"]) == ["a"]
    assert await session.get_initial_result_set(["zzz"]) == []

    assert mock_source.find_recent_items.await_count == 2
    assert session.generation == 2
    assert list(session.items) == ["a", "b"]


async def test_initial_search_source_failure_keeps_cache(
    cached_session: SearchSession[RecentItem],
    mock_source: AsyncMock,
    items: dict[str, RecentItem],
) -> None:
    """Test a failing source raises and leaves the previous cache usable."""
    mock_source.find_recent_items.side_effect = OSError("disk on fire")

    with pytest.raises(SourceUnavailableError) as exc_info:
        await cached_session.get_initial_result_set(["foo"])

    assert exc_info.value.code is ErrorCode.SOURCE_UNAVAILABLE
    assert "disk on fire" in exc_info.value.message
    assert cached_session.items == items
    assert cached_session.generation == 1
    assert cached_session.get_subsearch_result_set(["a", "b"], ["foo"]) == ["a"]


async def test_initial_search_failure_on_empty_session(
    session: SearchSession[RecentItem],
    mock_source: AsyncMock,
) -> None:
    """Test a failing first search leaves the session empty but usable."""
    mock_source.find_recent_items.side_effect = RuntimeError("boom")

    with pytest.raises(SourceUnavailableError):
        await session.get_initial_result_set(["foo"])

    assert session.generation == 0
    mock_source.find_recent_items.side_effect = None
    assert await session.get_initial_result_set(["foo"]) == ["a"]


async def test_newer_search_wins_when_completing_first(
    app: AppInfo,
    mock_launcher: AsyncMock,
) -> None:
    """Test a slow stale fetch never replaces a newer installed one."""
    source = GatedSource()
    old = {"old": RecentItem(name="foo old", uri="/old")}
    new = {"new": RecentItem(name="foo new", uri="/new")}
    gate1 = source.prepare(old)
    gate2 = source.prepare(new)
    session = SearchSession(app, source, mock_launcher)

    first = asyncio.create_task(session.get_initial_result_set(["foo"]))
    await asyncio.sleep(0)
    second = asyncio.create_task(session.get_initial_result_set(["foo"]))
    await asyncio.sleep(0)

    gate2.set()
    assert await second == ["new"]
    assert session.items == new

    gate1.set()
    # The stale search answers from the newer installed set.
    assert await first == ["new"]
    assert session.items == new
    assert session.generation == 2


async def test_stale_search_completing_first_is_not_installed(
    app: AppInfo,
    mock_launcher: AsyncMock,
) -> None:
    """Test a superseded fetch ranks its own items without installing them."""
    source = GatedSource()
    old = {"old": RecentItem(name="foo old", uri="/old")}
    new = {"new": RecentItem(name="foo new", uri="/new")}
    gate1 = source.prepare(old)
    gate2 = source.prepare(new)
    session = SearchSession(app, source, mock_launcher)

    first = asyncio.create_task(session.get_initial_result_set(["foo"]))
    await asyncio.sleep(0)
    second = asyncio.create_task(session.get_initial_result_set(["foo"]))
    await asyncio.sleep(0)

    gate1.set()
    assert await first == ["old"]
    assert session.items == {}
    assert session.generation == 0

    gate2.set()
    assert await second == ["new"]
    assert session.items == new
    assert session.generation == 2


async def test_readers_see_old_set_while_fetch_in_flight(
    app: AppInfo,
    items: dict[str, RecentItem],
    mock_launcher: AsyncMock,
) -> None:
    """Test sync calls keep answering from the installed set during a fetch."""
    source = GatedSource()
    source.prepare(items).set()
    gate = source.prepare({"c": RecentItem(name="Qux", uri="/home/x/qux")})
    session = SearchSession(app, source, mock_launcher)
    await session.get_initial_result_set(["foo"])

    pending = asyncio.create_task(session.get_initial_result_set(["qux"]))
    await asyncio.sleep(0)

    assert session.get_subsearch_result_set(["a", "b", "c"], ["baz"]) == ["b"]
    assert [meta.id for meta in session.get_result_metas(["a", "c"])] == ["a"]

    gate.set()
    assert await pending == ["c"]
    assert [meta.id for meta in session.get_result_metas(["a", "c"])] == ["c"]


# --- Subsearch Tests ---


async def test_subsearch_filters_previous_results(
    cached_session: SearchSession[RecentItem],
    mock_source: AsyncMock,
) -> None:
    """Test refinement re-ranks only previous ids without fetching."""
    assert cached_session.get_subsearch_result_set(["a", "b"], ["baz"]) == ["b"]
    assert cached_session.get_subsearch_result_set(["a"], ["baz"]) == []
    assert cached_session.get_subsearch_result_set(["a", "b"], ["foo"]) == ["a"]
    assert mock_source.find_recent_items.await_count == 1


async def test_subsearch_drops_unknown_ids(cached_session: SearchSession[RecentItem]) -> None:
    """Test ids missing from the cache are silently skipped."""
    assert cached_session.get_subsearch_result_set(["zz", "b", "yy"], ["ba"]) == ["b"]


async def test_subsearch_keeps_previous_order_on_ties(
    cached_session: SearchSession[RecentItem],
) -> None:
    """Test equally scored ids come back in the order they were given."""
    assert cached_session.get_subsearch_result_set(["b", "a"], ["home"]) == ["b", "a"]
    assert cached_session.get_subsearch_result_set(["a", "b"], ["home"]) == ["a", "b"]


# --- Result Metas Tests ---


async def test_result_metas(
    cached_session: SearchSession[RecentItem],
    app: AppInfo,
) -> None:
    """Test metadata for known ids, unknown ids omitted."""
    metas = cached_session.get_result_metas(["a", "c"])

    assert metas == [
        ResultMeta(id="a", name="Foo Bar", gicon=app.icon, description="/home/x/foo"),
    ]


async def test_result_metas_prefer_item_description(
    session: SearchSession[RecentItem],
    mock_source: AsyncMock,
) -> None:
    """Test an item's own description replaces its uri in metadata."""
    mock_source.find_recent_items.return_value = {
        "a": RecentItem(name="Foo", uri="/home/x/foo", description="Foo checkout"),
        "b": RecentItem(name="Bar", uri="/home/x/bar"),
    }
    await session.get_initial_result_set(["x"])

    metas = session.get_result_metas(["a", "b"])

    assert [meta.description for meta in metas] == ["Foo checkout", "/home/x/bar"]


async def test_result_metas_keep_input_order(cached_session: SearchSession[RecentItem]) -> None:
    """Test metas follow the requested order and share the app icon."""
    metas = cached_session.get_result_metas(["b", "a"])

    assert [meta.id for meta in metas] == ["b", "a"]
    assert {meta.gicon for meta in metas} == {"jetbrains-idea"}


# --- Activation Tests ---


async def test_activate_result_launches_uri(
    cached_session: SearchSession[RecentItem],
    mock_launcher: AsyncMock,
) -> None:
    """Test activation opens the item location in the app."""
    await cached_session.activate_result("a", ["foo"], 42)

    mock_launcher.launch_uri.assert_awaited_once_with("jetbrains-idea.desktop", "/home/x/foo")


async def test_activate_unknown_result(
    cached_session: SearchSession[RecentItem],
    mock_launcher: AsyncMock,
) -> None:
    """Test activating an unknown id fails without launching anything."""
    with pytest.raises(ResultNotFoundError) as exc_info:
        await cached_session.activate_result("c", ["foo"], 42)

    assert exc_info.value.code is ErrorCode.RESULT_NOT_FOUND
    mock_launcher.launch_uri.assert_not_called()
    mock_launcher.launch_app.assert_not_called()


async def test_activate_on_empty_session(
    session: SearchSession[RecentItem],
    mock_launcher: AsyncMock,
) -> None:
    """Test activation before any search finds nothing."""
    with pytest.raises(ResultNotFoundError):
        await session.activate_result("a", [], 0)
    mock_launcher.launch_uri.assert_not_called()


async def test_activate_launch_failure(
    cached_session: SearchSession[RecentItem],
    mock_launcher: AsyncMock,
) -> None:
    """Test launch failures surface as a generic message."""
    mock_launcher.launch_uri.side_effect = RuntimeError("secret internal detail")

    with pytest.raises(LaunchFailedError) as exc_info:
        await cached_session.activate_result("a", ["foo"], 42)

    assert exc_info.value.message == "Failed to launch app jetbrains-idea.desktop"
    assert "secret" not in str(exc_info.value)
    # The session stays usable.
    assert cached_session.get_subsearch_result_set(["a"], ["foo"]) == ["a"]


# --- Launch Search Tests ---


async def test_launch_search(
    session: SearchSession[RecentItem],
    mock_launcher: AsyncMock,
) -> None:
    """Test launching the app ignores terms and timestamp."""
    await session.launch_search(["foo"], 42)

    mock_launcher.launch_app.assert_awaited_once_with("jetbrains-idea.desktop")
    mock_launcher.launch_uri.assert_not_called()


async def test_launch_search_failure(
    session: SearchSession[RecentItem],
    mock_launcher: AsyncMock,
) -> None:
    """Test bare launch failures surface as LaunchFailedError."""
    mock_launcher.launch_app.side_effect = OSError("no such app")

    with pytest.raises(LaunchFailedError) as exc_info:
        await session.launch_search([], 0)

    assert exc_info.value.to_dict()["code"] == "LAUNCH_FAILED"
    mock_launcher.launch_app.assert_awaited_once()
