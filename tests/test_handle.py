"""Tests for snapshot-backed scoring handles."""

import os

import pytest

from mru_frecency.core.models import PickerItem
from mru_frecency.handle import FrecencyHandle


@pytest.fixture
async def visited(store):
    for raw in ("/proj/a.py", "/proj/pkg/b.py", "grep query"):
        await store.visit(raw)
    return store


class TestScoring:
    async def test_scores_strings_and_picker_items(self, visited):
        handle = FrecencyHandle(visited)
        assert handle.get("grep query") == 3000
        assert handle.get("/proj/pkg/b.py") == 2999
        assert handle.get(PickerItem(file="/proj/a.py")) == 2998
        assert handle.get(PickerItem(text="grep query")) == 3000

    async def test_unknown_items_score_zero(self, visited):
        handle = FrecencyHandle(visited)
        assert handle.get("/never/seen") == 0
        assert handle.get("/never/seen", seed=False) == 0
        assert "/never/seen" not in handle.snapshot.index

    @pytest.mark.parametrize("item", ["", PickerItem(), PickerItem(file="", text="")])
    async def test_empty_items_score_zero(self, visited, item):
        assert FrecencyHandle(visited).get(item) == 0

    async def test_picker_file_is_always_a_path(self, store, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        handle = FrecencyHandle(store)
        await handle.visit(PickerItem(file="README"))
        assert store.recent_paths() == [os.path.join(str(tmp_path), "README")]
        assert handle.get(PickerItem(file="./README")) == 3000

    async def test_picker_file_wins_over_text(self, visited):
        handle = FrecencyHandle(visited)
        assert handle.get(PickerItem(file="/proj/a.py", text="grep query")) == 2998
        assert handle.get(PickerItem(file="", text="grep query")) == 3000

    async def test_directory_item_sums_descendants(self, visited):
        handle = FrecencyHandle(visited)
        assert handle.get(PickerItem(file="/proj", dir=True)) == 2999 + 2998
        assert handle.get(PickerItem(file="/proj/pkg/", dir=True)) == 2999
        assert handle.get(PickerItem(file="/elsewhere", dir=True)) == 0


class TestSnapshots:
    async def test_handle_does_not_see_later_visits(self, visited):
        handle = FrecencyHandle(visited)
        await visited.visit("/new")
        assert handle.get("/new") == 0
        assert handle.get("grep query") == 3000

        handle.refresh()
        assert handle.get("/new") == 3000
        assert handle.get("grep query") == 2999

    async def test_visit_through_handle_refreshes_it(self, visited):
        handle = FrecencyHandle(visited)
        assert await handle.visit("/proj/a.py") is True
        assert handle.get("/proj/a.py") == 3000

    async def test_visit_of_empty_item_is_ignored(self, visited):
        handle = FrecencyHandle(visited)
        assert await handle.visit(PickerItem()) is False
        assert len(visited) == 3

    async def test_snapshot_is_independent_of_store(self, visited):
        snapshot = FrecencyHandle(visited).snapshot
        await visited.visit("/new")
        assert [e.key for e in snapshot.entries] == ["grep query", "/proj/pkg/b.py", "/proj/a.py"]
        with pytest.raises(TypeError):
            snapshot.index["/new"] = 1


class TestSeeding:
    async def test_subclass_can_seed_unknown_items(self, visited):
        class LengthSeeded(FrecencyHandle):
            def seed(self, item, value=None):
                return len(item)

        handle = LengthSeeded(visited)
        assert handle.get("/abc") == 4
        assert handle.get("/abc", seed=False) == 0
        assert handle.get("grep query") == 3000
        assert "/abc" not in visited.snapshot().index
