"""Tests for thumbnail store backends."""
from pathlib import Path

import pytest

from app.services import thumbnail_store as thumbnail_store_module
from app.services.thumbnail_store import (
    DiskThumbnailStore,
    MemoryThumbnailStore,
    Thumbnail,
    get_thumbnail_store,
)


class TestDiskThumbnailStore:
    def test_overwrite_with_new_extension_drops_old_file(self, settings):
        store = DiskThumbnailStore()
        store.save("vid", Thumbnail(b"png", "image/png"))
        url = store.save("vid", Thumbnail(b"jpeg", "image/jpeg"))

        assert url.endswith("/assets/vid.jpeg")
        assert sorted(p.name for p in Path(settings.assets_root).iterdir()) == ["vid.jpeg"]
        assert store.get("vid") == Thumbnail(b"jpeg", "image/jpeg")

    def test_get_missing(self, settings):
        assert DiskThumbnailStore().get("nope") is None


class TestMemoryThumbnailStore:
    def test_one_entry_per_video(self, settings):
        store = MemoryThumbnailStore()
        store.save("vid", Thumbnail(b"a", "image/png"))
        store.save("vid", Thumbnail(b"b", "image/jpeg"))
        assert store.get("vid") == Thumbnail(b"b", "image/jpeg")
        assert store.get("other") is None


class TestGetThumbnailStore:
    @pytest.fixture(autouse=True)
    def reset_singleton(self, monkeypatch):
        monkeypatch.setattr(thumbnail_store_module, "_thumbnail_store", None)

    def test_memory_backend(self, settings, monkeypatch):
        monkeypatch.setattr(settings, "thumbnail_backend", "memory")
        assert isinstance(get_thumbnail_store(), MemoryThumbnailStore)

    def test_disk_backend(self, settings, monkeypatch):
        monkeypatch.setattr(settings, "thumbnail_backend", "disk")
        store = get_thumbnail_store()
        assert isinstance(store, DiskThumbnailStore)
        assert get_thumbnail_store() is store

    def test_unknown_backend(self, settings, monkeypatch):
        monkeypatch.setattr(settings, "thumbnail_backend", "redis")
        with pytest.raises(ValueError):
            get_thumbnail_store()
