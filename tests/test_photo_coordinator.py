"""Tests for the contact photo lifecycle, run against both storage backends."""

import io
import logging
import re
from unittest.mock import Mock

import pytest

from contacts_api.services.photos import ContactPhotoCoordinator, PhotoUpload
from contacts_api.storage import (
    LocalDiskBackend,
    StorageDeleteError,
    StorageIOError,
)

from .conftest import BUCKET, CDN_URL


def make_upload(content: bytes = b"photo bytes", filename: str = "cat.png") -> PhotoUpload:
    return PhotoUpload(content=io.BytesIO(content), filename=filename, content_type="image/png")


def object_exists(backend, key: str) -> bool:
    if isinstance(backend, LocalDiskBackend):
        return (backend.storage_root / key).exists()
    return (BUCKET, key) in backend._client.objects


def assert_retrievable(backend, key: str, content: bytes) -> None:
    location = backend.retrieve(key)
    if location.is_remote:
        assert location.url == f"{CDN_URL}{key}"
        assert backend._client.objects[(BUCKET, key)] == content
    else:
        assert location.content == content


@pytest.fixture
def spy(backend):
    """The backend wrapped so calls are recorded in order."""
    return Mock(wraps=backend)


@pytest.fixture
def coordinator(spy):
    return ContactPhotoCoordinator(spy)


def storage_calls(spy):
    return [(c[0], c[1][0]) for c in spy.method_calls if c[0] in ("store", "delete")]


class TestResolveKeyForCreate:

    def test_without_upload(self, coordinator, spy):
        assert coordinator.resolve_key_for_create(None) is None
        assert storage_calls(spy) == []

    def test_with_upload(self, coordinator, spy, backend):
        key = coordinator.resolve_key_for_create(make_upload(b"cat bytes", "cat.png"))

        assert re.match(r"^[0-9a-f-]{36}_cat\.png$", key)
        assert storage_calls(spy) == [("store", key)]
        assert_retrievable(backend, key, b"cat bytes")

    def test_store_failure_propagates(self, coordinator, spy):
        spy.store.side_effect = StorageIOError("bucket rejected the upload")

        with pytest.raises(StorageIOError):
            coordinator.resolve_key_for_create(make_upload())

        spy.delete.assert_not_called()

    def test_fresh_key_per_call(self, coordinator):
        key1 = coordinator.resolve_key_for_create(make_upload())
        key2 = coordinator.resolve_key_for_create(make_upload())

        assert key1 != key2
        assert key1.endswith("_cat.png")
        assert key2.endswith("_cat.png")


class TestResolveKeyForUpdate:

    def test_no_upload_keeps_existing_key(self, coordinator, spy):
        assert coordinator.resolve_key_for_update("abc_old.png", None) == "abc_old.png"
        assert storage_calls(spy) == []

    def test_no_upload_no_existing_key(self, coordinator, spy):
        assert coordinator.resolve_key_for_update(None, None) is None
        assert storage_calls(spy) == []

    def test_first_photo(self, coordinator, spy, backend):
        key = coordinator.resolve_key_for_update(None, make_upload(b"new", "dog.jpg"))

        assert key.endswith("_dog.jpg")
        assert storage_calls(spy) == [("store", key)]
        assert_retrievable(backend, key, b"new")

    def test_replacement_stores_before_deleting(self, coordinator, spy, backend):
        old_key = coordinator.resolve_key_for_create(make_upload(b"old", "old.png"))
        spy.reset_mock()

        new_key = coordinator.resolve_key_for_update(old_key, make_upload(b"new", "new.png"))

        assert new_key != old_key
        assert storage_calls(spy) == [("store", new_key), ("delete", old_key)]
        assert not object_exists(backend, old_key)
        assert_retrievable(backend, new_key, b"new")

    def test_replacement_store_failure_keeps_old_object(self, coordinator, spy, backend):
        old_key = coordinator.resolve_key_for_create(make_upload(b"old", "old.png"))
        spy.reset_mock()
        spy.store.side_effect = StorageIOError("disk full")

        with pytest.raises(StorageIOError):
            coordinator.resolve_key_for_update(old_key, make_upload(b"new", "new.png"))

        spy.delete.assert_not_called()
        assert object_exists(backend, old_key)
        assert_retrievable(backend, old_key, b"old")

    def test_replacement_delete_failure_is_not_fatal(self, coordinator, spy, backend, caplog):
        old_key = coordinator.resolve_key_for_create(make_upload(b"old", "old.png"))
        spy.delete.side_effect = StorageDeleteError("permission denied")

        with caplog.at_level(logging.WARNING, logger="contacts_api.services.photos"):
            new_key = coordinator.resolve_key_for_update(old_key, make_upload(b"new", "new.png"))

        assert new_key.endswith("_new.png")
        assert_retrievable(backend, new_key, b"new")
        assert f"Could not delete photo {old_key}" in caplog.text


class TestReleaseOnDelete:

    def test_without_key(self, coordinator, spy):
        coordinator.release_on_delete(None)
        assert storage_calls(spy) == []

    def test_deletes_object(self, coordinator, spy, backend):
        key = coordinator.resolve_key_for_create(make_upload())

        coordinator.release_on_delete(key)

        assert not object_exists(backend, key)

    def test_idempotent(self, coordinator, backend):
        key = coordinator.resolve_key_for_create(make_upload())

        coordinator.release_on_delete(key)
        coordinator.release_on_delete(key)

        assert not object_exists(backend, key)

    def test_delete_failure_is_not_fatal(self, coordinator, spy, caplog):
        spy.delete.side_effect = StorageDeleteError("network unreachable")

        with caplog.at_level(logging.WARNING, logger="contacts_api.services.photos"):
            coordinator.release_on_delete("abc_cat.png")

        assert "leaving it orphaned" in caplog.text


class TestDiscard:

    def test_none_is_noop(self, coordinator, spy):
        coordinator.discard(None)
        assert storage_calls(spy) == []

    def test_unexpected_storage_error_is_swallowed(self, coordinator, spy):
        spy.delete.side_effect = StorageIOError("unreadable medium")
        coordinator.discard("abc_cat.png")


def test_custom_key_generator(local_backend):
    coordinator = ContactPhotoCoordinator(local_backend, key_generator=lambda name: f"fixed_{name}")

    key = coordinator.resolve_key_for_create(make_upload(b"x", "cat.png"))

    assert key == "fixed_cat.png"
    assert local_backend.retrieve("fixed_cat.png").content == b"x"
