"""Unit tests for KeyValueStore."""

import json

import pytest

from hotspot_reader.io import KeyValueStore


@pytest.fixture
def store(tmp_path):
    return KeyValueStore(tmp_path)


def test_get_missing_key_returns_none(store):
    assert store.get("hotspots") is None


def test_set_persists_across_instances(store, tmp_path):
    store.set("voice_uri", "vi-VN:Linh")

    reopened = KeyValueStore(tmp_path)
    assert reopened.get("voice_uri") == "vi-VN:Linh"


def test_file_format_is_versioned(store, tmp_path):
    store.set("hotspots", "{}")

    data = json.loads((tmp_path / "local-storage.json").read_text(encoding="utf-8"))
    assert data == {"version": 1, "values": {"hotspots": "{}"}}


def test_corrupt_file_reads_as_empty(tmp_path):
    (tmp_path / "local-storage.json").write_text("{not json", encoding="utf-8")

    assert KeyValueStore(tmp_path).get("hotspots") is None


def test_set_creates_missing_directory(tmp_path):
    store = KeyValueStore(tmp_path / "nested" / "dir")

    store.set("k", "v")

    assert (tmp_path / "nested" / "dir" / "local-storage.json").exists()
