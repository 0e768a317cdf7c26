"""Tests for the local credential store."""

from __future__ import annotations

import json
import os
import stat
import sys

import pytest

from carbon_quiz.key_store import API_KEY_NAME, CredentialStore


def test_missing_file_reads_as_empty(tmp_path):
    store = CredentialStore(tmp_path / "absent" / "store.json")

    assert store.get(API_KEY_NAME) is None
    assert store.load_api_key() is None


def test_set_get_delete_round_trip(tmp_path):
    path = tmp_path / "nested" / "store.json"
    store = CredentialStore(path)

    store.set("colour", "green")
    store.save_api_key("  secret-key \n")

    assert path.exists()
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "colour": "green",
        API_KEY_NAME: "secret-key",
    }
    assert CredentialStore(path).load_api_key() == "secret-key"

    assert store.delete(API_KEY_NAME) is True
    assert store.delete(API_KEY_NAME) is False
    assert store.get("colour") == "green"


def test_save_rejects_blank_key(tmp_path):
    store = CredentialStore(tmp_path / "store.json")

    with pytest.raises(ValueError):
        store.save_api_key("   ")


def test_set_rejects_non_string(tmp_path):
    store = CredentialStore(tmp_path / "store.json")

    with pytest.raises(TypeError):
        store.set("count", 3)  # type: ignore[arg-type]


def test_corrupt_file_reads_as_empty(tmp_path, caplog):
    path = tmp_path / "store.json"
    path.write_text("{not-json", encoding="utf-8")
    store = CredentialStore(path)

    with caplog.at_level("WARNING", logger="carbon_quiz.key_store"):
        assert store.load_api_key() is None
    assert "not valid JSON" in caplog.text

    store.save_api_key("fresh")
    assert store.load_api_key() == "fresh"


def test_non_object_file_reads_as_empty(tmp_path):
    path = tmp_path / "store.json"
    path.write_text('["a", "b"]', encoding="utf-8")

    assert CredentialStore(path).get("a") is None


def test_non_string_values_are_ignored(tmp_path):
    path = tmp_path / "store.json"
    path.write_text(json.dumps({API_KEY_NAME: 42}), encoding="utf-8")

    assert CredentialStore(path).load_api_key() is None


def test_no_temporary_files_left_behind(tmp_path):
    store = CredentialStore(tmp_path / "store.json")
    store.save_api_key("one")
    store.save_api_key("two")

    assert sorted(p.name for p in tmp_path.iterdir()) == ["store.json"]


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions only")
def test_store_is_owner_only(tmp_path):
    path = tmp_path / "store.json"
    CredentialStore(path).save_api_key("secret")

    assert stat.S_IMODE(os.stat(path).st_mode) == 0o600


def test_default_path_follows_settings(tmp_path, monkeypatch):
    target = tmp_path / "custom.json"
    monkeypatch.setenv("CARBON_QUIZ_STORE_PATH", str(target))

    assert CredentialStore().path == target
    assert CredentialStore.from_settings().path == target
