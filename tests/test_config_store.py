import json
from datetime import datetime, timedelta

import pytest

from kitsu_watch.config_store import ConfigStore
from kitsu_watch.errors import ConfigStoreError
from kitsu_watch.models import LibraryEntry


def test_fresh_store_has_defaults(config_store):
    assert config_store.get_cache() == []
    assert config_store.get_file_binding("1") is None
    assert config_store.completed_series == 0
    assert config_store.load_kitsu_auth() is None


def test_round_trip(tmp_path, library_entries):
    path = tmp_path / "config.json"
    store = ConfigStore(str(path))
    store.set_cache(library_entries)
    store.set_file_binding("101", "sousou no frieren")
    store.set_user_id("42")
    store.increment_completed_series()
    store.save()

    reloaded = ConfigStore(str(path))
    assert reloaded.get_cache() == library_entries
    assert reloaded.get_file_binding("101") == "sousou no frieren"
    assert reloaded.get_user_id() == "42"
    assert reloaded.completed_series == 1


def test_missing_sections_are_defaulted(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"kitsu": {"cache": [{"library_id": 7, "original_title": "Show"}]}}))

    store = ConfigStore(str(path))
    entry = store.get_cache()[0]
    assert entry == LibraryEntry(library_id="7", original_title="Show")
    assert store.get_file_binding("7") is None
    assert store.completed_series == 0


def test_corrupt_file_raises(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")

    with pytest.raises(ConfigStoreError):
        ConfigStore(str(path))


def test_auth_expiry(config_store):
    config_store.save_kitsu_auth("token", "refresh", expires_in=3600)
    assert config_store.load_kitsu_auth()['access_token'] == "token"

    config_store._data['kitsu']['auth']['expires_at'] = (datetime.now() - timedelta(minutes=1)).isoformat()
    assert config_store.load_kitsu_auth() is None
    assert 'auth' not in config_store._data['kitsu']


def test_synonyms_are_deduplicated_case_insensitively():
    entry = LibraryEntry.from_dict({
        "library_id": "1",
        "original_title": "Show",
        "synonyms": ["Alt", "alt", "Other"],
    })
    assert entry.synonyms == ["Alt", "Other"]
