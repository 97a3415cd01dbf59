"""
Shared pytest fixtures for the kitsu_watch tests
"""

from pathlib import Path
from typing import List
from unittest.mock import MagicMock

import pytest

from kitsu_watch.config_store import ConfigStore
from kitsu_watch.models import LibraryEntry


@pytest.fixture
def config_store(tmp_path) -> ConfigStore:
    return ConfigStore(str(tmp_path / "config" / "config.json"))


@pytest.fixture
def library_entries() -> List[LibraryEntry]:
    return [
        LibraryEntry(
            library_id="101",
            original_title="Sousou no Frieren",
            localized_title="Frieren: Beyond Journey's End",
            synonyms=["Frieren at the Funeral"],
            episode_progress=6,
            episode_count=28,
        ),
        LibraryEntry(
            library_id="202",
            original_title="Kusuriya no Hitorigoto",
            localized_title="The Apothecary Diaries",
            synonyms=[],
            episode_progress=11,
            episode_count=12,
        ),
        LibraryEntry(
            library_id="303",
            original_title="Dungeon Meshi",
            localized_title="Delicious in Dungeon",
            synonyms=["Dungeon Food"],
            episode_progress=0,
            episode_count=None,
        ),
    ]


@pytest.fixture
def updater() -> MagicMock:
    """Remote updater that confirms whatever progress it is given"""
    mock = MagicMock()
    mock.update_progress.side_effect = lambda library_id, progress: (progress, 28)
    return mock


@pytest.fixture
def make_files(tmp_path):
    """Create empty files in a working directory and return the directory"""

    def _make(names: List[str]) -> Path:
        work_dir = tmp_path / "downloads"
        work_dir.mkdir(exist_ok=True)
        for name in names:
            (work_dir / name).write_bytes(b"")
        return work_dir

    return _make
