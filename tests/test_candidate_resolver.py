import pytest

from kitsu_watch.bindings import BindingStore
from kitsu_watch.candidate_resolver import CandidateResolver, truncate
from kitsu_watch.errors import (
    AmbiguousEntriesError,
    AmbiguousFilesError,
    EntryNotFoundError,
    FileNotFoundForEpisodeError,
)
from kitsu_watch.models import LibraryEntry


@pytest.fixture
def resolver(config_store):
    return CandidateResolver(BindingStore(config_store))


class TestResolveCandidateFiles:

    def test_filters_by_search_term(self, resolver, make_files):
        work_dir = make_files(["[G] A - 07.mkv", "[G] B - 07.mkv"])
        assert resolver.resolve_candidate_files(work_dir, "a", 7) == ["[G] A - 07.mkv"]

    def test_search_is_case_insensitive_and_keeps_original_name(self, resolver, make_files):
        work_dir = make_files(["[SubsPlease] Sousou no Frieren - 12 (1080p).mkv"])
        result = resolver.resolve_candidate_files(work_dir, "FRIEREN", 12)
        assert result == ["[SubsPlease] Sousou no Frieren - 12 (1080p).mkv"]

    def test_requires_bracket_tag(self, resolver, make_files):
        work_dir = make_files(["Frieren - 07.mkv"])
        with pytest.raises(FileNotFoundForEpisodeError):
            resolver.resolve_candidate_files(work_dir, "frieren", 7)

    def test_episode_token_is_literal(self, resolver, make_files):
        work_dir = make_files(["[G] Show - 112.mkv"])
        with pytest.raises(FileNotFoundForEpisodeError) as exc_info:
            resolver.resolve_candidate_files(work_dir, "show", 12)
        assert exc_info.value.episode == "12"

    def test_ignores_directories(self, resolver, make_files):
        work_dir = make_files(["[G] Show - 03.mkv"])
        (work_dir / "[G] Show - 03 extras").mkdir()
        assert resolver.resolve_candidate_files(work_dir, "show", 3) == ["[G] Show - 03.mkv"]

    def test_multiple_files_are_ambiguous(self, resolver, make_files):
        work_dir = make_files(["[G] Show - 03.mkv", "[G] Show Movie - 03.mkv"])
        with pytest.raises(AmbiguousFilesError) as exc_info:
            resolver.resolve_candidate_files(work_dir, "show", 3)
        assert exc_info.value.titles == ["[G] Show - 03", "[G] Show Movie - 03"]

    def test_ambiguous_titles_are_truncated(self, resolver, make_files):
        long_name = "[G] " + "x" * 80
        work_dir = make_files([f"{long_name} - 03.mkv", "[G] x - 03.mkv"])
        with pytest.raises(AmbiguousFilesError) as exc_info:
            resolver.resolve_candidate_files(work_dir, "x", 3)
        assert all(len(title) <= 60 + len(" - 03") for title in exc_info.value.titles)


class TestResolveCacheEntry:

    def test_single_match_returns_index(self, resolver, library_entries):
        index, entry = resolver.resolve_cache_entry(library_entries, "apothecary", "Kusuriya no Hitorigoto")
        assert index == 1
        assert entry.library_id == "202"

    def test_matches_synonyms(self, resolver, library_entries):
        index, entry = resolver.resolve_cache_entry(library_entries, "dungeon food", "Dungeon Meshi")
        assert entry.library_id == "303"

    def test_no_match(self, resolver, library_entries):
        with pytest.raises(EntryNotFoundError) as exc_info:
            resolver.resolve_cache_entry(library_entries, "bocchi", "Bocchi the Rock")
        assert exc_info.value.title == "Bocchi the Rock"
        assert "Missing: Bocchi the Rock" in exc_info.value.diagnostics()

    def test_multiple_matches_list_every_title(self, resolver):
        cache = [
            LibraryEntry(library_id="1", original_title="Shingeki no Kyojin"),
            LibraryEntry(library_id="2", original_title="Shingeki no Kyojin Season 2"),
        ]
        with pytest.raises(AmbiguousEntriesError) as exc_info:
            resolver.resolve_cache_entry(cache, "shingeki", "Shingeki no Kyojin")
        assert exc_info.value.titles == ["Shingeki no Kyojin", "Shingeki no Kyojin Season 2"]

    def test_binding_overrides_search_term(self, resolver, config_store):
        cache = [
            LibraryEntry(library_id="1", original_title="Shingeki no Kyojin"),
            LibraryEntry(library_id="2", original_title="Shingeki no Kyojin Season 2"),
        ]
        config_store.set_file_binding("2", "attack on titan s2")

        index, entry = resolver.resolve_cache_entry(cache, "shingeki", "Attack on Titan S2")
        assert index == 1
        assert entry.library_id == "2"

    def test_unrelated_binding_falls_back_to_search_term(self, resolver, config_store, library_entries):
        config_store.set_file_binding("101", "frieren")
        index, entry = resolver.resolve_cache_entry(library_entries, "meshi", "Dungeon Meshi")
        assert entry.library_id == "303"


def test_truncate():
    assert truncate("short", 10) == "short"
    assert truncate("a" * 20, 10) == "aaaaaaa..."
