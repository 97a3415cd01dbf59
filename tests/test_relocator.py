import pytest

from kitsu_watch.errors import RelocationError
from kitsu_watch.relocator import ensure_watched_dir, relocate


def test_relocate_moves_file(make_files):
    work_dir = make_files(["[G] Show - 01.mkv"])

    destination = relocate("[G] Show - 01.mkv", work_dir)

    assert destination == work_dir / "watched" / "[G] Show - 01.mkv"
    assert destination.exists()
    assert not (work_dir / "[G] Show - 01.mkv").exists()


def test_existing_watched_dir_is_reused(make_files):
    work_dir = make_files(["[G] Show - 01.mkv", "[G] Show - 02.mkv"])

    relocate("[G] Show - 01.mkv", work_dir)
    relocate("[G] Show - 02.mkv", work_dir)

    assert ensure_watched_dir(work_dir) == work_dir / "watched"
    assert sorted(p.name for p in (work_dir / "watched").iterdir()) == [
        "[G] Show - 01.mkv",
        "[G] Show - 02.mkv",
    ]


def test_destination_collision_fails(make_files):
    work_dir = make_files(["[G] Show - 01.mkv"])
    (work_dir / "watched").mkdir()
    (work_dir / "watched" / "[G] Show - 01.mkv").write_bytes(b"old")

    with pytest.raises(RelocationError) as exc_info:
        relocate("[G] Show - 01.mkv", work_dir)

    assert "already exists" in exc_info.value.reason
    assert (work_dir / "[G] Show - 01.mkv").exists()


def test_missing_source_fails(make_files):
    work_dir = make_files([])
    with pytest.raises(RelocationError):
        relocate("[G] Gone - 01.mkv", work_dir)


def test_unusable_watched_path_fails(make_files):
    work_dir = make_files(["[G] Show - 01.mkv"])
    (work_dir / "watched").symlink_to(work_dir / "missing")

    with pytest.raises(RelocationError):
        relocate("[G] Show - 01.mkv", work_dir)

    assert (work_dir / "[G] Show - 01.mkv").exists()
