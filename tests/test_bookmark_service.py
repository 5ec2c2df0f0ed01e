"""Tests for services/bookmark_service.py."""

import pytest

from domain.errors import CapacityError, FormatError, ValidationError
from domain.models import Bookmark
from services.bookmark_service import BookmarkService
from storage.db import Database
from storage.repos import AppStateRepo, BookmarkRepo


@pytest.fixture()
def service(bookmark_repo):
    return BookmarkService(bookmark_repo)


def fill(repo: BookmarkRepo, count: int) -> None:
    repo.save_all([Bookmark(id=f"vid{i:05d}", description=f"d{i}") for i in range(count)])


# ---- add ----

def test_add_on_empty_store(service):
    b = service.add("abc123XYZ_-", "My desc")
    assert b == Bookmark(id="abc123XYZ_-", description="My desc", views=0)
    assert service.get("abc123XYZ_-") == b


def test_add_duplicate_id_fails(service):
    service.add("abc123XYZ_-", "My desc")
    with pytest.raises(ValidationError):
        service.add("abc123XYZ_-", "Other")
    assert len(service.list()) == 1


@pytest.mark.parametrize(
    "video_id, description",
    [
        ("", "desc"),
        ("abc", ""),
        ("abc", "   "),
        ("abc", "a;b"),
        ("abc", "two\nlines"),
        ("abc", "x" * 201),
    ],
)
def test_add_rejects_invalid_input(service, video_id, description):
    with pytest.raises(ValidationError):
        service.add(video_id, description)
    assert service.list() == []


def test_add_accepts_max_length_description(service):
    assert service.add("abc", "x" * 200).description == "x" * 200


def test_add_trims_description(service):
    assert service.add("abc", "  lo-fi beats  ").description == "lo-fi beats"


def test_add_from_url(service):
    b = service.add_from_input("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=10", "song")
    assert b.id == "dQw4w9WgXcQ"


def test_add_from_bad_input(service):
    with pytest.raises(ValidationError):
        service.add_from_input("not a video", "song")


def test_capacity_limit(service, bookmark_repo):
    fill(bookmark_repo, 1000)
    status = service.capacity_status()
    assert status.current == 1000
    assert status.max == 1000
    assert status.is_at_limit is True
    assert status.is_near_limit is True
    with pytest.raises(CapacityError):
        service.add("newvideo", "desc")


def test_capacity_near_limit_threshold(service, bookmark_repo):
    fill(bookmark_repo, 899)
    assert service.capacity_status().is_near_limit is False
    fill(bookmark_repo, 900)
    status = service.capacity_status()
    assert status.is_near_limit is True
    assert status.is_at_limit is False


# ---- remove / views ----

def test_remove(service):
    service.add("a", "one")
    service.add("b", "two")
    assert service.remove("a") is True
    assert service.remove("a") is False
    assert [b.id for b in service.list()] == ["b"]


def test_increment_views(service):
    service.add("a", "one")
    assert service.increment_views("a") is True
    assert service.increment_views("a") is True
    assert service.get("a").views == 2
    assert service.increment_views("missing") is False


def test_get_missing_returns_none(service):
    assert service.get("nope") is None


# ---- CSV ----

def test_export_sorted_by_views(service, bookmark_repo):
    bookmark_repo.save_all(
        [
            Bookmark("a", "first", 1),
            Bookmark("b", "second", 5),
            Bookmark("c", "third", 1),
        ]
    )
    assert service.export_csv() == (
        "IDVideo;Description;Views\nb;second;5\na;first;1\nc;third;1"
    )


def test_round_trip_into_empty_store(service, bookmark_repo):
    bookmark_repo.save_all(
        [Bookmark("a", "first", 3), Bookmark("b", "second one", 0), Bookmark("c", "third", 7)]
    )
    csv_text = service.export_csv()

    other_db = Database(":memory:")
    other_db.init_schema()
    target = BookmarkService(BookmarkRepo(AppStateRepo(other_db)))
    assert target.list() == []
    result = target.import_csv(csv_text, "replace")

    assert result.imported == 3
    assert result.skipped == 0
    assert result.total == 3
    by_id = {b.id: b for b in target.list()}
    assert by_id == {
        "a": Bookmark("a", "first", 3),
        "b": Bookmark("b", "second one", 0),
        "c": Bookmark("c", "third", 7),
    }


def test_import_wrong_header_leaves_store_untouched(service):
    service.add("a", "one")
    with pytest.raises(FormatError):
        service.import_csv("Wrong;Description;Views\nb;two;1", "merge")
    with pytest.raises(FormatError):
        service.import_csv("Wrong;Description;Views\nb;two;1", "replace")
    assert [b.id for b in service.list()] == ["a"]


def test_import_needs_two_lines(service):
    with pytest.raises(FormatError):
        service.import_csv("IDVideo;Description;Views\n", "merge")


def test_merge_overwrites_matching_ids_only(service, bookmark_repo):
    bookmark_repo.save_all([Bookmark("a", "old a", 9), Bookmark("b", "keep b", 4)])
    result = service.import_csv(
        "IDVideo;Description;Views\na;new a;1\nc;brand new;2", "merge"
    )
    assert (result.imported, result.skipped, result.total) == (2, 0, 3)
    assert service.get("a") == Bookmark("a", "new a", 1)
    assert service.get("b") == Bookmark("b", "keep b", 4)
    assert service.get("c") == Bookmark("c", "brand new", 2)


def test_replace_discards_existing(service):
    service.add("a", "one")
    result = service.import_csv("IDVideo;Description;Views\nz;zed;0", "replace")
    assert result.total == 1
    assert [b.id for b in service.list()] == ["z"]


def test_import_counts_skipped_rows(service):
    text = "\n".join(
        [
            "IDVideo;Description;Views",
            "a;good;3",
            "short;row",
            ";no id;1",
            "b;;1",
            "c;lenient views;abc",
            "d;extra fields;4;ignored",
        ]
    )
    result = service.import_csv(text, "replace")
    assert result.imported == 3
    assert result.skipped == 3
    assert service.get("c").views == 0
    assert service.get("d") == Bookmark("d", "extra fields", 4)


def test_import_over_capacity_is_discarded(bookmark_repo):
    service = BookmarkService(bookmark_repo, max_bookmarks=3)
    service.add("a", "one")
    service.add("b", "two")
    with pytest.raises(CapacityError):
        service.import_csv("IDVideo;Description;Views\nc;three;0\nd;four;0", "merge")
    assert [b.id for b in service.list()] == ["a", "b"]


def test_replace_ignores_old_set_for_capacity(bookmark_repo):
    service = BookmarkService(bookmark_repo, max_bookmarks=2)
    service.add("a", "one")
    service.add("b", "two")
    result = service.import_csv("IDVideo;Description;Views\nc;three;0\nd;four;0", "replace")
    assert result.total == 2


def test_unknown_import_mode(service):
    with pytest.raises(ValidationError):
        service.import_csv("IDVideo;Description;Views\na;one;0", "append")


def test_file_helpers(service, tmp_path):
    service.add("a", "one")
    service.increment_views("a")
    path = tmp_path / "bookmarks.csv"
    assert service.export_to_file(str(path)) == 1
    assert path.read_text(encoding="utf-8") == "IDVideo;Description;Views\na;one;1"

    service.remove("a")
    result = service.import_from_file(str(path), mode="merge")
    assert result.total == 1
    assert service.get("a").views == 1


# ---- degraded storage ----

def test_unavailable_storage_degrades(offline_state):
    service = BookmarkService(BookmarkRepo(offline_state))
    assert service.list() == []
    assert service.get("a") is None
    assert service.capacity_status().current == 0
    assert service.add("a", "one") is None
    assert service.remove("a") is False
    assert service.increment_views("a") is False
    assert service.export_csv() == "IDVideo;Description;Views\n"


@pytest.mark.parametrize("video_id", ["a;b", "x\ny", "x\ry"])
def test_add_rejects_ids_the_csv_cannot_hold(service, video_id):
    with pytest.raises(ValidationError):
        service.add(video_id, "desc")
    assert service.list() == []


def test_round_trip_after_rejected_ids(service):
    for bad in ("a;b", "x\ny"):
        with pytest.raises(ValidationError):
            service.add(bad, "desc")
    service.add("good", "kept")
    csv_text = service.export_csv()

    other_db = Database(":memory:")
    other_db.init_schema()
    target = BookmarkService(BookmarkRepo(AppStateRepo(other_db)))
    result = target.import_csv(csv_text, "replace")

    assert (result.imported, result.skipped, result.total) == (1, 0, 1)
    assert target.list() == [Bookmark("good", "kept", 0)]


def test_import_on_unavailable_storage_returns_none(offline_state):
    service = BookmarkService(BookmarkRepo(offline_state))
    assert service.import_csv("IDVideo;Description;Views\na;one;1", "replace") is None
    assert service.list() == []
