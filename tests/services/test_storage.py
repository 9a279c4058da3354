import os

import pytest

from doccrawl.domain.document import DocumentMetadata, render_document
from doccrawl.services.storage import DocumentStorage


@pytest.fixture
def storage(tmp_path):
    return DocumentStorage(tmp_path / "docs")


def test_paths_follow_category_name_layout(storage, tmp_path):
    assert storage.documentation_path("tools", "example") == tmp_path / "docs" / "tools" / "example"
    assert storage.index_path("apis", "stripe") == tmp_path / "docs" / "apis" / "stripe" / "index.md"


def test_write_creates_parents_and_exists(storage):
    path = storage.document_path("tools", "example", "guide_intro.md")
    assert not storage.exists(path)
    storage.write_file(path, "# Intro\n")
    assert storage.exists(path)
    assert storage.read_file(path) == "# Intro\n"


def test_exists_is_false_for_directories(storage):
    storage.documentation_path("tools", "example").mkdir(parents=True)
    assert not storage.exists(storage.documentation_path("tools", "example"))


def test_read_missing_file_returns_none(storage):
    assert storage.read_file(storage.index_path("tools", "nope")) is None
    assert storage.read_metadata(storage.index_path("tools", "nope")) is None


def test_read_metadata_round_trips_source_url(storage):
    meta = DocumentMetadata("Intro", "https://example.com/intro", "2024-01-01T00:00:00.000Z", "tools", "example")
    path = storage.document_path("tools", "example", "intro.md")
    storage.write_file(path, render_document(meta, "body"))
    assert storage.read_metadata(path).url == "https://example.com/intro"


def test_list_documentation_empty_base(storage):
    assert storage.list_documentation() == {"tools": [], "apis": []}


def test_list_documentation_sorted_per_category(storage):
    for category, name in [("tools", "zeta"), ("tools", "alpha"), ("apis", "stripe")]:
        storage.write_file(storage.index_path(category, name), "x")
    # stray files next to site folders are ignored
    storage.write_file(storage.base_path / "tools" / "notes.md", "x")

    assert storage.list_documentation() == {"tools": ["alpha", "zeta"], "apis": ["stripe"]}
    assert storage.list_documentation("apis") == {"tools": [], "apis": ["stripe"]}


def test_list_documentation_unknown_category(storage):
    with pytest.raises(ValueError):
        storage.list_documentation("guides")


def test_documentation_stats(storage):
    storage.write_file(storage.index_path("tools", "example"), "12345")
    storage.write_file(storage.document_path("tools", "example", "a.md"), "123")
    storage.write_file(storage.document_path("tools", "example", "image.png"), "not markdown")
    os.utime(storage.index_path("tools", "example"), (1_700_000_000, 1_700_000_000))
    os.utime(storage.document_path("tools", "example", "a.md"), (1_600_000_000, 1_600_000_000))

    stats = storage.documentation_stats("tools", "example")

    assert stats.file_count == 2
    assert stats.total_size == 8
    assert stats.last_modified.timestamp() == 1_700_000_000


def test_documentation_stats_missing_site(storage):
    stats = storage.documentation_stats("apis", "missing")
    assert stats == (0, 0, None)
