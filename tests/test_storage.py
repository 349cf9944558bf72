"""Tests for the filesystem page store."""

import os
from pathlib import Path

import pytest
from mngr.core.errors import PageNotFoundError, StorageError
from mngr.core.storage import PageStore, filter_entries
from mngr.core.types import Entry, Listing, Page
from mngr.core.validation import parse_url


@pytest.fixture
def store(data_root: Path) -> PageStore:
    return PageStore(data_root)


class TestLoadPage:
    """Tests for PageStore.load_page()."""

    def test__existing_page__returns_body(self, store: PageStore) -> None:
        """Load returns the stored bytes and the logical path."""
        page = store.load_page(parse_url("/view/docs/guide.txt"))

        assert page == Page(path="docs/guide.txt", body=b"Guide content")

    def test__missing_page__raises_not_found(self, store: PageStore) -> None:
        """Missing file raises PageNotFoundError."""
        with pytest.raises(PageNotFoundError):
            store.load_page(parse_url("/view/docs/missing.txt"))

    def test__directory__raises_not_found(self, store: PageStore) -> None:
        """A folder is not a page."""
        with pytest.raises(PageNotFoundError):
            store.load_page(parse_url("/view/docs"))

    def test__symlink_outside_root__refused(
        self, tmp_path: Path, data_root: Path, store: PageStore
    ) -> None:
        """A symlink escaping the data root is never followed."""
        outside = tmp_path / "outside.txt"
        outside.write_text("outside")
        os.symlink(outside, data_root / "link.txt")

        with pytest.raises(StorageError, match="outside the data root"):
            store.load_page(parse_url("/view/link.txt"))


class TestSave:
    """Tests for PageStore.new_page() and PageStore.save()."""

    def test__new_page__writes_nothing(self, data_root: Path, store: PageStore) -> None:
        """new_page only builds an in-memory page."""
        page = store.new_page(parse_url("/edit/docs/new.txt"))

        assert page == Page(path="docs/new.txt", body=b"")
        assert not (data_root / "docs" / "new.txt").exists()

    def test__save__then_load_round_trips(self, store: PageStore) -> None:
        """Saved page is returned by the next load."""
        valid = parse_url("/save/docs/new.txt")
        store.save(store.new_page(valid, b"fresh"))

        assert store.load_page(valid).body == b"fresh"

    def test__save__replaces_existing(self, data_root: Path, store: PageStore) -> None:
        """Saving over an existing page replaces its content."""
        store.save(store.new_page(parse_url("/save/readme.txt"), b"replaced"))

        assert (data_root / "readme.txt").read_bytes() == b"replaced"

    def test__missing_parent__raises_storage_error(self, store: PageStore) -> None:
        """Parent folder must exist."""
        page = store.new_page(parse_url("/save/nowhere/new.txt"), b"x")

        with pytest.raises(StorageError, match="cannot save nowhere/new.txt"):
            store.save(page)


class TestNewFolder:
    """Tests for PageStore.new_folder()."""

    def test__new_folder__created(self, data_root: Path, store: PageStore) -> None:
        store.new_folder(parse_url("/folder/docs/archive"))

        assert (data_root / "docs" / "archive").is_dir()

    def test__existing_folder__left_untouched(self, data_root: Path, store: PageStore) -> None:
        store.new_folder(parse_url("/folder/docs/drafts"))

        assert (data_root / "docs" / "drafts").is_dir()

    def test__missing_parent__raises_storage_error(self, store: PageStore) -> None:
        with pytest.raises(StorageError):
            store.new_folder(parse_url("/folder/nowhere/archive"))

    def test__over_existing_file__raises_storage_error(self, store: PageStore) -> None:
        with pytest.raises(StorageError):
            store.new_folder(parse_url("/folder/readme.txt"))


class TestListDir:
    """Tests for PageStore.list_dir()."""

    def test__root__returns_sorted_entries(self, store: PageStore) -> None:
        """Raw listing includes hidden names and is sorted."""
        entries = store.list_dir("")

        assert entries == [
            Entry(name=".hidden", is_dir=False),
            Entry(name="docs", is_dir=True),
            Entry(name="readme.txt", is_dir=False),
        ]

    def test__missing_dir__raises_storage_error(self, store: PageStore) -> None:
        with pytest.raises(StorageError, match="cannot list nowhere"):
            store.list_dir("nowhere")


class TestFilterEntries:
    """Tests for filter_entries()."""

    def test__hidden_entries__excluded(self) -> None:
        """Names starting with a dot are skipped, files and folders alike."""
        listing = filter_entries(
            [
                Entry(name=".git", is_dir=True),
                Entry(name=".env", is_dir=False),
                Entry(name="docs", is_dir=True),
                Entry(name="a.txt", is_dir=False),
            ]
        )

        assert listing == Listing(files=("a.txt",), folders=("docs",))

    def test__entries__partitioned_exactly(self) -> None:
        """Files and folders together are all non-hidden entries, with no overlap."""
        entries = [
            Entry(name=name, is_dir=is_dir)
            for name, is_dir in [
                ("b", True),
                ("a.txt", False),
                (".x", True),
                ("c.md", False),
                ("d", True),
                (".y", False),
            ]
        ]

        listing = filter_entries(entries)

        visible = {entry.name for entry in entries if not entry.name.startswith(".")}
        assert set(listing.files) | set(listing.folders) == visible
        assert set(listing.files) & set(listing.folders) == set()
        assert listing.folders == ("b", "d")
        assert listing.files == ("a.txt", "c.md")

    def test__empty__returns_empty_listing(self) -> None:
        assert filter_entries([]) == Listing(files=(), folders=())
