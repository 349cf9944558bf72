"""Filesystem page store.

Every page and folder lives under a single data root. Logical paths come from
a ValidatedURL and are resolved against the root; a resolved path that ends
up outside the root (for example through a symlink) is refused.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from mngr.core.errors import PageNotFoundError, StorageError
from mngr.core.types import Entry, Listing, Page, ValidatedURL

logger = logging.getLogger(__name__)


class PageStore:
    """Loads, saves and lists pages below a data root."""

    def __init__(self, root: Path) -> None:
        """Initialize store.

        Args:
            root: Data root directory. It does not need to exist yet.
        """
        self._root = root
        self._resolved_root = root.resolve()

    @property
    def root(self) -> Path:
        """Data root directory."""
        return self._root

    def resolve(self, logical_path: str) -> Path:
        """Map a logical path to a filesystem path inside the data root.

        Raises:
            StorageError: If the path resolves outside the data root
        """
        resolved = (self._resolved_root / logical_path).resolve()
        if not resolved.is_relative_to(self._resolved_root):
            raise StorageError(f"{logical_path!r} resolves outside the data root")
        return resolved

    def load_page(self, valid: ValidatedURL) -> Page:
        """Load the page addressed by ``valid``.

        Raises:
            PageNotFoundError: If no file exists at the path
            StorageError: If the file cannot be read
        """
        source = self.resolve(valid.path)
        if not source.is_file():
            raise PageNotFoundError(f"page not found: {valid.path}")
        try:
            body = source.read_bytes()
        except OSError as e:
            raise StorageError(f"cannot read {valid.path}: {e.strerror}") from e
        return Page(path=valid.path, body=body)

    def new_page(self, valid: ValidatedURL, body: bytes | None = None) -> Page:
        """Build an in-memory page for ``valid``. Nothing is written."""
        return Page(path=valid.path, body=body or b"")

    def save(self, page: Page) -> None:
        """Write ``page`` to the data root, replacing any previous content.

        The parent folder must already exist.

        Raises:
            StorageError: If the file cannot be written
        """
        target = self.resolve(page.path)
        try:
            target.write_bytes(page.body)
        except OSError as e:
            raise StorageError(f"cannot save {page.path}: {e.strerror}") from e
        logger.debug(f"Saved {page.path} ({len(page.body)} bytes)")

    def new_folder(self, valid: ValidatedURL) -> None:
        """Create the folder addressed by ``valid``.

        An existing folder is left untouched; the parent must exist.

        Raises:
            StorageError: If the folder cannot be created
        """
        target = self.resolve(valid.path)
        try:
            target.mkdir(exist_ok=True)
        except OSError as e:
            raise StorageError(f"cannot create folder {valid.path}: {e.strerror}") from e
        logger.debug(f"Created folder {valid.path}")

    def list_dir(self, dir: str) -> list[Entry]:
        """Return the raw entries of a directory, sorted by name.

        Raises:
            StorageError: If the directory cannot be read
        """
        source = self.resolve(dir)
        try:
            return sorted(
                (Entry(name=child.name, is_dir=child.is_dir()) for child in source.iterdir()),
                key=lambda entry: entry.name,
            )
        except OSError as e:
            raise StorageError(f"cannot list {dir or '/'}: {e.strerror}") from e


def filter_entries(entries: Iterable[Entry]) -> Listing:
    """Split entries into files and folders, skipping names starting with a dot."""
    files: list[str] = []
    folders: list[str] = []
    for entry in entries:
        if entry.name.startswith("."):
            continue
        if entry.is_dir:
            folders.append(entry.name)
        else:
            files.append(entry.name)
    return Listing(files=tuple(files), folders=tuple(folders))
