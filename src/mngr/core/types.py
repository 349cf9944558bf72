"""Core type definitions.

All values here are request-scoped: they are built fresh for every request
and never cached or shared between requests.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidatedURL:
    """Trusted, parsed form of a request path.

    Only ``mngr.core.validation.parse_url`` builds these. ``dir`` is relative
    to the data root, has no leading or trailing slash and is ``""`` for the
    root itself.
    """

    command: str
    dir: str
    value: str

    @property
    def path(self) -> str:
        """Logical path of the addressed page or folder."""
        return join_path(self.dir, self.value)


@dataclass
class Page:
    """Content of one stored file."""

    path: str
    body: bytes

    @property
    def text(self) -> str:
        """Body decoded for display in templates."""
        return self.body.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class Entry:
    """Raw directory entry returned by the store."""

    name: str
    is_dir: bool


@dataclass(frozen=True)
class Listing:
    """Directory content split into files and folders, hidden names excluded."""

    files: tuple[str, ...]
    folders: tuple[str, ...]


@dataclass(frozen=True)
class Breadcrumb:
    """Breadcrumb navigation item."""

    title: str
    dir: str


def join_path(dir: str, name: str) -> str:
    """Join a relative directory and a name with a single slash."""
    if not dir:
        return name
    if not name:
        return dir
    return f"{dir}/{name}"


def build_breadcrumbs(dir: str, root_title: str = "root") -> list[Breadcrumb]:
    """Build breadcrumbs from the data root down to ``dir``.

    Args:
        dir: Sanitized relative directory (e.g., "docs/guides")
        root_title: Title used for the data root crumb

    Returns:
        One crumb per directory level, the data root first
    """
    crumbs = [Breadcrumb(title=root_title, dir="")]
    current = ""
    for part in dir.split("/") if dir else []:
        current = join_path(current, part)
        crumbs.append(Breadcrumb(title=part, dir=current))
    return crumbs
