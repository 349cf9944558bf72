"""Request path validation.

Turns a raw request path such as ``/view/docs/guide.txt`` into a
``ValidatedURL``. Nothing downstream ever looks at the raw path again, so
this module is the only place that decides which paths may reach the data
root.
"""

import re

from mngr.core.errors import ValidationError
from mngr.core.types import ValidatedURL

COMMANDS = frozenset({"list", "view", "edit", "save", "folder", "new"})

# Leading dot is excluded, which also rules out "." and ".."
SEGMENT_PATTERN = re.compile(r"[A-Za-z0-9_-][A-Za-z0-9._-]*")


def parse_url(raw_path: str) -> ValidatedURL:
    """Parse a raw request path into a ValidatedURL.

    The first segment selects the command. For ``list`` the rest of the path
    is the directory; for every other command the last segment is the value
    and the segments before it are the directory.

    Args:
        raw_path: Decoded request path, e.g. "/edit/docs/guide.txt"

    Returns:
        ValidatedURL with every field populated

    Raises:
        ValidationError: If the path is malformed in any way
    """
    if not raw_path.startswith("/"):
        raise ValidationError(f"path must start with '/': {raw_path!r}")

    command, _, rest = raw_path[1:].partition("/")
    if command not in COMMANDS:
        raise ValidationError(f"unknown command: {command!r}")

    segments = _split_segments(rest)

    if command == "list":
        return ValidatedURL(command=command, dir="/".join(segments), value="")

    if not segments:
        raise ValidationError(f"{command} requires a name")
    if command == "new" and len(segments) != 1:
        raise ValidationError(f"new expects a single kind, got {rest!r}")

    return ValidatedURL(
        command=command,
        dir="/".join(segments[:-1]),
        value=segments[-1],
    )


def parse_dir(raw: str) -> str:
    """Sanitize a free-form relative directory string.

    Args:
        raw: Directory such as "docs/guides/" (trailing slash optional)

    Returns:
        Normalized directory without trailing slash, "" for the data root

    Raises:
        ValidationError: If any segment is not allowed
    """
    return "/".join(_split_segments(raw))


def _split_segments(rest: str) -> list[str]:
    trimmed = rest.rstrip("/")
    if not trimmed:
        return []

    segments = trimmed.split("/")
    for segment in segments:
        if segment == "..":
            raise ValidationError("path traversal is not allowed")
        if not segment:
            raise ValidationError(f"empty path segment in {rest!r}")
        if SEGMENT_PATTERN.fullmatch(segment) is None:
            raise ValidationError(f"invalid path segment: {segment!r}")
    return segments
