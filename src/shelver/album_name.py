"""Album folder name parsing.

An album directory is named ``Artist (YYYY) Title``. Albums only available in
a lossy format carry a trailing `` [MP3]`` marker: one space, then the
bracketed tag, at the very end of the name. ``Title[MP3]`` without the space is
an ordinary title.

Artist and title may contain any printable character in any script. The artist
is matched greedily and the title lazily, so the marker is split off the title
when present and ``format(parse(name)) == name`` holds for every valid name.
"""

from __future__ import annotations

import functools
import re
from typing import Optional

from .errors import NotAnAlbumError
from .models import LOSSY_MARKER, AlbumIdentity, AlbumLocation

# Anything but C0/C1 control characters (newlines included).
_PRINTABLE = r"[^\x00-\x1f\x7f-\x9f]"

ALBUM_PATTERN = re.compile(
    rf"(?P<artist>{_PRINTABLE}+) "
    r"\((?P<year>[0-9]{4})\) "
    rf"(?P<title>{_PRINTABLE}+?)"
    rf"(?P<lossy> {re.escape(LOSSY_MARKER)})?"
)


@functools.lru_cache(maxsize=4096)
def parse_album_name(name: str) -> AlbumIdentity:
    """Parse a directory base name into an :class:`AlbumIdentity`.

    Raises:
        NotAnAlbumError: if the name does not follow the album pattern.
    """
    match = ALBUM_PATTERN.fullmatch(name)
    if match is None:
        raise NotAnAlbumError(name)
    return AlbumIdentity(
        artist=match.group("artist"),
        year=match.group("year"),
        title=match.group("title"),
        is_lossy=match.group("lossy") is not None,
    )


def try_parse_album_name(name: str) -> Optional[AlbumIdentity]:
    try:
        return parse_album_name(name)
    except NotAnAlbumError:
        return None


def is_album_name(name: str) -> bool:
    return try_parse_album_name(name) is not None


def identify_album(location: AlbumLocation) -> Optional[AlbumIdentity]:
    """Parse the directory name of ``location`` once; later calls reuse the result."""
    if location.identity is None:
        location.identity = try_parse_album_name(location.current_path.name)
    return location.identity


def format_album_name(identity: AlbumIdentity) -> str:
    return identity.folder_name
