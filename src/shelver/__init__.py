"""shelver core package.

shelver keeps a music collection laid out as ``Root/Genre/Artist/Artist (Year) Title``:

- **album_name**: parsing album directory names into an identity
- **genre_resolver**: alias and genre lookup deciding where an album belongs
- **relocator**: moving a single album directory, dry-run aware
- **tree_walker**: the collection-wide sorting pass and its statistics
- **flac_audit**: finding albums that are not entirely lossless
- **cleanup**: removing directories left empty by moves
- **playlist**: daily and monthly ``.m3u`` playlists of new albums
- **config**: loading and saving the YAML configuration
- **validation**: schema checks run on every configuration document

The command-line entry point lives in ``shelver.cli``.
"""

__version__ = "0.4.0"

from .album_name import parse_album_name  # noqa: E402
from .cleanup import delete_empty_folders  # noqa: E402
from .flac_audit import find_lossy_albums  # noqa: E402
from .genre_resolver import resolve_destination  # noqa: E402
from .relocator import relocate_album  # noqa: E402
from .tree_walker import sort_albums  # noqa: E402

__all__ = [
    "__version__",
    "delete_empty_folders",
    "find_lossy_albums",
    "parse_album_name",
    "relocate_album",
    "resolve_destination",
    "sort_albums",
]
