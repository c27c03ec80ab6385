"""Discovery of loader fragment files on disk."""

import glob
import os
from pathlib import Path
from typing import List, Union

from ..constants import BUNDLED_LOADERS_DIR, STYLE_EXTENSION


def find_style_fragments(directory: Union[str, Path]) -> List[Path]:
    """Find style fragments directly inside a directory.

    Args:
        directory (Union[str, Path]): Directory to scan (not recursive).

    Returns:
        List[Path]: Readable fragment files, sorted by file name.
    """
    if not os.path.isdir(directory):
        return []

    pattern = os.path.join(glob.escape(str(directory)), f"*.{STYLE_EXTENSION}")
    seen = set()
    fragments = []
    for file_path in glob.glob(pattern):
        abs_path = os.path.abspath(file_path)
        if abs_path in seen:
            continue
        seen.add(abs_path)
        path = Path(abs_path)
        if path.is_file() and _is_readable(path):
            fragments.append(path)

    return sorted(fragments, key=lambda p: p.name)


def loader_name(fragment: Path) -> str:
    """Loader name of a fragment: its file name without the extension."""
    return fragment.name[:-(len(STYLE_EXTENSION) + 1)]


def available_loaders() -> List[str]:
    """Names of the loaders bundled with this package."""
    return [loader_name(path) for path in find_style_fragments(BUNDLED_LOADERS_DIR)]


def _is_readable(file_path: Path) -> bool:
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            f.read(1)
        return True
    except (PermissionError, UnicodeDecodeError, OSError):
        return False
