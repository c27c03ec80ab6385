"""Version lookup for rockloaders."""

import re
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

# Set at release time; development checkouts fall back to pyproject.toml
__BUILD_VERSION__ = None


def get_version() -> str:
    """
    Get the current version.

    Prefers the build-time constant, then installed package metadata, then
    the version line of a development checkout's pyproject.toml.

    Returns:
        str: Version string, or "unknown"
    """
    if __BUILD_VERSION__:
        return __BUILD_VERSION__

    try:
        return version("rockloaders")
    except PackageNotFoundError:
        pass

    try:
        if getattr(sys, 'frozen', False):
            pyproject_path = Path(sys._MEIPASS) / 'pyproject.toml'
        else:
            pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"

        if pyproject_path.exists():
            content = pyproject_path.read_text(encoding='utf-8')
            match = re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE)
            if match and re.match(r'^\d+\.\d+\.\d+(a\d+|b\d+|rc\d+)?$', match.group(1)):
                return match.group(1)
    except OSError:
        pass

    return "unknown"


__version__ = get_version()
