"""Helper utility functions for rockloaders."""

import os
import shutil
import subprocess
import sys
import tempfile
from pathlib import Path
from typing import Union

from ..exceptions import FragmentReadError


def is_tool_available(tool_name):
    """Check if a command-line tool is available.

    Args:
        tool_name (str): Name of the tool to check.

    Returns:
        bool: True if the tool is available, False otherwise.
    """
    if shutil.which(tool_name):
        return True

    try:
        if sys.platform == 'win32':
            result = subprocess.run(['where', tool_name],
                                    stdout=subprocess.PIPE,
                                    stderr=subprocess.PIPE,
                                    shell=False,
                                    check=False)
        else:
            result = subprocess.run(['which', tool_name],
                                    stdout=subprocess.PIPE,
                                    stderr=subprocess.PIPE,
                                    check=False)
        return result.returncode == 0
    except OSError:
        return False


def atomic_write(path: Union[str, Path], data: str) -> None:
    """Write text to ``path`` through a temp file and rename.

    Readers see the previous content or the new content, never a partial
    file. The temp file is removed if anything fails.
    """
    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}-", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise


def read_text(path: Union[str, Path]) -> str:
    """Read a UTF-8 source file.

    Raises:
        FragmentReadError: If the file cannot be opened or decoded.
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FragmentReadError(f"Cannot read {path}: {e}") from e
