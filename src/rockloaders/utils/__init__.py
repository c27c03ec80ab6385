"""Utility modules for rockloaders."""

from .console import (
    _rich_success,
    _rich_error,
    _rich_warning,
    _rich_info,
    _rich_echo,
    _rich_blank_line,
    _create_files_table,
    _print_table,
    _plain,
    _get_console,
    STATUS_SYMBOLS
)
from .helpers import atomic_write, is_tool_available, read_text

__all__ = [
    '_rich_success',
    '_rich_error',
    '_rich_warning',
    '_rich_info',
    '_rich_echo',
    '_rich_blank_line',
    '_create_files_table',
    '_print_table',
    '_plain',
    '_get_console',
    'STATUS_SYMBOLS',
    'atomic_write',
    'is_tool_available',
    'read_text',
]
