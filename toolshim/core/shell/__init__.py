"""Shell dialects: quoting and directory scoping"""
from .dialect import (
    ShellDialect,
    PosixShell,
    WindowsCmdShell,
    get_dialect,
    available_dialects
)

__all__ = [
    'ShellDialect',
    'PosixShell',
    'WindowsCmdShell',
    'get_dialect',
    'available_dialects'
]
