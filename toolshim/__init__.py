"""Filesystem and archive operations implemented with external command-line tools."""

__version__ = "0.1.0"
