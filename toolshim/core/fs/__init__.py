"""Tool-backed filesystem operations"""
from .operations import ToolFileSystem

__all__ = ['ToolFileSystem']
