"""Filesystem access for the compiler.

This package contains the FileSource interface, the local disk
implementation and glob-based file discovery.
"""

from .base import FileSource
from .discovery import FileDiscoverer
from .local import LocalFileSource

__all__ = ["FileSource", "FileDiscoverer", "LocalFileSource"]
