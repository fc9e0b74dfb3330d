"""Base abstraction for the filesystem the compiler reads from.

The compiler never touches the disk directly. Glob expansion and byte
reads go through a FileSource, which lets a host build tool (or a test)
supply its own filesystem.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence


class FileSource(ABC):
    """Abstract base class for glob expansion and file reads.

    Implementations must be safe to call concurrently from one event loop.
    """

    @abstractmethod
    async def expand(self, pattern: str, ignore: Sequence[str] = ()) -> list[str]:
        """Expand a glob pattern to the regular files it matches.

        Args:
            pattern: Glob pattern, already joined to a working directory
            ignore: Glob patterns whose matches are removed from the result

        Returns:
            Matching file paths in discovery order (not sorted)

        Raises:
            DiscoveryError: If the pattern cannot be expanded
        """
        pass

    @abstractmethod
    async def read(self, path: str) -> bytes:
        """Read the full contents of a file.

        Raises:
            ReadError: If the file cannot be read
        """
        pass
