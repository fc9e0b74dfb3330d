"""Glob-based discovery of the files a manifest includes."""

import logging
import os
from collections.abc import Sequence

from ..core.concurrency import fan_out
from .base import FileSource

logger = logging.getLogger(__name__)


class FileDiscoverer:
    """Expand include patterns into a flat file list.

    Every include pattern is expanded on its own and the results are
    concatenated in pattern order. Files matched by two patterns appear
    twice; the list is not deduplicated.
    """

    def __init__(self, source: FileSource):
        self.source = source

    async def discover(
        self,
        includes: Sequence[str],
        excludes: Sequence[str],
        working_dir: str | os.PathLike[str],
    ) -> list[str]:
        """Expand includes relative to working_dir, filtering out excludes.

        Raises:
            DiscoveryError: If any pattern fails to expand
        """
        ignore = [os.path.join(working_dir, pattern) for pattern in excludes]

        groups = await fan_out(
            self.source.expand(os.path.join(working_dir, pattern), ignore)
            for pattern in includes
        )

        files = [path for group in groups for path in group]
        logger.debug("Discovered %d files in %s", len(files), working_dir)
        return files
