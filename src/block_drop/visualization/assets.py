from __future__ import annotations

import logging
import os
from typing import List, Optional

import pygame

logger = logging.getLogger(__name__)

DEFAULT_DECORATION_COUNT = 10
FILE_PATTERN = "block_image_{index}.jpeg"


class DecorationCatalog:
    """Block skins loaded from ``block_image_1.jpeg`` .. ``block_image_N.jpeg``.

    The game only needs ``count``. Images are loaded on demand by ``load`` and
    ``image`` returns ``None`` until then (or when a file is missing), in which
    case the renderer draws a flat colour instead.
    """

    def __init__(self, directory: Optional[str], count: int = DEFAULT_DECORATION_COUNT, cell_size: int = 30) -> None:
        if count < 1:
            raise ValueError("a decoration catalog needs at least one entry")
        self.directory = directory
        self.count = int(count)
        self.cell_size = int(cell_size)
        self._images: List[Optional[pygame.Surface]] = [None] * self.count

    def path_for(self, decoration: int) -> str:
        return os.path.join(self.directory or "", FILE_PATTERN.format(index=decoration + 1))

    def load(self) -> int:
        """Load every image that exists. Returns how many were loaded."""
        loaded = 0
        if self.directory is None:
            return 0
        for decoration in range(self.count):
            path = self.path_for(decoration)
            if not os.path.exists(path):
                logger.warning("Missing block image %s, using flat colour", path)
                continue
            try:
                surf = pygame.image.load(path)
            except pygame.error as exc:
                logger.warning("Could not load %s: %s", path, exc)
                continue
            self._images[decoration] = pygame.transform.smoothscale(surf, (self.cell_size, self.cell_size))
            loaded += 1
        return loaded

    def image(self, decoration: Optional[int]) -> Optional[pygame.Surface]:
        if decoration is None or not 0 <= decoration < self.count:
            return None
        return self._images[decoration]
