"""Image resolvers for image markers.

A resolver is any callable mapping a marker's source reference to a
Pillow image, or None when there is no such image. These two cover the
common cases of images on disk and images already in memory.
"""

import logging
from collections import OrderedDict
from pathlib import Path
from typing import Mapping, Optional

from PIL import Image

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 128


class DirectoryImageResolver:
    """Load images relative to a root directory, caching loaded images.

    Missing files and references that escape the root resolve to None.
    Misses are not cached, so a file saved after its marker was typed is
    picked up on the next lookup. Files that exist but cannot be decoded
    raise, since that points at broken content rather than a missing image.
    """

    def __init__(self, root: Path, cache_size: int = DEFAULT_CACHE_SIZE) -> None:
        """Initialize the resolver.

        Args:
            root: Directory that image references are resolved against
            cache_size: Most images kept in memory; the least recently used
                is evicted first
        """
        self.root = Path(root).resolve()
        self.cache_size = cache_size
        self._cache: "OrderedDict[str, Image.Image]" = OrderedDict()

    def __call__(self, source: str) -> Optional[Image.Image]:
        if source in self._cache:
            self._cache.move_to_end(source)
            return self._cache[source]

        image = self._load(source)
        if image is not None and self.cache_size > 0:
            self._cache[source] = image
            while len(self._cache) > self.cache_size:
                evicted, _ = self._cache.popitem(last=False)
                logger.debug("Evicted %r from image cache", evicted)
        return image

    def _load(self, source: str) -> Optional[Image.Image]:
        path = (self.root / source).resolve()
        if not path.is_relative_to(self.root):
            logger.debug("Image reference %r escapes %s", source, self.root)
            return None
        if not path.is_file():
            return None

        with Image.open(path) as img:
            img.load()
            return img.copy()

    def clear_cache(self) -> None:
        """Forget every cached image."""
        self._cache.clear()


class MappingImageResolver:
    """Resolve references from an in-memory mapping of name to image."""

    def __init__(self, images: Mapping[str, Image.Image]) -> None:
        self.images = dict(images)

    def __call__(self, source: str) -> Optional[Image.Image]:
        return self.images.get(source)
