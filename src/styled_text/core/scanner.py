"""Image marker scanning and image size constraints."""

import logging
from typing import Optional

from PIL import Image

from styled_text.core.errors import CompositionError, ImageResolutionError
from styled_text.formatting.ir import IMAGE_MARKER_PATTERN, ImagePlaceholder, ImageResolver

logger = logging.getLogger(__name__)

__all__ = [
    "CompositionError",
    "DEFAULT_MAX_IMAGE_WIDTH",
    "IMAGE_MARKER_PATTERN",
    "ImageResolutionError",
    "constrain_image",
    "scan",
]

DEFAULT_MAX_IMAGE_WIDTH = 800


def constrain_image(image: Image.Image, max_width: Optional[float] = None) -> Image.Image:
    """Scale an image so neither dimension exceeds ``max_width``.

    Images already within the bound are returned unchanged. Larger images
    are scaled uniformly by the smaller of the width and height ratios.
    A non-positive bound returns the image unscaled.

    Args:
        image: The resolved image (never modified)
        max_width: Bound for both dimensions (default: DEFAULT_MAX_IMAGE_WIDTH)

    Returns:
        The original image, or a resized copy
    """
    if max_width is None:
        max_width = DEFAULT_MAX_IMAGE_WIDTH
    if max_width <= 0:
        return image

    width, height = image.size
    if width <= max_width and height <= max_width:
        return image

    scale = min(max_width / width, max_width / height)
    # Rounding may overshoot a fractional bound; pixel sizes stay within it
    limit = int(max_width)
    new_size = (
        max(1, min(limit, round(width * scale))),
        max(1, min(limit, round(height * scale))),
    )
    return image.resize(new_size, Image.Resampling.LANCZOS)


def scan(
    text: str,
    image_resolver: ImageResolver,
    max_width: Optional[float] = None,
) -> list[ImagePlaceholder]:
    """Find image markers in ``text`` and resolve them to placeholders.

    Markers the resolver cannot find are left as plain text. Offsets are
    always in the coordinate space of the original ``text``.

    Args:
        text: Raw text to scan
        image_resolver: Maps a marker's source reference to an image or None
        max_width: Bound passed to constrain_image

    Returns:
        Placeholders sorted by offset, ascending

    Raises:
        ImageResolutionError: If the resolver raises
    """
    placeholders: list[ImagePlaceholder] = []

    for match in IMAGE_MARKER_PATTERN.finditer(text):
        alt_text, source = match.group(1), match.group(2)
        try:
            image = image_resolver(source)
        except Exception as e:
            raise ImageResolutionError(
                f"Image resolver failed for {source!r} at offset {match.start()}: {e}"
            ) from e

        if image is None:
            logger.debug("No image for %r at offset %d, leaving marker as text", source, match.start())
            continue

        placeholders.append(
            ImagePlaceholder(
                offset=match.start(),
                source=source,
                image=constrain_image(image, max_width),
                alt_text=alt_text,
            )
        )

    return placeholders
