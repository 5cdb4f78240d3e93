"""Core composition logic for Styled Text."""

from styled_text.core.compositor import (
    CompositionError,
    Compositor,
    ImageResolutionError,
    compose,
    compose_text,
)
from styled_text.core.resolvers import DirectoryImageResolver, MappingImageResolver
from styled_text.core.scanner import constrain_image, scan

__all__ = [
    "CompositionError",
    "Compositor",
    "ImageResolutionError",
    "compose",
    "compose_text",
    "DirectoryImageResolver",
    "MappingImageResolver",
    "constrain_image",
    "scan",
]
