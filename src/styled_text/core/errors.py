"""Errors raised while composing a styled document."""


class CompositionError(Exception):
    """Error while composing a styled document."""

    pass


class ImageResolutionError(CompositionError):
    """The image resolver failed unexpectedly (as opposed to finding nothing)."""

    pass
