"""Error types raised by the poster pipeline.

AIDEV-NOTE: The UI catches PosterError and reports it; none of these should
ever reach the Qt event loop.
"""


class PosterError(Exception):
    """Base class for all poster pipeline errors."""


class InputError(PosterError):
    """The supplied file is missing or is not a decodable image."""


class NotReadyError(PosterError):
    """An operation was requested before an image was loaded or placed."""


class ParameterOutOfRange(PosterError, ValueError):
    """A parameter value is outside its valid range."""
