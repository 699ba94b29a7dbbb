"""Error types raised while screening density maps."""

__all__ = [
    'ScreenerError',
    'UsageError',
    'InputNotFoundError',
    'UnsupportedFormatError',
    'DegenerateInputError',
]


class ScreenerError(Exception):
    """Base class for all screening failures."""


class UsageError(ScreenerError, ValueError):
    """Required argument missing or out of range (e.g. grid size)."""


class InputNotFoundError(ScreenerError, FileNotFoundError):
    """Referenced input file does not exist."""


class UnsupportedFormatError(ScreenerError, ValueError):
    """Input is neither a density table nor a supported raster."""


class DegenerateInputError(ScreenerError, ValueError):
    """Spectrum cannot be normalized because the DC term is zero."""
