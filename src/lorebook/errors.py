"""Errors raised while compiling phrases and building lorebooks."""


class LorebookError(Exception):
    """Base class for all lorebook building errors."""


class PhraseFormatError(LorebookError, ValueError):
    """A raw pattern string is not in the `/pattern/flags` form."""


class ProximityRangeError(LorebookError, TypeError):
    """A proximity operator was given a distance of the wrong shape."""


class UnknownPresetError(LorebookError, KeyError):
    """No strategy preset is registered under the requested name."""


class LorebookLoadError(LorebookError):
    """A lorebook script could not be loaded."""
