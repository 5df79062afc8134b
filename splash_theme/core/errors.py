"""Error taxonomy for splash-theme.

Only ConfigurationError (and a root-level DirectoryReadFailure) is fatal to a
build. The others are caught by the component that raised them, logged with
the offending file or folder, and turned into a degraded result.
"""


class SplashThemeError(Exception):
    """Base class for every error raised by splash-theme."""


class InvalidColor(SplashThemeError, ValueError):
    """A colour string is not a valid #rgb / #rrggbb hex value."""


class ConfigurationError(SplashThemeError):
    """The pipeline configuration is unusable (e.g. empty brand palette)."""


class DecodeFailure(SplashThemeError):
    """An image could not be read or its dimensions could not be probed."""


class ExtractionFailure(SplashThemeError):
    """Palette extraction blew up on a decodable image."""


class DirectoryReadFailure(SplashThemeError):
    """A directory could not be listed."""
