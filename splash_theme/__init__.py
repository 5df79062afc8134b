"""splash-theme: splash image manifest builder with brand-safe colour themes."""

__version__ = '0.1.0'
