"""CLI subcommands.

Every module in this package that defines a `command` object is
auto-registered by splash_theme.registry.discover(). The module docstring is
the command's full help text (`splash-theme help <command>`).
"""
