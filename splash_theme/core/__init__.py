"""splash_theme.core — Foundation layer.

Contains colour math, data types, configuration, .env loading, logging setup
and manifest serialization. This module has NO dependencies on
splash_theme.pipeline, splash_theme.commands or splash_theme.registry.
Only stdlib, numpy, PIL and loguru are allowed here.
"""
