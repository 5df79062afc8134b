"""Pipeline configuration.

ThemeConfig is an explicit, immutable value passed into every pipeline entry
point. Defaults can be overridden from SPLASH_* environment variables (see
splash_theme.core.env) and then from command-line options.

  SPLASH_BRAND_PALETTE          comma-separated hex colours
  SPLASH_BACKGROUND             hex colour the theme is rendered against
  SPLASH_CONTRAST_THRESHOLD     minimum WCAG contrast before blending (4.5)
  SPLASH_SATURATION_THRESHOLD   HSL saturation above which colours are greyed (0.8)
  SPLASH_MIN_POPULATION         minimum cluster share of sampled pixels (0.001)
  SPLASH_WORKERS                analysis worker threads (CPU count)
  SPLASH_IO_TIMEOUT             seconds to wait for one image (30)
  SPLASH_LOG_LEVEL              loguru level (INFO)
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace

from splash_theme.core.colour import normalize_hex
from splash_theme.core.errors import ConfigurationError, InvalidColor

DEFAULT_BRAND_PALETTE: tuple[str, ...] = (
    '#6a22d9',
    '#4e4aa5',
    '#71baed',
    '#c97f24',
    '#815117',
    '#ebcf8c',
)
DEFAULT_BACKGROUND = '#000000'


def _default_workers() -> int:
    return os.cpu_count() or 4


@dataclass(frozen=True)
class ThemeConfig:
    brand_palette: tuple[str, ...] = DEFAULT_BRAND_PALETTE
    background: str = DEFAULT_BACKGROUND
    contrast_threshold: float = 4.5
    saturation_threshold: float = 0.8
    min_population: float = 0.001
    workers: int = field(default_factory=_default_workers)
    io_timeout: float = 30.0
    log_level: str = 'INFO'

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ThemeConfig:
        env = os.environ if environ is None else environ
        overrides: dict = {}
        if env.get('SPLASH_BRAND_PALETTE') is not None:
            overrides['brand_palette'] = parse_palette(env['SPLASH_BRAND_PALETTE'])
        if env.get('SPLASH_BACKGROUND'):
            overrides['background'] = env['SPLASH_BACKGROUND']
        for key, name, cast in (
            ('SPLASH_CONTRAST_THRESHOLD', 'contrast_threshold', float),
            ('SPLASH_SATURATION_THRESHOLD', 'saturation_threshold', float),
            ('SPLASH_MIN_POPULATION', 'min_population', float),
            ('SPLASH_WORKERS', 'workers', int),
            ('SPLASH_IO_TIMEOUT', 'io_timeout', float),
        ):
            raw = env.get(key)
            if raw:
                try:
                    overrides[name] = cast(raw)
                except ValueError as exc:
                    raise ConfigurationError(f'{key}={raw!r} is not a valid {cast.__name__}') from exc
        if env.get('SPLASH_LOG_LEVEL'):
            overrides['log_level'] = env['SPLASH_LOG_LEVEL'].upper()
        return cls().with_overrides(**overrides)

    def with_overrides(self, **overrides) -> ThemeConfig:
        """Return a normalized copy with the non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        updated = replace(self, **changes)
        try:
            return replace(
                updated,
                brand_palette=tuple(normalize_hex(c) for c in updated.brand_palette),
                background=normalize_hex(updated.background),
            )
        except InvalidColor as exc:
            raise ConfigurationError(str(exc)) from exc

    def validate(self) -> ThemeConfig:
        """Raise ConfigurationError unless the config can drive a build."""
        if not self.brand_palette:
            raise ConfigurationError('Brand palette is empty')
        if self.workers < 1:
            raise ConfigurationError(f'workers must be >= 1, got {self.workers}')
        if self.io_timeout <= 0:
            raise ConfigurationError(f'io_timeout must be > 0, got {self.io_timeout}')
        if not 0.0 <= self.saturation_threshold <= 1.0:
            raise ConfigurationError(f'saturation_threshold must be in [0, 1], got {self.saturation_threshold}')
        if not 0.0 <= self.min_population < 1.0:
            raise ConfigurationError(f'min_population must be in [0, 1), got {self.min_population}')
        return self


def parse_palette(raw: str | Iterable[str]) -> tuple[str, ...]:
    """Split a comma-separated palette string. Empty entries are ignored."""
    items = raw.split(',') if isinstance(raw, str) else raw
    return tuple(item.strip() for item in items if item.strip())
