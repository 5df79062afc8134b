"""Shared types for splash-theme: Swatch, Palette, ImageColors, ImageResult, ImageSet, Command."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SwatchKind(str, Enum):
    """Perceptual swatch kinds. Declaration order is the extraction order."""

    VIBRANT = 'Vibrant'
    DARK_VIBRANT = 'DarkVibrant'
    LIGHT_VIBRANT = 'LightVibrant'
    MUTED = 'Muted'
    DARK_MUTED = 'DarkMuted'
    LIGHT_MUTED = 'LightMuted'


class Orientation(str, Enum):
    LANDSCAPE = 'landscape'
    PORTRAIT = 'portrait'
    SQUARE = 'square'
    UNKNOWN = 'unknown'


@dataclass(frozen=True)
class Swatch:
    """A representative colour of one pixel cluster."""

    kind: SwatchKind
    hex: str  # lower-case '#rrggbb'
    population: int = 0  # pixels in the cluster


@dataclass(frozen=True)
class Palette:
    """Extracted swatches, at most one per kind. Any subset may be absent."""

    vibrant: Swatch | None = None
    dark_vibrant: Swatch | None = None
    light_vibrant: Swatch | None = None
    muted: Swatch | None = None
    dark_muted: Swatch | None = None
    light_muted: Swatch | None = None

    @classmethod
    def from_swatches(cls, swatches: dict[SwatchKind, Swatch]) -> Palette:
        return cls(**{_FIELD_FOR_KIND[kind]: swatch for kind, swatch in swatches.items()})

    def get(self, kind: SwatchKind) -> Swatch | None:
        return getattr(self, _FIELD_FOR_KIND[kind])

    def present(self) -> Iterator[Swatch]:
        """Yield the extracted swatches in extraction order."""
        for kind in SwatchKind:
            swatch = self.get(kind)
            if swatch is not None:
                yield swatch

    def __len__(self) -> int:
        return sum(1 for _ in self.present())


_FIELD_FOR_KIND = {
    SwatchKind.VIBRANT: 'vibrant',
    SwatchKind.DARK_VIBRANT: 'dark_vibrant',
    SwatchKind.LIGHT_VIBRANT: 'light_vibrant',
    SwatchKind.MUTED: 'muted',
    SwatchKind.DARK_MUTED: 'dark_muted',
    SwatchKind.LIGHT_MUTED: 'light_muted',
}


@dataclass(frozen=True)
class ImageColors:
    """Final three-slot theme for one image. Unset slots are None."""

    primary: str | None = None
    secondary: str | None = None
    accent: str | None = None

    def is_empty(self) -> bool:
        return self.primary is None and self.secondary is None and self.accent is None


@dataclass(frozen=True)
class ImageResult:
    """Outcome of analysing one file. Created once, never mutated."""

    filename: str
    path: str
    orientation: Orientation
    colors: ImageColors = field(default_factory=ImageColors)
    failed: bool = False
    width: int | None = None
    height: int | None = None

    def is_eligible(self) -> bool:
        """Failed results only take part in selection if they still carry colours."""
        return not (self.failed and self.colors.is_empty())


@dataclass(frozen=True)
class ImageSet:
    """One folder's desktop/mobile pick and shared theme."""

    folder: str
    desktop: ImageResult | None
    mobile: ImageResult | None
    theme: ImageColors
    members: tuple[str, ...] = ()  # every entry path in listing order, unfiltered


class Command:
    """A self-registering CLI subcommand.

    Usage in a command module:

        command = Command(name='refine', help='Refine colours against the brand palette')

        @command.arguments
        def arguments(parser):
            parser.add_argument('colour', nargs='+')

        @command.run
        def run(config, args):
            ...
            return 0
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._arguments_fn: Callable | None = None
        self._run_fn: Callable | None = None

    def arguments(self, fn: Callable) -> Callable:
        """Decorator to register the subparser configuration function."""
        self._arguments_fn = fn
        return fn

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def configure(self, parser: Any) -> None:
        if self._arguments_fn is not None:
            self._arguments_fn(parser)

    def execute(self, config: Any, args: Any) -> int:
        """Execute the command's run function. Returns the process exit code."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        return self._run_fn(config, args) or 0
