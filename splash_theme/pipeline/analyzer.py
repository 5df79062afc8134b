"""Per-image analysis: dimensions, orientation and a three-slot colour theme.

analyze() never raises. A file that cannot be read or probed comes back as
orientation 'unknown' with failed=True and no colours. Palette extraction is
attempted only after a successful probe, and its failure leaves the
orientation intact with all colour slots unset.
"""

import io
import os
import re
import xml.etree.ElementTree as ET

from loguru import logger
from PIL import Image, UnidentifiedImageError

from splash_theme.core.config import ThemeConfig
from splash_theme.core.errors import DecodeFailure, ExtractionFailure
from splash_theme.core.report import palette_to_dict
from splash_theme.core.types import ImageColors, ImageResult, Orientation, Palette
from splash_theme.pipeline.extractor import extract_palette
from splash_theme.pipeline.refiner import refine

_SVG_LENGTH_RE = re.compile(r'\s*([0-9]*\.?[0-9]+(?:[eE][+-]?[0-9]+)?)')


def classify(width: int, height: int) -> Orientation:
    if width > height:
        return Orientation.LANDSCAPE
    if height > width:
        return Orientation.PORTRAIT
    return Orientation.SQUARE


def _svg_length(value: str | None) -> float | None:
    if not value or value.strip().endswith('%'):
        return None
    m = _SVG_LENGTH_RE.match(value)
    return float(m.group(1)) if m else None


def probe_svg(data: bytes) -> tuple[int, int]:
    """Read width/height from the root <svg> element, falling back to viewBox."""
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise DecodeFailure(f'Invalid SVG: {exc}') from exc
    if not root.tag.endswith('svg'):
        raise DecodeFailure(f'Root element is <{root.tag}>, not <svg>')

    width, height = _svg_length(root.get('width')), _svg_length(root.get('height'))
    if width is None or height is None:
        parts = (root.get('viewBox') or '').replace(',', ' ').split()
        if len(parts) == 4:
            try:
                width, height = float(parts[2]), float(parts[3])
            except ValueError:
                pass
    if not width or not height:
        raise DecodeFailure('SVG has no usable width/height or viewBox')
    return int(round(width)), int(round(height))


def probe_dimensions(data: bytes, filename: str) -> tuple[int, int]:
    """Return (width, height) without decoding pixel data. Raises DecodeFailure."""
    if filename.lower().endswith('.svg'):
        return probe_svg(data)
    try:
        with Image.open(io.BytesIO(data)) as image:
            return image.size
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as exc:
        raise DecodeFailure(str(exc)) from exc


def _distinct(hex_value: str, *taken: str | None) -> bool:
    return all(hex_value != t for t in taken if t)


def assign_colours(palette: Palette, config: ThemeConfig) -> ImageColors:
    """Map extracted swatches onto primary/secondary/accent.

    First-choice swatches (Vibrant, Muted, LightVibrant) are refined against
    the brand palette; fallbacks are used as extracted. Any slot still empty
    is then topped up from the remaining swatches in extraction order.
    """

    def refined(hex_value: str) -> str:
        return refine(
            hex_value,
            config.brand_palette,
            config.background,
            contrast_threshold=config.contrast_threshold,
            saturation_threshold=config.saturation_threshold,
        )

    primary = secondary = accent = None

    if palette.vibrant:
        primary = refined(palette.vibrant.hex)
    elif palette.dark_vibrant:
        primary = palette.dark_vibrant.hex

    if palette.muted:
        secondary = refined(palette.muted.hex)
    elif palette.dark_muted:
        secondary = palette.dark_muted.hex

    if palette.light_vibrant:
        accent = refined(palette.light_vibrant.hex)
    elif palette.light_muted and _distinct(palette.light_muted.hex, primary, secondary):
        accent = palette.light_muted.hex
    elif palette.dark_vibrant and _distinct(palette.dark_vibrant.hex, primary, secondary):
        accent = palette.dark_vibrant.hex

    # Top-up: fill whatever is still empty, preferring unused swatches.
    available = [s.hex for s in palette.present()]
    if available:
        if primary is None:
            primary = available[0]

        if secondary is None:
            other = next((h for h in available if h != primary), None)
            if other is not None:
                secondary = other
            elif len(available) > 1:
                secondary = available[1]

        if accent is None:
            other = next((h for h in available if h != primary and h != secondary), None)
            if other is not None:
                accent = other
            elif len(available) > 2:
                accent = available[2]
            elif len(available) > 1 and available[1] != primary:
                accent = available[1]
            elif available[0] != primary and available[0] != secondary:
                accent = available[0]

    return ImageColors(primary=primary, secondary=secondary, accent=accent)


def failed_result(path: str) -> ImageResult:
    """Result for a file that could not be probed (or timed out)."""
    return ImageResult(filename=os.path.basename(path), path=path, orientation=Orientation.UNKNOWN, failed=True)


def analyze(path: str, config: ThemeConfig) -> ImageResult:
    filename = os.path.basename(path)
    try:
        with open(path, 'rb') as f:
            data = f.read()
        width, height = probe_dimensions(data, filename)
    except (OSError, DecodeFailure) as exc:
        logger.warning(f'Could not get dimensions for {path}: {exc}')
        return failed_result(path)

    orientation = classify(width, height)
    logger.debug(f'{filename}: {width}x{height} {orientation.value}')

    colors = ImageColors()
    try:
        palette = extract_palette(data, min_population=config.min_population)
    except ExtractionFailure as exc:
        logger.warning(f'Could not extract colours for {path}: {exc}')
    else:
        if not palette:
            logger.warning(f'No colour swatches extracted for {path}')
        else:
            logger.debug(f'Raw palette for {filename}: {palette_to_dict(palette)}')
            colors = assign_colours(palette, config)
            logger.debug(f'Colours for {filename}: P-{colors.primary} S-{colors.secondary} A-{colors.accent}')

    return ImageResult(
        filename=filename,
        path=path,
        orientation=orientation,
        colors=colors,
        width=width,
        height=height,
    )
