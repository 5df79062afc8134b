"""Pull an extracted colour onto the brand palette.

Three steps, each applied once:
  1. If the candidate's WCAG contrast against the background is below
     `contrast_threshold`, replace it with the Lab midpoint of candidate and
     background. The blended colour is not re-checked.
  2. Snap to the brand colour with the smallest ΔE (first in palette order
     on ties).
  3. If the snapped colour's HSL saturation exceeds `saturation_threshold`,
     desaturate it completely.

The result is always a brand colour or a fully desaturated brand colour.
"""

from collections.abc import Sequence

from splash_theme.core.colour import blend_lab, contrast_ratio, delta_e, desaturate, normalize_hex, saturation_hsl
from splash_theme.core.errors import ConfigurationError


def nearest_brand_colour(colour: str, brand_palette: Sequence[str]) -> str:
    """Return the palette entry closest to colour by ΔE."""
    if not brand_palette:
        raise ConfigurationError('Brand palette is empty')
    nearest = normalize_hex(brand_palette[0])
    nearest_dist = delta_e(colour, nearest)
    for brand in brand_palette[1:]:
        dist = delta_e(colour, brand)
        if dist < nearest_dist:
            nearest, nearest_dist = normalize_hex(brand), dist
    return nearest


def refine(
    candidate: str,
    brand_palette: Sequence[str],
    background: str,
    contrast_threshold: float = 4.5,
    saturation_threshold: float = 0.8,
) -> str:
    if not brand_palette:
        raise ConfigurationError('Brand palette is empty')
    colour = normalize_hex(candidate)

    if contrast_ratio(colour, background) < contrast_threshold:
        colour = blend_lab(colour, background, 0.5)

    colour = nearest_brand_colour(colour, brand_palette)

    if saturation_hsl(colour) > saturation_threshold:
        colour = desaturate(colour, 1.0)

    return colour
