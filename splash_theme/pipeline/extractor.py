"""Dominant swatch extraction using median-cut quantization.

Downscales the image to at most 256×256, drops transparent and near-white
pixels, and quantizes the rest into at most 64 clusters with Pillow's
median-cut quantizer. Clusters holding less than `min_population` of the
sampled pixels are discarded.

Each swatch kind then claims the best remaining cluster inside its HSL
lightness/saturation band. Score is a weighted mean of closeness to the
target saturation (weight 3), closeness to the target lightness (6.5) and
relative population (0.5). A cluster is claimed by at most one kind.

  kind           lightness target [band]   saturation target [band]
  Vibrant        0.50 [0.30, 0.70]         1.0 [0.35, 1.0]
  LightVibrant   0.74 [0.55, 1.00]         1.0 [0.35, 1.0]
  DarkVibrant    0.26 [0.00, 0.45]         1.0 [0.35, 1.0]
  Muted          0.50 [0.30, 0.70]         0.3 [0.00, 0.4]
  LightMuted     0.74 [0.55, 1.00]         0.3 [0.00, 0.4]
  DarkMuted      0.26 [0.00, 0.45]         0.3 [0.00, 0.4]

Kinds with no qualifying cluster are left out. An image Pillow cannot decode
yields an empty Palette.
"""

import io
from dataclasses import dataclass

import numpy as np
from loguru import logger
from PIL import Image, UnidentifiedImageError

from splash_theme.core.colour import lightness_hsl, rgb_to_hex, saturation_hsl
from splash_theme.core.errors import ExtractionFailure
from splash_theme.core.types import Palette, Swatch, SwatchKind

MAX_EDGE = 256
MAX_CLUSTERS = 64
MIN_ALPHA = 125
WHITE_CUTOFF = 250

WEIGHT_SATURATION = 3.0
WEIGHT_LIGHTNESS = 6.5
WEIGHT_POPULATION = 0.5


@dataclass(frozen=True)
class _Target:
    kind: SwatchKind
    lightness: float
    min_lightness: float
    max_lightness: float
    saturation: float
    min_saturation: float
    max_saturation: float


# Vibrant kinds pick first so a strongly coloured cluster is never claimed as Muted.
TARGETS = (
    _Target(SwatchKind.VIBRANT, 0.5, 0.3, 0.7, 1.0, 0.35, 1.0),
    _Target(SwatchKind.LIGHT_VIBRANT, 0.74, 0.55, 1.0, 1.0, 0.35, 1.0),
    _Target(SwatchKind.DARK_VIBRANT, 0.26, 0.0, 0.45, 1.0, 0.35, 1.0),
    _Target(SwatchKind.MUTED, 0.5, 0.3, 0.7, 0.3, 0.0, 0.4),
    _Target(SwatchKind.LIGHT_MUTED, 0.74, 0.55, 1.0, 0.3, 0.0, 0.4),
    _Target(SwatchKind.DARK_MUTED, 0.26, 0.0, 0.45, 0.3, 0.0, 0.4),
)


@dataclass(frozen=True)
class Cluster:
    hex: str
    population: int
    saturation: float
    lightness: float


def _sample_pixels(image: Image.Image) -> np.ndarray:
    """Return an (N, 3) uint8 array of opaque, non-white pixels."""
    image = image.convert('RGBA')
    image.thumbnail((MAX_EDGE, MAX_EDGE))
    pixels = np.asarray(image).reshape(-1, 4)
    opaque = pixels[:, 3] >= MIN_ALPHA
    white = np.all(pixels[:, :3] > WHITE_CUTOFF, axis=1)
    return np.ascontiguousarray(pixels[opaque & ~white][:, :3], dtype=np.uint8)


def quantize(pixels: np.ndarray, max_clusters: int = MAX_CLUSTERS) -> list[Cluster]:
    """Median-cut the pixels into clusters, largest population first."""
    if len(pixels) == 0:
        return []
    strip = Image.fromarray(pixels.reshape(1, -1, 3))
    quantized = strip.quantize(colors=max_clusters, method=Image.Quantize.MEDIANCUT).convert('RGB')
    counts = quantized.getcolors(maxcolors=max_clusters * 4) or []

    clusters = []
    for count, (r, g, b) in counts:
        hex_value = rgb_to_hex(r, g, b)
        clusters.append(
            Cluster(
                hex=hex_value,
                population=int(count),
                saturation=saturation_hsl(hex_value),
                lightness=lightness_hsl(hex_value),
            )
        )
    clusters.sort(key=lambda c: (-c.population, c.hex))
    return clusters


def _score(cluster: Cluster, target: _Target, max_population: int) -> float:
    values = (
        (1.0 - abs(cluster.saturation - target.saturation), WEIGHT_SATURATION),
        (1.0 - abs(cluster.lightness - target.lightness), WEIGHT_LIGHTNESS),
        (cluster.population / max_population, WEIGHT_POPULATION),
    )
    return sum(v * w for v, w in values) / sum(w for _, w in values)


def select_swatches(clusters: list[Cluster]) -> Palette:
    """Assign each swatch kind its best-scoring unclaimed cluster."""
    if not clusters:
        return Palette()
    max_population = max(c.population for c in clusters)
    used: set[str] = set()
    chosen: dict[SwatchKind, Swatch] = {}

    for target in TARGETS:
        best: Cluster | None = None
        best_score = 0.0
        for cluster in clusters:
            if cluster.hex in used:
                continue
            if not target.min_saturation <= cluster.saturation <= target.max_saturation:
                continue
            if not target.min_lightness <= cluster.lightness <= target.max_lightness:
                continue
            score = _score(cluster, target, max_population)
            if best is None or score > best_score:
                best, best_score = cluster, score
        if best is not None:
            used.add(best.hex)
            chosen[target.kind] = Swatch(kind=target.kind, hex=best.hex, population=best.population)

    return Palette.from_swatches(chosen)


def extract_palette(data: bytes, min_population: float = 0.001) -> Palette:
    """Extract up to six named swatches from encoded image bytes."""
    try:
        with Image.open(io.BytesIO(data)) as image:
            image.load()
            pixels = _sample_pixels(image)
    # Pillow reports some corrupt files as SyntaxError
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
        logger.debug(f'Palette extraction skipped, image not decodable: {exc}')
        return Palette()

    try:
        clusters = quantize(pixels)
    except (ValueError, OSError) as exc:
        raise ExtractionFailure(f'Quantization failed: {exc}') from exc

    threshold = min_population * len(pixels)
    kept = [c for c in clusters if c.population >= threshold]
    if len(kept) < len(clusters):
        logger.debug(f'Dropped {len(clusters) - len(kept)} clusters below {min_population:.2%} population')
    return select_swatches(kept)
