"""Refine candidate colours against the brand palette.

For each colour: blend halfway (in Lab) toward the background if its WCAG
contrast is under the threshold, snap to the nearest brand colour by ΔE,
then grey it out entirely if still over the saturation threshold.

Uses --brand / --background and the SPLASH_* thresholds.

Example:
    splash-theme refine '#ff3300' '#223344'
    splash-theme --background '#ffffff' refine '#c97f24'
"""

from splash_theme.core.colour import contrast_ratio, normalize_hex
from splash_theme.core.types import Command
from splash_theme.pipeline.refiner import refine

command = Command(
    name='refine',
    help='Refine colours to the brand palette (contrast blend, ΔE snap, de-neon).',
)


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('colours', nargs='+', metavar='HEX', help='Candidate colours')


@command.run
def run(config, args) -> int:
    config.validate()
    for raw in args.colours:
        candidate = normalize_hex(raw)
        refined = refine(
            candidate,
            config.brand_palette,
            config.background,
            contrast_threshold=config.contrast_threshold,
            saturation_threshold=config.saturation_threshold,
        )
        ratio = contrast_ratio(candidate, config.background)
        print(f'{candidate} → {refined}  (contrast {ratio:.2f} vs {config.background})')
    return 0
