"""Show the raw swatches extracted from an image, before refinement.

Lists each swatch kind found (Vibrant, DarkVibrant, LightVibrant, Muted,
DarkMuted, LightMuted) with its hex colour and cluster population. Kinds
with no qualifying cluster are omitted. Useful for seeing why an image got
the theme it did.

Example:
    splash-theme palette splash-images/3/beach.jpg
"""

import json
import sys

from splash_theme.core.report import palette_to_dict
from splash_theme.core.types import Command
from splash_theme.pipeline.extractor import extract_palette

command = Command(
    name='palette',
    help='Show the raw extracted swatches of an image.',
)


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('image', help='Image file')
    parser.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')


@command.run
def run(config, args) -> int:
    try:
        with open(args.image, 'rb') as f:
            data = f.read()
    except OSError as exc:
        print(f'Error: could not read {args.image}: {exc}', file=sys.stderr)
        return 1

    swatches = palette_to_dict(extract_palette(data, min_population=config.min_population))
    if args.json:
        print(json.dumps(swatches, indent=2))
    elif not swatches:
        print(f'{args.image}: no swatches')
    else:
        print(args.image)
        for kind, swatch in swatches.items():
            print(f'  {kind:<13} {swatch["hex"]}  ({swatch["population"]} px)')
    return 0
