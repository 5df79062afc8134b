"""Build the splash-screen manifest from numbered image folders.

Walks <root>/<digits>/ folders in numeric order. In each folder, image files
(jpg jpeg png gif webp bmp tif tiff svg) are analysed in name order: the
first landscape image becomes the desktop image, the first portrait image the
mobile image, and square images fill whichever slot is still free. The set's
primary/secondary/accent colours come from the desktop image (else mobile),
extracted from its dominant swatches and snapped to the brand palette.

Folders with neither a desktop nor a mobile image are left out. The JSON
manifest is written atomically; an unchanged tree always produces identical
bytes.

Output fields per set:
  folder, desktop, desktopPath, mobile, mobilePath,
  primaryColor, secondaryColor, accentColor, allImages

Example:
    splash-theme build splash-images -o image_data.json
    splash-theme --brand '#6a22d9,#71baed' --workers 8 build splash-images
    splash-theme build splash-images --json
"""

import sys

from loguru import logger

from splash_theme.core.report import format_text, manifest_to_json, write_json_atomic
from splash_theme.core.types import Command
from splash_theme.pipeline.manifest import build

command = Command(
    name='build',
    help='Build the image manifest (desktop/mobile pick + colour theme per numbered folder).',
)


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('root', nargs='?', default='splash-images', help='Folder holding <digits>/ sets')
    parser.add_argument('-o', '--output', default='image_data.json', help='Manifest path (default: image_data.json)')
    parser.add_argument('-j', '--json', action='store_true', help='Print the manifest JSON instead of a summary')


@command.run
def run(config, args) -> int:
    sets = build(args.root, config)
    text = manifest_to_json(sets)
    try:
        write_json_atomic(args.output, text)
    except OSError as exc:
        print(f'Error: could not write {args.output}: {exc}', file=sys.stderr)
        return 1
    logger.info(f'Successfully built {args.output} with {len(sets)} image sets.')

    if args.json:
        sys.stdout.write(text)
    else:
        print(format_text(sets, args.root, output=args.output))
    return 0
