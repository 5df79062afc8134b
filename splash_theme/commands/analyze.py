"""Analyse individual images: dimensions, orientation and colour theme.

Runs the same per-image step the build uses, without any folder selection.
Unreadable files are reported as 'unknown' and failed rather than aborting.

Example:
    splash-theme analyze splash-images/1/hero.jpg
    splash-theme analyze splash-images/1/*.png --json
"""

import json

from splash_theme.core.report import format_result_text, result_to_dict
from splash_theme.core.types import Command
from splash_theme.pipeline.analyzer import analyze

command = Command(
    name='analyze',
    help='Analyse images: orientation and primary/secondary/accent colours.',
)


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('images', nargs='+', help='Image files')
    parser.add_argument('-j', '--json', action='store_true', help='Output JSON instead of text')


@command.run
def run(config, args) -> int:
    config.validate()
    results = [analyze(path, config) for path in args.images]
    if args.json:
        print(json.dumps([result_to_dict(r) for r in results], indent=2))
    else:
        print('\n\n'.join(format_result_text(r) for r in results))
    return 1 if any(r.failed for r in results) else 0
