"""Write a flat gallery manifest for one image folder.

Lists jpg/jpeg/png/gif/webp files in name order as
  [{"filename": "...", "path": "<folder>/<filename>"}, ...]
No image analysis is done.

Example:
    splash-theme gallery DJ-images -o gallery_images.json
"""

import json

from loguru import logger

from splash_theme.core.report import write_json_atomic
from splash_theme.core.types import Command
from splash_theme.pipeline.gallery import build_gallery

command = Command(
    name='gallery',
    help='Write a flat {filename, path} gallery manifest for one folder.',
)


@command.arguments
def arguments(parser) -> None:
    parser.add_argument('directory', nargs='?', default='DJ-images', help='Gallery folder (default: DJ-images)')
    parser.add_argument('-o', '--output', default='gallery_images.json', help='Output path')


@command.run
def run(config, args) -> int:
    images = build_gallery(args.directory)
    write_json_atomic(args.output, json.dumps(images, indent=2) + '\n')
    logger.info(f'Generated {args.output} with {len(images)} images')
    return 0
