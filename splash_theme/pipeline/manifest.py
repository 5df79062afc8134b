"""Walk <root>/<digits>/ folders and assemble one ImageSet per folder.

Folders are visited in numeric order of their names and each folder's entries
in lexicographic order, so the manifest does not depend on filesystem listing
order or on which worker finishes first. Non-digit folders are ignored.
"""

import concurrent.futures
import os
import re

from loguru import logger

from splash_theme.core.config import ThemeConfig
from splash_theme.core.errors import DirectoryReadFailure
from splash_theme.core.types import ImageSet
from splash_theme.pipeline.assembler import assemble

FOLDER_RE = re.compile(r'[0-9]+')


def list_entries(directory: str) -> list[str]:
    """Sorted entry names of directory. Raises DirectoryReadFailure."""
    try:
        return sorted(os.listdir(directory))
    except OSError as exc:
        raise DirectoryReadFailure(f'Could not read directory: {directory}: {exc}') from exc


def list_set_folders(root_dir: str) -> list[str]:
    """Digit-named subdirectories of root_dir, in numeric order."""
    names = [
        name
        for name in list_entries(root_dir)
        if FOLDER_RE.fullmatch(name) and os.path.isdir(os.path.join(root_dir, name))
    ]
    return sorted(names, key=lambda name: (int(name), name))


def build(root_dir: str, config: ThemeConfig) -> list[ImageSet]:
    """Build the manifest for root_dir.

    Raises ConfigurationError before touching the filesystem if config is
    unusable, and DirectoryReadFailure if root_dir itself cannot be listed.
    Unreadable set folders are logged and skipped.
    """
    config.validate()
    folders = list_set_folders(root_dir)
    logger.info(f'Found {len(folders)} set folders in {root_dir}')

    sets: list[ImageSet] = []
    with concurrent.futures.ThreadPoolExecutor(max_workers=config.workers) as pool:
        for folder in folders:
            folder_dir = os.path.join(root_dir, folder)
            try:
                names = list_entries(folder_dir)
            except DirectoryReadFailure as exc:
                logger.warning(f'{exc}. Skipping.')
                continue

            logger.info(f'Processing folder: {folder}')
            image_set = assemble(folder, folder_dir, names, config, pool=pool)
            if image_set is not None:
                sets.append(image_set)

    return sets
