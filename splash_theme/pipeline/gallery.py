"""Flat gallery listing: every web image in one folder as {filename, path}."""

import os

from splash_theme.core.errors import DirectoryReadFailure

GALLERY_EXTENSIONS = frozenset({'.jpg', '.jpeg', '.png', '.gif', '.webp'})


def build_gallery(directory: str) -> list[dict[str, str]]:
    if not os.path.isdir(directory):
        raise DirectoryReadFailure(f'Gallery folder not found: {directory}')
    try:
        names = sorted(os.listdir(directory))
    except OSError as exc:
        raise DirectoryReadFailure(f'Could not read directory: {directory}: {exc}') from exc

    prefix = directory.rstrip('/\\')
    return [
        {'filename': name, 'path': f'{prefix}/{name}'}
        for name in names
        if os.path.splitext(name)[1].lower() in GALLERY_EXTENSIONS and os.path.isfile(os.path.join(directory, name))
    ]
