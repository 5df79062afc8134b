"""Report builder — manifest JSON, atomic writes and text output for splash-theme."""

import json
import os
from typing import Any

from splash_theme.core.types import ImageResult, ImageSet, Palette


def image_set_to_dict(image_set: ImageSet) -> dict[str, Any]:
    """Manifest entry in the shape the front-end reads."""
    desktop, mobile, theme = image_set.desktop, image_set.mobile, image_set.theme
    return {
        'folder': image_set.folder,
        'desktop': desktop.filename if desktop else None,
        'desktopPath': desktop.path if desktop else None,
        'mobile': mobile.filename if mobile else None,
        'mobilePath': mobile.path if mobile else None,
        'primaryColor': theme.primary,
        'secondaryColor': theme.secondary,
        'accentColor': theme.accent,
        'allImages': list(image_set.members),
    }


def manifest_to_json(sets: list[ImageSet]) -> str:
    """Serialize the manifest. Same input always gives the same bytes."""
    return json.dumps([image_set_to_dict(s) for s in sets], indent=4) + '\n'


def write_json_atomic(path: str, text: str) -> None:
    """Write text to path via a temp file in the same directory and os.replace.

    Readers see either the previous file or the complete new one. The file is
    created with the process umask, like any other build output.
    """
    tmp_path = path + '.tmp'
    try:
        with open(tmp_path, 'w', encoding='utf-8') as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def result_to_dict(result: ImageResult) -> dict[str, Any]:
    return {
        'name': result.filename,
        'path': result.path,
        'type': result.orientation.value,
        'width': result.width,
        'height': result.height,
        'failed': result.failed,
        'colors': {
            'primary': result.colors.primary,
            'secondary': result.colors.secondary,
            'accent': result.colors.accent,
        },
    }


def palette_to_dict(palette: Palette) -> dict[str, Any]:
    return {s.kind.value: {'hex': s.hex, 'population': s.population} for s in palette.present()}


def _colour_line(primary: str | None, secondary: str | None, accent: str | None) -> str:
    def show(c: str | None) -> str:
        return c if c else '-'

    return f'  colours: primary {show(primary)}  secondary {show(secondary)}  accent {show(accent)}'


def format_result_text(result: ImageResult) -> str:
    """Format a single image analysis as human-readable text."""
    if result.width is not None:
        dim = f'{result.width}×{result.height}'
    else:
        dim = '?'
    mark = '✗ failed' if result.failed else result.orientation.value
    c = result.colors
    return '\n'.join([f'── {result.path} ({dim}) {mark}', _colour_line(c.primary, c.secondary, c.accent)])


def format_text(sets: list[ImageSet], root: str, output: str | None = None) -> str:
    """Format a built manifest as a human-readable summary."""
    header = f'splash-theme: {root} — {len(sets)} image sets'
    if output:
        header += f' → {output}'
    lines = [header, '']

    for image_set in sets:
        lines.append(f'── {image_set.folder}')
        desktop = image_set.desktop.filename if image_set.desktop else '-'
        mobile = image_set.mobile.filename if image_set.mobile else '-'
        lines.append(f'  desktop: {desktop}  mobile: {mobile}')
        t = image_set.theme
        lines.append(_colour_line(t.primary, t.secondary, t.accent))
        lines.append('')

    return '\n'.join(lines)
