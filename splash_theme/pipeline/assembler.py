"""Pick one desktop and one mobile image per folder.

Selection walks the analysed images in listing order; the first match for a
slot wins and is never replaced:
  - landscape → desktop
  - portrait  → mobile
  - square    → desktop if free, else mobile
Failed results with no colours are skipped. The walk stops as soon as both
slots are filled. The folder's theme comes from the desktop image, or the
mobile image when there is no desktop.
"""

import concurrent.futures
import os
import time
from collections.abc import Callable, Iterable, Iterator, Sequence

from loguru import logger

from splash_theme.core.config import ThemeConfig
from splash_theme.core.types import ImageResult, ImageSet, Orientation
from splash_theme.pipeline.analyzer import analyze, failed_result

IMAGE_EXTENSIONS = frozenset({'.jpg', '.jpeg', '.png', '.gif', '.webp', '.bmp', '.tif', '.tiff', '.svg'})

Analyse = Callable[[str, ThemeConfig], ImageResult]

# How often to check whether a queued file has started.
_START_POLL = 0.05


def is_image(name: str, extensions: frozenset[str] = IMAGE_EXTENSIONS) -> bool:
    return os.path.splitext(name)[1].lower() in extensions


def select(folder: str, results: Iterable[ImageResult], members: Sequence[str] = ()) -> ImageSet | None:
    """Apply the first-match-wins policy. Returns None when neither slot fills."""
    desktop: ImageResult | None = None
    mobile: ImageResult | None = None

    for result in results:
        if not result.is_eligible():
            continue
        if result.orientation is Orientation.LANDSCAPE:
            if desktop is None:
                desktop = result
                logger.info(f"    Assigned '{result.filename}' as DESKTOP")
        elif result.orientation is Orientation.PORTRAIT:
            if mobile is None:
                mobile = result
                logger.info(f"    Assigned '{result.filename}' as MOBILE")
        elif result.orientation is Orientation.SQUARE:
            if desktop is None:
                desktop = result
                logger.info(f"    Assigned square '{result.filename}' as DESKTOP (fallback)")
            elif mobile is None:
                mobile = result
                logger.info(f"    Assigned square '{result.filename}' as MOBILE (fallback)")
        if desktop is not None and mobile is not None:
            break

    if desktop is None and mobile is None:
        logger.warning(f'  No suitable desktop or mobile images found in folder: {folder}')
        return None
    if desktop is None:
        logger.warning(f'  No suitable LANDSCAPE image found in folder: {folder}')
    if mobile is None:
        logger.warning(f'  No suitable PORTRAIT image found in folder: {folder}')

    theme = desktop.colors if desktop is not None else mobile.colors
    return ImageSet(
        folder=folder,
        desktop=desktop,
        mobile=mobile,
        theme=theme,
        members=tuple(members),
    )


def _run_timed(
    analyse: Analyse, path: str, config: ThemeConfig, started: list[float | None], index: int
) -> ImageResult:
    started[index] = time.monotonic()
    return analyse(path, config)


def _analyse_in_order(
    paths: list[str],
    config: ThemeConfig,
    analyse: Analyse,
    pool: concurrent.futures.Executor | None,
) -> Iterator[ImageResult]:
    """Yield analysis results in path order, however they complete.

    Without a pool, files are analysed lazily so an early stop skips the rest.
    With a pool, each file gets `io_timeout` seconds from the moment its task
    starts running; time spent queued behind other files does not count.
    """
    if pool is None:
        for path in paths:
            yield analyse(path, config)
        return

    started: list[float | None] = [None] * len(paths)
    futures = [pool.submit(_run_timed, analyse, path, config, started, i) for i, path in enumerate(paths)]
    try:
        for i, (path, future) in enumerate(zip(paths, futures)):
            while started[i] is None and not future.done():
                concurrent.futures.wait([future], timeout=_START_POLL)
            remaining = config.io_timeout
            if started[i] is not None:
                remaining = max(0.0, config.io_timeout - (time.monotonic() - started[i]))
            try:
                yield future.result(timeout=remaining)
            except concurrent.futures.TimeoutError:
                logger.warning(f'Timed out after {config.io_timeout}s analysing {path}')
                yield failed_result(path)
    finally:
        # Selection may stop early; drop work that has not started yet.
        for future in futures:
            future.cancel()


def assemble(
    folder: str,
    folder_dir: str,
    names: Sequence[str],
    config: ThemeConfig,
    pool: concurrent.futures.Executor | None = None,
    analyse: Analyse = analyze,
) -> ImageSet | None:
    """Analyse a folder's images and select its desktop/mobile pair."""
    members = [os.path.join(folder_dir, name) for name in names]
    paths = [path for name, path in zip(names, members) if is_image(name)]
    results = _analyse_in_order(paths, config, analyse, pool)
    try:
        return select(folder, results, members)
    finally:
        results.close()
