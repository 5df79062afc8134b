"""Shared fixtures: loguru → caplog bridge and small image writers."""

from pathlib import Path

import pytest
from loguru import logger
from PIL import Image


@pytest.fixture
def caplog(caplog: pytest.LogCaptureFixture):
    """Route loguru records into pytest's caplog."""
    handler_id = logger.add(caplog.handler, format='{message}', level=0)
    yield caplog
    logger.remove(handler_id)


def write_image(path: Path, size: tuple[int, int], colour: tuple[int, int, int] = (128, 128, 128)) -> Path:
    """Write a solid-colour image; format follows the file extension."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new('RGB', size, colour).save(path)
    return path


def write_split_image(
    path: Path,
    size: tuple[int, int],
    left: tuple[int, int, int],
    right: tuple[int, int, int],
) -> Path:
    """Write an image whose left half is one colour and right half another."""
    path.parent.mkdir(parents=True, exist_ok=True)
    image = Image.new('RGB', size, right)
    image.paste(left, (0, 0, size[0] // 2, size[1]))
    image.save(path)
    return path


@pytest.fixture
def make_image():
    return write_image


@pytest.fixture
def make_split_image():
    return write_split_image
