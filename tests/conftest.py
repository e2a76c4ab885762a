import numpy as np
import pytest
from PIL import Image

from tileposter.image_processing import PosterProcessor
from tileposter.models import PREVIEW_HEIGHT, PREVIEW_WIDTH


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def white_image():
    return Image.new("RGBA", (PREVIEW_WIDTH, PREVIEW_HEIGHT), (255, 255, 255, 255))


@pytest.fixture
def photo():
    """Small image with a horizontal color gradient and partial transparency."""
    width, height = 64, 48
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[..., 0] = np.linspace(0, 255, width, dtype=np.uint8)[None, :]
    pixels[..., 1] = 128
    pixels[..., 2] = np.linspace(255, 0, height, dtype=np.uint8)[:, None]
    pixels[..., 3] = 255
    pixels[:10, :10, 3] = 77
    return Image.fromarray(pixels)


@pytest.fixture
def processor():
    return PosterProcessor(seed=42)


@pytest.fixture
def image_file(tmp_path, photo):
    path = tmp_path / "photo.png"
    photo.save(path)
    return path
