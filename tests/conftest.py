# Stealth Lab test configuration
# Shared fixtures for codec, service and API tests

import os
import tempfile

import numpy as np
import pytest
from PIL import Image

# API modules read their settings at import time
os.environ.setdefault("STEGO_OUTPUT_DIR", tempfile.mkdtemp(prefix="stealth_lab_tests_"))

from src.services.image_steganography.core.pixels import PixelBuffer


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def make_buffer(rng):
    """Build a random RGBA PixelBuffer of the requested size."""
    def _make(width: int, height: int) -> PixelBuffer:
        data = rng.integers(0, 256, size=width * height * 4, dtype=np.uint8)
        return PixelBuffer(width, height, data)
    return _make


@pytest.fixture
def rgba_image(rng):
    """A 64x48 RGBA image with random content."""
    arr = rng.integers(0, 256, size=(48, 64, 4), dtype=np.uint8)
    return Image.fromarray(arr)


@pytest.fixture
def rgb_image():
    """A 100x100 RGB image with a red background and a green square."""
    img_array = np.zeros((100, 100, 3), dtype=np.uint8)
    img_array[:, :, 0] = 255
    img_array[25:75, 25:75, 1] = 255
    return Image.fromarray(img_array)
