"""Shared fixtures for heightmap tests."""

import numpy as np
import pytest
from PIL import Image

from py_relief.core.terrain_generator import GenerationConfig


def make_crater_image(size: int = 64) -> Image.Image:
    """Radial bowl with a bright rim on a mid-gray background."""
    coords = np.arange(size) - (size - 1) / 2
    xx, yy = np.meshgrid(coords, coords)
    r = np.sqrt(xx**2 + yy**2) / (size * 0.4)

    pixels = np.full((size, size), 128.0)
    bowl = r < 0.8
    pixels[bowl] = 128 - 100 * (1 - (r[bowl] / 0.8) ** 2)
    rim = (r >= 0.8) & (r < 1.2)
    pixels[rim] = 128 + 60 * np.sin(np.pi * (r[rim] - 0.8) / 0.4)
    return Image.fromarray(np.clip(pixels, 0, 255).astype(np.uint8))


@pytest.fixture
def crater_image():
    """In-memory crater template."""
    return make_crater_image()


@pytest.fixture
def crater_template_path(tmp_path, crater_image):
    """Crater template written to disk as a PNG."""
    path = tmp_path / "crater.png"
    crater_image.save(path)
    return path


@pytest.fixture
def small_config(crater_template_path):
    """Small but complete generation configuration."""
    return GenerationConfig(
        width=48,
        height=40,
        tiling=8.0,
        crater_count=5,
        seed=1234,
        crater_template_path=crater_template_path,
    )
