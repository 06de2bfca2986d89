"""
Crater stamps derived from a grayscale template image.

The template is loaded once per generation. Each stamp resizes it to a
random diameter with a cubic filter, rotates it about its centre with
bicubic interpolation, and decodes it into a DataGrid. Pixels uncovered by
the rotation are filled with mid-gray (128), which decodes to exactly 0.5,
the neutral value of the overlay blend.
"""

import math
from pathlib import Path
from typing import Union

import structlog
from PIL import Image, UnidentifiedImageError

from .alea_prng import AleaPRNG
from .data_grid import DataGrid

logger = structlog.get_logger()

CRATER_MIN_SIZE = 32
CRATER_SIZE_RANGE = 128
CRATER_ROTATION = 1.8  # radians
NEUTRAL_FILL = 128


class CraterTemplateError(RuntimeError):
    """The crater template could not be read or decoded."""


def load_crater_template(path: Union[str, Path]) -> Image.Image:
    """
    Load the crater template as a single-channel 8-bit image.

    Raises:
        CraterTemplateError: If the file is missing or not a readable image
    """
    path = Path(path)
    try:
        with Image.open(path) as image:
            image.load()
            template = image.convert("L")
    except FileNotFoundError as e:
        raise CraterTemplateError(f"Crater template not found: {path}") from e
    except UnidentifiedImageError as e:
        raise CraterTemplateError(f"Crater template is not an image: {path}") from e
    except OSError as e:
        raise CraterTemplateError(f"Crater template could not be decoded: {path}") from e

    logger.info("Crater template loaded", path=str(path), size=template.size)
    return template


def draw_crater_size(prng: AleaPRNG) -> int:
    """Draw a crater diameter in pixels from [32, 160)."""
    return int(CRATER_MIN_SIZE + prng.random() * CRATER_SIZE_RANGE)


def make_crater_stamp(
    template: Image.Image, size: int, rotation: float = CRATER_ROTATION
) -> DataGrid:
    """
    Build one crater stamp.

    Args:
        template: Grayscale crater profile
        size: Stamp diameter in pixels
        rotation: Clockwise rotation about the centre, in radians

    Returns:
        DataGrid of ``size x size`` values centred on 0.5
    """
    if size < 1:
        raise ValueError(f"Crater size must be positive, got {size}")
    if template.mode != "L":
        template = template.convert("L")

    resized = template.resize((size, size), resample=Image.Resampling.BICUBIC)
    # PIL rotates counter-clockwise for positive angles
    rotated = resized.rotate(
        -math.degrees(rotation),
        resample=Image.Resampling.BICUBIC,
        expand=False,
        fillcolor=NEUTRAL_FILL,
    )
    return DataGrid.from_image(rotated)
