"""
Crater stamping onto the base elevation field.

Craters are composited one at a time with an overlay blend: the effect of a
crater cell on the terrain scales with the terrain's own height, and a
crater value of 0.5 leaves the terrain untouched. Placements may hang off
any edge of the field; the off-grid part of the crater is dropped.
"""

from dataclasses import dataclass
from typing import List, Union

import numpy as np
import structlog
from PIL import Image

from .alea_prng import AleaPRNG
from .crater_template import CRATER_ROTATION, draw_crater_size, make_crater_stamp
from .data_grid import DataGrid

logger = structlog.get_logger()

DEPTH_SCALE_MIN = 1.0
DEPTH_SCALE_RANGE = 4.0

Number = Union[float, np.ndarray]


def overlay(bottom: Number, top: Number) -> Number:
    """
    Overlay blend of ``top`` onto ``bottom``.

    Above 0.5 the bottom is pulled toward 1 by top, below it is scaled by
    top. Both branches give ``top`` at ``bottom == 0.5``.
    """
    bottom = np.asarray(bottom, dtype=np.float64)
    top = np.asarray(top, dtype=np.float64)

    upper_unit = (1.0 - bottom) / 0.5
    upper_min = bottom - (1.0 - bottom)
    lower_unit = bottom / 0.5

    result = np.where(bottom > 0.5, top * upper_unit + upper_min, top * lower_unit)
    if result.ndim == 0:
        return float(result)
    return result


def depth_scaled_overlay(depth_scale: float):
    """
    Overlay blend with the crater's deviation from 0.5 divided by depth_scale.

    Larger scales give shallower craters.
    """

    def blend(bottom: Number, top: Number) -> Number:
        return overlay(bottom, (np.asarray(top) - 0.5) / depth_scale + 0.5)

    return blend


@dataclass(frozen=True)
class CraterPlacement:
    """Random draws behind one stamped crater."""

    size: int
    offset_x: int
    offset_y: int
    depth_scale: float


def draw_placement(
    prng: AleaPRNG, crater: DataGrid, width: int, height: int
) -> CraterPlacement:
    """
    Draw where and how deep a crater lands.

    Offsets range from fully off the top/left edge to the far edge, so
    craters can be partially or entirely off-grid.
    """
    offset_x = int(-crater.width + prng.random() * width)
    offset_y = int(-crater.height + prng.random() * height)
    depth_scale = DEPTH_SCALE_MIN + prng.random() * DEPTH_SCALE_RANGE
    return CraterPlacement(crater.width, offset_x, offset_y, depth_scale)


class CraterStamper:
    """Stamps template craters onto a field, sequentially."""

    def __init__(
        self,
        template: Image.Image,
        prng: AleaPRNG,
        rotation: float = CRATER_ROTATION,
    ):
        """
        Initialize the stamper.

        Args:
            template: Grayscale crater profile
            prng: Random stream shared with the rest of the generation
            rotation: Fixed crater rotation in radians
        """
        self.template = template
        self.prng = prng
        self.rotation = rotation

    def stamp(self, world: DataGrid, crater: DataGrid, placement: CraterPlacement) -> None:
        """Blend one crater into ``world`` in place."""
        world.blend_mut(
            crater,
            placement.offset_x,
            placement.offset_y,
            depth_scaled_overlay(placement.depth_scale),
        )

    def stamp_all(self, world: DataGrid, count: int) -> List[CraterPlacement]:
        """
        Stamp ``count`` craters onto ``world``.

        Each crater is drawn and blended before the next one, since every
        blend reads the field the previous one wrote.

        Returns:
            Placements in stamping order
        """
        placements = []
        for _ in range(count):
            size = draw_crater_size(self.prng)
            crater = make_crater_stamp(self.template, size, self.rotation)
            placement = draw_placement(self.prng, crater, world.width, world.height)
            self.stamp(world, crater, placement)
            placements.append(placement)

            logger.debug(
                "Crater stamped",
                size=placement.size,
                offset_x=placement.offset_x,
                offset_y=placement.offset_y,
                depth_scale=round(placement.depth_scale, 3),
            )

        logger.info("Craters stamped", count=len(placements))
        return placements
