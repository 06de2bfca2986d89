"""
Base elevation field from layered noise.

All ten layers of ``NOISE_LAYERS`` are sampled from one seeded source and
rescaled to their own ranges, then combined:

1. detail = (detail_1 + ... + detail_6) * detail_mask, rescaled to [0, 0.15]
2. raw = global_mask * (regional_a + regional_b + detail), rescaled to [0, 1]
3. smoothstep between 0.35 and 0.65, separating lowland from highland
4. rescale to [0.25, 0.75]
"""

from typing import Dict, Optional, Sequence, Union

import numpy as np
import structlog
from opensimplex import OpenSimplex

from ..config.layers import (
    DETAIL_LAYERS,
    DETAIL_SUM_RANGE,
    FINAL_RANGE,
    NOISE_LAYERS,
    RAW_RANGE,
    SHAPE_EDGES,
    NoiseLayer,
)
from .data_grid import DataGrid
from .noise_field import NoiseField, generate_noise_field
from .normalizer import remap_data_grid

logger = structlog.get_logger()


def smoothstep(
    x: Union[float, np.ndarray], edge0: float, edge1: float
) -> Union[float, np.ndarray]:
    """Cubic Hermite step: 0 below edge0, 1 above edge1, C1 in between."""
    t = np.clip((x - edge0) / (edge1 - edge0), 0.0, 1.0)
    result = t * t * (3.0 - 2.0 * t)
    if np.ndim(result) == 0:
        return float(result)
    return result


class LayerCompositor:
    """Builds the shaped, rescaled base elevation field."""

    def __init__(
        self,
        width: int,
        height: int,
        tiling: float,
        seed: int,
        workers: int = 1,
        layers: Sequence[NoiseLayer] = NOISE_LAYERS,
    ):
        """
        Initialize the compositor.

        Args:
            width: Grid width
            height: Grid height
            tiling: Base spatial period
            seed: Seed for the shared noise source
            workers: Threads used per noise field
            layers: Layer table; must name every layer the combination uses
        """
        self.width = width
        self.height = height
        self.tiling = tiling
        self.workers = workers
        self.layers = tuple(layers)
        self.source = OpenSimplex(seed=seed)

    def generate_layers(self) -> Dict[str, DataGrid]:
        """Sample and rescale every layer, in table order."""
        fields = {}
        for layer in self.layers:
            grid = generate_noise_field(
                self.source,
                NoiseField(layer.frequency, layer.skew, layer.stretch),
                self.width,
                self.height,
                self.tiling,
                workers=self.workers,
            )
            remap_data_grid(grid, *layer.target)
            fields[layer.name] = grid
        return fields

    def combine(self, fields: Dict[str, DataGrid]) -> DataGrid:
        """Combine rescaled layers into the final base field."""
        detail = sum(fields[name].values for name in DETAIL_LAYERS)
        detail = DataGrid.from_values(
            self.width, self.height, detail * fields["detail_mask"].values
        )
        remap_data_grid(detail, *DETAIL_SUM_RANGE)

        raw = fields["global_mask"].values * (
            fields["regional_a"].values + fields["regional_b"].values + detail.values
        )
        world = DataGrid.from_values(self.width, self.height, raw)
        remap_data_grid(world, *RAW_RANGE)

        world.values = smoothstep(world.values, *SHAPE_EDGES)
        remap_data_grid(world, *FINAL_RANGE)
        return world

    def compose(self, fields: Optional[Dict[str, DataGrid]] = None) -> DataGrid:
        """
        Generate the base elevation field.

        Args:
            fields: Pre-generated rescaled layers; sampled when omitted

        Returns:
            DataGrid spanning [0.25, 0.75]
        """
        if fields is None:
            fields = self.generate_layers()
        world = self.combine(fields)
        logger.info(
            "Base elevation composed",
            width=self.width,
            height=self.height,
            layers=len(fields),
            mean=round(world.mean(), 4),
        )
        return world
