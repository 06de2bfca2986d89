"""
Coherent noise sampled over grid coordinates.

One seeded OpenSimplex source is reused for every layer; the sampling
transform (frequency, skew, stretch) is what makes the layers differ. Cell
(x, y) samples the source at::

    u = (x * tiling * frequency + skew * y) / width
    v = (y * tiling * frequency / stretch) / height

Each row has a constant ``v``, so a row is one vectorized
``noise2array`` call. Rows can be spread over a thread pool in contiguous
bands; every band writes only its own slice of the output buffer.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np
import structlog
from opensimplex import OpenSimplex

from .data_grid import DataGrid

logger = structlog.get_logger()


@dataclass(frozen=True)
class NoiseField:
    """Sampling transform for one noise layer."""

    frequency: float
    skew: float = 0.0
    stretch: float = 1.0

    def __post_init__(self):
        if self.stretch == 0:
            raise ValueError("stretch must be non-zero")


def sample_coordinates(
    x: float,
    y: float,
    field: NoiseField,
    width: int,
    height: int,
    tiling: float,
) -> Tuple[float, float]:
    """Map grid cell (x, y) to the noise-space coordinate (u, v)."""
    u = (x * tiling * field.frequency + field.skew * y) / width
    v = (y * tiling * field.frequency / field.stretch) / height
    return u, v


def _row_bands(height: int, workers: int) -> List[Tuple[int, int]]:
    """Split [0, height) into at most ``workers`` contiguous bands."""
    bands = np.array_split(np.arange(height), max(1, min(workers, height)))
    return [(int(band[0]), int(band[-1]) + 1) for band in bands if band.size]


def _fill_rows(
    out: np.ndarray,
    row_start: int,
    source: OpenSimplex,
    field: NoiseField,
    width: int,
    height: int,
    tiling: float,
) -> None:
    """Evaluate rows ``row_start .. row_start + len(out)`` into ``out``."""
    xs = np.arange(width, dtype=np.float64)
    for offset in range(out.shape[0]):
        y = float(row_start + offset)
        u, v = sample_coordinates(xs, y, field, width, height, tiling)
        out[offset, :] = source.noise2array(u, np.array([v], dtype=np.float64))[0]


def generate_noise_field(
    source: OpenSimplex,
    field: NoiseField,
    width: int,
    height: int,
    tiling: float,
    workers: int = 1,
) -> DataGrid:
    """
    Produce a ``width x height`` DataGrid of raw noise values.

    Args:
        source: Seeded OpenSimplex noise source
        field: Sampling transform for this layer
        width: Grid width
        height: Grid height
        tiling: Base spatial period of the terrain
        workers: Number of threads evaluating row bands

    Returns:
        DataGrid holding the unnormalized noise
    """
    grid = DataGrid(width, height)
    if width == 0 or height == 0:
        return grid

    bands = _row_bands(height, workers)

    if len(bands) == 1:
        _fill_rows(grid.values, 0, source, field, width, height, tiling)
    else:
        with ThreadPoolExecutor(max_workers=len(bands)) as executor:
            futures = [
                executor.submit(
                    _fill_rows,
                    grid.values[start:stop],
                    start,
                    source,
                    field,
                    width,
                    height,
                    tiling,
                )
                for start, stop in bands
            ]
            # Wait for every band and surface worker exceptions
            for future in futures:
                future.result()

    logger.debug(
        "Noise field generated",
        frequency=field.frequency,
        skew=field.skew,
        stretch=field.stretch,
        bands=len(bands),
    )
    return grid
