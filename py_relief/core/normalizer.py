"""
Range statistics and affine rescaling of DataGrids.

A field whose minimum equals its maximum has no meaningful source range.
Instead of dividing by zero, such fields collapse to the lower bound of the
target range.
"""

from typing import Union

import numpy as np
import structlog

from .data_grid import DataGrid

logger = structlog.get_logger()

# Source ranges at or below this width are treated as flat
DEGENERATE_RANGE = 1e-12

Number = Union[float, np.ndarray]


def min_in(grid: DataGrid) -> float:
    """Smallest value in the grid."""
    return grid.min()


def max_in(grid: DataGrid) -> float:
    """Largest value in the grid."""
    return grid.max()


def remap(x: Number, min_value: float, max_value: float, a: float, b: float) -> Number:
    """
    Rescale x from [min_value, max_value] to [a, b].

    Works on scalars and arrays alike. When the source range is flat the
    result is ``a`` (an ``a``-filled array for array input).
    """
    delta_in = max_value - min_value
    if abs(delta_in) <= DEGENERATE_RANGE:
        if np.ndim(x) == 0:
            return float(a)
        return np.full(np.shape(x), a, dtype=np.float64)

    delta_out = b - a
    return delta_out * ((x - min_value) / delta_in) + a


def remap_data_grid(grid: DataGrid, a: float, b: float) -> DataGrid:
    """
    Rescale every cell in place so the grid spans exactly [a, b].

    The source range is the grid's own min/max. Flat grids are filled
    with ``a``.

    Returns:
        The same grid, for chaining
    """
    min_value = min_in(grid)
    max_value = max_in(grid)

    if abs(max_value - min_value) <= DEGENERATE_RANGE:
        logger.warning(
            "Flat field remapped to lower bound",
            value=min_value,
            target_min=a,
            target_max=b,
        )

    grid.values = np.asarray(remap(grid.values, min_value, max_value, a, b), dtype=np.float64)
    return grid
