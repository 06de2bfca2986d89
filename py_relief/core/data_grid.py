"""
Bounds-checked 2D scalar field.

Every stage of terrain generation reads and writes elevation through a
DataGrid: noise fields, the composed base field, crater stamps and the
finished heightmap. Values live in a float64 NumPy array of shape
(height, width), so cell (x, y) is ``values[y, x]``.
"""

from numbers import Integral
from typing import Callable, Optional

import numpy as np
from PIL import Image

BlendFn = Callable[[np.ndarray, np.ndarray], np.ndarray]

# 8-bit decode/encode scale. 256 rather than 255 keeps decoded values
# strictly below 1.0.
PIXEL_SCALE = 256.0


class DataGrid:
    """
    Rectangular grid of double-precision scalars.

    Out-of-range access is never an error: ``get`` returns None and ``set``
    does nothing.
    """

    def __init__(self, width: int, height: int):
        """
        Create a zero-filled grid.

        Args:
            width: Number of columns (x extent)
            height: Number of rows (y extent)
        """
        if width < 0 or height < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.values = np.zeros((self.height, self.width), dtype=np.float64)

    @classmethod
    def from_values(cls, width: int, height: int, source) -> "DataGrid":
        """
        Build a grid from a caller-provided matrix.

        The matrix is deep-copied; later changes to ``source`` do not reach
        the grid.

        Args:
            width: Number of columns
            height: Number of rows
            source: Array-like of shape (height, width)
        """
        values = np.array(source, dtype=np.float64, copy=True)
        if values.shape != (height, width):
            raise ValueError(
                f"Source shape {values.shape} does not match {height}x{width} grid"
            )
        grid = cls(width, height)
        grid.values = values
        return grid

    @classmethod
    def from_image(cls, image: Image.Image) -> "DataGrid":
        """
        Decode a single-channel 8-bit image into values in [0, 1).

        Each pixel becomes ``pixel / 256.0``. Images in other modes are
        converted to grayscale first.
        """
        if image.mode != "L":
            image = image.convert("L")
        width, height = image.size
        pixels = np.asarray(image, dtype=np.float64).reshape(height, width)
        return cls.from_values(width, height, pixels / PIXEL_SCALE)

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether (x, y) addresses a cell of this grid."""
        if not (isinstance(x, Integral) and isinstance(y, Integral)):
            return False
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Optional[float]:
        """Return the value at (x, y), or None when out of range."""
        if not self.in_bounds(x, y):
            return None
        return float(self.values[int(y), int(x)])

    def set(self, x: int, y: int, value: float) -> None:
        """Store value at (x, y); out-of-range coordinates are ignored."""
        if not self.in_bounds(x, y):
            return
        self.values[int(y), int(x)] = value

    def min(self) -> float:
        return float(np.min(self.values))

    def max(self) -> float:
        return float(np.max(self.values))

    def mean(self) -> float:
        return float(np.mean(self.values))

    def to_image(self) -> Image.Image:
        """
        Encode as a single-channel 8-bit image.

        Pixels are ``value * 256`` truncated toward zero and saturated to
        [0, 255]. This undoes ``from_image`` only up to 8-bit quantization.
        """
        scaled = np.trunc(self.values * PIXEL_SCALE)
        pixels = np.clip(scaled, 0, 255).astype(np.uint8)
        return Image.fromarray(pixels)

    def blend_mut(
        self, other: "DataGrid", offset_x: int, offset_y: int, blend_fn: BlendFn
    ) -> None:
        """
        Composite ``other`` onto this grid in place.

        Cell (x, y) of ``other`` lands on (x + offset_x, y + offset_y). Cells
        whose destination falls outside this grid, on any side, are skipped.
        For the overlapping region the destination becomes
        ``blend_fn(bottom, top)``, where both arguments are arrays covering
        that region, so ``blend_fn`` must be element-wise.

        Args:
            other: Grid to composite on top
            offset_x: Destination x of other's column 0
            offset_y: Destination y of other's row 0
            blend_fn: Element-wise function of (bottom, top)
        """
        dest_x0 = max(offset_x, 0)
        dest_y0 = max(offset_y, 0)
        dest_x1 = min(offset_x + other.width, self.width)
        dest_y1 = min(offset_y + other.height, self.height)

        if dest_x0 >= dest_x1 or dest_y0 >= dest_y1:
            return

        src_x0 = dest_x0 - offset_x
        src_y0 = dest_y0 - offset_y
        src_x1 = dest_x1 - offset_x
        src_y1 = dest_y1 - offset_y

        bottom = self.values[dest_y0:dest_y1, dest_x0:dest_x1]
        top = other.values[src_y0:src_y1, src_x0:src_x1]
        self.values[dest_y0:dest_y1, dest_x0:dest_x1] = blend_fn(bottom, top)

    def copy(self) -> "DataGrid":
        """Return a deep copy with the same dimensions."""
        return DataGrid.from_values(self.width, self.height, self.values)

    __copy__ = copy

    def __deepcopy__(self, memo) -> "DataGrid":
        return self.copy()

    def __eq__(self, other) -> bool:
        if not isinstance(other, DataGrid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.values, other.values)
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"DataGrid(width={self.width}, height={self.height})"
