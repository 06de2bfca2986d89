"""
Heightmap export for downstream renderers and viewers.

Writes the finished field as an 8-bit or 16-bit grayscale PNG, as a raw
float64 ``.npy`` matrix, or as a colour-mapped preview figure.
"""

from pathlib import Path
from typing import Union

import matplotlib.pyplot as plt
import numpy as np
import structlog
from PIL import Image

from .core.data_grid import DataGrid

logger = structlog.get_logger()

PathLike = Union[str, Path]


def _prepare(path: PathLike) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def save_heightmap_png(grid: DataGrid, path: PathLike) -> Path:
    """Write the grid as an 8-bit grayscale PNG (``value * 256``)."""
    path = _prepare(path)
    grid.to_image().save(path)
    logger.info("Heightmap written", path=str(path), bits=8)
    return path


def save_heightmap_png16(grid: DataGrid, path: PathLike) -> Path:
    """Write the grid as a 16-bit grayscale PNG (``value * 65535``)."""
    path = _prepare(path)
    scaled = np.clip(np.trunc(grid.values * 65535.0), 0, 65535).astype(np.uint16)
    Image.fromarray(scaled).save(path)
    logger.info("Heightmap written", path=str(path), bits=16)
    return path


def save_heightmap_npy(grid: DataGrid, path: PathLike) -> Path:
    """Write the raw float64 matrix, shape (height, width)."""
    path = _prepare(path)
    np.save(path, grid.values)
    logger.info("Heightmap written", path=str(path), format="npy")
    return path


def save_preview(
    grid: DataGrid, path: PathLike, title: str = "Heightmap", cmap: str = "terrain"
) -> Path:
    """Render the grid with a colormap and colorbar."""
    path = _prepare(path)

    fig, ax = plt.subplots(figsize=(8, 8))
    image = ax.imshow(grid.values, cmap=cmap, vmin=0.0, vmax=1.0, origin="upper")
    fig.colorbar(image, ax=ax, label="Elevation")
    ax.set_title(title)
    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    fig.savefig(path, dpi=100, bbox_inches="tight")
    plt.close(fig)

    logger.info("Preview written", path=str(path))
    return path
