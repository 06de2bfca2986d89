"""
Terrain heightmap generation entry point.

A generation run is a pure function of its configuration: the seed drives
both the noise source behind the base field and the Alea stream behind the
crater draws, so equal configs produce bit-identical heightmaps.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

import numpy as np
import structlog
from PIL import Image

from .alea_prng import AleaPRNG
from .crater_stamper import CraterPlacement, CraterStamper
from .crater_template import CRATER_ROTATION, CraterTemplateError, load_crater_template
from .data_grid import DataGrid
from .layer_compositor import LayerCompositor

logger = structlog.get_logger()

TILING = 8.0
WIDTH = 1024
HEIGHT = 1024
CRATER_COUNT = 5

DEFAULT_CRATER_TEMPLATE = Path(__file__).resolve().parent.parent / "resources" / "crater.pgm"


@dataclass
class GenerationConfig:
    """Configuration for one heightmap generation."""

    width: int = WIDTH
    height: int = HEIGHT
    tiling: float = TILING
    crater_count: int = CRATER_COUNT
    seed: int = 0
    crater_template_path: Union[str, Path] = DEFAULT_CRATER_TEMPLATE
    workers: int = 1
    crater_rotation: float = CRATER_ROTATION

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(
                f"Heightmap dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.tiling <= 0:
            raise ValueError(f"tiling must be positive, got {self.tiling}")
        if self.crater_count < 0:
            raise ValueError(f"crater_count must not be negative, got {self.crater_count}")
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")


@dataclass
class World:
    """A finished heightmap and the crater draws that shaped it."""

    grid: DataGrid
    seed: int
    craters: List[CraterPlacement] = field(default_factory=list)

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def heights(self) -> np.ndarray:
        """Integer elevations, ``value * 255`` truncated, as uint16."""
        scaled = np.trunc(self.grid.values * 255.0)
        return np.clip(scaled, 0, np.iinfo(np.uint16).max).astype(np.uint16)

    def to_image(self) -> Image.Image:
        return self.grid.to_image()


class TerrainGenerator:
    """
    Generates cratered terrain heightmaps.

    Layered noise builds the base field, then craters from the template
    image are stamped onto it.
    """

    def __init__(self, config: GenerationConfig, template: Optional[Image.Image] = None):
        """
        Initialize the generator.

        Args:
            config: Generation configuration
            template: Already loaded crater template; read from
                ``config.crater_template_path`` when omitted
        """
        self.config = config
        self._template = template

    def _load_template(self) -> Image.Image:
        if self._template is None:
            try:
                self._template = load_crater_template(self.config.crater_template_path)
            except CraterTemplateError as e:
                logger.error(
                    "Heightmap generation aborted",
                    path=str(self.config.crater_template_path),
                    error=str(e),
                )
                raise
        return self._template

    def generate(self) -> World:
        """Run the full pipeline and return the finished world."""
        config = self.config
        logger.info(
            "Generating heightmap",
            width=config.width,
            height=config.height,
            seed=config.seed,
            craters=config.crater_count,
        )

        # Fail on a bad template before spending time on noise
        template = self._load_template()
        prng = AleaPRNG(config.seed)

        compositor = LayerCompositor(
            config.width,
            config.height,
            config.tiling,
            config.seed,
            workers=config.workers,
        )
        grid = compositor.compose()

        stamper = CraterStamper(template, prng, rotation=config.crater_rotation)
        craters = stamper.stamp_all(grid, config.crater_count)

        logger.info(
            "Heightmap generated",
            min=round(grid.min(), 4),
            max=round(grid.max(), 4),
            prng_calls=prng.call_count,
        )
        return World(grid=grid, seed=config.seed, craters=craters)


def generate_world(
    config: Optional[GenerationConfig] = None, template: Optional[Image.Image] = None
) -> World:
    """Generate a heightmap with ``config`` (defaults when omitted)."""
    return TerrainGenerator(config or GenerationConfig(), template).generate()
