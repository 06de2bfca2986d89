#!/usr/bin/env python3
"""
Demo script showing cratered heightmap generation.

Dimensions, seed and crater settings come from RELIEF_* environment
variables (or a .env file), e.g. RELIEF_WIDTH=256 RELIEF_HEIGHT=256.
"""

from dataclasses import replace

import matplotlib.pyplot as plt
import numpy as np

from py_relief.config.config import settings
from py_relief.core import generate_world
from py_relief.export import save_heightmap_npy, save_heightmap_png, save_preview
from py_relief.utils.log_config import configure_logging


def main():
    """Demonstrate heightmap generation."""
    configure_logging(settings.log_level, settings.log_format)

    print("Py-Relief Heightmap Generation Demo")
    print("=" * 40)

    config = settings.generation_config()
    print(f"\nGenerating {config.width}x{config.height} heightmap (seed {config.seed})...")

    world = generate_world(config)
    grid = world.grid

    print(f"  Min height: {grid.min():.3f}")
    print(f"  Max height: {grid.max():.3f}")
    print(f"  Mean height: {grid.mean():.3f}")
    print(
        f"  Highland cells (h>=0.5): {np.sum(grid.values >= 0.5)} "
        f"({np.mean(grid.values >= 0.5) * 100:.1f}%)"
    )
    for i, crater in enumerate(world.craters, 1):
        print(
            f"  Crater {i}: size {crater.size}px at ({crater.offset_x}, {crater.offset_y}), "
            f"depth scale {crater.depth_scale:.2f}"
        )

    output_dir = settings.output_dir
    save_heightmap_png(grid, output_dir / f"heightmap_{config.seed}.png")
    save_heightmap_npy(grid, output_dir / f"heightmap_{config.seed}.npy")
    save_preview(grid, output_dir / f"preview_{config.seed}.png", title=f"Seed {config.seed}")

    # Neighbouring seeds side by side
    plt.figure(figsize=(16, 16))

    for i, seed in enumerate(range(config.seed, config.seed + 4), 1):
        print(f"\nGenerating seed {seed}...")
        other = generate_world(replace(config, seed=seed))

        plt.subplot(2, 2, i)
        plt.imshow(other.grid.values, cmap="terrain", vmin=0, vmax=1)
        plt.colorbar(label="Elevation")
        plt.title(f"Seed {seed} ({len(other.craters)} craters)")
        plt.xlabel("X")
        plt.ylabel("Y")

    plt.tight_layout()
    comparison = output_dir / "heightmap_examples.png"
    plt.savefig(comparison, dpi=150)
    print(f"\nSaved visualization to {comparison}")


if __name__ == "__main__":
    main()
