"""
Noise layer table for the base elevation field.

Each layer is sampled from the same seeded source with its own
frequency/skew/stretch and rescaled to its own target range before the
layers are combined. Order matters only for readability; every layer is
rescaled independently.
"""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class NoiseLayer:
    """A named noise sampling transform and the range it is rescaled into."""

    name: str
    frequency: float
    skew: float
    stretch: float
    target: Tuple[float, float]


NOISE_LAYERS = (
    # Continental mask deciding where terrain rises at all
    NoiseLayer("global_mask", 0.2, 0.0, 1.0, (0.0, 1.0)),
    # Regional undulation, sheared in two directions
    NoiseLayer("regional_a", 0.45, 2.0, 1.0, (0.0, 0.25)),
    NoiseLayer("regional_b", 0.45, -0.5, 3.5, (0.0, 0.25)),
    # Octaves
    NoiseLayer("detail_1", 1.0, 0.0, 1.0, (0.0, 0.5)),
    NoiseLayer("detail_2", 2.0, 0.0, 1.0, (0.0, 0.25)),
    NoiseLayer("detail_3", 4.0, 0.0, 1.0, (0.0, 0.125)),
    NoiseLayer("detail_4", 8.0, 0.0, 1.0, (0.0, 0.0625)),
    NoiseLayer("detail_5", 16.0, 0.0, 1.0, (0.0, 0.03)),
    NoiseLayer("detail_6", 24.0, 0.0, 1.0, (0.0, 0.015)),
    # Where the octaves show through
    NoiseLayer("detail_mask", 0.3, 6.0, 2.0, (0.3, 1.0)),
)

DETAIL_LAYERS = (
    "detail_1",
    "detail_2",
    "detail_3",
    "detail_4",
    "detail_5",
    "detail_6",
)

# Combination constants
DETAIL_SUM_RANGE = (0.0, 0.15)
RAW_RANGE = (0.0, 1.0)
SHAPE_EDGES = (0.35, 0.65)
FINAL_RANGE = (0.25, 0.75)


def get_layer(name: str) -> NoiseLayer:
    """Look up a layer by name."""
    for layer in NOISE_LAYERS:
        if layer.name == name:
            return layer
    raise KeyError(f"Unknown noise layer: {name}")


def list_layers() -> Dict[str, NoiseLayer]:
    """Return the layer table keyed by name, in table order."""
    return {layer.name: layer for layer in NOISE_LAYERS}
