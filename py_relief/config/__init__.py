"""
Configuration modules for heightmap generation.

Environment-driven settings live in ``py_relief.config.config``.
"""

from .layers import NOISE_LAYERS, NoiseLayer, get_layer, list_layers

__all__ = ['NOISE_LAYERS', 'NoiseLayer', 'get_layer', 'list_layers']
