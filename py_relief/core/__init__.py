"""
Core heightmap generation functionality.
"""

from .data_grid import DataGrid
from .normalizer import min_in, max_in, remap, remap_data_grid
from .noise_field import NoiseField, generate_noise_field
from .layer_compositor import LayerCompositor, smoothstep
from .crater_template import CraterTemplateError, load_crater_template, make_crater_stamp
from .crater_stamper import CraterPlacement, CraterStamper, overlay
from .terrain_generator import GenerationConfig, TerrainGenerator, World, generate_world

__all__ = ['DataGrid', 'min_in', 'max_in', 'remap', 'remap_data_grid',
           'NoiseField', 'generate_noise_field', 'LayerCompositor', 'smoothstep',
           'CraterTemplateError', 'load_crater_template', 'make_crater_stamp',
           'CraterPlacement', 'CraterStamper', 'overlay',
           'GenerationConfig', 'TerrainGenerator', 'World', 'generate_world']
