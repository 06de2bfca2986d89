"""
Tests for crater template loading and stamp construction.
"""

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from py_relief.core.alea_prng import AleaPRNG
from py_relief.core.crater_template import (
    CraterTemplateError,
    draw_crater_size,
    load_crater_template,
    make_crater_stamp,
)


class TestLoadCraterTemplate:
    """Test reading the template image."""

    def test_load_png(self, crater_template_path):
        template = load_crater_template(crater_template_path)

        assert template.mode == "L"
        assert template.size == (64, 64)

    def test_colour_image_converted(self, tmp_path):
        path = tmp_path / "colour.png"
        Image.new("RGB", (10, 12), (200, 10, 10)).save(path)

        template = load_crater_template(path)

        assert template.mode == "L"
        assert template.size == (10, 12)

    def test_missing_file(self, tmp_path):
        with pytest.raises(CraterTemplateError, match="not found"):
            load_crater_template(tmp_path / "missing.png")

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"this is not an image")

        with pytest.raises(CraterTemplateError):
            load_crater_template(path)

    def test_bundled_template_loads(self):
        from py_relief.core.terrain_generator import DEFAULT_CRATER_TEMPLATE

        template = load_crater_template(DEFAULT_CRATER_TEMPLATE)

        assert template.size == (96, 96)

    def test_bundled_template_ships_inside_package(self):
        import py_relief
        from py_relief.core.terrain_generator import DEFAULT_CRATER_TEMPLATE

        package_dir = Path(py_relief.__file__).resolve().parent

        assert DEFAULT_CRATER_TEMPLATE.parent == package_dir / "resources"
        assert DEFAULT_CRATER_TEMPLATE.is_file()


class TestCraterSize:
    """Test crater diameter draws."""

    def test_sizes_in_range(self):
        prng = AleaPRNG(8)
        sizes = [draw_crater_size(prng) for _ in range(500)]

        assert all(isinstance(size, int) for size in sizes)
        assert min(sizes) >= 32
        assert max(sizes) <= 159

    def test_one_draw_per_size(self):
        prng = AleaPRNG(8)
        draw_crater_size(prng)

        assert prng.call_count == 1


class TestMakeCraterStamp:
    """Test resize + rotate + decode."""

    def test_stamp_dimensions(self, crater_image):
        stamp = make_crater_stamp(crater_image, 45)

        assert stamp.width == 45
        assert stamp.height == 45

    def test_uniform_neutral_template_stays_neutral(self):
        template = Image.new("L", (50, 50), 128)

        stamp = make_crater_stamp(template, 37)

        assert np.all(stamp.values == 0.5)

    def test_rotation_fills_corners_with_neutral(self):
        template = Image.new("L", (64, 64), 0)

        stamp = make_crater_stamp(template, 64)

        assert stamp.get(0, 0) == 0.5
        assert stamp.get(63, 63) == 0.5
        assert stamp.get(32, 32) == 0.0

    def test_no_rotation_keeps_content(self):
        template = Image.new("L", (64, 64), 0)

        stamp = make_crater_stamp(template, 64, rotation=0.0)

        assert np.all(stamp.values == 0.0)

    def test_values_below_one(self, crater_image):
        stamp = make_crater_stamp(crater_image, 100)

        assert stamp.min() >= 0.0
        assert stamp.max() < 1.0

    def test_stamp_is_deterministic(self, crater_image):
        assert make_crater_stamp(crater_image, 70) == make_crater_stamp(crater_image, 70)

    def test_invalid_size(self, crater_image):
        with pytest.raises(ValueError):
            make_crater_stamp(crater_image, 0)
