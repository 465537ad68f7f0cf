"""Tests for SDF image generation."""

import logging

import numpy as np
import pytest

from maskworks import (
    DegenerateConfigError,
    DimensionMismatchError,
    FillMode,
    GeneratorConfig,
    SdfGenerator,
    UnsupportedChannelLayoutError,
    generate,
    signed_distance,
)
from maskworks.mask_utils import mask_to_rgba


def test_square_scenario_distance_mode(square_mask):
    """5x5 opaque block in a 1-pixel border, inside radius 2, grayscale output."""
    config = GeneratorConfig(max_inside=2.0, max_outside=0.0, fill_mode=FillMode.DISTANCE)

    out = generate(mask_to_rgba(square_mask), config)

    expected = np.zeros((7, 7), dtype=np.float32)
    expected[1:6, 1:6] = 0.25
    expected[2:5, 2:5] = 0.75
    expected[3, 3] = 1.0
    np.testing.assert_allclose(out[..., 3], expected, atol=1e-6)

    # Grayscale: every channel equal.
    for c in range(3):
        np.testing.assert_array_equal(out[..., c], out[..., 3])


def test_inside_radius_normalizes(square_mask):
    image = mask_to_rgba(square_mask)
    narrow = generate(image, GeneratorConfig(max_inside=1.0))
    wide = generate(image, GeneratorConfig(max_inside=2.0))
    assert narrow[1, 3, 3] == pytest.approx(0.5)
    assert wide[1, 3, 3] == pytest.approx(0.25)


def test_idempotent(disk_image):
    config = GeneratorConfig(max_inside=6.0, max_outside=6.0, post_process_distance=3.0)
    first = generate(disk_image, config)
    second = generate(disk_image, config)
    np.testing.assert_array_equal(first, second)


def test_source_does_not_change():
    image = mask_to_rgba(np.eye(6, dtype=np.float32))
    before = image.copy()
    generate(image, GeneratorConfig(max_inside=3.0, max_outside=3.0))
    np.testing.assert_array_equal(image, before)


class TestFillModes:

    def test_white(self, disk_image):
        out = generate(disk_image, GeneratorConfig(max_inside=5.0, fill_mode=FillMode.WHITE))
        assert np.all(out[..., :3] == 1.0)

    def test_black(self, disk_image):
        out = generate(disk_image, GeneratorConfig(max_inside=5.0, fill_mode=FillMode.BLACK))
        assert np.all(out[..., :3] == 0.0)

    def test_distance_is_grayscale(self, disk_image):
        config = GeneratorConfig(max_inside=5.0, max_outside=5.0, fill_mode=FillMode.DISTANCE)
        out = generate(disk_image, config)
        for c in range(3):
            np.testing.assert_array_equal(out[..., c], out[..., 3])

    def test_source_keeps_rgb(self, disk_image):
        config = GeneratorConfig(max_inside=5.0, max_outside=5.0, fill_mode=FillMode.SOURCE)
        out = generate(disk_image, config)
        np.testing.assert_array_equal(out[..., :3], disk_image[..., :3])
        assert not np.array_equal(out[..., 3], disk_image[..., 3])

    def test_source_keeps_double_precision_rgb(self, disk_alpha):
        rng = np.random.default_rng(11)
        image = np.empty((*disk_alpha.shape, 4), dtype=np.float64)
        image[..., :3] = rng.random((*disk_alpha.shape, 3))
        image[..., 3] = disk_alpha

        out = generate(image, GeneratorConfig(max_inside=3.0, fill_mode=FillMode.SOURCE))

        assert out.dtype == np.float64
        np.testing.assert_array_equal(out[..., :3], image[..., :3])

    def test_float32_source_stays_float32(self, disk_image):
        out = generate(disk_image, GeneratorConfig(max_inside=3.0))
        assert out.dtype == np.float32


class TestPassCombination:

    def test_outside_only(self, hard_square_image):
        out = generate(hard_square_image, GeneratorConfig(max_inside=0.0, max_outside=4.0))
        alpha = out[..., 3]
        inside = hard_square_image[..., 3] == 1.0

        assert np.all(alpha[inside] == 1.0)
        # One pixel out: lattice distance 1 minus half a pixel.
        assert alpha[10, 14] == pytest.approx(1.0 - 0.5 / 4.0)
        assert alpha[0, 0] == 0.0
        # Fades monotonically away from the block.
        assert np.all(np.diff(alpha[10, 13:]) <= 0.0)

    def test_both_passes_centered_on_boundary(self, hard_square_image):
        config = GeneratorConfig(max_inside=4.0, max_outside=4.0)
        alpha = generate(hard_square_image, config)[..., 3]
        inside = hard_square_image[..., 3] == 1.0

        assert np.all(alpha[inside] > 0.5)
        assert np.all(alpha[~inside] < 0.5)
        assert alpha.min() >= 0.0
        assert alpha.max() <= 1.0
        assert alpha[10, 13] == pytest.approx(0.5 + 0.5 * (0.5 / 4.0))
        assert alpha[10, 14] == pytest.approx(0.5 - 0.5 * (0.5 / 4.0))
        assert alpha[0, 0] == 0.0

    def test_inside_only_is_zero_outside(self, hard_square_image):
        alpha = generate(hard_square_image, GeneratorConfig(max_inside=4.0))[..., 3]
        outside = hard_square_image[..., 3] == 0.0
        assert np.all(alpha[outside] == 0.0)
        assert alpha[10, 10] == pytest.approx(3.5 / 4.0)

    def test_empty_mask_inside_pass(self):
        """No opaque pixels: the interior pass is fully resolved at zero."""
        image = mask_to_rgba(np.zeros((5, 5), dtype=np.float32))
        out = generate(image, GeneratorConfig(max_inside=3.0))
        assert np.all(out[..., 3] == 0.0)

    def test_post_process_stays_in_range(self, disk_image):
        config = GeneratorConfig(max_inside=4.0, max_outside=4.0, post_process_distance=3.0)
        alpha = generate(disk_image, config)[..., 3]
        assert np.all(np.isfinite(alpha))
        assert alpha.min() >= 0.0
        assert alpha.max() <= 1.0


class TestValidation:

    def test_degenerate_config_raises(self, disk_image):
        out = np.full(disk_image.shape, 0.3, dtype=np.float32)
        config = GeneratorConfig(max_inside=0.0, max_outside=0.0)
        with pytest.raises(DegenerateConfigError):
            generate(disk_image, config, out=out)
        assert np.all(out == 0.3)

    def test_negative_radii_are_disabled(self, disk_image):
        with pytest.raises(DegenerateConfigError):
            generate(disk_image, GeneratorConfig(max_inside=-1.0, max_outside=-5.0))

    def test_destination_size_mismatch(self, disk_image):
        out = np.full((32, 31, 4), 0.3, dtype=np.float32)
        with pytest.raises(DimensionMismatchError):
            generate(disk_image, out=out)
        assert np.all(out == 0.3)

    def test_channel_count_mismatch(self, disk_image):
        out = np.zeros((32, 32, 4), dtype=np.float32)
        with pytest.raises(DimensionMismatchError):
            generate(disk_image[..., :3], out=out)

    def test_rgb_source_rejected(self, disk_image):
        with pytest.raises(UnsupportedChannelLayoutError):
            generate(disk_image[..., :3])
        with pytest.raises(UnsupportedChannelLayoutError):
            generate(disk_image[..., :3], out=np.zeros((32, 32, 3), dtype=np.float32))

    def test_grayscale_source_rejected(self, disk_alpha):
        with pytest.raises(UnsupportedChannelLayoutError):
            generate(disk_alpha)

    def test_empty_source_rejected(self):
        with pytest.raises(DimensionMismatchError):
            generate(np.zeros((0, 4, 4), dtype=np.float32))


class TestGeneratorObject:

    def test_default_config(self):
        generator = SdfGenerator()
        assert generator.config == GeneratorConfig()

    def test_writes_into_destination(self, disk_image):
        out = np.full(disk_image.shape, 0.3, dtype=np.float32)
        generator = SdfGenerator(GeneratorConfig(max_inside=5.0, fill_mode=FillMode.DISTANCE))

        returned = generator.generate(disk_image, out=out)

        assert returned is out
        np.testing.assert_array_equal(out, generator.generate(disk_image))

    def test_destination_dtype_is_kept(self, disk_image):
        out = np.zeros(disk_image.shape, dtype=np.float64)
        config = GeneratorConfig(max_inside=5.0, fill_mode=FillMode.SOURCE)

        returned = generate(disk_image, config, out=out)

        assert returned is out
        assert out.dtype == np.float64
        np.testing.assert_array_equal(out[..., :3], disk_image[..., :3].astype(np.float64))

    def test_config_changes_apply_to_next_call(self, square_mask):
        generator = SdfGenerator(GeneratorConfig(max_inside=2.0))
        image = mask_to_rgba(square_mask)
        first = generator.generate(image)
        generator.config = generator.config.replace(max_inside=1.0)
        second = generator.generate(image)
        assert second[1, 3, 3] == pytest.approx(2.0 * first[1, 3, 3])

    def test_logs_passes(self, square_mask, caplog):
        caplog.set_level(logging.DEBUG, logger="maskworks.generator")
        generate(mask_to_rgba(square_mask), GeneratorConfig(max_inside=2.0, max_outside=2.0))
        messages = [r.getMessage() for r in caplog.records]
        assert any(m.startswith("Inside pass") for m in messages)
        assert any(m.startswith("Outside pass") for m in messages)


def test_signed_distance_sign(hard_square_image):
    sdf = signed_distance(hard_square_image[..., 3])
    inside = hard_square_image[..., 3] == 1.0
    assert np.all(sdf[inside] < 0.0)
    assert np.all(sdf[~inside] > 0.0)
    assert sdf[10, 13] == pytest.approx(-0.5)
    assert sdf[10, 14] == pytest.approx(0.5)
