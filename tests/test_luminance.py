"""Tests for the luma estimate."""

import numpy as np
import pytest

from skin_tone_analyzer.imaging.luminance import luminance


def test_luminance_of_mid_gray():
    pixels = np.full((224, 224, 3), 128, dtype=np.uint8)
    assert luminance(pixels) == pytest.approx(128.0)


def test_luminance_uses_bt601_weights():
    red = np.zeros((4, 4, 3), dtype=np.uint8)
    red[..., 0] = 255
    assert luminance(red) == pytest.approx(0.299 * 255)

    green = np.zeros((4, 4, 3), dtype=np.uint8)
    green[..., 1] = 255
    assert luminance(green) == pytest.approx(0.587 * 255)


def test_luminance_is_mean_over_pixels():
    pixels = np.zeros((10, 10, 3), dtype=np.uint8)
    pixels[:, 5:] = 255
    assert luminance(pixels) == pytest.approx(127.5)


def test_luminance_ignores_alpha():
    rgba = np.zeros((8, 8, 4), dtype=np.uint8)
    rgba[..., :3] = 200
    rgba[..., 3] = 0
    assert luminance(rgba) == pytest.approx(200.0)


def test_luminance_range():
    assert luminance(np.zeros((3, 3, 3), dtype=np.uint8)) == 0.0
    assert luminance(np.full((3, 3, 3), 255, dtype=np.uint8)) == pytest.approx(255.0)


def test_luminance_empty_image():
    assert luminance(np.zeros((0, 0, 3), dtype=np.uint8)) == 0.0


def test_luminance_rejects_grayscale():
    with pytest.raises(ValueError):
        luminance(np.zeros((4, 4), dtype=np.uint8))
