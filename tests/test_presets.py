"""Tests for the preset wrappers."""

import pytest

from mmcq.constants import DEFAULT_COLORS
from mmcq.errors import InvalidOutputDepthError
from mmcq.presets import quantize_default, quantize_greyscale, quantize_to_depth


def _ramp(n):
    return [(i % 256, (i * 7) % 256, (i * 13) % 256) for i in range(n)]


class TestPresets:
    def test_default(self):
        assert 1 <= len(quantize_default(_ramp(500))) <= DEFAULT_COLORS

    @pytest.mark.parametrize("depth,limit", [(1, 2), (2, 4), (4, 16), (8, 256)])
    def test_depth(self, depth, limit):
        assert 1 <= len(quantize_to_depth(_ramp(1000), depth)) <= limit

    def test_bad_depth(self):
        with pytest.raises(InvalidOutputDepthError):
            quantize_to_depth(_ramp(10), 3)

    def test_greyscale_snaps_black_and_white(self):
        pixels = [(1, 1, 1)] * 5 + [(120, 120, 120)] * 5 + [(255, 255, 255)] * 5
        cmap = quantize_greyscale(pixels, 3)
        palette = cmap.palette()
        assert palette[0] == (255, 255, 255)
        assert palette[-1] == (0, 0, 0)
        assert (124, 124, 124) in palette
