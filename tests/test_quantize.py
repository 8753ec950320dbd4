"""End-to-end tests for quantize()."""

import numpy as np
import pytest

from mmcq import quantize
from mmcq.errors import (
    EmptyInputError,
    InvalidColorCountError,
    InvalidOutputDepthError,
    InvalidPixelComponentError,
    InvalidPixelError,
    QuantizeError,
)

REFERENCE_PALETTE = [(204, 204, 204), (208, 212, 212), (188, 196, 188), (212, 204, 196)]


@pytest.fixture
def random_pixels():
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(2000, 3), dtype=np.uint8)


class TestReferenceOutput:
    def test_palette(self, reference_pixels):
        cmap = quantize(reference_pixels, 4)
        assert len(cmap) == 4
        assert cmap.palette() == REFERENCE_PALETTE

    def test_map_first_pixel(self, reference_pixels):
        cmap = quantize(reference_pixels, 4)
        assert cmap.map(reference_pixels[0]) == (188, 196, 188)

    def test_map_palette_entry_is_identity(self, reference_pixels):
        cmap = quantize(reference_pixels, 4)
        for entry in cmap.palette():
            assert cmap.map(entry) == entry

    def test_array_input_matches_list(self, reference_pixels):
        arr = np.array(reference_pixels, dtype=np.uint8)
        assert quantize(arr, 4).palette() == REFERENCE_PALETTE

    def test_iterator_input(self, reference_pixels):
        assert quantize(iter(reference_pixels), 4).palette() == REFERENCE_PALETTE


class TestProperties:
    @pytest.mark.parametrize("max_colors", [2, 3, 8, 16, 64, 256])
    def test_size_and_channel_range(self, random_pixels, max_colors):
        cmap = quantize(random_pixels, max_colors)
        assert 1 <= len(cmap) <= max_colors
        for entry in cmap.palette():
            assert all(0 <= c <= 255 for c in entry)

    def test_deterministic(self, random_pixels):
        a = quantize(random_pixels, 16)
        b = quantize(random_pixels.copy(), 16)
        assert a.palette() == b.palette()
        assert [(x.lo, x.hi) for x in a.boxes] == [(y.lo, y.hi) for y in b.boxes]

    def test_palette_idempotent(self, random_pixels):
        cmap = quantize(random_pixels, 8)
        assert cmap.palette() == cmap.palette()

    def test_nearest_is_minimum_distance(self, random_pixels):
        cmap = quantize(random_pixels, 8)
        pal = np.array(cmap.palette(), dtype=np.int64)
        for query in [(0, 0, 0), (255, 255, 255), (12, 200, 99), (128, 64, 250)]:
            got = np.array(cmap.nearest(query), dtype=np.int64)
            d_got = int(((got - query) ** 2).sum())
            d_min = int(((pal - np.array(query)) ** 2).sum(axis=1).min())
            assert d_got == d_min

    def test_final_order_is_descending_occupancy(self, random_pixels):
        cmap = quantize(random_pixels, 16)
        occ = [box.count() * box.volume() for box in cmap.boxes]
        assert occ == sorted(occ, reverse=True)

    def test_two_colours(self):
        pixels = [(0, 0, 0)] * 10 + [(255, 255, 255)] * 10
        cmap = quantize(pixels, 2)
        assert sorted(cmap.palette()) == [(4, 4, 4), (252, 252, 252)]

    def test_single_colour_stalls_gracefully(self, capsys):
        cmap = quantize([(100, 100, 100)] * 5, 8)
        assert cmap.palette() == [(100, 100, 100)]
        assert "[warn]" in capsys.readouterr().out

    def test_single_pixel(self):
        cmap = quantize([(100, 100, 100)], 8)
        assert cmap.palette() == [(100, 100, 100)]

    def test_debug_output(self, reference_pixels, capsys):
        quantize(reference_pixels, 4, debug=True)
        out = capsys.readouterr().out
        assert "[debug] Pixels: 5" in out
        assert "population phase: boxes=3" in out
        assert "occupancy phase: boxes=4" in out


class TestValidation:
    def test_empty(self):
        with pytest.raises(EmptyInputError):
            quantize([], 4)
        with pytest.raises(EmptyInputError):
            quantize(np.zeros((0, 3), dtype=np.uint8), 4)

    @pytest.mark.parametrize("max_colors", [1, 257, 0, -3, True, 4.0, "8"])
    def test_invalid_color_count(self, reference_pixels, max_colors):
        with pytest.raises(InvalidColorCountError, match="max_colors"):
            quantize(reference_pixels, max_colors)

    def test_errors_are_value_errors(self, reference_pixels):
        with pytest.raises(ValueError):
            quantize(reference_pixels, 1)
        assert issubclass(InvalidPixelComponentError, QuantizeError)

    def test_output_depth(self, reference_pixels):
        assert len(quantize(reference_pixels, 4, output_depth=2)) <= 4
        with pytest.raises(InvalidOutputDepthError, match="one of"):
            quantize(reference_pixels, 4, output_depth=3)
        with pytest.raises(InvalidOutputDepthError, match="does not fit"):
            quantize(reference_pixels, 5, output_depth=2)

    def test_pixel_component_out_of_range(self, reference_pixels):
        pixels = reference_pixels + [(0, 0, 256)]
        with pytest.raises(InvalidPixelComponentError) as exc:
            quantize(pixels, 4)
        assert exc.value.index == 5
        assert exc.value.channel == "b"
        assert exc.value.value == 256

    def test_pixel_wrong_arity(self, reference_pixels):
        with pytest.raises(InvalidPixelError, match="pixel 1"):
            quantize([(0, 0, 0), (1, 2)], 4)

    def test_color_count_checked_before_pixels(self):
        with pytest.raises(InvalidColorCountError):
            quantize([(0, 0, 999)], 300)
