"""Tests for the two-policy iterative splitter."""

from mmcq.colormap import ColorMap
from mmcq.colour_convert import validate_pixels
from mmcq.histogram import build_histogram
from mmcq.refine import iterate, occupancy_key, population_key
from mmcq.vbox import VolumeBox, vbox_from_pixels


def _root(pixels):
    arr = validate_pixels(pixels)
    histo = build_histogram(arr)
    return histo, vbox_from_pixels(arr, histo)


class TestPriorityKeys:
    def test_population_and_occupancy(self, reference_histogram):
        box = VolumeBox(24, 26, 24, 26, 23, 25, reference_histogram)
        assert population_key(box) == 2
        assert occupancy_key(box) == 2 * 27

    def test_keys_rank_boxes(self, reference_histogram):
        small_full = VolumeBox(25, 25, 25, 25, 25, 25, reference_histogram)
        wide_sparse = VolumeBox(23, 23, 24, 26, 23, 26, reference_histogram)
        assert population_key(small_full) > population_key(wide_sparse)
        assert occupancy_key(small_full) < occupancy_key(wide_sparse)


class TestIterate:
    def test_reaches_target(self, reference_pixels):
        histo, root = _root(reference_pixels)
        cmap = ColorMap([root])
        stats = iterate(cmap, histo, 3, population_key)
        assert len(cmap) == 3
        assert stats.boxes == 3
        assert stats.iterations == 2
        assert not stats.stalled
        assert sorted(box.count() for box in cmap) == [1, 2, 2]

    def test_target_already_met(self, reference_pixels):
        histo, root = _root(reference_pixels)
        cmap = ColorMap([root])
        stats = iterate(cmap, histo, 1, population_key)
        assert stats.iterations == 0
        assert cmap.boxes == (root,)

    def test_stall_warns_and_keeps_box(self, capsys):
        histo, root = _root([(100, 100, 100)] * 4)
        cmap = ColorMap([root])
        stats = iterate(cmap, histo, 4, population_key, phase="population")
        assert stats.stalled
        assert len(cmap) == 1
        assert cmap.boxes[0] is root
        out = capsys.readouterr().out
        assert "[warn] population: no usable cut" in out

    def test_singletons_do_not_add_colours(self):
        histo, root = _root([(0, 0, 0), (255, 255, 255)])
        cmap = ColorMap([root])
        stats = iterate(cmap, histo, 3, population_key, max_iterations=10)
        assert stats.iterations == 10
        assert stats.boxes == 2
        assert not stats.stalled

    def test_empty_box_wastes_iterations(self):
        histo, _root_box = _root([(255, 255, 255)])
        empty = VolumeBox(0, 3, 0, 3, 0, 3, histo)
        cmap = ColorMap([empty])
        stats = iterate(cmap, histo, 2, occupancy_key, max_iterations=5)
        assert stats.iterations == 5
        assert cmap.boxes == (empty,)

    def test_splits_highest_key_first(self, reference_histogram):
        a = VolumeBox(23, 23, 24, 26, 23, 26, reference_histogram)  # 1 px, vol 12
        b = VolumeBox(24, 26, 24, 26, 23, 25, reference_histogram)  # 2 px, vol 27
        c = VolumeBox(24, 26, 24, 26, 26, 26, reference_histogram)  # 2 px, vol 9
        cmap = ColorMap([c, b, a])
        iterate(cmap, reference_histogram, 4, occupancy_key)
        assert len(cmap) == 4
        assert b not in cmap.boxes
        assert a in cmap.boxes and c in cmap.boxes
