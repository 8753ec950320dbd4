"""Shared fixtures."""

import pytest

from mmcq.colour_convert import validate_pixels
from mmcq.histogram import build_histogram

REFERENCE_PIXELS = [
    (190, 197, 190),
    (202, 204, 200),
    (207, 214, 210),
    (211, 214, 211),
    (205, 207, 207),
]


@pytest.fixture
def reference_pixels():
    return list(REFERENCE_PIXELS)


@pytest.fixture
def reference_histogram():
    return build_histogram(validate_pixels(REFERENCE_PIXELS))
