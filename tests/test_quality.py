"""
Tests for quality classification
"""
import pytest
from pstremio.utils.quality import classify_height


@pytest.mark.parametrize("height,expected", [
    (360, "360"),
    (480, "480"),
    (718, "720"),
    (720, "720"),
    (1080, "1080"),
    (1040, "1080"),
    (2160, "4k"),
    (2100, "4k"),
])
def test_classify_near_canonical(height, expected):
    """Heights close to a canonical height map to it"""
    assert classify_height(height) == expected


@pytest.mark.parametrize("height", [240, 820, 1440, 1620, 4320])
def test_classify_far_from_canonical(height):
    """Heights 100px or more from every canonical height are unknown"""
    assert classify_height(height) == "unknown"


def test_classify_tie_prefers_lower():
    """Equidistant heights resolve to the lower canonical height"""
    assert classify_height(420) == "360"


def test_classify_missing_height():
    """No declared height means no quality at all"""
    assert classify_height(None) is None
    assert classify_height(0) is None
