"""Tests for marker encoding - Pure functions.

These are fast unit tests with no mocks needed since they test pure functions.
"""

import pytest

from quakeview.core.encoding import (
    MIN_MARKER_SIZE,
    VisualEncoding,
    encode_magnitude,
    get_color_category,
    get_marker_size,
)


class TestGetColorCategory:
    """Tests for get_color_category()."""

    def test_strong_earthquake_is_red(self):
        """Magnitude >= 6 returns red."""
        assert get_color_category(6.0) == "red"
        assert get_color_category(8.5) == "red"

    def test_moderate_earthquake_is_orange(self):
        """Magnitude 4 up to 6 returns orange."""
        assert get_color_category(4.0) == "orange"
        assert get_color_category(5.99) == "orange"

    def test_small_earthquake_is_green(self):
        """Magnitude < 4 returns green."""
        assert get_color_category(3.99) == "green"
        assert get_color_category(0.0) == "green"

    def test_negative_magnitude_is_green(self):
        """Negative magnitudes fall in the green band."""
        assert get_color_category(-1.2) == "green"


class TestGetMarkerSize:
    """Tests for get_marker_size()."""

    def test_size_is_five_units_per_magnitude(self):
        """Size scales linearly with magnitude."""
        assert get_marker_size(3.0) == 15.0
        assert get_marker_size(6.2) == pytest.approx(31.0)

    def test_size_increases_with_magnitude(self):
        """Bigger earthquakes get bigger markers."""
        assert get_marker_size(2.0) < get_marker_size(5.0) < get_marker_size(7.0)

    def test_zero_and_negative_are_floored(self):
        """Non-positive magnitudes still produce a visible marker."""
        assert get_marker_size(0.0) == MIN_MARKER_SIZE
        assert get_marker_size(-2.0) == MIN_MARKER_SIZE

    def test_nan_is_floored(self):
        """A NaN magnitude still gets the minimum size."""
        assert get_marker_size(float("nan")) == MIN_MARKER_SIZE

    def test_custom_factor_and_floor(self):
        """Factor and floor can be configured."""
        assert get_marker_size(2.0, size_per_magnitude=10, min_size=1) == 20
        assert get_marker_size(0.1, size_per_magnitude=10, min_size=3) == 3


class TestEncodeMagnitude:
    """Tests for encode_magnitude()."""

    def test_returns_color_and_size(self):
        """Encoding combines color category and size."""
        assert encode_magnitude(4.0) == VisualEncoding(color_category="orange", size_units=20.0)
        assert encode_magnitude(6.0) == VisualEncoding(color_category="red", size_units=30.0)

    def test_is_deterministic(self):
        """Same magnitude always gives the same encoding."""
        assert encode_magnitude(2.5) == encode_magnitude(2.5)

    def test_negative_magnitude_does_not_crash(self):
        """Negative input is encoded green at the minimum size."""
        assert encode_magnitude(-0.3) == VisualEncoding("green", MIN_MARKER_SIZE)
