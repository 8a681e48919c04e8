"""Unit tests for feed normalization.

Pure functions: no mocks needed, fast and deterministic.
"""

from datetime import datetime, timezone

import pytest

from quakeview.core.event import (
    SeismicEvent,
    UNKNOWN_LOCATION,
    format_event_time,
    normalize_feature,
    normalize_feed,
)


def make_feature(mag=4.2, place="10km NE of San Francisco, CA",
                 time=1703001600000, coords=(-122.4194, 37.7749, 10.5)):
    """Build a USGS GeoJSON feature."""
    return {
        "type": "Feature",
        "id": "nc75095866",
        "properties": {
            "mag": mag,
            "place": place,
            "time": time,  # 2023-12-19 16:00:00 UTC
        },
        "geometry": {
            "type": "Point",
            "coordinates": list(coords),  # lon, lat, depth
        },
    }


SAMPLE_GEOJSON = {
    "type": "FeatureCollection",
    "metadata": {"count": 3},
    "features": [
        make_feature(mag=5.5, place="A"),
        make_feature(mag=3.2, place="B"),
        make_feature(mag=6.1, place="C"),
    ],
}


class TestFormatEventTime:
    """Tests for format_event_time()."""

    def test_default_format_resembles_locale_string(self):
        """Default format is month/day/year with 12-hour clock."""
        occurred = datetime(2023, 12, 19, 16, 0, 0, tzinfo=timezone.utc)
        assert format_event_time(occurred, timezone.utc) == "12/19/2023, 04:00:00 PM"

    def test_custom_format(self):
        """Custom strftime formats are honored."""
        occurred = datetime(2023, 12, 19, 16, 0, 0, tzinfo=timezone.utc)
        result = format_event_time(occurred, timezone.utc, "%Y-%m-%d %H:%M")
        assert result == "2023-12-19 16:00"

    def test_local_time_when_no_timezone(self):
        """Without a timezone the local zone is used."""
        occurred = datetime(2023, 12, 19, 16, 0, 0, tzinfo=timezone.utc)
        expected = occurred.astimezone().strftime("%H:%M")
        assert format_event_time(occurred, None, "%H:%M") == expected


class TestNormalizeFeature:
    """Tests for normalize_feature() pure function."""

    def test_normalizes_valid_feature(self):
        """Should map a valid feature to a SeismicEvent."""
        result = normalize_feature(make_feature(), tz=timezone.utc)

        assert result is not None
        assert result.location == "10km NE of San Francisco, CA"
        assert result.magnitude == 4.2
        assert result.latitude == 37.7749
        assert result.longitude == -122.4194
        assert result.depth_km == 10.5
        assert result.occurred_at == datetime(2023, 12, 19, 16, 0, tzinfo=timezone.utc)
        assert result.time_label == "12/19/2023, 04:00:00 PM"

    def test_position_is_lat_lon(self):
        """position property returns (latitude, longitude)."""
        result = normalize_feature(make_feature(), tz=timezone.utc)
        assert result.position == (37.7749, -122.4194)

    def test_preserves_negative_magnitude(self):
        """Negative magnitudes are kept as reported."""
        result = normalize_feature(make_feature(mag=-0.8), tz=timezone.utc)
        assert result is not None
        assert result.magnitude == -0.8

    def test_missing_place_uses_placeholder(self):
        """A null place falls back to a placeholder."""
        result = normalize_feature(make_feature(place=None), tz=timezone.utc)
        assert result is not None
        assert result.location == UNKNOWN_LOCATION

    def test_returns_none_for_missing_magnitude(self):
        """Should return None if magnitude is missing."""
        assert normalize_feature(make_feature(mag=None)) is None

    def test_returns_none_for_missing_time(self):
        """Should return None if time is missing."""
        assert normalize_feature(make_feature(time=None)) is None

    def test_returns_none_for_short_coordinates(self):
        """Should return None if depth is missing."""
        assert normalize_feature(make_feature(coords=(1.0, 2.0))) is None

    def test_returns_none_for_non_numeric_values(self):
        """Should return None for values that are not numbers."""
        assert normalize_feature(make_feature(mag="strong")) is None
        assert normalize_feature(make_feature(time="yesterday")) is None

    def test_returns_none_for_mapping_coordinates(self):
        """Coordinates that are not a list are rejected."""
        feature = make_feature()
        feature["geometry"]["coordinates"] = {"lon": 1.0, "lat": 2.0, "depth": 3.0}
        assert normalize_feature(feature) is None

    def test_returns_none_for_non_finite_magnitude(self):
        """NaN and infinite magnitudes are rejected."""
        assert normalize_feature(make_feature(mag=float("nan"))) is None
        assert normalize_feature(make_feature(mag=float("inf"))) is None

    def test_returns_none_for_empty_feature(self):
        """Should return None for a feature with nothing in it."""
        assert normalize_feature({}) is None
        assert normalize_feature({"properties": None, "geometry": None}) is None

    def test_event_is_immutable(self):
        """SeismicEvent is frozen."""
        result = normalize_feature(make_feature(), tz=timezone.utc)
        with pytest.raises(AttributeError):
            result.magnitude = 9.0


class TestNormalizeFeed:
    """Tests for normalize_feed() pure function."""

    def test_keeps_feed_order(self):
        """Events come back in feed order, not re-sorted."""
        result = normalize_feed(SAMPLE_GEOJSON, tz=timezone.utc)

        assert [e.magnitude for e in result] == [5.5, 3.2, 6.1]
        assert [e.location for e in result] == ["A", "B", "C"]
        assert all(isinstance(e, SeismicEvent) for e in result)

    def test_skips_malformed_features(self):
        """Malformed features are skipped without aborting the batch."""
        geojson = {
            "type": "FeatureCollection",
            "features": [
                make_feature(mag=2.0),
                make_feature(mag=None),
                {"properties": {}, "geometry": {}},
                {
                    "properties": {"mag": 3.0, "time": 1703001600000},
                    "geometry": {"coordinates": {"lon": 1.0, "lat": 2.0, "depth": 3.0}},
                },
                make_feature(mag=4.5),
            ],
        }
        result = normalize_feed(geojson, tz=timezone.utc)
        assert [e.magnitude for e in result] == [2.0, 4.5]

    def test_logs_skipped_features(self, caplog):
        """Skipped features are reported as a warning."""
        geojson = {"features": [make_feature(mag=None)]}
        with caplog.at_level("WARNING"):
            normalize_feed(geojson)
        assert "Skipped 1 malformed features" in caplog.text

    def test_empty_feed(self):
        """Empty or missing features list yields no events."""
        assert normalize_feed({"features": []}) == []
        assert normalize_feed({}) == []
