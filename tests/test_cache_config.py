"""Unit tests for response lifetimes and gateway results."""

from app.services.cache_config import CacheLifetime, GatewayResult, cache_control


class TestCacheLifetimeValues:
    """Test that lifetimes are configured correctly."""

    def test_location_is_thirty_minutes(self):
        assert CacheLifetime.LOCATION.value == 30 * 60

    def test_location_from_coordinates_is_one_hour(self):
        assert CacheLifetime.LOCATION_COORDINATES.value == 3600

    def test_officials_is_one_hour(self):
        assert CacheLifetime.OFFICIALS.value == 3600

    def test_ratings_is_five_minutes(self):
        assert CacheLifetime.RATINGS.value == 300

    def test_staff_is_thirty_minutes(self):
        assert CacheLifetime.STAFF.value == 1800

    def test_share_images(self):
        assert CacheLifetime.SHARE_IMAGE.value == 24 * 3600
        assert CacheLifetime.SHARE_IMAGE_FALLBACK.value == 3600


class TestCacheControl:
    """Test the Cache-Control header builder."""

    def test_public_max_age(self):
        assert cache_control(CacheLifetime.RATINGS) == "public, max-age=300"


class TestGatewayResult:
    """Test GatewayResult constructors."""

    def test_live_result_has_no_error(self):
        result = GatewayResult.live([1, 2])
        assert result.data == [1, 2]
        assert result.fallback is False
        assert result.error is None

    def test_substitute_result_is_flagged(self):
        result = GatewayResult.substitute([], data_type="officials data")
        assert result.fallback is True
        assert result.error == "Failed to fetch officials data"
