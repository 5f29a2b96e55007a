"""Unit tests for the fixed-window rate limiting value objects."""

import pytest

from panel_auth.domain.value_objects.rate_limit import RateLimitState, RateLimitWindow


class TestRateLimitWindow:
    """Test suite for RateLimitWindow."""

    def test_open_starts_empty(self):
        window = RateLimitWindow.open("key", now=1000.0, decay_seconds=60)

        assert window.attempts == 0
        assert window.resets_at == 1060.0

    def test_record_attempt_returns_new_window(self):
        window = RateLimitWindow.open("key", now=1000.0, decay_seconds=60)

        counted = window.record_attempt()

        assert counted.attempts == 1
        assert window.attempts == 0

    def test_seconds_until_reset_rounds_up_and_never_negative(self):
        window = RateLimitWindow.open("key", now=1000.0, decay_seconds=60)

        assert window.seconds_until_reset(1000.2) == 60
        assert window.seconds_until_reset(1059.5) == 1
        assert window.seconds_until_reset(2000.0) == 0

    def test_expiry_is_inclusive_of_reset_time(self):
        window = RateLimitWindow.open("key", now=1000.0, decay_seconds=60)

        assert not window.is_expired(1059.9)
        assert window.is_expired(1060.0)

    @pytest.mark.parametrize("decay_seconds, attempts", [(0, 0), (-5, 0), (60, -1)])
    def test_invalid_configuration_rejected(self, decay_seconds, attempts):
        with pytest.raises(ValueError):
            RateLimitWindow(key="key", attempts=attempts, opened_at=0.0, decay_seconds=decay_seconds)


class TestRateLimitState:
    """Test suite for RateLimitState."""

    def test_get_window_drops_expired(self):
        # Arrange
        state = RateLimitState()
        state.set_window(RateLimitWindow.open("key", now=1000.0, decay_seconds=60))

        # Act & Assert
        assert state.get_window("key", 1030.0) is not None
        assert state.get_window("key", 1060.0) is None
        assert len(state) == 0

    def test_cleanup_expired_windows(self):
        state = RateLimitState()
        state.set_window(RateLimitWindow.open("old", now=0.0, decay_seconds=10))
        state.set_window(RateLimitWindow.open("new", now=100.0, decay_seconds=10))

        removed = state.cleanup_expired_windows(105.0)

        assert removed == 1
        assert len(state) == 1

    def test_forget(self):
        state = RateLimitState()
        state.set_window(RateLimitWindow.open("key", now=0.0, decay_seconds=10))

        state.forget("key")
        state.forget("missing")

        assert len(state) == 0
