"""Edge case and error condition tests."""

import copy

import pytest
from pydantic import ValidationError

from fondue import (
    NO_INPUT,
    ConfigurationError,
    FondueError,
    FondueSettings,
    ProcessorError,
    ProcessorState,
    ProcessorTimeout,
    get_settings,
)
from fondue.clock import Clock, SystemClock


class TestErrors:
    """Test the error hierarchy."""

    def test_processor_timeout_message(self):
        """Test ProcessorTimeout carries its limit."""
        error = ProcessorTimeout(0.1)
        assert str(error) == "No result within 0.1s"
        assert error.seconds == 0.1
        assert isinstance(error, TimeoutError)
        assert isinstance(error, FondueError)

    def test_processor_error_wraps_cause(self):
        """Test ProcessorError keeps the original exception."""
        cause = KeyError("missing")
        error = ProcessorError(cause)
        assert error.error is cause
        assert error.__cause__ is cause
        assert "KeyError('missing')" in str(error)

    def test_configuration_error_is_fondue_error(self):
        """Test ConfigurationError shares the base class."""
        assert issubclass(ConfigurationError, FondueError)


class TestSettings:
    """Test environment-backed settings."""

    def test_defaults(self):
        """Test default values."""
        settings = FondueSettings()
        assert settings.debounce_seconds == 0.25
        assert settings.timeout_seconds == 10.0
        assert settings.retries == 3
        assert settings.delay_seconds == 0.0
        assert settings.debug is False

    def test_environment_overrides(self, monkeypatch):
        """Test FONDUE_ variables are picked up."""
        monkeypatch.setenv("FONDUE_RETRIES", "5")
        monkeypatch.setenv("fondue_debug", "1")
        settings = FondueSettings()
        assert settings.retries == 5
        assert settings.debug is True

    @pytest.mark.parametrize(
        "field, value",
        [
            ("debounce_seconds", -1),
            ("timeout_seconds", 0),
            ("retries", -1),
            ("delay_seconds", -0.5),
            ("user_agent", ""),
        ],
    )
    def test_invalid_values_rejected(self, field, value):
        """Test out-of-range values fail validation."""
        with pytest.raises(ValidationError):
            FondueSettings(**{field: value})

    def test_get_settings_is_cached(self, monkeypatch):
        """Test get_settings loads once until the cache is cleared."""
        first = get_settings()
        monkeypatch.setenv("FONDUE_RETRIES", "9")
        assert get_settings() is first

        get_settings.cache_clear()
        assert get_settings().retries == 9


class TestProcessorState:
    """Test state snapshots."""

    def test_no_input_is_a_singleton(self):
        """Test NO_INPUT survives copying."""
        assert repr(NO_INPUT) == "NO_INPUT"
        assert type(NO_INPUT)() is NO_INPUT
        assert copy.deepcopy(NO_INPUT) is NO_INPUT

    def test_has_error(self):
        """Test has_error mirrors the error facet."""
        assert not ProcessorState().has_error
        assert ProcessorState(error=ValueError("x")).has_error

    def test_state_is_frozen(self):
        """Test snapshots cannot be mutated."""
        state = ProcessorState(input="a")
        with pytest.raises(AttributeError):
            state.input = "b"  # type: ignore[misc]


@pytest.mark.anyio
async def test_system_clock_is_a_clock():
    """Test SystemClock satisfies the Clock protocol."""
    clock = SystemClock()
    assert isinstance(clock, Clock)

    before = clock.current_time()
    await clock.sleep(0.01)
    assert clock.current_time() > before
