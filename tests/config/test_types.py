"""Tests for redstone_sandbox.config.types."""

from __future__ import annotations

import pytest

from redstone_sandbox.config.types import RunConfig, Settings


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.day_time == 600
        assert settings.tnt_destructive is True

    @pytest.mark.parametrize("day_time", [-1, 2400, 5000])
    def test_rejects_out_of_range_day_time(self, day_time: int) -> None:
        with pytest.raises(ValueError, match="day_time"):
            Settings(day_time=day_time)

    def test_next_day_time_wraps(self) -> None:
        settings = Settings(day_time=2399, tnt_destructive=False)
        nxt = settings.next_day_time()
        assert nxt.day_time == 0
        assert nxt.tnt_destructive is False

    def test_is_frozen(self) -> None:
        settings = Settings()
        with pytest.raises(AttributeError):
            settings.day_time = 3  # type: ignore[misc]


class TestRunConfig:
    def test_rejects_zero_ticks(self) -> None:
        with pytest.raises(ValueError, match="ticks"):
            RunConfig(ticks=0)

    def test_rejects_zero_window(self) -> None:
        with pytest.raises(ValueError, match="steady_state_window"):
            RunConfig(steady_state_window=0)

    def test_rejects_empty_run_id(self) -> None:
        with pytest.raises(ValueError, match="run_id"):
            RunConfig(run_id="")

    def test_validates_day_time_through_settings(self) -> None:
        with pytest.raises(ValueError, match="day_time"):
            RunConfig(day_time=2400)

    def test_initial_settings(self) -> None:
        config = RunConfig(day_time=10, tnt_destructive=False)
        assert config.initial_settings() == Settings(day_time=10, tnt_destructive=False)
