"""Shared test fixtures and configuration.

Keeps log and config files inside pytest's tmp_path so tests never touch the
user's real platform directories.
"""

from __future__ import annotations

import logging
import logging.handlers
from unittest.mock import patch

import pytest

from pomodoros_cli.models.timer.config import TimerConfig
from pomodoros_cli.models.timer.state import TimerSnapshot


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


def _drop_file_handlers():
    """Close the rotating file handler, leaving pytest's capture handlers alone."""
    logger = logging.getLogger("pomodoros_cli")
    for handler in list(logger.handlers):
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            handler.close()
            logger.removeHandler(handler)


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path):
    """Redirect platformdirs lookups and reset cached singletons."""
    import pomodoros_cli.utils.logger as logger_mod
    from pomodoros_cli.services.config_service import get_config_service

    logger_mod._logger = None
    _drop_file_handlers()
    get_config_service.cache_clear()

    with patch("pomodoros_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        with patch(
            "pomodoros_cli.services.config_service.user_config_dir",
            return_value=str(tmp_path / "config"),
        ):
            yield tmp_path

    _drop_file_handlers()
    logger_mod._logger = None
    get_config_service.cache_clear()


# ---------------------------------------------------------------------------
# Timer helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def short_config() -> TimerConfig:
    """One-second phases with a long break every second focus session."""
    return TimerConfig(
        focus_duration=1,
        short_break_duration=1,
        long_break_duration=1,
        long_break_every=2,
        mute=True,
    )


@pytest.fixture()
def snapshot() -> TimerSnapshot:
    """A paused focus snapshot five minutes into a 25 minute session."""
    return TimerSnapshot(
        phase="focus",
        phase_name="Focus",
        color="bright_green",
        total_duration=1500,
        remaining_duration=1200,
        is_running=False,
        completed_focus_count=3,
        formatted_remaining="20:00",
        progress_ratio=0.2,
    )
