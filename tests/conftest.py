"""Core test fixtures for the usbvolumes project."""

import logging
import os
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog
from typer.testing import CliRunner

from usbvolumes.config import UsbVolumesSettings
from usbvolumes.core.logging import configure_default_logging
from usbvolumes.devices import get_device_lister


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings() -> UsbVolumesSettings:
    """Default settings, independent of the environment."""
    return UsbVolumesSettings()


@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Keep user config files and USBVOLUMES_* variables out of tests."""
    for name in list(os.environ):
        if name.startswith("USBVOLUMES_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)
    get_device_lister.cache_clear()
    yield
    get_device_lister.cache_clear()


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Undo any logging setup done by a test."""
    yield
    structlog.reset_defaults()
    configure_default_logging()
    logging.getLogger().handlers = []
    logging.getLogger().setLevel(logging.WARNING)
