"""Settings model for usbvolumes."""

from enum import Enum
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LinuxMountStrategy(str, Enum):
    """How the Linux lister turns a matched block device into a mount point."""

    LABEL = "label"
    FINDMNT = "findmnt"


class UsbVolumesSettings(BaseSettings):
    """Settings with automatic environment variable support.

    Precedence order (highest to lowest):
    1. Environment variables (USBVOLUMES_*)
    2. Constructor arguments (config file data)
    3. .env file
    4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="USBVOLUMES_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        use_enum_values=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Return sources in priority order: env > init > dotenv > file_secret."""
        return (
            env_settings,
            init_settings,
            dotenv_settings,
            file_secret_settings,
        )

    log_level: str = Field(
        default="WARNING",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    linux_mount_strategy: LinuxMountStrategy = Field(
        default=LinuxMountStrategy.LABEL,
        description="'label' reports ID_FS_LABEL, 'findmnt' looks up the real target",
    )

    findmnt_path: str = Field(
        default="findmnt", description="findmnt executable used on Linux"
    )
    system_profiler_path: str = Field(
        default="/usr/sbin/system_profiler",
        description="system_profiler executable used on macOS",
    )
    system_profiler_detail_level: str = Field(
        default="mini", description="Value passed to system_profiler -detailLevel"
    )
    wmic_path: str = Field(default="wmic", description="wmic executable used on Windows")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is recognized."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        upper_v = v.strip().upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return upper_v
