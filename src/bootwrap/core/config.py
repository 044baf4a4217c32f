"""Configuration management for bootwrap."""

import os
from typing import List, Literal, Optional, Sequence

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bootwrap.core.exceptions import ConfigurationError
from bootwrap.core.models import LaunchSpec, StreamMode


class Settings(BaseSettings):
    """Supervisor configuration settings.

    Only ``BOOTWRAP_``-prefixed variables are read. Everything else in the
    environment belongs to the child and is forwarded untouched.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOOTWRAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Launch command
    executable: str = Field("go", description="Program to launch")
    args: List[str] = Field(
        default_factory=lambda: ["run", "main.go"],
        description="Literal argument list (JSON array in the environment)",
    )
    name: Optional[str] = Field(None, description="Display name used in diagnostics")
    stream_mode: StreamMode = Field(StreamMode.INHERIT, description="Stream attachment mode")

    # Exit code policy
    fallback_exit_code: int = Field(0, description="Exit code when the child has none")
    launch_failure_exit_code: int = Field(1, description="Exit code when the child cannot start")
    abnormal_exit_policy: Literal["fallback", "signal"] = Field(
        "fallback",
        description="'fallback' exits with fallback_exit_code, 'signal' with 128 + signal number",
    )

    # Observability
    log_level: str = Field("INFO", description="Diagnostic log level")
    log_format: Literal["console", "json"] = Field("console", description="Diagnostic log format")

    @field_validator("fallback_exit_code", "launch_failure_exit_code")
    @classmethod
    def validate_exit_code(cls, v: int) -> int:
        """Exit codes must fit in a byte."""
        if v < 0 or v > 255:
            raise ValueError(f"exit code must be between 0 and 255, got: {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        if v.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return v.upper()

    def launch_spec(self, command: Optional[Sequence[str]] = None) -> LaunchSpec:
        """Build the launch spec, snapshotting the current environment.

        Args:
            command: Overrides the configured executable and arguments when
                non-empty.
        """
        if command:
            executable, args = command[0], list(command[1:])
        else:
            executable, args = self.executable, list(self.args)

        if not executable:
            raise ConfigurationError("No command to launch", code="empty_command")

        return LaunchSpec(
            executable=executable,
            args=args,
            env=dict(os.environ),
            stream_mode=self.stream_mode,
            name=self.name,
        )
