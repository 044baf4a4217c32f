"""Custom exceptions for bootwrap."""

from typing import Optional


class BootwrapError(Exception):
    """Base exception for all supervisor errors."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code


class LaunchError(BootwrapError):
    """The child process could not be created."""

    def __init__(self, executable: str, cause: Exception):
        super().__init__(f"Failed to start {executable}: {cause}", code="launch_failed")
        self.executable = executable
        self.cause = cause
        self.__cause__ = cause


class SupervisorError(BootwrapError):
    """Supervisor used out of order."""
    pass


class ConfigurationError(BootwrapError):
    """Configuration error."""
    pass
