"""Data models for the bootwrap supervisor."""

import os
import signal
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bootwrap.core.exceptions import LaunchError


class StreamMode(str, Enum):
    """How the child's standard streams are attached."""

    INHERIT = "inherit"
    CAPTURE = "capture"


class ProcessState(str, Enum):
    """Lifecycle state of the supervised child."""

    NOT_STARTED = "not_started"
    STARTING = "starting"
    RUNNING = "running"
    TERMINATED = "terminated"
    FAILED_TO_START = "failed_to_start"

    @property
    def is_terminal(self) -> bool:
        return self in (ProcessState.TERMINATED, ProcessState.FAILED_TO_START)


class LaunchSpec(BaseModel):
    """Immutable description of how to start the child process."""

    model_config = ConfigDict(frozen=True)

    executable: str = Field(..., description="Program to run, resolved against PATH")
    args: List[str] = Field(default_factory=list, description="Literal argument list")
    env: Dict[str, str] = Field(
        default_factory=lambda: dict(os.environ),
        description="Environment handed to the child verbatim",
    )
    stream_mode: StreamMode = Field(StreamMode.INHERIT)
    name: Optional[str] = Field(None, description="Display name used in diagnostics")
    input: Optional[bytes] = Field(None, description="Bytes written to stdin in capture mode")

    @field_validator("executable")
    @classmethod
    def validate_executable(cls, v: str) -> str:
        if not v:
            raise ValueError("executable cannot be empty")
        return v

    @property
    def argv(self) -> List[str]:
        return [self.executable, *self.args]

    @property
    def display_name(self) -> str:
        return self.name or f"{self.executable} process"


@dataclass(frozen=True)
class ExitStatus:
    """Terminal outcome of the child.

    ``code`` is None when the child did not exit normally; ``signal`` then
    holds the number of the signal that killed it.
    """

    code: Optional[int] = None
    signal: Optional[int] = None

    @classmethod
    def from_returncode(cls, returncode: int) -> "ExitStatus":
        # asyncio reports death by signal N as returncode -N
        if returncode < 0:
            return cls(code=None, signal=-returncode)
        return cls(code=returncode)

    @property
    def has_code(self) -> bool:
        return self.code is not None

    @property
    def signal_name(self) -> Optional[str]:
        if self.signal is None:
            return None
        try:
            return signal.Signals(self.signal).name
        except ValueError:
            return f"signal {self.signal}"


@dataclass(frozen=True)
class LaunchFailed:
    """The child process could not be created."""

    error: LaunchError


@dataclass(frozen=True)
class Terminated:
    """The child ran and terminated."""

    status: ExitStatus
    stdout: Optional[bytes] = None
    stderr: Optional[bytes] = None


Outcome = Union[LaunchFailed, Terminated]
