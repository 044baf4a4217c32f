"""Single-child process supervisor."""

from .process import ChildHandle
from .supervisor import Supervisor

__all__ = ["ChildHandle", "Supervisor"]
