"""bootwrap - launch a single child process and mirror its exit status."""

__version__ = "0.1.0"

from bootwrap.core.config import Settings
from bootwrap.core.exceptions import BootwrapError, LaunchError
from bootwrap.core.models import ExitStatus, LaunchSpec, StreamMode
from bootwrap.supervisor import ChildHandle, Supervisor

__all__ = [
    "Settings",
    "BootwrapError",
    "LaunchError",
    "ExitStatus",
    "LaunchSpec",
    "StreamMode",
    "ChildHandle",
    "Supervisor",
    "__version__",
]
