"""Main entry point for bootwrap."""

import asyncio
import sys
from typing import Optional, Sequence

import structlog
from pydantic import ValidationError

from bootwrap.core.config import Settings
from bootwrap.core.exceptions import ConfigurationError, LaunchError
from bootwrap.supervisor import Supervisor
from bootwrap.utils.logging import setup_logging

logger = structlog.get_logger()

CONFIG_ERROR_EXIT_CODE = 2


def supervise(command: Optional[Sequence[str]] = None, settings: Optional[Settings] = None) -> int:
    """Run one child to completion and return the exit code to terminate with."""
    if settings is None:
        settings = Settings()

    setup_logging(settings.log_level, settings.log_format)

    spec = settings.launch_spec(command)
    supervisor = Supervisor.from_settings(settings)

    try:
        return asyncio.run(supervisor.run(spec))
    except LaunchError:
        # Already reported by the supervisor
        return settings.launch_failure_exit_code


def run(command: Optional[Sequence[str]] = None, **overrides) -> None:
    """Supervise the child and exit with its status. Never returns."""
    try:
        settings = Settings(**{k: v for k, v in overrides.items() if v is not None})
        code = supervise(command, settings)
    except (ValidationError, ConfigurationError) as e:
        setup_logging()
        logger.error("Invalid supervisor configuration", error=str(e))
        code = CONFIG_ERROR_EXIT_CODE

    sys.exit(code)


if __name__ == "__main__":
    run()
