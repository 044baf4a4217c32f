"""Single-child supervisor: launch, observe, mirror the exit status."""

import sys
from typing import Optional

import structlog

from bootwrap.core.config import Settings
from bootwrap.core.exceptions import SupervisorError
from bootwrap.core.models import ExitStatus, LaunchFailed, LaunchSpec, ProcessState, Terminated
from bootwrap.supervisor.process import ChildHandle
from bootwrap.utils.logging import bind_child_context, clear_child_context

logger = structlog.get_logger()


class Supervisor:
    """Runs exactly one child and turns its outcome into an exit code.

    A supervisor is single shot: ``start`` may be called once. There is no
    restart, no health checking and no signal forwarding.
    """

    def __init__(self, fallback_exit_code: int = 0, abnormal_exit_policy: str = "fallback"):
        """Initialize the supervisor.

        Args:
            fallback_exit_code: Exit code used when the child terminated
                without one (killed by a signal).
            abnormal_exit_policy: ``"fallback"`` uses ``fallback_exit_code``
                for signal deaths, ``"signal"`` uses the shell convention
                ``128 + signal``.
        """
        if abnormal_exit_policy not in ("fallback", "signal"):
            raise ValueError(f"Unknown abnormal exit policy: {abnormal_exit_policy}")
        self.fallback_exit_code = fallback_exit_code
        self.abnormal_exit_policy = abnormal_exit_policy
        self._state = ProcessState.NOT_STARTED
        self.status: Optional[ExitStatus] = None
        self.result: Optional[Terminated] = None
        self._handle: Optional[ChildHandle] = None
        self._spec: Optional[LaunchSpec] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Supervisor":
        return cls(
            fallback_exit_code=settings.fallback_exit_code,
            abnormal_exit_policy=settings.abnormal_exit_policy,
        )

    @property
    def state(self) -> ProcessState:
        """Lifecycle state, following the child while it is live."""
        if self._handle is not None:
            return self._handle.state
        return self._state

    @property
    def handle(self) -> Optional[ChildHandle]:
        """The live child handle, released once the outcome is observed."""
        return self._handle

    def start(self, spec: LaunchSpec) -> ChildHandle:
        """Spawn the child described by ``spec``.

        Returns before the OS-level start is confirmed; the launch outcome is
        delivered through ``wait``.
        """
        if self.state != ProcessState.NOT_STARTED:
            raise SupervisorError(
                f"Supervisor already started (state: {self.state.value})",
                code="already_started",
            )

        bind_child_context(name=spec.display_name)
        logger.info(
            f"Starting {spec.display_name}",
            command=spec.argv,
            stream_mode=spec.stream_mode.value,
        )

        # Anything we buffered must not show up after the child's output
        sys.stdout.flush()
        sys.stderr.flush()

        self._spec = spec
        self._handle = ChildHandle.spawn(spec)
        self._state = ProcessState.STARTING
        return self._handle

    async def wait(self) -> int:
        """Wait for the child's outcome and report it.

        Returns:
            The exit code the supervisor should terminate with.

        Raises:
            LaunchError: The child could not be created.
        """
        if self._handle is None:
            raise SupervisorError("Supervisor has no child to wait for", code="not_started")

        handle = self._handle
        spec = self._spec
        try:
            outcome = await handle.outcome()

            if isinstance(outcome, LaunchFailed):
                self._state = ProcessState.FAILED_TO_START
                logger.error(
                    f"{spec.display_name} failed to start",
                    executable=spec.executable,
                    error=str(outcome.error.cause),
                    error_type=type(outcome.error.cause).__name__,
                )
                raise outcome.error

            self._state = ProcessState.TERMINATED
            self.result = outcome
            self.status = outcome.status
            bind_child_context(pid=handle.pid)
            exit_code = self.exit_code_for(outcome.status)

            if outcome.status.has_code:
                logger.info(
                    f"{spec.display_name} exited with code {outcome.status.code}",
                    exit_code=exit_code,
                )
            else:
                logger.warning(
                    f"{spec.display_name} was terminated by {outcome.status.signal_name} "
                    f"without an exit code",
                    signal=outcome.status.signal,
                    exit_code=exit_code,
                )
            return exit_code
        finally:
            self._handle = None
            clear_child_context()

    async def run(self, spec: LaunchSpec) -> int:
        """Start the child and wait for it. See ``start`` and ``wait``."""
        self.start(spec)
        return await self.wait()

    def exit_code_for(self, status: ExitStatus) -> int:
        """Translate a child exit status into the supervisor's exit code."""
        if status.has_code:
            return status.code
        if self.abnormal_exit_policy == "signal" and status.signal is not None:
            return 128 + status.signal
        return self.fallback_exit_code
