"""Runtime handle for the supervised child process."""

import asyncio
from typing import Optional

import structlog

from bootwrap.core.exceptions import LaunchError
from bootwrap.core.models import (
    ExitStatus,
    LaunchFailed,
    LaunchSpec,
    Outcome,
    ProcessState,
    StreamMode,
    Terminated,
)

logger = structlog.get_logger()


class ChildHandle:
    """Handle to a single child process.

    The spawn and the wait run in one background task which resolves a single
    future with exactly one ``Outcome``: ``LaunchFailed`` or ``Terminated``.
    """

    def __init__(self, spec: LaunchSpec):
        self.spec = spec
        self.state = ProcessState.NOT_STARTED
        self.pid: Optional[int] = None
        self._process: Optional[asyncio.subprocess.Process] = None
        self._outcome: Optional[asyncio.Future] = None
        self._task: Optional[asyncio.Task] = None
        self._returncode: Optional[int] = None

    @classmethod
    def spawn(cls, spec: LaunchSpec) -> "ChildHandle":
        """Schedule the spawn and return without waiting for it.

        Must be called with a running event loop.
        """
        handle = cls(spec)
        loop = asyncio.get_running_loop()
        handle._outcome = loop.create_future()
        handle.state = ProcessState.STARTING
        handle._task = loop.create_task(handle._run())
        handle._task.add_done_callback(handle._on_task_done)
        return handle

    async def _run(self) -> None:
        capture = self.spec.stream_mode == StreamMode.CAPTURE
        pipe = asyncio.subprocess.PIPE if capture else None

        try:
            process = await asyncio.create_subprocess_exec(
                self.spec.executable,
                *self.spec.args,
                env=dict(self.spec.env),
                stdin=pipe,
                stdout=pipe,
                stderr=pipe,
            )
        except (OSError, ValueError) as e:
            self.state = ProcessState.FAILED_TO_START
            self._outcome.set_result(LaunchFailed(LaunchError(self.spec.executable, e)))
            return

        self._process = process
        self.pid = process.pid
        self.state = ProcessState.RUNNING
        logger.debug("Child process running", pid=process.pid)

        if capture:
            stdout, stderr = await process.communicate(self.spec.input or b"")
        else:
            stdout = stderr = None
            await process.wait()

        self._returncode = process.returncode
        status = ExitStatus.from_returncode(process.returncode)
        self._process = None
        self.state = ProcessState.TERMINATED
        self._outcome.set_result(Terminated(status=status, stdout=stdout, stderr=stderr))

    def _on_task_done(self, task: asyncio.Task) -> None:
        # Surface unexpected failures of the watcher task to whoever awaits the outcome
        if self._outcome.done():
            return
        if task.cancelled():
            self._outcome.cancel()
        else:
            self._outcome.set_exception(task.exception())

    async def outcome(self) -> Outcome:
        """Wait for the terminal outcome. Resolves exactly once."""
        if self._outcome is None:
            raise RuntimeError("Child process was never spawned")
        return await asyncio.shield(self._outcome)

    @property
    def is_running(self) -> bool:
        return self.state == ProcessState.RUNNING

    @property
    def returncode(self) -> Optional[int]:
        """Raw return code once the child has exited."""
        return self._returncode
