"""
Child-process dispatch.

ProcessDispatcher launches a resolved executable with the parent's working
directory, an environment snapshot and the parent's standard streams, then
blocks until the child exits.
"""

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from .logging import setup_tagged_logger
from .result import LaunchError, Result

logger = setup_tagged_logger(__name__)

HELP_FLAG = "--help"


@dataclass(frozen=True)
class LaunchOutcome:
    """A child process that was started and has exited."""

    executable: str
    argv: List[str]
    returncode: int

    def exit_status(self) -> int:
        """Child status as a shell would report it (signal N -> 128 + N)."""
        if self.returncode < 0:
            return 128 - self.returncode
        return self.returncode


class ProcessDispatcher:
    """
    Launch-and-wait dispatcher.

    Ctrl-C while a child runs is delivered to the child (same process group);
    the parent keeps waiting and reports the child's outcome.

    Args:
        popen: Callable with the ``subprocess.Popen`` signature; swapped in tests.
    """

    def __init__(self, popen=subprocess.Popen):
        self.popen = popen

    @staticmethod
    def build_argv(executable, extra_args: Sequence[str], help_mode: bool = False) -> List[str]:
        if help_mode:
            return [str(executable), HELP_FLAG]
        return [str(executable), *extra_args]

    @staticmethod
    def _wait(proc) -> int:
        while True:
            try:
                return proc.wait()
            except KeyboardInterrupt:
                logger.debug("Interrupted; waiting for child %s", proc.args)

    def dispatch(
        self,
        executable,
        extra_args: Sequence[str] = (),
        help_mode: bool = False,
        cwd: Optional[str] = None,
        env: Optional[dict] = None,
    ) -> Result:
        """
        Run ``executable`` as a child process.

        Args:
            executable: Path to the entry point.
            extra_args: Arguments following the command token, in order.
            help_mode: Pass only the help flag, ignoring ``extra_args``.
            cwd: Working directory (default: the current one).
            env: Environment (default: a snapshot of ``os.environ``).

        Returns:
            Result wrapping a LaunchOutcome, or a LaunchError if the child
            could not be started.
        """
        argv = self.build_argv(executable, extra_args, help_mode)
        cwd = os.getcwd() if cwd is None else cwd
        env = dict(os.environ) if env is None else dict(env)

        logger.debug("Launching %s (cwd=%s)", argv, cwd)
        try:
            # stdin/stdout/stderr left as None: the child inherits them
            proc = self.popen(argv, cwd=cwd, env=env)
        except OSError as e:
            reason = e.strerror or str(e)
            logger.debug("Launch of %s failed: %s", executable, reason)
            return Result.failure(LaunchError(str(executable), reason))

        returncode = self._wait(proc)
        logger.debug("%s exited with %d", executable, returncode)
        return Result.success(
            LaunchOutcome(executable=str(Path(executable)), argv=argv, returncode=returncode)
        )
