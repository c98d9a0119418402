"""Code execution sandbox used to grade Coding questions and for live runs."""

import asyncio
import logging
from abc import ABC, abstractmethod

from examServer.models.runner import RunResult

logger = logging.getLogger(__name__)

EXECUTION_ERROR = "Execution Error"


class CodeRunner(ABC):
    """Runs submitted source against one stdin and reports the outcome.

    Implementations must never raise for process-level failures; crashes,
    timeouts and spawn errors all come back as ``success=False``.
    """

    @abstractmethod
    async def run(self, code: str, stdin: str = "") -> RunResult:
        ...


class PythonSubprocessRunner(CodeRunner):
    """Runs code with ``<python> -c <code>`` in a fresh process per call."""

    def __init__(self, executable: str, timeout: float = 3.0):
        self.executable = executable
        self.timeout = timeout

    @property
    def time_limit_message(self) -> str:
        return f"Time Limit Exceeded ({self.timeout:g}s)"

    async def run(self, code: str, stdin: str = "") -> RunResult:
        stdin_bytes = (stdin or "").encode(errors="replace")
        try:
            process = await asyncio.create_subprocess_exec(
                self.executable, "-c", code,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except (OSError, ValueError) as e:
            # ValueError covers NUL bytes and unencodable surrogates in the source
            logger.error(f"Failed to start {self.executable}: {e}")
            return RunResult(success=False, output=EXECUTION_ERROR)

        try:
            # Always feed stdin, even empty, so it gets closed and reads hit EOF
            stdout, stderr = await asyncio.wait_for(
                process.communicate(stdin_bytes),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Execution exceeded {self.timeout:g}s, killing pid {process.pid}")
            try:
                process.kill()
            except ProcessLookupError:
                pass
            await process.wait()
            return RunResult(success=False, output=self.time_limit_message)

        if process.returncode == 0:
            return RunResult(success=True, output=stdout.decode(errors="replace"))
        error = stderr.decode(errors="replace")
        return RunResult(success=False, output=error or EXECUTION_ERROR)
