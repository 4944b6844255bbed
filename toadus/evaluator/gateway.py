"""Exclusive access to the external Forge evaluator process."""

from __future__ import annotations

import asyncio
import codecs
import contextlib
import logging
import os
import tempfile
import typing as t

from toadus.lib.logging import TRACE
from toadus.model import EvaluationRun, EvaluatorExit

from .errors import EvaluatorExitError, EvaluatorLaunchError

logger = logging.getLogger(__name__)

OutputListener = t.Callable[[str], None]
ExitListener = t.Callable[[EvaluatorExit], None]

# racket exits 1 when at least one test failed
NORMAL_EXIT_CODES: t.Final[frozenset[int]] = frozenset({0, 1})
DEFAULT_TIMEOUT_MS: t.Final[int] = 120000


class _ActiveProcess(object):
    def __init__(self, process: asyncio.subprocess.Process) -> None:
        self.process = process
        self.stopped = False
        self.manual = False

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def running(self) -> bool:
        return self.process.returncode is None


class EvaluatorGateway(object):
    """Owns the single evaluator process; starting a run stops the previous one.

    Output is streamed to listeners registered with `on_stdout` / `on_stderr`
    as it arrives, and accumulated into the returned `EvaluationRun`.
    """

    def __init__(self, command: t.Sequence[str] = ("racket",), termination_grace: float = 5.0) -> None:
        self.command = tuple(command)
        self.termination_grace = termination_grace
        self._active: _ActiveProcess | None = None
        self._stdout_listeners: list[OutputListener] = []
        self._stderr_listeners: list[OutputListener] = []
        self._exit_listeners: list[ExitListener] = []
        self._watchdogs: set[asyncio.Task[None]] = set()

    def on_stdout(self, listener: OutputListener) -> None:
        self._stdout_listeners.append(listener)

    def on_stderr(self, listener: OutputListener) -> None:
        self._stderr_listeners.append(listener)

    def on_exit(self, listener: ExitListener) -> None:
        self._exit_listeners.append(listener)

    @property
    def running(self) -> bool:
        return self._active is not None and self._active.running

    async def run(self, program_text: str) -> EvaluationRun:
        """Evaluate `program_text` and return everything the process wrote."""
        self.stop(manual=False)

        result = EvaluationRun(source=program_text)
        path = self._write_program(program_text)
        try:
            try:
                process = await asyncio.create_subprocess_exec(
                    *self.command,
                    path,
                    stdin=asyncio.subprocess.DEVNULL,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                )
            except OSError as e:
                logger.error("could not start evaluator", extra={"command": self.command, "error": str(e)})
                raise EvaluatorLaunchError(f"Could not run {self.command[0]}: {e}", path=path) from e

            active = self._active = _ActiveProcess(process)
            logger.debug("started evaluator", extra={"pid": active.pid, "path": path})

            def collect_stdout(chunk: str) -> None:
                result.stdout += chunk

            def collect_stderr(chunk: str) -> None:
                result.stderr += chunk

            assert process.stdout is not None and process.stderr is not None
            await asyncio.gather(
                self._pump("stdout", process.stdout, collect_stdout, self._stdout_listeners),
                self._pump("stderr", process.stderr, collect_stderr, self._stderr_listeners),
            )
            code = await process.wait()
            self._finish(active, code)
            return result
        finally:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(path)

    async def run_with_timeout(self, program_text: str, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> EvaluationRun:
        """Like `run`, but give up after `timeout_ms` and return the timeout sentinel.

        The abandoned process is left alone; the next `run` supersedes it.
        """
        task = asyncio.ensure_future(self.run(program_text))
        done, _ = await asyncio.wait({task}, timeout=timeout_ms / 1000)
        if task in done:
            return task.result()

        logger.warning("evaluator timed out", extra={"timeout_ms": timeout_ms})
        task.add_done_callback(_discard_result)
        return EvaluationRun.timed_out(program_text)

    def stop(self, manual: bool = True) -> None:
        """Ask the active process to terminate, escalating to a kill after the grace period."""
        active = self._active
        if active is None or not active.running:
            return

        active.stopped = True
        active.manual = manual
        logger.info("terminating evaluator", extra={"pid": active.pid, "manual": manual})
        with contextlib.suppress(ProcessLookupError):
            active.process.terminate()

        watchdog = asyncio.get_running_loop().create_task(self._escalate(active))
        self._watchdogs.add(watchdog)
        watchdog.add_done_callback(self._watchdogs.discard)

    async def aclose(self) -> None:
        self.stop(manual=False)
        for watchdog in list(self._watchdogs):
            await watchdog

    async def _escalate(self, active: _ActiveProcess) -> None:
        try:
            await asyncio.wait_for(active.process.wait(), timeout=self.termination_grace)
        except asyncio.TimeoutError:
            logger.warning("evaluator did not terminate; sending SIGKILL", extra={"pid": active.pid})
            with contextlib.suppress(ProcessLookupError):
                active.process.kill()
            await active.process.wait()

    def _finish(self, active: _ActiveProcess, code: int) -> None:
        if self._active is active:
            self._active = None

        exit_ = EvaluatorExit(code=code, manual=active.manual)
        for listener in self._exit_listeners:
            listener(exit_)

        if active.stopped:
            logger.debug("evaluator stopped", extra={"pid": active.pid, "code": code, "manual": active.manual})
            return
        if code not in NORMAL_EXIT_CODES:
            logger.error("evaluator exited abnormally", extra={"pid": active.pid, "code": code})
            raise EvaluatorExitError(code)

    @staticmethod
    async def _pump(
        name: str, stream: asyncio.StreamReader, collect: OutputListener, listeners: t.Sequence[OutputListener]
    ) -> None:
        # a multibyte character may straddle two reads
        decoder = codecs.getincrementaldecoder("utf8")(errors="replace")
        while True:
            chunk = await stream.read(4096)
            text = decoder.decode(chunk, final=not chunk)
            if text:
                logger.log(TRACE, text, extra={"stream": name})
                collect(text)
                for listener in listeners:
                    listener(text)
            if not chunk:
                break

    @staticmethod
    def _write_program(program_text: str) -> str:
        try:
            fd, path = tempfile.mkstemp(prefix="toadus-", suffix=".frg")
            with os.fdopen(fd, "w", encoding="utf8") as f:
                f.write(program_text)
        except OSError as e:
            logger.error(
                "could not write evaluation file", extra={"tmpdir": tempfile.gettempdir(), "error": str(e)}
            )
            raise EvaluatorLaunchError(
                f"Could not write a temporary file to {tempfile.gettempdir()}: {e}"
            ) from e
        return path


def _discard_result(task: asyncio.Future[EvaluationRun]) -> None:
    # a superseded run's output belongs to nobody
    if not task.cancelled() and (e := task.exception()) is not None:
        logger.debug("abandoned evaluator run failed", extra={"error": str(e)})
