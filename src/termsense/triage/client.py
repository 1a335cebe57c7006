"""Assistant subprocess used to triage failed commands."""

from __future__ import annotations

import asyncio
import contextlib
import os
from collections.abc import Generator, Sequence
from typing import TYPE_CHECKING, Any

from loguru import logger

from termsense.core.types import TriageResult
from termsense.triage.response import parse_triage_response

if TYPE_CHECKING:
    from termsense.config import Settings

TRIAGE_TIMEOUT_SECONDS = 8.0
DEFAULT_TRIAGE_MODEL = "haiku"
DEFAULT_MAX_CONCURRENT = 4
# Time a terminated assistant gets before it is killed.
TERMINATE_GRACE_SECONDS = 1.0


def assistant_argv(assistant_path: str, model: str = DEFAULT_TRIAGE_MODEL) -> list[str]:
    return [assistant_path, "-p", "--model", model, "--output-format", "json"]


class TriageHandle:
    """One in-flight triage: an awaitable result plus a way to stop it.

    The result settles exactly once. Timeout, ``cancel()`` and process exit
    may race; whichever comes first wins and the rest are no-ops.
    """

    def __init__(self, argv: Sequence[str], prompt: str, *, cwd: str | None, timeout: float) -> None:
        loop = asyncio.get_running_loop()
        self._argv = list(argv)
        self._prompt = prompt
        self._cwd = cwd or os.getcwd()
        self._process: asyncio.subprocess.Process | None = None
        self.result: asyncio.Future[TriageResult | None] = loop.create_future()
        self._timer = loop.call_later(timeout, self._on_timeout, timeout)
        self._task = loop.create_task(self._run())

    @classmethod
    def settled(cls, value: TriageResult | None = None) -> TriageHandle:
        """A handle that is already resolved and never spawns anything."""
        handle = cls.__new__(cls)
        handle._argv = []
        handle._prompt = ""
        handle._cwd = ""
        handle._process = None
        handle._timer = None
        handle._task = None
        handle.result = asyncio.get_running_loop().create_future()
        handle.result.set_result(value)
        return handle

    @property
    def done(self) -> bool:
        return self.result.done()

    def __await__(self) -> Generator[Any, None, TriageResult | None]:
        return asyncio.shield(self.result).__await__()

    def cancel(self) -> None:
        if self._settle(None):
            logger.debug("triage.cancel argv0={}", self._argv[0])
            self._terminate()

    def _settle(self, value: TriageResult | None) -> bool:
        if self.result.done():
            return False
        if self._timer is not None:
            self._timer.cancel()
        self.result.set_result(value)
        return True

    def _terminate(self) -> None:
        process = self._process
        if process is None or process.returncode is not None:
            return
        with contextlib.suppress(ProcessLookupError):
            process.terminate()
        asyncio.get_running_loop().call_later(TERMINATE_GRACE_SECONDS, self._kill)

    def _kill(self) -> None:
        process = self._process
        if process is None or process.returncode is not None:
            return
        logger.warning("triage.kill pid={}", process.pid)
        with contextlib.suppress(ProcessLookupError):
            process.kill()

    def _on_timeout(self, timeout: float) -> None:
        if self._settle(None):
            logger.warning("triage.timeout seconds={}", timeout)
            self._terminate()

    async def _run(self) -> None:
        try:
            process = await asyncio.create_subprocess_exec(
                *self._argv,
                cwd=self._cwd,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            logger.warning("triage.spawn.error path={} error={}", self._argv[0], exc)
            self._settle(None)
            return

        self._process = process
        if self.result.done():
            # Cancelled or timed out while spawning.
            self._terminate()
            await process.wait()
            return

        try:
            stdout_bytes, stderr_bytes = await process.communicate(self._prompt.encode("utf-8"))
        except OSError as exc:
            logger.warning("triage.io.error path={} error={}", self._argv[0], exc)
            self._settle(None)
            self._terminate()
            return

        if self.result.done():
            # Late close after timeout/cancel.
            return

        if process.returncode != 0:
            stderr_text = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
            logger.warning("triage.exit.error code={} stderr={}", process.returncode, stderr_text[:500])
            self._settle(None)
            return

        stdout_text = (stdout_bytes or b"").decode("utf-8", errors="replace")
        self._settle(parse_triage_response(stdout_text))


def triage_error(
    assistant_path: str,
    prompt: str,
    cwd: str | None = None,
    *,
    model: str = DEFAULT_TRIAGE_MODEL,
    timeout: float = TRIAGE_TIMEOUT_SECONDS,
) -> TriageHandle:
    """Spawn the assistant on ``prompt``. Must be called from a running event loop."""

    return TriageHandle(assistant_argv(assistant_path, model), prompt, cwd=cwd, timeout=timeout)


class ErrorTriageClient:
    """Configured triage spawner with a cap on simultaneous subprocesses."""

    def __init__(
        self,
        assistant_path: str | None = None,
        *,
        model: str = DEFAULT_TRIAGE_MODEL,
        timeout: float = TRIAGE_TIMEOUT_SECONDS,
        max_concurrent: int = DEFAULT_MAX_CONCURRENT,
    ) -> None:
        self.assistant_path = assistant_path
        self._model = model
        self._timeout = timeout
        self._max_concurrent = max_concurrent
        self._active: set[TriageHandle] = set()

    @classmethod
    def from_settings(cls, settings: Settings, assistant_path: str | None = None) -> ErrorTriageClient:
        return cls(
            assistant_path or settings.assistant_path,
            model=settings.assistant_model,
            timeout=settings.triage_timeout_seconds,
            max_concurrent=settings.triage_max_concurrent,
        )

    @property
    def active(self) -> int:
        return len(self._active)

    def at_capacity(self) -> bool:
        return len(self._active) >= self._max_concurrent

    def triage(self, prompt: str, cwd: str | None = None) -> TriageHandle:
        """Start one triage. Over the cap, or without an assistant, resolves None at once."""

        if self.assistant_path is None:
            logger.debug("triage.skip reason=no_assistant")
            return TriageHandle.settled(None)
        if self.at_capacity():
            logger.info("triage.skip reason=busy active={}", len(self._active))
            return TriageHandle.settled(None)

        handle = triage_error(self.assistant_path, prompt, cwd, model=self._model, timeout=self._timeout)
        self._active.add(handle)
        # Counted until the subprocess is reaped, not just until the result settles.
        handle._task.add_done_callback(lambda _: self._active.discard(handle))
        return handle
