"""Process adapter – DevServerProcess spawns and supervises the dev server."""
from __future__ import annotations

import asyncio
import os
import signal
import sys
from pathlib import Path
from typing import Mapping, TextIO

from vercel_local_cron.adapters.process.port_detector import PortDetector
from vercel_local_cron.kernel.errors import ProcessError
from vercel_local_cron.observability.logging import get_logger

__all__ = ["DEFAULT_DEV_COMMAND", "DevServerProcess"]

DEFAULT_DEV_COMMAND = "npx next dev"

logger = get_logger(__name__)

_READ_SIZE = 4096
_POSIX = os.name == "posix"


class DevServerProcess:
    """Runs *command* through the shell and mirrors its output.

    stdout is echoed and scanned for the listening port; stderr is echoed
    untouched. On POSIX the server gets its own process group so that
    :meth:`terminate` reaches the whole tree (``npx`` → ``next`` → node).
    """

    def __init__(
        self,
        command: str = DEFAULT_DEV_COMMAND,
        *,
        cwd: str | Path | None = None,
        env: Mapping[str, str] | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        detector: PortDetector | None = None,
    ) -> None:
        self.command = command
        self._cwd = str(cwd) if cwd is not None else None
        self._env = dict(env) if env is not None else None
        self._stdout = stdout or sys.stdout
        self._stderr = stderr or sys.stderr
        self.detector = detector or PortDetector()
        self._process: asyncio.subprocess.Process | None = None
        self._pumps: list[asyncio.Task[None]] = []

    @property
    def pid(self) -> int | None:
        return self._process.pid if self._process is not None else None

    @property
    def returncode(self) -> int | None:
        return self._process.returncode if self._process is not None else None

    @property
    def running(self) -> bool:
        return self._process is not None and self._process.returncode is None

    async def start(self) -> None:
        if self._process is not None:
            return
        logger.info("server.starting", command=self.command, cwd=self._cwd)
        try:
            self._process = await asyncio.create_subprocess_shell(
                self.command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self._cwd,
                env=self._env,
                start_new_session=_POSIX,
            )
        except OSError as exc:
            raise ProcessError(
                self.command,
                f"Failed to start '{self.command}': {exc}",
                exit_code=1,
                cause=exc,
            ) from exc
        assert self._process.stdout is not None and self._process.stderr is not None
        self._pumps = [
            asyncio.create_task(self._pump(self._process.stdout, self._stdout, detect=True)),
            asyncio.create_task(self._pump(self._process.stderr, self._stderr)),
        ]

    async def _pump(self, stream: asyncio.StreamReader, sink: TextIO, *, detect: bool = False) -> None:
        while True:
            chunk = await stream.read(_READ_SIZE)
            if not chunk:
                return
            text = chunk.decode("utf-8", errors="replace")
            sink.write(text)
            sink.flush()
            if detect and not self.detector.detected:
                port = self.detector.feed(text)
                if port is not None:
                    logger.info("server.port_detected", port=port)

    async def wait(self) -> int:
        """Wait for the server to exit, drain its output, and return the exit code."""
        if self._process is None:
            raise ProcessError(self.command, "Dev server was never started")
        code = await self._process.wait()
        if self._pumps:
            await asyncio.gather(*self._pumps, return_exceptions=True)
        logger.info("server.exited", command=self.command, exit_code=code)
        return code

    def terminate(self, sig: signal.Signals = signal.SIGINT) -> None:
        """Forward *sig* to the server if it is still running."""
        if not self.running:
            return
        assert self._process is not None
        try:
            if _POSIX:
                os.killpg(self._process.pid, sig)
            else:
                self._process.send_signal(sig)
        except ProcessLookupError:
            pass
