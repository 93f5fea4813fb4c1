"""Process adapter – learn the dev server's port from its startup output."""
from __future__ import annotations

import asyncio
import re

__all__ = ["PortDetector", "detect_port"]

_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")

# Tried in order; the first match wins.
_PORT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"ready on https?://(?:localhost|0\.0\.0\.0):(\d+)", re.IGNORECASE),
    re.compile(r"Local:\s+https?://localhost:(\d+)", re.IGNORECASE),
    re.compile(r"port:?\s+(\d+)", re.IGNORECASE),
)

# Keep enough of the previous chunk to match a phrase split across reads.
_TAIL_CHARS = 256


def _valid(port: int) -> bool:
    return 0 < port < 65536


def detect_port(output: str) -> int | None:
    """Return the port announced in *output*, or ``None``.

    Recognises ``ready on http://localhost:3000``, ``Local: http://localhost:3001``
    and a bare ``port 3000`` mention.
    """
    text = _ANSI_RE.sub("", output)
    for pattern in _PORT_PATTERNS:
        match = pattern.search(text)
        if match:
            port = int(match.group(1))
            if _valid(port):
                return port
    return None


class PortDetector:
    """Scan output chunks as they arrive and resolve the port exactly once."""

    def __init__(self) -> None:
        self._tail = ""
        self._port: int | None = None
        self._event = asyncio.Event()

    @property
    def port(self) -> int | None:
        return self._port

    @property
    def detected(self) -> bool:
        return self._port is not None

    def feed(self, chunk: str) -> int | None:
        """Scan *chunk*; return the port the first time it is found."""
        if self._port is not None:
            return None
        text = self._tail + chunk
        port = detect_port(text)
        if port is None:
            self._tail = text[-_TAIL_CHARS:]
            return None
        self._port = port
        self._tail = ""
        self._event.set()
        return port

    async def wait(self) -> int:
        await self._event.wait()
        assert self._port is not None
        return self._port
