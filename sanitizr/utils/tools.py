# sanitizr/utils/tools.py
"""
External command-line tools (ffmpeg, exiftool) behind a small capability
interface so cleaners can be driven by a fake in tests.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, Sequence
import logging
import subprocess

from sanitizr import settings

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolResult:
    succeeded: bool
    log: str = ""


class ToolRunner(Protocol):
    def execute(self, args: Sequence[str]) -> ToolResult: ...


class SubprocessRunner:
    """Runs argv synchronously; a missing binary or a timeout is a failed result, not an exception."""

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = settings.TOOL_TIMEOUT if timeout is None else timeout

    def execute(self, args: Sequence[str]) -> ToolResult:
        cmd = [str(a) for a in args]
        log.debug("Running %s", " ".join(cmd))
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout)
        except FileNotFoundError:
            return ToolResult(False, f"{cmd[0]} is not installed or not on PATH")
        except subprocess.TimeoutExpired:
            return ToolResult(False, f"{cmd[0]} timed out after {self.timeout}s")
        output = "\n".join(part for part in (proc.stdout, proc.stderr) if part)
        return ToolResult(proc.returncode == 0, output)
