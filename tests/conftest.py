# tests/conftest.py
from pathlib import Path
import pytest
from sanitizr.utils.tools import ToolResult


class FakeRunner:
    """Stands in for ffmpeg/exiftool. Writes `output` to the last argv entry when it succeeds."""

    def __init__(self, succeeded: bool = True, log: str = "", output: bytes | None = None):
        self.succeeded = succeeded
        self.log = log
        self.output = output
        self.calls: list[list[str]] = []

    def execute(self, args):
        self.calls.append([str(a) for a in args])
        if self.succeeded and self.output is not None:
            Path(args[-1]).write_bytes(self.output)
        return ToolResult(self.succeeded, self.log)


@pytest.fixture
def fake_runner():
    return FakeRunner


def leftovers(directory: Path) -> list[str]:
    return [p.name for p in directory.iterdir() if p.name.startswith(".sanitizr-")]


def mark_encrypted(path: Path) -> None:
    """Set the encryption bit on the first central directory entry of a zip."""
    data = bytearray(path.read_bytes())
    central = data.find(b"PK\x01\x02")
    data[central + 8] |= 0x1
    path.write_bytes(bytes(data))
