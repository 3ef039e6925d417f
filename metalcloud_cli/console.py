"""
Console — Input/output channel for prompts and piped content

Commands never touch sys.stdin/sys.stdout directly. They receive a Console
(or fall back to the process default from get_console()), which makes it
possible to swap the streams in tests.

Usage:
    console = Console(stdin=io.StringIO("yes\\n"), stdout=io.StringIO())
    console.ask("Delete? Type \\"yes\\" to continue:")  # True
"""

import getpass
import os
import sys
import threading
from dataclasses import dataclass, field
from typing import Optional, TextIO


def _running_under_test() -> bool:
    """Prompt text is suppressed under pytest or when explicitly requested."""
    if os.environ.get("METALCLOUD_SUPPRESS_PROMPTS", "").lower() in ("1", "true", "yes"):
        return True
    return "PYTEST_CURRENT_TEST" in os.environ


@dataclass
class Console:
    """
    A pair of text streams used for interactive I/O.

    Attributes:
        stdin: Stream answers and piped content are read from
        stdout: Stream prompts are written to
        suppress_prompts: If True, confirmation prompts print nothing
    """
    stdin: TextIO = field(default_factory=lambda: sys.stdin)
    stdout: TextIO = field(default_factory=lambda: sys.stdout)
    suppress_prompts: bool = field(default_factory=_running_under_test)

    def write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def _read_line(self) -> Optional[str]:
        line = self.stdin.readline()
        if line == "":
            return None  # EOF
        return line.rstrip("\r\n")

    def ask(self, message: str) -> bool:
        """
        Print a prompt and read one line.

        Returns:
            True only if the line is exactly "yes"; EOF counts as no
        """
        if message:
            self.write(message)
        answer = self._read_line()
        return answer == "yes"

    def request_input(self, message: str) -> bytes:
        """Print a prompt and return the next line as bytes."""
        if message:
            self.write(message)
        line = self._read_line()
        return (line or "").encode("utf-8")

    def request_input_silent(self, message: str) -> bytes:
        """Like request_input() but without echo when attached to a terminal."""
        isatty = getattr(self.stdin, "isatty", None)
        if isatty is not None and isatty():
            return getpass.getpass(message, stream=self.stdout).encode("utf-8")
        return self.request_input(message)

    def read_pipe(self) -> bytes:
        """Read everything from stdin (used with --pipe)."""
        buffer = getattr(self.stdin, "buffer", None)
        if buffer is not None:
            return buffer.read()
        return self.stdin.read().encode("utf-8")


# =============================================================================
# Process Default
# =============================================================================

_console: Optional[Console] = None
_console_lock = threading.Lock()


def get_console() -> Console:
    """
    Get the process-wide console (stdin/stdout), creating it on first use.
    """
    global _console

    if _console is None:
        with _console_lock:
            if _console is None:
                _console = Console()

    return _console


def set_console(console: Console) -> None:
    """Replace the process-wide console (used by tests)."""
    global _console

    with _console_lock:
        _console = console


def reset_console() -> None:
    """Drop the process-wide console; the next get_console() recreates it."""
    global _console

    with _console_lock:
        _console = None
