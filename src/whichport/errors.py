from __future__ import annotations

from typing import Sequence


class WhichportError(RuntimeError):
    pass


class NoPortsError(WhichportError):
    def __init__(self) -> None:
        super().__init__("no ports specified and --all not provided")


class ToolError(WhichportError):
    """A single collection strategy failed; the collector may try the next one."""

    def __init__(self, command: str, message: str) -> None:
        super().__init__(message)
        self.command = command


class CommandFailed(ToolError):
    def __init__(self, command: str, details: str) -> None:
        super().__init__(command, f"failed to run {command}: {details}")
        self.details = details


class CommandError(ToolError):
    def __init__(self, command: str, stderr: str) -> None:
        super().__init__(command, f"command {command} returned error: {stderr}")
        self.stderr = stderr


class AllMethodsFailed(WhichportError):
    def __init__(self, errors: Sequence[str], separator: str = " | ") -> None:
        self.errors = list(errors)
        super().__init__(f"all collection methods failed: {separator.join(self.errors)}")


class OutputError(WhichportError):
    pass
