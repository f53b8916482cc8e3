"""
result.py
=========

Result type and error taxonomy shared by every fallible operation.

Classes:
--------
- Result: Success value or tagged error.
- NexusError: Base class of all dispatcher and generator errors.
- UnrecognizedCommand, LaunchError: Dispatch-time errors.
- GenerationError, CommandNameTooLong, CommandDescriptionTooLong: Layout errors.
- WriteFailure, ReadFailure, RegistryError: Resource errors.
"""

from dataclasses import dataclass
from typing import Any, Optional


class NexusError(Exception):
    """Base error. ``tag`` identifies the error kind without isinstance checks."""

    tag = "nexus-error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class UnrecognizedCommand(NexusError):
    tag = "unrecognized-command"

    def __init__(self, token: str):
        self.token = token
        super().__init__(
            f"invalid argument. Unrecognized/unsupported command. Value: `{token}`."
        )


class LaunchError(NexusError):
    tag = "launch-error"

    def __init__(self, executable: str, reason: str):
        self.executable = executable
        self.reason = reason
        super().__init__(f"unable to launch `{executable}`. {reason}")


class GenerationError(NexusError):
    tag = "generation-error"


class CommandNameTooLong(GenerationError):
    tag = "command-name-too-long"

    def __init__(self, command: str, width: int, limit: int):
        self.command = command
        self.width = width
        self.limit = limit
        super().__init__(
            f"command name is too long. Prefix width {width} exceeds {limit} "
            f"characters. Command: `{command}`."
        )


class CommandDescriptionTooLong(GenerationError):
    tag = "command-description-too-long"

    def __init__(self, command: str, width: int, limit: int):
        self.command = command
        self.width = width
        self.limit = limit
        super().__init__(
            f"command description is too long. Row width {width} exceeds {limit} "
            f"characters. Command: `{command}`."
        )


class WriteFailure(NexusError):
    tag = "write-failure"

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"unable to write `{path}`. {reason}")


class ReadFailure(NexusError):
    tag = "read-failure"

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"unable to read `{path}`. {reason}")


class RegistryError(NexusError):
    tag = "registry-error"


@dataclass(frozen=True)
class Result:
    """
    Outcome of a fallible operation.

    Exactly one of ``value`` / ``error`` is meaningful; check ``ok`` first.
    """

    value: Any = None
    error: Optional[NexusError] = None

    @classmethod
    def success(cls, value=None) -> "Result":
        return cls(value=value)

    @classmethod
    def failure(cls, error: NexusError) -> "Result":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self):
        """Return the value, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value
