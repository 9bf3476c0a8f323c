"""The failed command handed to every rule."""

from __future__ import annotations

from pydantic import BaseModel


class Command(BaseModel):
    """Text and captured output of the command being fixed.

    Frozen: rules receive the same instance and must not alter it.
    """

    model_config = {"frozen": True}

    command: str
    stdout: str = ""
    stderr: str = ""

    @property
    def output(self) -> str:
        """stdout and stderr joined, for rules that do not care which stream."""
        if self.stdout and self.stderr:
            return f"{self.stdout}\n{self.stderr}"
        return self.stdout or self.stderr

    @property
    def parts(self) -> list[str]:
        """Whitespace-separated tokens of the command text."""
        return self.command.split()
