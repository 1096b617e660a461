"""Running shell commands and collecting their output."""

from __future__ import annotations

import subprocess

from utilkit.text import Text


def execute_command(cmd: str) -> Text:
    """Run ``cmd`` through the shell and return what it wrote to stdout."""
    if not cmd:
        raise ValueError("no command given")
    completed = subprocess.run(cmd, shell=True, capture_output=True, text=True, check=False)
    return Text(completed.stdout)