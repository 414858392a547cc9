"""Per-invocation state threaded through every workflow."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .git import Git
from .prompts import Prompter
from .runner import CommandRunner


@dataclass
class WorkflowContext:
    """Everything a workflow needs from its environment.

    The working directory and the interactive-terminal flag are explicit here
    so tests can pin them instead of patching process globals.
    """

    command: str
    cwd: Path
    runner: CommandRunner
    prompter: Prompter
    interactive: bool = False
    git: Git = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.git = Git(runner=self.runner, cwd=self.cwd)
