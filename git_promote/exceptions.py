"""Custom error hierarchy for git-promote."""

from __future__ import annotations

from typing import Sequence


class PromoteError(RuntimeError):
    """Base error for the CLI."""


class GitCommandError(PromoteError):
    """Raised when an underlying git command fails."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        *,
        stdout: str | None = None,
        stderr: str | None = None,
    ):
        self.command = list(command)
        self.returncode = returncode
        self.stdout = stdout or ""
        self.stderr = stderr or ""
        message = f"command failed (exit {returncode}): {' '.join(self.command)}"
        details = "\n".join(
            section
            for section in (self.stdout.strip(), self.stderr.strip())
            if section
        )
        if details:
            message = f"{message}\n{details}"
        super().__init__(message)


class NotAGitRepository(PromoteError):
    """Raised when the working directory is not inside a git work tree."""

    def __init__(self, message: str = "not inside a git repository"):
        super().__init__(message)


class DetachedHead(PromoteError):
    """Raised when a workflow needs a named branch but HEAD is detached."""

    def __init__(self, message: str = "detached HEAD; checkout a branch first"):
        super().__init__(message)


class NoRemoteConfigured(PromoteError):
    """Raised when the repository has no remotes at all."""

    def __init__(self, message: str = "no git remotes found (expected 'origin')"):
        super().__init__(message)


class MissingCommitMetadata(PromoteError):
    """Raised when a commit message cannot be determined without a terminal."""


class UnknownCommitType(PromoteError):
    """Raised when a supplied commit type is not one of the known prefixes."""


class SyncFailed(PromoteError):
    """Raised when pulling or pushing fails for a reason other than conflicts."""


class MergeConflict(PromoteError):
    """Raised when a pull or merge leaves conflicted paths behind."""

    def __init__(self, paths: Sequence[str], command: str, operation: str = "pull"):
        self.paths = list(paths)
        self.command = command
        self.operation = operation
        listing = "\n".join(f"  {path}" for path in self.paths)
        super().__init__(
            f"{operation} resulted in conflicts:\n{listing}\n"
            f"please resolve conflicts, then rerun {command}"
        )


class InvalidSourceBranch(PromoteError):
    """Raised when promote-to-main is started from the target branch itself."""


class NoMergeRequestToolAvailable(PromoteError):
    """Raised when no provider CLI could open the merge/pull request."""

    def __init__(self, manual_url: str | None = None):
        self.manual_url = manual_url
        message = "could not create MR/PR automatically (install and authenticate gh or glab)"
        if manual_url:
            message = f"{message}; open it manually: {manual_url}"
        super().__init__(message)


class ValidationError(PromoteError):
    """Raised when user input fails validation."""


class UserAbort(PromoteError):
    """Raised when the user cancels an interactive flow."""


class DeployError(PromoteError):
    """Raised by the sample deploy hooks when asked to do real work."""


__all__ = [
    "PromoteError",
    "GitCommandError",
    "NotAGitRepository",
    "DetachedHead",
    "NoRemoteConfigured",
    "MissingCommitMetadata",
    "UnknownCommitType",
    "SyncFailed",
    "MergeConflict",
    "InvalidSourceBranch",
    "NoMergeRequestToolAvailable",
    "ValidationError",
    "UserAbort",
    "DeployError",
]
