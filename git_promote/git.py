"""Thin wrappers around git CLI commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .exceptions import DetachedHead, GitCommandError, NotAGitRepository
from .models import StatusEntry, UpstreamRef, WorkingTreeStatus
from .runner import CommandResult, CommandRunner

logger = logging.getLogger(__name__)


def parse_porcelain_status(output: str) -> WorkingTreeStatus:
    """Parse ``git status --porcelain=v1 -z`` output.

    Rename and copy records are followed by an extra NUL-terminated field
    holding the original path.
    """

    entries: list[StatusEntry] = []
    fields = output.split("\0")
    idx = 0
    while idx < len(fields):
        record = fields[idx]
        idx += 1
        if len(record) < 4:
            continue
        index, working_dir, path = record[0], record[1], record[3:]
        original = None
        if index in "RC" and idx < len(fields):
            original = fields[idx] or None
            idx += 1
        entries.append(
            StatusEntry(path=path, index=index, working_dir=working_dir, original_path=original)
        )
    return WorkingTreeStatus(entries=tuple(entries))


@dataclass
class Git:
    """A git repository rooted at ``cwd`` driven through a command runner."""

    runner: CommandRunner
    cwd: Path

    def run(self, args: Iterable[str], *, check: bool = True) -> CommandResult:
        """Execute a git command and optionally raise on failure."""

        cmd = ["git", *args]
        result = self.runner.run(cmd, cwd=self.cwd)
        if check and not result.ok:
            raise GitCommandError(cmd, result.returncode, stdout=result.stdout, stderr=result.stderr)
        return result

    # Inspection

    def is_inside_repository(self) -> bool:
        result = self.run(["rev-parse", "--is-inside-work-tree"], check=False)
        return result.ok and result.stdout.strip() == "true"

    def ensure_repository(self) -> None:
        if not self.is_inside_repository():
            raise NotAGitRepository()

    def current_branch(self) -> str | None:
        """Return the checked out branch name, or None on a detached HEAD."""

        result = self.run(["symbolic-ref", "--quiet", "--short", "HEAD"], check=False)
        name = result.stdout.strip()
        if not result.ok or not name or name == "HEAD":
            return None
        return name

    def require_branch(self) -> str:
        branch = self.current_branch()
        if branch is None:
            raise DetachedHead()
        return branch

    def working_tree_status(self) -> WorkingTreeStatus:
        result = self.run(["status", "--porcelain=v1", "-z"])
        return parse_porcelain_status(result.stdout)

    def upstream_ref(self) -> UpstreamRef | None:
        result = self.run(
            ["rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{u}"],
            check=False,
        )
        if not result.ok:
            return None
        return UpstreamRef.parse(result.stdout)

    def remote_branch_exists(self, remote: str, branch: str) -> bool:
        """Return True only when ``remote`` has exactly ``refs/heads/<branch>``.

        ls-remote matches patterns against ref tails, so ``test`` alone would
        also match ``refs/heads/feature/test``.
        """

        ref = f"refs/heads/{branch}"
        try:
            result = self.run(["ls-remote", "--heads", remote, ref], check=False)
        except OSError as exc:
            logger.debug("ls-remote %s %s failed: %s", remote, branch, exc)
            return False
        if not result.ok:
            return False
        return any(line.split("\t", 1)[-1].strip() == ref for line in result.stdout.splitlines())

    def local_branch_exists(self, branch: str) -> bool:
        result = self.run(
            ["show-ref", "--verify", "--quiet", f"refs/heads/{branch}"],
            check=False,
        )
        return result.ok

    def list_remotes(self) -> list[str]:
        result = self.run(["remote"])
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def remote_url(self, remote: str) -> str:
        return self.run(["remote", "get-url", remote]).stdout.strip()

    def staged_paths(self) -> list[str]:
        result = self.run(["diff", "--cached", "--name-only"])
        return [line for line in result.stdout.splitlines() if line.strip()]

    def short_head(self) -> str:
        return self.run(["rev-parse", "--short", "HEAD"]).stdout.strip()

    # Mutation

    def add_all(self) -> None:
        self.run(["add", "-A"])

    def commit(self, message: str) -> None:
        self.run(["commit", "-m", message])

    def pull(self, remote: str | None = None, branch: str | None = None) -> CommandResult:
        args = ["pull", "--no-rebase", "--no-edit"]
        if remote and branch:
            args.extend([remote, branch])
        return self.run(args, check=False)

    def fetch(self, remote: str, branch: str) -> None:
        self.run(["fetch", remote, branch])

    def merge(self, ref: str) -> CommandResult:
        return self.run(["merge", "--no-edit", ref], check=False)

    def push(self, remote: str, branch: str, *, set_upstream: bool = False) -> CommandResult:
        args = ["push"]
        if set_upstream:
            args.append("-u")
        args.extend([remote, branch])
        return self.run(args, check=False)

    def checkout(self, branch: str) -> None:
        self.run(["checkout", branch])

    def checkout_tracking(self, branch: str, remote_ref: str) -> None:
        self.run(["checkout", "-b", branch, "--track", remote_ref])

    def checkout_new(self, branch: str) -> None:
        self.run(["checkout", "-b", branch])
