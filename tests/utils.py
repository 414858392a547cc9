"""Fake git backend shared by the workflow tests."""

from __future__ import annotations

from collections import deque
from pathlib import Path
from typing import Iterable, Sequence

from git_promote.context import WorkflowContext
from git_promote.prompts import ScriptedPrompter
from git_promote.runner import CommandResult


def porcelain(*entries: tuple[str, str]) -> str:
    """Build ``git status --porcelain=v1 -z`` output from (XY, path) pairs."""
    return "".join(f"{code} {path}\0" for code, path in entries)


class FakeRunner:
    """Answers git invocations from an in-memory model of one repository.

    Every command is recorded in ``calls``. ``fail`` makes the next N
    invocations of a git subcommand (or provider tool) return an error.
    """

    def __init__(
        self,
        *,
        branch: str | None = "feature",
        remotes: dict[str, str] | None = None,
        upstreams: dict[str, str] | None = None,
        local_branches: Iterable[str] | None = None,
        remote_branches: Iterable[str] = (),
        status: str | Sequence[str] = "",
        staged: list[str] | None = None,
        tools: Iterable[str] = (),
        is_repo: bool = True,
    ) -> None:
        self.calls: list[list[str]] = []
        self.branch = branch
        self.remotes = dict(remotes if remotes is not None else {"origin": "git@github.com:acme/widget.git"})
        self.upstreams = dict(upstreams or {})
        if local_branches is None:
            local_branches = [branch] if branch else []
        self.local_branches = set(local_branches)
        self.remote_branches = set(remote_branches)
        self.status_outputs = deque([status] if isinstance(status, str) else status)
        self.last_status = ""
        self.staged = staged
        self.tools = set(tools)
        self.is_repo = is_repo
        self.commits: list[str] = []
        self.failures: dict[str, deque[CommandResult | None]] = {}
        self.tool_output = "https://example.test/requests/1\n"

    def fail(
        self,
        key: str,
        *,
        stderr: str = "boom",
        returncode: int = 1,
        times: int = 1,
        skip: int = 0,
    ) -> None:
        """Fail the next ``times`` calls of ``key`` after letting ``skip`` calls through."""
        queue = self.failures.setdefault(key, deque())
        queue.extend([None] * skip)
        for _ in range(times):
            queue.append(CommandResult(returncode=returncode, stderr=stderr))

    def which(self, name: str) -> str | None:
        return f"/usr/bin/{name}" if name in self.tools else None

    def run(self, command: Sequence[str], *, cwd: Path) -> CommandResult:
        cmd = list(command)
        self.calls.append(cmd)
        key = cmd[1] if cmd[0] == "git" else cmd[0]
        pending = self.failures.get(key)
        if pending:
            failure = pending.popleft()
            if failure is not None:
                return failure
        if cmd[0] != "git":
            return CommandResult(0, stdout=self.tool_output)
        handler = getattr(self, "_git_" + key.replace("-", "_"), None)
        if handler is None:
            return CommandResult(0)
        return handler(cmd[2:])

    # Queries used by assertions

    def git_calls(self, subcommand: str) -> list[list[str]]:
        return [cmd[1:] for cmd in self.calls if cmd[0] == "git" and cmd[1] == subcommand]

    def mutating_calls(self) -> list[list[str]]:
        verbs = {"add", "commit", "push", "pull", "merge", "checkout", "fetch"}
        return [cmd for cmd in self.calls if cmd[0] == "git" and cmd[1] in verbs]

    # git subcommands

    def _git_rev_parse(self, args: list[str]) -> CommandResult:
        if "--is-inside-work-tree" in args:
            if self.is_repo:
                return CommandResult(0, stdout="true\n")
            return CommandResult(128, stderr="fatal: not a git repository")
        if "@{u}" in args:
            upstream = self.upstreams.get(self.branch or "")
            if upstream:
                return CommandResult(0, stdout=upstream + "\n")
            return CommandResult(128, stderr="fatal: no upstream configured")
        if "--short" in args:
            return CommandResult(0, stdout="abc1234\n")
        return CommandResult(0)

    def _git_symbolic_ref(self, args: list[str]) -> CommandResult:
        if self.branch is None:
            return CommandResult(1)
        return CommandResult(0, stdout=self.branch + "\n")

    def _git_status(self, args: list[str]) -> CommandResult:
        if self.status_outputs:
            self.last_status = self.status_outputs.popleft()
        return CommandResult(0, stdout=self.last_status)

    def _git_diff(self, args: list[str]) -> CommandResult:
        if self.staged is not None:
            paths = self.staged
        else:
            paths = [record[3:] for record in self.last_status.split("\0") if len(record) > 3]
        return CommandResult(0, stdout="".join(f"{path}\n" for path in paths))

    def _git_commit(self, args: list[str]) -> CommandResult:
        self.commits.append(args[args.index("-m") + 1])
        return CommandResult(0)

    def _git_ls_remote(self, args: list[str]) -> CommandResult:
        # Patterns match any ref whose trailing path components equal them.
        remote, pattern = args[-2], args[-1]
        lines = []
        for entry in sorted(self.remote_branches):
            name, _, branch = entry.partition("/")
            ref = f"refs/heads/{branch}"
            if name == remote and (ref == pattern or ref.endswith("/" + pattern)):
                lines.append(f"0123abcd\t{ref}\n")
        return CommandResult(0, stdout="".join(lines))

    def _git_show_ref(self, args: list[str]) -> CommandResult:
        ref = args[-1]
        name = ref.removeprefix("refs/heads/")
        return CommandResult(0 if name in self.local_branches else 1)

    def _git_remote(self, args: list[str]) -> CommandResult:
        if not args:
            return CommandResult(0, stdout="".join(f"{name}\n" for name in self.remotes))
        if args[0] == "get-url":
            url = self.remotes.get(args[1])
            if url is None:
                return CommandResult(2, stderr=f"error: No such remote '{args[1]}'")
            return CommandResult(0, stdout=url + "\n")
        return CommandResult(0)

    def _git_push(self, args: list[str]) -> CommandResult:
        remote, branch = args[-2], args[-1]
        self.remote_branches.add(f"{remote}/{branch}")
        if "-u" in args:
            self.upstreams[branch] = f"{remote}/{branch}"
        return CommandResult(0)

    def _git_checkout(self, args: list[str]) -> CommandResult:
        if "-b" in args:
            name = args[args.index("-b") + 1]
            self.local_branches.add(name)
            if "--track" in args:
                self.upstreams[name] = args[args.index("--track") + 1]
            self.branch = name
            return CommandResult(0)
        name = args[0]
        if name not in self.local_branches:
            return CommandResult(1, stderr=f"error: pathspec '{name}' did not match")
        self.branch = name
        return CommandResult(0)


def make_context(
    runner: FakeRunner,
    *,
    prompter: ScriptedPrompter | None = None,
    interactive: bool = False,
    command: str = "to-self",
    cwd: Path | None = None,
) -> WorkflowContext:
    return WorkflowContext(
        command=command,
        cwd=cwd or Path("/repo"),
        runner=runner,
        prompter=prompter or ScriptedPrompter(),
        interactive=interactive,
    )
