"""Dataclasses shared across modules."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

Provider = Literal["github", "gitlab", "unknown"]

# Porcelain XY pairs that mark an unmerged path.
CONFLICT_CODES = frozenset({"DD", "AU", "UD", "UA", "DU", "AA", "UU"})

STATE_NAMES = {
    "M": "modified",
    "T": "modified",
    "A": "added",
    "D": "deleted",
    "R": "renamed",
    "C": "copied",
    "U": "conflicted",
    "?": "untracked",
    "!": "ignored",
    " ": "unchanged",
}


@dataclass(frozen=True)
class StatusEntry:
    """One changed path as reported by ``git status --porcelain``."""

    path: str
    index: str = " "
    working_dir: str = " "
    original_path: str | None = None

    @property
    def code(self) -> str:
        return f"{self.index}{self.working_dir}"

    @property
    def conflicted(self) -> bool:
        return self.code in CONFLICT_CODES

    @property
    def index_state(self) -> str:
        if self.conflicted:
            return "conflicted"
        return STATE_NAMES.get(self.index, "unknown")

    @property
    def working_dir_state(self) -> str:
        if self.conflicted:
            return "conflicted"
        return STATE_NAMES.get(self.working_dir, "unknown")


@dataclass(frozen=True)
class WorkingTreeStatus:
    """Snapshot of the working tree; recomputed on every inspection."""

    entries: tuple[StatusEntry, ...] = ()

    @property
    def dirty(self) -> bool:
        return bool(self.entries)

    @property
    def conflicted(self) -> list[str]:
        return [entry.path for entry in self.entries if entry.conflicted]


@dataclass(frozen=True)
class UpstreamRef:
    """Remote-tracking ref a local branch is configured against."""

    remote: str
    branch: str

    @classmethod
    def parse(cls, value: str) -> "UpstreamRef | None":
        # Remote names are assumed to contain no "/"; branch names may.
        value = value.strip()
        remote, sep, branch = value.partition("/")
        if not sep or not remote or not branch:
            return None
        return cls(remote=remote, branch=branch)

    def __str__(self) -> str:
        return f"{self.remote}/{self.branch}"


@dataclass(frozen=True)
class ParsedRemote:
    """Hosting location derived from a remote URL."""

    host: str
    owner_path: str
    repo: str
    provider: Provider = "unknown"

    @property
    def web_base(self) -> str:
        return f"https://{self.host}/{self.owner_path}/{self.repo}"


@dataclass(frozen=True)
class CommitType:
    value: str
    description: str

    @property
    def label(self) -> str:
        return f"{self.value}: {self.description}"


@dataclass(frozen=True)
class CommitIntent:
    """Inputs for one commit message before composition."""

    subject: str
    type: str | None = None
    scope: str | None = None


@dataclass
class CommitOptions:
    """Commit metadata supplied on the command line."""

    message: str | None = None
    type: str | None = None
    scope: str | None = None


_INVALID_SCOPE_RE = re.compile(r"[\s()]")


def is_valid_scope(value: str) -> bool:
    """A scope may not contain whitespace or parentheses."""
    return bool(value) and not _INVALID_SCOPE_RE.search(value)
