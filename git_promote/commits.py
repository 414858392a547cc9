"""Conventional commit composition and the commit-if-dirty step."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from . import render
from .config import load_scopes
from .exceptions import MissingCommitMetadata, UnknownCommitType, ValidationError
from .models import CommitIntent, CommitOptions, CommitType, is_valid_scope

if TYPE_CHECKING:
    from .context import WorkflowContext

COMMIT_TYPES: tuple[CommitType, ...] = (
    CommitType("feat", "new feature"),
    CommitType("fix", "bug fix (fixed directly)"),
    CommitType("to", "bug fix (diff only, fixed later)"),
    CommitType("docs", "documentation"),
    CommitType("style", "formatting, no behavior change"),
    CommitType("refactor", "restructuring, neither feature nor fix"),
    CommitType("perf", "performance or experience improvement"),
    CommitType("test", "add or update tests"),
    CommitType("chore", "build process or tooling"),
    CommitType("revert", "revert a previous change"),
    CommitType("merge", "merge branches"),
    CommitType("sync", "sync fixes from mainline or another branch"),
)

_PREFIX_RE = re.compile(r"^[a-z]+(\([^)]+\))?!?:\s+")


def has_conventional_prefix(message: str) -> bool:
    """Treat ``type: ...`` and ``type(scope): ...`` as already prefixed."""
    return bool(_PREFIX_RE.match(message.strip()))


def is_recognized_type(value: str | None) -> bool:
    return bool(value) and any(t.value == value for t in COMMIT_TYPES)


def allowed_types_text() -> str:
    return ", ".join(t.value for t in COMMIT_TYPES)


def validate_type(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    candidate = value.strip()
    if not is_recognized_type(candidate):
        raise UnknownCommitType(f"unknown commit type: {candidate} (allowed: {allowed_types_text()})")
    return candidate


def validate_scope(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    candidate = value.strip()
    if not is_valid_scope(candidate):
        raise ValidationError(f"invalid scope '{candidate}': no whitespace or parentheses allowed")
    return candidate


def compose_message(intent: CommitIntent) -> str:
    subject = intent.subject.strip()
    if not intent.type or has_conventional_prefix(subject):
        return subject
    if intent.scope:
        return f"{intent.type}({intent.scope}): {subject}"
    return f"{intent.type}: {subject}"


def check_non_interactive(message: str | None, commit_type: str | None) -> None:
    """Fail early when no terminal is attached and the message is incomplete."""

    if not message:
        raise MissingCommitMetadata("working tree has changes; pass --message in non-interactive mode")
    if not commit_type and not has_conventional_prefix(message):
        raise MissingCommitMetadata(
            "commit message has no type prefix; pass --type or use an already-prefixed message like 'feat: ...'"
        )


def resolve_message(ctx: WorkflowContext, options: CommitOptions) -> str:
    """Determine the final commit message, prompting when allowed.

    Prompt order is subject, then type, then scope. Type and scope are only
    asked for when the subject does not already carry a prefix.
    """

    message = (options.message or "").strip() or None
    commit_type = validate_type(options.type)
    scope = validate_scope(options.scope)

    if message and has_conventional_prefix(message):
        return message
    if message and commit_type:
        return compose_message(CommitIntent(message, commit_type, scope))
    if not ctx.interactive:
        check_non_interactive(message, commit_type)

    subject = message or ctx.prompter.ask_subject()
    if not subject:
        raise MissingCommitMetadata("commit message cannot be empty")
    if has_conventional_prefix(subject):
        return subject
    if commit_type is None:
        commit_type = validate_type(ctx.prompter.ask_type(COMMIT_TYPES))
        if commit_type is None:
            raise MissingCommitMetadata("a commit type is required")
    if scope is None:
        scope = validate_scope(ctx.prompter.ask_scope(load_scopes(ctx.cwd)))
    return compose_message(CommitIntent(subject, commit_type, scope))


def commit_if_dirty(ctx: WorkflowContext, options: CommitOptions | None = None) -> str | None:
    """Stage and commit every pending change; return the message used.

    Returns None when there was nothing to commit.
    """

    options = options or CommitOptions()
    git = ctx.git

    render.step("Scanning working tree status")
    status = git.working_tree_status()
    if not status.dirty:
        render.info("Working tree clean; nothing to commit.")
        return None

    render.step("Found uncommitted changes")
    render.show_status(status.entries)

    commit_type = validate_type(options.type)
    validate_scope(options.scope)
    if not ctx.interactive:
        check_non_interactive((options.message or "").strip() or None, commit_type)

    render.step("Staging changes (git add -A)")
    git.add_all()
    if not git.staged_paths():
        render.warning("Nothing staged after git add -A; skipping commit.")
        return None

    render.step("Preparing commit message")
    final_message = resolve_message(ctx, options)
    render.step(f"Committing: {final_message}")
    git.commit(final_message)
    return final_message
