"""High-level orchestration for the promote workflows."""

from __future__ import annotations

from . import render
from .commits import commit_if_dirty
from .context import WorkflowContext
from .exceptions import InvalidSourceBranch, PromoteError
from .merge_request import create_merge_request
from .models import CommitOptions
from .remotes import parse_remote_url, preferred_remote
from .sync import ensure_local_branch, merge_remote_branch, pull_if_possible, push_branch, sync_and_push


def _start(ctx: WorkflowContext) -> str:
    render.step(f"Working directory: {ctx.cwd}")
    render.step("Checking git repository")
    ctx.git.ensure_repository()
    render.step("Detecting current branch")
    return ctx.git.require_branch()


def to_self(ctx: WorkflowContext, options: CommitOptions | None = None) -> None:
    """Commit pending changes, then pull and push the current branch."""

    branch = _start(ctx)
    commit_if_dirty(ctx, options)
    render.step("Resolving remote/upstream")
    remote = preferred_remote(ctx.git)
    sync_and_push(ctx, remote, branch)


def to_test(ctx: WorkflowContext, target_branch: str, options: CommitOptions | None = None) -> None:
    """Merge the current branch into ``target_branch`` and push it.

    When already on the target branch this is the same as :func:`to_self`.
    Otherwise the source branch is restored afterwards, even on failure.
    """

    current = _start(ctx)
    render.step("Resolving remote")
    remote = preferred_remote(ctx.git)

    if current == target_branch:
        render.step(f"On '{target_branch}'; pushing current branch")
        commit_if_dirty(ctx, options)
        sync_and_push(ctx, remote, target_branch)
        return

    source = current
    render.step(f"Source branch: {source}")
    render.step(f"Target branch: {target_branch}")
    commit_if_dirty(ctx, options)

    render.step(f"Syncing {source} before merge")
    sync_and_push(ctx, remote, source)

    try:
        render.step(f"Checking out target branch '{target_branch}'")
        ensure_local_branch(ctx, remote, target_branch)

        render.step(f"Pulling latest from {remote}/{target_branch}")
        pull_if_possible(ctx, remote, target_branch)

        render.step(f"Merging {remote}/{source} -> {target_branch}")
        merge_remote_branch(ctx, remote, source)

        render.step(f"Pushing to {remote}/{target_branch}")
        push_branch(ctx, remote, target_branch)
        render.success(f"Pushed {target_branch} -> {remote}/{target_branch}")
    finally:
        _restore_branch(ctx, source)


def _restore_branch(ctx: WorkflowContext, branch: str) -> None:
    try:
        if ctx.git.current_branch() != branch:
            ctx.git.checkout(branch)
    except PromoteError:
        render.warning(f"Could not restore branch '{branch}'. Resolve git state manually if needed.")


def to_main(ctx: WorkflowContext, target_branch: str, options: CommitOptions | None = None) -> str:
    """Push the current branch and open a MR/PR into ``target_branch``."""

    current = _start(ctx)
    if current == target_branch:
        raise InvalidSourceBranch(
            f"cannot run {ctx.command} on '{target_branch}' branch; checkout another branch first"
        )

    commit_if_dirty(ctx, options)
    render.step("Resolving remote/upstream")
    remote = preferred_remote(ctx.git)
    sync_and_push(ctx, remote, current)

    render.step(f"Creating MR/PR: {current} -> {target_branch}")
    remote_url = ctx.git.remote_url(remote)
    parsed = parse_remote_url(remote_url)
    if parsed is None:
        render.warning(f"Could not parse remote url: {remote_url}")
    return create_merge_request(ctx, parsed, current, target_branch)
