"""Pull, merge and push steps shared by the promote workflows."""

from __future__ import annotations

from typing import TYPE_CHECKING

from . import render
from .exceptions import MergeConflict, SyncFailed
from .runner import CommandResult

if TYPE_CHECKING:
    from .context import WorkflowContext


def _failure_details(result: CommandResult) -> str:
    return (result.stderr or result.stdout).strip()


def _raise_for_conflicts(ctx: WorkflowContext, operation: str) -> None:
    conflicted = ctx.git.working_tree_status().conflicted
    if conflicted:
        raise MergeConflict(conflicted, ctx.command, operation=operation)


def pull_if_possible(ctx: WorkflowContext, remote: str, branch: str) -> bool:
    """Pull ``branch`` when there is something to reconcile against.

    Returns False when the pull was skipped because the branch has neither an
    upstream nor a same-named branch on ``remote``.
    """

    git = ctx.git
    has_upstream = git.upstream_ref() is not None
    if not has_upstream and not git.remote_branch_exists(remote, branch):
        render.warning("Remote branch not found yet; skipping pull.")
        return False

    result = git.pull() if has_upstream else git.pull(remote, branch)
    if not result.ok:
        _raise_for_conflicts(ctx, "pull")
        details = _failure_details(result)
        message = f"git pull failed; please fix and rerun {ctx.command}"
        raise SyncFailed(f"{message}\n{details}" if details else message)
    return True


def push_branch(ctx: WorkflowContext, remote: str, branch: str) -> None:
    """Push ``branch`` to the same name on ``remote``.

    The first push of a branch without an upstream sets the tracking link.
    """

    git = ctx.git
    has_upstream = git.upstream_ref() is not None
    result = git.push(remote, branch, set_upstream=not has_upstream)
    if not result.ok:
        details = _failure_details(result)
        message = f"git push to {remote}/{branch} failed"
        raise SyncFailed(f"{message}\n{details}" if details else message)


def sync_and_push(ctx: WorkflowContext, remote: str, branch: str) -> None:
    render.step(f"Pulling latest from {remote}/{branch}")
    pull_if_possible(ctx, remote, branch)
    render.step(f"Pushing to {remote}/{branch}")
    push_branch(ctx, remote, branch)
    render.success(f"Pushed {branch} -> {remote}/{branch}")


def ensure_local_branch(ctx: WorkflowContext, remote: str, branch: str) -> None:
    """Check out ``branch``, creating it from ``remote`` or HEAD if needed."""

    git = ctx.git
    if git.local_branch_exists(branch):
        git.checkout(branch)
        return
    if git.remote_branch_exists(remote, branch):
        git.fetch(remote, branch)
        git.checkout_tracking(branch, f"{remote}/{branch}")
        return
    render.warning(
        f"Branch '{branch}' does not exist locally or on {remote}; creating it from the current HEAD."
    )
    git.checkout_new(branch)


def merge_remote_branch(ctx: WorkflowContext, remote: str, branch: str) -> None:
    """Fetch ``remote/branch`` and merge it into the checked out branch."""

    git = ctx.git
    git.fetch(remote, branch)
    result = git.merge(f"{remote}/{branch}")
    if not result.ok:
        _raise_for_conflicts(ctx, "merge")
        details = _failure_details(result)
        message = f"git merge {remote}/{branch} failed; please fix and rerun {ctx.command}"
        raise SyncFailed(f"{message}\n{details}" if details else message)
