"""Open merge/pull requests through provider CLIs, or fall back to a link."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from . import render
from .exceptions import NoMergeRequestToolAvailable
from .models import ParsedRemote
from .remotes import build_merge_request_url

if TYPE_CHECKING:
    from .context import WorkflowContext


@dataclass(frozen=True)
class ProviderTool:
    """A hosting-provider CLI able to open a merge/pull request."""

    name: str
    build_command: Callable[[str, str], list[str]]


def _gh_command(source: str, target: str) -> list[str]:
    return ["gh", "pr", "create", "--base", target, "--head", source, "--fill"]


def _glab_command(source: str, target: str) -> list[str]:
    return [
        "glab",
        "mr",
        "create",
        "--source-branch",
        source,
        "--target-branch",
        target,
        "--fill",
        "--yes",
    ]


GITHUB_TOOL = ProviderTool(name="gh", build_command=_gh_command)
GITLAB_TOOL = ProviderTool(name="glab", build_command=_glab_command)


def tool_order(parsed: ParsedRemote | None) -> list[ProviderTool]:
    """Only a confirmed GitHub remote tries ``gh`` first."""
    if parsed is not None and parsed.provider == "github":
        return [GITHUB_TOOL, GITLAB_TOOL]
    return [GITLAB_TOOL, GITHUB_TOOL]


def create_merge_request(
    ctx: WorkflowContext,
    parsed: ParsedRemote | None,
    source_branch: str,
    target_branch: str,
) -> str:
    """Open a request with the first working provider CLI and return its output.

    Raises :class:`NoMergeRequestToolAvailable` with a manual URL (when the
    remote could be parsed) if no CLI succeeds.
    """

    for tool in tool_order(parsed):
        if ctx.runner.which(tool.name) is None:
            continue
        render.step(f"Creating MR/PR with {tool.name}")
        result = ctx.runner.run(tool.build_command(source_branch, target_branch), cwd=ctx.cwd)
        if result.ok:
            output = result.stdout.strip()
            if output:
                render.info(output)
            render.success(f"Created MR/PR: {source_branch} -> {target_branch}")
            return output
        details = (result.stderr or result.stdout).strip()
        render.warning(f"{tool.name} failed to create the MR/PR" + (f": {details}" if details else "."))

    # Unknown hosts get a GitLab style link, matching glab being tried first.
    manual_url = build_merge_request_url(parsed, source_branch, target_branch) if parsed else None
    raise NoMergeRequestToolAvailable(manual_url)
