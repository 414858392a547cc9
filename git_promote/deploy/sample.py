"""Sample deploy command wired to the template runner.

Every hook here is a placeholder. Replace ``deploy`` (and any optional hook)
with real work for your platform.
"""

from __future__ import annotations

from pathlib import Path

from .. import render
from ..exceptions import DeployError, PromoteError
from ..git import Git
from ..runner import CommandRunner
from .template import DeployArtifact, DeployContext, DeployHooks, DeployResult, run_deployment


def resolve_default_version(git: Git) -> str:
    """Short HEAD SHA, or ``local`` outside a repository or on any git failure."""
    try:
        if not git.is_inside_repository():
            return "local"
        return git.short_head() or "local"
    except (PromoteError, OSError) as exc:
        render.warning(f"Could not resolve version from git: {exc}")
        return "local"


def build_sample_hooks() -> DeployHooks:
    def preflight(_: DeployContext) -> None:
        render.step("Sample deploy preflight (no-op)")

    def build(_: DeployContext) -> DeployArtifact:
        render.step("Sample deploy build (no-op)")
        return DeployArtifact(kind="none")

    def deploy(run_ctx: DeployContext, _: DeployArtifact) -> DeployResult:
        if run_ctx.dry_run:
            render.warning("Sample deploy (dry-run): skipping real deploy.")
            return DeployResult(
                env=run_ctx.env,
                app_name=run_ctx.app_name,
                version=run_ctx.version,
                revision=run_ctx.version,
            )
        raise DeployError("Sample deploy only: real deployment is not implemented.")

    def verify(_: DeployContext, result: DeployResult) -> None:
        render.step("Sample deploy verify (no-op)")
        render.success(f"Deployed {result.app_name}@{result.version} to {result.env}")

    return DeployHooks(deploy=deploy, preflight=preflight, build=build, verify=verify)


def to_deploy(
    runner: CommandRunner,
    cwd: Path,
    *,
    env: str,
    app_name: str | None = None,
    version: str | None = None,
    execute: bool = False,
) -> DeployResult:
    app = app_name.strip() if app_name and app_name.strip() else cwd.name
    resolved_version = version.strip() if version and version.strip() else resolve_default_version(Git(runner, cwd))
    ctx = DeployContext(cwd=cwd, env=env, app_name=app, version=resolved_version, dry_run=not execute)
    return run_deployment(ctx, build_sample_hooks())
