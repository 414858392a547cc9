"""Reusable deployment pipeline runner.

Only the ``deploy`` hook is mandatory. Stages run strictly in the order
preflight, build, deploy, verify, then notify. If any stage raises, rollback
and notify are attempted and the original exception is re-raised unchanged.
Failures inside rollback or notify during that recovery are reported as
warnings so they never mask the original error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable, Literal

from .. import render

logger = logging.getLogger(__name__)

ArtifactKind = Literal["docker-image", "file", "none"]


@dataclass(frozen=True)
class DeployContext:
    cwd: Path
    env: str
    app_name: str
    version: str
    dry_run: bool = False


@dataclass(frozen=True)
class DeployArtifact:
    """Build output handed to the deploy stage."""

    kind: ArtifactKind = "none"
    ref: str | None = None
    path: Path | None = None


@dataclass(frozen=True)
class DeployResult:
    env: str
    app_name: str
    version: str
    url: str | None = None
    revision: str | None = None


@dataclass(frozen=True)
class NotifyPayload:
    ok: bool
    result: DeployResult | None = None
    error: BaseException | None = None


@dataclass
class DeployHooks:
    deploy: Callable[[DeployContext, DeployArtifact], DeployResult]
    preflight: Callable[[DeployContext], None] | None = None
    build: Callable[[DeployContext], DeployArtifact] | None = None
    verify: Callable[[DeployContext, DeployResult], None] | None = None
    rollback: Callable[[DeployContext, BaseException], None] | None = None
    notify: Callable[[DeployContext, NotifyPayload], None] | None = None


def run_deployment(ctx: DeployContext, hooks: DeployHooks) -> DeployResult:
    safe_ctx = replace(ctx, dry_run=bool(ctx.dry_run))

    render.step(f"CD: {safe_ctx.app_name} -> {safe_ctx.env} ({safe_ctx.version})")
    if safe_ctx.dry_run:
        render.warning("dry-run enabled: hooks still run unless they check ctx.dry_run themselves.")

    try:
        if hooks.preflight:
            render.step("CD: preflight")
            hooks.preflight(safe_ctx)
            render.success("preflight ok")

        artifact = DeployArtifact()
        if hooks.build:
            render.step("CD: build")
            artifact = hooks.build(safe_ctx)
            render.success(f"build ok ({artifact.kind})")

        render.step("CD: deploy")
        result = hooks.deploy(safe_ctx, artifact)
        render.success("deploy ok")

        if hooks.verify:
            render.step("CD: verify")
            hooks.verify(safe_ctx, result)
            render.success("verify ok")

        if hooks.notify:
            hooks.notify(safe_ctx, NotifyPayload(ok=True, result=result))
        return result
    except Exception as error:
        render.warning("CD failed.")
        _recover(safe_ctx, hooks, error)
        raise


def _recover(ctx: DeployContext, hooks: DeployHooks, error: Exception) -> None:
    if hooks.rollback:
        try:
            render.step("CD: rollback")
            hooks.rollback(ctx, error)
            render.success("rollback done")
        except Exception as rollback_error:
            logger.debug("rollback hook raised", exc_info=True)
            render.warning(f"rollback failed: {rollback_error}")
    else:
        render.warning("no rollback hook; skipping.")

    if hooks.notify:
        try:
            hooks.notify(ctx, NotifyPayload(ok=False, error=error))
        except Exception as notify_error:
            logger.debug("notify hook raised", exc_info=True)
            render.warning(f"notify failed: {notify_error}")
