"""Deployment pipeline template and the sample deploy command."""

from .sample import to_deploy
from .template import (
    DeployArtifact,
    DeployContext,
    DeployHooks,
    DeployResult,
    NotifyPayload,
    run_deployment,
)

__all__ = [
    "DeployArtifact",
    "DeployContext",
    "DeployHooks",
    "DeployResult",
    "NotifyPayload",
    "run_deployment",
    "to_deploy",
]
