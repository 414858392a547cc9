"""Interactive CI/CD workflow scaffolder."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from .. import render
from ..exceptions import ValidationError
from ..prompts import Prompter
from .templates import (
    GithubDeployOptions,
    GitlabDeployOptions,
    generate_github_deploy_workflow,
    generate_gitlab_deploy_workflow,
)

Platform = Literal["github", "gitlab"]

PLATFORM_CHOICES: list[tuple[str, str]] = [
    ("github", "GitHub Actions"),
    ("gitlab", "GitLab CI"),
]

DEFAULT_OUTPUTS: dict[str, str] = {
    "github": ".github/workflows/deploy.yml",
    "gitlab": ".gitlab-ci.yml",
}


@dataclass(frozen=True)
class InitResult:
    platform: Platform
    output_path: Path
    written: bool


def require_inside_cwd(cwd: Path, output: str) -> Path:
    candidate = Path(output).expanduser()
    target = candidate if candidate.is_absolute() else cwd / candidate
    target = target.resolve()
    try:
        target.relative_to(cwd.resolve())
    except ValueError as exc:
        raise ValidationError(f"output must be inside cwd: {cwd}") from exc
    return target


def resolve_platform(prompter: Prompter, platform: str | None) -> Platform:
    if platform is not None:
        if platform not in DEFAULT_OUTPUTS:
            raise ValidationError(f"unknown platform: {platform} (expected github or gitlab)")
        return platform  # type: ignore[return-value]
    selected = prompter.select("CI/CD platform:", PLATFORM_CHOICES)
    if selected not in DEFAULT_OUTPUTS:
        raise ValidationError(f"unknown platform: {selected}")
    return selected  # type: ignore[return-value]


def _prompt_github(prompter: Prompter, output: str) -> tuple[str, GithubDeployOptions, list[str]]:
    path = prompter.text("Output file (relative to project root):", output, required=True)
    options = GithubDeployOptions(
        branch=prompter.text("Trigger branch:", "main"),
        node_version=prompter.text("Node.js version:", "18"),
        build_output_dir=prompter.text("Build output directory:", "dist"),
        target_path=prompter.text("Server deploy directory:", "/var/www/my-app"),
        server_host_secret=prompter.text("GitHub secret name (server host):", "SERVER_HOST", required=True),
        server_user_secret=prompter.text("GitHub secret name (server user):", "SERVER_USER", required=True),
        ssh_private_key_secret=prompter.text("GitHub secret name (SSH private key):", "SSH_PRIVATE_KEY", required=True),
    )
    names = [options.server_host_secret, options.server_user_secret, options.ssh_private_key_secret]
    return path, options, [name for name in names if name]


def _prompt_gitlab(prompter: Prompter, output: str) -> tuple[str, GitlabDeployOptions, list[str]]:
    path = prompter.text("Output file (relative to project root):", output, required=True)
    options = GitlabDeployOptions(
        deploy_branch=prompter.text("Deploy branch:", "main"),
        node_image=prompter.text("CI image:", "node:18"),
        build_output_dir=prompter.text("Build output directory:", "dist"),
        target_path=prompter.text("Server deploy directory:", "/var/www/my-app"),
        server_host_var=prompter.text("GitLab CI variable (server host):", "SERVER_HOST", required=True),
        server_user_var=prompter.text("GitLab CI variable (server user):", "SERVER_USER", required=True),
        ssh_private_key_var=prompter.text("GitLab CI variable (SSH private key):", "SSH_PRIVATE_KEY", required=True),
    )
    names = [options.server_host_var, options.server_user_var, options.ssh_private_key_var]
    return path, options, [name for name in names if name]


def to_init(
    prompter: Prompter,
    cwd: Path,
    *,
    interactive: bool,
    platform: str | None = None,
    output: str | None = None,
    force: bool = False,
) -> InitResult:
    if not interactive:
        raise ValidationError("to-init requires an interactive terminal (TTY)")

    cwd = cwd.resolve()
    render.step(f"Init CI/CD in: {cwd}")
    chosen = resolve_platform(prompter, platform)
    default_output = output or DEFAULT_OUTPUTS[chosen]

    if chosen == "github":
        path, github_options, names = _prompt_github(prompter, default_output)
        output_path = require_inside_cwd(cwd, path)
        content = generate_github_deploy_workflow(github_options)
        follow_up = f"Next: add GitHub Secrets {', '.join(names)}"
    else:
        path, gitlab_options, names = _prompt_gitlab(prompter, default_output)
        output_path = require_inside_cwd(cwd, path)
        content = generate_gitlab_deploy_workflow(gitlab_options)
        follow_up = f"Next: add GitLab CI variables {', '.join(names)}"

    if output_path.exists() and not force:
        if not prompter.confirm(f"File exists, overwrite?\n{output_path}", default=False):
            render.warning("Canceled.")
            return InitResult(platform=chosen, output_path=output_path, written=False)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")
    render.success(f"Generated: {output_path}")
    render.success(follow_up)
    return InitResult(platform=chosen, output_path=output_path, written=True)
