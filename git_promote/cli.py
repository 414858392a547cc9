"""Typer CLI entrypoint for git-promote."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, NoReturn, TypeVar

import typer

from . import __version__, config, render
from .context import WorkflowContext
from .deploy import to_deploy
from .exceptions import PromoteError, UserAbort, ValidationError
from .models import CommitOptions
from .prompts import InteractivePrompter
from .runner import SubprocessRunner
from .scaffold import to_init
from .workflows import to_main, to_self, to_test

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Commit, push and promote git branches with conventional commit messages.",
)

T = TypeVar("T")

CWD_HELP = "Run as if started in this directory."
TYPE_HELP = "Commit type prefix (feat/fix/to/docs/style/refactor/perf/test/chore/revert/merge/sync)."
SCOPE_HELP = "Commit scope, e.g. 'api' for 'feat(api): ...'."
MESSAGE_HELP = "Commit message (skips the interactive prompt)."


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"git-promote {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every external command."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the git-promote version and exit.",
    ),
) -> None:
    _ = version  # handled via callback
    render.configure_logging(verbose)


def resolve_cwd(cwd: Path | None) -> Path:
    if cwd is None:
        return Path.cwd()
    candidate = cwd.expanduser().resolve()
    if not candidate.is_dir():
        raise ValidationError(f"working directory does not exist: {candidate}")
    return candidate


def build_context(command: str, cwd: Path | None) -> WorkflowContext:
    return WorkflowContext(
        command=command,
        cwd=resolve_cwd(cwd),
        runner=SubprocessRunner(),
        prompter=InteractivePrompter(),
        interactive=sys.stdin.isatty(),
    )


def _fail(name: str, message: str, code: int = 1) -> NoReturn:
    render.error(name, message)
    raise typer.Exit(code)


def _run(name: str, action: Callable[[], T]) -> T:
    try:
        return action()
    except UserAbort as exc:
        _fail(name, str(exc), code=130)
    except PromoteError as exc:
        _fail(name, str(exc))
    except OSError as exc:
        _fail(name, str(exc))


@app.command("to-self", help="Commit (if needed) and push the current branch.")
def to_self_command(
    cwd: Path | None = typer.Option(None, "--cwd", "-C", help=CWD_HELP, file_okay=False),
    commit_type: str | None = typer.Option(None, "--type", "-t", help=TYPE_HELP),
    scope: str | None = typer.Option(None, "--scope", "-s", help=SCOPE_HELP),
    message: str | None = typer.Option(None, "--message", "-m", help=MESSAGE_HELP),
) -> None:
    options = CommitOptions(message=message, type=commit_type, scope=scope)
    _run("to-self", lambda: to_self(build_context("to-self", cwd), options))


@app.command("to-test", help="Merge the current branch into the test branch and push it.")
def to_test_command(
    cwd: Path | None = typer.Option(None, "--cwd", "-C", help=CWD_HELP, file_okay=False),
    branch: str | None = typer.Option(None, "--branch", "-b", help="Target test branch (default: test)."),
    commit_type: str | None = typer.Option(None, "--type", "-t", help=TYPE_HELP),
    scope: str | None = typer.Option(None, "--scope", "-s", help=SCOPE_HELP),
    message: str | None = typer.Option(None, "--message", "-m", help=MESSAGE_HELP),
) -> None:
    options = CommitOptions(message=message, type=commit_type, scope=scope)
    target = config.resolve_option(branch, config.get_default_test_branch())
    _run("to-test", lambda: to_test(build_context("to-test", cwd), target, options))


@app.command("to-main", help="Push the current branch and open a MR/PR into the main branch.")
def to_main_command(
    cwd: Path | None = typer.Option(None, "--cwd", "-C", help=CWD_HELP, file_okay=False),
    branch: str | None = typer.Option(None, "--branch", "-b", help="Target branch (default: main)."),
    commit_type: str | None = typer.Option(None, "--type", "-t", help=TYPE_HELP),
    scope: str | None = typer.Option(None, "--scope", "-s", help=SCOPE_HELP),
    message: str | None = typer.Option(None, "--message", "-m", help=MESSAGE_HELP),
) -> None:
    options = CommitOptions(message=message, type=commit_type, scope=scope)
    target = config.resolve_option(branch, config.get_default_main_branch())
    _run("to-main", lambda: to_main(build_context("to-main", cwd), target, options))


@app.command("to-init", help="Generate a CI/CD workflow file from templates (GitHub/GitLab).")
def to_init_command(
    cwd: Path | None = typer.Option(None, "--cwd", "-C", help="Target project directory.", file_okay=False),
    platform: str | None = typer.Option(None, "--platform", "-p", help="Platform: github or gitlab."),
    output: str | None = typer.Option(None, "--output", "-o", help="Output file path (relative to --cwd)."),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file without asking."),
) -> None:
    def action() -> None:
        ctx = build_context("to-init", cwd)
        to_init(ctx.prompter, ctx.cwd, interactive=ctx.interactive, platform=platform, output=output, force=force)

    _run("to-init", action)


@app.command("to-deploy", help="Sample CD deploy built on the deploy template. Dry-run by default.")
def to_deploy_command(
    cwd: Path | None = typer.Option(None, "--cwd", "-C", help=CWD_HELP, file_okay=False),
    env: str | None = typer.Option(None, "--env", "-e", help="Deploy environment (default: staging)."),
    app_name: str | None = typer.Option(None, "--app", "-a", help="Application name (default: folder name)."),
    revision: str | None = typer.Option(None, "--revision", "-r", help="Version (default: git short SHA or 'local')."),
    execute: bool = typer.Option(False, "--execute", help="Run the real deploy hook (sample only; errors)."),
) -> None:
    def action() -> None:
        ctx = build_context("to-deploy", cwd)
        to_deploy(
            ctx.runner,
            ctx.cwd,
            env=config.resolve_option(env, config.get_default_deploy_env()),
            app_name=app_name,
            version=revision,
            execute=execute,
        )

    _run("to-deploy", action)


if __name__ == "__main__":
    app()
