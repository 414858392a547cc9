"""Tests for the Typer command surface."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from typer.testing import CliRunner

from git_promote import __version__
from git_promote.cli import app
from git_promote.prompts import ScriptedPrompter

from tests.utils import FakeRunner, make_context, porcelain


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self.cli = CliRunner()

    def invoke(self, context, *args: str):
        with mock.patch("git_promote.cli.build_context", return_value=context):
            return self.cli.invoke(app, list(args))

    def test_version(self) -> None:
        result = self.cli.invoke(app, ["--version"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn(__version__, result.output)

    def test_to_self_commits_with_flags(self) -> None:
        runner = FakeRunner(status=porcelain((" M", "a.py")))
        result = self.invoke(make_context(runner), "to-self", "-t", "feat", "-s", "api", "-m", "add endpoint")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(runner.commits, ["feat(api): add endpoint"])

    def test_to_main_from_main_branch_fails(self) -> None:
        runner = FakeRunner(branch="main")
        result = self.invoke(make_context(runner, command="to-main"), "to-main")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("to-main:", result.output)
        self.assertEqual(runner.mutating_calls(), [])

    def test_missing_metadata_without_terminal(self) -> None:
        runner = FakeRunner(status=porcelain((" M", "a.py")))
        result = self.invoke(make_context(runner), "to-self")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("to-self:", result.output)
        self.assertEqual(runner.git_calls("add"), [])

    def test_user_abort_exits_130(self) -> None:
        runner = FakeRunner(status=porcelain((" M", "a.py")))
        context = make_context(runner, prompter=ScriptedPrompter(), interactive=True)
        result = self.invoke(context, "to-self")
        self.assertEqual(result.exit_code, 130)
        self.assertEqual(runner.commits, [])

    def test_to_test_branch_from_environment(self) -> None:
        runner = FakeRunner(branch="qa")
        with mock.patch.dict(os.environ, {"GIT_PROMOTE_TEST_BRANCH": "qa"}):
            result = self.invoke(make_context(runner, command="to-test"), "to-test")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(runner.git_calls("push"), [["push", "-u", "origin", "qa"]])
        self.assertEqual(runner.git_calls("merge"), [])

    def test_to_init_writes_workflow(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            cwd = Path(tmp).resolve()
            context = make_context(FakeRunner(), interactive=True, command="to-init", cwd=cwd)
            result = self.invoke(context, "to-init", "-p", "gitlab")
            self.assertEqual(result.exit_code, 0, result.output)
            self.assertTrue((cwd / ".gitlab-ci.yml").is_file())

    def test_filesystem_error_is_reported_with_command_name(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            cwd = Path(tmp).resolve()
            (cwd / "blocker").write_text("not a directory\n", encoding="utf-8")
            context = make_context(FakeRunner(), interactive=True, command="to-init", cwd=cwd)
            result = self.invoke(context, "to-init", "-p", "gitlab", "-o", "blocker/ci.yml")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("to-init:", result.output)
        self.assertNotIsInstance(result.exception, OSError)

    def test_to_deploy_dry_run(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            context = make_context(FakeRunner(), command="to-deploy", cwd=Path(tmp))
            result = self.invoke(context, "to-deploy", "-a", "shop")
        self.assertEqual(result.exit_code, 0, result.output)


if __name__ == "__main__":
    unittest.main()
