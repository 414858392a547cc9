"""Tests for the git wrapper and status parsing."""

from __future__ import annotations

import unittest
from pathlib import Path

from git_promote.exceptions import DetachedHead, GitCommandError, NotAGitRepository
from git_promote.git import Git, parse_porcelain_status
from git_promote.models import UpstreamRef

from tests.utils import FakeRunner, porcelain


class ParsePorcelainStatusTests(unittest.TestCase):
    def test_entries_and_states(self) -> None:
        status = parse_porcelain_status(porcelain(("M ", "staged.py"), (" D", "gone.txt"), ("??", "new dir/file.txt")))
        self.assertTrue(status.dirty)
        self.assertEqual([e.path for e in status.entries], ["staged.py", "gone.txt", "new dir/file.txt"])
        self.assertEqual(status.entries[0].index_state, "modified")
        self.assertEqual(status.entries[1].working_dir_state, "deleted")
        self.assertEqual(status.entries[2].index_state, "untracked")
        self.assertEqual(status.conflicted, [])

    def test_rename_consumes_original_path(self) -> None:
        status = parse_porcelain_status("R  new.py\0old.py\0 M other.py\0")
        self.assertEqual(len(status.entries), 2)
        self.assertEqual(status.entries[0].path, "new.py")
        self.assertEqual(status.entries[0].original_path, "old.py")
        self.assertEqual(status.entries[0].index_state, "renamed")
        self.assertEqual(status.entries[1].path, "other.py")

    def test_conflict_codes(self) -> None:
        status = parse_porcelain_status(porcelain(("UU", "a.py"), ("AA", "b.py"), ("DU", "c.py"), ("M ", "d.py")))
        self.assertEqual(status.conflicted, ["a.py", "b.py", "c.py"])
        self.assertEqual(status.entries[0].index_state, "conflicted")

    def test_empty_output_is_clean(self) -> None:
        self.assertFalse(parse_porcelain_status("").dirty)


class UpstreamRefTests(unittest.TestCase):
    def test_parse(self) -> None:
        self.assertEqual(UpstreamRef.parse("origin/feat/x\n"), UpstreamRef("origin", "feat/x"))
        self.assertIsNone(UpstreamRef.parse("origin"))
        self.assertIsNone(UpstreamRef.parse("/branch"))


class GitInspectorTests(unittest.TestCase):
    def _git(self, runner: FakeRunner) -> Git:
        return Git(runner=runner, cwd=Path("/repo"))

    def test_repository_and_branch(self) -> None:
        git = self._git(FakeRunner(branch="dev"))
        git.ensure_repository()
        self.assertEqual(git.require_branch(), "dev")

    def test_not_a_repository(self) -> None:
        with self.assertRaises(NotAGitRepository):
            self._git(FakeRunner(is_repo=False)).ensure_repository()

    def test_detached_head(self) -> None:
        git = self._git(FakeRunner(branch=None))
        self.assertIsNone(git.current_branch())
        with self.assertRaises(DetachedHead):
            git.require_branch()

    def test_upstream_absent_is_none(self) -> None:
        self.assertIsNone(self._git(FakeRunner()).upstream_ref())
        runner = FakeRunner(upstreams={"feature": "origin/feature"})
        self.assertEqual(self._git(runner).upstream_ref(), UpstreamRef("origin", "feature"))

    def test_remote_branch_exists(self) -> None:
        git = self._git(FakeRunner(remote_branches={"origin/test"}))
        self.assertTrue(git.remote_branch_exists("origin", "test"))
        self.assertFalse(git.remote_branch_exists("origin", "main"))

    def test_remote_branch_exists_ignores_tail_matches(self) -> None:
        runner = FakeRunner(remote_branches={"origin/feature/test"})
        git = self._git(runner)
        self.assertFalse(git.remote_branch_exists("origin", "test"))
        self.assertTrue(git.remote_branch_exists("origin", "feature/test"))
        self.assertEqual(runner.git_calls("ls-remote")[0], ["ls-remote", "--heads", "origin", "refs/heads/test"])

    def test_remote_branch_probe_failure_means_absent(self) -> None:
        runner = FakeRunner(remote_branches={"origin/test"})
        runner.fail("ls-remote", stderr="fatal: could not read from remote")
        self.assertFalse(self._git(runner).remote_branch_exists("origin", "test"))

    def test_remote_branch_probe_os_error_means_absent(self) -> None:
        class BrokenRunner(FakeRunner):
            def run(self, command, *, cwd):  # type: ignore[override]
                raise OSError("network down")

        self.assertFalse(self._git(BrokenRunner()).remote_branch_exists("origin", "test"))

    def test_failed_command_raises_with_details(self) -> None:
        runner = FakeRunner()
        runner.fail("add", stderr="fatal: index.lock exists", returncode=128)
        with self.assertRaises(GitCommandError) as ctx:
            self._git(runner).add_all()
        self.assertEqual(ctx.exception.returncode, 128)
        self.assertIn("index.lock", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
