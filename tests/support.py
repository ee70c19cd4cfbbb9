"""Shared fixtures: throwaway git repositories driven through the real CLI."""

from __future__ import annotations

import subprocess
import tempfile
import unittest
from pathlib import Path


def git(repo: Path, *args: str) -> str:
    proc = subprocess.run(
        ["git", *args],
        cwd=str(repo),
        capture_output=True,
        text=True,
        check=True,
    )
    return proc.stdout


class GitRepoTestCase(unittest.TestCase):
    """Creates an empty repository in a temporary directory for each test."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.repo = Path(self._tmp.name).resolve() / "repo"
        self.repo.mkdir()
        git(self.repo, "init", "--quiet")
        git(self.repo, "config", "user.name", "Test User")
        git(self.repo, "config", "user.email", "test@example.com")
        git(self.repo, "config", "commit.gpgsign", "false")
        git(self.repo, "config", "core.hooksPath", "/dev/null")

    def write(self, name: str, content: str) -> Path:
        path = self.repo / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    def read(self, name: str) -> str:
        return (self.repo / name).read_text()

    def add(self, *names: str) -> None:
        git(self.repo, "add", "--", *names)

    def commit(self, message: str) -> None:
        git(self.repo, "commit", "--quiet", "-m", message)

    def commit_file(self, name: str, content: str, message: str | None = None) -> Path:
        path = self.write(name, content)
        self.add(name)
        self.commit(message or f"write {name}")
        return path

    def show(self, rev: str, name: str) -> str:
        return git(self.repo, "show", f"{rev}:{name}")

    def in_commit(self, rev: str, name: str) -> bool:
        proc = subprocess.run(
            ["git", "cat-file", "-e", f"{rev}:{name}"],
            cwd=str(self.repo),
            capture_output=True,
        )
        return proc.returncode == 0

    def in_index(self, name: str) -> bool:
        return bool(git(self.repo, "ls-files", "--", name).strip())

    def head(self) -> str:
        return git(self.repo, "rev-parse", "HEAD").strip()

    def head_message(self) -> str:
        return git(self.repo, "log", "-1", "--format=%s").strip()

    def commit_count(self) -> int:
        return int(git(self.repo, "rev-list", "--count", "HEAD").strip())

    def stash_entries(self) -> list[str]:
        return [line for line in git(self.repo, "stash", "list").splitlines() if line.strip()]

    def status(self) -> str:
        return git(self.repo, "status", "--porcelain")

    def git_dir(self) -> Path:
        return self.repo / ".git"
