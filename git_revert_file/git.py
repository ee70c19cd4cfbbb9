"""Thin wrappers around git CLI commands."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from pathlib import Path
from typing import Sequence

from .exceptions import BlobNotFoundError, GitCommandError

logger = logging.getLogger(__name__)

HEAD = "HEAD"
PARENT = "HEAD^"


def run_git(
    args: Sequence[str],
    *,
    cwd: Path,
    check: bool = True,
    text: bool = True,
) -> subprocess.CompletedProcess:
    """Execute a git command and optionally raise on failure.

    Pathspecs are always taken literally so file names containing glob
    characters only ever match themselves.
    """

    command = ["git", *args]
    env = {**os.environ, "GIT_LITERAL_PATHSPECS": "1"}
    logger.debug("Running command: %s (cwd=%s)", shlex.join(command), cwd)
    result = subprocess.run(
        command,
        cwd=str(cwd),
        env=env,
        text=text,
        capture_output=True,
        check=False,
    )
    if check and result.returncode != 0:
        raise GitCommandError(
            command,
            result.returncode,
            stdout=_as_text(result.stdout),
            stderr=_as_text(result.stderr),
        )
    return result


def _as_text(value: str | bytes | None) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value or ""


def show_toplevel(path: Path) -> Path:
    proc = run_git(["rev-parse", "--show-toplevel"], cwd=path)
    return Path(proc.stdout.strip())


def git_dir(root: Path) -> Path:
    """Return the absolute path of the repository's private metadata directory."""

    proc = run_git(["rev-parse", "--absolute-git-dir"], cwd=root)
    return Path(proc.stdout.strip())


def object_type(root: Path, rev: str, path: str) -> str | None:
    """Return the object type stored at ``rev:path`` or ``None`` when missing.

    A missing revision (no parent commit, unborn HEAD) is reported the same
    way as a missing path.
    """

    proc = run_git(["cat-file", "-t", f"{rev}:{path}"], cwd=root, check=False)
    if proc.returncode != 0:
        return None
    return proc.stdout.strip()


def blob_exists(root: Path, rev: str, path: str) -> bool:
    return object_type(root, rev, path) == "blob"


def blob_id(root: Path, rev: str, path: str) -> str | None:
    """Return the object id stored at ``rev:path`` or ``None`` when missing."""

    proc = run_git(["rev-parse", "--verify", "--quiet", f"{rev}:{path}"], cwd=root, check=False)
    if proc.returncode != 0:
        return None
    return proc.stdout.strip() or None


def read_blob(root: Path, rev: str, path: str) -> bytes:
    """Return the raw bytes of ``path`` as of ``rev``.

    Raises:
        BlobNotFoundError: If ``rev:path`` does not name a blob.
        GitCommandError: If reading an existing blob fails.
    """

    spec = f"{rev}:{path}"
    if not blob_exists(root, rev, path):
        raise BlobNotFoundError(
            ["git", "cat-file", "blob", spec],
            128,
            stderr=f"path '{path}' does not exist in '{rev}'",
        )
    proc = run_git(["cat-file", "blob", spec], cwd=root, text=False)
    return proc.stdout


def has_uncommitted_changes(root: Path, path: str) -> bool:
    """Check whether ``path`` differs from HEAD in the index or working tree."""

    proc = run_git(["status", "--porcelain", "--", path], cwd=root)
    return bool(proc.stdout.strip())


def is_tracked(root: Path, path: str) -> bool:
    proc = run_git(["ls-files", "--error-unmatch", "--", path], cwd=root, check=False)
    return proc.returncode == 0


def staged_paths(root: Path) -> list[str]:
    """Return every path whose index entry differs from HEAD."""

    proc = run_git(["diff", "--cached", "--name-only", "-z"], cwd=root)
    return [name for name in proc.stdout.split("\0") if name]


def checkout_path(root: Path, rev: str, path: str) -> None:
    run_git(["checkout", rev, "--", path], cwd=root)


def add_path(root: Path, path: str) -> None:
    run_git(["add", "--", path], cwd=root)


def remove_cached(root: Path, path: str) -> None:
    run_git(["rm", "--cached", "-f", "--quiet", "--", path], cwd=root)


def remove_path(root: Path, path: str) -> None:
    run_git(["rm", "-f", "--quiet", "--", path], cwd=root)


def commit_amend_no_edit(root: Path) -> None:
    """Rewrite HEAD from the current index, keeping its message."""

    run_git(["commit", "--amend", "--no-edit", "--allow-empty", "--quiet"], cwd=root)


def stash_push(root: Path, path: str, message: str | None = None) -> None:
    args = ["stash", "push"]
    if message:
        args.extend(["-m", message])
    args.extend(["--", path])
    run_git(args, cwd=root)


def stash_apply(root: Path, ref: str | None = None) -> None:
    args = ["stash", "apply"]
    if ref:
        args.append(ref)
    run_git(args, cwd=root)


def stash_list(root: Path) -> list[str]:
    proc = run_git(["stash", "list"], cwd=root)
    return [line for line in proc.stdout.splitlines() if line.strip()]


__all__ = [
    "HEAD",
    "PARENT",
    "run_git",
    "show_toplevel",
    "git_dir",
    "object_type",
    "blob_exists",
    "blob_id",
    "read_blob",
    "has_uncommitted_changes",
    "is_tracked",
    "staged_paths",
    "checkout_path",
    "add_path",
    "remove_cached",
    "remove_path",
    "commit_amend_no_edit",
    "stash_push",
    "stash_apply",
    "stash_list",
]
