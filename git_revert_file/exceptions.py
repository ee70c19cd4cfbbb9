"""Custom error hierarchy for git-revert-file."""

from __future__ import annotations

from pathlib import Path


class RevertFileError(RuntimeError):
    """Base error for the CLI."""


class ConfigError(RevertFileError):
    """Raised when an environment variable holds an unusable value."""


class NotARepositoryError(RevertFileError):
    """Raised when no git repository encloses the given path."""

    def __init__(self, path: Path, detail: str | None = None):
        self.path = path
        message = f"Could not find git repository for {path}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class InvalidPathError(RevertFileError):
    """Raised when a path cannot name a single file in the working tree."""


class UserAbort(RevertFileError):
    """Raised when the user cancels an interactive flow."""


class GitCommandError(RevertFileError):
    """Raised when an underlying git command fails."""

    def __init__(
        self,
        command: list[str],
        returncode: int,
        *,
        stdout: str | None = None,
        stderr: str | None = None,
    ):
        self.command = command
        self.returncode = returncode
        self.stdout = stdout or ""
        self.stderr = stderr or ""
        message = f"git command failed (exit {returncode}): {' '.join(command)}"
        details = "\n".join(
            section
            for section in (self.stdout.strip(), self.stderr.strip())
            if section
        )
        if details:
            message = f"{message}\n{details}"
        super().__init__(message)


class BlobNotFoundError(GitCommandError):
    """Raised when a path has no blob at the requested revision."""


class RevertError(RevertFileError):
    """Raised when reverting a file to its previous version fails."""

    def __init__(self, step: str, path: str, cause: BaseException | str):
        self.step = step
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to revert {path} ({step}): {cause}")


class NothingToRevertError(RevertError):
    """Raised when a file is absent from both HEAD and its parent."""

    def __init__(self, path: str):
        super().__init__(
            "classify",
            path,
            "file doesn't exist in either the current or previous commit",
        )


class RevertAndStashError(RevertFileError):
    """Raised when the revert-and-stash sequence fails part way."""

    def __init__(
        self,
        step: str,
        path: str,
        cause: BaseException | str,
        snapshot: Path | None = None,
    ):
        self.step = step
        self.path = path
        self.cause = cause
        self.snapshot = snapshot
        message = f"Failed to revert and stash {path} ({step}): {cause}"
        if snapshot is not None:
            message = f"{message}\nPrevious content kept at {snapshot}"
        super().__init__(message)


class NothingToPreserveError(RevertAndStashError):
    """Raised when a file exists neither in HEAD nor in the working tree."""

    def __init__(self, path: str):
        super().__init__(
            "snapshot",
            path,
            "file doesn't exist in current commit or working directory",
        )


__all__ = [
    "RevertFileError",
    "ConfigError",
    "NotARepositoryError",
    "InvalidPathError",
    "UserAbort",
    "GitCommandError",
    "BlobNotFoundError",
    "RevertError",
    "NothingToRevertError",
    "RevertAndStashError",
    "NothingToPreserveError",
]
