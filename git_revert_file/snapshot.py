"""Temporary copies of file content kept inside the git directory."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

from . import git
from .models import FileLocation

logger = logging.getLogger(__name__)

DEFAULT_SNAPSHOT_DIRNAME = "revert-file-snapshots"


class TempSnapshot:
    """Pre-revert bytes of one file, owned by a single rewrite.

    Snapshots live under the repository's git directory so they never show up
    as working-tree changes. Names come from ``mkstemp`` and cannot collide
    across repeated or back-to-back invocations.
    """

    def __init__(self, path: Path):
        self.path = path

    def __repr__(self) -> str:
        return f"TempSnapshot({str(self.path)!r})"

    @classmethod
    def _reserve(cls, location: FileLocation, dirname: str) -> tuple[int, Path]:
        directory = git.git_dir(location.root) / dirname
        directory.mkdir(parents=True, exist_ok=True)
        fd, raw = tempfile.mkstemp(
            prefix=f"{location.absolute_path.name}.",
            suffix=".snapshot",
            dir=directory,
        )
        return fd, Path(raw)

    @classmethod
    def from_bytes(
        cls,
        location: FileLocation,
        content: bytes,
        *,
        dirname: str = DEFAULT_SNAPSHOT_DIRNAME,
    ) -> "TempSnapshot":
        fd, path = cls._reserve(location, dirname)
        try:
            with open(fd, "wb") as handle:
                handle.write(content)
        except Exception:
            path.unlink(missing_ok=True)
            raise
        logger.debug("Saved %d bytes of %s to %s", len(content), location.relative_path, path)
        return cls(path)

    @classmethod
    def from_working_tree(
        cls,
        location: FileLocation,
        *,
        dirname: str = DEFAULT_SNAPSHOT_DIRNAME,
    ) -> "TempSnapshot":
        fd, path = cls._reserve(location, dirname)
        os.close(fd)
        try:
            shutil.copyfile(location.absolute_path, path)
        except Exception:
            path.unlink(missing_ok=True)
            raise
        logger.debug("Copied working tree %s to %s", location.relative_path, path)
        return cls(path)

    @classmethod
    def from_commit(
        cls,
        location: FileLocation,
        rev: str,
        *,
        dirname: str = DEFAULT_SNAPSHOT_DIRNAME,
    ) -> "TempSnapshot":
        content = git.read_blob(location.root, rev, location.relative_path)
        return cls.from_bytes(location, content, dirname=dirname)

    def restore_to(self, target: Path) -> None:
        """Write the saved bytes over ``target``, creating parent directories."""

        target.parent.mkdir(parents=True, exist_ok=True)
        if target.is_symlink():
            target.unlink()
        shutil.copyfile(self.path, target)

    def discard(self) -> None:
        """Delete the snapshot. Failures propagate; a leftover snapshot is a bug."""

        self.path.unlink()
        logger.debug("Removed snapshot %s", self.path)


__all__ = ["DEFAULT_SNAPSHOT_DIRNAME", "TempSnapshot"]
