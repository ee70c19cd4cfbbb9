"""Resolve the repository and root-relative path for a file."""

from __future__ import annotations

import os
from pathlib import Path, PurePath

from . import git
from .exceptions import GitCommandError, InvalidPathError, NotARepositoryError
from .models import FileLocation, RepositoryRef


def normalize_path(path: Path | str) -> Path:
    """Make ``path`` absolute with symlinks resolved in its parent chain only.

    The final component is kept as-is so a symlinked file is addressed as the
    link itself, the way git tracks it.
    """

    absolute = Path(os.path.normpath(Path(path).expanduser().absolute()))
    if absolute.parent == absolute:
        return absolute
    return absolute.parent.resolve() / absolute.name


def _nearest_existing_dir(path: Path) -> Path:
    current = path if path.is_dir() else path.parent
    # git refuses to report a toplevel from inside the metadata directory.
    while not current.is_dir() or ".git" in current.parts:
        if current.parent == current:
            break
        current = current.parent
    return current


def resolve(path: Path | str) -> RepositoryRef:
    source = normalize_path(path)
    start = _nearest_existing_dir(source)
    try:
        root = git.show_toplevel(start)
    except GitCommandError as exc:
        raise NotARepositoryError(source, exc.stderr.strip() or None) from exc
    except OSError as exc:
        raise NotARepositoryError(source, str(exc)) from exc
    return RepositoryRef(root=root, source=source)


def locate(path: Path | str) -> FileLocation:
    repo = resolve(path)
    absolute = repo.source
    try:
        relative = absolute.relative_to(repo.root.resolve())
    except ValueError as exc:
        raise InvalidPathError(f"{absolute} is outside the repository at {repo.root}") from exc
    if not relative.parts:
        raise InvalidPathError(f"{absolute} is the repository root, not a file")
    if relative.parts[0] == ".git":
        raise InvalidPathError(f"{absolute} is inside the repository metadata directory")
    if absolute.is_dir() and not absolute.is_symlink():
        raise InvalidPathError(f"{absolute} is a directory; pass individual files")
    return FileLocation(
        repo=repo,
        absolute_path=absolute,
        relative_path=PurePath(relative).as_posix(),
    )


__all__ = ["normalize_path", "resolve", "locate"]
