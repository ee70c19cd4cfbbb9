"""Amend a file out of HEAD while parking its content in a stash entry.

The sequence is strictly ordered:

1. snapshot: copy the file's current bytes into the git directory.
2. rewrite: roll the file back to ``HEAD^`` and amend HEAD in place.
3. rematerialize: copy the snapshot back over the working-tree path.
4. stash: stage that content and push a stash entry scoped to the path.

A failure in any step stops the sequence. Up to the end of step 3 the
snapshot path is reported with the error so nothing is lost.
"""

from __future__ import annotations

import logging

from . import git
from .exceptions import (
    GitCommandError,
    NothingToPreserveError,
    RevertAndStashError,
)
from .models import FileLocation, PresenceState
from .presence import classify
from .snapshot import DEFAULT_SNAPSHOT_DIRNAME, TempSnapshot

logger = logging.getLogger(__name__)

STEP_SNAPSHOT = "snapshot"
STEP_REWRITE = "rewrite"
STEP_REMATERIALIZE = "rematerialize"
STEP_STASH = "stash"


def revert_and_stash(
    location: FileLocation,
    message: str | None = None,
    *,
    snapshot_dirname: str = DEFAULT_SNAPSHOT_DIRNAME,
) -> PresenceState:
    """Rewrite HEAD to hold the previous version of a file and stash the rest.

    Args:
        location: The file to operate on.
        message: Stash message. Empty or ``None`` leaves the entry unlabeled.
        snapshot_dirname: Directory under the git dir used for snapshots.

    Returns:
        The presence state the rewrite was chosen from.

    Raises:
        NothingToPreserveError: If the file exists neither in HEAD nor on disk.
        RevertAndStashError: If any step fails.
    """

    path = location.relative_path
    state = classify(location)
    unchanged = _unchanged_since_parent(location, state)

    snapshot = _take_snapshot(location, state, snapshot_dirname, unchanged)

    try:
        if unchanged:
            logger.debug("%s is identical in %s and %s; HEAD left as is", path, git.HEAD, git.PARENT)
        else:
            _rewrite_head(location, state)
    except (GitCommandError, OSError) as exc:
        raise RevertAndStashError(STEP_REWRITE, path, exc, snapshot.path) from exc

    try:
        snapshot.restore_to(location.absolute_path)
    except OSError as exc:
        raise RevertAndStashError(STEP_REMATERIALIZE, path, exc, snapshot.path) from exc
    try:
        snapshot.discard()
    except OSError as exc:
        raise RevertAndStashError(STEP_REMATERIALIZE, path, exc, snapshot.path) from exc

    try:
        git.add_path(location.root, path)
        before = len(git.stash_list(location.root))
        git.stash_push(location.root, path, message)
        created = len(git.stash_list(location.root)) > before
    except (GitCommandError, OSError) as exc:
        raise RevertAndStashError(STEP_STASH, path, exc) from exc
    # git exits 0 with "No local changes to save" when the content already matches HEAD.
    if not created:
        raise RevertAndStashError(
            STEP_STASH, path, "no changes to stash; the content already matches HEAD"
        )

    logger.info("Amended %s out of HEAD and stashed its content", path)
    return state


def _unchanged_since_parent(location: FileLocation, state: PresenceState) -> bool:
    if not (state.in_current and state.in_previous):
        return False
    current = git.blob_id(location.root, git.HEAD, location.relative_path)
    return current is not None and current == git.blob_id(
        location.root, git.PARENT, location.relative_path
    )


def _take_snapshot(
    location: FileLocation,
    state: PresenceState,
    dirname: str,
    unchanged: bool = False,
) -> TempSnapshot:
    path = location.relative_path
    on_disk = location.absolute_path.is_file()
    if not on_disk and not state.in_current:
        raise NothingToPreserveError(path)
    try:
        if unchanged and not git.has_uncommitted_changes(location.root, path):
            raise RevertAndStashError(
                STEP_SNAPSHOT,
                path,
                f"unchanged between {git.PARENT} and {git.HEAD} with no uncommitted changes; "
                "nothing to stash",
            )
        if state is not PresenceState.PRESENT_IN_NEITHER:
            _ensure_nothing_else_staged(location)
        if on_disk:
            return TempSnapshot.from_working_tree(location, dirname=dirname)
        return TempSnapshot.from_commit(location, git.HEAD, dirname=dirname)
    except (GitCommandError, OSError) as exc:
        raise RevertAndStashError(STEP_SNAPSHOT, path, exc) from exc


def _ensure_nothing_else_staged(location: FileLocation) -> None:
    others = [name for name in git.staged_paths(location.root) if name != location.relative_path]
    if others:
        listed = ", ".join(others[:5])
        if len(others) > 5:
            listed = f"{listed}, ..."
        raise RevertAndStashError(
            STEP_SNAPSHOT,
            location.relative_path,
            f"other staged changes would be folded into the amended commit: {listed}",
        )


def _rewrite_head(location: FileLocation, state: PresenceState) -> None:
    root = location.root
    path = location.relative_path
    if state is PresenceState.PRESENT_IN_BOTH:
        git.checkout_path(root, git.PARENT, path)
        git.add_path(root, path)
        git.commit_amend_no_edit(root)
    elif state is PresenceState.PRESENT_ONLY_IN_PREVIOUS:
        git.checkout_path(root, git.PARENT, path)
        git.commit_amend_no_edit(root)
    elif state is PresenceState.PRESENT_ONLY_IN_CURRENT:
        # A staged deletion already took it out of the index.
        if git.is_tracked(root, path):
            git.remove_cached(root, path)
        git.commit_amend_no_edit(root)
    elif state is PresenceState.PRESENT_IN_NEITHER:
        logger.debug("%s is in neither commit; stashing the working tree copy only", path)
    else:
        raise ValueError(f"Unhandled presence state: {state!r}")


__all__ = [
    "STEP_SNAPSHOT",
    "STEP_REWRITE",
    "STEP_REMATERIALIZE",
    "STEP_STASH",
    "revert_and_stash",
]
