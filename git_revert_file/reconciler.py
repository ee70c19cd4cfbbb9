"""Roll a single file back to its content in HEAD's parent."""

from __future__ import annotations

import logging

from . import git
from .exceptions import GitCommandError, NothingToRevertError, RevertError
from .models import FileLocation, PresenceState
from .presence import classify

logger = logging.getLogger(__name__)


def revert_to_previous(location: FileLocation) -> PresenceState:
    """Make the index and working tree match ``HEAD^`` for one file.

    HEAD itself is never rewritten; the result shows up as uncommitted changes.

    Returns:
        The presence state the action was chosen from.

    Raises:
        NothingToRevertError: If neither commit contains the file.
        RevertError: If the git action fails. The file is left as found.
    """

    state = classify(location)
    path = location.relative_path
    if state is PresenceState.PRESENT_IN_NEITHER:
        raise NothingToRevertError(path)
    try:
        if state is PresenceState.PRESENT_ONLY_IN_PREVIOUS:
            logger.info("Restoring deleted file %s from %s", path, git.PARENT)
            git.checkout_path(location.root, git.PARENT, path)
        elif state is PresenceState.PRESENT_IN_BOTH:
            logger.info("Rolling back %s to %s", path, git.PARENT)
            git.checkout_path(location.root, git.PARENT, path)
        elif state is PresenceState.PRESENT_ONLY_IN_CURRENT:
            logger.info("Removing %s, which did not exist in %s", path, git.PARENT)
            _remove_added_file(location)
        else:
            raise ValueError(f"Unhandled presence state: {state!r}")
    except (GitCommandError, OSError) as exc:
        raise RevertError(state.value, path, exc) from exc
    return state


def _remove_added_file(location: FileLocation) -> None:
    path = location.relative_path
    on_disk = location.absolute_path.exists() or location.absolute_path.is_symlink()
    if git.is_tracked(location.root, path):
        if on_disk:
            git.remove_path(location.root, path)
        else:
            git.remove_cached(location.root, path)
    elif on_disk:
        location.absolute_path.unlink()


__all__ = ["revert_to_previous"]
