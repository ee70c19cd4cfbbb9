"""Classify a file's presence in HEAD and HEAD's parent."""

from __future__ import annotations

import logging

from . import git
from .models import FileLocation, PresenceState

logger = logging.getLogger(__name__)


def exists_in_commit(location: FileLocation, rev: str) -> bool:
    """Probe whether ``rev`` holds a blob at the file's path.

    Any failure counts as absent. A root commit has no ``HEAD^`` and an unborn
    branch has no ``HEAD``; both simply report ``False``.
    """

    return git.blob_exists(location.root, rev, location.relative_path)


def classify(location: FileLocation) -> PresenceState:
    in_current = exists_in_commit(location, git.HEAD)
    in_previous = exists_in_commit(location, git.PARENT)
    state = PresenceState.from_probes(in_current, in_previous)
    logger.debug("%s classified as %s", location.relative_path, state.value)
    return state


__all__ = ["exists_in_commit", "classify"]
