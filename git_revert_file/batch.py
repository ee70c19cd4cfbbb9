"""High-level orchestration over an ordered list of paths."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable

from . import git
from .exceptions import RevertFileError, UserAbort
from .locator import locate
from .logs import EventSink, LoggingEventSink
from .models import BatchReport, FileLocation, FileOutcome, OutcomeStatus, PresenceState
from .presence import classify
from .reconciler import revert_to_previous
from .rewriter import revert_and_stash
from .snapshot import DEFAULT_SNAPSHOT_DIRNAME

ConfirmDiscard = Callable[[FileLocation], bool]
GetMessage = Callable[[], str | None]

_REVERT_MESSAGES = {
    PresenceState.PRESENT_IN_BOTH: "rolled back to the previous commit's content",
    PresenceState.PRESENT_ONLY_IN_PREVIOUS: "restored from the previous commit",
    PresenceState.PRESENT_ONLY_IN_CURRENT: "removed; it did not exist in the previous commit",
}


def revert_files(
    paths: Iterable[Path | str],
    confirm: ConfirmDiscard | None = None,
    events: EventSink | None = None,
) -> BatchReport:
    """Revert each path to ``HEAD^`` in order, isolating failures per file.

    ``confirm`` is asked only for files with uncommitted changes; a ``False``
    answer skips that file. Without ``confirm`` every file is reverted.
    """

    sink = events or LoggingEventSink()
    report = BatchReport()
    for raw in paths:
        path = Path(raw)
        sink("file.start", action="revert", path=path)
        try:
            location = locate(path)
            if confirm is not None and _needs_confirmation(location):
                if not _ask(confirm, location):
                    report.add(FileOutcome(path, OutcomeStatus.SKIPPED, "uncommitted changes kept"))
                    sink("file.skipped", action="revert", path=path)
                    continue
            state = revert_to_previous(location)
        except RevertFileError as exc:
            report.add(FileOutcome(path, OutcomeStatus.FAILED, str(exc)))
            sink("file.failed", action="revert", path=path, error=str(exc))
            continue
        report.add(FileOutcome(path, OutcomeStatus.REVERTED, _REVERT_MESSAGES[state], state))
        sink("file.done", action="revert", path=path, state=state.value)
    return report


def stash_files(
    paths: Iterable[Path | str],
    get_message: GetMessage | None = None,
    events: EventSink | None = None,
    *,
    snapshot_dirname: str = DEFAULT_SNAPSHOT_DIRNAME,
) -> BatchReport:
    """Amend each path out of HEAD and stash its content, in order.

    ``get_message`` is asked once before any file is touched. ``None`` (or a
    cancelled prompt) aborts the whole invocation; an empty string still
    stashes, just without a label.
    """

    sink = events or LoggingEventSink()
    paths = [Path(raw) for raw in paths]
    report = BatchReport()
    message: str | None = None
    if get_message is not None:
        try:
            message = get_message()
        except UserAbort:
            message = None
        if message is None:
            for path in paths:
                report.add(FileOutcome(path, OutcomeStatus.CANCELLED, "stash message prompt cancelled"))
            sink("batch.cancelled", action="stash", count=len(paths))
            return report

    for path in paths:
        sink("file.start", action="stash", path=path)
        try:
            location = locate(path)
            state = revert_and_stash(location, message, snapshot_dirname=snapshot_dirname)
        except RevertFileError as exc:
            report.add(FileOutcome(path, OutcomeStatus.FAILED, str(exc)))
            sink("file.failed", action="stash", path=path, error=str(exc))
            continue
        report.add(FileOutcome(path, OutcomeStatus.STASHED, "amended out of HEAD and stashed", state))
        sink("file.done", action="stash", path=path, state=state.value)
    return report


def _needs_confirmation(location: FileLocation) -> bool:
    # Files in neither commit fail with NothingToRevertError; don't ask first.
    if classify(location) is PresenceState.PRESENT_IN_NEITHER:
        return False
    return git.has_uncommitted_changes(location.root, location.relative_path)


def _ask(confirm: ConfirmDiscard, location: FileLocation) -> bool:
    try:
        return bool(confirm(location))
    except UserAbort:
        return False


__all__ = ["ConfirmDiscard", "GetMessage", "revert_files", "stash_files"]
