"""Interactive prompt helpers built on InquirerPy."""

from __future__ import annotations

import sys

from InquirerPy import inquirer

from .exceptions import UserAbort
from .models import FileLocation


def _ensure_tty() -> None:
    if not sys.stdin.isatty():
        raise UserAbort(
            "Interactive mode requires a TTY. Pass --yes or --message to run non-interactively."
        )


def confirm_discard(location: FileLocation) -> bool:
    _ensure_tty()
    try:
        return bool(
            inquirer.confirm(
                message=f"{location.relative_path} has uncommitted changes. Discard them?",
                default=False,
            ).execute()
        )
    except KeyboardInterrupt as exc:  # pragma: no cover - user cancel
        raise UserAbort("User cancelled the prompt.") from exc


def prompt_stash_message(default: str | None = None) -> str | None:
    """Ask for a stash message. ``None`` means the prompt was cancelled."""

    _ensure_tty()
    try:
        answer = inquirer.text(
            message="Stash message (optional):",
            default=default or "",
            mandatory=False,
        ).execute()
    except KeyboardInterrupt:  # pragma: no cover - user cancel
        return None
    if answer is None:
        return None
    return answer.strip()


__all__ = ["confirm_discard", "prompt_stash_message"]
