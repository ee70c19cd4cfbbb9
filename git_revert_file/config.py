"""Configuration management."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import PurePath

from .exceptions import ConfigError
from .snapshot import DEFAULT_SNAPSHOT_DIRNAME

ENV_ASSUME_YES = "GIT_REVERT_FILE_ASSUME_YES"
ENV_STASH_MESSAGE = "GIT_REVERT_FILE_STASH_MESSAGE"
ENV_SNAPSHOT_DIR = "GIT_REVERT_FILE_SNAPSHOT_DIR"
ENV_LOG_LEVEL = "GIT_REVERT_FILE_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "WARNING"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"", "0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class Config:
    """Application configuration."""

    assume_yes: bool = False
    stash_message: str | None = None
    snapshot_dirname: str = DEFAULT_SNAPSHOT_DIRNAME
    log_level: str = DEFAULT_LOG_LEVEL


def load_config(environ: dict[str, str] | None = None) -> Config:
    env = os.environ if environ is None else environ
    return Config(
        assume_yes=_parse_bool(ENV_ASSUME_YES, env.get(ENV_ASSUME_YES, "")),
        stash_message=env.get(ENV_STASH_MESSAGE),
        snapshot_dirname=_parse_dirname(env.get(ENV_SNAPSHOT_DIR) or DEFAULT_SNAPSHOT_DIRNAME),
        log_level=(env.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper(),
    )


def _parse_bool(var: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigError(f"Environment variable {var} must be a boolean (1/0, true/false), got {raw!r}.")


def _parse_dirname(raw: str) -> str:
    name = raw.strip()
    parts = PurePath(name).parts
    if len(parts) != 1 or name in (".", "..") or PurePath(name).is_absolute():
        raise ConfigError(
            f"Environment variable {ENV_SNAPSHOT_DIR} must be a single directory name, got {raw!r}."
        )
    return name


__all__ = [
    "ENV_ASSUME_YES",
    "ENV_STASH_MESSAGE",
    "ENV_SNAPSHOT_DIR",
    "ENV_LOG_LEVEL",
    "Config",
    "load_config",
]
