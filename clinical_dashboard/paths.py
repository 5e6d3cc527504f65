"""Locating configuration files on disk."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

CONFIG_ENV_VAR = "MTEAM_DASHBOARD_BACKEND_CONFIG"
_CONFIG_ARG = "--config-file="
_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t", "\r": "\\r"}


def _debug_str(text: str) -> str:
    return '"' + "".join(_ESCAPES.get(ch, ch) for ch in text) + '"'


def _debug_list(items: Sequence[str]) -> str:
    if not items:
        return "[]"
    return "[\n" + "".join(f"    {_debug_str(item)},\n" for item in items) + "]"


def resolve_path(path_string: str) -> str:
    """Return an existing path; relative paths are taken from the working directory.

    Raises ``FileNotFoundError`` if the path does not exist.
    """
    path = Path(path_string)
    if path.is_absolute():
        if not path.exists():
            raise FileNotFoundError(f"Path does not exist {path_string}")
        return path_string
    resolved = Path(os.getcwd()) / path_string
    if not resolved.exists():
        raise FileNotFoundError(f"Path does not exist {path_string}")
    return str(resolved)


def resolve_first_path(paths: Sequence[str]) -> str:
    """The first of ``paths`` that exists; ``FileNotFoundError`` if none does."""
    for path in paths:
        try:
            return resolve_path(path)
        except OSError:
            continue
    raise FileNotFoundError(f"No valid path found: {_debug_list(list(paths))}")


def _resolve_command_line_arg(args: Sequence[str]) -> str:
    arg = next((a for a in args if a.startswith(_CONFIG_ARG)), None)
    if arg is not None:
        path = arg
        while path.startswith(_CONFIG_ARG):
            path = path[len(_CONFIG_ARG):]
        if path:
            try:
                return resolve_path(path)
            except OSError:
                raise FileNotFoundError(
                    'Invalid path set by "--config-file" argument'
                ) from None
    raise FileNotFoundError('No "--config-file" argument provided or path is empty')


def _resolve_environment_var() -> str:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path is None:
        raise FileNotFoundError(f"Environment variable {CONFIG_ENV_VAR} is not set")
    try:
        return resolve_path(env_path)
    except OSError:
        raise FileNotFoundError(
            f"Invalid path set by {CONFIG_ENV_VAR}: {_debug_str(env_path)}"
        ) from None


def resolve_config_file_path(cmd_args: Sequence[str], fallback_paths: Sequence[str]) -> str:
    """Find the config file: ``--config-file=``, then the environment, then fallbacks."""
    try:
        return _resolve_command_line_arg(cmd_args)
    except OSError:
        pass
    try:
        return _resolve_environment_var()
    except OSError:
        pass
    return resolve_first_path(fallback_paths)