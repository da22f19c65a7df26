# src/frs/config.py

import os
import sys
import tempfile
from pathlib import Path

from frs.errors import ConfigurationError


class Config:
    # Application Configuration
    APP_NAME = "frs"

    # Marker replaced by the caller's command at run time
    TEMPLATE_PLACEHOLDER = "(((( echo 'frs placeholder' ))))"

    DEFAULT_NAMESPACE = "default"
    DEFAULT_NAME = "default"

    # Environment overrides
    TERM_PID_ENV = "FRS_TERM_PID"
    CONTEXT_DIR_ENV = "FRS_CONTEXT_DIR"
    SESSION_DIR_ENV = "FRS_SESSION_DIR"
    LOG_LEVEL_ENV = "FRS_LOG_LEVEL"

    # Characters that may not appear in a saved context's file name
    PATH_SEPARATORS = ("/", "\\")
    PATH_SEPARATOR_REPLACEMENT = "·"


def get_home_dir() -> Path:
    """Resolve the current user's home directory from the environment."""
    var = "USERPROFILE" if sys.platform == "win32" else "HOME"
    home = os.getenv(var)
    if not home:
        raise ConfigurationError(f"Cannot resolve home directory: ${var} is not set")
    return Path(home)


def get_context_dir() -> Path:
    """Directory holding explicitly saved contexts, one file per (namespace, name)."""

    # 1. Explicit override
    override = os.getenv(Config.CONTEXT_DIR_ENV)
    if override:
        return Path(override)

    # 2. XDG config home
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / Config.APP_NAME / "context"

    # 3. Default
    return get_home_dir() / ".config" / Config.APP_NAME / "context"


def get_session_dir() -> Path:
    """Shared temporary directory holding per-terminal scratch contexts."""
    override = os.getenv(Config.SESSION_DIR_ENV)
    if override:
        return Path(override)
    return Path(tempfile.gettempdir())
