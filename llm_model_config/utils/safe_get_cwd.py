"""Safe helpers for reading the working directory."""

from __future__ import annotations

import os
from pathlib import Path

from llm_model_config.utils.log import get_logger

logger = get_logger()

_ORIGINAL_CWD = Path(os.getcwd()).resolve()


def get_original_cwd() -> Path:
    """Return the process's initial working directory."""
    return _ORIGINAL_CWD


def safe_get_cwd() -> Path:
    """Return the current working directory, falling back to the original on error."""
    try:
        return Path(os.getcwd()).resolve()
    except (OSError, RuntimeError, ValueError) as exc:
        # The directory may have been removed underneath the process.
        logger.warning(
            "[safe_get_cwd] Failed to resolve cwd: %s: %s",
            type(exc).__name__,
            exc,
        )
        return get_original_cwd()


__all__ = ["get_original_cwd", "safe_get_cwd"]
