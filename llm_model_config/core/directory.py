"""Locate the directory holding per-provider model configuration documents."""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple, Union

from llm_model_config.utils.log import get_logger
from llm_model_config.utils.safe_get_cwd import safe_get_cwd

logger = get_logger()

CONFIG_DIR_ENV = "LLM_MODEL_CONFIG_DIR"
MODELS_SUBDIR = Path("config") / "models"

_PACKAGE_DIR = Path(__file__).resolve().parent.parent
# A source checkout keeps config/models next to the package directory.
PACKAGE_RELATIVE_DIR = _PACKAGE_DIR.parent / MODELS_SUBDIR
BUNDLED_DIR = _PACKAGE_DIR / "data" / "models"

PathLike = Union[str, "os.PathLike[str]"]
Probe = Callable[[], Optional[Path]]


def _is_directory(path: Path) -> bool:
    """Existence check that treats an unreadable location as absent."""
    try:
        return path.is_dir()
    except OSError as exc:
        logger.debug(
            "[model_config] Directory probe failed: %s: %s",
            type(exc).__name__,
            exc,
            extra={"path": str(path)},
        )
        return False


def _expand(path: PathLike, base: Path) -> Path:
    expanded = Path(os.path.expanduser(os.fspath(path)))
    if not expanded.is_absolute():
        expanded = base / expanded
    return Path(os.path.normpath(expanded))


class DirectoryResolver:
    """Resolve the model configuration directory through ordered probes.

    Probes, first hit wins:

    1. the explicitly configured directory, when it exists;
    2. ``config/models`` under the working directory;
    3. ``config/models`` next to the installed package;
    4. ``config/models`` under any ancestor of the working directory;
    5. the documents bundled with the package (always returned).

    The result is memoized until :meth:`reset` or
    :meth:`set_configured_directory` is called. Resolution never raises.
    """

    def __init__(
        self,
        configured_dir: Optional[PathLike] = None,
        *,
        cwd_provider: Callable[[], Path] = safe_get_cwd,
        package_relative_dir: Path = PACKAGE_RELATIVE_DIR,
        bundled_dir: Path = BUNDLED_DIR,
    ) -> None:
        self._configured_dir: Optional[PathLike] = configured_dir
        self._cwd_provider = cwd_provider
        self._package_relative_dir = package_relative_dir
        self._bundled_dir = bundled_dir
        self._resolved: Optional[Path] = None
        self._generation = 0
        self._lock = threading.Lock()

    @classmethod
    def from_env(cls, **kwargs: Any) -> "DirectoryResolver":
        """Build a resolver whose configured directory comes from the environment."""
        configured = os.getenv(CONFIG_DIR_ENV) or None
        return cls(configured, **kwargs)

    @property
    def configured_directory(self) -> Optional[PathLike]:
        return self._configured_dir

    def set_configured_directory(self, path: Optional[PathLike]) -> None:
        """Override probe 1 and drop the memoized result."""
        with self._lock:
            self._configured_dir = path
            self._resolved = None
            self._generation += 1
        logger.debug(
            "[model_config] Configured directory changed",
            extra={"path": None if path is None else os.fspath(path)},
        )

    def reset(self) -> None:
        """Forget the memoized directory so the next resolve probes again."""
        with self._lock:
            self._resolved = None
            self._generation += 1

    def resolve(self) -> Path:
        with self._lock:
            if self._resolved is not None:
                return self._resolved
            generation = self._generation

        path, source = self._discover()
        logger.debug(
            "[model_config] Resolved configuration directory",
            extra={"path": str(path), "source": source},
        )

        with self._lock:
            if self._generation == generation:
                self._resolved = path
        return path

    def probes(self) -> List[Tuple[str, Probe]]:
        """Ordered (name, probe) pairs evaluated before the bundled fallback."""
        return [
            ("configured", self._probe_configured),
            ("cwd", self._probe_cwd),
            ("package", self._probe_package_relative),
            ("ancestors", self._probe_ancestors),
        ]

    def _discover(self) -> Tuple[Path, str]:
        for name, probe in self.probes():
            found = probe()
            if found is not None:
                return found, name
        return self._bundled_dir, "bundled"

    def _probe_configured(self) -> Optional[Path]:
        configured = self._configured_dir
        if configured is None:
            return None
        candidate = _expand(configured, self._cwd_provider())
        if _is_directory(candidate):
            return candidate
        logger.debug(
            "[model_config] Configured directory does not exist; falling back to discovery",
            extra={"path": str(candidate)},
        )
        return None

    def _probe_cwd(self) -> Optional[Path]:
        candidate = self._cwd_provider() / MODELS_SUBDIR
        return candidate if _is_directory(candidate) else None

    def _probe_package_relative(self) -> Optional[Path]:
        candidate = self._package_relative_dir
        return candidate if _is_directory(candidate) else None

    def _probe_ancestors(self) -> Optional[Path]:
        current = self._cwd_provider()
        for directory in (current, *current.parents):
            candidate = directory / MODELS_SUBDIR
            if _is_directory(candidate):
                return candidate
        return None
