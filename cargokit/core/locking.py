"""
Cross-process locking for CargoKit.

Running `cargo install` for the same tool from several processes at once
makes them race on the same target directory and binary. The install lock
serializes them.

Usage:
    from cargokit.core.locking import LockManager

    lock_manager = LockManager()
    with lock_manager.install_lock("wasm-pack", timeout=300):
        # Only one process installs wasm-pack at a time
        pass
"""

import logging
import platform
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from filelock import FileLock, Timeout as LockTimeout

logger = logging.getLogger(__name__)


def get_global_cache_dir() -> Path:
    """
    Get the per-user directory CargoKit keeps state in.

    Returns:
        Path to global cache directory
    """
    if platform.system() == "Windows":
        return Path.home() / "AppData" / "Local" / "cargokit"
    return Path.home() / ".cargokit"


class LockManager:
    """
    Manages file locks for CargoKit operations.

    Attributes:
        lock_dir: Directory where lock files are stored
    """

    def __init__(self, lock_dir: Optional[Path] = None):
        """
        Initialize lock manager.

        Args:
            lock_dir: Directory for lock files (default: global cache/lock/)
        """
        if lock_dir is None:
            lock_dir = get_global_cache_dir() / "lock"

        self.lock_dir = Path(lock_dir).expanduser()
        self.lock_dir.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def install_lock(self, tool: str, timeout: float = 300):
        """
        Acquire the lock guarding `cargo install` of one tool.

        Args:
            tool: Tool or crate name (e.g. 'wasm-bindgen-cli')
            timeout: Maximum wait time in seconds (default: 300, installs compile from source)

        Yields:
            None

        Raises:
            LockTimeout: If lock can't be acquired within timeout
        """
        safe_name = tool.replace("/", "-").replace("\\", "-").replace(":", "-")
        lock_path = self.lock_dir / f"install-{safe_name}.lock"
        lock = FileLock(lock_path, timeout=timeout)

        try:
            with lock:
                logger.debug(f"Acquired install lock: {lock_path}")
                yield
                logger.debug(f"Released install lock: {lock_path}")
        except LockTimeout as e:
            logger.error(
                f"Could not acquire install lock for {tool} after {timeout}s. "
                "Another process may be installing this tool."
            )
            raise LockTimeout(
                f"Could not acquire install lock for {tool} after {timeout}s. "
                "Another process may be installing this tool."
            ) from e
