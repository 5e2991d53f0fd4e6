"""
Child process execution.

Command wraps subprocess with a fluent builder and a family of checked
runners. The runners raise CommandError instead of returning a non-zero
exit code, and errors name the command the way a user would type it:

    `cargo install --version ^0.9.1 wasm-pack` failed: exit code 101
"""

import logging
import os
import subprocess
import threading
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Union

from cargokit.core.exceptions import CommandError

logger = logging.getLogger(__name__)

StrPath = Union[str, os.PathLike]

# Stream dispositions accepted by stdin()/stdout()/stderr()
PIPE = subprocess.PIPE
DEVNULL = subprocess.DEVNULL
INHERIT = None


def _quote(arg: str) -> str:
    if " " in arg or '"' in arg:
        return '"' + arg.replace('"', '\\"') + '"'
    return arg


class Command:
    """
    Builder for a child process.

    Example:
        >>> out = Command("rustc").arg("--version").stdout0()
        >>> out.startswith("rustc ")
        True
    """

    def __init__(self, program: StrPath):
        self.program = os.fspath(program)
        self._args: List[str] = []
        self._env: Dict[str, str] = {}
        self._env_removed: List[str] = []
        self._env_clear = False
        self._cwd: Optional[Path] = None
        self._stdin = INHERIT
        self._stdout = INHERIT
        self._stderr = INHERIT

    # ------------------------------------------------------------------
    # Builder
    # ------------------------------------------------------------------

    def arg(self, arg: StrPath) -> "Command":
        self._args.append(os.fspath(arg))
        return self

    def args(self, args: Iterable[StrPath]) -> "Command":
        for a in args:
            self.arg(a)
        return self

    def env(self, key: str, value: StrPath) -> "Command":
        self._env[key] = os.fspath(value)
        if key in self._env_removed:
            self._env_removed.remove(key)
        return self

    def envs(self, pairs: Dict[str, StrPath]) -> "Command":
        for key, value in pairs.items():
            self.env(key, value)
        return self

    def env_remove(self, key: str) -> "Command":
        self._env.pop(key, None)
        if key not in self._env_removed:
            self._env_removed.append(key)
        return self

    def env_clear(self) -> "Command":
        self._env.clear()
        self._env_removed.clear()
        self._env_clear = True
        return self

    def current_dir(self, path: StrPath) -> "Command":
        self._cwd = Path(path)
        return self

    def stdin(self, disposition) -> "Command":
        self._stdin = disposition
        return self

    def stdout(self, disposition) -> "Command":
        self._stdout = disposition
        return self

    def stderr(self, disposition) -> "Command":
        self._stderr = disposition
        return self

    @property
    def argv(self) -> List[str]:
        return [self.program, *self._args]

    def get_env(self) -> Optional[Dict[str, str]]:
        """Environment for the child, or None to inherit unchanged."""
        if not (self._env or self._env_removed or self._env_clear):
            return None
        env = {} if self._env_clear else dict(os.environ)
        for key in self._env_removed:
            env.pop(key, None)
        env.update(self._env)
        return env

    def __str__(self) -> str:
        return "`" + " ".join(_quote(a) for a in self.argv) + "`"

    def __repr__(self) -> str:
        parts = [f"Command({self.argv!r}"]
        if self._cwd is not None:
            parts.append(f"cwd={str(self._cwd)!r}")
        if self._env_clear:
            parts.append("env_clear=True")
        if self._env:
            parts.append(f"env={self._env!r}")
        if self._env_removed:
            parts.append(f"env_remove={self._env_removed!r}")
        return ", ".join(parts) + ")"

    # ------------------------------------------------------------------
    # Runners
    # ------------------------------------------------------------------

    def _popen_kwargs(self, stdin, stdout, stderr) -> dict:
        return {
            "stdin": stdin,
            "stdout": stdout,
            "stderr": stderr,
            "cwd": self._cwd,
            "env": self.get_env(),
        }

    def _spawn_error(self, e: OSError) -> CommandError:
        return CommandError(f"{self} failed: {e}")

    def spawn(self) -> subprocess.Popen:
        """Start the process with the configured stream dispositions."""
        logger.debug(f"Spawning {self}")
        try:
            return subprocess.Popen(
                self.argv, **self._popen_kwargs(self._stdin, self._stdout, self._stderr)
            )
        except OSError as e:
            raise self._spawn_error(e) from e

    def _run(self, stdout, stderr) -> subprocess.CompletedProcess:
        logger.debug(f"Running {self}")
        try:
            return subprocess.run(
                self.argv, **self._popen_kwargs(self._stdin, stdout, stderr)
            )
        except OSError as e:
            raise self._spawn_error(e) from e

    def status(self) -> int:
        """Run to completion and return the exit code."""
        return self._run(self._stdout, self._stderr).returncode

    def output(self) -> subprocess.CompletedProcess:
        """Run to completion capturing stdout and stderr as bytes."""
        return self._run(PIPE, PIPE)

    def check(self, returncode: int) -> None:
        """Raise CommandError for a non-zero exit code."""
        if returncode == 0:
            return
        if returncode < 0:
            raise CommandError(f"{self} failed: terminated by signal {-returncode}")
        raise CommandError(f"{self} failed: exit code {returncode}")

    def status0(self) -> None:
        self.check(self.status())

    def output0(self) -> subprocess.CompletedProcess:
        result = self.output()
        self.check(result.returncode)
        return result

    def _stdout_text(self, stderr) -> str:
        result = self._run(PIPE, stderr)
        self.check(result.returncode)
        try:
            return result.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CommandError(f"{self} failed: stdout contained invalid unicode") from e

    def stdout0(self) -> str:
        """Checked run returning stdout as text; stderr goes to the terminal."""
        return self._stdout_text(INHERIT)

    def stdout0_no_stderr(self) -> str:
        """Checked run returning stdout as text; stderr is discarded."""
        return self._stdout_text(DEVNULL)

    def io(
        self,
        on_out: Callable[[str], None],
        on_err: Callable[[str], None],
    ) -> int:
        """
        Run while streaming output lines to callbacks.

        Each stream is read on its own thread so neither pipe can fill up
        and stall the child. Lines are passed without their line ending.

        Returns:
            Exit code of the child

        Raises:
            CommandError: If the process cannot be spawned
            Exception: The first error raised by a callback, once the child
                has exited and both streams are drained
        """
        logger.debug(f"Running {self} with line callbacks")
        try:
            proc = subprocess.Popen(self.argv, **self._popen_kwargs(self._stdin, PIPE, PIPE))
        except OSError as e:
            raise self._spawn_error(e) from e

        errors = []

        def pump(stream, callback):
            failed = False
            with stream:
                for raw in stream:
                    # Keep draining after a callback fails so the child never blocks
                    if failed:
                        continue
                    try:
                        callback(raw.decode("utf-8", "replace").rstrip("\r\n"))
                    except Exception as e:
                        errors.append(e)
                        failed = True

        threads = [
            threading.Thread(target=pump, args=(proc.stdout, on_out), daemon=True),
            threading.Thread(target=pump, args=(proc.stderr, on_err), daemon=True),
        ]
        for t in threads:
            t.start()
        returncode = proc.wait()
        for t in threads:
            t.join()
        if errors:
            raise errors[0]
        return returncode

    def io0(
        self,
        on_out: Callable[[str], None],
        on_err: Callable[[str], None],
    ) -> None:
        self.check(self.io(on_out, on_err))
