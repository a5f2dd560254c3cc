"""Process execution for invoking extensions.

Extensions are independent executables. The runner inherits the parent's
standard streams and performs no buffering or transformation of output.
Short queries run through capture instead and have their stdout collected.
"""

import os
import shutil
import signal
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

CAPTURE_TIMEOUT_SECONDS = 10.0


class ProcessRunner(ABC):
    """Abstract interface for launching extension processes.

    This abstraction enables testing invocation paths without spawning real
    processes.
    """

    @abstractmethod
    def run(self, command: list[str]) -> int:
        """Run a command to completion with inherited stdio.

        Args:
            command: Executable followed by its arguments

        Returns:
            Exit code of the process. A process terminated by signal N is
            reported as 128 + N, matching shell conventions.

        Raises:
            OSError: If the process could not be launched (e.g. FileNotFoundError
                for a missing binary, PermissionError for a non-executable file)
        """
        ...

    @abstractmethod
    def capture(self, command: list[str]) -> str:
        """Run a command to completion and return its stdout.

        Used for short queries such as ``--version``; the command gets no
        stdin and its output is not shown to the user.

        Raises:
            RuntimeError: If the command is missing, cannot be launched, times
                out or exits non-zero
        """
        ...

    @abstractmethod
    def which(self, executable: str) -> str | None:
        """Resolve an executable name against PATH.

        Returns:
            Absolute path to the executable, or None if it is not on PATH
        """
        ...

    @abstractmethod
    def path_executables(self, prefix: str) -> dict[str, str]:
        """Find executables on PATH whose name starts with prefix.

        Returns:
            Mapping of executable name (without platform suffix) to its path.
            The first PATH entry wins when a name appears more than once.
        """
        ...


def exit_code_from_returncode(returncode: int) -> int:
    """Translate a subprocess returncode into a process exit code."""
    if returncode < 0:
        return 128 + abs(returncode)
    return returncode


class RealProcessRunner(ProcessRunner):
    """Runs commands with subprocess, blocking until the child exits."""

    def run(self, command: list[str]) -> int:
        # The child receives SIGINT directly; the parent keeps waiting for its exit code
        previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
        try:
            result = subprocess.run(command, check=False)
        finally:
            signal.signal(signal.SIGINT, previous)
        return exit_code_from_returncode(result.returncode)

    def capture(self, command: list[str]) -> str:
        cmd_str = " ".join(command)
        try:
            result = subprocess.run(
                command,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=True,
                timeout=CAPTURE_TIMEOUT_SECONDS,
            )
        except subprocess.CalledProcessError as e:
            error_msg = f"Command '{cmd_str}' exited with code {e.returncode}"
            if e.stderr:
                error_msg += f": {e.stderr.strip()}"
            raise RuntimeError(error_msg) from e
        except subprocess.TimeoutExpired as e:
            raise RuntimeError(
                f"Command '{cmd_str}' timed out after {CAPTURE_TIMEOUT_SECONDS}s"
            ) from e
        except OSError as e:
            raise RuntimeError(f"Could not run '{cmd_str}': {e}") from e
        return result.stdout

    def which(self, executable: str) -> str | None:
        return shutil.which(executable)

    def path_executables(self, prefix: str) -> dict[str, str]:
        found: dict[str, str] = {}
        for entry in os.environ.get("PATH", "").split(os.pathsep):
            if not entry:
                continue
            directory = Path(entry)
            if not directory.is_dir():
                continue
            try:
                candidates = sorted(directory.iterdir())
            except OSError:
                continue
            for candidate in candidates:
                name = candidate.name
                if not name.startswith(prefix):
                    continue
                stem = name.removesuffix(".exe")
                if stem in found:
                    continue
                if candidate.is_file() and os.access(candidate, os.X_OK):
                    found[stem] = str(candidate)
        return found
