"""External command execution for hardware queries.

Every tool invocation in gpusnap goes through a ``CommandRunner`` so the
collector can be exercised without real hardware by substituting a fake.
"""

import logging
import os
import subprocess
from typing import Dict, Optional, Sequence

from gpusnap.utils.errors import CommandError

logger = logging.getLogger(__name__)

DEFAULT_COMMAND_TIMEOUT = 5.0


class CommandRunner:
    """Run an external command and return its stdout.

    Args:
        timeout: Per-invocation timeout in seconds
    """

    def __init__(self, timeout: float = DEFAULT_COMMAND_TIMEOUT) -> None:
        self.timeout = timeout

    def run(
        self,
        args: Sequence[str],
        env_overrides: Optional[Dict[str, str]] = None,
    ) -> str:
        """Execute args and return stdout.

        Args:
            args: Command and arguments (no shell)
            env_overrides: Variables added on top of the inherited environment

        Returns:
            Raw stdout text

        Raises:
            CommandError: Command missing, timed out, or exited non-zero
        """
        env = None
        if env_overrides:
            env = {**os.environ, **env_overrides}
        logger.debug("Running %s", " ".join(args))
        try:
            result = subprocess.run(
                list(args),
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
                env=env,
                check=False,
            )
        except FileNotFoundError as exc:
            raise CommandError(args, "command not found") from exc
        except subprocess.TimeoutExpired as exc:
            raise CommandError(args, f"timed out after {self.timeout}s") from exc

        if result.returncode != 0:
            raise CommandError(
                args,
                f"exited with status {result.returncode}",
                returncode=result.returncode,
                stderr=(result.stderr or "").strip(),
            )
        return result.stdout or ""

    def succeeds(self, args: Sequence[str]) -> bool:
        """Return True if the command runs and exits with status 0."""
        try:
            self.run(args)
        except CommandError as exc:
            logger.debug("Probe failed: %s", exc)
            return False
        return True
