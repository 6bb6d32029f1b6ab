"""
privilege.py - Root privilege management
ONE RESPONSIBILITY: Talk to sudo (refresh, elevate, elevated reads)
"""

import subprocess
from abc import ABC, abstractmethod

from core.config import GraceConfig
from core.errors import ElevationDeniedError
from utils.logger import log_debug, log_warning


class ElevationGateway(ABC):
    """
    Privilege tool boundary.

    Anything able to refresh without a prompt, refresh with a prompt and
    read/execute under elevation can stand in for sudo.
    """

    @abstractmethod
    def refresh_silently(self):
        """Extend the current grace period without prompting. False when none is active."""

    @abstractmethod
    def refresh_with_prompt(self):
        """Extend the grace period, prompting for a password if needed."""

    @abstractmethod
    def execute(self, command, capture=False):
        """Run command elevated; returns a CompletedProcess."""

    def elevate(self):
        """Reuse the current grace period if there is one, otherwise prompt."""
        return self.refresh_silently() or self.refresh_with_prompt()

    def run_elevated(self, *command):
        """
        Elevate privileges of command, if specified.

        Args:
            *command: Program and arguments. None/empty only elongates
                the grace period.

        Returns:
            int: Exit status of command (0 when there's no command)

        Raises:
            ElevationDeniedError: sudo refused to elevate
        """
        if not self.elevate():
            raise ElevationDeniedError()

        if not command or not command[0]:
            return 0

        return self.execute(list(command)).returncode

    def read_file_elevated(self, path):
        """Return file contents, or None if it can't be read."""
        if not self.elevate():
            return None

        result = self.execute(['cat', path], capture=True)
        if result.returncode != 0:
            log_debug(f"Elevated read of {path} failed (code {result.returncode})")
            return None
        return result.stdout

    def list_directory_elevated(self, path):
        """
        List directory entries, directories carry a trailing '/'.

        Returns:
            list: Entry names, or None if the directory can't be listed
        """
        if not self.elevate():
            return None

        result = self.execute(['ls', '-p', path], capture=True)
        if result.returncode != 0:
            log_debug(f"Elevated listing of {path} failed (code {result.returncode})")
            return None
        return [line for line in result.stdout.splitlines() if line]

    def file_exists_elevated(self, path):
        """Check a regular file exists, as root."""
        if not self.elevate():
            return False
        return self.execute(['test', '-f', path]).returncode == 0


class SudoGateway(ElevationGateway):
    """ElevationGateway backed by the sudo command."""

    def __init__(self, config=None):
        self.config = config or GraceConfig()

    def _sudo(self, args, capture=False):
        cmd = [self.config.sudo_path] + args
        try:
            if capture:
                return subprocess.run(cmd, capture_output=True, text=True)
            return subprocess.run(cmd)
        except FileNotFoundError:
            log_warning(f"sudo executable not found: {self.config.sudo_path}")
            return subprocess.CompletedProcess(cmd, 127, '', '')

    def refresh_silently(self):
        result = self._sudo(['-n', '-v'], capture=True)
        return result.returncode == 0

    def refresh_with_prompt(self):
        # Left attached to the terminal so sudo can ask for the password
        return self._sudo(['-v']).returncode == 0

    def execute(self, command, capture=False):
        return self._sudo(list(command), capture=capture)


def elevate(*command, gateway=None):
    """
    Elevate privileges of command, if specified, and elongate sudo grace period.

    Prefer HeartbeatSupervisor.start_periodic_elevation for long running
    scripts, it lets them keep calling sudo directly.

    Args:
        *command: Command to run elevated (optional)
        gateway: ElevationGateway to use (default: SudoGateway)

    Returns:
        int: Exit status of command, 0 when no command is given
    """
    gateway = gateway or SudoGateway()
    return gateway.run_elevated(*command)
