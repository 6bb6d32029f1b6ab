"""
policy.py - Determine the sudo grace period for this host
ONE RESPONSIBILITY: Read sudoers settings and resolve 'timestamp_timeout'

sudo can apply grace periods per application, which is beyond what is
resolved here: a single host-wide value is produced. Since
'timestamp_timeout' allows fractions of a minute, the result is truncated
to the second.
"""

import os
import re

from core.config import GraceConfig, TIMESTAMP_TIMEOUT_REGEX
from core.duration import timeout_to_seconds
from core.errors import ConfigAccessError, FormatError
from utils.logger import log_debug, log_info


def is_override_fragment(name):
    """sudo skips names containing '.' or ending in '~' in #includedir."""
    if not name or name.endswith('/'):
        return False
    if '.' in name or name.endswith('~'):
        return False
    return True


def extract_timeouts(text, config=None):
    """
    Find every 'Defaults ... timestamp_timeout=<minutes>' value in text.

    Returns:
        list: Minute strings in file order
    """
    config = config or GraceConfig()
    if not text:
        return []
    return re.findall(config.timeout_line_regex, text, re.MULTILINE)


def reduce_timeouts(values, timeout_regex=TIMESTAMP_TIMEOUT_REGEX):
    """
    Reduce several timeout settings to one, in seconds.

    The first valid value initialises the result. After that a larger value
    is ignored while the result is non-negative; anything else replaces it,
    so a negative (never expire) result gives way to whatever follows it.
    Invalid values are skipped.

    Returns:
        int: Seconds, or None if no valid value was found
    """
    least = None
    for value in values:
        try:
            seconds = timeout_to_seconds(value, timeout_regex)
        except FormatError as e:
            log_debug(f"Skipping timeout value: {e}")
            continue

        if least is None:
            least = seconds
            continue

        # < 0 means no timeout
        if least > -1 and seconds > least:
            continue

        least = seconds

    return least


class GracePolicyResolver:
    """Resolve the effective grace period from sudoers and its #includedir."""

    def __init__(self, gateway, config=None):
        self.gateway = gateway
        self.config = config or GraceConfig()

    def _grace_period_from_text(self, text):
        return reduce_timeouts(
            extract_timeouts(text, self.config),
            self.config.timeout_regex
        )

    def resolve_override_directory(self, settings_file):
        """
        Find the '#includedir' directory named in settings_file.

        Returns:
            str: Directory path, or None if absent or unreadable
        """
        content = self.gateway.read_file_elevated(settings_file)
        if not content:
            return None

        match = re.search(self.config.includedir_regex, content, re.MULTILINE)
        if not match:
            return None

        directory = match.group(1).strip()
        return directory or None

    def resolve_override_grace_period(self, directory):
        """
        Grace period set by the fragments in an #includedir directory.

        Returns:
            int: Seconds, or None if no fragment sets it
        """
        entries = self.gateway.list_directory_elevated(directory)
        if not entries:
            return None

        contents = []
        for name in entries:
            if not is_override_fragment(name):
                continue
            text = self.gateway.read_file_elevated(os.path.join(directory, name))
            if text:
                contents.append(text)

        if not contents:
            return None
        return self._grace_period_from_text('\n'.join(contents))

    def resolve_system_grace_period(self, settings_file):
        """Grace period set directly in settings_file, or None."""
        return self._grace_period_from_text(
            self.gateway.read_file_elevated(settings_file)
        )

    def resolve_effective_grace_period(self):
        """
        Obtain sudo grace period, in seconds, for the current host.

        Precedence: #includedir fragments, then the settings file, then
        sudo's default.

        Returns:
            int: <0 for the terminal session, 0 for one command, >0 seconds

        Raises:
            ConfigAccessError: settings file missing or not readable
        """
        settings_file = self.config.settings_file

        if not self.gateway.file_exists_elevated(settings_file):
            raise ConfigAccessError(settings_file)

        directory = self.resolve_override_directory(settings_file)
        if directory:
            grace = self.resolve_override_grace_period(directory)
            if grace is not None:
                log_info(f"Grace period {grace}s from {directory}")
                return grace

        grace = self.resolve_system_grace_period(settings_file)
        if grace is not None:
            log_info(f"Grace period {grace}s from {settings_file}")
            return grace

        log_info(f"Grace period not configured, using default "
                 f"{self.config.default_grace_period_sec}s")
        return self.config.default_grace_period_sec
