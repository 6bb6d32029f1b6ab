"""
duration.py - Convert sudo 'timestamp_timeout' values to seconds
ONE RESPONSIBILITY: Minutes (decimal notation) to whole seconds
"""

import re

from core.config import TIMESTAMP_TIMEOUT_REGEX
from core.errors import FormatError


def timeout_to_seconds(value, timeout_regex=TIMESTAMP_TIMEOUT_REGEX):
    """
    Convert a grace period in minutes to seconds.

    Fractions of a minute are truncated to the second, never rounded up,
    so '10.599' gives 635 and '2.5' gives 150.

    Args:
        value: Minutes, e.g. "10", "-1", "+10", "5.5"
        timeout_regex: Pattern the whole value must match

    Returns:
        int: Signed number of seconds

    Raises:
        FormatError: value doesn't match the pattern
    """
    match = re.fullmatch(timeout_regex, value or '')
    if not match:
        raise FormatError(value, '^' + timeout_regex + '$')

    whole = match.group(1)
    fraction = match.group(3) or ''

    seconds = abs(int(whole)) * 60
    if fraction:
        seconds += int(fraction) * 60 // (10 ** len(fraction))

    return -seconds if whole.startswith('-') else seconds
