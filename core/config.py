"""
config.py - Configuration management
"""

# sudo 'timestamp_timeout' value: minutes with optional decimal fraction
TIMESTAMP_TIMEOUT_REGEX = r'([-+]?[0-9]+)(\.([0-9]+))?'

# Value must end at whitespace, a separator, a comment or end of line
TIMEOUT_LINE_REGEX = (
    r'^[ \t]*Defaults.+timestamp_timeout=([-+]?[0-9]+(?:\.[0-9]+)?)(?=[\s,#]|$)'
)

# [^#]+ stops at the first '#', which may truncate directory names
# containing one. Most paths avoid special characters so a '#' is taken
# as the start of a comment.
INCLUDEDIR_REGEX = r'^[ \t]*#includedir[ \t]+([^#\n]+)'


class GraceConfig:
    """
    Settings shared by the policy resolver, gateway and heartbeat supervisor.

    Attributes:
        settings_file: Primary sudoers file
        default_grace_period_sec: sudo's built-in grace period (5 minutes)
            used when no setting overrides it
        heartbeat_margin_sec: Seconds before expiry at which the grace period
            is renewed. Timing jitter is assumed to stay within ~1 second and
            exec overhead within another, so don't go below 2.
        parent_poll_interval_sec: How often the monitored process is checked
        sudo_path: sudo executable
    """

    def __init__(self,
                 settings_file="/etc/sudoers",
                 default_grace_period_sec=5 * 60,
                 heartbeat_margin_sec=2,
                 parent_poll_interval_sec=1.0,
                 sudo_path="sudo",
                 timeout_regex=TIMESTAMP_TIMEOUT_REGEX,
                 timeout_line_regex=TIMEOUT_LINE_REGEX,
                 includedir_regex=INCLUDEDIR_REGEX):
        self.settings_file = settings_file
        self.default_grace_period_sec = default_grace_period_sec
        self.heartbeat_margin_sec = heartbeat_margin_sec
        self.parent_poll_interval_sec = parent_poll_interval_sec
        self.sudo_path = sudo_path
        self.timeout_regex = timeout_regex
        self.timeout_line_regex = timeout_line_regex
        self.includedir_regex = includedir_regex

    def __repr__(self):
        return (f"GraceConfig(settings_file={self.settings_file!r}, "
                f"default_grace_period_sec={self.default_grace_period_sec}, "
                f"heartbeat_margin_sec={self.heartbeat_margin_sec})")
