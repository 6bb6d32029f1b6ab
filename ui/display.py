"""
display.py - Terminal display utilities
ONE RESPONSIBILITY: Formatted console output
"""

import sys

# ANSI color codes
class Colors:
    RED = '\033[91m'
    GREEN = '\033[92m'
    CYAN = '\033[96m'
    END = '\033[0m'

# Disable colors if not in TTY
if not sys.stderr.isatty():
    for attr in dir(Colors):
        if not attr.startswith('_'):
            setattr(Colors, attr, '')

def print_success(text):
    """Print success message."""
    print(f"{Colors.GREEN}✓ {text}{Colors.END}")

def print_error(text):
    """Print error message to stderr."""
    print(f"\n{Colors.RED}Error: {text}{Colors.END}", file=sys.stderr)

def print_info(text):
    """Print info message."""
    print(f"{Colors.CYAN}ℹ  {text}{Colors.END}")

def format_grace_period(seconds):
    """Describe a grace period for humans."""
    if seconds < 0:
        return "lasts the terminal session"
    if seconds == 0:
        return "disabled (password for every command)"

    minutes = seconds // 60
    secs = seconds % 60
    if minutes and secs:
        return f"{minutes}m {secs}s"
    elif minutes:
        return f"{minutes}m"
    else:
        return f"{secs}s"
