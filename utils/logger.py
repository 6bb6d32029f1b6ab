"""
logger.py - Logging system for debugging
ONE RESPONSIBILITY: Log operations
"""

import logging
import os
from datetime import datetime

LOG_DIR = "/tmp/sudo_grace_logs"
LOG_FILE = None

_logger = logging.getLogger("sudo_grace")

def setup_logging(verbose=False):
    """Initialize logging system."""
    global LOG_FILE

    # Create log directory
    os.makedirs(LOG_DIR, exist_ok=True)

    # Generate log filename
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    LOG_FILE = os.path.join(LOG_DIR, f"sudo_grace_{timestamp}_{os.getpid()}.log")

    # Configure logging
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(threadName)s - %(message)s',
        handlers=[
            logging.FileHandler(LOG_FILE),
            logging.StreamHandler() if verbose else logging.NullHandler()
        ]
    )

    _logger.info(f"Logging started - {timestamp}")
    return LOG_FILE

def log_debug(message):
    """Log debug message."""
    _logger.debug(message)

def log_info(message):
    """Log info message."""
    _logger.info(message)

def log_error(message):
    """Log error message."""
    _logger.error(message)

def log_warning(message):
    """Log warning message."""
    _logger.warning(message)
