#!/usr/bin/env python3
"""
main.py - sudo grace period keeper
Resolves the sudo grace period and keeps elevation alive while a process runs
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from core import config_manager
from core.errors import GraceError
from core.heartbeat import HeartbeatSupervisor
from core.policy import GracePolicyResolver
from core.privilege import SudoGateway
from ui import display
from utils import logger

VERSION = "1.0.0"

def show_grace_period(config):
    """Print the effective grace period."""
    gateway = SudoGateway(config)
    resolver = GracePolicyResolver(gateway, config)
    grace_sec = resolver.resolve_effective_grace_period()
    display.print_info(
        f"sudo grace period: {grace_sec}s ({display.format_grace_period(grace_sec)})"
    )

def watch_process(config, pid, grace_minutes=None):
    """Keep sudo elevated until pid exits."""
    gateway = SudoGateway(config)
    supervisor = HeartbeatSupervisor(gateway, config=config)

    supervisor.start_periodic_elevation(pid, grace_minutes)

    if not supervisor.session_count:
        display.print_success("Elevated, no periodic renewal needed")
        return 0

    display.print_success(f"Keeping sudo alive while pid {pid} runs")
    supervisor.join()
    return 0

def main(argv=None):
    """Main entry point."""
    import argparse
    parser = argparse.ArgumentParser(description=f"sudo grace period keeper v{VERSION}")
    parser.add_argument("--show", action="store_true", help="Print the effective sudo grace period")
    parser.add_argument("--watch", type=int, metavar="PID", help="Keep sudo elevated until PID exits")
    parser.add_argument("--grace", type=str, metavar="MINUTES",
                        help="Override grace period, minutes in decimal notation (e.g. 5.5)")
    parser.add_argument("--settings", type=str, help="sudoers settings file")
    parser.add_argument("--prefs", type=str, help="Preferences file (JSON)")
    parser.add_argument("--debug", action="store_true", help="Enable verbose logging")

    args = parser.parse_args(argv)

    if args.grace is not None and args.watch is None:
        parser.error("--grace requires --watch")

    if not args.show and args.watch is None:
        parser.print_help()
        return 2

    logger.setup_logging(verbose=args.debug)
    config = config_manager.load_config(args.prefs, settings_file=args.settings)

    try:
        if args.show:
            show_grace_period(config)
        if args.watch is not None:
            return watch_process(config, args.watch, args.grace)
        return 0
    except GraceError as e:
        logger.log_error(str(e))
        display.print_error(str(e))
        return 1

if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user.")
        sys.exit(130)
