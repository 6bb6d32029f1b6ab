"""
heartbeat.py - Keep sudo alive for the lifetime of a process
ONE RESPONSIBILITY: Periodically elongate the sudo grace period

Assumes:
    - The OS schedules timers to within about a second.
    - Less than a second passes between computing the heartbeat interval
      and starting the timer.

The periodic refresh isn't started when sudo asks for a password on every
request (grace period 0) or never expires (negative grace period).
"""

import os
import threading

import psutil

from core.config import GraceConfig
from core.duration import timeout_to_seconds
from core.errors import (ElevationDeniedError, InvalidProcessError,
                         TimerResolutionUnstableError)
from core.policy import GracePolicyResolver
from utils.logger import log_debug, log_info, log_warning


def pid_alive(pid):
    """True while pid runs. Zombies count as exited."""
    try:
        return psutil.Process(pid).status() != psutil.STATUS_ZOMBIE
    except psutil.NoSuchProcess:
        return False
    except psutil.AccessDenied:
        return psutil.pid_exists(pid)


def heartbeat_interval(grace_period_sec, margin_sec):
    """
    Seconds between grace period renewals.

    One second is subtracted on top of the margin so that, with sleep's
    resolution and the time needed to issue the refresh, renewal lands
    before the grace period expires.

    Raises:
        TimerResolutionUnstableError: interval would be below the margin
    """
    interval = grace_period_sec - 1 - margin_sec
    if interval < margin_sec:
        raise TimerResolutionUnstableError(grace_period_sec, margin_sec)
    return interval


class HeartbeatSession:
    """
    Background refresh loop bound to one parent process.

    Two sub-tasks race each iteration: a sleep of the heartbeat interval
    and a poller checking the parent every poll_interval seconds. Whichever
    finishes first drives the next iteration; the loop ends the first time
    the parent is gone.
    """

    def __init__(self, gateway, parent_pid, interval_sec, poll_interval_sec=1.0,
                 process_alive=pid_alive):
        self.gateway = gateway
        self.parent_pid = parent_pid
        self.interval_sec = interval_sec
        self.poll_interval_sec = poll_interval_sec
        self.process_alive = process_alive
        self.refresh_count = 0

        self._parent_gone = threading.Event()
        self._poller = threading.Thread(
            target=self._poll_parent,
            name=f"sudo-grace-poll-{parent_pid}",
            daemon=True
        )
        self._thread = threading.Thread(
            target=self._run,
            name=f"sudo-grace-heartbeat-{parent_pid}",
            daemon=True
        )

    def start(self):
        self._thread.start()

    def is_alive(self):
        return self._thread.is_alive()

    def join(self, timeout=None):
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def _poll_parent(self):
        # A liveness check that fails counts as the parent being gone
        try:
            while self.process_alive(self.parent_pid):
                # Wakes early only if the session is torn down some other way
                if self._parent_gone.wait(self.poll_interval_sec):
                    return
        except Exception as e:
            log_warning(f"Can't check pid {self.parent_pid}, stopping heartbeat: {e}")
        finally:
            self._parent_gone.set()

    def _run(self):
        log_info(f"Heartbeat started for pid {self.parent_pid}, "
                 f"renewing every {self.interval_sec}s")
        self._poller.start()
        try:
            while not self._parent_gone.is_set():
                if self.gateway.refresh_silently():
                    self.refresh_count += 1
                else:
                    # Nobody is left to report to, next tick retries
                    log_debug(f"Grace period refresh failed for pid {self.parent_pid}")

                # Sleep, cut short when the poller sees the parent exit
                if self._parent_gone.wait(self.interval_sec):
                    break
        finally:
            self._parent_gone.set()
            self._poller.join()
            log_info(f"Heartbeat stopped, pid {self.parent_pid} exited "
                     f"after {self.refresh_count} renewals")


class HeartbeatSupervisor:
    """
    Spawn and own heartbeat sessions.

    Reduces or removes password prompts for a process as long as it runs:
    callers elevate once, then keep using sudo directly.
    """

    def __init__(self, gateway, resolver=None, config=None, process_alive=None):
        self.gateway = gateway
        self.config = config or GraceConfig()
        self.resolver = resolver or GracePolicyResolver(gateway, self.config)
        self.process_alive = process_alive or pid_alive
        self._sessions = []
        self._lock = threading.Lock()

    @property
    def active_sessions(self):
        with self._lock:
            return [s for s in self._sessions if s.is_alive()]

    @property
    def session_count(self):
        """Sessions spawned so far, finished ones included."""
        with self._lock:
            return len(self._sessions)

    def start_periodic_elevation(self, parent_pid=None, override_minutes=None):
        """
        Elevate now and keep the grace period from expiring while
        parent_pid runs.

        Args:
            parent_pid: Process to monitor (default: this process)
            override_minutes: Grace period in minutes, decimal notation
                like 'timestamp_timeout' (e.g. "5.5"). Use when the real
                grace period isn't exactly known or to renew more often.

        Returns:
            bool: True when elevated, whether or not a heartbeat was needed

        Raises:
            FormatError: override_minutes is malformed
            ConfigAccessError: sudoers settings couldn't be read
            ElevationDeniedError: sudo refused to elevate
            TimerResolutionUnstableError: grace period too short to renew
            InvalidProcessError: parent_pid isn't a usable process id
        """
        if parent_pid is None:
            parent_pid = os.getpid()

        if isinstance(parent_pid, bool) or not isinstance(parent_pid, int) or parent_pid <= 0:
            raise InvalidProcessError(parent_pid)

        if override_minutes:
            grace_sec = timeout_to_seconds(override_minutes, self.config.timeout_regex)
        else:
            grace_sec = self.resolver.resolve_effective_grace_period()

        if not self.gateway.elevate():
            raise ElevationDeniedError()

        if grace_sec < 0:
            # Lasts the whole terminal session, never needs renewal
            log_info("Grace period never expires, heartbeat not needed")
            return True

        if grace_sec == 0:
            # Only lasts a single command
            log_info("Grace period disabled, heartbeat not applicable")
            return True

        interval = heartbeat_interval(grace_sec, self.config.heartbeat_margin_sec)

        # Covers the time spent since the first elevation
        if not self.gateway.elevate():
            raise ElevationDeniedError()

        session = HeartbeatSession(
            self.gateway,
            parent_pid,
            interval,
            poll_interval_sec=self.config.parent_poll_interval_sec,
            process_alive=self.process_alive
        )
        with self._lock:
            self._sessions.append(session)
        session.start()
        return True

    def join(self, timeout=None):
        """
        Wait for every session to end.

        Returns:
            bool: True if none is still running
        """
        for session in self.active_sessions:
            session.join(timeout)
        return not self.active_sessions
