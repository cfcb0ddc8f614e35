from __future__ import annotations

import getpass
import os
import socket
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

UNKNOWN_USER = "unknown"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def current_user() -> str:
    """Login name of the process owner; never raises."""
    try:
        return getpass.getuser()
    except (KeyError, OSError, ImportError):
        # no USER/LOGNAME and no passwd entry, e.g. an arbitrary container uid
        if hasattr(os, "getuid"):
            return str(os.getuid())
        return UNKNOWN_USER


@dataclass(frozen=True)
class HostEnvironment:
    """Process-wide lookups read once per send. Swap the callables in tests."""

    clock: Callable[[], datetime] = utc_now
    user: Callable[[], str] = current_user
    hostname: Callable[[], str] = socket.gethostname

    @classmethod
    def fixed(
        cls, now: datetime, user: str, hostname: str
    ) -> "HostEnvironment":
        return cls(clock=lambda: now, user=lambda: user, hostname=lambda: hostname)
