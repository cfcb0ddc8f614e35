from __future__ import annotations

import socket
from abc import ABC, abstractmethod
from typing import Optional


class Transport(ABC):
    """A transport delivers one encoded line to a receiver."""

    @abstractmethod
    def send_line(
        self, host: str, port: int, payload: bytes, timeout_seconds: Optional[float] = None
    ) -> None:
        """Deliver payload, raising on any failure."""
        raise NotImplementedError


class TcpLineTransport(Transport):
    """Opens a fresh TCP connection per line and closes it before returning."""

    def send_line(
        self, host: str, port: int, payload: bytes, timeout_seconds: Optional[float] = None
    ) -> None:
        # timeout None leaves the socket blocking; DNS and connect use OS defaults
        with socket.create_connection((host, port), timeout=timeout_seconds) as sock:
            sock.sendall(payload)
