from __future__ import annotations

import logging
import socket
import threading
import time
from dataclasses import dataclass
from queue import Empty, Full, Queue
from typing import List, Tuple

from jsonsyslog_common.models import ReceivedLine

log = logging.getLogger("jsonsyslog.receiver")


@dataclass(frozen=True)
class ReceiverStats:
    connections_opened: int
    connections_closed: int
    lines_received: int
    lines_dropped: int


class TcpLineReceiver:
    """Accepts TCP connections and exposes newline-delimited lines via poll()."""

    def __init__(
        self, host: str = "127.0.0.1", port: int = 0, max_queue_size: int = 50000
    ) -> None:
        self._queue: Queue[ReceivedLine] = Queue(maxsize=max_queue_size)
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._sock.bind((host, port))
        self._sock.listen(128)
        self._sock.settimeout(1.0)
        self._address: Tuple[str, int] = self._sock.getsockname()[:2]

        self._lock = threading.Lock()
        self._opened = 0
        self._closed = 0
        self._received = 0
        self._dropped = 0

        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()
        log.info(f"listening on tcp://{self._address[0]}:{self._address[1]}")

    @property
    def address(self) -> Tuple[str, int]:
        return self._address

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                conn, addr = self._sock.accept()
            except TimeoutError:
                continue
            except OSError:
                break
            with self._lock:
                self._opened += 1
                conn_id = self._opened
            t = threading.Thread(
                target=self._handle, args=(conn, addr, conn_id), daemon=True
            )
            t.start()

    def _handle(self, conn: socket.socket, addr: Tuple[str, int], conn_id: int) -> None:
        remote = f"{addr[0]}:{addr[1]}"
        buf = b""
        conn.settimeout(1.0)
        with conn:
            while not self._stop.is_set():
                try:
                    chunk = conn.recv(4096)
                except TimeoutError:
                    continue
                except OSError:
                    break
                if not chunk:
                    break
                buf += chunk
                while b"\n" in buf:
                    line, buf = buf.split(b"\n", 1)
                    self._push(line, remote, conn_id, terminated=True)
            if buf:
                self._push(buf, remote, conn_id, terminated=False)
        with self._lock:
            self._closed += 1

    def _push(self, data: bytes, remote: str, conn_id: int, terminated: bool) -> None:
        evt = ReceivedLine(
            raw=data.decode("utf-8", errors="replace"),
            remote_addr=remote,
            connection_id=conn_id,
            terminated=terminated,
        )
        try:
            self._queue.put_nowait(evt)
        except Full:
            with self._lock:
                self._dropped += 1
            log.warning(f"queue full, dropped line from {remote}")
            return
        with self._lock:
            self._received += 1

    def poll(self, max_lines: int) -> List[ReceivedLine]:
        """Return up to max_lines newly received lines."""
        out: List[ReceivedLine] = []
        while len(out) < max_lines:
            try:
                out.append(self._queue.get_nowait())
            except Empty:
                break
        return out

    def wait_for(self, count: int, timeout_seconds: float = 5.0) -> List[ReceivedLine]:
        """Collect lines until count arrive or the timeout passes."""
        deadline = time.monotonic() + timeout_seconds
        out: List[ReceivedLine] = []
        while len(out) < count:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            try:
                out.append(self._queue.get(timeout=min(remaining, 0.1)))
            except Empty:
                continue
        return out

    def stats(self) -> ReceiverStats:
        with self._lock:
            return ReceiverStats(
                connections_opened=self._opened,
                connections_closed=self._closed,
                lines_received=self._received,
                lines_dropped=self._dropped,
            )

    def close(self) -> None:
        """Stop accepting and release the listening socket."""
        self._stop.set()
        try:
            self._sock.close()
        except OSError:
            pass
        self._thread.join(timeout=2.0)

    def __enter__(self) -> "TcpLineReceiver":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
