"""
Fire-and-forget JSON-over-TCP emitter.

Each send builds one record, opens one connection, writes one line and closes
the connection. Failures never reach the caller; they are reported as a single
diagnostic line instead.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable, Optional

from jsonsyslog_common.models import (
    DEFAULT_ACTION,
    DEFAULT_CATEGORY,
    DEFAULT_HOST,
    DEFAULT_MESSAGE,
    DEFAULT_PORT,
    DEFAULT_PROCESS,
    DEFAULT_RESULT,
    DEFAULT_SERVICE,
    SendOptions,
)
from jsonsyslog_emitter.environment import HostEnvironment
from jsonsyslog_emitter.record import build_record, encode_line
from jsonsyslog_emitter.result import SendResult
from jsonsyslog_emitter.transport import TcpLineTransport, Transport

COMPONENT = "jsonsyslog"

DiagnosticSink = Callable[[str], None]

log = logging.getLogger("jsonsyslog.emitter")


def stderr_sink(line: str) -> None:
    # looked up per call so redirected stderr is honoured
    stream = sys.stderr
    if stream is None:
        raise OSError("stderr is not available")
    stream.write(line + "\n")
    stream.flush()


def format_diagnostic(error: Optional[str]) -> str:
    return f"[{COMPONENT}] Logging failed: {error}"


class Emitter:
    """Sends LogRecords to a receiver, one connection per record."""

    def __init__(
        self,
        environment: Optional[HostEnvironment] = None,
        transport: Optional[Transport] = None,
        diagnostic: Optional[DiagnosticSink] = None,
    ) -> None:
        self._env = environment or HostEnvironment()
        self._transport = transport or TcpLineTransport()
        self._diagnostic = diagnostic or stderr_sink

    def send(self, options: Optional[SendOptions] = None, **fields: Any) -> None:
        """Send one record. Never raises."""
        result = self._deliver(options, fields)
        if not result.ok:
            self._report(result.error)

    def _deliver(self, options: Optional[SendOptions], fields: dict) -> SendResult:
        try:
            if options is None:
                options = SendOptions(**fields)
            elif fields:
                options = SendOptions(**{**options.model_dump(), **fields})
            record = build_record(options, self._env)
            payload = encode_line(record)
            self._transport.send_line(
                options.host, options.port, payload, options.timeout_seconds
            )
        except Exception as exc:
            return SendResult.failed(exc)
        log.debug(f"sent {len(payload)} bytes to {options.host}:{options.port}")
        return SendResult.delivered(len(payload))

    def _report(self, error: Optional[str]) -> None:
        line = format_diagnostic(error)
        for sink in dict.fromkeys((self._diagnostic, stderr_sink)):
            try:
                sink(line)
                return
            except Exception:
                continue
        log.warning(line)


_default_emitter = Emitter()


def send(
    service: Optional[str] = DEFAULT_SERVICE,
    process: Optional[str] = DEFAULT_PROCESS,
    action: Optional[str] = DEFAULT_ACTION,
    result: Optional[str] = DEFAULT_RESULT,
    message: Optional[str] = DEFAULT_MESSAGE,
    category: Optional[str] = DEFAULT_CATEGORY,
    host: Optional[str] = DEFAULT_HOST,
    port: Optional[int] = DEFAULT_PORT,
    user: Optional[str] = None,
    server_name: Optional[str] = None,
    timeout_seconds: Optional[float] = None,
) -> None:
    """
    Send a structured JSON log entry to a receiver over TCP.

    user defaults to the current OS user and server_name to the local host
    name. Passing None for any field is the same as leaving it out. Any
    failure is written to stderr as a one-line diagnostic; nothing is raised
    or returned.
    """
    _default_emitter.send(
        service=service,
        process=process,
        action=action,
        result=result,
        message=message,
        category=category,
        host=host,
        port=port,
        user=user,
        server_name=server_name,
        timeout_seconds=timeout_seconds,
    )
