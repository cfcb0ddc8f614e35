from __future__ import annotations

from datetime import datetime, timezone

from jsonsyslog_common.models import LogRecord, SendOptions
from jsonsyslog_emitter.environment import HostEnvironment

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def format_timestamp(dt: datetime) -> str:
    # naive datetimes are taken to be UTC already
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def build_record(options: SendOptions, env: HostEnvironment) -> LogRecord:
    """Resolve environment-derived defaults and assemble the record."""
    return LogRecord(
        timestamp=format_timestamp(env.clock()),
        service=options.service,
        process=options.process,
        server=options.server_name if options.server_name is not None else env.hostname(),
        action=options.action,
        result=options.result,
        message=options.message,
        category=options.category,
        user=options.user if options.user is not None else env.user(),
    )


def encode_line(record: LogRecord) -> bytes:
    """Compact JSON plus a single newline, UTF-8 encoded."""
    return (record.model_dump_json() + "\n").encode("utf-8")
